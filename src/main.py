"""
1) Load person records from an extraction-result JSON file or a GEDCOM file.
2) Optionally restrict them to the neighborhood or ancestry of one person.
3) Validate the records (cycles, dangling links, impossible ages).
4) Lay out the tree: generations, centered rows, connectors.
5) Plot it, export a paginated PDF, and/or write Graphviz DOT.
"""

import argparse
import logging
import sys
from pathlib import Path

from diagram import layout_tree
from generations import STRATEGIES
from graph import build_graph, get_ancestor_subgraph, get_ego_subgraph, subset_people
from layout import LayoutConfig
from parsing import load_people
from plotting import build_dot, export_pdf, plot_tree, write_dot
from validation import validate_people


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lay out and render a family tree.")
    parser.add_argument("input", type=Path, help="Extraction result (.json) or GEDCOM (.ged) file")
    parser.add_argument("-o", "--output", type=Path, help="Image to write (png, svg or pdf)")
    parser.add_argument("--pdf", type=Path, help="Paginated A4 landscape PDF to write")
    parser.add_argument(
        "--scale", type=float, default=None,
        help="PDF points per layout unit; tiles over several pages (default: fit on one page)",
    )
    parser.add_argument("--dot", type=Path, help="Graphviz output (.dot source, or png/svg/pdf via Graphviz)")

    focus = parser.add_mutually_exclusive_group()
    focus.add_argument("--focus", help="Only lay out people within --radius links of this person ID")
    focus.add_argument("--ancestors-of", help="Only lay out this person ID, their ancestors and partners")
    parser.add_argument("--radius", type=int, default=2)

    defaults = LayoutConfig()
    parser.add_argument("--strategy", choices=STRATEGIES, default="longest_path")
    parser.add_argument("--node-width", type=float, default=defaults.node_width)
    parser.add_argument("--node-height", type=float, default=defaults.node_height)
    parser.add_argument("--vertical-gap", type=float, default=defaults.vertical_gap)
    parser.add_argument("--horizontal-gap", type=float, default=defaults.horizontal_gap)
    parser.add_argument("--padding", type=float, default=defaults.padding)
    parser.add_argument(
        "--female-left", action="store_true", help="Do not move a male partner to the left of a female one"
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def run(args: argparse.Namespace) -> int:
    config = LayoutConfig(
        node_width=args.node_width,
        node_height=args.node_height,
        vertical_gap=args.vertical_gap,
        horizontal_gap=args.horizontal_gap,
        padding=args.padding,
        male_left=not args.female_left,
    )

    print(f"Loading people from: {args.input}")
    result = load_people(args.input)
    people = result.persons
    print(f"  Found {len(people)} people")
    if result.sources:
        print(f"  {len(result.sources)} sources cited")

    if args.focus or args.ancestors_of:
        G = build_graph(people)
        if args.focus:
            sub = get_ego_subgraph(G, args.focus, radius=args.radius)
        else:
            sub = get_ancestor_subgraph(G, args.ancestors_of)
        people = subset_people(people, sub.nodes())
        print(f"  Restricted to {len(people)} people")

    if not people:
        print("No people to lay out.")
        return 1

    print("Laying out tree...")
    diagram = layout_tree(people, config, strategy=args.strategy)
    layout = diagram.layout
    for gen, row in layout.rows.items():
        print(f"  Generation {gen}: {len(row)} people")
    print(f"  Canvas {layout.canvas_width:.0f} x {layout.canvas_height:.0f}, {len(diagram.connectors)} connectors")

    print("Validating...")
    warnings = validate_people(people, diagram.generations)
    if warnings:
        print(f"  Found {len(warnings)} validation warnings:")
        for w in warnings[:10]:  # Show first 10 warnings
            print(f"    - {w}")
        if len(warnings) > 10:
            print(f"    ... and {len(warnings) - 10} more")
    else:
        print("  No validation issues found")

    if args.output:
        plot_tree(people, diagram, args.output, config, title=result.title)
        print(f"Tree saved to {args.output}")
    if args.pdf:
        pages = export_pdf(people, diagram, args.pdf, config, title=result.title, scale=args.scale)
        print(f"PDF saved to {args.pdf} ({pages} page{'s' if pages != 1 else ''})")
    if args.dot:
        write_dot(build_dot(people, diagram), args.dot)
        print(f"Graphviz saved to {args.dot}")

    print("Done!")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return run(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
