"""Rendering a laid-out tree: matplotlib drawing, paginated PDF export, Graphviz DOT."""

import math
from datetime import date
from pathlib import Path

import matplotlib.pyplot as plt
import pydot
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.patches import FancyBboxPatch

from diagram import TreeDiagram
from generations import index_people
from graph import build_graph, build_union_layout_graph
from layout import LayoutConfig
from models import Person
from policies import infer_vital_status, lifespan_label, node_style

POINTS_PER_INCH = 72.0
A4_LANDSCAPE = (841.89, 595.28)  # points
PAGE_MARGIN = 20.0

BADGE_COLORS = {
    "living": ("#d1fae5", "#047857"),
    "deceased": ("#e2e8f0", "#475569"),
}


def draw_tree(
    ax,
    people: list[Person],
    diagram: TreeDiagram,
    config: LayoutConfig | None = None,
    scale: float = 1.0,
    current_year: int | None = None,
):
    """
    Draw nodes and connectors of a laid-out tree onto matplotlib axes.

    Axes use layout coordinates with y pointing down. `scale` is the number of
    points per layout unit, used to size text and line widths.
    """
    config = config or LayoutConfig()
    current_year = current_year or date.today().year
    positions = diagram.layout.positions
    people_by_id = index_people(people)

    for connector in diagram.connectors:
        xs, ys = zip(*connector.points)
        ax.plot(
            xs,
            ys,
            color=connector.style.color,
            linewidth=connector.style.width * scale,
            linestyle="--" if connector.style.dashed else "-",
            solid_capstyle="round",
            solid_joinstyle="round",
            zorder=1,
        )

    w, h = config.node_width, config.node_height
    for pid, (x, y) in positions.items():
        person = people_by_id[pid]
        style = node_style(person)
        ax.add_patch(
            FancyBboxPatch(
                (x, y),
                w,
                h,
                boxstyle=f"round,pad=0,rounding_size={min(w, h) * 0.12}",
                facecolor=style.fill,
                edgecolor=style.edge,
                linestyle=style.linestyle,
                linewidth=2 * scale,
                alpha=style.alpha,
                zorder=2,
            )
        )

        inset = w * 0.05
        ax.text(
            x + inset, y + h * 0.18, (person.relationship or "Relative").upper(),
            fontsize=6 * scale, color="#6366f1", fontweight="bold", va="center", zorder=3, clip_on=True,
        )
        ax.text(
            x + inset, y + h * 0.42, person.name,
            fontsize=9 * scale, color="#1e293b", fontweight="bold", va="center", zorder=3, clip_on=True,
        )
        ax.text(
            x + inset, y + h * 0.8, lifespan_label(person),
            fontsize=7 * scale, color="#64748b", va="center", zorder=3, clip_on=True,
        )

        vital = infer_vital_status(person, current_year)
        if vital in BADGE_COLORS:
            background, foreground = BADGE_COLORS[vital]
            ax.text(
                x + w - inset, y + h * 0.8, vital.upper(),
                fontsize=5.5 * scale, color=foreground, fontweight="bold", ha="right", va="center",
                bbox={"boxstyle": "round,pad=0.3", "facecolor": background, "edgecolor": "none"},
                zorder=3,
                clip_on=True,
            )

    ax.axis("off")


def _region(ax, x0: float, y0: float, width: float, height: float):
    ax.set_xlim(x0, x0 + width)
    ax.set_ylim(y0 + height, y0)


def plot_tree(
    people: list[Person],
    diagram: TreeDiagram,
    output_path: Path | None = None,
    config: LayoutConfig | None = None,
    title: str | None = None,
    dpi: int = 150,
):
    """
    Plot the whole canvas at one point per layout unit.

    Args:
        people: The records the diagram was computed from
        diagram: Output of `layout_tree`
        output_path: Image path (png, svg or pdf by extension). If None, displays interactively.
    """
    config = config or LayoutConfig()
    layout = diagram.layout
    if not layout.positions:
        raise ValueError("Nothing to plot: the tree has no people")

    fig = plt.figure(figsize=(layout.canvas_width / POINTS_PER_INCH, layout.canvas_height / POINTS_PER_INCH))
    ax = fig.add_axes([0, 0, 1, 1])
    draw_tree(ax, people, diagram, config)
    _region(ax, 0, 0, layout.canvas_width, layout.canvas_height)
    if title:
        ax.text(
            config.padding / 4, config.padding / 3, title,
            fontsize=14, fontweight="bold", color="#0f172a", va="center",
        )

    if output_path:
        fig.savefig(output_path, dpi=dpi)
        plt.close(fig)
    else:
        plt.show()


def export_pdf(
    people: list[Person],
    diagram: TreeDiagram,
    output_path: Path,
    config: LayoutConfig | None = None,
    title: str | None = None,
    scale: float | None = None,
    page_size: tuple[float, float] = A4_LANDSCAPE,
    margin: float = PAGE_MARGIN,
) -> int:
    """
    Export the tree as a paginated PDF.

    With `scale=None` the whole canvas is shrunk (or enlarged) onto one page. With a
    numeric scale (points per layout unit) the canvas is cut into page-sized tiles,
    left to right then top to bottom.

    Returns:
        Number of pages written
    """
    layout = diagram.layout
    if not layout.positions:
        raise ValueError("Nothing to export: the tree has no people")

    page_w, page_h = page_size
    printable_w, printable_h = page_w - 2 * margin, page_h - 2 * margin
    if scale is None:
        scale = min(printable_w / layout.canvas_width, printable_h / layout.canvas_height)
    if scale <= 0:
        raise ValueError(f"Scale must be positive, got {scale}")

    tile_w, tile_h = printable_w / scale, printable_h / scale
    # Round before ceil so an exact fit does not spill onto an empty page
    columns = max(1, math.ceil(round(layout.canvas_width / tile_w, 6)))
    rows = max(1, math.ceil(round(layout.canvas_height / tile_h, 6)))

    with PdfPages(output_path) as pdf:
        for row in range(rows):
            for col in range(columns):
                fig = plt.figure(figsize=(page_w / POINTS_PER_INCH, page_h / POINTS_PER_INCH))
                ax = fig.add_axes(
                    [margin / page_w, margin / page_h, printable_w / page_w, printable_h / page_h]
                )
                draw_tree(ax, people, diagram, config, scale=scale)
                _region(ax, col * tile_w, row * tile_h, tile_w, tile_h)
                if title and row == 0 and col == 0:
                    fig.text(margin / page_w, 1 - (margin / 2) / page_h, title, fontsize=10, va="center")
                if columns * rows > 1:
                    fig.text(
                        1 - margin / page_w, (margin / 2) / page_h,
                        f"{row * columns + col + 1} / {columns * rows}",
                        fontsize=7, ha="right", va="center", color="#64748b",
                    )
                pdf.savefig(fig)
                plt.close(fig)

        if title:
            pdf.infodict()["Title"] = title

    return columns * rows


def _dot_id(node) -> str:
    """Quote a node name so IDs containing ':' are not read as node:port."""
    return '"' + str(node).replace('"', '\\"') + '"'


def build_dot(people: list[Person], diagram: TreeDiagram) -> pydot.Dot:
    """
    Build a Graphviz document mirroring the computed rows.

    Uses the union-node model for edges; each generation is a rank=same subgraph
    whose members are chained with invisible edges to keep the computed order.
    """
    people_by_id = index_people(people)
    H = build_union_layout_graph(build_graph(people_by_id.values()))

    P = pydot.Dot(graph_type="digraph")
    P.set("rankdir", "TB")  # Top-to-bottom (ancestors at top)
    P.set("splines", "ortho")
    P.set("nodesep", "0.4")
    P.set("ranksep", "0.6")

    for node, data in H.nodes(data=True):
        if data.get("node_type") == "family":
            P.add_node(pydot.Node(_dot_id(node), shape="point", width="0.1", height="0.1", label=""))
            continue
        person = people_by_id[node]
        style = node_style(person)
        P.add_node(
            pydot.Node(
                _dot_id(node),
                label=f"{person.name}\n{lifespan_label(person)}",
                shape="box",
                style="rounded,filled",
                fillcolor=style.fill,
                color=style.edge,
                fontsize="10",
            )
        )

    for u, v, data in H.edges(data=True):
        if data.get("edge_type") == "spouse_to_family":
            P.add_edge(pydot.Edge(_dot_id(u), _dot_id(v), dir="none", color="darkgray"))
        else:
            status = people_by_id[v].status if v in people_by_id else None
            P.add_edge(
                pydot.Edge(
                    _dot_id(u), _dot_id(v), color="darkgray", style="dashed" if status == "possible" else "solid"
                )
            )

    for gen, row in diagram.layout.rows.items():
        sg = pydot.Subgraph(f"generation_{gen}", rank="same")
        for pid in row:
            sg.add_node(pydot.Node(_dot_id(pid)))
        for left, right in zip(row, row[1:]):
            sg.add_edge(pydot.Edge(_dot_id(left), _dot_id(right), style="invis"))
        P.add_subgraph(sg)

    return P


def write_dot(P: pydot.Dot, output_path: Path):
    """Write DOT source (.dot/.gv) or a Graphviz rendering (png, svg, pdf)."""
    output_path = Path(output_path)
    ext = output_path.suffix.lower().lstrip(".")
    if ext in ("png", "svg", "pdf"):
        P.write(str(output_path), format=ext)
    else:
        P.write(str(output_path), format="raw")
