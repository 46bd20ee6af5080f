"""End-to-end layout: person records -> generations -> positions -> connectors."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from connectors import Connector, derive_connectors
from generations import assign_generations
from layout import LayoutConfig, TreeLayout, compute_layout
from models import GenerationMap, Person


@dataclass
class TreeDiagram:
    generations: GenerationMap
    layout: TreeLayout
    connectors: list[Connector] = field(default_factory=list)


def layout_tree(
    people: Iterable[Person],
    config: LayoutConfig | None = None,
    strategy: str = "longest_path",
) -> TreeDiagram:
    """Lay out a full tree. Pure: every call rebuilds everything from the given records."""
    config = config or LayoutConfig()
    people = list(people)
    generations = assign_generations(people, strategy=strategy)
    layout = compute_layout(people, generations, config)
    return TreeDiagram(
        generations=generations,
        layout=layout,
        connectors=derive_connectors(people, layout, config),
    )
