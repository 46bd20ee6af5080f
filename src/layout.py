"""
Family tree spatial layout.
Groups people into generation rows, pairs partners, and assigns centered (x, y) coordinates.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from generations import index_people
from models import GenerationMap, Person, Position
from policies import partner_order


@dataclass(frozen=True)
class LayoutConfig:
    node_width: float = 230
    node_height: float = 100
    vertical_gap: float = 80
    horizontal_gap: float = 50
    padding: float = 80
    male_left: bool = True

    def __post_init__(self):
        if self.node_width <= 0 or self.node_height <= 0:
            raise ValueError("Node width and height must be positive")
        if min(self.vertical_gap, self.horizontal_gap, self.padding) < 0:
            raise ValueError("Gaps and padding must not be negative")

    @property
    def column_step(self) -> float:
        return self.node_width + self.horizontal_gap

    @property
    def row_step(self) -> float:
        return self.node_height + self.vertical_gap

    def row_width(self, slots: int) -> float:
        if slots <= 0:
            return 0.0
        return slots * self.column_step - self.horizontal_gap


@dataclass
class TreeLayout:
    positions: dict[str, Position] = field(default_factory=dict)
    canvas_width: float = 0.0
    canvas_height: float = 0.0
    # generation -> person IDs left to right
    rows: dict[int, list[str]] = field(default_factory=dict)


def group_by_generation(people: Iterable[Person], generations: GenerationMap) -> dict[int, list[str]]:
    """Bucket person IDs by generation, ascending; input order is kept inside a bucket."""
    groups: dict[int, list[str]] = {}
    for pid in index_people(people):
        groups.setdefault(generations.get(pid, 0), []).append(pid)
    return dict(sorted(groups.items()))


def order_row(ids: list[str], people_by_id: dict[str, Person], config: LayoutConfig | None = None) -> list[str]:
    """
    Order one generation, placing each person next to their first unplaced partner
    from the same generation.
    """
    config = config or LayoutConfig()
    in_row = set(ids)
    placed: set[str] = set()
    ordered: list[str] = []

    for pid in ids:
        if pid in placed:
            continue
        member = people_by_id[pid]
        partner_id = next(
            (p for p in member.partners if p in in_row and p != pid and p not in placed),
            None,
        )
        if partner_id is None:
            ordered.append(pid)
            placed.add(pid)
            continue

        left, right = partner_order(member, people_by_id[partner_id], male_left=config.male_left)
        ordered += [left.id, right.id]
        placed.update((pid, partner_id))

    return ordered


def compute_layout(
    people: Iterable[Person],
    generations: GenerationMap,
    config: LayoutConfig | None = None,
) -> TreeLayout:
    """
    Compute (x, y) for every person from their generation.

    Rows are spaced evenly and each one is centered on a vertical midline shared by
    all generations. The canvas is the bounding box of all nodes plus padding.
    """
    config = config or LayoutConfig()
    people_by_id = index_people(people)
    if not people_by_id:
        return TreeLayout()

    rows = {
        gen: order_row(ids, people_by_id, config)
        for gen, ids in group_by_generation(people_by_id.values(), generations).items()
    }

    widest = max(config.row_width(len(row)) for row in rows.values())
    midline = config.padding + widest / 2.0

    positions: dict[str, Position] = {}
    for gen, row in rows.items():
        start_x = midline - config.row_width(len(row)) / 2.0
        y = config.padding + gen * config.row_step
        for i, pid in enumerate(row):
            positions[pid] = Position(start_x + i * config.column_step, y)

    canvas_width = max(p.x for p in positions.values()) + config.node_width + config.padding
    canvas_height = max(p.y for p in positions.values()) + config.node_height + config.padding

    return TreeLayout(
        positions=positions,
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        rows=rows,
    )
