"""Connector paths between laid-out nodes (partner links and parent-child elbows)."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from generations import index_people
from layout import LayoutConfig, TreeLayout
from models import Person
from policies import PARTNER_STYLE, ConnectorStyle, connector_style

PARTNER = "partner"
PARENT_CHILD = "parent_child"


@dataclass
class Connector:
    kind: str  # PARTNER | PARENT_CHILD
    source_id: str
    target_id: str
    points: list[tuple[float, float]] = field(default_factory=list)
    style: ConnectorStyle = PARTNER_STYLE


def partner_connectors(
    people: Iterable[Person], layout: TreeLayout, config: LayoutConfig | None = None
) -> list[Connector]:
    """
    One straight link per unordered partner pair, from the right edge of the left
    node to the left edge of the right node, at mid height.
    """
    config = config or LayoutConfig()
    positions = layout.positions
    seen: set[frozenset] = set()
    connectors = []

    for person in index_people(people).values():
        for partner_id in person.partners:
            pair = frozenset((person.id, partner_id))
            if partner_id == person.id or partner_id not in positions or pair in seen:
                continue
            if person.id not in positions:
                continue
            seen.add(pair)

            left_id, right_id = person.id, partner_id
            if positions[right_id].x < positions[left_id].x:
                left_id, right_id = right_id, left_id
            left, right = positions[left_id], positions[right_id]

            connectors.append(
                Connector(
                    kind=PARTNER,
                    source_id=left_id,
                    target_id=right_id,
                    points=[
                        (left.x + config.node_width, left.y + config.node_height / 2.0),
                        (right.x, right.y + config.node_height / 2.0),
                    ],
                    style=PARTNER_STYLE,
                )
            )

    return connectors


def elbow_path(
    parent_xy: tuple[float, float], child_xy: tuple[float, float], config: LayoutConfig
) -> list[tuple[float, float]]:
    """Orthogonal path: parent bottom-center, down to the midpoint row, across, down to child top-center."""
    start_x = parent_xy[0] + config.node_width / 2.0
    start_y = parent_xy[1] + config.node_height
    end_x = child_xy[0] + config.node_width / 2.0
    end_y = child_xy[1]
    mid_y = start_y + (end_y - start_y) * 0.5
    return [(start_x, start_y), (start_x, mid_y), (end_x, mid_y), (end_x, end_y)]


def parent_child_connectors(
    people: Iterable[Person], layout: TreeLayout, config: LayoutConfig | None = None
) -> list[Connector]:
    config = config or LayoutConfig()
    positions = layout.positions
    connectors = []

    for child in index_people(people).values():
        if child.id not in positions:
            continue
        style = connector_style(child.status)
        for parent_id in child.parents:
            if parent_id == child.id or parent_id not in positions:
                continue
            connectors.append(
                Connector(
                    kind=PARENT_CHILD,
                    source_id=parent_id,
                    target_id=child.id,
                    points=elbow_path(positions[parent_id], positions[child.id], config),
                    style=style,
                )
            )

    return connectors


def derive_connectors(
    people: Iterable[Person], layout: TreeLayout, config: LayoutConfig | None = None
) -> list[Connector]:
    """All connectors for a layout: partner links first, then parent-child elbows."""
    people = list(people)
    return partner_connectors(people, layout, config) + parent_child_connectors(people, layout, config)
