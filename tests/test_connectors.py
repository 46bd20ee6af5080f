from __future__ import annotations

from conftest import make_person
from connectors import PARENT_CHILD, PARTNER, derive_connectors, elbow_path, parent_child_connectors, partner_connectors
from diagram import layout_tree
from generations import assign_generations
from layout import LayoutConfig, compute_layout
from policies import PARTNER_STYLE, POSSIBLE_STYLE, SOLID_STYLE

CONFIG = LayoutConfig()


def _connectors(people):
    layout = compute_layout(people, assign_generations(people), CONFIG)
    return layout, derive_connectors(people, layout, CONFIG)


def test_partner_connector_joins_facing_edges() -> None:
    people = [
        make_person("P1", gender="female", partners=["P2"]),
        make_person("P2", gender="male", partners=["P1"]),
    ]
    _, connectors = _connectors(people)
    assert len(connectors) == 1
    (c,) = connectors
    assert c.kind == PARTNER
    assert (c.source_id, c.target_id) == ("P2", "P1")
    assert c.points == [(80 + 230, 80 + 50), (80 + 280, 80 + 50)]
    assert c.style == PARTNER_STYLE


def test_one_sided_partner_link_gives_one_connector() -> None:
    people = [make_person("A", partners=["B"]), make_person("B")]
    _, connectors = _connectors(people)
    assert [c.kind for c in connectors] == [PARTNER]


def test_missing_partner_emits_nothing() -> None:
    _, connectors = _connectors([make_person("X", partners=["Y"])])
    assert connectors == []


def test_parent_child_elbow() -> None:
    people = [make_person("P1"), make_person("C1", parents=["P1"])]
    _, connectors = _connectors(people)
    assert len(connectors) == 1
    (c,) = connectors
    assert c.kind == PARENT_CHILD
    assert (c.source_id, c.target_id) == ("P1", "C1")
    assert c.points == [(195, 180), (195, 220), (195, 220), (195, 260)]
    assert c.style == SOLID_STYLE


def test_elbow_turns_at_vertical_midpoint() -> None:
    points = elbow_path((0, 0), (400, 300), CONFIG)
    start, down, across, end = points
    assert start == (115, 100)
    assert end == (515, 300)
    assert down[1] == across[1] == 200
    assert down[0] == start[0]
    assert across[0] == end[0]


def test_possible_child_gets_light_dashed_lines(family) -> None:
    layout = compute_layout(family, assign_generations(family), CONFIG)
    by_child = {}
    for c in parent_child_connectors(family, layout, CONFIG):
        by_child.setdefault(c.target_id, []).append(c)

    assert {c.style for c in by_child["C2"]} == {POSSIBLE_STYLE}
    assert {c.style for c in by_child["C1"]} == {SOLID_STYLE}
    assert {c.source_id for c in by_child["C1"]} == {"P1", "P2"}


def test_family_connector_counts(family) -> None:
    layout, connectors = _connectors(family)
    partner_pairs = {frozenset((c.source_id, c.target_id)) for c in partner_connectors(family, layout, CONFIG)}
    assert partner_pairs == {frozenset(("G1", "G2")), frozenset(("P1", "P2"))}
    assert sum(c.kind == PARTNER for c in connectors) == 2
    assert sum(c.kind == PARENT_CHILD for c in connectors) == 6
    # Partners first
    assert [c.kind for c in connectors[:2]] == [PARTNER, PARTNER]


def test_self_and_dangling_references_emit_nothing() -> None:
    people = [make_person("A", parents=["A", "ghost"], partners=["A"])]
    _, connectors = _connectors(people)
    assert connectors == []


def test_layout_tree_runs_all_stages(family) -> None:
    diagram = layout_tree(family)
    assert diagram.generations["C1"] == 2
    assert set(diagram.layout.positions) == {p.id for p in family}
    assert len(diagram.connectors) == 8


def test_layout_tree_handles_empty_input() -> None:
    diagram = layout_tree([])
    assert diagram.generations == {}
    assert diagram.layout.positions == {}
    assert diagram.connectors == []
