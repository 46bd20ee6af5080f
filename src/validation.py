"""Data-quality checks for family tree records."""

from collections.abc import Iterable

import networkx as nx

from generations import index_people
from graph import build_graph
from models import GenerationMap, Person
from policies import parse_year


def validate_people(people: Iterable[Person], generations: GenerationMap | None = None) -> list[str]:
    """
    Validate family tree records for:
    - Cycles in parent-child relationships
    - Dangling parent/partner references and one-sided partner links
    - Impossible ages (child born before parent, died before born)
    - Partners placed in different generations (when `generations` is given)

    Layout tolerates all of these; this only reports them.
    Returns a list of warning messages.
    """
    warnings: list[str] = []
    people_by_id = index_people(people)
    G = build_graph(people_by_id.values())

    for pid, p in people_by_id.items():
        for ref in p.parents:
            if ref not in people_by_id:
                warnings.append(f"Dangling parent: {p.name} lists unknown parent {ref!r}")
        for ref in p.partners:
            if ref not in people_by_id:
                warnings.append(f"Dangling partner: {p.name} lists unknown partner {ref!r}")
            elif pid not in people_by_id[ref].partners:
                warnings.append(
                    f"One-sided partner link: {p.name} lists {people_by_id[ref].name} "
                    f"but not the other way round"
                )

    # Create a subgraph with only PARENT_OF edges for cycle detection
    parent_edges = [(u, v) for u, v, d in G.edges(data=True) if d.get("relationship_type") == "PARENT_OF"]
    parent_graph = nx.DiGraph(parent_edges)

    try:
        cycle = nx.find_cycle(parent_graph, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    for parent, child in parent_edges:
        parent_data = G.nodes[parent]
        child_data = G.nodes[child]

        parent_birth = parse_year(parent_data.get("birth_year"))
        child_birth = parse_year(child_data.get("birth_year"))
        if parent_birth is None or child_birth is None:
            continue

        if child_birth < parent_birth:
            warnings.append(
                f"Impossible: {child_data.get('person_name')} born before parent "
                f"{parent_data.get('person_name')}"
            )
        elif child_birth - parent_birth < 12:
            warnings.append(
                f"Suspicious: {parent_data.get('person_name')} was less than 12 years old "
                f"when {child_data.get('person_name')} was born"
            )

    for _, data in G.nodes(data=True):
        birth = parse_year(data.get("birth_year"))
        death = parse_year(data.get("death_year"))
        if birth is not None and death is not None and death < birth:
            warnings.append(f"Impossible: {data.get('person_name')} died before being born")

    if generations is not None:
        for u, v, d in G.edges(data=True):
            if d.get("relationship_type") == "SPOUSE_OF" and generations.get(u) != generations.get(v):
                warnings.append(
                    f"Partners in different generations: {G.nodes[u].get('person_name')} "
                    f"({generations.get(u)}) and {G.nodes[v].get('person_name')} ({generations.get(v)})"
                )

    return warnings
