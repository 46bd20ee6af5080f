"""NetworkX graph building and subgraph selection."""

import itertools
from collections.abc import Iterable

import networkx as nx

from generations import index_people
from models import Person


def build_graph(people: Iterable[Person]) -> nx.DiGraph:
    """
    Build a NetworkX directed graph from person records.

    PARENT_OF edges run parent -> child; each partner pair gets one SPOUSE_OF edge
    per listing direction. References to unknown IDs are dropped.
    """
    G = nx.DiGraph()
    people_by_id = index_people(people)

    # Note: use 'person_name' instead of 'name' to avoid conflict with pydot
    for pid, p in people_by_id.items():
        G.add_node(
            pid,
            person_name=p.name,
            gender=p.gender,
            birth_year=p.birth_year,
            death_year=p.death_year,
            status=p.status,
        )

    for pid, p in people_by_id.items():
        for parent_id in p.parents:
            if parent_id in people_by_id and parent_id != pid:
                G.add_edge(parent_id, pid, relationship_type="PARENT_OF")
        for partner_id in p.partners:
            if partner_id in people_by_id and partner_id != pid and not G.has_edge(pid, partner_id):
                G.add_edge(pid, partner_id, relationship_type="SPOUSE_OF")

    return G


def get_ego_subgraph(G: nx.DiGraph, center_id: str, radius: int = 2) -> nx.DiGraph:
    """People within `radius` parent or partner links of `center_id`, in either direction."""
    if center_id not in G:
        raise ValueError(f"Unknown person ID {center_id!r}")

    distances = nx.single_source_shortest_path_length(G.to_undirected(as_view=True), center_id, cutoff=radius)
    return G.subgraph(distances).copy()


def get_ancestor_subgraph(G: nx.DiGraph, center_id: str, include_partners: bool = True) -> nx.DiGraph:
    """
    Extract the person, every recorded ancestor, and optionally their partners.

    This is the focus used when ancestor research is requested for one person.
    """
    if center_id not in G:
        raise ValueError(f"Unknown person ID {center_id!r}")

    parent_graph = nx.DiGraph(
        (u, v) for u, v, d in G.edges(data=True) if d.get("relationship_type") == "PARENT_OF"
    )
    nodes = {center_id}
    if center_id in parent_graph:
        nodes |= nx.ancestors(parent_graph, center_id)

    if include_partners:
        for n in list(nodes):
            for neighbor in G.predecessors(n):
                if G.edges[neighbor, n].get("relationship_type") == "SPOUSE_OF":
                    nodes.add(neighbor)
            for neighbor in G.successors(n):
                if G.edges[n, neighbor].get("relationship_type") == "SPOUSE_OF":
                    nodes.add(neighbor)

    return G.subgraph(nodes).copy()


def subset_people(people: Iterable[Person], ids: Iterable[str]) -> list[Person]:
    """Keep only the given person IDs, in input order."""
    keep = set(ids)
    return [p for p in index_people(people).values() if p.id in keep]


def _family_id(parents) -> str:
    return "FAM_" + "_".join(sorted(parents, key=str))


def build_union_layout_graph(G: nx.DiGraph) -> nx.DiGraph:
    """
    Graph for Graphviz export where children hang off a family point.

    Each partner pair gets one family node; a child whose parents include such a
    pair attaches to it, otherwise its parents share a family node of their own.
    Node ids are `FAM_<id>_<id>` with the parent ids sorted.
    """
    H = nx.DiGraph()
    H.add_nodes_from(G.nodes(data=True), node_type="person")

    couples = {
        tuple(sorted((u, v), key=str))
        for u, v, d in G.edges(data=True)
        if d.get("relationship_type") == "SPOUSE_OF"
    }

    def add_family(parents) -> str:
        fam_id = _family_id(parents)
        if fam_id not in H:
            H.add_node(fam_id, node_type="family", spouses=tuple(parents))
            for p in parents:
                H.add_edge(p, fam_id, edge_type="spouse_to_family")
        return fam_id

    for couple in sorted(couples):
        add_family(couple)

    parents_of: dict[str, list[str]] = {}
    for u, v, d in G.edges(data=True):
        if d.get("relationship_type") == "PARENT_OF" and u not in parents_of.setdefault(v, []):
            parents_of[v].append(u)

    for child, parents in parents_of.items():
        pair = next(
            (c for c in itertools.combinations(sorted(parents, key=str), 2) if c in couples),
            None,
        )
        fam_id = _family_id(pair) if pair else add_family(parents)
        H.add_edge(fam_id, child, edge_type="family_to_child")

    return H
