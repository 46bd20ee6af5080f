"""Generation (row) assignment over parent->child and partner relations."""

import logging
from collections.abc import Iterable

import networkx as nx

from models import GenerationMap, Person

log = logging.getLogger(__name__)

STRATEGIES = ("longest_path", "first_visit")


def index_people(people: Iterable[Person]) -> dict[str, Person]:
    """Map person ID -> Person in input order. The first record with a given ID wins."""
    people_by_id: dict[str, Person] = {}
    for person in people:
        if person.id in people_by_id:
            log.warning("Duplicate person id %r (%s) ignored", person.id, person.name)
            continue
        people_by_id[person.id] = person
    return people_by_id


def find_root_candidates(people: Iterable[Person]) -> list[Person]:
    """Persons with no recorded parents, in input order."""
    return [p for p in index_people(people).values() if not p.parents]


def children_index(people: Iterable[Person]) -> dict[str, list[str]]:
    """
    Map each person ID to the IDs of persons listing them as a parent.

    Children keep input order. Parent IDs that do not resolve are ignored.
    """
    people_by_id = index_people(people)
    children: dict[str, list[str]] = {pid: [] for pid in people_by_id}
    for person in people_by_id.values():
        for parent_id in person.parents:
            if parent_id in children and parent_id != person.id:
                children[parent_id].append(person.id)
    return children


def build_constraint_graph(people_by_id: dict[str, Person]) -> nx.DiGraph:
    """
    Build the generation constraint graph.

    Edge u -> v with weight w means generation[v] >= generation[u] + w: weight 1 for
    parent -> child, weight 0 in both directions between partners.
    """
    C = nx.DiGraph()
    C.add_nodes_from(people_by_id)

    def add_constraint(u: str, v: str, weight: int):
        if C.has_edge(u, v):
            C[u][v]["weight"] = max(C[u][v]["weight"], weight)
        else:
            C.add_edge(u, v, weight=weight)

    for pid, person in people_by_id.items():
        for parent_id in person.parents:
            if parent_id in people_by_id and parent_id != pid:
                add_constraint(parent_id, pid, 1)
        for partner_id in person.partners:
            if partner_id in people_by_id and partner_id != pid:
                add_constraint(pid, partner_id, 0)
                add_constraint(partner_id, pid, 0)

    return C


def _assign_longest_path(people_by_id: dict[str, Person]) -> GenerationMap:
    C = build_constraint_graph(people_by_id)

    # Partners and parent cycles collapse into one component sharing a generation
    condensed = nx.condensation(C)
    mapping = condensed.graph["mapping"]

    cyclic = [
        data["members"]
        for _, data in condensed.nodes(data=True)
        if any(C[u][v]["weight"] for u in data["members"] for v in C.successors(u) if v in data["members"])
    ]
    if cyclic:
        log.warning("Parent cycles detected, members share a generation: %s", [sorted(m) for m in cyclic])

    component_gen = {c: 0 for c in condensed.nodes}
    for c in nx.topological_sort(condensed):
        for u in condensed.nodes[c]["members"]:
            for v in C.successors(u):
                target = mapping[v]
                if target != c:
                    component_gen[target] = max(component_gen[target], component_gen[c] + C[u][v]["weight"])

    return {pid: component_gen[mapping[pid]] for pid in people_by_id}


def _assign_first_visit(people_by_id: dict[str, Person]) -> GenerationMap:
    children = children_index(people_by_id.values())
    generations: GenerationMap = {}
    expanded: set[str] = set()

    def propagate(start_id: str, start_gen: int):
        # Explicit stack, popped in the same order a recursive walk would visit
        stack = [(start_id, start_gen)]
        while stack:
            pid, gen = stack.pop()
            if pid not in people_by_id:
                continue
            if pid in expanded:
                if generations[pid] < gen:
                    generations[pid] = gen
                continue
            generations[pid] = gen
            expanded.add(pid)

            follow = [(c, gen + 1) for c in children[pid]]
            follow += [(p, gen) for p in people_by_id[pid].partners]
            stack.extend(reversed(follow))

    for root in find_root_candidates(people_by_id.values()):
        propagate(root.id, 0)

    # Orphan sweep: subgraphs without a parent-less root
    for pid in people_by_id:
        if pid not in expanded:
            propagate(pid, 0)

    return {pid: generations[pid] for pid in people_by_id}


def assign_generations(people: Iterable[Person], strategy: str = "longest_path") -> GenerationMap:
    """
    Assign every person a generation index.

    Args:
        people: Person records; dangling parent/partner IDs are ignored
        strategy: "longest_path" settles every "keep the maximum" conflict to its
            fixpoint, so children always sit below every parent and partners share
            a row whenever the data allows it. "first_visit" is the single
            depth-first walk from the root candidates, where a person reached a
            second time keeps the larger value but is not expanded again.

    Returns:
        Person ID -> generation, covering each input person exactly once
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown generation strategy {strategy!r}, expected one of {STRATEGIES}")

    people_by_id = index_people(people)
    if strategy == "first_visit":
        return _assign_first_visit(people_by_id)
    return _assign_longest_path(people_by_id)
