from __future__ import annotations

from conftest import make_person
from generations import assign_generations
from validation import validate_people


def test_clean_family_has_no_warnings(family) -> None:
    assert validate_people(family, assign_generations(family)) == []


def test_dangling_and_one_sided_links() -> None:
    people = [
        make_person("A", name="Ann", parents=["ghost"], partners=["B", "nobody"]),
        make_person("B", name="Bob"),
    ]
    warnings = validate_people(people)
    assert any("unknown parent 'ghost'" in w for w in warnings)
    assert any("unknown partner 'nobody'" in w for w in warnings)
    assert any(w.startswith("One-sided partner link: Ann lists Bob") for w in warnings)


def test_parent_cycle_is_reported() -> None:
    people = [make_person("A", parents=["B"]), make_person("B", parents=["A"])]
    warnings = validate_people(people)
    assert any(w.startswith("Cycle detected") for w in warnings)


def test_impossible_and_suspicious_ages() -> None:
    people = [
        make_person("P", name="Parent", birth_year="1900"),
        make_person("C", name="Child", birth_year="1890", parents=["P"]),
        make_person("Y", name="Young", birth_year="abt 1905", parents=["P"]),
        make_person("D", name="Dead", birth_year="1950", death_year="1940"),
    ]
    warnings = validate_people(people)
    assert "Impossible: Child born before parent Parent" in warnings
    assert "Suspicious: Parent was less than 12 years old when Young was born" in warnings
    assert "Impossible: Dead died before being born" in warnings


def test_unparseable_years_are_ignored() -> None:
    people = [
        make_person("P", birth_year="unknown"),
        make_person("C", birth_year="1890", parents=["P"], death_year="?"),
    ]
    assert validate_people(people) == []


def test_partners_in_different_generations_are_reported() -> None:
    people = [make_person("A", name="Ann", partners=["B"]), make_person("B", name="Bob", partners=["A"])]
    warnings = validate_people(people, {"A": 0, "B": 1})
    assert any(w.startswith("Partners in different generations") for w in warnings)
