from __future__ import annotations

import matplotlib
import pytest

from models import Person

# Keep plotting tests headless.
matplotlib.use("Agg")


def make_person(pid: str, **kwargs) -> Person:
    kwargs.setdefault("name", pid)
    return Person(id=pid, **kwargs)


@pytest.fixture()
def family() -> list[Person]:
    # Graph:
    #   G1 --partner-- G2
    #        |
    #   P1 --partner-- P2        (P2 has no recorded parents)
    #        |
    #   C1, C2
    return [
        make_person("G1", gender="male", partners=["G2"]),
        make_person("G2", gender="female", partners=["G1"]),
        make_person("P1", gender="male", parents=["G1", "G2"], partners=["P2"]),
        make_person("P2", gender="female", partners=["P1"]),
        make_person("C1", gender="female", parents=["P1", "P2"], birth_year="1990"),
        make_person("C2", gender="male", parents=["P1", "P2"], status="possible"),
    ]
