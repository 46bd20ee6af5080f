from __future__ import annotations

import json
from pathlib import Path

from main import main


def _write_tree(path: Path) -> Path:
    path.write_text(
        json.dumps(
            {
                "title": "Test lineage",
                "persons": [
                    {"id": "G1", "name": "Grandpa", "gender": "male", "partners": ["G2"]},
                    {"id": "G2", "name": "Grandma", "gender": "female", "partners": ["G1"]},
                    {"id": "P1", "name": "Parent", "parents": ["G1", "G2"]},
                    {"id": "C1", "name": "Child", "parents": ["P1", "ghost"]},
                ],
                "sources": [{"title": "Registry", "uri": "https://example.org"}],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_cli_writes_outputs(tmp_path: Path, capsys) -> None:
    tree = _write_tree(tmp_path / "tree.json")
    png, pdf, dot = tmp_path / "tree.png", tmp_path / "tree.pdf", tmp_path / "tree.dot"

    assert main([str(tree), "-o", str(png), "--pdf", str(pdf), "--dot", str(dot)]) == 0
    assert png.exists() and pdf.exists() and dot.exists()

    out = capsys.readouterr().out
    assert "Found 4 people" in out
    assert "Generation 2: 1 people" in out
    assert "unknown parent 'ghost'" in out
    assert "Done!" in out


def test_cli_ancestor_focus(tmp_path: Path, capsys) -> None:
    tree = _write_tree(tmp_path / "tree.json")
    assert main([str(tree), "--ancestors-of", "P1"]) == 0
    assert "Restricted to 3 people" in capsys.readouterr().out


def test_cli_reports_bad_input(tmp_path: Path, capsys) -> None:
    bad = tmp_path / "tree.txt"
    bad.write_text("nope", encoding="utf-8")
    assert main([str(bad)]) == 2
    assert "Unsupported input file type" in capsys.readouterr().err


def test_cli_empty_tree(tmp_path: Path) -> None:
    empty = tmp_path / "empty.json"
    empty.write_text(json.dumps({"persons": []}), encoding="utf-8")
    assert main([str(empty)]) == 1
