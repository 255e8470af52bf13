# tests/unit/core/test_export.py
"""Tests for DOT and Mermaid renderings."""

from __future__ import annotations

from pathlib import Path

from alphadeduce.core.export import to_dot, to_mermaid, write_dot
from tests.fixtures.graphs import build_graph


def test_dot_lists_edges_then_every_node() -> None:
    graph = build_graph("abc", ["ab"])

    assert to_dot(graph) == (
        "digraph Alphabet {\n"
        '\tsize = "8,8";\n'
        '\t"a" -> "b";\n'
        '\t"a";\n'
        '\t"b";\n'
        '\t"c";\n'
        "}\n"
    )


def test_dot_escapes_quotes() -> None:
    graph = build_graph('"', [])

    assert '\t"\\"";' in to_dot(graph)


def test_mermaid_uses_aliases() -> None:
    graph = build_graph("xy", ["xy"])

    assert to_mermaid(graph).splitlines() == [
        "graph LR",
        '    N0["x"]',
        '    N1["y"]',
        "    N0 --> N1",
    ]


def test_write_dot_creates_directories(tmp_path: Path) -> None:
    graph = build_graph("ab", ["ab"])

    path = write_dot(graph, tmp_path / "nested" / "graph.dot")

    assert path.read_text(encoding="utf-8") == to_dot(graph)
