# src/alphadeduce/core/export.py
"""Diagnostic renderings of a SymbolGraph (Graphviz DOT and Mermaid).

Not part of deduction itself; used to inspect the graph before and after
transitive reduction.
"""

from __future__ import annotations

import json
from pathlib import Path

from alphadeduce.core.graph import SymbolGraph


def _dot_id(symbol: str) -> str:
    # JSON string escaping is a valid DOT double-quoted ID.
    return json.dumps(symbol)


def to_dot(graph: SymbolGraph, name: str = "Alphabet") -> str:
    """Render graph as a DOT digraph: every edge, then every node."""
    lines = [f"digraph {name} {{", '\tsize = "8,8";']
    for source, target in graph.edges():
        lines.append(f"\t{_dot_id(source)} -> {_dot_id(target)};")
    # Nodes listed separately; some may have no connections
    for symbol in graph.symbols:
        lines.append(f"\t{_dot_id(symbol)};")
    lines.append("}")
    return "\n".join(lines) + "\n"


def to_mermaid(graph: SymbolGraph) -> str:
    """Render graph as a Mermaid flowchart.

    Uses sequential aliases (N0, N1, ...) since symbols may not be valid
    Mermaid identifiers.
    """
    alias = {symbol: f"N{i}" for i, symbol in enumerate(graph.symbols)}
    lines = ["graph LR"]
    for symbol in graph.symbols:
        label = symbol.replace('"', "#quot;")
        lines.append(f'    {alias[symbol]}["{label}"]')
    for source, target in graph.edges():
        lines.append(f"    {alias[source]} --> {alias[target]}")
    return "\n".join(lines)


def write_dot(graph: SymbolGraph, path: Path) -> Path:
    """Write the DOT rendering of graph to path, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_dot(graph), encoding="utf-8")
    return path
