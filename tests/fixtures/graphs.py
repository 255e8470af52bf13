"""Graph construction helpers shared by unit and property tests."""

from __future__ import annotations

from alphadeduce.core.graph import SymbolGraph


def build_graph(symbols: str, edges: list[str], max_symbols: int | None = None) -> SymbolGraph:
    """Build a SymbolGraph from a symbol string and "ab"-style edge specs.

    Example:
        build_graph("abc", ["ab", "bc"])  # a -> b -> c
    """
    graph = SymbolGraph(max_symbols=max_symbols)
    for symbol in symbols:
        graph.insert_node(symbol)
    for edge in edges:
        graph.insert_edge(edge[0], edge[1])
    return graph


def words_sorted_by(alphabet: str, words: list[str]) -> list[str]:
    """Sort words lexicographically by the given alphabet (prefixes first)."""
    rank = {symbol: i for i, symbol in enumerate(alphabet)}
    return sorted(words, key=lambda w: [rank[c] for c in w])
