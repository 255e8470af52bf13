# tests/fixtures/__init__.py
"""Shared helpers for alphadeduce tests.

Available helpers:
- build_graph: SymbolGraph from compact symbol/edge specs
- words_sorted_by: sort words by a given alphabet
"""

from tests.fixtures.graphs import build_graph, words_sorted_by

__all__ = [
    "build_graph",
    "words_sorted_by",
]
