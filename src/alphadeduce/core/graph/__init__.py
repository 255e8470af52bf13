# src/alphadeduce/core/graph/__init__.py
"""Precedence graph over symbols.

Package re-exports: the graph class and its error taxonomy.
"""

from alphadeduce.core.graph.graph import SymbolGraph
from alphadeduce.core.graph.models import (
    DEFAULT_MAX_SYMBOLS,
    CapacityExceededError,
    CasePolicy,
    DeductionError,
    DuplicateSymbolError,
    GraphSealedError,
    InconsistentDataError,
    InsufficientDataError,
    ReductionMode,
    UnknownSymbolError,
    case_insensitive,
    case_sensitive,
    resolve_case_policy,
)

__all__ = [
    "DEFAULT_MAX_SYMBOLS",
    "CapacityExceededError",
    "CasePolicy",
    "DeductionError",
    "DuplicateSymbolError",
    "GraphSealedError",
    "InconsistentDataError",
    "InsufficientDataError",
    "ReductionMode",
    "SymbolGraph",
    "UnknownSymbolError",
    "case_insensitive",
    "case_sensitive",
    "resolve_case_policy",
]
