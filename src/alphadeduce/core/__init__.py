"""Core deduction machinery: precedence graph, evidence extraction, orchestration."""

from alphadeduce.core.deducer import Alphabet, Deducer, deduce
from alphadeduce.core.graph import (
    CapacityExceededError,
    DeductionError,
    InconsistentDataError,
    InsufficientDataError,
    SymbolGraph,
)

__all__ = [
    "Alphabet",
    "CapacityExceededError",
    "DeductionError",
    "Deducer",
    "InconsistentDataError",
    "InsufficientDataError",
    "SymbolGraph",
    "deduce",
]
