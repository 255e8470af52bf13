# src/alphadeduce/core/graph/models.py
"""Types, constants, and exceptions for the precedence graph.

Leaf module: no intra-package imports.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Literal, TypeAlias

# Largest alphabet the reference deducer accepted. Kept as the default
# capacity; callers may raise it or pass None to lift the bound entirely.
DEFAULT_MAX_SYMBOLS = 66

CasePolicy: TypeAlias = Callable[[str], str]
ReductionMode: TypeAlias = Literal["progressive", "canonical"]


class DeductionError(ValueError):
    """Base class for every failure that aborts a deduction.

    The message is human-readable and is what the CLI prints after ``ERROR:``.
    """

    pass


class InsufficientDataError(DeductionError):
    """Raised when the evidence does not pin down a unique order.

    Covers disconnected symbols, multiple candidate heads or tails, and
    branching (a symbol with more than one possible successor).
    """

    def __init__(self, message: str = "not enough data to deduce the alphabet") -> None:
        super().__init__(message)


class InconsistentDataError(DeductionError):
    """Raised when the evidence is contradictory (a precedence cycle)."""

    def __init__(self, message: str = "the data is inconsistent") -> None:
        super().__init__(message)


class CapacityExceededError(DeductionError):
    """Raised when more distinct symbols are observed than the graph may hold."""

    def __init__(self, symbol: str, capacity: int) -> None:
        self.symbol = symbol
        self.capacity = capacity
        super().__init__(f"too many distinct symbols: cannot register {symbol!r}, capacity is {capacity}")


class DuplicateSymbolError(ValueError):
    """Raised when a symbol is inserted into the graph twice."""

    pass


class UnknownSymbolError(KeyError):
    """Raised when an operation references a symbol that is not a node."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(symbol)

    def __str__(self) -> str:
        return f"symbol {self.symbol!r} is not registered in the graph"


class GraphSealedError(RuntimeError):
    """Raised when a sequenced graph is mutated without a reset."""

    pass


def case_sensitive(symbol: str) -> str:
    """Identity case policy."""
    return symbol


def case_insensitive(symbol: str) -> str:
    """Upper-casing case policy.

    Characters whose upper case is not a single character (e.g. "ß") are
    kept as they are, so one character always folds to one symbol.
    """
    folded = symbol.upper()
    if len(folded) != len(symbol):
        return symbol
    return folded


_CASE_POLICIES: dict[str, CasePolicy] = {
    "sensitive": case_sensitive,
    "insensitive": case_insensitive,
}


def resolve_case_policy(name: str) -> CasePolicy:
    """Look up a case policy by its configuration name.

    Raises:
        ValueError: If name is not a known policy.
    """
    try:
        return _CASE_POLICIES[name]
    except KeyError:
        known = ", ".join(sorted(_CASE_POLICIES))
        raise ValueError(f"Unknown case policy '{name}'. Known policies: {known}") from None
