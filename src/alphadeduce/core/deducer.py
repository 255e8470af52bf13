# src/alphadeduce/core/deducer.py
"""Deduction orchestration.

Runs evidence extraction into a fresh SymbolGraph, reduces it, sequences it
and maps the resulting node order back to symbols. Any DeductionError from
these stages propagates unchanged; no partial alphabet is ever returned.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from alphadeduce.core.config import DeducerSettings
from alphadeduce.core.export import write_dot
from alphadeduce.core.extract import EvidenceExtractor
from alphadeduce.core.graph import DeductionError, SymbolGraph, resolve_case_policy
from alphadeduce.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Alphabet:
    """A deduced total order over the observed symbols."""

    symbols: tuple[str, ...]

    def __str__(self) -> str:
        return " ".join(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def position(self, symbol: str) -> int:
        """Zero-based rank of symbol in the alphabet."""
        return self.symbols.index(symbol)


class Deducer:
    """Infer an alphabet from words sorted by it.

    Each call to deduce() owns a brand-new SymbolGraph, so one Deducer may be
    reused for any number of independent inputs.
    """

    def __init__(self, settings: DeducerSettings | None = None) -> None:
        self._settings = settings or DeducerSettings()
        self._extractor = EvidenceExtractor(resolve_case_policy(self._settings.case_policy))

    @property
    def settings(self) -> DeducerSettings:
        return self._settings

    def build_graph(self, lines: Iterable[str], *, reduce: bool = True) -> SymbolGraph:
        """Extract evidence into a fresh graph and optionally reduce it.

        Exposed for diagnostics; deduce() is the normal entry point.
        """
        graph = SymbolGraph(max_symbols=self._settings.max_symbols)
        stats = self._extractor.extract(lines, graph)
        logger.debug(
            "evidence_extracted",
            words=stats.words,
            pairs=stats.pairs,
            edges=stats.edges,
            symbols=stats.symbols,
        )
        if self._settings.export_dir is not None:
            write_dot(graph, self._settings.export_dir / "Initial.dot")

        if reduce:
            removed = graph.eliminate_shortcuts(self._settings.reduction)
            logger.debug(
                "shortcuts_eliminated",
                mode=self._settings.reduction,
                removed=removed,
                remaining=graph.edge_count,
            )
        return graph

    def deduce(self, lines: Iterable[str]) -> Alphabet:
        """Deduce the alphabet encoded by the sort order of lines.

        Args:
            lines: Words, one per line, sorted by the unknown alphabet.
                Any iterable of strings works, including an open text file.

        Returns:
            The deduced Alphabet.

        Raises:
            InsufficientDataError: The evidence does not determine a unique order
            InconsistentDataError: The evidence contains a precedence cycle
            CapacityExceededError: Too many distinct symbols
            OSError: export_dir is set and the DOT files cannot be written
        """
        try:
            graph = self.build_graph(lines)
            order = graph.sort()
        except DeductionError as e:
            logger.warning("deduction_failed", error_type=type(e).__name__, reason=str(e))
            raise

        if self._settings.export_dir is not None:
            write_dot(graph, self._settings.export_dir / "Final.dot")

        alphabet = Alphabet(symbols=tuple(graph.symbol_at(index) for index in order))
        logger.info("alphabet_deduced", size=len(alphabet), alphabet=str(alphabet))
        return alphabet


def deduce(lines: Iterable[str], **overrides: Any) -> Alphabet:
    """Deduce an alphabet with default settings, optionally overridden.

    Example:
        >>> str(deduce(["ab", "ba"], case_policy="sensitive"))
        'a b'
    """
    settings = DeducerSettings(**overrides)
    return Deducer(settings).deduce(lines)
