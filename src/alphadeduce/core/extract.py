# src/alphadeduce/core/extract.py
"""Evidence extraction from a sorted word list.

Two vertically adjacent words only reveal ordering information at the first
column where they differ. The extractor walks each adjacent pair column by
column: while the words agree it descends one column, and at the first
divergence it records ``upper[column] -> lower[column]`` as a precedence
edge. Characters past the resolving column carry no ordering information
from this pair; they are registered as unconnected nodes so that later
comparisons (or the sequencer) can account for them.

The column walk is an explicit state machine: ``EvidenceExtractor.step``
classifies one column of one pair and returns a ``ColumnStep``. Nothing
recurses, so word length never limits the walk.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum

from alphadeduce.core.graph import CasePolicy, SymbolGraph, case_sensitive
from alphadeduce.core.logging import get_logger

logger = get_logger(__name__)


class StepKind(StrEnum):
    """Outcome of comparing one column of an adjacent word pair."""

    DESCEND = "descend"  # same symbol and the upper word continues
    DIVERGE = "diverge"  # first differing column: precedence evidence
    EXHAUSTED = "exhausted"  # a word ended before any difference


@dataclass(frozen=True, slots=True)
class ColumnStep:
    """Result of one extractor step.

    ``upper`` and ``lower`` are the case-folded symbols at ``column``; either
    is None when the corresponding word is shorter than the column.
    """

    kind: StepKind
    column: int
    upper: str | None
    lower: str | None


@dataclass(frozen=True, slots=True)
class ExtractionStats:
    """Counters describing one extraction run."""

    words: int
    pairs: int
    edges: int
    symbols: int


def iter_words(lines: Iterable[str]) -> Iterator[str]:
    """Yield words from raw lines, dropping terminators and empty lines."""
    for line in lines:
        word = line.rstrip("\r\n")
        if word:
            yield word


class EvidenceExtractor:
    """Populate a SymbolGraph from words sorted by an unknown alphabet.

    Args:
        case_policy: Transformation applied to every character before it is
            treated as a symbol (identity by default).
    """

    def __init__(self, case_policy: CasePolicy = case_sensitive) -> None:
        self._fold = case_policy

    def _symbol_at(self, word: str, column: int) -> str | None:
        if column < len(word):
            return self._fold(word[column])
        return None

    def step(self, upper: str, lower: str, column: int) -> ColumnStep:
        """Classify one column of an adjacent pair of words."""
        curr = self._symbol_at(upper, column)
        below = self._symbol_at(lower, column)
        if curr is not None and curr == below and column + 1 < len(upper):
            kind = StepKind.DESCEND
        elif curr is not None and below is not None and curr != below:
            kind = StepKind.DIVERGE
        else:
            kind = StepKind.EXHAUSTED
        return ColumnStep(kind=kind, column=column, upper=curr, lower=below)

    def compare(self, upper: str, lower: str, graph: SymbolGraph) -> ColumnStep:
        """Resolve one adjacent pair of words into graph nodes and at most one edge.

        Returns:
            The final (non-DESCEND) step of the pair.
        """
        column = 0
        while True:
            step = self.step(upper, lower, column)
            if step.upper is not None:
                self._register(graph, step.upper)
            if step.kind is not StepKind.DESCEND:
                break
            column += 1

        if step.kind is StepKind.DIVERGE and step.upper is not None and step.lower is not None:
            self._register(graph, step.lower)
            graph.insert_edge(step.upper, step.lower)

        # Characters past the resolving column are unordered by this pair.
        for word in (upper, lower):
            for character in word[column + 1 :]:
                self._register(graph, self._fold(character))
        return step

    def extract(self, lines: Iterable[str], graph: SymbolGraph) -> ExtractionStats:
        """Compare every pair of adjacent words and populate graph.

        Raises:
            CapacityExceededError: If more distinct symbols appear than the
                graph can hold. Extraction stops immediately.
        """
        words = 0
        pairs = 0
        edges = 0
        upper: str | None = None
        for word in iter_words(lines):
            words += 1
            if upper is not None:
                pairs += 1
                step = self.compare(upper, word, graph)
                if step.kind is StepKind.DIVERGE:
                    edges += 1
                    logger.debug(
                        "precedence_found",
                        before=step.upper,
                        after=step.lower,
                        column=step.column,
                    )
            upper = word

        # A lone word has no neighbour, but its symbols were still observed.
        if words == 1 and upper is not None:
            for character in upper:
                self._register(graph, self._fold(character))

        return ExtractionStats(words=words, pairs=pairs, edges=edges, symbols=graph.node_count)

    def _register(self, graph: SymbolGraph, symbol: str) -> None:
        if not graph.node_exists(symbol):
            graph.insert_node(symbol)
