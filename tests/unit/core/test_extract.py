# tests/unit/core/test_extract.py
"""Tests for EvidenceExtractor: column stepping and graph population."""

from __future__ import annotations

import io

import pytest

from alphadeduce.core.extract import ColumnStep, EvidenceExtractor, StepKind, iter_words
from alphadeduce.core.graph import CapacityExceededError, SymbolGraph, case_insensitive


def _extract(*lines: str, extractor: EvidenceExtractor | None = None) -> SymbolGraph:
    graph = SymbolGraph()
    (extractor or EvidenceExtractor()).extract(lines, graph)
    return graph


class TestStep:
    """Single-column classification."""

    def test_same_symbol_with_more_upper_characters_descends(self) -> None:
        step = EvidenceExtractor().step("ba", "bc", 0)

        assert step == ColumnStep(kind=StepKind.DESCEND, column=0, upper="b", lower="b")

    def test_differing_symbols_diverge(self) -> None:
        step = EvidenceExtractor().step("ba", "bc", 1)

        assert step.kind is StepKind.DIVERGE
        assert (step.upper, step.lower) == ("a", "c")

    def test_upper_word_ending_exhausts(self) -> None:
        step = EvidenceExtractor().step("ab", "abc", 1)

        assert step.kind is StepKind.EXHAUSTED
        assert step.lower == "b"

    def test_lower_word_ending_exhausts(self) -> None:
        step = EvidenceExtractor().step("abc", "ab", 2)

        assert step.kind is StepKind.EXHAUSTED
        assert step.upper == "c"
        assert step.lower is None

    def test_case_policy_applied_before_comparison(self) -> None:
        step = EvidenceExtractor(case_insensitive).step("ab", "Ac", 0)

        assert step.kind is StepKind.DESCEND
        assert step.upper == "A"


class TestCompare:
    """Resolving one adjacent pair of words."""

    def test_first_column_divergence(self) -> None:
        graph = SymbolGraph()

        step = EvidenceExtractor().compare("ab", "ba", graph)

        assert step.kind is StepKind.DIVERGE
        assert list(graph.edges()) == [("a", "b")]
        assert graph.symbols == ("a", "b")

    def test_divergence_after_shared_prefix(self) -> None:
        graph = SymbolGraph()

        step = EvidenceExtractor().compare("xya", "xyb", graph)

        assert step.column == 2
        assert list(graph.edges()) == [("a", "b")]
        assert graph.symbols == ("x", "y", "a", "b")

    def test_trailing_characters_registered_without_edges(self) -> None:
        graph = SymbolGraph()

        EvidenceExtractor().compare("ax", "by", graph)

        assert graph.symbols == ("a", "b", "x", "y")
        assert list(graph.edges()) == [("a", "b")]

    def test_prefix_gives_no_edge(self) -> None:
        graph = SymbolGraph()

        step = EvidenceExtractor().compare("ab", "abc", graph)

        assert step.kind is StepKind.EXHAUSTED
        assert graph.edge_count == 0
        assert graph.symbols == ("a", "b", "c")

    def test_word_followed_by_its_prefix_gives_no_edge(self) -> None:
        graph = SymbolGraph()

        EvidenceExtractor().compare("abc", "ab", graph)

        assert graph.edge_count == 0
        assert graph.symbols == ("a", "b", "c")

    def test_identical_words(self) -> None:
        graph = SymbolGraph()

        step = EvidenceExtractor().compare("aa", "aa", graph)

        assert step.kind is StepKind.EXHAUSTED
        assert graph.symbols == ("a",)
        assert graph.edge_count == 0


class TestExtract:
    """Whole word lists."""

    def test_adjacent_pairs_only(self) -> None:
        graph = _extract("ba", "bc", "ca")

        assert graph.symbols == ("b", "a", "c")
        assert sorted(graph.edges()) == [("a", "c"), ("b", "c")]

    def test_two_words(self) -> None:
        graph = _extract("ab", "ba")

        assert graph.symbols == ("a", "b")
        assert list(graph.edges()) == [("a", "b")]

    def test_line_terminators_stripped(self) -> None:
        graph = _extract("ab\r\n", "ba\n")

        assert graph.symbols == ("a", "b")

    def test_empty_lines_skipped(self) -> None:
        graph = _extract("ab\n", "\n", "\r\n", "ba\n")

        assert list(graph.edges()) == [("a", "b")]

    def test_whitespace_word_is_a_symbol(self) -> None:
        graph = _extract(" ", "a")

        assert graph.symbols == (" ", "a")
        assert list(graph.edges()) == [(" ", "a")]

    def test_reads_text_stream(self) -> None:
        graph = SymbolGraph()

        stats = EvidenceExtractor().extract(io.StringIO("ca\ncb\nab\n"), graph)

        assert stats.words == 3
        assert stats.pairs == 2
        assert stats.edges == 2
        assert stats.symbols == 3
        assert sorted(graph.edges()) == [("a", "b"), ("c", "a")]

    def test_lone_word_registers_every_symbol(self) -> None:
        graph = SymbolGraph()

        stats = EvidenceExtractor().extract(["cab"], graph)

        assert graph.symbols == ("c", "a", "b")
        assert stats.pairs == 0

    def test_empty_input(self) -> None:
        graph = SymbolGraph()

        stats = EvidenceExtractor().extract([], graph)

        assert graph.node_count == 0
        assert stats.words == 0

    def test_case_insensitive_merges_symbols(self) -> None:
        graph = _extract("ab", "Ba", extractor=EvidenceExtractor(case_insensitive))

        assert graph.symbols == ("A", "B")
        assert list(graph.edges()) == [("A", "B")]

    def test_case_sensitive_keeps_symbols_apart(self) -> None:
        graph = _extract("ab", "Ba")

        assert graph.symbols == ("a", "B", "b")
        assert list(graph.edges()) == [("a", "B")]

    def test_long_shared_prefix(self) -> None:
        prefix = "q" * 5000
        graph = _extract(prefix + "a", prefix + "b")

        assert list(graph.edges()) == [("a", "b")]

    def test_capacity_exceeded_aborts(self) -> None:
        graph = SymbolGraph(max_symbols=2)

        with pytest.raises(CapacityExceededError):
            EvidenceExtractor().extract(["ab", "cd"], graph)


def test_iter_words() -> None:
    assert list(iter_words(["a\n", "\n", "b c\r\n", "\t\n", "\r\n"])) == ["a", "b c", "\t"]


def test_case_insensitive_sharp_s_stays_one_symbol() -> None:
    graph = _extract("ß", "s", extractor=EvidenceExtractor(case_insensitive))

    assert graph.symbols == ("ß", "S")
    assert list(graph.edges()) == [("ß", "S")]
