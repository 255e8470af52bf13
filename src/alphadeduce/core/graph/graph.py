# src/alphadeduce/core/graph/graph.py
"""SymbolGraph: precedence graph with reachability, reduction and sequencing.

The graph is populated once by the evidence extractor (nodes and edges only
added), then reduced (edges only removed), then sequenced. A successful
``sort()`` seals the graph; call ``reset()`` before reusing the instance.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import networkx as nx
from networkx import DiGraph

from alphadeduce.core.graph.models import (
    DEFAULT_MAX_SYMBOLS,
    CapacityExceededError,
    DuplicateSymbolError,
    GraphSealedError,
    InconsistentDataError,
    InsufficientDataError,
    ReductionMode,
    UnknownSymbolError,
)


def _reachable(graph: DiGraph[str], source: str) -> set[str]:
    """Nodes reachable from source via one or more edges.

    Iterative depth-first traversal with an explicit stack; each node is
    expanded at most once. The source itself is included only when it lies
    on a cycle.
    """
    seen: set[str] = set()
    stack = list(graph.successors(source))
    while stack:
        node = stack.pop()
        if node in seen:
            continue
        seen.add(node)
        stack.extend(n for n in graph.successors(node) if n not in seen)
    return seen


class SymbolGraph:
    """Directed precedence graph over a bounded set of symbols.

    Wraps a NetworkX DiGraph. Nodes keep their insertion index (stored as the
    ``index`` node attribute); edges carry a ``weight`` presence flag. All
    neighbour and edge listings are in node-index order, which makes
    reduction and sequencing deterministic.
    """

    def __init__(self, max_symbols: int | None = DEFAULT_MAX_SYMBOLS) -> None:
        if max_symbols is not None and max_symbols < 1:
            raise ValueError(f"max_symbols must be positive or None, got {max_symbols}")
        self._max_symbols = max_symbols
        self._graph: DiGraph[str] = nx.DiGraph()
        self._symbols: list[str] = []
        self._order: tuple[int, ...] | None = None

    @property
    def max_symbols(self) -> int | None:
        """Capacity bound (None = unbounded)."""
        return self._max_symbols

    @property
    def node_count(self) -> int:
        """Number of nodes in the graph."""
        return len(self._symbols)

    @property
    def edge_count(self) -> int:
        """Number of edges in the graph."""
        return self._graph.number_of_edges()

    @property
    def symbols(self) -> tuple[str, ...]:
        """Registered symbols in insertion order."""
        return tuple(self._symbols)

    @property
    def is_sealed(self) -> bool:
        """True once sort() has succeeded."""
        return self._order is not None

    def reset(self) -> None:
        """Drop all nodes, edges and any recorded order."""
        self._graph = nx.DiGraph()
        self._symbols = []
        self._order = None

    def get_nx_graph(self) -> DiGraph[str]:
        """Return a frozen copy of the underlying NetworkX graph."""
        return nx.freeze(self._graph.copy())  # type: ignore[no-any-return]

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def node_exists(self, symbol: str) -> bool:
        """Check if symbol is registered."""
        return self._graph.has_node(symbol)

    def index_of(self, symbol: str) -> int:
        """Insertion index of a registered symbol."""
        self._require_node(symbol)
        index: int = self._graph.nodes[symbol]["index"]
        return index

    def symbol_at(self, index: int) -> str:
        """Symbol registered at the given insertion index."""
        return self._symbols[index]

    def insert_node(self, symbol: str) -> None:
        """Append symbol as a new, unconnected node.

        Raises:
            DuplicateSymbolError: If symbol is already a node
            CapacityExceededError: If the graph is full
            GraphSealedError: If the graph has been sequenced
        """
        self._ensure_mutable()
        if self.node_exists(symbol):
            raise DuplicateSymbolError(f"symbol {symbol!r} is already registered")
        if self._max_symbols is not None and len(self._symbols) >= self._max_symbols:
            raise CapacityExceededError(symbol, self._max_symbols)
        self._graph.add_node(symbol, index=len(self._symbols))
        self._symbols.append(symbol)

    def insert_edge(self, source: str, target: str, weight: int = 1) -> None:
        """Record that source precedes target.

        Re-inserting an existing edge only overwrites its weight.
        """
        self._ensure_mutable()
        self._require_node(source)
        self._require_node(target)
        self._graph.add_edge(source, target, weight=weight)

    def erase_edge(self, source: str, target: str) -> int:
        """Remove the edge source -> target, returning its previous weight (0 if absent)."""
        self._ensure_mutable()
        self._require_node(source)
        self._require_node(target)
        if not self._graph.has_edge(source, target):
            return 0
        weight: int = self._graph.edges[source, target]["weight"]
        self._graph.remove_edge(source, target)
        return weight

    def has_edge(self, source: str, target: str) -> bool:
        """Check if the edge source -> target is present."""
        return self._graph.has_edge(source, target)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_neighbors(self, symbol: str) -> list[str]:
        """All direct successors of symbol, in node-index order."""
        self._require_node(symbol)
        return sorted(self._graph.successors(symbol), key=self._index)

    def edges(self) -> Iterator[tuple[str, str]]:
        """Iterate edges ordered by source index, then target index."""
        for source in self._symbols:
            for target in self.find_neighbors(source):
                yield source, target

    def reachable_set(self, symbol: str) -> frozenset[str]:
        """All symbols reachable from symbol via one or more edges."""
        self._require_node(symbol)
        return frozenset(_reachable(self._graph, symbol))

    def path_exists(self, source: str, target: str) -> bool:
        """Check if target is reachable from source via one or more edges."""
        self._require_node(target)
        return target in self.reachable_set(source)

    def in_degree(self, symbol: str) -> int:
        self._require_node(symbol)
        return int(self._graph.in_degree(symbol))

    def out_degree(self, symbol: str) -> int:
        self._require_node(symbol)
        return int(self._graph.out_degree(symbol))

    # ------------------------------------------------------------------
    # Transitive reduction
    # ------------------------------------------------------------------

    def eliminate_shortcuts(self, mode: ReductionMode = "progressive") -> int:
        """Remove edges whose endpoints stay connected through another path.

        Edges are visited by source index, then target index. Each one is
        tentatively erased and restored unless its target is still reachable
        from its source.

        In ``progressive`` mode reachability is evaluated against the graph as
        mutated so far. This is a direct, not necessarily minimum, reduction:
        when several equivalent redundant edges exist the outcome depends on
        visiting order. In ``canonical`` mode every candidacy test runs
        against a snapshot of the unreduced graph minus only the candidate
        edge, so the result does not depend on visiting order.

        Returns:
            Number of edges removed.
        """
        self._ensure_mutable()
        if mode not in ("progressive", "canonical"):
            raise ValueError(f"Unknown reduction mode '{mode}'")

        candidates = list(self.edges())
        snapshot = self._graph.copy() if mode == "canonical" else None
        removed = 0
        for source, target in candidates:
            weight = self.erase_edge(source, target)
            if snapshot is None:
                redundant = target in _reachable(self._graph, source)
            else:
                snapshot.remove_edge(source, target)
                redundant = target in _reachable(snapshot, source)
                snapshot.add_edge(source, target, weight=weight)
            if redundant:
                removed += 1
            else:
                self.insert_edge(source, target, weight)
        return removed

    # ------------------------------------------------------------------
    # Topological sequencing
    # ------------------------------------------------------------------

    def sort(self) -> tuple[int, ...]:
        """Validate the graph is a single simple chain and linearize it.

        Returns:
            Node indices from head to tail. The graph is sealed afterwards;
            calling sort() again returns the same order.

        Raises:
            InsufficientDataError: No symbols, several heads or tails,
                head cannot reach tail, or a symbol has several successors
            InconsistentDataError: No head or tail, or the walk revisits a
                symbol (a precedence cycle)
        """
        if self._order is not None:
            return self._order
        if not self._symbols:
            raise InsufficientDataError("not enough data to deduce the alphabet: no symbols observed")

        head = self._unique_endpoint(self.in_degree, "head")
        tail = self._unique_endpoint(self.out_degree, "tail")
        if head != tail and not self.path_exists(head, tail):
            raise InsufficientDataError(
                f"not enough data to deduce the alphabet: no path from {head!r} to {tail!r}"
            )

        order = [self._index(head)]
        visited = {head}
        current = head
        while current != tail:
            neighbors = self.find_neighbors(current)
            if not neighbors:
                break
            if len(neighbors) > 1:
                choices = ", ".join(repr(n) for n in neighbors)
                raise InsufficientDataError(
                    f"not enough data to deduce the alphabet: {current!r} may be followed by any of {choices}"
                )
            current = neighbors[0]
            if current in visited:
                raise InconsistentDataError(f"the data is inconsistent: {current!r} is part of a cycle")
            visited.add(current)
            order.append(self._index(current))

        # Every symbol off the chain has a predecessor and a successor among
        # the other off-chain symbols, so they must contain a cycle.
        if len(order) != len(self._symbols):
            stranded = ", ".join(repr(s) for s in self._symbols if s not in visited)
            raise InconsistentDataError(f"the data is inconsistent: {stranded} form a cycle outside the chain")

        self._order = tuple(order)
        return self._order

    def _unique_endpoint(self, degree: Callable[[str], int], role: str) -> str:
        candidates = [s for s in self._symbols if degree(s) == 0]
        if not candidates:
            raise InconsistentDataError(f"the data is inconsistent: no {role} symbol (precedence cycle)")
        if len(candidates) > 1:
            names = ", ".join(repr(c) for c in candidates)
            raise InsufficientDataError(f"not enough data to deduce the alphabet: ambiguous {role} among {names}")
        return candidates[0]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _index(self, symbol: str) -> int:
        index: int = self._graph.nodes[symbol]["index"]
        return index

    def _require_node(self, symbol: str) -> None:
        if not self._graph.has_node(symbol):
            raise UnknownSymbolError(symbol)

    def _ensure_mutable(self) -> None:
        if self._order is not None:
            raise GraphSealedError("graph has already been sequenced; call reset() before reusing it")
