"""Exact enumeration of balancing weightings within a weight limit.

Two searches with identical output: every fully defined weighting with
weights in [-L, L] for which M @ w = 0.

1. Exhaustive: walks the full product [-L, L]^n_facets. Exponential, kept
   as a correctness baseline for small complexes.
2. Sudoku: depth-first backtracking over facets in a fixed ordering. After
   each assignment, every balancing row that just became fully determined is
   checked, so illegal subtrees are cut at their root.

The sudoku search can optionally propagate forced weights: a row with a
single undefined facet determines that facet's weight.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from itertools import product
from typing import Iterable, Iterator, List, Optional, Sequence, Set, Union

import networkx as nx
import numpy as np

from balancing.errors import InvalidInputError
from balancing.search.assignment import WeightAssignment
from balancing.topology.complexes import Complex

logger = logging.getLogger(__name__)

Ordering = Union[str, Sequence[int]]


@dataclass
class SearchConfig:
    """Configuration for a balancing search."""

    weight_limit: int = 1
    method: str = "sudoku"
    ordering: Ordering = "natural"
    propagate_forced: bool = False  # only used by the sudoku search


@dataclass
class SearchStats:
    """Counters from one sudoku search run."""

    nodes: int = 0
    pruned: int = 0
    forced: int = 0
    solutions: int = 0


def _validate_limit(weight_limit) -> int:
    if isinstance(weight_limit, bool) or not isinstance(weight_limit, (int, np.integer)):
        raise InvalidInputError(f"weight_limit must be an integer, got {weight_limit!r}")
    if weight_limit < 0:
        raise InvalidInputError(f"weight_limit must be non-negative, got {weight_limit}")
    return int(weight_limit)


def _bfs_facet_order(G: nx.Graph, n: int) -> List[int]:
    """BFS facet ordering for good constraint propagation."""
    visited = set()
    order: List[int] = []
    for root in range(n):
        if root in visited:
            continue
        visited.add(root)
        queue = deque([root])
        while queue:
            v = queue.popleft()
            order.append(v)
            for u in sorted(G.neighbors(v)):
                if u not in visited:
                    visited.add(u)
                    queue.append(u)
    return order


def facet_order(complex_: Complex, ordering: Ordering = "natural") -> List[int]:
    """Resolve an ordering name or sequence into a permutation of facet columns.

    'natural' keeps input order. 'bfs' walks the facet graph breadth-first
    from the lowest unvisited facet of each component, so facets sharing
    facettos are assigned close together.
    """
    n = complex_.n_facets
    if isinstance(ordering, str):
        if ordering == "natural":
            return list(range(n))
        if ordering == "bfs":
            return _bfs_facet_order(complex_.facet_graph(), n)
        raise InvalidInputError(
            f"Unknown ordering '{ordering}'. Available: bfs, natural"
        )

    order = [int(j) for j in ordering]
    if sorted(order) != list(range(n)):
        raise InvalidInputError(
            f"Ordering must be a permutation of range({n}), got {order}"
        )
    return order


# ── Exhaustive product search ──────────────────────────────────────────

def exhaustive_search(
    complex_: Complex,
    weight_limit: int,
) -> Iterator[WeightAssignment]:
    """Yield every balancing weighting by scanning [-L, L]^n_facets.

    Parameters are validated when the generator is created, before any
    candidate is examined.
    """
    L = _validate_limit(weight_limit)
    complex_.ensure_no_overflow(L)
    return _exhaustive(complex_, L)


def _exhaustive(complex_: Complex, L: int) -> Iterator[WeightAssignment]:
    M = complex_.multiplicity_matrix
    n = complex_.n_facets
    values = range(-L, L + 1)
    logger.info(
        f"Exhaustive search: {n} facets, L={L}, {(2 * L + 1) ** n} candidates"
    )

    found = 0
    for combo in product(values, repeat=n):
        w = np.array(combo, dtype=np.int64)
        if not np.any(M @ w):
            found += 1
            yield WeightAssignment(complex_, combo)

    logger.info(f"Exhaustive search done: {found} balancing weightings")


# ── Forced-weight propagation ──────────────────────────────────────────

def propagate_forced_weights(
    assignment: WeightAssignment,
    weight_limit: int,
) -> Optional[List[int]]:
    """Infer weights that are uniquely determined, repeated to a fixed point.

    A facetto row with exactly one undefined contributing facet forces that
    facet to -partial / coefficient. The branch is infeasible when the forced
    value is not an integer, lies outside [-L, L], or breaks another
    determined row.

    Mutates ``assignment`` in place. Returns the columns that were filled,
    or None if the branch is infeasible (in which case every write made here
    has been undone).
    """
    L = _validate_limit(weight_limit)
    complex_ = assignment.complex
    filled: List[int] = []

    def _undo():
        for j in filled:
            assignment.clear_weight(j)
        return None

    changed = True
    while changed:
        changed = False
        for row in range(complex_.n_facettos):
            cols, coeffs = complex_.row_support(row)
            partial = 0
            missing = None
            n_missing = 0
            for c, m in zip(cols, coeffs):
                w = assignment[int(c)]
                if w is None:
                    n_missing += 1
                    missing = (int(c), int(m))
                    if n_missing > 1:
                        break
                else:
                    partial += int(m) * w
            if n_missing != 1:
                continue

            col, coeff = missing
            if partial % coeff != 0:
                return _undo()
            value = -partial // coeff
            if abs(value) > L:
                return _undo()
            assignment.set_weight(col, value)
            filled.append(col)
            if not assignment.is_balanced_at(col):
                return _undo()
            changed = True
    return filled


# ── Sudoku backtracking search ─────────────────────────────────────────

def sudoku_search(
    complex_: Complex,
    weight_limit: int,
    ordering: Ordering = "natural",
    propagate_forced: bool = False,
    stats: Optional[SearchStats] = None,
) -> Iterator[WeightAssignment]:
    """Yield every balancing weighting by pruned depth-first search.

    Facets are assigned one per level, always the first undefined facet in
    ``ordering``. Candidate values run from -L to L; a branch is discarded
    as soon as ``is_balanced_at`` fails for the facet just assigned.

    A single slot arena is mutated with explicit undo on backtrack; yielded
    assignments are independent copies.

    Args:
        complex_: The complex to weight.
        weight_limit: Non-negative bound L.
        ordering: 'natural', 'bfs', or an explicit permutation of columns.
        propagate_forced: Fill uniquely determined weights after each step.
        stats: Optional counters filled in during the run.
    """
    L = _validate_limit(weight_limit)
    complex_.ensure_no_overflow(L)
    order = facet_order(complex_, ordering)
    if stats is None:
        stats = SearchStats()
    return _sudoku(complex_, L, order, propagate_forced, stats)


def _sudoku(
    complex_: Complex,
    L: int,
    order: List[int],
    propagate_forced: bool,
    stats: SearchStats,
) -> Iterator[WeightAssignment]:
    logger.info(
        f"Sudoku search: {complex_.n_facets} facets, L={L}, "
        f"propagate_forced={propagate_forced}"
    )
    assignment = WeightAssignment(complex_)
    values = range(-L, L + 1)

    if propagate_forced:
        forced = propagate_forced_weights(assignment, L)
        if forced is None:
            logger.info("Sudoku search done: root is infeasible")
            return
        stats.forced += len(forced)

    def _backtrack(start: int) -> Iterator[WeightAssignment]:
        stats.nodes += 1
        pos = start
        while pos < len(order) and assignment[order[pos]] is not None:
            pos += 1

        if pos == len(order):
            if assignment.is_balanced():
                stats.solutions += 1
                yield assignment.copy()
            return

        j = order[pos]
        for value in values:
            assignment.set_weight(j, value)
            if not assignment.is_balanced_at(j):
                stats.pruned += 1
                continue
            if propagate_forced:
                forced = propagate_forced_weights(assignment, L)
                if forced is None:
                    stats.pruned += 1
                    continue
                stats.forced += len(forced)
                yield from _backtrack(pos + 1)
                for k in forced:
                    assignment.clear_weight(k)
            else:
                yield from _backtrack(pos + 1)
        assignment.clear_weight(j)

    yield from _backtrack(0)
    logger.info(
        f"Sudoku search done: {stats.solutions} balancing weightings, "
        f"{stats.nodes} nodes, {stats.pruned} pruned"
    )


# ── Dispatch ───────────────────────────────────────────────────────────

def _run_exhaustive(complex_: Complex, config: SearchConfig) -> Iterator[WeightAssignment]:
    return exhaustive_search(complex_, config.weight_limit)


def _run_sudoku(complex_: Complex, config: SearchConfig) -> Iterator[WeightAssignment]:
    return sudoku_search(
        complex_,
        config.weight_limit,
        ordering=config.ordering,
        propagate_forced=config.propagate_forced,
    )


SEARCH_METHODS = {
    'exhaustive': _run_exhaustive,
    'sudoku': _run_sudoku,
}


def enumerate_balancings(
    complex_: Complex,
    config: Optional[SearchConfig] = None,
) -> Iterator[WeightAssignment]:
    """Run the search method named in ``config``.

    Raises:
        KeyError: If the method name is not in SEARCH_METHODS.
    """
    if config is None:
        config = SearchConfig()
    if config.method not in SEARCH_METHODS:
        available = ', '.join(sorted(SEARCH_METHODS.keys()))
        raise KeyError(
            f"Unknown search method '{config.method}'. Available: {available}"
        )
    return SEARCH_METHODS[config.method](complex_, config)


def weight_vectors(assignments: Iterable[WeightAssignment]) -> Set[tuple]:
    """Collect weight tuples for order-independent comparison."""
    return {a.as_tuple() for a in assignments}
