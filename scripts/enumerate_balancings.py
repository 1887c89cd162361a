#!/usr/bin/env python3
"""Enumerate balancing weightings of a complete or named complex.

Prints the facets, facettos, multiplicity matrix and every balancing
weight vector with entries in [-L, L].

Usage:
    python -m scripts.enumerate_balancings --n 4 --d 1 --limit 1
    python -m scripts.enumerate_balancings --complex singular_pair --limit 2 --method exhaustive
"""
from __future__ import annotations

import argparse
import logging
import time

from balancing.io.report import format_assignments, format_complex, format_matrix
from balancing.search.enumeration import SEARCH_METHODS, SearchConfig, enumerate_balancings
from balancing.topology.complexes import build_complete_complex
from balancing.topology.registry import get_complex, list_complexes
from balancing.topology.symbols import balancing_equations

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Enumerate balancing weightings")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--complex", choices=list_complexes(),
                        help="Named example complex")
    source.add_argument("--n", type=int, default=4,
                        help="Number of vertices of the complete complex")
    parser.add_argument("--d", type=int, default=1,
                        help="Facet dimension of the complete complex")
    parser.add_argument("--singular", action="store_true",
                        help="Allow repeated vertices in facets")
    parser.add_argument("--limit", type=int, default=1,
                        help="Weight limit L (weights in [-L, L])")
    parser.add_argument("--method", default="sudoku", choices=sorted(SEARCH_METHODS))
    parser.add_argument("--ordering", default="natural", choices=["natural", "bfs"])
    parser.add_argument("--propagate", action="store_true",
                        help="Propagate uniquely forced weights during the sudoku search")
    parser.add_argument("--equations", action="store_true",
                        help="Print the symbolic balancing equations")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.complex:
        complex_ = get_complex(args.complex)
    else:
        complex_ = build_complete_complex(args.n, args.d, singular=args.singular)

    print(format_complex(complex_))
    print()
    print(format_matrix(complex_))
    if args.equations:
        print()
        for facetto, eq in zip(complex_.facettos, balancing_equations(complex_)):
            print(f"{list(facetto.vertices)}: {eq} = 0")
    print()

    config = SearchConfig(
        weight_limit=args.limit,
        method=args.method,
        ordering=args.ordering,
        propagate_forced=args.propagate,
    )
    t0 = time.time()
    results = list(enumerate_balancings(complex_, config))
    elapsed = time.time() - t0

    print(format_assignments(results))
    logger.info(f"{args.method} search finished in {elapsed:.3f}s")


if __name__ == "__main__":
    main()
