"""Plain-text dumps of complexes, matrices and balancing weightings."""
from __future__ import annotations

from typing import Iterable, List

import numpy as np


def _simplex_label(s) -> str:
    return "[" + ",".join(str(v) for v in s.vertices) + "]"


def format_complex(complex_) -> str:
    lines = [
        f"Complex: dimension {complex_.dimension}, "
        f"{complex_.n_facets} facets, {complex_.n_facettos} facettos"
        + (" (singular)" if complex_.is_singular else ""),
        "Facets:   " + " ".join(_simplex_label(f) for f in complex_.facets),
        "Facettos: " + " ".join(_simplex_label(t) for t in complex_.facettos),
    ]
    return "\n".join(lines)


def format_matrix(complex_) -> str:
    """Multiplicity matrix with facetto row labels and facet column labels."""
    M = np.asarray(complex_.multiplicity_matrix)
    row_labels = [_simplex_label(t) for t in complex_.facettos]
    col_labels = [_simplex_label(f) for f in complex_.facets]
    label_w = max((len(r) for r in row_labels), default=0)
    col_w = max([len(c) for c in col_labels] + [len(str(x)) for x in M.flat])

    out: List[str] = [" " * label_w + " " + " ".join(c.rjust(col_w) for c in col_labels)]
    for label, row in zip(row_labels, M):
        out.append(label.ljust(label_w) + " " + " ".join(str(int(x)).rjust(col_w) for x in row))
    return "\n".join(out)


def format_assignments(assignments: Iterable) -> str:
    """One weight vector per line, followed by a count."""
    rows = sorted(a.as_tuple() for a in assignments)
    lines = [" ".join(f"{w:>3d}" for w in row) for row in rows]
    lines.append(f"{len(rows)} balancing weightings")
    return "\n".join(lines)
