"""Registry of named example complexes.

Provides a single lookup point for the small complete complexes used in
tests and by the scripts.
"""
from .complexes import build_complete_complex

COMPLEX_REGISTRY = {
    'triangle': (3, 1, False),
    'k4_edges': (4, 1, False),
    'tetrahedron_boundary': (4, 2, False),
    'singular_pair': (2, 1, True),
}


def get_complex(name: str):
    """Build a named example complex.

    Args:
        name: Complex name (e.g., 'triangle', 'k4_edges').

    Returns:
        The corresponding Complex.

    Raises:
        KeyError: If the name is not in the registry.
    """
    if name not in COMPLEX_REGISTRY:
        available = ', '.join(sorted(COMPLEX_REGISTRY.keys()))
        raise KeyError(
            f"Unknown complex '{name}'. Available: {available}"
        )
    n, d, singular = COMPLEX_REGISTRY[name]
    return build_complete_complex(n, d, singular=singular)


def list_complexes():
    """Return sorted list of available complex names."""
    return sorted(COMPLEX_REGISTRY.keys())
