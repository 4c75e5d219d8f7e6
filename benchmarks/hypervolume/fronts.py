"""Synthetic Pareto fronts for hypervolume benchmarking.

Every generator returns mutually non-dominated points in the normalized,
maximize-oriented unit cube, which is the shape of a live frontier after
normalization. Front shapes follow the DTLZ families:
- linear: points on the simplex sum(f) = 1 (DTLZ1-like)
- concave: points on the unit sphere (DTLZ2-like)
- convex: the concave front mirrored through the cube centre

References:
    Deb, K., Thiele, L., Laumanns, M., & Zitzler, E. (2005). Scalable test
    problems for evolutionary multiobjective optimization. Evolutionary
    Multiobjective Optimization, 105-145.
"""

from collections.abc import Callable

import numpy as np


def linear_front(n_points: int, n_obj: int, rng: np.random.Generator) -> np.ndarray:
    """Uniform points on the simplex.

    Returns:
        Objectives (n_points, n_obj), each row summing to 1.
    """
    return rng.dirichlet(np.ones(n_obj), size=n_points)


def concave_front(n_points: int, n_obj: int, rng: np.random.Generator) -> np.ndarray:
    """Points on the positive orthant of the unit sphere.

    Returns:
        Objectives (n_points, n_obj) with unit Euclidean norm.
    """
    directions = np.abs(rng.normal(size=(n_points, n_obj)))
    return directions / np.linalg.norm(directions, axis=1, keepdims=True)


def convex_front(n_points: int, n_obj: int, rng: np.random.Generator) -> np.ndarray:
    """Concave front reflected so that it bulges towards the origin.

    Returns:
        Objectives (n_points, n_obj) in [0, 1].
    """
    return 1.0 - concave_front(n_points, n_obj, rng)


# Registry of all fronts
FRONTS: dict[str, Callable[[int, int, np.random.Generator], np.ndarray]] = {
    "linear": linear_front,
    "concave": concave_front,
    "convex": convex_front,
}
