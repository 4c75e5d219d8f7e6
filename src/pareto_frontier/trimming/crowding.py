"""Crowding-distance trim strategy.

This is the default way an oversized frontier is shrunk. It mirrors the
critical-front truncation of NSGA-II survival: crowding distance is computed
over every current solution and the most isolated ones are kept.
"""

import numpy as np

from pareto_frontier.primitives import crowding_distance


def crowding_trim():
    """Create a crowding-distance trim strategy.

    Solutions are ordered with boundary points (infinite crowding distance)
    first, then by descending finite distance, with ties broken by frontier
    position. The first ``n_keep`` are retained, so a boundary point is never
    evicted while a finite-distance point remains.

    Returns:
        A TrimStrategy callable.

    Example:
        >>> strategy = crowding_trim()
        >>> objs = np.array([[0.0, 1.0], [0.2, 0.9], [0.5, 0.5], [1.0, 0.0]])
        >>> sorted(strategy(objs, n_keep=3).tolist())
        [0, 2, 3]
    """

    def strategy(
        objectives: np.ndarray,
        n_keep: int,
        **kwargs: np.ndarray,
    ) -> np.ndarray:
        """Select survivors by crowding distance.

        Args:
            objectives: Normalized objective values, shape (n, n_obj).
            n_keep: Number of solutions to retain.
            **kwargs: Unused. Crowding distance is computed internally.

        Returns:
            Array of shape (n_keep,) with the retained indices, most preferred first.

        Raises:
            ValueError: If n_keep is not positive or exceeds the number of solutions.
        """
        n = objectives.shape[0]
        if n_keep <= 0:
            raise ValueError(f"n_keep must be positive, got {n_keep}")
        if n_keep > n:
            raise ValueError(f"n_keep ({n_keep}) cannot exceed number of solutions ({n})")

        cd = crowding_distance(objectives)
        is_boundary = np.isinf(cd)
        finite = np.where(is_boundary, 0.0, cd)

        # lexsort uses the last key as primary: boundary first, then distance desc, then position
        order = np.lexsort((np.arange(n), -finite, ~is_boundary))
        return order[:n_keep].astype(np.intp)

    return strategy
