"""Hypervolume-contribution trim strategy."""

import numpy as np

from pareto_frontier.hypervolume import exclusive_contributions
from pareto_frontier.primitives import crowding_distance


def hypervolume_trim():
    """Create a hypervolume-contribution trim strategy.

    Evicts one solution at a time, always the one whose removal loses the
    least hypervolume, recomputing contributions after each eviction. Ties on
    contribution evict the lower crowding distance first, then the later
    frontier position. The result keeps as much of the dominated volume as a
    greedy strategy can.

    Returns:
        A TrimStrategy callable that requires a ``reference_point`` kwarg.

    Example:
        >>> strategy = hypervolume_trim()
        >>> objs = np.array([[0.1, 1.0], [0.5, 0.5], [0.52, 0.48], [1.0, 0.1]])
        >>> sorted(strategy(objs, n_keep=3, reference_point=np.zeros(2)).tolist())
        [0, 1, 3]
    """

    def strategy(
        objectives: np.ndarray,
        n_keep: int,
        **kwargs: np.ndarray,
    ) -> np.ndarray:
        """Select survivors by greedy hypervolume contribution.

        Args:
            objectives: Normalized objective values, shape (n, n_obj).
            n_keep: Number of solutions to retain.
            **kwargs: Must include 'reference_point', shape (n_obj,).

        Returns:
            Array of shape (n_keep,) with the retained indices in frontier order.

        Raises:
            ValueError: If 'reference_point' is missing, or n_keep is not positive
                or exceeds the number of solutions.
        """
        if "reference_point" not in kwargs:
            raise ValueError("hypervolume trim requires 'reference_point' in kwargs")

        n = objectives.shape[0]
        if n_keep <= 0:
            raise ValueError(f"n_keep must be positive, got {n_keep}")
        if n_keep > n:
            raise ValueError(f"n_keep ({n_keep}) cannot exceed number of solutions ({n})")

        reference = np.asarray(kwargs["reference_point"], dtype=np.float64)
        kept = np.arange(n, dtype=np.intp)

        while len(kept) > n_keep:
            subset = objectives[kept]
            contrib = exclusive_contributions(subset, reference)
            cd = crowding_distance(subset)
            # Primary key last: smallest contribution, then smallest crowding, then latest position
            victim = np.lexsort((-np.arange(len(kept)), cd, contrib))[0]
            kept = np.delete(kept, victim)

        return kept

    return strategy
