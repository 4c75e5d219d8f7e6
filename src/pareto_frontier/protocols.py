"""Protocol definition for frontier trim strategies.

When a frontier grows past its size bound, a trim strategy decides which
members survive. Strategies work on the normalized objective array of the
current solutions and return the indices to keep, so the frontier store can
swap strategies without changing its own bookkeeping.

Example usage:
    ```python
    def shrink(frontier: Frontier, strategy: TrimStrategy) -> list[Candidate]:
        objectives = objective_matrix(frontier.solutions, frontier.objectives)
        kept = strategy(objectives, n_keep=50, reference_point=reference)
        return [frontier.solutions[i] for i in kept]
    ```
"""

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class TrimStrategy(Protocol):
    """Protocol for frontier trim strategies.

    A trim strategy is called with the maximize-oriented objectives of the
    current solutions, the number of solutions to keep, and optional keyword
    arguments with strategy-specific data.

    Parameters:
        objectives: Normalized objective values of the current solutions.
            Shape (n, n_obj); every row is non-dominated by the others.
        n_keep: Number of solutions to retain, 0 < n_keep <= n.
        **kwargs: Strategy-specific data. The frontier store always passes
            ``reference_point`` (shape (n_obj,)).

    Returns:
        Array of shape (n_keep,) with unique indices of the retained
        solutions. Order is not significant; the store keeps survivors in
        their frontier order.

    Example implementations:
        - Crowding: keep boundary points, then the most isolated ones
        - Hypervolume: repeatedly drop the smallest exclusive contributor

    Example:
        ```python
        def first_n(objectives: np.ndarray, n_keep: int, **kwargs) -> np.ndarray:
            return np.arange(n_keep, dtype=np.intp)
        ```
    """

    def __call__(
        self,
        objectives: np.ndarray,
        n_keep: int,
        **kwargs: np.ndarray,
    ) -> np.ndarray:
        """Select the indices of the solutions to keep.

        Args:
            objectives: Normalized objective values, shape (n, n_obj).
            n_keep: Number of solutions to retain.
            **kwargs: Strategy-specific data (e.g., reference_point).

        Returns:
            Array of shape (n_keep,) containing indices of retained solutions.
        """
        ...
