"""NSGA-II primitives for Pareto-based ranking and diversity.

All functions work on maximize-oriented objective arrays (the normalized
space produced by ``pareto_frontier.normalization``), where larger values are
better on every axis.

This module provides the core pure functions:
- dominates: scalar Pareto dominance check
- epsilon_dominates: dominance relaxed by a tolerance for noisy measurements
- dominates_matrix: vectorized pairwise dominance
- non_dominated_sort: Deb's fast non-dominated sorting algorithm
- crowding_distance: diversity metric for solutions in a Pareto front
"""

import numpy as np


def dominates(a: np.ndarray, b: np.ndarray) -> bool:
    """Check if solution a Pareto-dominates solution b (maximization).

    A solution a dominates b if and only if:
      - a[i] >= b[i] for ALL objectives (a is at least as good everywhere)
      - a[i] > b[i] for AT LEAST ONE objective (a is strictly better somewhere)

    Args:
        a: Objective values for solution a. Shape (n_obj,).
        b: Objective values for solution b. Shape (n_obj,).

    Returns:
        True if a dominates b, False otherwise.

    Examples:
        >>> dominates(np.array([2.0, 3.0]), np.array([1.0, 2.0]))
        True
        >>> dominates(np.array([1.0, 3.0]), np.array([2.0, 2.0]))
        False
    """
    return bool(np.all(a >= b) and np.any(a > b))


def epsilon_dominates(a: np.ndarray, b: np.ndarray, epsilon: float = 0.01) -> bool:
    """Check if solution a epsilon-dominates solution b (maximization).

    A solution a epsilon-dominates b if and only if:
      - a[i] >= b[i] - epsilon for ALL objectives
      - a[i] > b[i] + epsilon for AT LEAST ONE objective

    Args:
        a: Objective values for solution a. Shape (n_obj,).
        b: Objective values for solution b. Shape (n_obj,).
        epsilon: Non-negative tolerance.

    Returns:
        True if a epsilon-dominates b, False otherwise.

    Raises:
        ValueError: If epsilon is negative.

    Examples:
        >>> epsilon_dominates(np.array([0.50, 0.80]), np.array([0.49, 0.60]), epsilon=0.05)
        True
        >>> epsilon_dominates(np.array([0.50, 0.62]), np.array([0.49, 0.60]), epsilon=0.05)
        False
    """
    if epsilon < 0:
        raise ValueError(f"epsilon must be non-negative, got {epsilon}")
    return bool(np.all(a >= b - epsilon) and np.any(a > b + epsilon))


def dominates_matrix(objectives: np.ndarray) -> np.ndarray:
    """Compute pairwise dominance for all individuals (vectorized).

    Uses broadcasting to compute whether individual i dominates individual j
    for all pairs (i, j).

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).

    Returns:
        Boolean array of shape (n, n) where result[i, j] = True iff
        individual i dominates individual j.

    Examples:
        >>> objs = np.array([[2.0, 2.0], [1.0, 1.0], [2.0, 1.0]])
        >>> dom = dominates_matrix(objs)
        >>> dom[0, 1]  # Does [2,2] dominate [1,1]?
        True
        >>> dom[0, 2]  # Does [2,2] dominate [2,1]?
        True
    """
    # Reshape for broadcasting: (n, 1, n_obj) vs (1, n, n_obj)
    a = objectives[:, np.newaxis, :]
    b = objectives[np.newaxis, :, :]

    all_geq = np.all(a >= b, axis=2)
    any_gt = np.any(a > b, axis=2)

    return all_geq & any_gt


def non_dominated_sort(objectives: np.ndarray) -> np.ndarray:
    """Assign each individual to a Pareto front using Deb's fast algorithm.

    For every ordered pair the dominance test accumulates each individual's
    domination count (how many dominate it) and dominated set (whom it
    dominates). Front 1 is every individual with a count of zero; each later
    front is built by decrementing the counts of everything the current front
    dominates and collecting those that reach zero.
    Time complexity: O(M * N^2) where M = number of objectives, N = population size.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).

    Returns:
        Integer array of shape (n,) where rank[i] is the front number for
        individual i. Rank 1 = Pareto optimal (first front), rank 2 = second
        front, etc.

    Raises:
        ValueError: If objectives is not 2D.

    Examples:
        >>> objs = np.array([[3.0, 3.0], [2.0, 2.0], [1.0, 1.0]])
        >>> non_dominated_sort(objs)
        array([1, 2, 3])
    """
    if objectives.ndim != 2:
        raise ValueError(f"objectives must be 2D, got shape {objectives.shape}")

    n = objectives.shape[0]
    ranks = np.zeros(n, dtype=np.int64)

    if n == 0:
        return ranks

    dom_matrix = dominates_matrix(objectives)

    # domination_count[i] = number of individuals that dominate i
    domination_count = dom_matrix.sum(axis=0).astype(np.int64)
    dominated_sets = [np.flatnonzero(dom_matrix[i]) for i in range(n)]

    current_rank = 1
    front = np.flatnonzero(domination_count == 0)

    while len(front) > 0:
        ranks[front] = current_rank
        next_front: list[int] = []

        for p in front:
            for q in dominated_sets[p]:
                domination_count[q] -= 1
                if domination_count[q] == 0:
                    next_front.append(int(q))

        front = np.array(next_front, dtype=np.intp)
        current_rank += 1

    return ranks


def crowding_distance(front_objectives: np.ndarray) -> np.ndarray:
    """Compute crowding distance for individuals in a single Pareto front.

    Crowding distance measures how isolated a solution is in objective space.
    Higher values indicate more isolated solutions (preferred for diversity).

    Boundary solutions (with min/max values for any objective that varies
    across the front) receive infinite distance. Interior solutions receive
    the sum of normalized neighbor distances across all objectives. An
    objective that is constant across the front contributes nothing.

    Args:
        front_objectives: Objective values for individuals in ONE front only.
            Shape (n_front, n_obj).

    Returns:
        Array of shape (n_front,) containing crowding distances.

    Examples:
        >>> objs = np.array([[1.0, 4.0], [2.0, 3.0], [3.0, 2.0], [4.0, 1.0]])
        >>> cd = crowding_distance(objs)
        >>> np.isinf(cd[0]) and np.isinf(cd[-1])  # Boundary points
        True
    """
    n_front = front_objectives.shape[0]

    if n_front == 0:
        return np.array([], dtype=np.float64)

    if n_front <= 2:
        # One or two individuals are all boundary points
        return np.full(n_front, np.inf)

    n_obj = front_objectives.shape[1]
    distances = np.zeros(n_front, dtype=np.float64)

    for m in range(n_obj):
        # Stable sort keeps tie order deterministic
        sorted_indices = np.argsort(front_objectives[:, m], kind="stable")

        obj_min = front_objectives[sorted_indices[0], m]
        obj_max = front_objectives[sorted_indices[-1], m]
        obj_range = obj_max - obj_min

        if obj_range <= 0:
            continue

        distances[sorted_indices[0]] = np.inf
        distances[sorted_indices[-1]] = np.inf

        for i in range(1, n_front - 1):
            prev_idx = sorted_indices[i - 1]
            curr_idx = sorted_indices[i]
            next_idx = sorted_indices[i + 1]

            neighbor_dist = front_objectives[next_idx, m] - front_objectives[prev_idx, m]
            distances[curr_idx] += neighbor_dist / obj_range

    return distances
