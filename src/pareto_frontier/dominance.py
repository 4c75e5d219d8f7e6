"""Dominance relationships and non-dominated sorting over candidates.

These functions lift the array primitives in ``pareto_frontier.primitives`` to
Candidate objects keyed by id. All comparisons use the normalized,
maximize-oriented vectors in the order given by ``objectives``.

Example:
    >>> fronts = fast_non_dominated_sort(population, ["accuracy", "latency"])
    >>> fronts[1]  # ids of the Pareto-optimal candidates
    ['a', 'c']
"""

import warnings
from collections.abc import Sequence
from typing import Literal

import numpy as np

from pareto_frontier import primitives
from pareto_frontier.candidate import Candidate, check_unique_ids, objective_matrix
from pareto_frontier.exceptions import EmptyPopulation

DominanceResult = Literal["dominates", "dominated_by", "non_dominated"]

Front = dict[int, list[str]]


def compare(a: Candidate, b: Candidate, objectives: Sequence[str]) -> DominanceResult:
    """Classify the dominance relationship between two candidates.

    Returns:
        "dominates" if a dominates b, "dominated_by" if b dominates a,
        "non_dominated" otherwise (including equal vectors).

    Raises:
        InvalidObjective: If either candidate is not normalized over ``objectives``.
    """
    va = a.vector(objectives)
    vb = b.vector(objectives)
    if primitives.dominates(va, vb):
        return "dominates"
    if primitives.dominates(vb, va):
        return "dominated_by"
    return "non_dominated"


def dominates(a: Candidate, b: Candidate, objectives: Sequence[str]) -> bool:
    """Return True iff candidate a Pareto-dominates candidate b."""
    return primitives.dominates(a.vector(objectives), b.vector(objectives))


def epsilon_dominates(a: Candidate, b: Candidate, objectives: Sequence[str], epsilon: float = 0.01) -> bool:
    """Return True iff candidate a epsilon-dominates candidate b."""
    return primitives.epsilon_dominates(a.vector(objectives), b.vector(objectives), epsilon)


def fast_non_dominated_sort(candidates: Sequence[Candidate], objectives: Sequence[str]) -> Front:
    """Classify candidates into Pareto fronts (NSGA-II).

    Args:
        candidates: Normalized candidates with unique ids.
        objectives: Objective names defining the comparison vectors.

    Returns:
        Mapping from rank (1 = non-dominated) to candidate ids, in input order
        within each rank. Empty input gives ``{}`` with an EmptyPopulation warning.

    Raises:
        InvalidObjective: If a candidate is not normalized over ``objectives``.
        ValueError: If candidate ids are not unique.
    """
    if len(candidates) == 0:
        warnings.warn("non-dominated sort of an empty population", EmptyPopulation, stacklevel=2)
        return {}

    check_unique_ids(candidates)
    ranks = primitives.non_dominated_sort(objective_matrix(candidates, objectives))

    fronts: Front = {}
    for c, r in zip(candidates, ranks, strict=True):
        fronts.setdefault(int(r), []).append(c.id)
    return dict(sorted(fronts.items()))


def crowding_distance(candidates: Sequence[Candidate], objectives: Sequence[str]) -> dict[str, float]:
    """Compute crowding distance for the members of one front.

    Returns:
        Mapping from candidate id to distance; ``math.inf`` marks boundary points.
    """
    if len(candidates) == 0:
        return {}
    check_unique_ids(candidates)
    distances = primitives.crowding_distance(objective_matrix(candidates, objectives))
    return {c.id: float(d) for c, d in zip(candidates, distances, strict=True)}


def assign_ranks(candidates: Sequence[Candidate], objectives: Sequence[str]) -> list[Candidate]:
    """Recompute rank, crowding distance and dominance sets for a population.

    Crowding distance is computed within each front. The returned candidates
    are new objects; the inputs are left untouched.

    Args:
        candidates: Normalized candidates with unique ids.
        objectives: Objective names defining the comparison vectors.

    Returns:
        Ranked candidates in input order.

    Raises:
        InvalidObjective: If a candidate is not normalized over ``objectives``.
        ValueError: If candidate ids are not unique.
    """
    if len(candidates) == 0:
        return []

    check_unique_ids(candidates)
    matrix = objective_matrix(candidates, objectives)
    dom = primitives.dominates_matrix(matrix)
    ranks = primitives.non_dominated_sort(matrix)

    distances = np.zeros(len(candidates), dtype=np.float64)
    for r in np.unique(ranks):
        mask = ranks == r
        distances[mask] = primitives.crowding_distance(matrix[mask])

    ids = [c.id for c in candidates]
    ranked = []
    for i, c in enumerate(candidates):
        ranked.append(
            c.with_ranking(
                rank=int(ranks[i]),
                crowding_distance=float(distances[i]),
                dominates=frozenset(ids[j] for j in np.flatnonzero(dom[i])),
                dominated_by=frozenset(ids[j] for j in np.flatnonzero(dom[:, i])),
            )
        )
    return ranked
