"""Hypervolume indicator for Pareto frontier quality assessment.

The hypervolume of a solution set is the measure of objective space that is
dominated by at least one solution and dominates the reference point. It
rewards both convergence towards the optimal front and spread along it, and
it is the only parameter-free unary indicator that is Pareto compliant.

All computations use maximize-oriented coordinates (the normalized space),
so the reference point sits below every solution.

Algorithm:
    One recursive While-Fonseca-Gomes (WFG) computation serves every number
    of objectives. The volume of a set is the sum of exclusive volumes

        HV(S) = sum_i excl(p_i, {p_i+1, ..., p_n})
        excl(p, R) = box(p) - HV(nondominated(limit(R, p)))

    where ``limit(q, p) = min(q, p)`` pulls every later point into the box of
    ``p``. The recursion bottoms out at one objective (the largest coordinate)
    and at two objectives (a rectangle sweep after sorting on the first
    objective). Cost grows as O(N^(M-2) log N) for M objectives.

Example:
    >>> round(hypervolume(np.array([[0.8, 0.2], [0.5, 0.6]]), np.array([0.0, 0.0])), 6)
    0.36
"""

import math
import warnings
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

import numpy as np

from pareto_frontier import primitives
from pareto_frontier.candidate import Candidate, check_unique_ids, objective_matrix
from pareto_frontier.exceptions import DegenerateReferencePoint, EmptyPopulation, InvalidObjective

if TYPE_CHECKING:
    from pareto_frontier.frontier import Frontier

# =============================================================================
# Array level
# =============================================================================


def hypervolume(points: np.ndarray, reference: np.ndarray) -> float:
    """Compute the exact hypervolume of a point set (maximization).

    Any coordinate behind or on the reference point contributes nothing on
    that axis, so such points add no volume.

    Args:
        points: Objective values, shape (n, n_obj).
        reference: Reference point, shape (n_obj,).

    Returns:
        Hypervolume (0.0 for an empty set).

    Raises:
        ValueError: If shapes are inconsistent or values are not finite.

    Examples:
        >>> hypervolume(np.array([[1.0, 1.0]]), np.array([0.0, 0.0]))
        1.0
    """
    points, reference = _validate(points, reference)
    return _wfg(_prepare(points, reference), reference)


def exclusive_contributions(points: np.ndarray, reference: np.ndarray) -> np.ndarray:
    """Compute the hypervolume each point contributes exclusively.

    The contribution of point i equals ``HV(all) - HV(all without i)``,
    clamped at zero. Dominated and duplicated points contribute 0.

    Args:
        points: Objective values, shape (n, n_obj).
        reference: Reference point, shape (n_obj,).

    Returns:
        Array of shape (n,) with non-negative contributions.

    Raises:
        ValueError: If shapes are inconsistent or values are not finite.
    """
    points, reference = _validate(points, reference)
    n = points.shape[0]
    clipped = np.maximum(points, reference)
    has_volume = np.all(clipped > reference, axis=1)

    contributions = np.zeros(n, dtype=np.float64)
    for i in range(n):
        if not has_volume[i]:
            continue
        others = np.delete(clipped, i, axis=0)
        others = others[np.all(others > reference, axis=1)]
        contributions[i] = max(0.0, _exclusive(clipped[i], others, reference))
    return contributions


def _validate(points: np.ndarray, reference: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    points = np.asarray(points, dtype=np.float64)
    reference = np.asarray(reference, dtype=np.float64)

    if points.ndim != 2:
        raise ValueError(f"points must be 2D, got shape {points.shape}")
    if reference.ndim != 1:
        raise ValueError(f"reference must be 1D, got shape {reference.shape}")
    if points.shape[1] != reference.shape[0]:
        raise ValueError(
            f"points have {points.shape[1]} objectives, reference point has {reference.shape[0]}"
        )
    if not np.isfinite(points).all() or not np.isfinite(reference).all():
        raise ValueError("points and reference must contain finite numbers")

    return points, reference


def _prepare(points: np.ndarray, reference: np.ndarray) -> np.ndarray:
    # Clamp to the reference, then drop points without volume and dominated points
    clipped = np.maximum(points, reference)
    clipped = clipped[np.all(clipped > reference, axis=1)]
    return _nondominated(clipped)


def _nondominated(points: np.ndarray) -> np.ndarray:
    if points.shape[0] <= 1:
        return points
    points = np.unique(points, axis=0)
    dominated = np.any(primitives.dominates_matrix(points), axis=0)
    return points[~dominated]


def _wfg(points: np.ndarray, reference: np.ndarray) -> float:
    n, n_obj = points.shape

    if n == 0:
        return 0.0
    if n_obj == 1:
        return float(points[:, 0].max() - reference[0])
    if n_obj == 2:
        return _sweep_2d(points, reference)

    # Best-first on the last objective keeps the limited sets small
    order = np.argsort(-points[:, -1], kind="stable")
    points = points[order]

    total = 0.0
    for i in range(n):
        total += _exclusive(points[i], points[i + 1 :], reference)
    return total


def _exclusive(point: np.ndarray, others: np.ndarray, reference: np.ndarray) -> float:
    volume = float(np.prod(point - reference))
    if others.shape[0] == 0:
        return volume

    limited = np.minimum(others, point)
    limited = _nondominated(limited[np.all(limited > reference, axis=1)])
    return volume - _wfg(limited, reference)


def _sweep_2d(points: np.ndarray, reference: np.ndarray) -> float:
    # Descending on the first objective; each point adds the strip above the best
    # second-objective value seen so far
    order = np.lexsort((-points[:, 1], -points[:, 0]))
    ref_x, ref_y = reference

    volume = 0.0
    max_y = ref_y
    for x, y in points[order]:
        if y > max_y:
            volume += (x - ref_x) * (y - max_y)
            max_y = y
    return float(volume)


# =============================================================================
# Candidate level
# =============================================================================


def reference_vector(reference_point: Mapping[str, float], objectives: Sequence[str]) -> np.ndarray:
    """Order a reference point mapping as an array.

    Raises:
        InvalidObjective: If the reference point lacks an objective or a value
            is not a finite number.
    """
    missing = [name for name in objectives if name not in reference_point]
    if missing:
        raise InvalidObjective(f"reference point is missing objectives: {', '.join(missing)}")

    values = []
    for name in objectives:
        value = reference_point[name]
        if not isinstance(value, int | float) or not math.isfinite(value):
            raise InvalidObjective(f"reference value for {name!r} must be a finite number, got {value!r}")
        values.append(float(value))
    return np.array(values, dtype=np.float64)


def calculate(
    solutions: Sequence[Candidate],
    reference_point: Mapping[str, float],
    objectives: Sequence[str],
) -> float:
    """Calculate the hypervolume of a set of candidates.

    Args:
        solutions: Normalized candidates.
        reference_point: Reference value per objective (normalized space).
        objectives: Objective names defining the coordinate order.

    Returns:
        Hypervolume. An empty set gives 0.0 with an EmptyPopulation warning.

    Raises:
        InvalidObjective: If a candidate or the reference point lacks an objective.
    """
    reference = reference_vector(reference_point, objectives)
    if len(solutions) == 0:
        warnings.warn("hypervolume of an empty solution set", EmptyPopulation, stacklevel=2)
        return 0.0
    return hypervolume(objective_matrix(solutions, objectives), reference)


def contribution(
    solutions: Sequence[Candidate],
    reference_point: Mapping[str, float],
    objectives: Sequence[str],
) -> dict[str, float]:
    """Calculate the hypervolume lost if each solution were removed.

    Solutions with a low contribution are the natural eviction candidates
    when the frontier must shrink.

    Returns:
        Mapping from candidate id to ``calculate(all) - calculate(all without it)``,
        clamped at zero. Empty input gives ``{}``.

    Raises:
        DegenerateReferencePoint: If no solution dominates the reference point.
        InvalidObjective: If a candidate or the reference point lacks an objective.
        ValueError: If candidate ids are not unique.
    """
    if len(solutions) == 0:
        return {}

    check_unique_ids(solutions)
    reference = reference_vector(reference_point, objectives)
    matrix = objective_matrix(solutions, objectives)

    if not any(primitives.dominates(row, reference) for row in matrix):
        raise DegenerateReferencePoint(
            f"reference point {dict(reference_point)} is not dominated by any of {len(solutions)} solutions"
        )

    contributions = exclusive_contributions(matrix, reference)
    return {c.id: float(v) for c, v in zip(solutions, contributions, strict=True)}


def auto_reference_point(
    candidates: Sequence[Candidate],
    objectives: Sequence[str],
    margin: float = 0.1,
) -> dict[str, float]:
    """Derive a reference point below every candidate.

    Takes the worst normalized value per objective (the nadir) and subtracts
    ``margin``, clamped at zero.

    Args:
        candidates: Normalized candidates.
        objectives: Objective names.
        margin: Non-negative distance below the nadir.

    Returns:
        Reference value per objective. No candidates gives all zeros.

    Raises:
        ValueError: If margin is negative.
        InvalidObjective: If a candidate is not normalized over ``objectives``.
    """
    if margin < 0:
        raise ValueError(f"margin must be non-negative, got {margin}")
    if len(candidates) == 0:
        return {name: 0.0 for name in objectives}

    nadir = objective_matrix(candidates, objectives).min(axis=0)
    return {name: max(0.0, float(value) - margin) for name, value in zip(objectives, nadir, strict=True)}


def improvement(current: "Frontier", previous: "Frontier") -> tuple[float, float]:
    """Compare the hypervolume of two frontiers with the same configuration.

    Args:
        current: This generation's frontier.
        previous: The previous generation's frontier.

    Returns:
        Tuple of (ratio, current_volume) where ratio is ``current / previous``.
        The ratio is ``math.inf`` when only the previous volume is zero and 1.0
        when both are zero.

    Raises:
        ValueError: If the frontiers declare different objectives or reference points.
    """
    objectives = current.objectives
    if tuple(previous.objectives) != tuple(objectives):
        raise ValueError(f"frontiers have different objectives: {previous.objectives} vs {objectives}")
    if dict(previous.reference_point) != dict(current.reference_point):
        raise ValueError("frontiers have different reference points")

    current_hv = _volume(current.solutions, current.reference_point, objectives)
    previous_hv = _volume(previous.solutions, current.reference_point, objectives)

    if previous_hv > 0.0:
        ratio = current_hv / previous_hv
    elif current_hv > 0.0:
        ratio = math.inf
    else:
        ratio = 1.0
    return ratio, current_hv


def _volume(solutions: Sequence[Candidate], reference_point: Mapping[str, float], objectives: Sequence[str]) -> float:
    if len(solutions) == 0:
        return 0.0
    return calculate(solutions, reference_point, objectives)
