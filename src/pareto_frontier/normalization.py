"""Objective normalization for multi-objective comparison.

Raw measurements (accuracy, latency in seconds, cost in dollars, ...) live on
incomparable scales and point in different directions. This module rescales
them to [0, 1] with min-max statistics and inverts minimization objectives so
that every normalized objective is maximize-oriented.

Example:
    >>> raw = [{"accuracy": 0.9, "latency": 1.5}, {"accuracy": 0.7, "latency": 3.0}]
    >>> stats = population_stats(raw)
    >>> normalize(raw[0], stats, {"accuracy": "maximize", "latency": "minimize"})
    {'accuracy': 1.0, 'latency': 1.0}
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Literal

from pareto_frontier.candidate import Candidate
from pareto_frontier.exceptions import InvalidObjective

Direction = Literal["maximize", "minimize"]

DIRECTIONS: tuple[str, ...] = ("maximize", "minimize")

STANDARD_OBJECTIVES: tuple[str, ...] = ("accuracy", "latency", "cost", "robustness")

DEFAULT_DIRECTIONS: dict[str, Direction] = {
    "accuracy": "maximize",
    "latency": "minimize",
    "cost": "minimize",
    "robustness": "maximize",
}

DEFAULT_WEIGHTS: dict[str, float] = {
    "accuracy": 0.5,
    "latency": 0.2,
    "cost": 0.2,
    "robustness": 0.1,
}


@dataclass(frozen=True)
class ObjectiveStats:
    """Observed range of one objective across a population."""

    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")


def validate_directions(directions: Mapping[str, str], objectives: Sequence[str]) -> None:
    """Check that every objective has a known direction.

    Raises:
        InvalidObjective: If an objective has no direction or an unknown one.
    """
    missing = [name for name in objectives if name not in directions]
    if missing:
        raise InvalidObjective(f"no direction declared for objectives: {', '.join(missing)}")
    invalid = {name: d for name, d in directions.items() if d not in DIRECTIONS}
    if invalid:
        raise InvalidObjective(f"directions must be 'maximize' or 'minimize', got {invalid}")


def population_stats(vectors: Iterable[Mapping[str, float]]) -> dict[str, ObjectiveStats]:
    """Compute per-objective min/max over a population of raw vectors.

    Objectives absent from some vectors are computed over the vectors that
    carry them.

    Args:
        vectors: Raw objective vectors, e.g. ``[c.objectives for c in candidates]``.

    Returns:
        Mapping from objective name to its observed range. Empty input gives ``{}``.

    Raises:
        InvalidObjective: If a value is not a finite number.
    """
    lows: dict[str, float] = {}
    highs: dict[str, float] = {}

    for vector in vectors:
        for name, value in vector.items():
            value = _finite(name, value)
            if name not in lows:
                lows[name] = highs[name] = value
            else:
                lows[name] = min(lows[name], value)
                highs[name] = max(highs[name], value)

    return {name: ObjectiveStats(min=lows[name], max=highs[name]) for name in lows}


def normalize(
    raw: Mapping[str, float],
    stats: Mapping[str, ObjectiveStats],
    directions: Mapping[str, str],
    objectives: Sequence[str] | None = None,
) -> dict[str, float]:
    """Rescale a raw objective vector to maximize-oriented [0, 1].

    Each objective is mapped with ``(value - min) / (max - min)``; when
    ``max == min`` the result is exactly 0.5. Values outside ``[min, max]``
    are clamped to the nearest bound. Minimization objectives are then
    inverted (``1 - x``).

    Args:
        raw: Raw objective vector.
        stats: Per-objective observed range.
        directions: Per-objective direction.
        objectives: Objectives to normalize. Defaults to the keys of ``directions``.

    Returns:
        Normalized vector keyed by objective name.

    Raises:
        InvalidObjective: If an objective is missing from ``raw``, ``directions``
            or ``stats``, has an unknown direction, or a non-finite value.
    """
    names = list(directions) if objectives is None else list(objectives)
    validate_directions(directions, names)

    missing = [name for name in names if name not in raw]
    if missing:
        raise InvalidObjective(f"raw vector is missing objectives: {', '.join(missing)}")
    unscaled = [name for name in names if name not in stats]
    if unscaled:
        raise InvalidObjective(f"no population statistics for objectives: {', '.join(unscaled)}")

    normalized: dict[str, float] = {}
    for name in names:
        value = _finite(name, raw[name])
        low, high = stats[name].min, stats[name].max

        if high > low:
            # Externally supplied ranges may not cover the value
            scaled = min(max((value - low) / (high - low), 0.0), 1.0)
        else:
            scaled = 0.5

        if directions[name] == "minimize":
            scaled = 1.0 - scaled

        normalized[name] = scaled

    return normalized


def aggregate_fitness(normalized: Mapping[str, float], weights: Mapping[str, float] | None = None) -> float:
    """Collapse a normalized vector into one score.

    Args:
        normalized: Normalized objective vector.
        weights: Per-objective weights; objectives without a weight count 0.
            None means the plain mean of the vector.

    Returns:
        Weighted sum of normalized values (0.0 for an empty vector).
    """
    if not normalized:
        return 0.0
    if weights is None:
        return sum(normalized.values()) / len(normalized)
    return sum(value * weights.get(name, 0.0) for name, value in normalized.items())


def normalize_candidates(
    candidates: Sequence[Candidate],
    directions: Mapping[str, str],
    stats: Mapping[str, ObjectiveStats] | None = None,
    weights: Mapping[str, float] | None = None,
) -> list[Candidate]:
    """Normalize a population of candidates.

    Args:
        candidates: Candidates carrying raw objective vectors.
        directions: Per-objective direction; its keys are the objectives used.
        stats: Externally supplied ranges. Computed over ``candidates`` if None.
        weights: Weights for the aggregate ``fitness`` score.

    Returns:
        New candidates with ``normalized`` and ``fitness`` filled, in input order.

    Raises:
        InvalidObjective: If a candidate's raw vector does not match ``directions``.
    """
    if stats is None:
        stats = population_stats(c.objectives for c in candidates)

    result = []
    for c in candidates:
        normalized = normalize(c.objectives, stats, directions)
        result.append(replace(c, normalized=normalized, fitness=aggregate_fitness(normalized, weights)))
    return result


def _finite(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidObjective(f"objective {name!r} must be numeric, got {value!r}") from exc
    if not math.isfinite(value):
        raise InvalidObjective(f"objective {name!r} must be finite, got {value}")
    return value
