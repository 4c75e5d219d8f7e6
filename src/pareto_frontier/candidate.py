"""Candidate data structure for multi-objective frontier management.

A Candidate is one evaluated solution (typically a prompt variant) carrying:

- its raw objective measurements, keyed by objective name
- the normalized, maximize-oriented [0, 1] vector used for all comparisons
- derived ranking data (rank, crowding distance, dominance sets) that is only
  ever written by a recomputation pass over an enclosing population

Candidates are immutable (frozen dataclasses) to enforce functional style.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Any

import numpy as np

from pareto_frontier.exceptions import InvalidObjective


@dataclass(frozen=True)
class Candidate:
    """Immutable scored solution.

    Attributes:
        id: Opaque identifier, unique within a population.
        objectives: Raw objective vector, e.g. ``{"accuracy": 0.9, "latency": 1.5}``.
        normalized: Maximize-oriented [0, 1] vector, or None before normalization.
        rank: Dominance rank (1 = non-dominated), or None if not computed.
        crowding_distance: Crowding distance (``math.inf`` for boundary points),
            or None if not computed.
        dominates: Ids of candidates this one dominates.
        dominated_by: Ids of candidates that dominate this one.
        fitness: Aggregate score (weighted sum of normalized objectives), or None.
        metadata: Opaque payload such as prompt text or parent ids.

    Example:
        >>> c = Candidate(id="a", objectives={"accuracy": 0.9}, normalized={"accuracy": 1.0})
        >>> c.vector(["accuracy"])
        array([1.])
    """

    id: str
    objectives: dict[str, float]
    normalized: dict[str, float] | None = None
    rank: int | None = None
    crowding_distance: float | None = None
    dominates: frozenset[str] = frozenset()
    dominated_by: frozenset[str] = frozenset()
    fitness: float | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate fields and copy mappings for immutability.

        Raises:
            TypeError: If id is not a string or objectives is not a mapping.
            ValueError: If rank or crowding_distance is out of range.
        """
        if not isinstance(self.id, str):
            raise TypeError(f"id must be a string, got {type(self.id).__name__}")
        if not hasattr(self.objectives, "items"):
            raise TypeError(f"objectives must be a mapping, got {type(self.objectives).__name__}")

        object.__setattr__(self, "objectives", dict(self.objectives))
        if self.normalized is not None:
            object.__setattr__(self, "normalized", dict(self.normalized))
        object.__setattr__(self, "metadata", dict(self.metadata))
        object.__setattr__(self, "dominates", frozenset(self.dominates))
        object.__setattr__(self, "dominated_by", frozenset(self.dominated_by))

        if self.rank is not None and self.rank < 1:
            raise ValueError(f"rank must be >= 1, got {self.rank}")
        if self.crowding_distance is not None and (
            math.isnan(self.crowding_distance) or self.crowding_distance < 0
        ):
            raise ValueError(f"crowding_distance must be non-negative, got {self.crowding_distance}")

    @property
    def is_normalized(self) -> bool:
        """Whether the normalized vector has been computed."""
        return self.normalized is not None

    def vector(self, objectives: Sequence[str]) -> np.ndarray:
        """Return the normalized values in the given objective order.

        Args:
            objectives: Objective names defining the array order.

        Returns:
            Float array of shape (len(objectives),).

        Raises:
            InvalidObjective: If the candidate is not normalized or lacks an objective.
        """
        if self.normalized is None:
            raise InvalidObjective(f"candidate {self.id!r} has no normalized objectives")
        return _as_vector(self.id, self.normalized, objectives)

    def raw_vector(self, objectives: Sequence[str]) -> np.ndarray:
        """Return the raw measurements in the given objective order.

        Raises:
            InvalidObjective: If the candidate lacks an objective.
        """
        return _as_vector(self.id, self.objectives, objectives)

    def with_ranking(
        self,
        rank: int,
        crowding_distance: float,
        dominates: frozenset[str] = frozenset(),
        dominated_by: frozenset[str] = frozenset(),
    ) -> "Candidate":
        """Return a copy carrying freshly computed ranking data."""
        return replace(
            self,
            rank=rank,
            crowding_distance=crowding_distance,
            dominates=dominates,
            dominated_by=dominated_by,
        )


def _as_vector(candidate_id: str, values: dict[str, float], objectives: Sequence[str]) -> np.ndarray:
    missing = [name for name in objectives if name not in values]
    if missing:
        raise InvalidObjective(f"candidate {candidate_id!r} is missing objectives: {', '.join(missing)}")
    return np.array([float(values[name]) for name in objectives], dtype=np.float64)


def objective_matrix(candidates: Sequence[Candidate], objectives: Sequence[str]) -> np.ndarray:
    """Stack normalized vectors into an array of shape (n, n_obj).

    Raises:
        InvalidObjective: If any candidate is not normalized over ``objectives``.
    """
    if len(candidates) == 0:
        return np.zeros((0, len(objectives)), dtype=np.float64)
    return np.vstack([c.vector(objectives) for c in candidates])


def check_unique_ids(candidates: Sequence[Candidate]) -> None:
    """Raise ValueError if two candidates share an id."""
    seen: set[str] = set()
    for c in candidates:
        if c.id in seen:
            raise ValueError(f"duplicate candidate id {c.id!r}")
        seen.add(c.id)
