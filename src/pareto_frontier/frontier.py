"""Frontier configuration and state.

This module provides the two value types the frontier store operates on:

- FrontierConfig: the fixed per-run configuration (objectives, directions,
  reference point, size bounds, noise tolerance, trim strategy)
- Frontier: the live bounded non-dominated set plus its historical archive

Both classes are immutable (frozen dataclasses). Every store operation
returns a new Frontier rather than mutating the one it was given.
"""

from dataclasses import dataclass, field

from pareto_frontier.candidate import Candidate
from pareto_frontier.exceptions import InvalidObjective
from pareto_frontier.hypervolume import reference_vector
from pareto_frontier.normalization import validate_directions


@dataclass(frozen=True)
class FrontierConfig:
    """Configuration consumed at frontier construction.

    Attributes:
        objectives: Objective names, in the order used for all vectors.
        directions: ``"maximize"`` or ``"minimize"`` per objective.
        reference_point: Reference value per objective in normalized space,
            or None to derive one from seed candidates.
        max_size: Maximum number of live solutions. Default 100.
        max_archive_size: Maximum number of archived candidates. Default 500.
        epsilon: Tolerance for noisy dominance. Default 0.01.
        epsilon_dominance: If True, insertion also rejects candidates that an
            existing member epsilon-dominates and evicts members the newcomer
            epsilon-dominates.
        trim_strategy: Name of a registered trim strategy. Default "crowding".
        weights: Objective weights for the archive's aggregate score, or None
            for the plain mean.

    Example:
        >>> config = FrontierConfig(
        ...     objectives=("accuracy", "latency"),
        ...     directions={"accuracy": "maximize", "latency": "minimize"},
        ...     reference_point={"accuracy": 0.0, "latency": 0.0},
        ... )
        >>> config.max_size
        100
    """

    objectives: tuple[str, ...]
    directions: dict[str, str]
    reference_point: dict[str, float] | None = None
    max_size: int = 100
    max_archive_size: int = 500
    epsilon: float = 0.01
    epsilon_dominance: bool = False
    trim_strategy: str = "crowding"
    weights: dict[str, float] | None = None

    def __post_init__(self) -> None:
        """Validate the configuration and copy containers for immutability.

        Raises:
            InvalidObjective: If objectives, directions and reference point disagree.
            ValueError: If a size bound or epsilon is out of range.
        """
        objectives = tuple(self.objectives)
        if len(objectives) == 0:
            raise InvalidObjective("at least one objective is required")
        if len(set(objectives)) != len(objectives):
            raise InvalidObjective(f"objective names must be unique, got {objectives}")
        object.__setattr__(self, "objectives", objectives)

        validate_directions(self.directions, objectives)
        extra = sorted(set(self.directions) - set(objectives))
        if extra:
            raise InvalidObjective(f"directions declared for unknown objectives: {', '.join(extra)}")
        object.__setattr__(self, "directions", dict(self.directions))

        if self.reference_point is not None:
            reference = reference_vector(self.reference_point, objectives)
            object.__setattr__(self, "reference_point", dict(zip(objectives, reference.tolist(), strict=True)))

        if self.max_size <= 0:
            raise ValueError(f"max_size must be positive, got {self.max_size}")
        if self.max_archive_size <= 0:
            raise ValueError(f"max_archive_size must be positive, got {self.max_archive_size}")
        if self.epsilon < 0:
            raise ValueError(f"epsilon must be non-negative, got {self.epsilon}")

        if self.weights is not None:
            object.__setattr__(self, "weights", dict(self.weights))


@dataclass(frozen=True)
class Frontier:
    """Live bounded Pareto frontier plus historical archive.

    Attributes:
        config: The run configuration.
        reference_point: Reference value per objective, dominated by every solution.
        solutions: Non-dominated candidates, each ranked 1 against the others.
        hypervolume: Hypervolume of ``solutions`` relative to ``reference_point``.
        generation: Generation counter.
        archive: Historically valuable candidates, not necessarily non-dominated.
        fronts: Rank to candidate ids for ``solutions``.
    """

    config: FrontierConfig
    reference_point: dict[str, float]
    solutions: tuple[Candidate, ...] = ()
    hypervolume: float = 0.0
    generation: int = 0
    archive: tuple[Candidate, ...] = ()
    fronts: dict[int, list[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "solutions", tuple(self.solutions))
        object.__setattr__(self, "archive", tuple(self.archive))
        object.__setattr__(self, "reference_point", dict(self.reference_point))
        object.__setattr__(self, "fronts", {rank: list(ids) for rank, ids in self.fronts.items()})

        if self.generation < 0:
            raise ValueError(f"generation must be non-negative, got {self.generation}")

    def __len__(self) -> int:
        """Return the number of live solutions."""
        return len(self.solutions)

    def __contains__(self, candidate_id: object) -> bool:
        return any(c.id == candidate_id for c in self.solutions)

    @property
    def objectives(self) -> tuple[str, ...]:
        return self.config.objectives

    @property
    def directions(self) -> dict[str, str]:
        return self.config.directions

    @property
    def ids(self) -> list[str]:
        """Ids of the live solutions, in frontier order."""
        return [c.id for c in self.solutions]

    def get(self, candidate_id: str) -> Candidate | None:
        """Return the live solution with this id, or None."""
        for c in self.solutions:
            if c.id == candidate_id:
                return c
        return None
