"""Frontier store: insertion, removal, trimming and archival.

Every operation takes a Frontier and returns a new one; the input is never
modified. After any change to the live solutions the store recomputes rank,
crowding distance, the front map and the hypervolume over the whole set, so
derived data is never patched incrementally.

Example:
    >>> config = FrontierConfig(
    ...     objectives=("accuracy", "latency"),
    ...     directions={"accuracy": "maximize", "latency": "minimize"},
    ...     reference_point={"accuracy": 0.0, "latency": 0.0},
    ...     max_size=50,
    ... )
    >>> frontier = new_frontier(config)
    >>> frontier = add_solution(frontier, candidate)
    >>> parents = get_pareto_optimal(frontier)
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace

import numpy as np

# Import trimming to trigger strategy registration
import pareto_frontier.trimming  # noqa: F401
from pareto_frontier import primitives
from pareto_frontier.candidate import Candidate, objective_matrix
from pareto_frontier.dominance import assign_ranks
from pareto_frontier.frontier import Frontier, FrontierConfig
from pareto_frontier.hypervolume import auto_reference_point, calculate, reference_vector
from pareto_frontier.normalization import ObjectiveStats, aggregate_fitness, normalize_candidates, population_stats
from pareto_frontier.registry import TrimRegistry

logger = logging.getLogger(__name__)


def new_frontier(config: FrontierConfig, candidates: Sequence[Candidate] = ()) -> Frontier:
    """Create an empty frontier.

    Args:
        config: Run configuration.
        candidates: Normalized seed candidates used to derive the reference point
            when ``config.reference_point`` is None. They are not inserted.

    Returns:
        A frontier with no solutions, generation 0 and hypervolume 0.0.
    """
    if config.reference_point is not None:
        reference_point = dict(config.reference_point)
    else:
        reference_point = auto_reference_point(candidates, config.objectives)
        logger.debug("Derived reference point %s from %d candidates", reference_point, len(candidates))
    return Frontier(config=config, reference_point=reference_point)


def add_solution(frontier: Frontier, candidate: Candidate) -> Frontier:
    """Insert a candidate while keeping the frontier non-dominated.

    If any member dominates the candidate it is rejected and the frontier is
    returned unchanged. Otherwise every member the candidate dominates is
    removed, the candidate is inserted, the frontier is re-ranked and its
    hypervolume recomputed, and Trim runs if the size bound is exceeded.

    With ``config.epsilon_dominance`` the same rules also apply to
    epsilon-dominance. A candidate whose id is already a member replaces that
    member (a re-evaluation), unless its vector is unchanged. The old entry
    is dropped before the dominance test, so a re-evaluation that is now
    dominated leaves the frontier without that id.

    Args:
        frontier: The current frontier.
        candidate: Candidate normalized over the frontier objectives.

    Returns:
        The updated frontier.

    Raises:
        InvalidObjective: If the candidate is not normalized over the frontier objectives.
    """
    objectives = frontier.objectives
    vector = candidate.vector(objectives)

    previous = frontier.get(candidate.id)
    if previous is not None:
        if np.array_equal(previous.vector(objectives), vector):
            return frontier
        logger.debug("Re-evaluated candidate %s replaces its frontier entry", candidate.id)
        frontier = remove_solution(frontier, candidate.id)

    beats = _dominance_test(frontier.config)
    members = [(c, c.vector(objectives)) for c in frontier.solutions]

    for member, member_vector in members:
        if beats(member_vector, vector):
            logger.debug("Candidate %s is dominated by %s, not adding to frontier", candidate.id, member.id)
            return frontier

    kept = [member for member, member_vector in members if not beats(vector, member_vector)]
    removed = len(members) - len(kept)

    updated = _rebuild(frontier, [*kept, candidate])
    logger.debug(
        "Added candidate %s to frontier (%d solutions, %d dominated removed)",
        candidate.id,
        len(updated),
        removed,
    )

    if len(updated) > frontier.config.max_size:
        logger.debug("Frontier size %d exceeds max %d, trimming", len(updated), frontier.config.max_size)
        return trim(updated)
    return updated


def remove_solution(frontier: Frontier, candidate_id: str) -> Frontier:
    """Remove a solution by id and recompute the frontier.

    Returns:
        The updated frontier, or the same frontier if the id is not a member.
    """
    if candidate_id not in frontier:
        return frontier

    updated = _rebuild(frontier, [c for c in frontier.solutions if c.id != candidate_id])
    logger.debug("Removed candidate %s from frontier", candidate_id)
    return updated


def trim(frontier: Frontier, max_size: int | None = None) -> Frontier:
    """Shrink the frontier to a maximum size with the configured trim strategy.

    With the default "crowding" strategy, boundary solutions (infinite
    crowding distance) are kept first, then the most isolated ones, so a
    boundary solution is never evicted while a finite-distance one remains.

    Args:
        frontier: The current frontier.
        max_size: Bound to trim to. Defaults to ``config.max_size``.

    Returns:
        The frontier with exactly ``max_size`` solutions, or unchanged if
        already within bound.

    Raises:
        ValueError: If max_size is not positive or the strategy returns an
            invalid selection.
        KeyError: If the configured trim strategy is not registered.
    """
    if max_size is None:
        max_size = frontier.config.max_size
    if max_size <= 0:
        raise ValueError(f"max_size must be positive, got {max_size}")

    if len(frontier) <= max_size:
        return frontier

    objectives = frontier.objectives
    strategy = TrimRegistry.get(frontier.config.trim_strategy)
    kept = strategy(
        objective_matrix(frontier.solutions, objectives),
        max_size,
        reference_point=reference_vector(frontier.reference_point, objectives),
    )

    kept_indices = sorted({int(i) for i in kept})
    if len(kept_indices) != max_size or len(kept) != max_size:
        raise ValueError(
            f"trim strategy '{frontier.config.trim_strategy}' returned {len(kept)} indices, expected {max_size} unique"
        )

    updated = _rebuild(frontier, [frontier.solutions[i] for i in kept_indices])
    logger.debug("Trimmed frontier from %d to %d solutions", len(frontier), len(updated))
    return updated


def archive_solution(frontier: Frontier, candidate: Candidate) -> Frontier:
    """Archive a candidate for warm-starting later runs.

    Idempotent by id. When the archive exceeds ``config.max_archive_size``
    the lowest-scoring members are evicted (ties evict the most recently
    archived first). The score is the candidate's ``fitness``, falling back
    to the aggregate of its normalized objectives.

    Returns:
        The frontier with the updated archive.
    """
    if any(c.id == candidate.id for c in frontier.archive):
        return frontier

    archive = [*frontier.archive, candidate]
    capacity = frontier.config.max_archive_size

    if len(archive) > capacity:
        scores = [_archive_score(c, frontier.config.weights) for c in archive]
        order = sorted(range(len(archive)), key=lambda i: (scores[i], -i))
        evicted = set(order[: len(archive) - capacity])
        logger.debug(
            "Archive over capacity %d, evicting %s",
            capacity,
            ", ".join(archive[i].id for i in sorted(evicted)),
        )
        archive = [c for i, c in enumerate(archive) if i not in evicted]

    logger.debug("Archived candidate %s (archive size: %d)", candidate.id, len(archive))
    return replace(frontier, archive=tuple(archive))


def get_pareto_optimal(frontier: Frontier) -> list[Candidate]:
    """Return the non-dominated (rank 1) solutions."""
    return [c for c in frontier.solutions if c.rank == 1]


def get_front(frontier: Frontier, rank: int) -> list[Candidate]:
    """Return the solutions at a given rank.

    Raises:
        ValueError: If rank is not a positive integer.
    """
    if not isinstance(rank, int) or rank < 1:
        raise ValueError(f"rank must be a positive integer, got {rank!r}")
    ids = set(frontier.fronts.get(rank, []))
    return [c for c in frontier.solutions if c.id in ids]


def next_generation(frontier: Frontier) -> Frontier:
    """Advance the generation counter."""
    return replace(frontier, generation=frontier.generation + 1)


def apply_generation(
    frontier: Frontier,
    candidates: Sequence[Candidate],
    stats: Mapping[str, ObjectiveStats] | None = None,
) -> Frontier:
    """Insert one generation's evaluated candidates and advance the counter.

    Candidates that are not yet normalized are normalized with the frontier's
    directions. With explicit ``stats`` those ranges are used as given.
    Otherwise the range is observed over this batch together with the raw
    vectors of the current members, and the members are rescaled to that
    range first, so old and new candidates are compared on one scale.
    Members without a raw vector over the frontier objectives keep their
    normalized values.

    Args:
        frontier: The current frontier.
        candidates: This generation's candidates, inserted in order.
        stats: Externally supplied per-objective ranges.

    Returns:
        The updated frontier with ``generation`` incremented.

    Raises:
        InvalidObjective: If a raw vector does not match the frontier objectives.
    """
    config = frontier.config
    pending = [c for c in candidates if not c.is_normalized]
    if pending:
        if stats is None:
            frontier, stats = _rescale_members(frontier, pending)
        scored = iter(normalize_candidates(pending, config.directions, stats=stats, weights=config.weights))
        candidates = [c if c.is_normalized else next(scored) for c in candidates]

    for c in candidates:
        frontier = add_solution(frontier, c)

    logger.debug(
        "Generation %d complete: %d solutions, hypervolume %.6f",
        frontier.generation,
        len(frontier),
        frontier.hypervolume,
    )
    return next_generation(frontier)


def _rescale_members(
    frontier: Frontier, pending: Sequence[Candidate]
) -> tuple[Frontier, dict[str, ObjectiveStats]]:
    objectives = frontier.objectives
    members = [c for c in frontier.solutions if all(name in c.objectives for name in objectives)]
    stats = population_stats(
        {name: value for name, value in c.objectives.items() if name in objectives} for c in [*members, *pending]
    )
    if not members:
        return frontier, stats

    rescaled = {
        c.id: c for c in normalize_candidates(members, frontier.directions, stats=stats, weights=frontier.config.weights)
    }
    logger.debug("Rescaled %d frontier members to the range of generation %d", len(rescaled), frontier.generation + 1)
    return _rebuild(frontier, [rescaled.get(c.id, c) for c in frontier.solutions]), stats


def _dominance_test(config: FrontierConfig):
    if not config.epsilon_dominance:
        return primitives.dominates

    def beats(a: np.ndarray, b: np.ndarray) -> bool:
        return primitives.dominates(a, b) or primitives.epsilon_dominates(a, b, config.epsilon)

    return beats


def _rebuild(frontier: Frontier, solutions: Sequence[Candidate]) -> Frontier:
    objectives = frontier.objectives
    ranked = assign_ranks(solutions, objectives)

    fronts: dict[int, list[str]] = {}
    for c in ranked:
        fronts.setdefault(c.rank, []).append(c.id)

    volume = calculate(ranked, frontier.reference_point, objectives) if ranked else 0.0
    return replace(frontier, solutions=tuple(ranked), fronts=fronts, hypervolume=volume)


def _archive_score(candidate: Candidate, weights: Mapping[str, float] | None) -> float:
    if candidate.fitness is not None:
        return candidate.fitness
    if candidate.normalized is not None:
        return aggregate_fitness(candidate.normalized, weights)
    return 0.0
