"""pareto-frontier: Multi-objective Pareto frontier management.

A pure numpy engine for the selection side of evolutionary prompt
optimization: objective normalization, NSGA-II non-dominated sorting,
crowding distance, exact WFG hypervolume, and a size-bounded live frontier
with a historical archive.

Example:
    >>> from pareto_frontier import Candidate, FrontierConfig, apply_generation, new_frontier
    >>> config = FrontierConfig(
    ...     objectives=("accuracy", "latency"),
    ...     directions={"accuracy": "maximize", "latency": "minimize"},
    ...     reference_point={"accuracy": 0.0, "latency": 0.0},
    ... )
    >>> population = [
    ...     Candidate(id="a", objectives={"accuracy": 0.90, "latency": 1.5}),
    ...     Candidate(id="b", objectives={"accuracy": 0.88, "latency": 1.8}),
    ... ]
    >>> frontier = apply_generation(new_frontier(config), population)
    >>> frontier.ids
    ['a']
"""

from pareto_frontier.candidate import Candidate
from pareto_frontier.dominance import (
    assign_ranks,
    compare,
    fast_non_dominated_sort,
)
from pareto_frontier.exceptions import (
    DegenerateReferencePoint,
    EmptyPopulation,
    InvalidObjective,
    ParetoError,
)
from pareto_frontier.frontier import Frontier, FrontierConfig
from pareto_frontier.hypervolume import (
    auto_reference_point,
    calculate,
    contribution,
    exclusive_contributions,
    hypervolume,
    improvement,
)
from pareto_frontier.normalization import (
    DEFAULT_DIRECTIONS,
    DEFAULT_WEIGHTS,
    STANDARD_OBJECTIVES,
    ObjectiveStats,
    aggregate_fitness,
    normalize,
    normalize_candidates,
    population_stats,
)
from pareto_frontier.primitives import (
    crowding_distance,
    dominates,
    dominates_matrix,
    epsilon_dominates,
    non_dominated_sort,
)
from pareto_frontier.registry import TrimRegistry, list_trims
from pareto_frontier.store import (
    add_solution,
    apply_generation,
    archive_solution,
    get_front,
    get_pareto_optimal,
    new_frontier,
    next_generation,
    remove_solution,
    trim,
)
from pareto_frontier.tracker import HypervolumeRecord, HypervolumeTracker
from pareto_frontier.trimming import crowding_trim, hypervolume_trim

__all__ = [
    # Frontier store
    "new_frontier",
    "add_solution",
    "remove_solution",
    "trim",
    "archive_solution",
    "get_pareto_optimal",
    "get_front",
    "apply_generation",
    "next_generation",
    # Normalization
    "normalize",
    "normalize_candidates",
    "population_stats",
    "aggregate_fitness",
    "ObjectiveStats",
    "STANDARD_OBJECTIVES",
    "DEFAULT_DIRECTIONS",
    "DEFAULT_WEIGHTS",
    # Candidate-level dominance
    "compare",
    "fast_non_dominated_sort",
    "assign_ranks",
    # Hypervolume
    "hypervolume",
    "exclusive_contributions",
    "calculate",
    "contribution",
    "auto_reference_point",
    "improvement",
    # Primitives
    "dominates",
    "epsilon_dominates",
    "dominates_matrix",
    "non_dominated_sort",
    "crowding_distance",
    # Trim strategies
    "crowding_trim",
    "hypervolume_trim",
    "TrimRegistry",
    "list_trims",
    # Convergence tracking
    "HypervolumeTracker",
    "HypervolumeRecord",
    # Data structures
    "Candidate",
    "Frontier",
    "FrontierConfig",
    # Errors
    "ParetoError",
    "InvalidObjective",
    "DegenerateReferencePoint",
    "EmptyPopulation",
]
