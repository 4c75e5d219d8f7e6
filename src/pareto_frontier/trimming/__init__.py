"""Trim strategies for bounding the frontier size."""

from pareto_frontier.registry import TrimRegistry
from pareto_frontier.trimming.crowding import crowding_trim
from pareto_frontier.trimming.hypervolume import hypervolume_trim

# Register built-in trim strategies
TrimRegistry.register("crowding", crowding_trim)
TrimRegistry.register("hypervolume", hypervolume_trim)

__all__ = ["crowding_trim", "hypervolume_trim"]
