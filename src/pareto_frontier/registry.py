"""Registry for frontier trim strategies.

Instead of hardcoding how an oversized frontier is shrunk, the frontier store
looks its trim strategy up by the name given in ``FrontierConfig.trim_strategy``.
Factories are registered by name and called with keyword arguments at
retrieval time, so a strategy can be configured from plain data.

The registry enables:
- **Configuration-driven runs**: Select the strategy by string name
- **Pluggable strategies**: Register a custom factory without touching the store
- **Discoverability**: List all available strategies programmatically

Basic usage:
    ```python
    from pareto_frontier.registry import TrimRegistry, list_trims

    def first_n_factory():
        def strategy(objectives, n_keep, **kwargs):
            return np.arange(n_keep, dtype=np.intp)
        return strategy

    TrimRegistry.register("first_n", first_n_factory)

    strategy = TrimRegistry.get("first_n")
    available = list_trims()  # ["crowding", "first_n", "hypervolume"]
    ```
"""

from collections.abc import Callable

from pareto_frontier.protocols import TrimStrategy


class TrimRegistry:
    """Registry for frontier trim strategies.

    Class Attributes:
        _registry: Dictionary mapping strategy names to factory functions.
            Keys are strategy names (str), values are callables that return
            TrimStrategy instances.

    Example:
        ```python
        TrimRegistry.register("crowding", crowding_trim)
        strategy = TrimRegistry.get("crowding")
        kept = strategy(objectives, n_keep=100)
        ```
    """

    _registry: dict[str, Callable[..., TrimStrategy]] = {}

    @classmethod
    def register(cls, name: str, factory: Callable[..., TrimStrategy]) -> None:
        """Register a trim strategy factory.

        Args:
            name: Unique name for the strategy. Will overwrite if already exists.
            factory: Callable that returns a TrimStrategy. Should accept
                keyword arguments for configuration.
        """
        cls._registry[name] = factory

    @classmethod
    def get(cls, name: str, **kwargs) -> TrimStrategy:
        """Get a configured trim strategy by name.

        Args:
            name: Name of the registered strategy.
            **kwargs: Configuration parameters passed to the factory function.

        Returns:
            A configured TrimStrategy callable.

        Raises:
            KeyError: If the strategy name is not registered. Error message
                includes list of available strategies.
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry.keys())) or "none"
            raise KeyError(f"Trim strategy '{name}' not found. Available strategies: {available}")
        factory = cls._registry[name]
        return factory(**kwargs)

    @classmethod
    def list(cls) -> list[str]:
        """Return sorted list of registered strategy names."""
        return sorted(cls._registry.keys())


def list_trims() -> list[str]:
    """List all registered trim strategies.

    Convenience function that returns TrimRegistry.list().
    """
    return TrimRegistry.list()
