"""Hypervolume saturation tracking for convergence detection.

Feeds one hypervolume value per generation and detects when the frontier has
stopped expanding. A generation counts as improving when ANY of these holds:

- absolute improvement over the previous generation > absolute_threshold
- relative improvement over the previous generation > relative_threshold
- mean absolute improvement over the last window_size records > average_threshold

The frontier is saturated once ``patience`` consecutive generations fail all
three. Both classes are immutable (frozen dataclasses); ``update`` returns a
new tracker.

Example:
    >>> tracker = HypervolumeTracker(patience=3)
    >>> tracker = tracker.update(0.50).update(0.52)
    >>> tracker.saturated
    False
"""

import logging
from dataclasses import dataclass, replace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HypervolumeRecord:
    """Hypervolume observed for a single generation.

    Attributes:
        generation: Generation number.
        hypervolume: Hypervolume indicator value.
        absolute_improvement: Change from the previous record, or None for the first.
        relative_improvement: Change relative to the previous record, or None
            for the first. 0.0 when the previous hypervolume was 0.
    """

    generation: int
    hypervolume: float
    absolute_improvement: float | None = None
    relative_improvement: float | None = None


@dataclass(frozen=True)
class HypervolumeTracker:
    """Tracks frontier hypervolume across generations.

    Attributes:
        absolute_threshold: Minimum absolute improvement. Default 0.001.
        relative_threshold: Minimum relative improvement. Default 0.01.
        average_threshold: Minimum mean improvement over the window. Default 0.005.
        window_size: Records averaged for the improvement rate. Default 5.
        patience: Non-improving generations before saturation. Default 5.
        max_history: Records kept, oldest dropped first. Default 100.
        history: Records, oldest first.
        patience_counter: Consecutive non-improving generations.
        saturated: Whether patience has been exhausted.
    """

    absolute_threshold: float = 0.001
    relative_threshold: float = 0.01
    average_threshold: float = 0.005
    window_size: int = 5
    patience: int = 5
    max_history: int = 100
    history: tuple[HypervolumeRecord, ...] = ()
    patience_counter: int = 0
    saturated: bool = False

    def __post_init__(self) -> None:
        """Validate thresholds and copy history for immutability.

        Raises:
            ValueError: If a threshold is negative or a count is not positive.
        """
        for name in ("absolute_threshold", "relative_threshold", "average_threshold"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        for name in ("window_size", "patience"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.max_history < 2:
            raise ValueError(f"max_history must be at least 2, got {self.max_history}")
        object.__setattr__(self, "history", tuple(self.history))

    def update(self, hypervolume: float, generation: int | None = None) -> "HypervolumeTracker":
        """Record a generation's hypervolume and re-evaluate saturation.

        Args:
            hypervolume: Hypervolume of the current frontier.
            generation: Generation number. Defaults to one past the latest
                record (1 for an empty history).

        Returns:
            A new tracker including the record.
        """
        if generation is None:
            generation = self.history[-1].generation + 1 if self.history else 1

        hypervolume = float(hypervolume)
        if not self.history:
            record = HypervolumeRecord(generation=generation, hypervolume=hypervolume)
            return replace(self, history=(record,), saturated=False)

        previous = self.history[-1].hypervolume
        absolute = hypervolume - previous
        relative = absolute / previous if previous > 0 else 0.0
        record = HypervolumeRecord(
            generation=generation,
            hypervolume=hypervolume,
            absolute_improvement=absolute,
            relative_improvement=relative,
        )
        history = (*self.history, record)[-self.max_history :]
        tracker = replace(self, history=history)

        improving = (
            absolute > self.absolute_threshold
            or relative > self.relative_threshold
            or tracker.average_improvement_rate > self.average_threshold
        )
        counter = 0 if improving else self.patience_counter + 1
        saturated = counter >= self.patience

        if saturated and not self.saturated:
            logger.debug(
                "Hypervolume saturated at generation %d (%.6f) after %d non-improving generations",
                generation,
                hypervolume,
                counter,
            )
        return replace(tracker, patience_counter=counter, saturated=saturated)

    @property
    def current_hypervolume(self) -> float | None:
        """Latest hypervolume, or None before the first update."""
        return self.history[-1].hypervolume if self.history else None

    @property
    def recent_improvement(self) -> float | None:
        """Latest absolute improvement, or None with fewer than two records."""
        return self.history[-1].absolute_improvement if self.history else None

    @property
    def average_improvement_rate(self) -> float:
        """Mean absolute improvement over the last ``window_size`` records."""
        improvements = [
            r.absolute_improvement for r in self.history[-self.window_size :] if r.absolute_improvement is not None
        ]
        if not improvements:
            return 0.0
        return sum(improvements) / len(improvements)

    def reset(self) -> "HypervolumeTracker":
        """Clear history and counters, keeping the thresholds."""
        return replace(self, history=(), patience_counter=0, saturated=False)
