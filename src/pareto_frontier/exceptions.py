"""Error kinds raised by the frontier engine.

- ParetoError: base class, a ValueError so callers can catch malformed input
  the same way they catch the array shape checks
- InvalidObjective: objective-name mismatch between a vector and the
  declared configuration, or a malformed objective value
- DegenerateReferencePoint: no solution dominates the reference point
- EmptyPopulation: warning issued when sort or hypervolume runs on zero
  candidates (the result is still defined)
"""


class ParetoError(ValueError):
    """Base class for frontier engine errors."""


class InvalidObjective(ParetoError):
    """An objective vector does not match the declared objectives."""


class DegenerateReferencePoint(ParetoError):
    """The reference point is not dominated by any solution."""


class EmptyPopulation(UserWarning):
    """Sort or hypervolume was invoked on an empty population."""
