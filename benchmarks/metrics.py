"""Reference metrics for validating the frontier engine.

This module wraps pymoo's hypervolume indicator so benchmark results can be
checked against an independent implementation. pymoo minimizes, so maximize
point sets are negated together with their reference point.
"""

import numpy as np
from pymoo.indicators.hv import HV


def reference_hypervolume(objectives: np.ndarray, ref_point: np.ndarray | None = None) -> float:
    """Compute hypervolume of a maximize-oriented point set with pymoo.

    Args:
        objectives: (n, n_obj) normalized objective values, larger is better.
        ref_point: Reference point. Defaults to the origin, the worst corner
            of the normalized space.

    Returns:
        Hypervolume value.

    Raises:
        ValueError: If objectives array is empty or has wrong shape
    """
    if objectives.size == 0:
        raise ValueError("objectives array cannot be empty")

    if objectives.ndim != 2:
        raise ValueError(f"objectives must be 2D array, got shape {objectives.shape}")

    if ref_point is None:
        ref_point = np.zeros(objectives.shape[1])

    indicator = HV(ref_point=-np.asarray(ref_point, dtype=np.float64))
    return float(indicator(-objectives))
