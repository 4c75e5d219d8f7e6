"""Shared test fixtures for pareto-frontier tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- make_candidate: Factory for already-normalized candidates
- raw_population: Three prompt variants with raw measurements (A, B, C)
- population: The same three candidates, normalized over their own range
- config / frontier: A two-objective frontier with a zero reference point
"""

import numpy as np
import pytest

from pareto_frontier import (
    DEFAULT_DIRECTIONS,
    Candidate,
    Frontier,
    FrontierConfig,
    new_frontier,
    normalize_candidates,
)


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def make_candidate():
    """Factory for candidates whose raw and normalized vectors are equal.

    Returns:
        Callable (id, values, objectives=("f1", "f2"), **fields) -> Candidate.
    """

    def make(candidate_id: str, values, objectives=("f1", "f2"), **fields) -> Candidate:
        vector = {name: float(v) for name, v in zip(objectives, values, strict=True)}
        return Candidate(id=candidate_id, objectives=vector, normalized=vector, **fields)

    return make


@pytest.fixture
def raw_population() -> list[Candidate]:
    """Three prompt variants measured on the four standard objectives.

    After normalization over these three:
        A dominates B (better on every objective)
        A and C trade off (C is more accurate, A is faster, cheaper and more robust)
        B and C trade off

    Resulting fronts:
        Front 1: A, C
        Front 2: B
    """
    return [
        Candidate(id="A", objectives={"accuracy": 0.90, "latency": 1.5, "cost": 0.02, "robustness": 0.85}),
        Candidate(id="B", objectives={"accuracy": 0.88, "latency": 1.8, "cost": 0.03, "robustness": 0.82}),
        Candidate(id="C", objectives={"accuracy": 0.95, "latency": 2.5, "cost": 0.05, "robustness": 0.80}),
    ]


@pytest.fixture
def population(raw_population: list[Candidate]) -> list[Candidate]:
    """The raw population normalized with the standard directions."""
    return normalize_candidates(raw_population, DEFAULT_DIRECTIONS)


@pytest.fixture
def config() -> FrontierConfig:
    """Two maximize objectives, zero reference point, room for five solutions."""
    return FrontierConfig(
        objectives=("f1", "f2"),
        directions={"f1": "maximize", "f2": "maximize"},
        reference_point={"f1": 0.0, "f2": 0.0},
        max_size=5,
    )


@pytest.fixture
def frontier(config: FrontierConfig) -> Frontier:
    """Empty frontier built from the two-objective config."""
    return new_frontier(config)
