"""Tests for the built-in trim strategies."""

import numpy as np
import pytest

from pareto_frontier import TrimRegistry, crowding_trim, hypervolume, hypervolume_trim, list_trims
from pareto_frontier.primitives import crowding_distance
from pareto_frontier.protocols import TrimStrategy


@pytest.fixture
def line_front() -> np.ndarray:
    """Seven evenly spaced points on a linear front."""
    f1 = np.linspace(0.1, 1.0, 7)
    return np.column_stack([f1, 1.1 - f1])


class TestBuiltins:
    """Built-in strategies are registered under their config names."""

    def test_registered(self) -> None:
        assert {"crowding", "hypervolume"} <= set(list_trims())

    @pytest.mark.parametrize("name", ["crowding", "hypervolume"])
    def test_satisfies_protocol(self, name: str) -> None:
        assert isinstance(TrimRegistry.get(name), TrimStrategy)


class TestCrowdingTrim:
    """Tests for crowding_trim."""

    def test_keeps_boundaries_then_most_isolated(self) -> None:
        objectives = np.array([[0.0, 1.0], [0.2, 0.9], [0.5, 0.5], [1.0, 0.0]])
        kept = crowding_trim()(objectives, n_keep=3)
        assert sorted(kept.tolist()) == [0, 2, 3]

    def test_boundaries_kept_while_finite_remain(self, rng: np.random.Generator) -> None:
        angles = rng.uniform(0, np.pi / 2, size=20)
        objectives = np.column_stack([np.cos(angles), np.sin(angles)])
        cd = crowding_distance(objectives)

        kept = crowding_trim()(objectives, n_keep=10)
        assert set(np.flatnonzero(np.isinf(cd))) <= set(kept.tolist())

    def test_unique_indices(self, line_front: np.ndarray) -> None:
        kept = crowding_trim()(line_front, n_keep=4)
        assert len(kept) == 4
        assert len(set(kept.tolist())) == 4

    def test_keep_all(self, line_front: np.ndarray) -> None:
        kept = crowding_trim()(line_front, n_keep=len(line_front))
        assert sorted(kept.tolist()) == list(range(len(line_front)))

    @pytest.mark.parametrize("n_keep", [0, 8])
    def test_invalid_n_keep(self, line_front: np.ndarray, n_keep: int) -> None:
        with pytest.raises(ValueError, match="n_keep"):
            crowding_trim()(line_front, n_keep=n_keep)


class TestHypervolumeTrim:
    """Tests for hypervolume_trim."""

    def test_evicts_smallest_contributor(self) -> None:
        objectives = np.array([[0.1, 1.0], [0.5, 0.5], [0.52, 0.48], [1.0, 0.1]])
        kept = hypervolume_trim()(objectives, n_keep=3, reference_point=np.zeros(2))
        assert kept.tolist() == [0, 1, 3]

    def test_single_eviction_is_optimal(self, rng: np.random.Generator) -> None:
        """Dropping one point loses the least volume possible."""
        objectives = rng.uniform(0, 1, size=(9, 3))
        reference = np.zeros(3)

        kept = hypervolume_trim()(objectives, n_keep=8, reference_point=reference)
        best = max(hypervolume(np.delete(objectives, i, axis=0), reference) for i in range(9))
        assert hypervolume(objectives[kept], reference) == pytest.approx(best)

    def test_three_objectives(self, rng: np.random.Generator) -> None:
        directions = np.abs(rng.normal(size=(10, 3)))
        objectives = directions / np.linalg.norm(directions, axis=1, keepdims=True)
        kept = hypervolume_trim()(objectives, n_keep=6, reference_point=np.zeros(3))
        assert len(set(kept.tolist())) == 6

    def test_requires_reference_point(self, line_front: np.ndarray) -> None:
        with pytest.raises(ValueError, match="requires 'reference_point'"):
            hypervolume_trim()(line_front, n_keep=3)

    @pytest.mark.parametrize("n_keep", [0, 8])
    def test_invalid_n_keep(self, line_front: np.ndarray, n_keep: int) -> None:
        with pytest.raises(ValueError, match="n_keep"):
            hypervolume_trim()(line_front, n_keep=n_keep, reference_point=np.zeros(2))
