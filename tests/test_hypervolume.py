"""Tests for the hypervolume indicator.

Exact values are cross-checked against pymoo's HV indicator, which works in
minimization: a maximize point set P with reference r has the same volume as
-P with reference -r.
"""

import math

import numpy as np
import pytest
from pymoo.indicators.hv import HV

from pareto_frontier import (
    DegenerateReferencePoint,
    EmptyPopulation,
    FrontierConfig,
    InvalidObjective,
    apply_generation,
    auto_reference_point,
    calculate,
    contribution,
    exclusive_contributions,
    hypervolume,
    improvement,
    new_frontier,
)


def reference_hypervolume(points: np.ndarray, reference: np.ndarray) -> float:
    return float(HV(ref_point=-reference)(-points))


# =============================================================================
# Array level
# =============================================================================


class TestHypervolume:
    """Tests for the array-level hypervolume function."""

    def test_single_point_is_box(self) -> None:
        assert hypervolume(np.array([[0.5, 0.4]]), np.zeros(2)) == pytest.approx(0.2)

    def test_two_points_2d(self) -> None:
        points = np.array([[0.8, 0.2], [0.5, 0.6]])
        assert hypervolume(points, np.zeros(2)) == pytest.approx(0.36)

    def test_overlapping_boxes_3d(self) -> None:
        """Two boxes minus their shared region."""
        points = np.array([[1.0, 0.5, 0.5], [0.5, 1.0, 0.5]])
        assert hypervolume(points, np.zeros(3)) == pytest.approx(0.375)

    def test_one_objective(self) -> None:
        """With one objective the volume is the best distance from the reference."""
        assert hypervolume(np.array([[0.3], [0.7]]), np.array([0.1])) == pytest.approx(0.6)

    def test_empty_set(self) -> None:
        assert hypervolume(np.zeros((0, 3)), np.zeros(3)) == 0.0

    def test_dominated_points_add_nothing(self) -> None:
        front = np.array([[0.9, 0.3], [0.6, 0.6], [0.2, 0.95]])
        with_dominated = np.vstack([front, [[0.5, 0.5], [0.1, 0.1]]])
        assert hypervolume(with_dominated, np.zeros(2)) == pytest.approx(hypervolume(front, np.zeros(2)))

    def test_duplicates_add_nothing(self) -> None:
        points = np.array([[0.7, 0.4], [0.3, 0.8]])
        doubled = np.vstack([points, points])
        assert hypervolume(doubled, np.zeros(2)) == pytest.approx(hypervolume(points, np.zeros(2)))

    def test_points_behind_reference_add_nothing(self) -> None:
        """A point not strictly beyond the reference on every axis has no volume."""
        reference = np.array([0.2, 0.2])
        assert hypervolume(np.array([[0.9, 0.2]]), reference) == 0.0
        assert hypervolume(np.array([[0.9, 0.1], [0.5, 0.5]]), reference) == pytest.approx(0.09)

    def test_shape_mismatch_raises(self) -> None:
        with pytest.raises(ValueError, match="reference point has 3"):
            hypervolume(np.ones((2, 2)), np.zeros(3))

    def test_non_finite_raises(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            hypervolume(np.array([[np.nan, 0.5]]), np.zeros(2))

    @pytest.mark.parametrize(("n_obj", "n_points"), [(2, 40), (3, 25), (4, 12)])
    def test_matches_pymoo(self, rng: np.random.Generator, n_obj: int, n_points: int) -> None:
        """Exact volume agrees with an independent implementation."""
        points = rng.uniform(0.05, 1.0, size=(n_points, n_obj))
        reference = np.zeros(n_obj)
        assert hypervolume(points, reference) == pytest.approx(reference_hypervolume(points, reference), rel=1e-9)

    @pytest.mark.parametrize("n_obj", [2, 3, 4])
    def test_matches_pymoo_on_front(self, rng: np.random.Generator, n_obj: int) -> None:
        """Points on a concave front (all mutually non-dominated)."""
        directions = np.abs(rng.normal(size=(15, n_obj)))
        points = directions / np.linalg.norm(directions, axis=1, keepdims=True)
        reference = np.full(n_obj, 0.01)
        assert hypervolume(points, reference) == pytest.approx(reference_hypervolume(points, reference), rel=1e-9)

    def test_adding_point_never_decreases(self, rng: np.random.Generator) -> None:
        points = rng.uniform(0, 1, size=(10, 3))
        reference = np.zeros(3)
        before = hypervolume(points, reference)
        after = hypervolume(np.vstack([points, rng.uniform(0, 1, size=(1, 3))]), reference)
        assert after >= before - 1e-12


class TestExclusiveContributions:
    """Tests for exclusive_contributions."""

    def test_two_points_2d(self) -> None:
        points = np.array([[0.8, 0.2], [0.5, 0.6]])
        np.testing.assert_allclose(exclusive_contributions(points, np.zeros(2)), [0.06, 0.2])

    def test_dominated_contributes_zero(self) -> None:
        points = np.array([[0.8, 0.8], [0.5, 0.5]])
        np.testing.assert_allclose(exclusive_contributions(points, np.zeros(2)), [0.39, 0.0])

    def test_duplicates_contribute_zero(self) -> None:
        points = np.array([[0.6, 0.6], [0.6, 0.6]])
        np.testing.assert_allclose(exclusive_contributions(points, np.zeros(2)), [0.0, 0.0])

    def test_equals_leave_one_out(self, rng: np.random.Generator) -> None:
        """Each contribution is the volume lost by removing that point."""
        points = rng.uniform(0, 1, size=(8, 3))
        reference = np.zeros(3)
        total = hypervolume(points, reference)
        expected = [total - hypervolume(np.delete(points, i, axis=0), reference) for i in range(len(points))]
        np.testing.assert_allclose(exclusive_contributions(points, reference), expected, atol=1e-12)


# =============================================================================
# Candidate level
# =============================================================================


class TestCalculate:
    """Tests for calculate over candidates."""

    def test_matches_array_level(self, make_candidate) -> None:
        solutions = [make_candidate("a", [0.8, 0.2]), make_candidate("b", [0.5, 0.6])]
        assert calculate(solutions, {"f1": 0.0, "f2": 0.0}, ["f1", "f2"]) == pytest.approx(0.36)

    def test_empty_warns(self) -> None:
        with pytest.warns(EmptyPopulation):
            assert calculate([], {"f1": 0.0}, ["f1"]) == 0.0

    def test_reference_missing_objective(self, make_candidate) -> None:
        with pytest.raises(InvalidObjective, match="reference point is missing objectives: f2"):
            calculate([make_candidate("a", [0.8, 0.2])], {"f1": 0.0}, ["f1", "f2"])

    def test_reference_must_be_finite(self, make_candidate) -> None:
        with pytest.raises(InvalidObjective, match="finite number"):
            calculate([make_candidate("a", [0.8, 0.2])], {"f1": 0.0, "f2": math.inf}, ["f1", "f2"])


class TestContribution:
    """Tests for per-solution contributions."""

    def test_keyed_by_id(self, make_candidate) -> None:
        solutions = [make_candidate("a", [0.8, 0.2]), make_candidate("b", [0.5, 0.6])]
        result = contribution(solutions, {"f1": 0.0, "f2": 0.0}, ["f1", "f2"])
        assert result == {"a": pytest.approx(0.06), "b": pytest.approx(0.2)}

    def test_single_solution_contributes_everything(self, make_candidate) -> None:
        result = contribution([make_candidate("a", [0.5, 0.5])], {"f1": 0.0, "f2": 0.0}, ["f1", "f2"])
        assert result == {"a": pytest.approx(0.25)}

    def test_empty(self) -> None:
        assert contribution([], {"f1": 0.0}, ["f1"]) == {}

    def test_degenerate_reference_point(self, make_candidate) -> None:
        """A reference point no solution dominates is an error."""
        solutions = [make_candidate("a", [0.4, 0.9]), make_candidate("b", [0.9, 0.4])]
        with pytest.raises(DegenerateReferencePoint):
            contribution(solutions, {"f1": 0.95, "f2": 0.95}, ["f1", "f2"])


class TestAutoReferencePoint:
    """Tests for auto_reference_point."""

    def test_nadir_minus_margin(self, make_candidate) -> None:
        candidates = [make_candidate("a", [0.3, 0.9]), make_candidate("b", [0.8, 0.5])]
        reference = auto_reference_point(candidates, ["f1", "f2"], margin=0.1)
        assert reference == {"f1": pytest.approx(0.2), "f2": pytest.approx(0.4)}

    def test_clamped_at_zero(self, make_candidate) -> None:
        reference = auto_reference_point([make_candidate("a", [0.05, 0.5])], ["f1", "f2"])
        assert reference["f1"] == 0.0

    def test_no_candidates_gives_origin(self) -> None:
        assert auto_reference_point([], ["f1", "f2"]) == {"f1": 0.0, "f2": 0.0}

    def test_negative_margin_raises(self) -> None:
        with pytest.raises(ValueError, match="margin must be non-negative"):
            auto_reference_point([], ["f1"], margin=-0.1)

    def test_dominated_by_every_candidate(self, rng, make_candidate) -> None:
        candidates = [make_candidate(f"c{i}", rng.uniform(0.2, 1.0, size=2)) for i in range(10)]
        reference = auto_reference_point(candidates, ["f1", "f2"])
        for c in candidates:
            assert all(c.normalized[name] > reference[name] for name in ("f1", "f2"))


class TestImprovement:
    """Tests for improvement between two frontiers."""

    def test_ratio(self, frontier, make_candidate) -> None:
        previous = apply_generation(frontier, [make_candidate("a", [0.5, 0.5])])
        current = apply_generation(previous, [make_candidate("b", [1.0, 0.5])])

        ratio, volume = improvement(current, previous)
        assert volume == pytest.approx(0.5)
        assert ratio == pytest.approx(2.0)

    def test_from_empty_is_infinite(self, frontier, make_candidate) -> None:
        current = apply_generation(frontier, [make_candidate("a", [0.5, 0.5])])
        ratio, volume = improvement(current, frontier)
        assert math.isinf(ratio)
        assert volume == pytest.approx(0.25)

    def test_both_empty(self, frontier) -> None:
        assert improvement(frontier, frontier) == (1.0, 0.0)

    def test_no_change(self, frontier, make_candidate) -> None:
        current = apply_generation(frontier, [make_candidate("a", [0.5, 0.5])])
        ratio, _ = improvement(current, current)
        assert ratio == pytest.approx(1.0)

    def test_different_reference_points_raise(self, config, frontier) -> None:
        other = new_frontier(
            FrontierConfig(
                objectives=config.objectives,
                directions=config.directions,
                reference_point={"f1": 0.1, "f2": 0.1},
            )
        )
        with pytest.raises(ValueError, match="different reference points"):
            improvement(frontier, other)

    def test_different_objectives_raise(self, frontier) -> None:
        other = new_frontier(
            FrontierConfig(objectives=("f1",), directions={"f1": "maximize"}, reference_point={"f1": 0.0})
        )
        with pytest.raises(ValueError, match="different objectives"):
            improvement(frontier, other)
