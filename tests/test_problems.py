"""
Tests for the reference problems (genetics/problems).
"""

import math

import pytest

from genetics.errors import ConfigurationError
from genetics.generation import new_generation
from genetics.problems import PROBLEMS, build_problem
from genetics.problems.integer import MidpointCrossover, TargetDistanceFitness
from genetics.problems.polynomial import (
    PolynomialCost,
    PolynomialCrossover,
    PolynomialFitness,
    evaluate_polynomial,
    format_polynomial,
    polynomial_difference,
    random_polynomials,
)
from genetics.random_generator import RandomGenerator


class TestIntegerProblem:
    """Tests for the integer target problem."""

    def test_distance_cost(self):
        fitness = TargetDistanceFitness(target=100)
        assert fitness.cost(new_generation([0, 100, 130])) == [100, 0, 30]

    def test_midpoint_without_mutation(self):
        crossover = MidpointCrossover(mutation_probability=0.0)
        assert crossover.cross(new_generation([10, 21]), [], 0, 1) == 15
        assert crossover.commutes()

    def test_midpoint_mutation_moves_by_one(self):
        crossover = MidpointCrossover(mutation_probability=1.0)
        generation = new_generation([10, 20])
        with RandomGenerator(seed=8).bound():
            children = {crossover.cross(generation, [], 0, 1) for _ in range(100)}
        assert children == {14, 16}


class TestPolynomialHelpers:
    """Tests for polynomial evaluation, formatting and difference."""

    def test_evaluate(self):
        assert evaluate_polynomial([1.0, 0.0, 2.0], 3.0) == pytest.approx(19.0)

    def test_evaluate_empty_is_zero(self):
        assert float(evaluate_polynomial([], 5.0)) == 0.0

    @pytest.mark.parametrize("coefficients,expected", [
        ([1.0, 0.0, 2.0], "2x^2 + 1"),
        ([-1.5, 3.0], "3x - 1.5"),
        ([0.0, -1.0], "-1x"),
        ([4.0], "4"),
        ([], "0"),
        ([0.0, 0.0], "0"),
    ])
    def test_format(self, coefficients, expected):
        assert format_polynomial(coefficients) == expected

    def test_difference_identical_is_zero(self):
        assert polynomial_difference([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == 0.0

    def test_difference_missing_coefficients_count_fully(self):
        assert polynomial_difference([1.0, 1.0], []) == pytest.approx(1.0)

    def test_difference_short_polynomials(self):
        assert polynomial_difference([5.0], []) == 0.0
        assert polynomial_difference([], []) == 0.0

    def test_difference_symmetric_and_non_negative(self):
        one, another = [1.0, -2.0, 0.5], [3.0, 2.0]
        assert polynomial_difference(one, another) == pytest.approx(polynomial_difference(another, one))
        assert polynomial_difference(one, another) > 0.0


class TestPolynomialCost:
    """Tests for cost ordering."""

    def test_orders_by_inaccuracy_then_size(self):
        assert PolynomialCost(1.0, 5) < PolynomialCost(2.0, 1)
        assert PolynomialCost(1.0, 2) < PolynomialCost(1.0, 3)
        assert PolynomialCost(1.0, 2) == PolynomialCost(1.0, 2)

    def test_str(self):
        assert str(PolynomialCost(0.5, 3)) == "(0.5; 3)"


class TestPolynomialFitness:
    """Tests for squared-error scoring."""

    SAMPLES = [(-1.0, 0.0), (0.0, 1.0), (1.0, 6.0), (2.0, 15.0)]

    def test_exact_fit_has_zero_inaccuracy(self):
        fitness = PolynomialFitness(self.SAMPLES)
        costs = fitness.cost(new_generation([[1.0, 3.0, 2.0]]))
        assert costs[0].inaccuracy == pytest.approx(0.0)
        assert costs[0].size == 3

    def test_better_fit_ranks_lower(self):
        fitness = PolynomialFitness(self.SAMPLES)
        exact, rough = fitness.cost(new_generation([[1.0, 3.0, 2.0], [1.0, 3.0]]))
        assert exact < rough

    def test_nan_becomes_infinite(self):
        fitness = PolynomialFitness(self.SAMPLES)
        assert math.isinf(fitness.inaccuracy([float("nan")]))

    def test_overflow_is_infinite_not_error(self):
        fitness = PolynomialFitness([(10.0, 0.0)])
        assert math.isinf(fitness.inaccuracy([1e308, 1e308, 1e308]))


class TestPolynomialCrossover:
    """Tests for splice crossover and mutations."""

    def test_does_not_commute(self):
        assert not PolynomialCrossover().commutes()

    def test_parents_unchanged(self):
        generation = new_generation([[1.0, 2.0, 3.0], [4.0, 5.0]])
        crossover = PolynomialCrossover(mutation_probability=1.0)
        with RandomGenerator(seed=2).bound():
            for _ in range(100):
                child = crossover.cross(generation, [], 0, 1)
                assert isinstance(child, list)
        assert generation.specimens == [[1.0, 2.0, 3.0], [4.0, 5.0]]

    def test_child_without_mutation_is_splice(self):
        """With no mutation the child is a head of one parent plus a tail of the other."""
        one, another = [1.0, 2.0, 3.0], [4.0, 5.0]
        generation = new_generation([one, another])
        # a negative base probability keeps the threshold below any draw for these parents
        crossover = PolynomialCrossover(mutation_probability=-1.0)
        splices = {
            tuple(one[:head] + another[tail:])
            for head in range(len(one) + 1)
            for tail in range(len(another) + 1)
        }
        with RandomGenerator(seed=4).bound():
            for _ in range(50):
                assert tuple(crossover.cross(generation, [], 0, 1)) in splices

    @pytest.mark.parametrize("kind", PolynomialCrossover.MUTATIONS)
    def test_mutations_keep_a_list(self, kind):
        random = RandomGenerator(seed=6)
        child = PolynomialCrossover().mutate([1.0, -2.0, 3.0, 0.5, 7.0], kind, random)
        assert isinstance(child, list)
        assert len(child) >= 1

    def test_clamp(self):
        child = PolynomialCrossover().mutate([1.0, -2.0, 0.1], "clamp", RandomGenerator(seed=0))
        assert child == [0.25, -0.25, 0.1]

    def test_cut_tail_shortens(self):
        child = PolynomialCrossover().mutate([1.0, 2.0, 3.0], "cut_tail", RandomGenerator(seed=0))
        assert 1 <= len(child) <= 3
        assert child == [1.0, 2.0, 3.0][:len(child)]

    def test_unknown_mutation(self):
        with pytest.raises(ValueError):
            PolynomialCrossover().mutate([1.0], "teleport", RandomGenerator(seed=0))


class TestRandomPolynomials:
    """Tests for starting population generation."""

    def test_shape_and_bounds(self):
        polynomials = random_polynomials(20, RandomGenerator(seed=1), max_length=4, spread=2.0)
        assert len(polynomials) == 20
        for polynomial in polynomials:
            assert len(polynomial) <= 4
            assert all(-2.0 <= coefficient < 2.0 for coefficient in polynomial)
            assert all(isinstance(coefficient, float) for coefficient in polynomial)

    def test_same_seed_same_population(self):
        first = random_polynomials(5, RandomGenerator(seed=4))
        second = random_polynomials(5, RandomGenerator(seed=4))
        assert first == second


class TestBuildProblem:
    """Tests for the problem registry."""

    def test_registry(self):
        assert set(PROBLEMS) == {"integer", "polynomial"}

    def test_integer_defaults(self):
        problem = build_problem("integer")
        assert problem.initial_specimens == [0, 50, 150, 200]
        assert problem.fitness.target == 100
        assert problem.cost_key is None

    def test_polynomial_from_params(self):
        problem = build_problem(
            "polynomial",
            {"samples": [[0, 1], [1, 2]], "population": 5, "max_length": 3},
            RandomGenerator(seed=3),
        )
        assert len(problem.initial_specimens) == 5
        assert problem.cost_key(PolynomialCost(0.25, 2)) == 0.25
        assert problem.describe([1.0, 2.0]) == "2x + 1"

    def test_polynomial_explicit_initial(self):
        problem = build_problem("polynomial", {"samples": [[0, 1]], "initial": [[1.0], [2.0, 3.0]]})
        assert problem.initial_specimens == [[1.0], [2.0, 3.0]]

    def test_polynomial_requires_samples(self):
        with pytest.raises(ConfigurationError):
            build_problem("polynomial", {})

    def test_unknown_problem(self):
        with pytest.raises(ConfigurationError):
            build_problem("knapsack")
