"""
Reference problems for the evolution engine.

Purpose:
	Ready-made fitness and crossover pairs used by the command line runner
	and the end-to-end tests.

Workflow:
	1. build_problem() with a name and the config's problem section
	2. Hand problem.fitness / problem.crossover to an Environment
	3. Seed the first generation from problem.initial_specimens
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from genetics.errors import ConfigurationError
from genetics.fitness import FitnessEvaluator
from genetics.random_generator import RandomGenerator
from genetics.strategies import Crossover
from genetics.problems.integer import MidpointCrossover, TargetDistanceFitness
from genetics.problems.polynomial import (
	PolynomialCost,
	PolynomialCrossover,
	PolynomialFitness,
	format_polynomial,
	random_polynomials,
)


@dataclass
class Problem:
	"""
	Everything needed to run one problem.

	Attributes:
		name: Registered problem name
		fitness: Fitness evaluator
		crossover: Crossover operator
		initial_specimens: Starting population
		cost_key: Maps a cost to a number for goal checks, None when costs are numbers
		describe: Renders a genome for display
	"""

	name: str
	fitness: FitnessEvaluator
	crossover: Crossover
	initial_specimens: List[Any]
	cost_key: Optional[Callable[[Any], Any]] = None
	describe: Callable[[Any], str] = str


def _integer_problem(params: Dict[str, Any], random: RandomGenerator) -> Problem:
	return Problem(
		name="integer",
		fitness=TargetDistanceFitness(target=params.get("target", 100)),
		crossover=MidpointCrossover(mutation_probability=params.get("mutation_probability", 0.3)),
		initial_specimens=list(params.get("initial", [0, 50, 150, 200])),
	)


def _polynomial_problem(params: Dict[str, Any], random: RandomGenerator) -> Problem:
	samples = params.get("samples")
	if not samples:
		raise ConfigurationError("polynomial problem needs a non-empty 'samples' list of [x, y] pairs")

	initial = params.get("initial")
	if initial is None:
		initial = random_polynomials(
			params.get("population", 8),
			random,
			max_length=params.get("max_length", 10),
			spread=params.get("spread", 10.0),
		)

	return Problem(
		name="polynomial",
		fitness=PolynomialFitness([tuple(sample) for sample in samples]),
		crossover=PolynomialCrossover(mutation_probability=params.get("mutation_probability", 0.5)),
		initial_specimens=[list(coefficients) for coefficients in initial],
		cost_key=lambda cost: cost.inaccuracy,
		describe=format_polynomial,
	)


PROBLEMS = {
	"integer": _integer_problem,
	"polynomial": _polynomial_problem,
}


def build_problem(name: str, params: Optional[Dict[str, Any]] = None, random: Optional[RandomGenerator] = None) -> Problem:
	"""
	Construct a registered problem.

	Args:
		name: Key of PROBLEMS
		params: Problem parameters from the config's problem section
		random: Generator used to seed random initial populations

	Returns:
		Problem instance

	Raises:
		ConfigurationError: Unknown name or invalid parameters
	"""
	if name not in PROBLEMS:
		raise ConfigurationError(f"Unknown problem: {name}. Available: {sorted(PROBLEMS)}")
	return PROBLEMS[name](params or {}, random or RandomGenerator.get_instance())


__all__ = [
	"Problem",
	"PROBLEMS",
	"build_problem",
	"MidpointCrossover",
	"TargetDistanceFitness",
	"PolynomialCost",
	"PolynomialCrossover",
	"PolynomialFitness",
]
