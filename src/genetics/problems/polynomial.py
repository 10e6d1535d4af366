"""
Polynomial fitting problem.

Purpose:
	Evolve polynomials whose values match a set of (x, y) samples.
	A polynomial is a list of coefficients, lowest power first, so
	[1.0, 0.0, 2.0] is 2x^2 + 1.

Workflow:
	1. Seed a population with random_polynomials()
	2. Score with PolynomialFitness (squared error, then length)
	3. Breed with PolynomialCrossover (splice plus occasional mutation)
"""

from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

import numpy as np
from numpy.polynomial import polynomial as P

from genetics.fitness import FitnessEvaluator
from genetics.generation import Generation
from genetics.random_generator import RandomGenerator
from genetics.strategies import Crossover

Polynomial = List[float]


def evaluate_polynomial(coefficients: Sequence[float], x):
	"""
	Evaluate a polynomial at x.

	Args:
		coefficients: Lowest power first. Empty means the zero polynomial.
		x: Scalar or numpy array of points.

	Returns:
		Value(s) of the polynomial at x.
	"""
	if len(coefficients) == 0:
		return np.zeros_like(np.asarray(x, dtype=float))
	with np.errstate(over="ignore", invalid="ignore"):
		return P.polyval(x, np.asarray(coefficients, dtype=float))


def format_polynomial(coefficients: Sequence[float], variable: str = "x") -> str:
	"""Render as text, highest power first, skipping zero terms."""
	terms = []
	for power in range(len(coefficients) - 1, -1, -1):
		coefficient = coefficients[power]
		if coefficient == 0:
			continue

		magnitude = f"{abs(coefficient):g}"
		if power == 1:
			magnitude += variable
		elif power > 1:
			magnitude += f"{variable}^{power}"

		if not terms:
			terms.append(magnitude if coefficient > 0 else f"-{magnitude}")
		else:
			terms.append(f"{'+' if coefficient > 0 else '-'} {magnitude}")

	return " ".join(terms) if terms else "0"


def polynomial_difference(one: Sequence[float], another: Sequence[float]) -> float:
	"""
	Normalized structural difference between two polynomials, 0 when identical.

	Purpose:
		Shared coefficients contribute their relative distance weighted by
		power; coefficients present in only one polynomial count as fully
		different. The total is divided by the largest possible weight sum.
	"""
	min_size = min(len(one), len(another))
	max_size = max(len(one), len(another))
	if max_size <= 1:
		return 0.0

	result = 0.0
	for power in range(min_size):
		distance = abs(one[power] - another[power])
		scale = max(abs(one[power]), abs(another[power]))
		if scale > 0:
			result += distance / scale * power

	# powers min_size..max_size-1 each count as a full difference
	result += (min_size + max_size - 1) * (max_size - min_size) / 2
	return result / ((max_size - 1) * max_size / 2)


@dataclass(frozen=True, order=True)
class PolynomialCost:
	"""Squared error first, polynomial length as tie-break."""

	inaccuracy: float
	size: int

	def __str__(self):
		return f"({self.inaccuracy:g}; {self.size})"


class PolynomialFitness(FitnessEvaluator):
	"""
	Sum of squared errors over target samples.

	Args:
		samples: (x, y) pairs the polynomial should pass through.
	"""

	def __init__(self, samples: Sequence[Tuple[float, float]]):
		self.samples = [(float(x), float(y)) for x, y in samples]
		self._xs = np.array([x for x, _ in self.samples], dtype=float)
		self._ys = np.array([y for _, y in self.samples], dtype=float)

	def inaccuracy(self, coefficients: Sequence[float]) -> float:
		with np.errstate(over="ignore", invalid="ignore"):
			errors = self._ys - evaluate_polynomial(coefficients, self._xs)
			total = float(np.sum(errors * errors))
		# overflowed polynomials rank last instead of poisoning the sort
		if np.isnan(total):
			return float("inf")
		return total

	def cost(self, generation: Generation, capacity_hint: int = 0) -> List[PolynomialCost]:
		return [
			PolynomialCost(self.inaccuracy(specimen), len(specimen))
			for specimen in generation.specimens
		]


class PolynomialCrossover(Crossover):
	"""
	Splice a head of one parent onto a tail of the other.

	Purpose:
		Children of dissimilar parents mutate more often; with a difference
		above 1 - mutation_probability they always mutate.

	Args:
		mutation_probability: Base chance of mutation for identical parents.
	"""

	MUTATIONS = ("scale", "insert", "zero", "cut_head", "cut_tail", "clamp")

	def __init__(self, mutation_probability: float = 0.5):
		self.mutation_probability = mutation_probability

	def commutes(self) -> bool:
		return False

	def cross(self, generation: Generation, costs: Sequence[Any], first: int, second: int) -> Polynomial:
		one = generation.specimens[first]
		another = generation.specimens[second]
		random = RandomGenerator.get_instance()

		head = random.uniform_int(0, len(one))
		tail = random.uniform_int(0, len(another))
		child = list(one[:head]) + list(another[tail:])

		difference = polynomial_difference(one, another)
		if not child or random.uniform_float(0.0, 1.0) > self.mutation_probability + difference:
			return child

		kind = self.MUTATIONS[random.uniform_int(0, len(self.MUTATIONS) - 1)]
		return self.mutate(child, kind, random)

	def mutate(self, child: Polynomial, kind: str, random: RandomGenerator) -> Polynomial:
		"""
		Apply one mutation to a non-empty polynomial.

		Args:
			child: Polynomial to mutate in place.
			kind: One of MUTATIONS.
			random: Source of randomness.

		Returns:
			The mutated polynomial.
		"""
		if kind == "scale":
			factor = random.uniform_float(-3.0, 3.0)
			child[:] = [coefficient * factor for coefficient in child]
		elif kind == "insert":
			for _ in range(random.uniform_int(0, len(child) // 4)):
				cell = random.uniform_int(0, len(child) - 1)
				child.insert(cell, random.uniform_float(-1.0, 1.0))
		elif kind == "zero":
			for _ in range(random.uniform_int(0, len(child) // 4)):
				child[random.uniform_int(0, len(child) - 1)] = 0.0
		elif kind == "cut_head":
			del child[:random.uniform_int(0, len(child) - 1)]
		elif kind == "cut_tail":
			del child[random.uniform_int(0, len(child) - 1) + 1:]
		elif kind == "clamp":
			child[:] = [min(max(coefficient, -0.25), 0.25) for coefficient in child]
		else:
			raise ValueError(f"Unknown mutation: {kind}")
		return child


def random_polynomials(
	count: int,
	random: RandomGenerator,
	max_length: int = 10,
	spread: float = 10.0,
) -> List[Polynomial]:
	"""
	Generate a starting population.

	Args:
		count: Number of polynomials.
		random: Source of randomness.
		max_length: Longest polynomial (coefficient count) to generate.
		spread: Coefficients are drawn from [-spread, spread).

	Returns:
		List of polynomials, possibly including empty ones.
	"""
	return [
		random.numpy.uniform(-spread, spread, size=random.uniform_int(0, max_length)).tolist()
		for _ in range(count)
	]
