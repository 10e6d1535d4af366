"""
Crossover and selection strategies consumed by the evolution engine.

Purpose:
	Define the contracts the engine relies on and ship generic
	implementations that do not depend on any particular genome type.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Sequence

from genetics.generation import Generation
from genetics.random_generator import RandomGenerator


class Crossover(ABC):
	"""
	Base class for crossover operators.

	Purpose:
		Produce offspring from pairs of specimens. The engine decides which
		pairs cross and how many times; the operator only builds children.
	"""

	@abstractmethod
	def commutes(self) -> bool:
		"""Whether crossing (a, b) is equivalent to crossing (b, a)."""
		pass

	def default_offspring_amount(self) -> int:
		"""Baseline number of offspring per crossing pair."""
		return 1

	def offspring_amount(
		self, generation: Generation, costs: Sequence[Any], first: int, second: int
	) -> int:
		"""
		Multiplier on default_offspring_amount() for one pair.

		Purpose:
			Lets fitter pairs reproduce more.

		Args:
			generation: Current population. Must not be modified.
			costs: Costs from the last fitness evaluation, covering only the
				population as it was then. When culling runs less often than
				every round, len(costs) is smaller than len(generation.specimens)
				and indices at or above len(costs) have no cost.
			first: Index of the first parent.
			second: Index of the second parent.

		Returns:
			Non-negative multiplier.
		"""
		return 1

	@abstractmethod
	def cross(
		self, generation: Generation, costs: Sequence[Any], first: int, second: int
	) -> Any:
		"""
		Build one child from the specimens at indices first and second.

		Args:
			generation: Current population. Must not be modified.
			costs: Costs from the last evaluation. Must not be modified. May be
				shorter than generation.specimens, see offspring_amount().
			first: Index of the first parent.
			second: Index of the second parent.

		Returns:
			New genome. May be mutated using RandomGenerator.get_instance().
		"""
		pass


class Selection(ABC):
	"""
	Base class for selection policies.

	Purpose:
		Decide how many specimens survive culling, how often culling runs and
		when an evolve() call ends.
	"""

	@abstractmethod
	def survivors(self) -> int:
		"""Population size kept after each culling round."""
		pass

	def max_generations(self) -> Optional[int]:
		"""Crossover rounds allowed per evolve() call. None means unbounded."""
		return None

	def generations_till_elimination(self) -> int:
		"""Crossover rounds between culling rounds (1 culls every round)."""
		return 1

	def is_good_enough(self, best_genome: Any, best_cost: Any) -> bool:
		"""Early termination check, applied to the best survivor after culling."""
		return False


class TruncationSelection(Selection):
	"""
	Keep the N lowest-cost specimens.

	Args:
		survivors: Population size after culling.
		max_generations: Round budget per evolve() call, None for unbounded.
		generations_till_elimination: Rounds between culling rounds.
		good_enough_cost: Stop once the best cost is at or below this value.
		cost_key: Maps a cost to the value compared with good_enough_cost.
			None compares costs directly.
	"""

	def __init__(
		self,
		survivors: int,
		max_generations: Optional[int] = None,
		generations_till_elimination: int = 1,
		good_enough_cost: Optional[Any] = None,
		cost_key: Optional[Callable[[Any], Any]] = None,
	):
		self._survivors = survivors
		self._max_generations = max_generations
		self._generations_till_elimination = generations_till_elimination
		self.good_enough_cost = good_enough_cost
		self.cost_key = cost_key

	def survivors(self) -> int:
		return self._survivors

	def set_survivors(self, value: int):
		self._survivors = value

	def max_generations(self) -> Optional[int]:
		return self._max_generations

	def set_max_generations(self, value: Optional[int]):
		self._max_generations = value

	def generations_till_elimination(self) -> int:
		return self._generations_till_elimination

	def set_generations_till_elimination(self, value: int):
		self._generations_till_elimination = value

	def is_good_enough(self, best_genome: Any, best_cost: Any) -> bool:
		if self.good_enough_cost is None:
			return False
		if self.cost_key is not None:
			best_cost = self.cost_key(best_cost)
		return best_cost <= self.good_enough_cost


class CallableCrossover(Crossover):
	"""
	Crossover built from plain functions.

	Purpose:
		Wrap a two-parent function and an optional mutation function. Each
		child is mutated with probability mutation_probability.

	Args:
		function: Builds a child from two parent genomes.
		commutes: Whether function(a, b) is equivalent to function(b, a).
		mutate: Returns a mutated copy of a child. None disables mutation.
		mutation_probability: Chance of mutation per child, clamped to [0, 1].
	"""

	def __init__(
		self,
		function: Callable[[Any, Any], Any],
		commutes: bool = True,
		mutate: Optional[Callable[[Any], Any]] = None,
		mutation_probability: float = 0.05,
	):
		self.function = function
		self._commutes = commutes
		self.mutate = mutate
		self.mutation_probability = min(max(mutation_probability, 0.0), 1.0)

	def commutes(self) -> bool:
		return self._commutes

	def cross(self, generation: Generation, costs: Sequence[Any], first: int, second: int) -> Any:
		child = self.function(generation.specimens[first], generation.specimens[second])
		if self.mutate is not None and RandomGenerator.get_instance().chance(self.mutation_probability):
			child = self.mutate(child)
		return child
