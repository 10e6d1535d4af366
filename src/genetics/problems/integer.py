"""
Integer target problem: evolve integers toward a fixed value.
"""

from typing import Any, List, Sequence

from genetics.fitness import FitnessEvaluator
from genetics.generation import Generation
from genetics.random_generator import RandomGenerator
from genetics.strategies import Crossover


class TargetDistanceFitness(FitnessEvaluator):
	"""Cost is the absolute distance to the target."""

	def __init__(self, target: int = 100):
		self.target = target

	def cost(self, generation: Generation, capacity_hint: int = 0) -> List[int]:
		return [abs(specimen - self.target) for specimen in generation.specimens]


class MidpointCrossover(Crossover):
	"""
	Child is the integer midpoint of its parents.

	Args:
		mutation_probability: Chance of nudging the child by one in a random direction.
	"""

	def __init__(self, mutation_probability: float = 0.3):
		self.mutation_probability = mutation_probability

	def commutes(self) -> bool:
		return True

	def cross(self, generation: Generation, costs: Sequence[Any], first: int, second: int) -> int:
		specimens = generation.specimens
		child = (specimens[first] + specimens[second]) // 2

		random = RandomGenerator.get_instance()
		if random.chance(self.mutation_probability):
			child += 1 if random.uniform_int(0, 1) else -1
		return child
