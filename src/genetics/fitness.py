"""
Fitness evaluation interfaces.

Purpose:
	Score a whole generation at once. Lower cost is better.
"""

from typing import Any, Callable, Generic, List, TypeVar

from genetics.generation import Generation

Cost = TypeVar("Cost")


class FitnessEvaluator(Generic[Cost]):
	"""
	Base fitness evaluator interface.

	Purpose:
		Provide costs for every specimen of a generation in one call, so a
		specimen's cost may depend on the rest of the population and the
		evaluator is free to parallelise the per-specimen work internally.

	Workflow:
		1. Engine calls cost() with the full generation
		2. Evaluator returns one cost per specimen, in specimen order
	"""

	def cost(self, generation: Generation, capacity_hint: int = 0) -> List[Cost]:
		"""
		Compute costs for the entire generation.

		Args:
			generation: Population snapshot. Must not be modified.
			capacity_hint: Expected population size at the next culling round.
				Evaluators that preallocate buffers may use it; others ignore it.

		Returns:
			Exactly len(generation.specimens) costs, aligned by index.
		"""
		raise NotImplementedError


class CallableFitness(FitnessEvaluator):
	"""
	Scores each specimen independently with a plain function.

	Args:
		function: Maps one genome to its cost.
	"""

	def __init__(self, function: Callable[[Any], Any]):
		self.function = function

	def cost(self, generation: Generation, capacity_hint: int = 0) -> List[Any]:
		return [self.function(specimen) for specimen in generation.specimens]
