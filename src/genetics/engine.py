"""
Evolution engine coordinating crossover, fitness and selection.
"""
import logging
from typing import Any, List, Optional

from genetics.errors import (
	EmptyPopulationError,
	FitnessContractError,
	OffspringContractError,
	SelectionContractError,
	ConfigurationError,
)
from genetics.fitness import FitnessEvaluator
from genetics.generation import Generation
from genetics.permutation import apply_permutation_in_place, sort_to_permutation
from genetics.random_generator import RandomGenerator
from genetics.strategies import Crossover, Selection

logger = logging.getLogger(__name__)


class Environment:
	"""
	Orchestrates the evolutionary loop.

	Purpose:
		Expand a population through crossover, periodically score and cull it,
		and stop when the selection policy's budget or goal is reached.

	Workflow:
		1. Estimate the population size at the next culling round
		2. Score the incoming generation
		3. Repeat:
			a. Crossover round over every pair of the current specimens
			b. Advance the generation counter
			c. On culling rounds: rescore, rank, truncate, check the goal
			d. Stop once the round budget is spent

	Notes:
		The capacity estimate is a heuristic. offspring_amount() overrides can
		push real growth past it; the lists simply grow.

		If the round budget ends the call on a round without culling, the
		returned generation is the expanded, uneliminated population and
		last_costs still describes the population as of the previous scoring.
		Chained evolve() calls rescore on entry, so this is safe to feed back in.
	"""
	def __init__(
		self,
		fitness: FitnessEvaluator,
		crossover: Crossover,
		selection: Selection,
		lanes: int = 1,
		seed: Optional[int] = None,
	):
		"""
		Args:
			fitness: Scores a whole generation
			crossover: Builds offspring from specimen pairs
			selection: Survivor count, culling cadence and stop conditions
			lanes: Reserved for parallel crossover; currently has no effect
			seed: Seed a dedicated random generator for evolve() calls. None uses
				the shared process-wide generator.
		"""
		if lanes < 1:
			raise ConfigurationError(f"lanes must be at least 1, got {lanes}")

		self.fitness = fitness
		self.crossover = crossover
		self.selection = selection
		self.lanes = lanes
		self.random = RandomGenerator(seed) if seed is not None else None

		self.last_costs: List[Any] = []
		self.rounds_executed = 0

	def estimate_capacity(self) -> int:
		"""
		Estimate the population size right before the next culling round.

		Purpose:
			Starting from the survivor count, every round adds one batch of
			default_offspring_amount() children per crossing pair.

		Returns:
			Estimated specimen count.
		"""
		size = self.selection.survivors()
		commutes = self.crossover.commutes()
		offspring = self.crossover.default_offspring_amount()

		for _ in range(self.selection.generations_till_elimination()):
			growth = size * size - size
			if commutes:
				growth //= 2
			size += growth * offspring

		return size

	def evolve(self, generation: Generation) -> Generation:
		"""
		Run crossover and culling rounds until a stop condition fires.

		Args:
			generation: Starting population. Not modified.

		Returns:
			New Generation as left by the final round.

		Raises:
			EmptyPopulationError: No specimens or zero survivors
			SelectionContractError: Culling cadence below 1 or a zero round budget
			FitnessContractError: Fitness evaluator returned the wrong number of costs
			OffspringContractError: Crossover asked for a negative offspring count
		"""
		survivors = self.selection.survivors()
		period = self.selection.generations_till_elimination()
		max_generations = self.selection.max_generations()
		self._check_entry(generation, survivors, period, max_generations)

		if self.random is None:
			return self._run(generation, survivors, period, max_generations)
		with self.random.bound():
			return self._run(generation, survivors, period, max_generations)

	def _check_entry(
		self,
		generation: Generation,
		survivors: int,
		period: int,
		max_generations: Optional[int],
	):
		"""
		Validate the incoming generation and selection settings.

		Args:
			generation: Incoming population
			survivors: Selection survivor count
			period: Rounds between culling rounds
			max_generations: Round budget or None
		"""
		generation.check_invariants()
		if not generation.specimens:
			raise EmptyPopulationError("Cannot evolve an empty generation")
		if survivors <= 0:
			raise EmptyPopulationError(f"Selection keeps {survivors} survivors")
		if period < 1:
			raise SelectionContractError(
				f"generations_till_elimination must be at least 1, got {period}"
			)
		if max_generations is not None and max_generations < 1:
			raise SelectionContractError(
				f"max_generations must be None or at least 1, got {max_generations}"
			)

	def _run(
		self,
		generation: Generation,
		survivors: int,
		period: int,
		max_generations: Optional[int],
	) -> Generation:
		"""
		Main loop body of evolve().

		Returns:
			Resulting generation
		"""
		current = generation.copy()
		capacity = self.estimate_capacity()
		logger.info(
			f"Evolving {len(current)} specimens from generation {current.generation}: "
			f"survivors={survivors}, culling every {period} rounds, "
			f"budget={max_generations}, capacity estimate={capacity}"
		)

		costs = self._score(current, capacity)
		overrun_reported = False
		rounds = 0

		while True:
			self._crossover_round(current, costs)
			current.generation += 1
			rounds += 1

			if not overrun_reported and len(current) > capacity:
				logger.debug(
					f"Population {len(current)} exceeded capacity estimate {capacity}"
				)
				overrun_reported = True

			if current.generation % period == 0:
				costs = self._score(current, capacity)
				self._cull(current, costs, survivors)
				logger.debug(
					f"Generation {current.generation}: culled to {len(current)}, best cost = {costs[0]}"
				)
				if self.selection.is_good_enough(current.specimens[0], costs[0]):
					logger.info(f"Goal reached at generation {current.generation}")
					break

			if max_generations is not None and rounds >= max_generations:
				break

		self.last_costs = costs
		self.rounds_executed = rounds
		logger.info(
			f"Stopped after {rounds} rounds at generation {current.generation} "
			f"with {len(current)} specimens"
		)
		return current

	def _score(self, generation: Generation, capacity: int) -> List[Any]:
		"""
		Score the full generation and check the result length.

		Args:
			generation: Population to score
			capacity: Capacity hint for the evaluator

		Returns:
			One cost per specimen
		"""
		costs = list(self.fitness.cost(generation, capacity))
		if len(costs) != len(generation.specimens):
			raise FitnessContractError(len(generation.specimens), len(costs))
		return costs

	def _crossover_round(self, generation: Generation, costs: List[Any]):
		"""
		Append offspring for every pair of the specimens present at round start.

		Purpose:
			Parents age by one, children start at age zero and do not take
			part in pairings until the next round. Costs are left untouched.

		Args:
			generation: Population to expand in place
			costs: Costs from the last scoring, passed through to the operator
		"""
		parents = len(generation.specimens)
		if generation.ages is not None:
			for index in range(parents):
				generation.ages[index] += 1

		commutes = self.crossover.commutes()
		baseline = self.crossover.default_offspring_amount()
		if baseline < 0:
			raise OffspringContractError(f"default_offspring_amount returned {baseline}")

		for first in range(parents):
			for second in range(first + 1 if commutes else 0, parents):
				if first == second:
					continue
				multiplier = self.crossover.offspring_amount(generation, costs, first, second)
				if multiplier < 0:
					raise OffspringContractError(
						f"offspring_amount returned {multiplier} for pair ({first}, {second})"
					)
				for _ in range(multiplier * baseline):
					child = self.crossover.cross(generation, costs, first, second)
					generation.specimens.append(child)
					if generation.ages is not None:
						generation.ages.append(0)

		logger.debug(
			f"Crossover produced {len(generation.specimens) - parents} offspring from {parents} parents"
		)

	def _cull(self, generation: Generation, costs: List[Any], survivors: int):
		"""
		Rank by ascending cost and keep the best survivors.

		Purpose:
			Specimens, ages and costs are reordered together so index 0 holds
			the lowest cost. Order among equal costs is whatever sorted() leaves.

		Args:
			generation: Population to cull in place
			costs: Fresh costs for the population, reordered and truncated too
			survivors: Number of specimens to keep
		"""
		permutation = sort_to_permutation(costs)

		apply_permutation_in_place(generation.specimens, list(permutation))
		if generation.ages is not None:
			apply_permutation_in_place(generation.ages, list(permutation))
		apply_permutation_in_place(costs, permutation)

		del generation.specimens[survivors:]
		if generation.ages is not None:
			del generation.ages[survivors:]
		del costs[survivors:]
