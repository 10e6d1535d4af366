"""
Evolution Runner Script.

Purpose:
	Run one of the reference problems through the evolution engine.

Workflow:
	1. Load configuration
	2. Build the problem, selection policy and environment
	3. Evolve in chunks, reporting progress
	4. Print the best survivors

Usage:
	python scripts/run_evolution.py --config configs/integer_target.yaml
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from genetics.config import Config, EvolutionSettings
from genetics.engine import Environment
from genetics.errors import ConfigurationError
from genetics.generation import Generation, new_generation
from genetics.problems import Problem, build_problem
from genetics.random_generator import RandomGenerator
from genetics.strategies import TruncationSelection

logger = logging.getLogger("run_evolution")


def load_config(config_path: str) -> Config:
	"""
	Load configuration, failing if the file does not exist.

	Args:
		config_path: Path to config file

	Returns:
		Config instance
	"""
	if not Path(config_path).exists():
		raise FileNotFoundError(f"Config file not found: {config_path}")
	return Config.from_file(config_path)


def create_selection(settings: EvolutionSettings, problem: Problem) -> TruncationSelection:
	"""
	Create the selection policy from settings.

	Args:
		settings: Evolution settings
		problem: Problem supplying the cost key for goal checks

	Returns:
		TruncationSelection instance
	"""
	return TruncationSelection(
		survivors=settings.survivors,
		max_generations=settings.max_generations,
		generations_till_elimination=settings.generations_till_elimination,
		good_enough_cost=settings.good_enough_cost,
		cost_key=problem.cost_key,
	)


def create_environment(
	settings: EvolutionSettings,
	problem: Problem,
	selection: TruncationSelection,
	random: RandomGenerator,
) -> Environment:
	"""
	Create the engine for a problem.

	Purpose:
		With a configured seed, the engine's seed is drawn from the generator
		that built the initial population, so the run is reproducible but
		evolve() does not replay the draws made for the starting specimens.

	Args:
		settings: Evolution settings
		problem: Problem supplying fitness and crossover
		selection: Selection policy
		random: Generator already used to build the problem

	Returns:
		Environment instance
	"""
	engine_seed = None if settings.seed is None else random.uniform_int(0, 2**31 - 1)
	return Environment(
		problem.fitness,
		problem.crossover,
		selection,
		lanes=settings.lanes,
		seed=engine_seed,
	)


def run_chunked(
	environment: Environment,
	selection: TruncationSelection,
	generation: Generation,
	total_generations: int,
	chunk: int,
	show_progress: bool = True,
) -> Generation:
	"""
	Evolve for total_generations rounds, one evolve() call per chunk.

	Purpose:
		Report progress between calls. Stops early once a chunk ends before
		spending its budget, since that only happens when the goal is reached.

	Args:
		environment: Configured environment
		selection: Selection policy whose budget is set per chunk
		generation: Starting generation
		total_generations: Total rounds to run
		chunk: Rounds per evolve() call
		show_progress: Display a tqdm progress bar

	Returns:
		Final generation
	"""
	chunk = max(1, min(chunk, total_generations))
	remaining = total_generations

	with tqdm(total=total_generations, desc="Evolving", disable=not show_progress) as progress_bar:
		while remaining > 0:
			budget = min(chunk, remaining)
			selection.set_max_generations(budget)
			generation = environment.evolve(generation)
			progress_bar.update(environment.rounds_executed)
			remaining -= environment.rounds_executed
			if environment.rounds_executed < budget:
				break

	return generation


def report(environment: Environment, generation: Generation, problem: Problem, limit: int = 10):
	"""
	Print the best specimens with their costs and ages.

	Args:
		environment: Environment used for the run
		generation: Final generation
		problem: Problem supplying the genome formatter
		limit: Maximum specimens to print
	"""
	costs = environment.fitness.cost(generation)
	ranked = sorted(range(len(generation.specimens)), key=costs.__getitem__)

	print(f"Generations: {generation.generation}")
	print(f"Population: {len(generation.specimens)}")
	for rank, index in enumerate(ranked[:limit]):
		age = generation.ages[index] if generation.ages is not None else "-"
		print(f"{rank:3d}. {problem.describe(generation.specimens[index])}  cost={costs[index]}  age={age}")


def main(argv: Optional[list] = None) -> int:
	"""
	Main entry point.

	Workflow:
		1. Parse arguments
		2. Load config and build components
		3. Evolve
		4. Report
	"""
	parser = argparse.ArgumentParser(description='Run an evolution problem')
	parser.add_argument('--config', type=str, required=True, help='Path to YAML config')
	parser.add_argument('--generations', type=int, default=None, help='Total rounds (overrides config)')
	parser.add_argument('--chunk', type=int, default=10, help='Rounds per evolve call')
	parser.add_argument('--seed', type=int, default=None, help='Random seed (overrides config)')
	parser.add_argument('--no-progress', action='store_true', help='Hide the progress bar')
	parser.add_argument('--verbose', action='store_true', help='Log every round')
	args = parser.parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

	config = load_config(args.config)
	if args.seed is not None:
		config.set('evolution.seed', args.seed)
	if args.generations is not None:
		config.set('evolution.max_generations', args.generations)

	try:
		settings = EvolutionSettings.from_config(config)
		random = RandomGenerator(settings.seed)
		problem = build_problem(config.get('problem.name', 'integer'), config.get('problem.params', {}), random)
	except ConfigurationError as e:
		logger.error(f"Invalid configuration: {e}")
		return 2

	if settings.max_generations is None:
		logger.error("Set evolution.max_generations or pass --generations")
		return 2

	selection = create_selection(settings, problem)
	environment = create_environment(settings, problem, selection, random)

	logger.info(f"Problem: {problem.name}")
	logger.info(f"Capacity estimate: {environment.estimate_capacity()}")

	generation = new_generation(problem.initial_specimens, track_ages=settings.track_ages)
	generation = run_chunked(
		environment,
		selection,
		generation,
		settings.max_generations,
		args.chunk,
		show_progress=not args.no_progress,
	)

	report(environment, generation, problem)
	return 0


if __name__ == '__main__':
	sys.exit(main())
