"""
Genetics: a generic evolutionary optimization engine.

Grow a population with a pluggable crossover operator, score it with a
pluggable fitness evaluator and cull it with a pluggable selection policy.
"""

__version__ = "0.1.0"

from genetics.engine import Environment
from genetics.fitness import CallableFitness, FitnessEvaluator
from genetics.generation import Generation, new_generation
from genetics.permutation import apply_permutation_in_place, sort_to_permutation
from genetics.random_generator import RandomGenerator
from genetics.strategies import CallableCrossover, Crossover, Selection, TruncationSelection
from genetics.config import Config, EvolutionSettings

__all__ = [
	"Environment",
	"FitnessEvaluator",
	"CallableFitness",
	"Crossover",
	"CallableCrossover",
	"Selection",
	"TruncationSelection",
	"Generation",
	"new_generation",
	"RandomGenerator",
	"sort_to_permutation",
	"apply_permutation_in_place",
	"Config",
	"EvolutionSettings",
]
