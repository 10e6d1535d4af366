"""
Shared pytest fixtures for test suite.
Provides small strategy implementations and ready-made populations.
"""

import pytest
from typing import Any, List, Optional, Sequence

from genetics.fitness import CallableFitness, FitnessEvaluator
from genetics.generation import Generation, new_generation
from genetics.strategies import CallableCrossover, Crossover, Selection, TruncationSelection


# ===== Strategy Helpers =====

class RecordingCrossover(Crossover):
    """Crossover that records every pair it is asked to cross."""

    def __init__(self, commutes: bool = True, default_amount: int = 1, amounts=None):
        self._commutes = commutes
        self.default_amount = default_amount
        self.amounts = amounts or {}
        self.pairs: List[tuple] = []

    def commutes(self) -> bool:
        return self._commutes

    def default_offspring_amount(self) -> int:
        return self.default_amount

    def offspring_amount(self, generation, costs, first, second) -> int:
        return self.amounts.get((first, second), 1)

    def cross(self, generation, costs, first, second):
        self.pairs.append((first, second))
        return (generation.specimens[first] + generation.specimens[second]) // 2


class RecordingSelection(TruncationSelection):
    """Truncation selection that remembers every goal check."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.checks: List[tuple] = []

    def is_good_enough(self, best_genome, best_cost) -> bool:
        self.checks.append((best_genome, best_cost))
        return super().is_good_enough(best_genome, best_cost)


def distance_to(target: int) -> FitnessEvaluator:
    """Fitness with cost |genome - target|."""
    return CallableFitness(lambda genome: abs(genome - target))


def midpoint() -> Crossover:
    """Deterministic commuting midpoint crossover."""
    return CallableCrossover(lambda a, b: (a + b) // 2, commutes=True)


# ===== Population Fixtures =====

@pytest.fixture
def four_integers() -> Generation:
    """Starting population around the target 100."""
    return new_generation([0, 50, 150, 200])


@pytest.fixture
def two_integers() -> Generation:
    """Two parents whose midpoint hits the target 100."""
    return new_generation([0, 200])


# ===== Strategy Fixtures =====

@pytest.fixture
def target_fitness() -> FitnessEvaluator:
    """Distance to 100."""
    return distance_to(100)


@pytest.fixture
def midpoint_crossover() -> Crossover:
    """Midpoint crossover without mutation."""
    return midpoint()
