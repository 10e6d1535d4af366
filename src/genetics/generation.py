"""
Population snapshot threaded through evolve() calls.

Purpose:
	Keep the specimens, the generation counter and the optional per-specimen
	ages together so they cannot drift apart.

Workflow:
	1. Caller wraps an initial specimen list with new_generation()
	2. Environment.evolve() returns a new Generation each call
	3. Caller feeds the returned Generation into the next evolve() call
"""

from dataclasses import dataclass, field
from typing import Generic, Iterable, List, Optional, TypeVar

from genetics.errors import GenerationInvariantError

Genome = TypeVar("Genome")


@dataclass
class Generation(Generic[Genome]):
	"""
	Ordered specimens plus bookkeeping.

	Attributes:
		specimens: Candidate solutions. After a culling round the order is the
			ranking (index 0 is the lowest cost); otherwise it is arbitrary.
		generation: Number of crossover rounds this lineage has gone through.
		ages: Rounds survived per specimen, or None when ages are not tracked.
	"""

	specimens: List[Genome] = field(default_factory=list)
	generation: int = 0
	ages: Optional[List[int]] = None

	def __post_init__(self):
		if self.generation < 0:
			raise GenerationInvariantError(
				f"Generation counter must be non-negative, got {self.generation}"
			)
		self.check_invariants()

	def check_invariants(self) -> None:
		"""
		Raises:
			GenerationInvariantError: If ages are tracked and their count
				differs from the specimen count.
		"""
		if self.ages is not None and len(self.ages) != len(self.specimens):
			raise GenerationInvariantError(
				f"{len(self.ages)} ages for {len(self.specimens)} specimens"
			)

	@property
	def tracks_ages(self) -> bool:
		return self.ages is not None

	def __len__(self) -> int:
		return len(self.specimens)

	def copy(self) -> "Generation[Genome]":
		"""Shallow copy with independent specimen and age lists."""
		return Generation(
			specimens=list(self.specimens),
			generation=self.generation,
			ages=None if self.ages is None else list(self.ages),
		)


def new_generation(specimens: Iterable[Genome], track_ages: bool = True) -> Generation[Genome]:
	"""
	Wrap a raw specimen list as generation zero.

	Args:
		specimens: Initial candidate solutions.
		track_ages: Start every specimen at age 0 when True; leave ages unset otherwise.

	Returns:
		Generation with counter 0.
	"""
	specimens = list(specimens)
	ages = [0] * len(specimens) if track_ages else None
	return Generation(specimens=specimens, generation=0, ages=ages)
