"""
Process-wide random number source.

Purpose:
	Supply uniform floats and integers to crossover and mutation code.
	One numpy generator is created lazily per process and seeded from OS
	entropy. An engine built with an explicit seed binds its own generator
	for the duration of an evolve call, so strategies that call
	RandomGenerator.get_instance() draw from the seeded stream instead.

Notes:
	No thread-safety guarantee is given. Concurrent draws from several
	threads on the shared instance are unsupported.
"""

import contextlib
import contextvars
from typing import Iterator, Optional

import numpy as np


_bound_generator: contextvars.ContextVar = contextvars.ContextVar(
	"genetics_bound_generator", default=None
)


class RandomGenerator:
	"""
	Uniform float/int source backed by numpy.random.Generator.

	Args:
		seed: Seed for the underlying generator. None draws one from OS entropy.
	"""

	_instance: Optional["RandomGenerator"] = None

	def __init__(self, seed: Optional[int] = None):
		self.seed = seed
		self._rng = np.random.default_rng(seed)

	@classmethod
	def get_instance(cls) -> "RandomGenerator":
		"""
		Return the generator strategies should draw from.

		Returns:
			The generator bound by the running evolve call if there is one,
			otherwise the lazily created process-wide instance.
		"""
		bound = _bound_generator.get()
		if bound is not None:
			return bound
		if cls._instance is None:
			cls._instance = cls()
		return cls._instance

	@contextlib.contextmanager
	def bound(self) -> Iterator["RandomGenerator"]:
		"""Make this generator the one get_instance() returns inside the block."""
		token = _bound_generator.set(self)
		try:
			yield self
		finally:
			_bound_generator.reset(token)

	def uniform_float(self, low: float = 0.0, high: float = 1.0) -> float:
		"""Draw a float from [low, high)."""
		return float(self._rng.uniform(low, high))

	def uniform_int(self, low: int, high: int) -> int:
		"""Draw an integer from [low, high], both ends included."""
		if high < low:
			raise ValueError(f"Empty integer range [{low}, {high}]")
		return int(self._rng.integers(low, high, endpoint=True))

	def chance(self, probability: float) -> bool:
		"""True with the given probability, clamped to [0, 1]."""
		probability = min(max(probability, 0.0), 1.0)
		return self.uniform_float(0.0, 1.0) < probability

	@property
	def numpy(self) -> np.random.Generator:
		"""Underlying numpy generator, for vectorised draws."""
		return self._rng
