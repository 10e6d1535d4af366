"""
Exception hierarchy for the evolution engine.

Purpose:
	Give callers one base class to catch and distinct types for each
	way a caller-supplied strategy or input can break the engine's contract.
	Value-type errors also derive from ValueError.
"""


class GeneticsError(Exception):
	"""Base for all engine exceptions."""

	pass


class ContractViolation(GeneticsError, ValueError):
	"""A strategy object returned something its contract forbids."""

	pass


class FitnessContractError(ContractViolation):
	"""Fitness evaluator returned a costs sequence of the wrong length."""

	def __init__(self, expected: int, actual: int):
		self.expected = expected
		self.actual = actual
		super().__init__(
			f"Fitness evaluator returned {actual} costs for {expected} specimens"
		)


class OffspringContractError(ContractViolation):
	"""Crossover operator asked for a negative number of offspring."""

	pass


class SelectionContractError(ContractViolation):
	"""Selection policy returned an unusable cadence or budget."""

	pass


class EmptyPopulationError(GeneticsError, ValueError):
	"""Evolution was requested with no specimens or no survivors."""

	pass


class GenerationInvariantError(GeneticsError, ValueError):
	"""A generation's ages do not line up with its specimens."""

	pass


class PermutationError(GeneticsError, ValueError):
	"""A permutation does not match the sequence it is applied to."""

	pass


class ConfigurationError(GeneticsError, ValueError):
	"""Invalid configuration value."""

	pass
