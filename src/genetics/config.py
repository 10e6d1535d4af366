"""
Configuration module for loading and managing evolution config files.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field

from genetics.errors import ConfigurationError


SECTIONS = ("evolution", "problem")


@dataclass
class Config:
	"""
	Evolution run configuration loaded from a single YAML file.

	Attributes:
		evolution: Engine and selection settings (see EvolutionSettings)
		problem: Problem name and its parameters
	"""

	evolution: Dict[str, Any] = field(default_factory=dict)
	problem: Dict[str, Any] = field(default_factory=dict)

	@classmethod
	def from_file(cls, config_path: str) -> "Config":
		"""
		Load configuration from a YAML file.

		Args:
			config_path: Path to the configuration file. A missing file yields
				an empty configuration.

		Returns:
			Config object with loaded sections
		"""
		config = cls()
		path = Path(config_path)
		if not path.exists():
			return config

		with open(path, 'r') as f:
			data = yaml.safe_load(f) or {}
		if not isinstance(data, dict):
			raise ConfigurationError(f"{config_path}: expected a mapping at the top level")

		# A file holding a single section without the wrapper goes to evolution
		if data and not any(section in data for section in SECTIONS):
			data = {"evolution": data}

		for section in SECTIONS:
			value = data.get(section) or {}
			if not isinstance(value, dict):
				raise ConfigurationError(f"{config_path}: section '{section}' must be a mapping")
			setattr(config, section, value)

		return config

	def get(self, key: str, default: Any = None) -> Any:
		"""
		Get configuration value by dot-separated key.

		Examples:
			config.get('evolution.survivors')
			config.get('problem.target', 100)

		Args:
			key: Dot-separated configuration key
			default: Default value if key not found

		Returns:
			Configuration value or default
		"""
		parts = key.split('.')
		current = self.__dict__

		for part in parts:
			if isinstance(current, dict) and part in current:
				current = current[part]
			else:
				return default

		return current

	def set(self, key: str, value: Any) -> None:
		"""
		Set configuration value by dot-separated key.

		Args:
			key: Dot-separated configuration key
			value: Value to set
		"""
		parts = key.split('.')
		current = self.__dict__

		for part in parts[:-1]:
			if part not in current:
				current[part] = {}
			current = current[part]

		current[parts[-1]] = value

	def save(self, output_path: str) -> None:
		"""
		Save current configuration to a YAML file.

		Args:
			output_path: Destination file; parent directories are created
		"""
		path = Path(output_path)
		path.parent.mkdir(parents=True, exist_ok=True)

		with open(path, 'w') as f:
			yaml.dump(
				{section: getattr(self, section) for section in SECTIONS},
				f,
				default_flow_style=False,
			)


@dataclass
class EvolutionSettings:
	"""
	Typed view of the evolution section.

	Attributes:
		survivors: Population size after each culling round
		max_generations: Crossover rounds per evolve() call, None for unbounded
		generations_till_elimination: Rounds between culling rounds
		lanes: Reserved for parallel crossover, no effect yet
		seed: Seed for the engine's random generator, None for OS entropy
		good_enough_cost: Stop once the best cost reaches this value
		track_ages: Track per-specimen ages in the initial generation
	"""

	survivors: int = 10
	max_generations: Optional[int] = None
	generations_till_elimination: int = 1
	lanes: int = 1
	seed: Optional[int] = None
	good_enough_cost: Optional[float] = None
	track_ages: bool = True

	@classmethod
	def from_config(cls, config: Config) -> "EvolutionSettings":
		"""
		Build settings from a Config, falling back to defaults.

		Raises:
			ConfigurationError: On unknown keys, wrongly typed or out-of-range values
		"""
		known = cls.__dataclass_fields__.keys()
		unknown = set(config.evolution) - set(known)
		if unknown:
			raise ConfigurationError(f"Unknown evolution settings: {sorted(unknown)}")

		settings = cls(**config.evolution)
		settings.validate()
		return settings

	def validate(self) -> None:
		"""Check value types, then value ranges."""
		for name in ("survivors", "generations_till_elimination", "lanes"):
			_check_type(name, getattr(self, name), int)
		for name in ("max_generations", "seed"):
			_check_type(name, getattr(self, name), int, optional=True)
		_check_type("good_enough_cost", self.good_enough_cost, (int, float), optional=True)
		if not isinstance(self.track_ages, bool):
			raise ConfigurationError(f"track_ages must be true or false, got {self.track_ages!r}")

		if self.survivors < 1:
			raise ConfigurationError(f"survivors must be at least 1, got {self.survivors}")
		if self.max_generations is not None and self.max_generations < 1:
			raise ConfigurationError(
				f"max_generations must be at least 1 or null, got {self.max_generations}"
			)
		if self.generations_till_elimination < 1:
			raise ConfigurationError(
				f"generations_till_elimination must be at least 1, got {self.generations_till_elimination}"
			)
		if self.lanes < 1:
			raise ConfigurationError(f"lanes must be at least 1, got {self.lanes}")


def _check_type(name: str, value: Any, expected, optional: bool = False) -> None:
	"""Raise ConfigurationError unless value is of the expected type. Booleans never count as numbers."""
	if value is None and optional:
		return
	if isinstance(value, bool) or not isinstance(value, expected):
		raise ConfigurationError(f"{name} has invalid value {value!r}")
