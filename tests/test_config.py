"""
Tests for configuration module (genetics/config.py).
"""

import pytest
import yaml

from genetics.config import Config, EvolutionSettings
from genetics.errors import ConfigurationError


class TestConfigInitialization:
    """Tests for Config initialization."""

    def test_default_initialization(self):
        """Test that Config initializes with empty dicts."""
        config = Config()
        assert config.evolution == {}
        assert config.problem == {}

    def test_manual_initialization(self):
        config = Config(evolution={"survivors": 4})
        assert config.evolution == {"survivors": 4}
        assert config.problem == {}


class TestConfigFromFile:
    """Tests for loading configuration from YAML files."""

    def test_load_sections(self, tmp_path):
        data = {
            "evolution": {"survivors": 6, "max_generations": 20},
            "problem": {"name": "integer", "params": {"target": 42}},
        }
        path = tmp_path / "run.yaml"
        with open(path, 'w') as f:
            yaml.dump(data, f)

        config = Config.from_file(str(path))
        assert config.evolution == data["evolution"]
        assert config.problem == data["problem"]

    def test_missing_file_gives_empty_config(self, tmp_path):
        config = Config.from_file(str(tmp_path / "absent.yaml"))
        assert config.evolution == {}
        assert config.problem == {}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert Config.from_file(str(path)).evolution == {}

    def test_unwrapped_file_is_evolution_section(self, tmp_path):
        path = tmp_path / "bare.yaml"
        path.write_text("survivors: 3\nseed: 1\n")
        config = Config.from_file(str(path))
        assert config.evolution == {"survivors": 3, "seed": 1}

    def test_non_mapping_top_level_raises(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError):
            Config.from_file(str(path))

    def test_non_mapping_section_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("evolution: 5\n")
        with pytest.raises(ConfigurationError):
            Config.from_file(str(path))


class TestConfigAccess:
    """Tests for dot-key access."""

    def test_get_nested(self):
        config = Config(problem={"params": {"target": 7}})
        assert config.get("problem.params.target") == 7

    def test_get_missing_returns_default(self):
        assert Config().get("a.b.c", default="fallback") == "fallback"

    def test_set_creates_intermediate(self):
        config = Config()
        config.set("problem.params.target", 9)
        assert config.problem == {"params": {"target": 9}}

    def test_save_round_trip(self, tmp_path):
        config = Config(evolution={"survivors": 2}, problem={"name": "integer"})
        path = tmp_path / "nested" / "saved.yaml"
        config.save(str(path))

        loaded = Config.from_file(str(path))
        assert loaded.evolution == {"survivors": 2}
        assert loaded.problem == {"name": "integer"}


class TestEvolutionSettings:
    """Tests for the typed evolution section."""

    def test_defaults(self):
        settings = EvolutionSettings.from_config(Config())
        assert settings.survivors == 10
        assert settings.max_generations is None
        assert settings.generations_till_elimination == 1
        assert settings.lanes == 1
        assert settings.seed is None
        assert settings.good_enough_cost is None
        assert settings.track_ages is True

    def test_values_from_config(self):
        config = Config(evolution={"survivors": 4, "max_generations": 10, "seed": 3})
        settings = EvolutionSettings.from_config(config)
        assert settings.survivors == 4
        assert settings.max_generations == 10
        assert settings.seed == 3

    def test_unknown_key_raises(self):
        with pytest.raises(ConfigurationError):
            EvolutionSettings.from_config(Config(evolution={"population": 4}))

    @pytest.mark.parametrize("key,value", [
        ("survivors", 0),
        ("max_generations", 0),
        ("generations_till_elimination", 0),
        ("lanes", 0),
    ])
    def test_out_of_range_raises(self, key, value):
        with pytest.raises(ConfigurationError):
            EvolutionSettings.from_config(Config(evolution={key: value}))

    @pytest.mark.parametrize("key,value", [
        ("survivors", "4"),
        ("survivors", True),
        ("max_generations", 2.5),
        ("generations_till_elimination", [2]),
        ("seed", "seven"),
        ("good_enough_cost", "0.1"),
        ("track_ages", "yes"),
    ])
    def test_wrong_type_raises(self, key, value):
        """Values YAML parses as the wrong type are reported as configuration errors."""
        with pytest.raises(ConfigurationError):
            EvolutionSettings.from_config(Config(evolution={key: value}))

    def test_quoted_number_from_yaml(self, tmp_path):
        config_file = tmp_path / "quoted.yaml"
        config_file.write_text('evolution:\n  survivors: "4"\n')
        with pytest.raises(ConfigurationError, match="survivors"):
            EvolutionSettings.from_config(Config.from_file(str(config_file)))

    def test_float_goal_accepts_integer(self):
        settings = EvolutionSettings.from_config(Config(evolution={"good_enough_cost": 0}))
        assert settings.good_enough_cost == 0
