"""Tests for configuration management system."""

import pytest
import tempfile
import shutil
from pathlib import Path
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import ConfigAttributeError

from bidir_search.config import (
    ConfigManager, ConfigContext, load_config, get_config, get_parameter, apply_updates,
    validate_config, ConfigValidationError
)
from bidir_search.config.config_manager import DEFAULT_CONFIG_DIR
from bidir_search.search import SearchConfig


CONFIG_CONTENT = """
search:
  eps: 1
  picker: round_robin
  seed: 7
  check_invariants: false
  max_expansions: null
  max_computation_time: null

domain:
  name: pancake
  size: 6
  gap_x: 0
  blind_backward: false
  dim: 3
  discount: 0

experiment:
  algorithms: [mme, gbfhs]
  trials: 5
  seed: 15780
  scramble_moves: null
  output: null
"""


@pytest.fixture
def temp_config_dir():
    """Create temporary configuration directory."""
    temp_dir = tempfile.mkdtemp()
    config_dir = Path(temp_dir) / "conf"
    config_dir.mkdir()

    with open(config_dir / "config.yaml", 'w') as f:
        f.write(CONFIG_CONTENT)

    yield config_dir

    # Cleanup
    shutil.rmtree(temp_dir)


class TestConfigManager:
    """Test ConfigManager functionality."""

    def test_config_manager_initialization(self, temp_config_dir):
        """Test ConfigManager initialization."""
        manager = ConfigManager(temp_config_dir)
        assert manager.config_dir.resolve() == temp_config_dir.resolve()
        assert manager.config is None

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "absent")

    def test_load_config_basic(self, temp_config_dir):
        """Test basic configuration loading."""
        manager = ConfigManager(temp_config_dir)
        config = manager.load_config()

        assert isinstance(config, DictConfig)
        assert config.search.picker == "round_robin"
        assert config.domain.size == 6
        assert manager.config is config

    def test_load_config_with_overrides(self, temp_config_dir):
        """Test configuration loading with overrides."""
        manager = ConfigManager(temp_config_dir)
        config = manager.load_config(overrides=["search.eps=2", "domain.name=puzzle"])

        assert config.search.eps == 2
        assert config.domain.name == "puzzle"

    def test_invalid_override_fails_validation(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        with pytest.raises(ConfigValidationError):
            manager.load_config(overrides=["search.picker=best_first"])

    def test_get_parameter(self, temp_config_dir):
        """Test parameter retrieval."""
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        assert manager.get_parameter("search.seed") == 7
        assert manager.get_parameter("experiment.trials") == 5
        assert manager.get_parameter("nonexistent.param", "default") == "default"

    def test_save_config(self, temp_config_dir, tmp_path):
        """Saved YAML reloads with the override applied."""
        manager = ConfigManager(temp_config_dir)
        manager.load_config(overrides=["domain.size=9"])

        output_file = manager.save_config(tmp_path / "nested" / "saved_config.yaml")

        assert output_file.exists()
        saved_config = OmegaConf.load(output_file)
        assert saved_config.domain.size == 9
        assert saved_config.search.picker == "round_robin"

    def test_config_without_loading(self, temp_config_dir):
        """Test operations without loading config first."""
        manager = ConfigManager(temp_config_dir)

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.get_parameter("search.eps")

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.save_config("test.yaml")


class TestApplyUpdates:
    """Dotted-key updates on a composed (struct) configuration."""

    def test_updates_existing_and_new_keys(self, temp_config_dir):
        config = ConfigManager(temp_config_dir).load_config()

        apply_updates(config, {"search.eps": 3, "search.notes": "scratch"})

        assert config.search.eps == 3
        assert config.search.notes == "scratch"

    def test_struct_mode_kept(self, temp_config_dir):
        """Outside apply_updates unknown keys are still rejected."""
        config = ConfigManager(temp_config_dir).load_config()
        apply_updates(config, {"domain.size": 8})
        with pytest.raises(ConfigAttributeError):
            config.domain.unknown_key = 1


class TestGlobalConfigFunctions:
    """Test global configuration functions."""

    def test_bundled_defaults(self):
        """The packaged config.yaml loads and validates."""
        assert (DEFAULT_CONFIG_DIR / "config.yaml").exists()
        config = load_config()
        assert config.search.eps == 1
        assert config.search.picker == "uniform_random"
        assert config.experiment.seed == 15780
        assert list(config.experiment.algorithms) == ["mme", "gbfhs", "astar"]

    def test_global_access(self, temp_config_dir):
        config = load_config(config_dir=temp_config_dir)
        assert get_config() is config
        assert get_parameter("domain.size") == 6
        assert get_parameter("missing.key", 42) == 42

    def test_search_config_from_loaded(self, temp_config_dir):
        config = load_config(config_dir=temp_config_dir)
        search_config = SearchConfig.from_config(config)
        assert search_config.picker == "round_robin"
        assert search_config.seed == 7
        assert search_config.max_expansions is None


class TestConfigContext:
    """Test temporary configuration changes."""

    def test_values_restored(self, temp_config_dir):
        load_config(config_dir=temp_config_dir)
        with ConfigContext({"search.picker": "forward_first"}) as config:
            assert config.search.picker == "forward_first"
            assert get_parameter("search.picker") == "forward_first"
        assert get_parameter("search.picker") == "round_robin"

    def test_restored_after_error(self, temp_config_dir):
        load_config(config_dir=temp_config_dir)
        with pytest.raises(KeyError):
            with ConfigContext({"domain.size": 11}):
                raise KeyError("boom")
        assert get_parameter("domain.size") == 6

    def test_added_keys_removed(self, temp_config_dir):
        """Keys introduced by the context do not outlive it."""
        load_config(config_dir=temp_config_dir)
        with ConfigContext(experiment_tag="sweep-1") as config:
            assert config.experiment_tag == "sweep-1"
        assert get_parameter("experiment_tag", "absent") == "absent"

    def test_null_value_restored(self, temp_config_dir):
        load_config(config_dir=temp_config_dir)
        with ConfigContext({"search.max_expansions": 100}):
            assert SearchConfig.from_config(get_config()).max_expansions == 100
        assert get_parameter("search.max_expansions", "absent") is None

    def test_requires_loaded_config(self, monkeypatch):
        monkeypatch.setattr("bidir_search.config.config_manager._active_config", None)
        with pytest.raises(RuntimeError, match="No configuration loaded"):
            with ConfigContext({"search.eps": 2}):
                pass


class TestConfigValidation:
    """Test configuration validation."""

    def valid(self):
        return OmegaConf.create(CONFIG_CONTENT)

    def test_valid_config(self):
        validate_config(self.valid())

    @pytest.mark.parametrize("key,value", [
        ("search.eps", 0),
        ("search.picker", "greedy"),
        ("search.seed", "abc"),
        ("search.max_expansions", -1),
        ("search.max_computation_time", 0),
        ("domain.name", "rubik"),
        ("domain.size", 0),
        ("domain.gap_x", -1),
        ("domain.dim", 1),
        ("domain.discount", -2),
        ("experiment.trials", 0),
        ("experiment.scramble_moves", -5),
    ])
    def test_invalid_values(self, key, value):
        config = self.valid()
        OmegaConf.update(config, key, value)
        with pytest.raises(ConfigValidationError):
            validate_config(config)

    def test_invalid_algorithm(self):
        config = self.valid()
        config.experiment.algorithms = ["mme", "dijkstra"]
        with pytest.raises(ConfigValidationError):
            validate_config(config)

    def test_empty_sections_are_allowed(self):
        validate_config(OmegaConf.create({}))
