"""Hydra-backed loading of the search, domain and experiment settings.

The bundled ``conf/config.yaml`` is composed with command line overrides
(``search.picker=round_robin``) and validated before use. The most recently
loaded configuration is also kept module-wide so helpers such as
``get_parameter`` and ``ConfigContext`` can reach it without threading it
through every call.
"""

import logging
from typing import Any, Dict, List, Optional, Union
from pathlib import Path
from omegaconf import DictConfig, OmegaConf, open_dict
from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra

from .validators import validate_config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).parent.parent / "conf"

_active_config: Optional[DictConfig] = None


def apply_updates(config: DictConfig, updates: Dict[str, Any]) -> None:
    """Write dotted-key updates into ``config``, creating missing keys."""
    with open_dict(config):
        for key, value in updates.items():
            OmegaConf.update(config, key, value, merge=False)


class ConfigManager:
    """Composes one configuration directory with Hydra."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        self.config_dir = Path(config_dir or DEFAULT_CONFIG_DIR).resolve()
        self.config: Optional[DictConfig] = None

        if not self.config_dir.exists():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")
        logger.debug(f"Using configuration directory {self.config_dir}")

    def load_config(self,
                    config_name: str = "config",
                    overrides: Optional[List[str]] = None,
                    validate: bool = True) -> DictConfig:
        """Compose ``config_name`` with Hydra overrides and make it active.

        Args:
            config_name: Name of the main config file (without .yaml)
            overrides: Hydra override strings such as ``search.eps=2``
            validate: Whether to run ``validate_config`` on the result

        Returns:
            The composed configuration
        """
        global _active_config

        GlobalHydra.instance().clear()
        with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
            cfg = compose(config_name=config_name, overrides=overrides or [])

        if validate:
            validate_config(cfg)

        self.config = cfg
        _active_config = cfg
        if overrides:
            logger.info(f"Loaded {config_name} with overrides {overrides}")
        else:
            logger.debug(f"Loaded {config_name}")
        return cfg

    def _require_config(self) -> DictConfig:
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")
        return self.config

    def get_parameter(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``domain.size``."""
        return OmegaConf.select(self._require_config(), key, default=default)

    def save_config(self, output_path: Union[str, Path]) -> Path:
        """Write the resolved configuration to a YAML file."""
        config = self._require_config()
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        OmegaConf.save(config, output_path, resolve=True)
        logger.info(f"Configuration saved to {output_path}")
        return output_path


def load_config(config_name: str = "config",
                overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Load and activate a configuration through a fresh ``ConfigManager``."""
    return ConfigManager(config_dir).load_config(config_name, overrides, validate)


def get_config() -> Optional[DictConfig]:
    """Return the active configuration, or None if nothing was loaded."""
    return _active_config


def get_parameter(key: str, default: Any = None) -> Any:
    """Look up a dotted key in the active configuration."""
    config = get_config()
    if config is None:
        logger.warning("No configuration loaded; returning default")
        return default
    return OmegaConf.select(config, key, default=default)


class ConfigContext:
    """Temporarily override keys of the active configuration.

    Values are restored on exit, also when the body raises. Keys that did not
    exist before entering are removed again.

    Example:
        with ConfigContext({"search.picker": "forward_first"}):
            ...
    """

    def __init__(self, changes: Optional[Dict[str, Any]] = None, **kwargs):
        self.changes = dict(changes or {})
        self.changes.update(kwargs)
        self._saved: Dict[str, Any] = {}
        self._added: List[str] = []
        self.config: Optional[DictConfig] = None

    def __enter__(self) -> DictConfig:
        self.config = get_config()
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")

        missing = object()
        for key in self.changes:
            value = OmegaConf.select(self.config, key, default=missing)
            if value is missing:
                self._added.append(key)
            else:
                self._saved[key] = value
        apply_updates(self.config, self.changes)
        logger.debug(f"Temporary configuration overrides: {self.changes}")
        return self.config

    def __exit__(self, exc_type, exc_val, exc_tb):
        apply_updates(self.config, self._saved)
        with open_dict(self.config):
            for key in self._added:
                parent_key, _, leaf = key.rpartition('.')
                parent = OmegaConf.select(self.config, parent_key) if parent_key else self.config
                if parent is not None and leaf in parent:
                    del parent[leaf]
        return False
