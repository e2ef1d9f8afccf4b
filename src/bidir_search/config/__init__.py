"""Configuration management for bidirectional search.

This module provides Hydra-based configuration management with hierarchical
parameter groups and runtime override capabilities.
"""

from .config_manager import (
    ConfigManager, ConfigContext, load_config, get_config, get_parameter, apply_updates
)
from .validators import validate_config, ConfigValidationError

__all__ = [
    'ConfigManager',
    'ConfigContext',
    'load_config',
    'get_config',
    'get_parameter',
    'apply_updates',
    'validate_config',
    'ConfigValidationError'
]
