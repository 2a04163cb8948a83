"""Hydra/OmegaConf configuration for the IDA* planner."""

from .config_manager import (
    ConfigManager, load_config, get_config, reset_config, get_parameter, load_planner_config
)
from .validators import validate_config, ConfigValidationError

__all__ = [
    'ConfigManager',
    'load_config',
    'get_config',
    'reset_config',
    'get_parameter',
    'load_planner_config',
    'validate_config',
    'ConfigValidationError'
]
