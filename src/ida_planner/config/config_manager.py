"""Hydra configuration loading for the IDA* planner.

The ``conf/`` directory at the project root holds ``config.yaml`` with a
``planner`` and a ``logging`` section. Configs are composed with Hydra so
command-line style overrides such as ``planner.max_depth=8`` work, validated,
and kept as the process-wide configuration that :class:`IDAStarPlanner` reads
when it is built without an explicit :class:`PlannerConfig`.
"""

import logging
from typing import Any, Optional, Union
from pathlib import Path
from omegaconf import DictConfig, OmegaConf, open_dict
from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra

from ida_planner.search.ida_star import PlannerConfig
from .validators import validate_config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).parent.parent.parent.parent / "conf"

# Global configuration instance
_global_config: Optional[DictConfig] = None


class ConfigManager:
    """Composes, validates and edits the planner configuration."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Directory holding ``config.yaml``. If None, the
                project's ``conf/`` directory is used.
        """
        self.config_dir = Path(config_dir or DEFAULT_CONFIG_DIR).resolve()
        self.config: Optional[DictConfig] = None

        if not self.config_dir.exists():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

    def load_config(self,
                    config_name: str = "config",
                    overrides: Optional[list] = None,
                    validate: bool = True) -> DictConfig:
        """Compose the configuration and make it the global one.

        Args:
            config_name: Name of the main config file (without .yaml)
            overrides: Hydra overrides, e.g. ``planner.max_depth=8``
            validate: Whether to validate the configuration

        Returns:
            Composed configuration

        Raises:
            ConfigValidationError: If validation fails
        """
        global _global_config

        GlobalHydra.instance().clear()
        with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
            cfg = compose(config_name=config_name, overrides=overrides or [])

        if validate:
            validate_config(cfg)

        self.config = cfg
        _global_config = cfg

        logger.info(f"Loaded {config_name} from {self.config_dir}"
                    + (f" with overrides {overrides}" if overrides else ""))
        return cfg

    def _require_config(self) -> DictConfig:
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")
        return self.config

    def get_parameter(self, key: str, default: Any = None) -> Any:
        """Get a parameter by dotted key, e.g. ``planner.max_depth``."""
        return OmegaConf.select(self._require_config(), key, default=default)

    def set_parameter(self, key: str, value: Any) -> None:
        """Set a parameter by dotted key and re-validate the configuration."""
        config = self._require_config()
        with open_dict(config):
            OmegaConf.update(config, key, value)
        validate_config(config)

        logger.debug(f"Parameter set: {key} = {value}")

    def save_config(self, output_path: Union[str, Path]) -> None:
        """Write the current configuration as YAML."""
        config = self._require_config()
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        OmegaConf.save(config, output_path)

        logger.info(f"Configuration saved to: {output_path}")

    def planner_config(self) -> PlannerConfig:
        """Build the :class:`PlannerConfig` described by this configuration."""
        return PlannerConfig.from_config(self._require_config())


def load_config(config_name: str = "config",
                overrides: Optional[list] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Load the global configuration; see :meth:`ConfigManager.load_config`."""
    return ConfigManager(config_dir).load_config(config_name, overrides, validate)


def get_config() -> Optional[DictConfig]:
    """Get the global configuration, or None if none was loaded."""
    return _global_config


def reset_config() -> None:
    """Forget the global configuration."""
    global _global_config
    _global_config = None


def get_parameter(key: str, default: Any = None) -> Any:
    """Get a parameter from the global configuration."""
    if _global_config is None:
        return default
    return OmegaConf.select(_global_config, key, default=default)


def load_planner_config(overrides: Optional[list] = None,
                        config_dir: Optional[Union[str, Path]] = None) -> PlannerConfig:
    """Load and validate the configuration, then return its planner settings.

    Environment overrides (``IDA_PLANNER_*``) apply on top of the file.
    """
    manager = ConfigManager(config_dir)
    manager.load_config(overrides=overrides)
    return manager.planner_config()
