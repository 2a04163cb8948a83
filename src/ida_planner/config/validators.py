"""Configuration validation for the IDA* planner."""

import logging
from typing import List
from omegaconf import DictConfig

logger = logging.getLogger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

# Plans deeper than this make repeated cutoff passes expensive
DEEP_SEARCH_WARNING_DEPTH = 64


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    validate_planner_config(config.get('planner', {}))
    validate_logging_config(config.get('logging', {}))

    for warning in validate_parameter_ranges(config):
        logger.warning(warning)

    logger.info("Configuration validation passed")


def validate_planner_config(planner_config: DictConfig) -> None:
    """Validate planner configuration section.

    Args:
        planner_config: Planner configuration section
    """
    if not planner_config:
        return

    max_depth = planner_config.get('max_depth', 32)
    if not isinstance(max_depth, int) or isinstance(max_depth, bool) or max_depth < 0:
        raise ConfigValidationError(
            f"planner.max_depth must be non-negative integer, got {max_depth}"
        )

    for key in ['duplicate_detection', 'reuse_transposition_table']:
        flag = planner_config.get(key, False)
        if not isinstance(flag, bool):
            raise ConfigValidationError(
                f"planner.{key} must be boolean, got {flag}"
            )


def validate_logging_config(logging_config: DictConfig) -> None:
    """Validate logging configuration section.

    Args:
        logging_config: Logging configuration section
    """
    if not logging_config:
        return

    level = logging_config.get('level', 'INFO')
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ConfigValidationError(
            f"logging.level must be one of {LOG_LEVELS}, got {level}"
        )

    format_string = logging_config.get('format', None)
    if format_string is not None and not isinstance(format_string, str):
        raise ConfigValidationError(
            f"logging.format must be a string, got {format_string}"
        )


def validate_parameter_ranges(config: DictConfig) -> List[str]:
    """Validate parameter ranges and return warnings.

    Args:
        config: Configuration to validate

    Returns:
        List of warning messages
    """
    warnings = []

    planner_config = config.get('planner', {})
    if planner_config:
        max_depth = planner_config.get('max_depth', 32)
        if max_depth > DEEP_SEARCH_WARNING_DEPTH:
            warnings.append(
                f"planner.max_depth {max_depth} exceeds {DEEP_SEARCH_WARNING_DEPTH}; "
                f"every cutoff pass restarts from depth 0"
            )

        if (planner_config.get('reuse_transposition_table', False) and
                not planner_config.get('duplicate_detection', True)):
            warnings.append(
                "planner.reuse_transposition_table has no effect when duplicate_detection is disabled"
            )

    return warnings
