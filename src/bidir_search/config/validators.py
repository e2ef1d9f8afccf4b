"""Configuration validation for bidirectional search runs."""

import logging
from typing import Any

from omegaconf import DictConfig

logger = logging.getLogger(__name__)

VALID_PICKERS = ('uniform_random', 'round_robin', 'forward_first')
VALID_DOMAINS = ('pancake', 'puzzle')
VALID_ALGORITHMS = ('mme', 'gbfhs', 'astar')


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_search_config(config.get('search', {}))
        validate_domain_config(config.get('domain', {}))
        validate_experiment_config(config.get('experiment', {}))

        logger.info("Configuration validation passed")

    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}")


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    eps = search_config.get('eps', 1)
    if not _is_int(eps) or eps < 1:
        raise ConfigValidationError(f"search.eps must be a positive integer, got {eps}")

    picker = search_config.get('picker', 'uniform_random')
    if picker not in VALID_PICKERS:
        raise ConfigValidationError(
            f"search.picker must be one of {list(VALID_PICKERS)}, got {picker}"
        )

    seed = search_config.get('seed')
    if seed is not None and not _is_int(seed):
        raise ConfigValidationError(f"search.seed must be an integer or null, got {seed}")

    max_expansions = search_config.get('max_expansions')
    if max_expansions is not None and (not _is_int(max_expansions) or max_expansions < 0):
        raise ConfigValidationError(
            f"search.max_expansions must be a non-negative integer or null, got {max_expansions}"
        )

    timeout = search_config.get('max_computation_time')
    if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
        raise ConfigValidationError(
            f"search.max_computation_time must be a positive number or null, got {timeout}"
        )


def validate_domain_config(domain_config: DictConfig) -> None:
    """Validate domain configuration section.

    Args:
        domain_config: Domain configuration section
    """
    if not domain_config:
        return

    name = domain_config.get('name', 'pancake')
    if name not in VALID_DOMAINS:
        raise ConfigValidationError(f"domain.name must be one of {list(VALID_DOMAINS)}, got {name}")

    size = domain_config.get('size', 10)
    if not _is_int(size) or size < 1:
        raise ConfigValidationError(f"domain.size must be a positive integer, got {size}")

    gap_x = domain_config.get('gap_x', 0)
    if not _is_int(gap_x) or gap_x < 0:
        raise ConfigValidationError(f"domain.gap_x must be a non-negative integer, got {gap_x}")

    dim = domain_config.get('dim', 3)
    if not _is_int(dim) or dim < 2:
        raise ConfigValidationError(f"domain.dim must be an integer >= 2, got {dim}")
    if dim > 4:
        logger.warning(f"domain.dim={dim}: boards above 4x4 are rarely tractable")

    discount = domain_config.get('discount', 0)
    if not _is_int(discount) or discount < 0:
        raise ConfigValidationError(
            f"domain.discount must be a non-negative integer, got {discount}"
        )


def validate_experiment_config(experiment_config: DictConfig) -> None:
    """Validate experiment configuration section.

    Args:
        experiment_config: Experiment configuration section
    """
    if not experiment_config:
        return

    algorithms = experiment_config.get('algorithms', list(VALID_ALGORITHMS))
    for algorithm in algorithms:
        if algorithm not in VALID_ALGORITHMS:
            raise ConfigValidationError(
                f"experiment.algorithms entries must be in {list(VALID_ALGORITHMS)}, got {algorithm}"
            )

    trials = experiment_config.get('trials', 50)
    if not _is_int(trials) or trials < 1:
        raise ConfigValidationError(f"experiment.trials must be a positive integer, got {trials}")

    seed = experiment_config.get('seed')
    if seed is not None and not _is_int(seed):
        raise ConfigValidationError(f"experiment.seed must be an integer or null, got {seed}")

    scramble = experiment_config.get('scramble_moves')
    if scramble is not None and (not _is_int(scramble) or scramble < 0):
        raise ConfigValidationError(
            f"experiment.scramble_moves must be a non-negative integer or null, got {scramble}"
        )
