"""Factory functions for creating bag samplers."""
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Sequence

from grabbag.bag import BagSampler
from grabbag.constants import SAMPLER_CONFIG_ENV_VAR
from grabbag.samplers.config import SamplerConfig
from grabbag.samplers.uniform import UniformBagSampler
from grabbag.samplers.weighted import WeightedBagSampler


def find_config_file(config_path: Optional[str] = None) -> Optional[Path]:
    """
    Locate the sampler config file to use.

    An explicit `config_path` wins over the GRABBAG_SAMPLER_CONFIG_PATH env var.
    Returns None (with a warning when a path was named) if there is no readable
    .json file to load.
    """
    source = "argument"
    if config_path is None:
        config_path = os.environ.get(SAMPLER_CONFIG_ENV_VAR)
        source = SAMPLER_CONFIG_ENV_VAR
    if not config_path:
        return None

    path = Path(config_path)
    if path.suffix != ".json":
        logging.warning(f"Sampler config {path} (from {source}) is not a .json file; ignoring it")
        return None
    if not path.is_file():
        logging.warning(f"Sampler config file not found: {path} (from {source})")
        return None
    return path


def load_sampler_config(config_path: Optional[str] = None) -> Optional[SamplerConfig]:
    """
    Load sampler configuration from a JSON file or environment variable.

    Args:
        config_path: Path to JSON config file. If None, checks GRABBAG_SAMPLER_CONFIG_PATH env var.

    Returns:
        SamplerConfig instance, or None if no usable config found.

    Example JSON format:
        {
            "type": "weighted",
            "weights": {"sword": 1.0, "shield": 1.0, "potion": 3.0},
            "seed": 42,
            "invalid_weights": "reject"
        }
    """
    path = find_config_file(config_path)
    if path is None:
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logging.error(f"Could not read sampler config {path}: {e}")
        return None

    try:
        config = SamplerConfig.from_dict(data)
    except ValueError as e:
        logging.error(f"Invalid sampler configuration in {path}: {e}")
        return None

    logging.info(f"Loaded {config.type} sampler config from {path}")
    return config


def make_sampler(
    items: Optional[Sequence[Any]] = None,
    sampler_config: Optional[SamplerConfig | dict] = None,
    config_path: Optional[str] = None,
) -> BagSampler:
    """
    Create a bag sampler based on configuration.

    Args:
        items: Items to draw from. Overrides the items named in the config.
        sampler_config: SamplerConfig instance or dict. If dict, will be parsed into SamplerConfig.
                        If None, will try to load from config_path.
        config_path: Path to JSON config file. Only used if sampler_config is None.

    Returns:
        The configured sampler. Without any config, an unseeded UniformBagSampler over `items`.

    Raises:
        ValueError: If the config is invalid or no items are available
        EmptyItemSetError: If the resolved item set is empty

    Example sampler_config dict:
        {
            "type": "weighted",
            "weights": {"goblin": 4.0, "orc": 2.0, "troll": 1.0},
            "seed": 7
        }
    """
    # Try to load config if not provided
    if sampler_config is None:
        sampler_config = load_sampler_config(config_path)

    # No config means plain uniform sampling over the given items
    if sampler_config is None:
        if items is None:
            raise ValueError("No sampler configuration found and no items given")
        logging.info("No sampler config found. Using UniformBagSampler.")
        return UniformBagSampler(items)

    # Convert dict to SamplerConfig if needed
    if isinstance(sampler_config, dict):
        sampler_config = SamplerConfig.from_dict(sampler_config)

    resolved_items = list(items) if items is not None else sampler_config.resolve_items()
    if resolved_items is None:
        raise ValueError("Sampler configuration names no items and no items were given")

    if sampler_config.type == "uniform":
        logging.info(f"Creating UniformBagSampler over {len(resolved_items)} items (seed={sampler_config.seed})")
        return UniformBagSampler(resolved_items, seed=sampler_config.seed)

    if sampler_config.type == "weighted":
        logging.info(f"Creating WeightedBagSampler over {len(resolved_items)} items (seed={sampler_config.seed})")
        if sampler_config.weights:
            logging.info(f"  Custom weights: {sampler_config.weights}")
        else:
            logging.info("  Using default weights (1.0 per item)")
        return WeightedBagSampler(
            resolved_items,
            weights=sampler_config.weights,
            seed=sampler_config.seed,
            invalid_weights=sampler_config.invalid_weights,
        )

    raise ValueError(f"Unsupported sampler type: {sampler_config.type}")
