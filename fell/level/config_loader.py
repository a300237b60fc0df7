"""Configuration loader for the level generator."""

import json
import logging
import os
from typing import Any, Dict, NamedTuple, Optional

from config import PROCGEN_CONFIG_PATH
from fell.level.procgen_data import GenerationConfig

logger = logging.getLogger(__name__)

ALLOWED_KEYS = {
    'level_width', 'level_height', 'chunk_size',
    'initial_mob_cap', 'mob_spawn_probability_percent',
    'room_data_dir', 'spawn_search_origin',
}


class ProcGenRuntimeConfig(NamedTuple):
    seed_mode: str
    seed: int

    def resolve_seed(self) -> Optional[int]:
        """Seed argument for ProcGen.generate: None lets the generator draw one."""
        return None if self.seed_mode == "random" else self.seed


def _read_section(config_path: str) -> Optional[Dict[str, Any]]:
    if not os.path.exists(config_path):
        logger.warning("Config file not found: %s, using defaults", config_path)
        return None

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Error loading config %s: %s, using defaults", config_path, e)
        return None

    section = data.get('procgen_config', {}) if isinstance(data, dict) else None
    if not isinstance(section, dict):
        logger.warning("Config %s has no 'procgen_config' object, using defaults", config_path)
        return None
    return section


def load_procgen_config(config_path: str = PROCGEN_CONFIG_PATH) -> GenerationConfig:
    """
    Load generation configuration from a JSON file.

    Only known keys are used. A missing or unreadable file falls back to
    defaults with a warning; values are checked later by
    GenerationConfig.validate().

    Args:
        config_path: Path to the configuration file

    Returns:
        GenerationConfig: Loaded configuration
    """
    section = _read_section(config_path)
    if section is None:
        return GenerationConfig()

    filtered = {k: v for k, v in section.items() if k in ALLOWED_KEYS}
    ignored = sorted(set(section) - ALLOWED_KEYS - {'seed_mode', 'seed'})
    if ignored:
        logger.warning("Ignoring unknown config keys in %s: %s", config_path, ", ".join(ignored))

    if isinstance(filtered.get('spawn_search_origin'), list):
        filtered['spawn_search_origin'] = tuple(filtered['spawn_search_origin'])

    room_data_dir = filtered.get('room_data_dir')
    if room_data_dir and not os.path.isabs(room_data_dir):
        # Relative template paths are resolved against the config file
        filtered['room_data_dir'] = os.path.join(os.path.dirname(os.path.abspath(config_path)), room_data_dir)

    return GenerationConfig(**filtered)


def load_procgen_runtime_config(config_path: str = PROCGEN_CONFIG_PATH) -> ProcGenRuntimeConfig:
    """Load runtime seed toggles (seed_mode, seed) with safe defaults."""
    seed_mode = "fixed"
    seed = 12345

    section = _read_section(config_path)
    if section is not None:
        seed_mode = str(section.get('seed_mode', seed_mode))
        # normalize seed_mode
        if seed_mode not in ("fixed", "random"):
            logger.warning("Unknown seed_mode %r, using 'fixed'", seed_mode)
            seed_mode = "fixed"
        try:
            seed = int(section.get('seed', seed))
        except (TypeError, ValueError):
            logger.warning("Invalid seed %r, using %d", section.get('seed'), 12345)
            seed = 12345

    return ProcGenRuntimeConfig(seed_mode=seed_mode, seed=seed)
