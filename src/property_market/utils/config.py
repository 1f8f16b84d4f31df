"""Configuration loading utilities."""

import logging
import os
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]

CONFIG_ENV_VAR = "PROPERTY_MARKET_CONFIG"


def load_config(config_path: str | None = None) -> dict:
    """Load YAML configuration file.

    Falls back to ``$PROPERTY_MARKET_CONFIG`` and then to ``configs/config.yaml``.
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR)
    if config_path is None:
        config_path = PROJECT_ROOT / "configs" / "config.yaml"
    else:
        config_path = Path(config_path)

    with open(config_path) as f:
        config = yaml.safe_load(f)

    logger.info(f"Loaded config from {config_path}")
    return config


def resolve_path(path: str) -> Path:
    """Resolve a config path relative to the project root."""
    path = Path(path)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path
