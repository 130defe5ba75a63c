"""Persisted user configuration (``~/.swetc/config.json``)."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path

from swetc.models import AnalysisConfig

logger = logging.getLogger(__name__)

_CONFIG_DIR = Path.home() / ".swetc"
_CONFIG_FILE = _CONFIG_DIR / "config.json"

_KEYS = ("msbuild", "tf", "workers", "properties", "skip_dirs")


def _load_config_file() -> dict:
    """Load persisted config from disk; a broken file counts as empty."""
    if not _CONFIG_FILE.exists():
        return {}
    try:
        data = json.loads(_CONFIG_FILE.read_text())
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", _CONFIG_FILE, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", _CONFIG_FILE)
        return {}
    return data


def save_config(data: dict) -> None:
    """Write config to disk."""
    _CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    _CONFIG_FILE.write_text(json.dumps(data, indent=2))


def load_config(**overrides) -> AnalysisConfig:
    """Build an ``AnalysisConfig`` from the config file plus explicit overrides.

    ``None`` overrides are ignored so CLI options can be passed through as-is.
    """
    config = AnalysisConfig()
    stored = {k: v for k, v in _load_config_file().items() if k in _KEYS}
    try:
        if "workers" in stored:
            stored["workers"] = int(stored["workers"])
        if "properties" in stored:
            stored["properties"] = {str(k): str(v) for k, v in stored["properties"].items()}
        if "skip_dirs" in stored:
            if not isinstance(stored["skip_dirs"], list):
                raise TypeError("skip_dirs must be a list of directory patterns")
            stored["skip_dirs"] = [str(d) for d in stored["skip_dirs"]]
    except (TypeError, ValueError, AttributeError) as e:
        logger.warning("Ignoring invalid config %s: %s", _CONFIG_FILE, e)
        stored = {}

    config = replace(config, **stored)
    given = {k: v for k, v in overrides.items() if v is not None}
    if "properties" in given:
        given["properties"] = {**config.properties, **given["properties"]}
    return replace(config, **given)
