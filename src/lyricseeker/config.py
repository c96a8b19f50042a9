import os
import copy
import logging

import yaml

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"

DEFAULTS = {
    "data": {"corpus": "songdata.csv"},
    "search": {"top_n": 10, "context_radius": 5, "sentinel": "EXIT"},
    "logging": {"level": "INFO"},
}


def _merge(base: dict, override: dict) -> dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path=None) -> dict:
    """
    Read config.yaml over the built-in defaults.
    A missing file just means defaults.
    """
    config = copy.deepcopy(DEFAULTS)
    path = path or DEFAULT_CONFIG_PATH
    if os.path.exists(path):
        with open(path, 'r') as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"{path}: invalid YAML: {e}") from e
        if not isinstance(loaded, dict):
            raise ValueError(f"{path}: expected a mapping at top level")
        _merge(config, loaded)
        log.debug("[config] loaded %s", path)
    else:
        log.debug("[config] %s not found, using defaults", path)
    validate(config)
    return config


def validate(config: dict):
    search = config["search"]
    try:
        top_n = int(search["top_n"])
        context_radius = int(search["context_radius"])
    except (TypeError, ValueError, KeyError) as e:
        raise ValueError(f"search.top_n and search.context_radius must be integers: {e}") from e
    if top_n < 1:
        raise ValueError(f"search.top_n must be >= 1, got {top_n}")
    if context_radius < 0:
        raise ValueError(f"search.context_radius must be >= 0, got {context_radius}")
