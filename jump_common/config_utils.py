import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from jump_common.constants import DEFAULT_CONFIG_PATH, DEFAULT_DB_PATH, DEFAULT_FUZZY_MIN_RATIO, DEFAULT_MAX_ENTRIES, ENV_CONFIG_PATH, ENV_DB_PATH
from jump_common.core_utils import LOG_DEBUG


class JumpConfigError(ValueError):
    pass


@dataclass
class JumpConfig:
    db_path: Path = field(default_factory=lambda: DEFAULT_DB_PATH)
    max_entries: int = DEFAULT_MAX_ENTRIES
    fuzzy_matching: bool = True
    fuzzy_min_ratio: int = DEFAULT_FUZZY_MIN_RATIO


def get_config_path(explicit_path: Optional[str] = None) -> Path:
    if explicit_path:
        return Path(explicit_path).expanduser()
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def load_jump_config(config_path: Optional[Path] = None) -> JumpConfig:
    """
    Load config from YAML, falling back to defaults for a missing file or key.
    FRECENT_JUMP_DB in the environment wins over the file's db_path.
    """
    config_path = config_path or get_config_path()
    raw: Dict[str, Any] = {}
    if config_path.is_file():
        LOG_DEBUG(f"Reading config from {config_path}")
        with open(config_path, 'r', encoding='utf-8') as f:
            try:
                loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise JumpConfigError(f"Invalid YAML in {config_path}: {e}") from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise JumpConfigError(f"Expected a mapping at the top of {config_path}, got {type(loaded).__name__}")
        raw = loaded

    known_keys = {f.name for f in fields(JumpConfig)}
    unknown_keys = set(raw) - known_keys
    if unknown_keys:
        raise JumpConfigError(f"Unknown config keys in {config_path}: {', '.join(sorted(unknown_keys))}")

    config = JumpConfig()
    if "db_path" in raw:
        if not isinstance(raw["db_path"], str) or not raw["db_path"]:
            raise JumpConfigError(f"db_path must be a non-empty string, got {raw['db_path']!r}")
        config.db_path = Path(raw["db_path"]).expanduser()
    if "max_entries" in raw:
        config.max_entries = _require_positive_int("max_entries", raw["max_entries"])
    if "fuzzy_matching" in raw:
        if not isinstance(raw["fuzzy_matching"], bool):
            raise JumpConfigError(f"fuzzy_matching must be true or false, got {raw['fuzzy_matching']!r}")
        config.fuzzy_matching = raw["fuzzy_matching"]
    if "fuzzy_min_ratio" in raw:
        ratio = _require_positive_int("fuzzy_min_ratio", raw["fuzzy_min_ratio"])
        if ratio > 100:
            raise JumpConfigError(f"fuzzy_min_ratio must be at most 100, got {ratio}")
        config.fuzzy_min_ratio = ratio

    env_db_path = os.environ.get(ENV_DB_PATH)
    if env_db_path:
        config.db_path = Path(env_db_path).expanduser()
    return config


def _require_positive_int(key: str, value: Any) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise JumpConfigError(f"{key} must be a positive integer, got {value!r}")
    return value
