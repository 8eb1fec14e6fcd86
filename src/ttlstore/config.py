"""Store configuration: validated model, YAML loader and env overrides.

Typical usage::

    from ttlstore.config import load_config
    cfg = load_config()                       # auto-detect .ttlstore.yml
    cfg = load_config("path/to/ttlstore.yml") # explicit

Supported environment variables (applied on top of the file):
- TTLSTORE_MAX_ITEMS: Maximum number of entries
- TTLSTORE_EXPIRE_MS: Entry time-to-live in milliseconds
- TTLSTORE_KEY_LENGTH: Length of generated keys (hex characters)
- TTLSTORE_CLEANUP_INTERVAL_MS: Period between expiration sweeps
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

DAY_MS = 24 * 60 * 60 * 1000

# Soft bounds: keys outside this range only trigger a warning
RECOMMENDED_KEY_LENGTH = (6, 32)


class StoreConfig(BaseModel):
    """Immutable store configuration.

    Integers are strict: bools and numeric strings are rejected.

    Fields accept both snake_case names and the camelCase aliases
    (``maxItems``, ``expireMs``, ``keyLength``, ``cleanupIntervalMs``).
    """

    max_items: Optional[StrictInt] = Field(
        default=None, gt=0, alias="maxItems", description="None means unbounded"
    )
    expire_ms: StrictInt = Field(default=DAY_MS, ge=0, alias="expireMs")
    key_length: StrictInt = Field(default=8, gt=0, alias="keyLength")
    cleanup_interval_ms: StrictInt = Field(default=DAY_MS, gt=0, alias="cleanupIntervalMs")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    @field_validator("key_length")
    @classmethod
    def _key_length_even(cls, value: int) -> int:
        # Keys are hex-encoded bytes, two characters per byte
        if value % 2:
            raise ValueError(f"key_length must be even, got {value}")
        return value

    @property
    def key_length_recommended(self) -> bool:
        low, high = RECOMMENDED_KEY_LENGTH
        return low <= self.key_length <= high


# ------------------------------------------------------------------
# Environment helpers
# ------------------------------------------------------------------


def get_env_int(key: str, default: Optional[int]) -> Optional[int]:
    """Get integer from environment variable.

    Args:
        key: Environment variable name
        default: Default value if not set or not an integer

    Returns:
        Integer value or None
    """
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


_ENV_KEYS = {
    "max_items": "TTLSTORE_MAX_ITEMS",
    "expire_ms": "TTLSTORE_EXPIRE_MS",
    "key_length": "TTLSTORE_KEY_LENGTH",
    "cleanup_interval_ms": "TTLSTORE_CLEANUP_INTERVAL_MS",
}


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to a raw config mapping.

    Args:
        config: Base configuration dict (snake_case or camelCase keys)

    Returns:
        New dict with env var overrides applied; *config* is not mutated
    """
    config = config.copy()

    for field_name, env_key in _ENV_KEYS.items():
        value = get_env_int(env_key, None)
        if value is None:
            continue
        # Drop the camelCase spelling so the override is the only value
        alias = StoreConfig.model_fields[field_name].alias
        config.pop(alias, None)
        config[field_name] = value

    return config


# ------------------------------------------------------------------
# Loader
# ------------------------------------------------------------------

_SEARCH_NAMES = (".ttlstore.yml", ".ttlstore.yaml", "ttlstore.yml")


def load_config(path: Optional[str] = None) -> StoreConfig:
    """Load config from *path* or auto-detect in the working directory.

    If no file is found, defaults are used (still subject to env overrides).

    Raises:
        FileNotFoundError: If an explicit *path* does not exist.
        ValueError: If the YAML is invalid or the values fail validation.
    """
    data: Dict[str, Any] = {}

    if path is not None:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        data = _parse(p)
    else:
        for name in _SEARCH_NAMES:
            p = Path(name)
            if p.exists():
                data = _parse(p)
                break

    return StoreConfig.model_validate(apply_env_overrides(data))


def _parse(path: Path) -> Dict[str, Any]:
    """Parse a YAML file into a raw config mapping."""
    raw = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top level in {path}")

    return data
