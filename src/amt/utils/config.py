from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from amt.errors import ConfigError


ENV_RETRY_COUNT = "ASSET_MANIFEST_RETRY_COUNT"
ENV_RETRY_DELAY = "ASSET_MANIFEST_RETRY_DELAY"
ENV_MANIFEST_PATH = "ASSET_MANIFEST_PATH"
ENV_BUILD_SYSTEM = "ASSET_MANIFEST_BUILD_SYSTEM"

# The LUCKY_ names are the ones Lucky apps already set; they win when both are present.
LUCKY_RETRY_COUNT = "LUCKY_ASSET_MANIFEST_RETRY_COUNT"
LUCKY_RETRY_DELAY = "LUCKY_ASSET_MANIFEST_RETRY_DELAY"
ENV_RETRY_COUNT_NAMES = (LUCKY_RETRY_COUNT, ENV_RETRY_COUNT)
ENV_RETRY_DELAY_NAMES = (LUCKY_RETRY_DELAY, ENV_RETRY_DELAY)

DEFAULT_MANIFEST_PATH = "./public/mix-manifest.json"
DEFAULT_RETRY_COUNT = 20
DEFAULT_RETRY_DELAY = 0.25

DEFAULTS: Dict[str, Any] = {
    "manifest": {"path": DEFAULT_MANIFEST_PATH, "build_system": "mix"},
    "retry": {"count": DEFAULT_RETRY_COUNT, "delay": DEFAULT_RETRY_DELAY},
    "output": {"format": "macro"},
}


def load_yaml(path: str | Path) -> Dict[str, Any]:
    """Load YAML config into a dict. An empty file loads as {}."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top-level YAML value must be a mapping")
    return data


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        result = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None
    if result < 0:
        raise ConfigError(f"{name} must be >= 0, got {result}")
    return result


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None
    if result < 0:
        raise ConfigError(f"{name} must be >= 0, got {result}")
    return result


def _env_lookup(env: Mapping[str, str], names: Tuple[str, ...]) -> Optional[Tuple[str, str]]:
    """First of ``names`` set in ``env``, as (name, value)."""
    for name in names:
        if name in env:
            return name, env[name]
    return None


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = DEFAULT_RETRY_COUNT
    delay_seconds: float = DEFAULT_RETRY_DELAY

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RetryConfig":
        env = os.environ if environ is None else environ
        count = _env_lookup(env, ENV_RETRY_COUNT_NAMES) or (ENV_RETRY_COUNT, DEFAULT_RETRY_COUNT)
        delay = _env_lookup(env, ENV_RETRY_DELAY_NAMES) or (ENV_RETRY_DELAY, DEFAULT_RETRY_DELAY)
        return cls(max_attempts=_as_int(*count), delay_seconds=_as_float(*delay))


def _env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if ENV_MANIFEST_PATH in env:
        overrides.setdefault("manifest", {})["path"] = env[ENV_MANIFEST_PATH]
    if ENV_BUILD_SYSTEM in env:
        overrides.setdefault("manifest", {})["build_system"] = env[ENV_BUILD_SYSTEM]
    count = _env_lookup(env, ENV_RETRY_COUNT_NAMES)
    if count is not None:
        overrides.setdefault("retry", {})["count"] = count[1]
    delay = _env_lookup(env, ENV_RETRY_DELAY_NAMES)
    if delay is not None:
        overrides.setdefault("retry", {})["delay"] = delay[1]
    return overrides


@dataclass
class AppConfig:
    raw: Dict[str, Any]

    @classmethod
    def from_files(cls, *paths: str | Path) -> "AppConfig":
        merged: Dict[str, Any] = {}
        for path in paths:
            merged = deep_merge(merged, load_yaml(path))
        return cls(raw=merged)

    @classmethod
    def load(cls, *paths: str | Path, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Defaults, then YAML files in order, then environment overrides."""
        env = os.environ if environ is None else environ
        cfg = cls(raw=deep_merge(DEFAULTS, cls.from_files(*paths).raw))
        for name in DEFAULTS:
            cfg.section(name)
        return cls(raw=deep_merge(cfg.raw, _env_overrides(env)))

    def section(self, name: str) -> Dict[str, Any]:
        value = self.raw.get(name)
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ConfigError(f"{name} must be a mapping, got {type(value).__name__}")
        return value

    @property
    def manifest_path(self) -> str:
        return str(self.section("manifest").get("path") or DEFAULT_MANIFEST_PATH)

    @property
    def build_system(self) -> Optional[str]:
        return self.section("manifest").get("build_system")

    @property
    def output_format(self) -> str:
        return str(self.section("output").get("format", "macro"))

    def retry_config(self) -> RetryConfig:
        retry_cfg = self.section("retry")
        return RetryConfig(
            max_attempts=_as_int("retry.count", retry_cfg.get("count", DEFAULT_RETRY_COUNT)),
            delay_seconds=_as_float("retry.delay", retry_cfg.get("delay", DEFAULT_RETRY_DELAY)),
        )
