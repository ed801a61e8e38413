"""Config loading and normalization: YAML file, then environment, then flags."""

from __future__ import annotations

import difflib
import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from infomodels.config.model import InfomodelsConfig
from infomodels.constants.config import (
    ALLOWED_CONFIG_KEYS,
    BOOL_KEYS,
    CONFIG_FILENAME,
    ENV_FALSE_VALUES,
    ENV_PREFIX,
    ENV_TRUE_VALUES,
    INT_KEYS,
    LOG_LEVEL_ALIASES,
    PATH_KEYS,
    VALID_LOG_FORMATS,
    VALID_LOG_LEVELS,
)
from infomodels.exceptions import ConfigError


def _suggest_key(unknown: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean ...' hint for a close key match, or empty string."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""


def load_config(
    config_path: Path | None = None,
    *,
    cwd: Path | None = None,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> InfomodelsConfig:
    """Build the effective config.

    ``infomodels.yaml`` in ``cwd`` is read when present, or ``config_path``
    when given (then it must exist). ``INFOMODELS_*`` variables override the
    file and non-``None`` ``overrides`` (CLI flags) override both.
    """
    values: dict[str, Any] = {}
    values.update(_read_file(config_path, cwd or Path.cwd()))
    values.update(_read_environ(os.environ if environ is None else environ))
    if overrides:
        values.update(
            (key, _coerce(key, value, "command line"))
            for key, value in overrides.items()
            if value is not None
        )
    return _build(values)


def _read_file(config_path: Path | None, cwd: Path) -> dict[str, Any]:
    path = config_path.resolve() if config_path else (cwd / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return {}

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    values: dict[str, Any] = {}
    for key, value in raw.items():
        key = str(key)
        if key not in ALLOWED_CONFIG_KEYS:
            hint = _suggest_key(key, ALLOWED_CONFIG_KEYS)
            raise ConfigError(f"Unknown config key `{key}` in {path}" + (f"; {hint}" if hint else ""))
        if value is None:
            continue
        values[key] = _coerce(key, value, str(path))
    return values


def _read_environ(environ: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for key in ALLOWED_CONFIG_KEYS:
        name = f"{ENV_PREFIX}{key.upper()}"
        if name in environ:
            values[key] = _coerce(key, environ[name], name)
    return values


def _coerce(key: str, value: Any, source: str) -> Any:
    """Convert one raw setting to the type the config model expects."""
    if key in BOOL_KEYS:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in ENV_TRUE_VALUES:
            return True
        if text in ENV_FALSE_VALUES:
            return False
        raise ConfigError(f"{key} from {source} must be a boolean, got {value!r}")

    if key in INT_KEYS:
        if isinstance(value, bool):
            raise ConfigError(f"{key} from {source} must be an integer, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"{key} from {source} must be an integer, got {value!r}") from exc

    if key in PATH_KEYS:
        return Path(str(value)).expanduser()

    if isinstance(value, (dict, list)):
        raise ConfigError(f"{key} from {source} must be a string")
    return str(value).strip()


def _normalize_level(level: str) -> str:
    upper = level.upper()
    upper = LOG_LEVEL_ALIASES.get(upper, upper)
    if upper not in VALID_LOG_LEVELS:
        raise ConfigError(f"loglvl must be one of {sorted(VALID_LOG_LEVELS)}, got {level!r}")
    return upper


def _build(values: dict[str, Any]) -> InfomodelsConfig:
    config = replace(InfomodelsConfig(), **values)

    logfmt = config.logfmt.lower()
    if logfmt and logfmt not in VALID_LOG_FORMATS:
        raise ConfigError(f"logfmt must be one of {sorted(VALID_LOG_FORMATS)}, got {config.logfmt!r}")
    if config.sample_size < 1:
        raise ConfigError("sample_size must be a positive integer")
    if config.line_display_limit < 1:
        raise ConfigError("line_display_limit must be a positive integer")

    return replace(config, loglvl=_normalize_level(config.loglvl), logfmt=logfmt)
