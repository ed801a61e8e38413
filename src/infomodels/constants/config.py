"""Configuration defaults, filenames, and environment binding."""

from __future__ import annotations

CONFIG_FILENAME: str = "infomodels.yaml"
ENV_PREFIX: str = "INFOMODELS_"

DEFAULT_LOG_LEVEL: str = "INFO"
VALID_LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
LOG_LEVEL_ALIASES: dict[str, str] = {
    "WARN": "WARNING",
    "FATAL": "CRITICAL",
    "PANIC": "CRITICAL",
}
VALID_LOG_FORMATS: frozenset[str] = frozenset({"tty", "text", "json"})

DEFAULT_SAMPLE_SIZE: int = 5
DEFAULT_LINE_DISPLAY_LIMIT: int = 10

STRING_KEYS: frozenset[str] = frozenset(
    {"model", "model_version", "loglvl", "logfmt", "dburi", "dbpass", "schema", "search_path"}
)
PATH_KEYS: frozenset[str] = frozenset({"models_dir"})
INT_KEYS: frozenset[str] = frozenset({"sample_size", "line_display_limit", "sample_seed"})
BOOL_KEYS: frozenset[str] = frozenset({"sample_with_replacement", "structural_failures_as_errors"})
ALLOWED_CONFIG_KEYS: frozenset[str] = STRING_KEYS | PATH_KEYS | INT_KEYS | BOOL_KEYS

ENV_TRUE_VALUES: frozenset[str] = frozenset({"1", "true", "yes", "on"})
ENV_FALSE_VALUES: frozenset[str] = frozenset({"0", "false", "no", "off", ""})
