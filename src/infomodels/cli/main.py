"""CLI entrypoint for infomodels."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from infomodels import __version__
from infomodels.cli.handlers import (
    handle_annotate,
    handle_compress,
    handle_constrain,
    handle_expand,
    handle_load,
    handle_validate,
)
from infomodels.config import InfomodelsConfig, load_config
from infomodels.constants.branding import BRAND_NAME, CLI_DESCRIPTION
from infomodels.constants.config import VALID_LOG_FORMATS
from infomodels.exceptions import ConfigError, InfomodelsError
from infomodels.logs import configure_logging

logger = logging.getLogger(__name__)

Handler: TypeAlias = Callable[[argparse.Namespace, InfomodelsConfig], int]

_HANDLERS: dict[str, Handler] = {
    "annotate": handle_annotate,
    "compress": handle_compress,
    "expand": handle_expand,
    "validate": handle_validate,
    "load": handle_load,
    "constrain": handle_constrain,
}


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog=BRAND_NAME,
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-c", "--config", type=Path, help="Explicit config file (default: ./infomodels.yaml)")
    parser.add_argument("--models-dir", type=Path, default=None, help="Directory of data model definitions")
    parser.add_argument("-m", "--model", default=None, help="Data model name (overrides metadata)")
    parser.add_argument("-v", "--model-version", default=None, help="Data model version (overrides metadata)")
    parser.add_argument("--loglvl", default=None, help="Log level: DEBUG, INFO, WARNING, ERROR or CRITICAL")
    parser.add_argument(
        "--logfmt",
        choices=sorted(VALID_LOG_FORMATS),
        default=None,
        help="Log format (default: tty on a terminal, json otherwise)",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored report tables")
    subparsers = parser.add_subparsers(dest="command", required=True)

    annotate = subparsers.add_parser("annotate", help="Annotate data directories with a metadata file")
    annotate.add_argument("directories", nargs="+", type=Path, metavar="DIR")
    annotate.add_argument("--data-version", default="", help="Data version")
    annotate.add_argument("--etl", default="", help="ETL code URL")
    annotate.add_argument("--site", default="", help="Site name")

    compress = subparsers.add_parser("compress", help="Package data directories as gzip tarballs")
    compress.add_argument("directories", nargs="+", type=Path, metavar="DIR")
    compress.add_argument("-o", "--output", type=Path, default=None, help="Package path (single DIR only)")

    expand = subparsers.add_parser("expand", help="Expand dataset packages")
    expand.add_argument("packages", nargs="+", type=Path, metavar="PACKAGE")
    expand.add_argument("-o", "--output", type=Path, default=None, help="Directory to expand into")

    validate = subparsers.add_parser("validate", help="Validate data directories against their data model")
    validate.add_argument("directories", nargs="+", type=Path, metavar="DIR")

    load = subparsers.add_parser("load", help="Load a data directory into a database")
    load.add_argument("directory", type=Path, metavar="DIR")
    load.add_argument("-d", "--dburi", default=None, help="Database URI to load the dataset into. Required.")
    load.add_argument("-s", "--schema", default=None, help="Schema into which to load. Required.")
    load.add_argument("--replace", action="store_true", help="Drop existing model tables first")

    constrain = subparsers.add_parser("constrain", help="Add or drop foreign key constraints")
    constrain.add_argument("-d", "--dburi", default=None, help="Database URI. Required.")
    constrain.add_argument("-s", "--search-path", default=None, help="Schema search path. Required.")
    constrain.add_argument("--undo", action="store_true", help="Drop the constraints instead of adding them")

    return parser


def _overrides(args: argparse.Namespace) -> dict[str, object]:
    """Config values given on the command line; ``None`` means not given."""
    return {
        "models_dir": args.models_dir,
        "model": args.model,
        "model_version": args.model_version,
        "loglvl": args.loglvl,
        "logfmt": args.logfmt,
        "dburi": getattr(args, "dburi", None),
        "schema": getattr(args, "schema", None),
        "search_path": getattr(args, "search_path", None),
    }


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config, overrides=_overrides(args))
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    configure_logging(config.loglvl, config.logfmt)
    logger.debug("Running %s", args.command)

    try:
        return _HANDLERS[args.command](args, config)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except InfomodelsError as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
