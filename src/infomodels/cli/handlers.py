"""CLI subcommand handlers."""

from __future__ import annotations

import argparse
import logging
import sys
import time

from infomodels.config import InfomodelsConfig
from infomodels.database import (
    ModelDatabase,
    SchemaStateResolver,
    VersionHistoryLog,
    ensure_schema,
    open_engine,
    primary_schema,
)
from infomodels.datadir import DataDirectory, pack, unpack
from infomodels.datamodels import ModelRegistry
from infomodels.exceptions import ConfigError
from infomodels.logs import log_fields
from infomodels.model import ValidationRun
from infomodels.reporting import ValidationReporter
from infomodels.validation import build_sampler, resolve_model, validate_directory

logger = logging.getLogger(__name__)


def handle_annotate(args: argparse.Namespace, config: InfomodelsConfig) -> int:
    """Write ``metadata.csv`` into each directory."""
    for directory in args.directories:
        logger.info("Beginning annotation", extra=log_fields(command="annotate", directory=str(directory)))
        data_dir = DataDirectory(directory)
        data_dir.populate_from_data(
            model=config.model,
            model_version=config.model_version,
            data_version=args.data_version,
            etl=args.etl,
            site=args.site,
        )
        path = data_dir.write_metadata()
        print(f"Wrote {path}")
    return 0


def handle_compress(args: argparse.Namespace, config: InfomodelsConfig) -> int:
    """Package each directory as a gzip tarball."""
    if args.output is not None and len(args.directories) > 1:
        raise ConfigError("--output can only be used with a single directory")
    for directory in args.directories:
        logger.info("Beginning compression", extra=log_fields(command="compress", directory=str(directory)))
        print(f"Wrote {pack(directory, args.output)}")
    return 0


def handle_expand(args: argparse.Namespace, config: InfomodelsConfig) -> int:
    """Expand each package next to itself or under ``--output``."""
    for package in args.packages:
        logger.info("Beginning expansion", extra=log_fields(command="expand", package=str(package)))
        print(f"Expanded into {unpack(package, args.output)}")
    return 0


def handle_validate(args: argparse.Namespace, config: InfomodelsConfig) -> int:
    """Validate every directory, print report tables, exit 1 on any error."""
    registry = ModelRegistry(config.models_dir)
    reporter = ValidationReporter(
        color=not args.no_color and sys.stdout.isatty(),
        line_display_limit=config.line_display_limit,
    )
    sampler = build_sampler(config)

    runs: list[ValidationRun] = []
    for directory in args.directories:
        run = validate_directory(directory=directory, config=config, registry=registry, sampler=sampler)
        rendered = reporter.render_run(run)
        if rendered:
            print(rendered)
        runs.append(run)

    return 1 if any(run.has_errors for run in runs) else 0


def handle_load(args: argparse.Namespace, config: InfomodelsConfig) -> int:
    """Create the model tables in a schema and load a directory's data into them."""
    if not config.dburi:
        raise ConfigError("load requires a dburi")
    if not config.schema:
        raise ConfigError("load requires a schema")

    data_dir = DataDirectory(args.directory)
    data_dir.read_metadata()
    data_dir.verify()
    model = resolve_model(data_dir, config=config, registry=ModelRegistry(config.models_dir))

    fields = log_fields(command="load", directory=str(args.directory), schema=config.schema, model=model.name)
    logger.info("Beginning dataset loading", extra=fields)

    engine = open_engine(config.dburi, password=config.dbpass, search_path=config.schema)
    try:
        ensure_schema(engine, primary_schema(config.schema))
        database = ModelDatabase(engine, model)
        if args.replace:
            database.drop_tables()
        database.create_tables()
        counts = database.load(data_dir)
    finally:
        engine.dispose()

    logger.info("Loaded %d rows into %d tables", sum(counts.values()), len(counts), extra=fields)
    return 0


def handle_constrain(args: argparse.Namespace, config: InfomodelsConfig) -> int:
    """Add (or with ``--undo`` drop) the model's foreign key constraints."""
    if not config.dburi:
        raise ConfigError("constrain requires a dburi")
    if not config.search_path:
        raise ConfigError("constrain requires a search path")

    engine = open_engine(config.dburi, password=config.dbpass, search_path=config.search_path)
    try:
        name, version = config.model, config.model_version
        if not (name and version):
            state = SchemaStateResolver(VersionHistoryLog(engine), search_path=config.search_path).resolve()
            name = name or state.model
            version = version or state.model_version
        model = ModelRegistry(config.models_dir).get(name, version)

        fields = log_fields(
            command="constrain",
            search_path=config.search_path,
            model=model.name,
            model_version=model.version,
        )
        database = ModelDatabase(engine, model)
        start = time.monotonic()
        if args.undo:
            logger.info("Dropping constraints", extra=fields)
            count = database.drop_constraints()
            action = "dropped"
        else:
            logger.info("Adding foreign key constraints", extra=fields)
            count = database.create_constraints()
            action = "added"
        elapsed = time.monotonic() - start
    finally:
        engine.dispose()

    logger.info("%d constraints %s in %.2fs", count, action, elapsed, extra=fields)
    return 0
