"""Validation of data directories against their data model."""

from __future__ import annotations

import logging
import random
from pathlib import Path

from infomodels.config import InfomodelsConfig
from infomodels.constants.branding import EVERYTHING_OK_MESSAGE
from infomodels.datadir import DataDirectory
from infomodels.datamodels import ModelDefinition, ModelRegistry, TableDefinition
from infomodels.exceptions import ConfigError, StructuralError
from infomodels.logs import log_fields
from infomodels.model import FileReport, SkippedFile, ValidationRun
from infomodels.reporting import ErrorAggregator, Sampler
from infomodels.validator import CsvValidator, RecordValidator

logger = logging.getLogger(__name__)


def build_sampler(config: InfomodelsConfig) -> Sampler:
    """Create the sampler described by the configuration."""
    rng = random.Random(config.sample_seed) if config.sample_seed is not None else random.Random()
    return Sampler(rng=rng, bound=config.sample_size, with_replacement=config.sample_with_replacement)


def validate_file(
    *,
    path: Path,
    table: TableDefinition,
    validator: RecordValidator,
    sampler: Sampler,
    logger: logging.Logger = logger,
) -> FileReport:
    """Validate one data file and return its finalized report.

    ``StructuralError`` raised while opening propagates. When the file
    becomes unreadable mid-scan, the errors gathered so far are reported and
    the report is marked incomplete.
    """
    aggregator = ErrorAggregator(logger=logger)
    complete = True
    with validator.open(path, table) as session:
        header = session.header
        try:
            for error in session:
                aggregator.observe(error)
        except StructuralError as exc:
            complete = False
            logger.warning("Stopped scanning %s: %s", path.name, exc, extra=log_fields(file=str(path)))

    report = aggregator.finalize(table=table.name, path=path, header=header, sampler=sampler, complete=complete)
    if not report.has_errors and complete:
        logger.info("%s: %s", path.name, EVERYTHING_OK_MESSAGE, extra=log_fields(table=table.name))
    return report


def resolve_model(
    data_dir: DataDirectory,
    *,
    config: InfomodelsConfig,
    registry: ModelRegistry,
) -> ModelDefinition:
    """Pick the model for a directory: configured values win over metadata."""
    name = config.model or data_dir.model
    if not name:
        raise ConfigError(f"No model for {data_dir.path}: pass --model or annotate the directory first")
    version = config.model_version or data_dir.model_version
    return registry.get(name, version or None)


def validate_directory(
    *,
    directory: Path,
    config: InfomodelsConfig,
    registry: ModelRegistry,
    validator: RecordValidator | None = None,
    sampler: Sampler | None = None,
    logger: logging.Logger = logger,
) -> ValidationRun:
    """Validate every file listed in a directory's metadata."""
    data_dir = DataDirectory(directory)
    data_dir.read_metadata()
    data_dir.verify()
    model = resolve_model(data_dir, config=config, registry=registry)
    validator = validator or CsvValidator()
    sampler = sampler or build_sampler(config)

    logger.info(
        "Validating %s against %s/%s",
        directory,
        model.name,
        model.version,
        extra=log_fields(directory=str(directory), model=model.name, model_version=model.version),
    )

    reports: list[FileReport] = []
    skipped: list[SkippedFile] = []
    for record in data_dir.records:
        filename = record["filename"]
        table = model.table(record["table"])
        if table is None:
            reason = f"unknown table '{record['table']}'. Choices are: {', '.join(model.table_names)}"
            logger.warning("Skipping %s: %s", filename, reason)
            skipped.append(SkippedFile(filename=filename, table=record["table"], reason=reason))
            continue

        try:
            report = validate_file(
                path=directory / filename,
                table=table,
                validator=validator,
                sampler=sampler,
                logger=logger,
            )
        except StructuralError as exc:
            logger.warning("Skipping %s: %s", filename, exc)
            skipped.append(SkippedFile(filename=filename, table=table.name, reason=str(exc)))
            continue
        reports.append(report)

    return ValidationRun(
        directory=directory,
        model=model.name,
        model_version=model.version,
        reports=tuple(reports),
        skipped=tuple(skipped),
        structural_failures_as_errors=config.structural_failures_as_errors,
    )
