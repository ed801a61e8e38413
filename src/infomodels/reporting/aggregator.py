"""Classification and grouping of validation errors for one scanning session."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from infomodels.model import (
    AggregatedGroup,
    AggregationKey,
    FieldIssue,
    FileReport,
    RowIssue,
    ValidationError,
)
from infomodels.reporting.ranges import compress_line_ranges
from infomodels.reporting.sampler import Sampler


class ErrorAggregator:
    """Buckets a stream of validation errors by (classification, field, code).

    One aggregator covers one file. Groups are kept in first-insertion order
    so rendering is stable; examples are drawn only in :meth:`finalize`.
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self._groups: dict[AggregationKey, AggregatedGroup] = {}
        self._logger = logger or logging.getLogger(__name__)

    def observe(self, error: ValidationError) -> None:
        """Add one error to its group, creating the group on first sight."""
        key = AggregationKey.for_error(error)
        group = self._groups.get(key)
        if group is None:
            group = AggregatedGroup(key=key, description=error.description)
            self._groups[key] = group
            self._logger.debug("new %s-level group: field=%s code=%d", key.classification, key.field, key.code)
        group.add(error)

    def groups(self) -> list[AggregatedGroup]:
        """Return every group accumulated so far, in first-seen order."""
        return list(self._groups.values())

    def row_groups(self) -> list[AggregatedGroup]:
        return [group for group in self._groups.values() if group.key.classification == "row"]

    def field_groups(self, header: Sequence[str] = ()) -> list[AggregatedGroup]:
        """Return field-level groups ordered by header position, then first-seen.

        Fields missing from ``header`` follow the header fields in the order
        they were first seen.
        """
        position = {name: index for index, name in enumerate(header)}
        groups = [group for group in self._groups.values() if group.key.classification == "field"]
        # sorted() is stable, so codes keep first-seen order within one field.
        return sorted(groups, key=lambda group: position.get(group.key.field or "", len(position)))

    def is_clean(self) -> bool:
        return not self._groups

    def finalize(
        self,
        *,
        table: str,
        path: Path,
        header: Sequence[str],
        sampler: Sampler,
        complete: bool = True,
    ) -> FileReport:
        """Compress line ranges and draw samples for every group."""
        row_issues = tuple(
            RowIssue(
                code=group.key.code,
                description=group.description,
                occurrences=group.count,
                line_ranges=tuple(compress_line_ranges(sorted(group.lines))),
                example=group.first,
            )
            for group in self.row_groups()
        )
        field_issues = tuple(
            FieldIssue(
                field=group.key.field or "",
                code=group.key.code,
                description=group.description,
                occurrences=group.count,
                line_ranges=tuple(compress_line_ranges(sorted(group.lines))),
                samples=tuple(sampler.sample(group.instances)),
            )
            for group in self.field_groups(header)
        )
        return FileReport(
            table=table,
            path=path,
            row_issues=row_issues,
            field_issues=field_issues,
            complete=complete,
        )
