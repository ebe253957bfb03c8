from __future__ import annotations

import asyncio
import csv
import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

from fwmon.config import ReferenceConfig, Settings, reference_path_from_settings
from fwmon.errors import EmptyReferenceError, SourceUnavailableError
from fwmon.models import ReferenceEntry

logger = logging.getLogger(__name__)

ReferenceRow = Mapping[str, str | None] | tuple[str | None, str | None]


def _row_fields(row: ReferenceRow) -> tuple[str, str]:
    if isinstance(row, Mapping):
        serial, version = row.get("serial"), row.get("expected_version")
    else:
        serial, version = row
    return (serial or "").strip(), (version or "").strip()


def build_reference_table(rows: Iterable[ReferenceRow]) -> dict[str, str]:
    """Map serial -> expected version; the last row for a serial wins."""
    table: dict[str, str] = {}
    skipped = 0
    for row in rows:
        serial, version = _row_fields(row)
        if not serial or not version:
            skipped += 1
            continue
        table[serial] = version

    if skipped:
        logger.debug(
            "Skipped %d reference row(s) with a blank serial or version", skipped
        )
    if not table:
        raise EmptyReferenceError("Reference table has no valid entries")
    return table


def reference_entries(table: Mapping[str, str]) -> list[ReferenceEntry]:
    return [
        ReferenceEntry(serial=serial, expected_version=version)
        for serial, version in table.items()
    ]


def read_reference_rows(
    path: Path,
    delimiter: str = ";",
    serial_column: str = "Serial",
    version_column: str = "LFV",
    encoding: str = "utf-8-sig",
) -> Iterator[dict[str, str | None]]:
    """Yield ``{serial, expected_version}`` rows from a delimited reference file."""
    try:
        handle = path.open(newline="", encoding=encoding)
    except OSError as exc:
        raise SourceUnavailableError(
            f"Cannot read reference file: {path} ({exc.strerror or exc})"
        ) from exc

    with handle:
        reader = csv.DictReader(handle, delimiter=delimiter)
        try:
            for row in reader:
                yield {
                    "serial": row.get(serial_column),
                    "expected_version": row.get(version_column),
                }
        except (csv.Error, UnicodeDecodeError) as exc:
            raise SourceUnavailableError(
                f"Malformed reference file: {path} (line {reader.line_num}): {exc}"
            ) from exc


def rows_from_config(
    path: Path, config: ReferenceConfig
) -> Iterator[dict[str, str | None]]:
    return read_reference_rows(
        path,
        delimiter=config.delimiter,
        serial_column=config.serial_column,
        version_column=config.version_column,
        encoding=config.encoding,
    )


async def load_reference(settings: Settings) -> list[dict[str, str | None]]:
    path = reference_path_from_settings(settings)
    logger.info("Reading reference file '%s'", path)
    rows = await asyncio.to_thread(
        lambda: list(rows_from_config(path, settings.reference))
    )
    logger.debug("Read %d reference row(s)", len(rows))
    return rows
