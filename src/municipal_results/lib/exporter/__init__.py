"""Exporter library: write a finished result table as CSV or JSON."""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from municipal_results.lib.election_results.pipeline import ResultTable
from municipal_results.lib.exporter.csv_writer import write_csv
from municipal_results.lib.exporter.json_writer import write_json

# Format registry mapping format names to writer functions
_WRITERS: dict[str, Callable[..., int]] = {
    "csv": write_csv,
    "json": write_json,
}

SUPPORTED_FORMATS = list(_WRITERS.keys())


@dataclass
class ExportResult:
    """Result of an export operation."""

    record_count: int
    output_path: Path
    file_size_bytes: int


def output_filename(candidacy: str, year: int, output_format: str) -> str:
    """File name for a first-round export, e.g. ``result_mayor_round1_2024.csv``."""
    return f"result_{candidacy}_round1_{year}.{output_format}"


def export_table(
    table: ResultTable,
    output_format: str,
    output_dir: Path,
    *,
    year: int,
) -> ExportResult:
    """Export a result table to ``output_dir`` in the given format.

    Args:
        table: Finished result table.
        output_format: Output format (csv, json).
        output_dir: Directory to write into; created if missing.
        year: Election cycle year used in the file name.

    Returns:
        ExportResult with record count and file info.

    Raises:
        ValueError: If the format is not supported.
    """
    if output_format not in _WRITERS:
        msg = f"Unsupported format: {output_format}. Supported: {SUPPORTED_FORMATS}"
        raise ValueError(msg)

    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / output_filename(table.candidacy.value, year, output_format)

    writer = _WRITERS[output_format]
    count = writer(output_path, table.as_dicts(), columns=table.columns)

    file_size = output_path.stat().st_size
    logger.info("Exported {} records to {} ({} bytes)", count, output_path, file_size)

    return ExportResult(
        record_count=count,
        output_path=output_path,
        file_size_bytes=file_size,
    )


__all__ = [
    "ExportResult",
    "SUPPORTED_FORMATS",
    "export_table",
    "output_filename",
    "write_csv",
    "write_json",
]
