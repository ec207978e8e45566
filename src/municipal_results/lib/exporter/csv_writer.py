"""CSV export writer for candidate result rows."""

import csv
from collections.abc import Iterable
from pathlib import Path
from typing import Any


def write_csv(
    output_path: Path,
    records: Iterable[dict[str, Any]],
    *,
    columns: list[str],
) -> int:
    """Write candidate records to a CSV file.

    Values are written verbatim so the file reads back to the same values
    as the JSON export of the same table.

    Args:
        output_path: Path to write the CSV file.
        records: Iterable of column → value dicts.
        columns: Header, in output order.

    Returns:
        Number of records written.
    """
    count = 0

    with output_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns, extrasaction="ignore")
        writer.writeheader()

        for record in records:
            writer.writerow(record)
            count += 1

    return count
