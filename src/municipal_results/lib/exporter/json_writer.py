"""JSON export writer for candidate result rows."""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any


def write_json(
    output_path: Path,
    records: Iterable[dict[str, Any]],
    *,
    columns: list[str] | None = None,
) -> int:
    """Write candidate records to a JSON file as an array of objects.

    Records are streamed one object at a time.

    Args:
        output_path: Path to write the JSON file.
        records: Iterable of column → value dicts.
        columns: Key order for each object; keys outside it are dropped.
            Defaults to each record's own order.

    Returns:
        Number of records written.
    """
    count = 0

    with output_path.open("w", encoding="utf-8") as f:
        f.write("[\n")
        for i, record in enumerate(records):
            if columns is not None:
                record = {column: record[column] for column in columns if column in record}
            if i > 0:
                f.write(",\n")
            json.dump(record, f, ensure_ascii=False, indent=2)
            count += 1
        f.write("\n]\n")

    return count
