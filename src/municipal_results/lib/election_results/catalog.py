"""Municipality reference catalog loading.

The catalog is a JSON array of objects with the fields ``uf`` (state
abbreviation), ``codigo_tse`` (electoral municipality code) and
``nome_municipio`` (display name), in the order municipalities are scraped.
"""

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class CatalogError(Exception):
    """Raised when the municipality catalog cannot be read or is malformed."""


class Municipality(BaseModel):
    """One catalog entry: where a municipality lives and how the TSE codes it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    state_code: str = Field(alias="uf", min_length=2, max_length=2)
    electoral_code: int = Field(alias="codigo_tse", ge=0, le=99999)
    display_name: str = Field(alias="nome_municipio", min_length=1)

    @field_validator("state_code", mode="before")
    @classmethod
    def _upper_state(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v


def parse_catalog(entries: Any) -> list[Municipality]:
    """Validate decoded catalog JSON into an ordered list of municipalities.

    Raises:
        CatalogError: If the document is not an array or an entry is invalid.
    """
    if not isinstance(entries, list):
        msg = f"Catalog must be a JSON array, got {type(entries).__name__}"
        raise CatalogError(msg)

    municipalities: list[Municipality] = []
    for index, entry in enumerate(entries):
        try:
            municipalities.append(Municipality.model_validate(entry))
        except ValidationError as exc:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) or "<entry>" for err in exc.errors())
            msg = f"Invalid catalog entry #{index} ({fields}): {exc.error_count()} error(s)"
            raise CatalogError(msg) from exc
    return municipalities


def load_catalog(path: Path) -> list[Municipality]:
    """Read the municipality catalog from a JSON file.

    Args:
        path: Path to the catalog file.

    Returns:
        Municipalities in file order.

    Raises:
        CatalogError: If the file is missing, is not valid JSON, or has invalid entries.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read municipality catalog at {path}: {exc}"
        raise CatalogError(msg) from exc

    try:
        entries = json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"Municipality catalog at {path} is not valid JSON: {exc}"
        raise CatalogError(msg) from exc

    municipalities = parse_catalog(entries)
    logger.info("Loaded {} municipalities from {}", len(municipalities), path)
    return municipalities
