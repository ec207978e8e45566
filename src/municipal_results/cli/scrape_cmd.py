"""CLI commands for scraping municipal results.

``scrape`` runs the whole catalog and exports the table; ``url`` prints the
resource URL for a single municipality.
"""

import asyncio
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from municipal_results.lib.election_results import CandidacyType, ScrapeResult


class ExportFormat(StrEnum):
    """Supported output file formats."""

    CSV = "csv"
    JSON = "json"


def scrape(
    candidacy: Annotated[
        CandidacyType,
        typer.Option("--candidacy", help="Contest to scrape: mayor or councilor"),
    ],
    output_format: Annotated[
        ExportFormat,
        typer.Option("--format", help="Output format: csv or json"),
    ],
    catalog: Annotated[
        Path | None,
        typer.Option("--catalog", help="Municipality catalog JSON (defaults to CATALOG_PATH)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", help="Output directory (defaults to EXPORT_DIR)"),
    ] = None,
    keep_going: Annotated[
        bool,
        typer.Option("--keep-going", help="Record failed municipalities and continue instead of aborting"),
    ] = False,
) -> None:
    """Scrape first-round results for every municipality and export them."""
    from municipal_results.core.config import ConfigurationError, get_settings
    from municipal_results.lib.election_results import CatalogError, FetchError, ParseError
    from municipal_results.lib.exporter import export_table

    try:
        settings = get_settings()
        catalog_path = catalog or Path(settings.catalog_path)
        strict = settings.strict_mode and not keep_going
        logger.info(
            "Scraping {} results for {} (format: {}, strict: {})",
            candidacy.value,
            settings.election_year,
            output_format.value,
            strict,
        )
        result = asyncio.run(_scrape_impl(candidacy, catalog_path, strict))
    except (ConfigurationError, CatalogError, FetchError, ParseError) as exc:
        logger.error("Scrape aborted, nothing was exported: {}", exc)
        typer.echo(f"Scrape aborted: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    export = export_table(
        result.table,
        output_format.value,
        output or Path(settings.export_dir),
        year=settings.election_year,
    )

    typer.echo("\nScrape completed:")
    typer.echo(f"  Municipalities: {result.processed} processed, {result.excluded} excluded")
    typer.echo(f"  Records:        {export.record_count}")
    typer.echo(f"  File size:      {export.file_size_bytes} bytes")
    typer.echo(f"  File path:      {export.output_path}")

    typer.echo(f"\nPercentage mismatches: {len(result.mismatches)}")
    for mismatch in result.mismatches:
        typer.echo(f"  {mismatch.municipality_name}: {mismatch.display_total}")

    if result.failures:
        typer.echo(f"\nFailed municipalities: {len(result.failures)}")
        for failure in result.failures:
            typer.echo(f"  {failure.municipality_name} ({failure.state_code}): {failure.error}")


async def _scrape_impl(candidacy: CandidacyType, catalog_path: Path, strict: bool) -> ScrapeResult:
    """Async implementation of the scrape command."""
    from municipal_results.core.config import get_settings
    from municipal_results.lib.election_results import load_catalog, scrape_results

    settings = get_settings()
    municipalities = load_catalog(catalog_path)

    return await scrape_results(
        municipalities,
        candidacy,
        strict=strict,
        host=settings.results_host,
        year=settings.election_year,
        election_id=settings.election_id,
        timeout=settings.fetch_timeout,
    )


def url(
    state: Annotated[str, typer.Option("--state", help="Two-letter state abbreviation")],
    code: Annotated[int, typer.Option("--code", help="Electoral municipality code")],
    candidacy: Annotated[
        CandidacyType,
        typer.Option("--candidacy", help="Contest: mayor or councilor"),
    ],
) -> None:
    """Print the results resource URL for one municipality."""
    from municipal_results.core.config import get_settings
    from municipal_results.lib.election_results import build_resource_url

    settings = get_settings()
    try:
        resource_url = build_resource_url(
            state,
            code,
            candidacy,
            host=settings.results_host,
            year=settings.election_year,
            election_id=settings.election_id,
        )
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    typer.echo(resource_url)
