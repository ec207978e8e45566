"""Typer CLI root application."""

import typer

from municipal_results.core.config import ConfigurationError, get_settings
from municipal_results.core.logging import setup_logging

app = typer.Typer(name="municipal-results", help="Municipal election results scraper")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    setup_logging(settings.log_level, log_dir=settings.log_dir)


def _register_commands() -> None:
    """Register all CLI commands."""
    from municipal_results.cli.scrape_cmd import scrape, url

    app.command("scrape")(scrape)
    app.command("url")(url)


_register_commands()
