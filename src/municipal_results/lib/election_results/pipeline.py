"""Per-municipality scrape loop: exclude, fetch, parse, validate, accumulate.

Municipalities are processed strictly one at a time in catalog order.  In
strict mode the first ``FetchError`` or ``ParseError`` aborts the run; in
non-strict mode the failure is recorded and the loop moves on.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import httpx
from loguru import logger

from municipal_results.lib.election_results.catalog import Municipality
from municipal_results.lib.election_results.fetcher import FetchError, fetch_municipality_results
from municipal_results.lib.election_results.parser import (
    CandidateRecord,
    ParseError,
    parse_municipality_results,
    table_columns,
)
from municipal_results.lib.election_results.urls import (
    DEFAULT_ELECTION_ID,
    DEFAULT_HOST,
    DEFAULT_YEAR,
    CandidacyType,
    build_resource_url,
)
from municipal_results.lib.election_results.validator import MismatchRecord, PercentageAccumulator

# No municipal election is held in the Federal District.
EXCLUDED_STATES = frozenset({"DF"})
# Island district with no municipal race.
EXCLUDED_MUNICIPALITIES = frozenset({"FERNANDO DE NORONHA"})


def is_excluded(municipality: Municipality) -> str | None:
    """Return why a municipality is skipped, or ``None`` if it is scraped."""
    if municipality.state_code.upper() in EXCLUDED_STATES:
        return f"no municipal election in {municipality.state_code.upper()}"
    if municipality.display_name in EXCLUDED_MUNICIPALITIES:
        return f"no municipal race in {municipality.display_name}"
    return None


@dataclass
class ResultTable:
    """Header plus flattened candidate records, in scrape order."""

    candidacy: CandidacyType
    records: list[CandidateRecord] = field(default_factory=list)

    @property
    def columns(self) -> list[str]:
        return table_columns(self.candidacy)

    def rows(self) -> list[list[Any]]:
        """Header row followed by one row per record."""
        include = self.candidacy.has_running_mate
        return [self.columns, *(record.as_row(include) for record in self.records)]

    def as_dicts(self) -> list[dict[str, Any]]:
        include = self.candidacy.has_running_mate
        return [record.as_dict(include) for record in self.records]

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class MunicipalityFailure:
    """A municipality skipped in non-strict mode because fetch or parse failed."""

    municipality_name: str
    state_code: str
    error: str


@dataclass
class ScrapeResult:
    """Outcome of a completed run."""

    table: ResultTable
    mismatches: list[MismatchRecord] = field(default_factory=list)
    failures: list[MunicipalityFailure] = field(default_factory=list)
    processed: int = 0
    excluded: int = 0


async def scrape_results(
    catalog: Sequence[Municipality],
    candidacy: CandidacyType,
    *,
    client: httpx.AsyncClient | None = None,
    strict: bool = True,
    host: str = DEFAULT_HOST,
    year: int = DEFAULT_YEAR,
    election_id: int = DEFAULT_ELECTION_ID,
    timeout: float | None = None,
) -> ScrapeResult:
    """Scrape every municipality in the catalog and validate its percentages.

    Args:
        catalog: Municipalities in the order they are scraped.
        candidacy: Mayor or councilor contest.
        client: HTTP client to reuse; one is created for the run when omitted.
        strict: Abort on the first fetch/parse failure instead of recording it.
        host: Results API host.
        year: Election cycle year.
        election_id: Election identifier.
        timeout: Per-request timeout in seconds; ``None`` waits indefinitely.

    Returns:
        The result table, percentage mismatches and (non-strict) failures.

    Raises:
        FetchError: In strict mode, when a municipality cannot be fetched.
        ParseError: In strict mode, when a document cannot be parsed.
    """
    if client is None:
        async with httpx.AsyncClient(follow_redirects=False) as own_client:
            return await scrape_results(
                catalog,
                candidacy,
                client=own_client,
                strict=strict,
                host=host,
                year=year,
                election_id=election_id,
                timeout=timeout,
            )

    result = ScrapeResult(table=ResultTable(candidacy=candidacy))

    for position, municipality in enumerate(catalog, start=1):
        logger.info(
            "Municipality {}/{}: {} - {}",
            position,
            len(catalog),
            municipality.state_code,
            municipality.display_name,
        )

        reason = is_excluded(municipality)
        if reason is not None:
            logger.info("Skipping {}: {}", municipality.display_name, reason)
            result.excluded += 1
            continue

        url = build_resource_url(
            municipality.state_code,
            municipality.electoral_code,
            candidacy,
            host=host,
            year=year,
            election_id=election_id,
        )

        try:
            document = await fetch_municipality_results(client, url, timeout=timeout)
            parsed = parse_municipality_results(document, municipality, candidacy)
        except (FetchError, ParseError) as exc:
            if strict:
                raise
            logger.warning("Skipping {} after failure: {}", municipality.display_name, exc)
            result.failures.append(
                MunicipalityFailure(
                    municipality_name=municipality.display_name,
                    state_code=municipality.state_code,
                    error=str(exc),
                )
            )
            continue

        accumulator = PercentageAccumulator()
        for value in parsed.precise_percentages:
            accumulator.add(value)
        mismatch = accumulator.check(municipality.display_name)
        if mismatch is not None:
            logger.bind(
                json_output=True,
                event="percentage_mismatch",
                municipality=mismatch.municipality_name,
                state_code=municipality.state_code,
                computed_total=mismatch.display_total,
            ).warning("Vote percentages for {} sum to {}", mismatch.municipality_name, mismatch.display_total)
            result.mismatches.append(mismatch)

        result.table.records.extend(parsed.records)
        result.processed += 1

    logger.bind(
        json_output=True,
        event="scrape_finished",
        processed=result.processed,
        excluded=result.excluded,
        failed=len(result.failures),
        records=len(result.table),
        mismatches=[m.municipality_name for m in result.mismatches],
    ).info(
        "Scrape finished: {} processed, {} excluded, {} failed, {} records, {} mismatches",
        result.processed,
        result.excluded,
        len(result.failures),
        len(result.table),
        len(result.mismatches),
    )
    return result
