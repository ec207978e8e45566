"""Election results library: build URLs, fetch, parse, validate, and scrape.

Public API:
    - load_catalog: Read the municipality reference catalog
    - build_resource_url: Resource URL for one municipality and contest
    - fetch_municipality_results: Async HTTP fetch of one results document
    - parse_municipality_results: Flatten a document into candidate records
    - validate_percentages: Check that high-precision shares sum to 100
    - scrape_results: Sequential per-municipality scrape loop
"""

from municipal_results.lib.election_results.catalog import CatalogError, Municipality, load_catalog
from municipal_results.lib.election_results.fetcher import FetchError, fetch_municipality_results
from municipal_results.lib.election_results.parser import (
    CandidateRecord,
    ParseError,
    parse_municipality_results,
    table_columns,
)
from municipal_results.lib.election_results.pipeline import (
    MunicipalityFailure,
    ResultTable,
    ScrapeResult,
    is_excluded,
    scrape_results,
)
from municipal_results.lib.election_results.urls import CandidacyType, build_resource_url, pad_electoral_code
from municipal_results.lib.election_results.validator import (
    TOLERATED_TOTALS,
    canonical_decimal,
    MismatchRecord,
    PercentageAccumulator,
    validate_percentages,
)

__all__ = [
    "TOLERATED_TOTALS",
    "CandidacyType",
    "CandidateRecord",
    "CatalogError",
    "FetchError",
    "MismatchRecord",
    "Municipality",
    "MunicipalityFailure",
    "ParseError",
    "PercentageAccumulator",
    "ResultTable",
    "ScrapeResult",
    "build_resource_url",
    "canonical_decimal",
    "fetch_municipality_results",
    "is_excluded",
    "load_catalog",
    "pad_electoral_code",
    "parse_municipality_results",
    "scrape_results",
    "table_columns",
    "validate_percentages",
]
