"""Results document parser and Pydantic validation models.

Decodes the nested per-municipality results document
(race → coalition → party → candidate) into flat ``CandidateRecord`` rows.
Only the consumed subset of the document is modelled; unknown keys are
ignored.

Field names match the short keys used by the results JSON.
"""

import html
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from municipal_results.lib.election_results.catalog import Municipality
from municipal_results.lib.election_results.urls import CandidacyType

BASE_COLUMNS = [
    "Name",
    "Party",
    "Number",
    "Municipality",
    "State",
    "Birth date",
    "Candidacy validity",
    "Status",
    "Total votes",
    "Vote percentage",
]
RUNNING_MATE_COLUMN = "Running mate"

_TAB_ENTITY = "&#09;"


class ParseError(Exception):
    """Raised when a results document lacks an expected nested field."""


def table_columns(candidacy: CandidacyType) -> list[str]:
    """Header row for a candidacy type; mayor tables carry the running mate."""
    if candidacy.has_running_mate:
        return [*BASE_COLUMNS, RUNNING_MATE_COLUMN]
    return list(BASE_COLUMNS)


def _coerce_null_to_str(v: Any) -> Any:
    """Coerce explicit JSON null to empty string."""
    return v if v is not None else ""


def _coerce_number_to_str(v: Any) -> Any:
    """Accept bare JSON numbers where the feed normally sends locale strings."""
    if isinstance(v, int | float) and not isinstance(v, bool):
        return str(v)
    return v


class _FeedModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class RunningMate(_FeedModel):
    """Running mate (vice-mayor) attached to a mayoral candidate."""

    nmu: str


class Candidate(_FeedModel):
    """A candidate with ballot data and vote totals."""

    nmu: str
    n: int
    dt: str
    dvt: str
    st: str
    vap: int
    pvap: str
    pvapn: str
    vs: list[RunningMate] = Field(default_factory=list)

    @field_validator("dt", "dvt", "st", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        return _coerce_null_to_str(v)

    @field_validator("pvap", "pvapn", mode="before")
    @classmethod
    def _coerce_percentage(cls, v: Any) -> Any:
        return _coerce_number_to_str(v)

    @field_validator("vs", mode="before")
    @classmethod
    def _coerce_running_mates(cls, v: Any) -> Any:
        return v if v is not None else []


class Party(_FeedModel):
    """A party and its candidates within a coalition."""

    sg: str
    cand: list[Candidate]


class Coalition(_FeedModel):
    """A coalition of parties running a joint slate."""

    par: list[Party]


class Race(_FeedModel):
    """One contest in the document (mayor or city council)."""

    agr: list[Coalition]


class ResultsDocument(_FeedModel):
    """Top-level per-municipality results document."""

    carg: list[Race] = Field(min_length=1)


@dataclass(frozen=True)
class CandidateRecord:
    """One flattened candidate row."""

    name: str
    party_acronym: str
    ballot_number: int
    municipality_name: str
    state_code: str
    birth_date: str
    candidacy_validity: str
    status: str
    total_votes: int
    vote_percentage: float
    running_mate_name: str | None = None

    def as_row(self, include_running_mate: bool) -> list[Any]:
        """Values in ``table_columns`` order."""
        row: list[Any] = [
            self.name,
            self.party_acronym,
            self.ballot_number,
            self.municipality_name,
            self.state_code,
            self.birth_date,
            self.candidacy_validity,
            self.status,
            self.total_votes,
            self.vote_percentage,
        ]
        if include_running_mate:
            row.append(self.running_mate_name)
        return row

    def as_dict(self, include_running_mate: bool) -> dict[str, Any]:
        """Column name → value mapping; the running-mate key is absent for councilors."""
        columns = [*BASE_COLUMNS, RUNNING_MATE_COLUMN] if include_running_mate else BASE_COLUMNS
        return dict(zip(columns, self.as_row(include_running_mate), strict=True))


@dataclass
class ParsedMunicipality:
    """Records for one municipality plus the high-precision shares to cross-check."""

    records: list[CandidateRecord] = field(default_factory=list)
    precise_percentages: list[Decimal] = field(default_factory=list)


def clean_name(raw: str) -> str:
    """Normalize a name from the feed.

    Drops literal tab-entity markers, decodes HTML entities and removes
    commas so names never break comma-separated output.
    """
    return html.unescape(raw.replace(_TAB_ENTITY, "")).replace(",", "").strip()


def parse_locale_decimal(text: str) -> Decimal:
    """Parse a decimal-comma numeral (``"45,1234"``) into an exact ``Decimal``.

    Raises:
        ParseError: If the text is not a finite number.
    """
    try:
        value = Decimal(text.strip().replace(",", "."))
    except InvalidOperation as exc:
        msg = f"Invalid numeric value: {text!r}"
        raise ParseError(msg) from exc
    if not value.is_finite():
        msg = f"Invalid numeric value: {text!r}"
        raise ParseError(msg)
    return value


def parse_locale_float(text: str) -> float:
    """Parse a decimal-comma numeral into a float for display."""
    return float(parse_locale_decimal(text))


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    path = ".".join(str(part) for part in first["loc"]) or "<document>"
    if first["type"] == "missing":
        return f"missing field '{path}'"
    return f"invalid field '{path}': {first['msg']}"


def decode_document(document: Any, context: str = "document") -> ResultsDocument:
    """Schema-check a raw document, naming the first offending field on failure.

    Raises:
        ParseError: If the structure does not match the expected schema.
    """
    try:
        return ResultsDocument.model_validate(document)
    except ValidationError as exc:
        msg = f"Cannot parse results for {context}: {_describe_validation_error(exc)}"
        raise ParseError(msg) from exc


def parse_municipality_results(
    document: Any,
    municipality: Municipality,
    candidacy: CandidacyType,
) -> ParsedMunicipality:
    """Flatten a municipality's results document into candidate records.

    Walks the first race, then every coalition, party and candidate in
    document order.

    Args:
        document: Raw JSON object returned by the fetcher.
        municipality: Catalog entry the document belongs to.
        candidacy: Contest type; mayor records carry the running mate.

    Returns:
        Flattened records and the high-precision percentages to validate.

    Raises:
        ParseError: If a required field is missing or malformed.
    """
    context = f"{municipality.display_name} ({municipality.state_code})"
    decoded = decode_document(document, context)
    race = decoded.carg[0]

    parsed = ParsedMunicipality()
    for coalition_index, coalition in enumerate(race.agr):
        for party_index, party in enumerate(coalition.par):
            for cand_index, candidate in enumerate(party.cand):
                path = f"carg.0.agr.{coalition_index}.par.{party_index}.cand.{cand_index}"
                try:
                    display_pct = parse_locale_float(candidate.pvap)
                    precise_pct = parse_locale_decimal(candidate.pvapn)
                except ParseError as exc:
                    msg = f"Cannot parse results for {context}: invalid field '{path}': {exc}"
                    raise ParseError(msg) from exc

                running_mate = None
                if candidacy.has_running_mate:
                    if not candidate.vs:
                        msg = f"Cannot parse results for {context}: missing field '{path}.vs.0.nmu'"
                        raise ParseError(msg)
                    running_mate = clean_name(candidate.vs[0].nmu)

                parsed.records.append(
                    CandidateRecord(
                        name=clean_name(candidate.nmu),
                        party_acronym=party.sg,
                        ballot_number=candidate.n,
                        municipality_name=municipality.display_name,
                        state_code=municipality.state_code,
                        birth_date=candidate.dt,
                        candidacy_validity=candidate.dvt,
                        status=candidate.st,
                        total_votes=candidate.vap,
                        vote_percentage=display_pct,
                        running_mate_name=running_mate,
                    )
                )
                parsed.precise_percentages.append(precise_pct)

    return parsed
