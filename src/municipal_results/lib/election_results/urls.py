"""Resource URL construction for per-municipality result files.

Example resource for the mayoral race of one municipality::

    https://resultados.tse.jus.br/oficial/ele2024/619/dados/al/al27014-c0011-e000619-u.json
"""

from enum import StrEnum

DEFAULT_HOST = "resultados.tse.jus.br"
DEFAULT_YEAR = 2024
DEFAULT_ELECTION_ID = 619

_RESOURCE_TEMPLATE = (
    "https://{host}/oficial/ele{year}/{election_id}/dados/{state}/"
    "{state}{code}-c00{type_code}-e{padded_election_id}-u.json"
)


class CandidacyType(StrEnum):
    """Contest being scraped; selects the resource code and running-mate column."""

    MAYOR = "mayor"
    COUNCILOR = "councilor"

    @property
    def type_code(self) -> str:
        """Two-digit office code used in the resource name."""
        return "11" if self is CandidacyType.MAYOR else "13"

    @property
    def has_running_mate(self) -> bool:
        return self is CandidacyType.MAYOR


def pad_electoral_code(electoral_code: int | str) -> str:
    """Left-pad an electoral municipality code with zeros to 5 digits.

    Raises:
        ValueError: If the code is negative or longer than 5 digits.
    """
    code = str(electoral_code).strip()
    if not code.isdigit() or len(code) > 5:
        msg = f"Electoral code must be 1-5 digits, got {electoral_code!r}"
        raise ValueError(msg)
    return code.zfill(5)


def build_resource_url(
    state_code: str,
    electoral_code: int | str,
    candidacy: CandidacyType,
    *,
    host: str = DEFAULT_HOST,
    year: int = DEFAULT_YEAR,
    election_id: int = DEFAULT_ELECTION_ID,
) -> str:
    """Build the results resource URL for one municipality.

    Args:
        state_code: Two-letter state abbreviation (any case).
        electoral_code: Electoral municipality code, padded to 5 digits.
        candidacy: Mayor or councilor contest.
        host: Results API host.
        year: Election cycle year.
        election_id: Election identifier (zero-padded to 6 digits in the file name).

    Returns:
        The fully qualified resource URL.
    """
    state = state_code.strip().lower()
    return _RESOURCE_TEMPLATE.format(
        host=host,
        year=year,
        election_id=election_id,
        state=state,
        code=pad_electoral_code(electoral_code),
        type_code=candidacy.type_code,
        padded_election_id=f"{election_id:06d}",
    )
