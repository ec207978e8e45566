"""Shared fixtures: catalog entries and results documents shaped like the TSE feed."""

from collections.abc import Callable
from typing import Any

import pytest

from municipal_results.lib.election_results import Municipality


def make_candidate(
    name: str = "JOAO DA SILVA",
    number: int = 15,
    votes: str = "6000",
    pct: str = "60,00",
    precise_pct: str = "60,0000000000",
    running_mate: str | None = "MARIA SOUZA",
) -> dict[str, Any]:
    """Build one candidate entry as the feed delivers it."""
    candidate: dict[str, Any] = {
        "seq": "1",
        "sqcand": "270001234567",
        "n": number,
        "nm": name.title(),
        "nmu": name,
        "dt": "01/02/1970",
        "dvt": "Válido",
        "st": "Eleito",
        "e": "s",
        "vap": votes,
        "pvap": pct,
        "pvapn": precise_pct,
    }
    if running_mate is not None:
        candidate["vs"] = [{"sqcand": "270001234568", "nm": running_mate.title(), "nmu": running_mate}]
    return candidate


def make_document(parties: list[tuple[str, list[dict[str, Any]]]] | None = None) -> dict[str, Any]:
    """Build a results document with one coalition per party."""
    if parties is None:
        parties = [
            ("MDB", [make_candidate()]),
            (
                "PT",
                [
                    make_candidate(
                        name="ANA PEREIRA",
                        number=13,
                        votes="4000",
                        pct="40,00",
                        precise_pct="40,0000000000",
                        running_mate="CARLOS LIMA",
                    )
                ],
            ),
        ]
    return {
        "ele": "619",
        "t": "1",
        "dg": "06/10/2024",
        "carg": [
            {
                "cd": "11",
                "nmn": "Prefeito",
                "agr": [
                    {"n": str(index), "nm": f"Coligação {index}", "par": [{"n": "1", "sg": sg, "cand": cands}]}
                    for index, (sg, cands) in enumerate(parties, start=1)
                ],
            }
        ],
    }


@pytest.fixture
def municipality() -> Municipality:
    """A municipality that is scraped (not excluded)."""
    return Municipality(state_code="AL", electoral_code=27014, display_name="ARAPIRACA")


@pytest.fixture
def document_factory() -> Callable[..., dict[str, Any]]:
    return make_document


@pytest.fixture
def candidate_factory() -> Callable[..., dict[str, Any]]:
    return make_candidate
