"""Unit tests for municipality catalog loading."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from municipal_results.lib.election_results.catalog import CatalogError, Municipality, load_catalog, parse_catalog


class TestParseCatalog:
    """Tests for parse_catalog()."""

    def test_entries_keep_order(self):
        entries = [
            {"codigo_tse": 27014, "nome_municipio": "ARAPIRACA", "uf": "AL"},
            {"codigo_tse": 123, "nome_municipio": "ACRELANDIA", "uf": "ac"},
        ]
        catalog = parse_catalog(entries)
        assert [m.display_name for m in catalog] == ["ARAPIRACA", "ACRELANDIA"]
        assert catalog[1].state_code == "AC"
        assert catalog[1].electoral_code == 123

    def test_extra_fields_ignored(self):
        entries = [{"codigo_tse": 1, "nome_municipio": "X", "uf": "SP", "codigo_ibge": 3500000, "capital": 0}]
        assert parse_catalog(entries)[0] == Municipality(state_code="SP", electoral_code=1, display_name="X")

    def test_not_a_list_raises(self):
        with pytest.raises(CatalogError, match="JSON array"):
            parse_catalog({"uf": "AL"})

    def test_missing_field_names_entry_and_field(self):
        entries = [
            {"codigo_tse": 1, "nome_municipio": "A", "uf": "AL"},
            {"codigo_tse": 2, "uf": "AL"},
        ]
        with pytest.raises(CatalogError, match=r"#1 \(nome_municipio\)"):
            parse_catalog(entries)

    def test_invalid_state_code_raises(self):
        with pytest.raises(CatalogError, match="uf"):
            parse_catalog([{"codigo_tse": 1, "nome_municipio": "A", "uf": "ALA"}])

    def test_municipality_is_immutable(self):
        municipality = Municipality(state_code="AL", electoral_code=1, display_name="A")
        with pytest.raises(ValidationError):
            municipality.display_name = "B"  # type: ignore[misc]


class TestLoadCatalog:
    """Tests for load_catalog()."""

    def test_loads_file(self, tmp_path: Path):
        path = tmp_path / "catalog.json"
        path.write_text(
            json.dumps([{"codigo_tse": 27014, "nome_municipio": "ARAPIRACA", "uf": "AL"}]),
            encoding="utf-8",
        )
        catalog = load_catalog(path)
        assert len(catalog) == 1
        assert catalog[0].electoral_code == 27014

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(CatalogError, match="Cannot read"):
            load_catalog(tmp_path / "missing.json")

    def test_invalid_json_raises(self, tmp_path: Path):
        path = tmp_path / "catalog.json"
        path.write_text("not json", encoding="utf-8")
        with pytest.raises(CatalogError, match="not valid JSON"):
            load_catalog(path)
