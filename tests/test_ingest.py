from __future__ import annotations

import json
from pathlib import Path

import pytest

from zakah.pipeline.ingest import ValueReader, known_fields, load_fields


def test_reader_parses_numbers() -> None:
    reader = ValueReader({"f_cashOnHand": "1,250.50", "f_bkash": 300, "f_nagad": " 12 "})
    assert reader.read("f_cashOnHand") == 1250.5
    assert reader.read("f_bkash") == 300.0
    assert reader.read("f_nagad") == 12.0


@pytest.mark.parametrize("raw", [None, "", "   ", "abc", "nan", "inf", "-50", True, [1, 2]])
def test_reader_coerces_bad_input_to_zero(raw) -> None:
    reader = ValueReader({"f_cashOnHand": raw})
    assert reader.read("f_cashOnHand") == 0.0


def test_reader_missing_field_is_zero() -> None:
    assert ValueReader().read("f_unknown") == 0.0


def test_reader_exposes_only_read() -> None:
    public = {name for name in vars(ValueReader) if not name.startswith("_")}
    assert public == {"read"}
    assert "__contains__" not in vars(ValueReader)


def test_known_fields_cover_all_sections() -> None:
    fields = known_fields()
    assert len(fields) == len(set(fields))
    assert "f_gold24k" in fields
    assert "f_advanceReceived" in fields
    assert len(fields) == 14 + 7 + 10 + 10 + 9


def test_load_fields_csv(tmp_path: Path) -> None:
    path = tmp_path / "fields.csv"
    path.write_text("field,value\nf_cashOnHand,1000\nf_bankSavings,\n,5\n", encoding="utf-8")
    fields = load_fields(path)
    assert fields == {"f_cashOnHand": "1000", "f_bankSavings": ""}


def test_load_fields_json(tmp_path: Path) -> None:
    path = tmp_path / "fields.json"
    path.write_text(json.dumps({"f_cashOnHand": 1000, "f_gold24k": "10"}), encoding="utf-8")
    reader = ValueReader(load_fields(path))
    assert reader.read("f_gold24k") == 10.0


def test_load_fields_rejects_bad_files(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_fields(tmp_path / "missing.csv")

    bad_csv = tmp_path / "bad.csv"
    bad_csv.write_text("name,amount\ncash,1\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_fields(bad_csv)

    bad_json = tmp_path / "bad.json"
    bad_json.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_fields(bad_json)
