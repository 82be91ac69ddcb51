from __future__ import annotations

from pathlib import Path

import fitz  # PyMuPDF

from zakah.models import DateInfo, MetalPrices, ReportSettings, StockMethod
from zakah.pipeline.aggregate import aggregate
from zakah.pipeline.compose import compose_report, report_filename
from zakah.pipeline.ingest import ValueReader, known_fields
from zakah.pipeline.rows import EMPTY_SECTION_TEXT

DATE = DateInfo(display="Sunday, 18 October 2026 (UTC)", iso="2026-10-18")


def _compose(tmp_path: Path, fields: dict, prices: MetalPrices, settings: ReportSettings | None = None):
    result = aggregate(ValueReader(fields), prices, settings or ReportSettings())
    output = tmp_path / report_filename(DATE)
    composed = compose_report(result, DATE, output)
    with fitz.open(str(output)) as doc:
        texts = [doc.load_page(i).get_text() for i in range(doc.page_count)]
    return composed, texts


def test_report_filename() -> None:
    assert report_filename(DATE) == "zakah-report-2026-10-18.pdf"


def test_example_report(tmp_path: Path) -> None:
    fields = {"f_cashOnHand": 1000, "f_bankSavings": 2000, "f_gold24k": 10, "f_personalLoan": 500}
    composed, texts = _compose(tmp_path, fields, MetalPrices(gold_per_gram=100, silver_per_gram=5))

    assert composed.path.exists()
    assert composed.page_count == len(texts)
    full = "".join(texts)
    assert "ZAKAH CALCULATOR" in texts[0]
    assert "ISO: 2026-10-18" in texts[0]
    assert "CALCULATION SETTINGS" in texts[0]
    assert "ZAKAH OBLIGATORY" in full
    assert "BDT 87.50" in full
    assert "BDT 3,500.00" in full
    assert "(-) BDT 500.00" in full
    assert "Gold 24k: 10.000g" in full
    assert full.count(EMPTY_SECTION_TEXT) == 2
    for number, text in enumerate(texts, start=1):
        assert f"Page {number} of {composed.page_count}" in text
    assert "estimation purposes only" in full


def test_empty_report_is_not_eligible(tmp_path: Path) -> None:
    composed, texts = _compose(tmp_path, {}, MetalPrices())
    full = "".join(texts)
    assert full.count(EMPTY_SECTION_TEXT) == 5
    assert "NOT YET ELIGIBLE" in full
    assert "ZAKAH OBLIGATORY" not in full


def test_long_report_spans_pages(tmp_path: Path) -> None:
    fields = {field_id: 1000 for field_id in known_fields()}
    settings = ReportSettings(stock_method=StockMethod.LONG_TERM, currency="USD")
    composed, texts = _compose(tmp_path, fields, MetalPrices(gold_per_gram=90, silver_per_gram=1), settings)

    assert composed.page_count >= 2
    assert len(texts) == composed.page_count
    assert "ZAKAH CALCULATOR" in texts[0]
    for number, text in enumerate(texts, start=1):
        assert f"Page {number} of {composed.page_count}" in text
        if number > 1:
            assert "cont." in text
    full = "".join(texts)
    assert "DSE Stocks (25% proxy)" in full
    assert "Long-term Investment (25% proxy)" in full
    assert EMPTY_SECTION_TEXT not in full


def test_report_labels_keep_em_dashes(tmp_path: Path) -> None:
    _, texts = _compose(tmp_path, {"f_cashOnHand": 10}, MetalPrices(gold_per_gram=100, silver_per_gram=5))
    full = "".join(texts)
    assert "SECTION A — CASH & LIQUID ASSETS" in full
    assert "SECTION E — LIABILITIES & DEDUCTIONS" in full
    assert "Silver — 612.36g" in full
    assert "100% Local Processing — No Data Shared" in full
