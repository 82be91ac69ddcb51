from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from zakah import config
from zakah import main as cli
from zakah.pipeline import run as run_module

runner = CliRunner()


def _fields_csv(tmp_path: Path) -> Path:
    path = tmp_path / "fields.csv"
    path.write_text(
        "field,value\nf_cashOnHand,1000\nf_bankSavings,2000\nf_gold24k,10\nf_personalLoan,500\n",
        encoding="utf-8",
    )
    return path


def test_summary_command(tmp_path: Path) -> None:
    result = runner.invoke(
        cli.app,
        ["summary", "--fields", str(_fields_csv(tmp_path)), "--gold-price", "100", "--silver-price", "5"],
    )
    assert result.exit_code == 0, result.output
    assert "Net Zakatable Wealth: BDT 3,500.00" in result.output
    assert "Status: ZAKAH OBLIGATORY" in result.output
    assert "Zakah Due: BDT 87.50" in result.output


def test_summary_command_solar_gold(tmp_path: Path) -> None:
    result = runner.invoke(
        cli.app,
        [
            "summary", "--fields", str(_fields_csv(tmp_path)),
            "--gold-price", "100", "--silver-price", "5",
            "--nisab", "gold", "--calendar", "solar", "--currency", "USD",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Rate Applied: 2.577% (Solar/Gregorian)" in result.output
    assert "Status: NOT YET ELIGIBLE" in result.output
    assert "Zakah Due: USD 0.00" in result.output


def test_export_command_failure_exits_nonzero(tmp_path: Path, monkeypatch) -> None:
    async def failing_export(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(run_module, "export_report", failing_export)
    monkeypatch.setattr(config, "OUT_DIR", config.OUT_DIR)
    result = runner.invoke(
        cli.app,
        ["export", "--fields", str(_fields_csv(tmp_path)), "--out", str(tmp_path / "out")],
    )
    assert result.exit_code == 1
    assert run_module.EXPORT_FAILED_MESSAGE in result.output


def test_summary_section_titles_use_em_dash(tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["summary", "--fields", str(_fields_csv(tmp_path))])
    assert result.exit_code == 0, result.output
    assert "SECTION A — CASH & LIQUID ASSETS" in result.output
    assert "SECTION E — LIABILITIES & DEDUCTIONS" in result.output


def test_missing_fields_file_exits_cleanly(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(config, "OUT_DIR", config.OUT_DIR)
    missing = str(tmp_path / "nope.csv")
    for args in (["summary", "--fields", missing], ["export", "--fields", missing, "--out", str(tmp_path / "out")]):
        result = runner.invoke(cli.app, args)
        assert result.exit_code == 1
        assert "Input file not found" in result.output
        assert not isinstance(result.exception, FileNotFoundError)


def test_malformed_fields_file_exits_cleanly(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(config, "OUT_DIR", config.OUT_DIR)
    bad_csv = tmp_path / "bad.csv"
    bad_csv.write_text("name,amount\nf_cashOnHand,1000\n", encoding="utf-8")
    result = runner.invoke(cli.app, ["summary", "--fields", str(bad_csv)])
    assert result.exit_code == 1
    assert "CSV missing columns" in result.output
    assert not isinstance(result.exception, ValueError)

    bad_json = tmp_path / "bad.json"
    bad_json.write_text("{not json", encoding="utf-8")
    result = runner.invoke(cli.app, ["export", "--fields", str(bad_json), "--out", str(tmp_path / "out")])
    assert result.exit_code == 1
    assert "Cannot read input fields" in result.output
    assert not isinstance(result.exception, ValueError)
