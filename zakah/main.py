from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Dict, Optional

import typer

from . import config
from .models import CalendarBasis, MetalPrices, NisabBasis, ReportSettings, StockMethod
from .pipeline.aggregate import aggregate
from .pipeline.compose import rate_label
from .pipeline.ingest import ValueReader, load_fields
from .pipeline.rows import format_money
from .pipeline.run import ExportTrigger

app = typer.Typer(help="Zakah calculation and PDF report export")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_or_exit(fields: Path) -> Dict[str, object]:
    try:
        return load_fields(fields)
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"Cannot read input fields: {exc}", err=True)
        raise typer.Exit(code=1)


def _settings(nisab: NisabBasis, calendar: CalendarBasis, stock_method: StockMethod, currency: str) -> ReportSettings:
    return ReportSettings(
        nisab_basis=nisab,
        calendar=calendar,
        stock_method=stock_method,
        currency=currency.strip() or config.DEFAULT_CURRENCY,
    )


@app.command()
def export(
    fields: Path = typer.Option(..., "--fields", help="CSV (field,value) or JSON with input amounts"),
    gold_price: float = typer.Option(0.0, "--gold-price", help="Gold price per gram"),
    silver_price: float = typer.Option(0.0, "--silver-price", help="Silver price per gram"),
    nisab: NisabBasis = typer.Option(NisabBasis.SILVER, "--nisab", help="Nisab basis"),
    calendar: CalendarBasis = typer.Option(CalendarBasis.LUNAR, "--calendar", help="Calendar basis"),
    stock_method: StockMethod = typer.Option(StockMethod.TRADE, "--stock-method", help="Stock valuation method"),
    currency: str = typer.Option(config.DEFAULT_CURRENCY, "--currency", help="Display currency code"),
    timezone: Optional[str] = typer.Option(None, "--timezone", help="IANA timezone for the report date"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    preview: bool = typer.Option(False, "--preview", help="Also write PNG previews"),
) -> None:
    if out:
        config.set_out_dir(out)
    values = _load_or_exit(fields)
    trigger = ExportTrigger(notify=lambda message: typer.echo(message, err=True))
    outcome = asyncio.run(
        trigger.run(
            values,
            MetalPrices(gold_per_gram=gold_price, silver_per_gram=silver_price),
            _settings(nisab, calendar, stock_method, currency),
            timezone=timezone,
            preview=preview,
        )
    )
    if outcome is None:
        raise typer.Exit(code=1)
    typer.echo(f"Report: {outcome.report} ({outcome.page_count} pages)")
    for path in outcome.previews:
        typer.echo(f"Preview: {path}")


@app.command()
def summary(
    fields: Path = typer.Option(..., "--fields", help="CSV (field,value) or JSON with input amounts"),
    gold_price: float = typer.Option(0.0, "--gold-price", help="Gold price per gram"),
    silver_price: float = typer.Option(0.0, "--silver-price", help="Silver price per gram"),
    nisab: NisabBasis = typer.Option(NisabBasis.SILVER, "--nisab", help="Nisab basis"),
    calendar: CalendarBasis = typer.Option(CalendarBasis.LUNAR, "--calendar", help="Calendar basis"),
    stock_method: StockMethod = typer.Option(StockMethod.TRADE, "--stock-method", help="Stock valuation method"),
    currency: str = typer.Option(config.DEFAULT_CURRENCY, "--currency", help="Display currency code"),
) -> None:
    settings = _settings(nisab, calendar, stock_method, currency)
    result = aggregate(
        ValueReader(_load_or_exit(fields)),
        MetalPrices(gold_per_gram=gold_price, silver_per_gram=silver_price),
        settings,
    )
    cur = settings.currency
    for section in result.asset_sections:
        typer.echo(f"{section.title}: {format_money(section.total, cur)}")
    typer.echo(f"{result.liabilities.title}: (-) {format_money(result.total_liabilities, cur)}")
    typer.echo(f"Total Assets: {format_money(result.total_assets, cur)}")
    typer.echo(f"Net Zakatable Wealth: {format_money(result.net_wealth, cur)}")
    typer.echo(f"Nisab Threshold: {format_money(result.nisab_value, cur)}")
    typer.echo(f"Rate Applied: {rate_label(settings.calendar)}")
    typer.echo(f"Status: {'ZAKAH OBLIGATORY' if result.is_eligible else 'NOT YET ELIGIBLE'}")
    typer.echo(f"Zakah Due: {format_money(result.obligation_due, cur)}")


if __name__ == "__main__":
    app()
