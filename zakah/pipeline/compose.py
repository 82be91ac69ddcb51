from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from .. import config
from ..models import AggregationResult, CalendarBasis, DateInfo, NisabBasis, ReportSettings, StockMethod
from .layout import CONTENT_W, MARGIN_L, MARGIN_R, PAGE_H, PAGE_W, LayoutSession, load_renderer_style
from .rows import format_money, highlight_banner, render_liabilities, render_section, summary_row

logger = logging.getLogger(__name__)

COVER_HEIGHT = 48.0
FOOTER_TOP = 288.0


@dataclass(frozen=True)
class ComposedReport:
    path: Path
    page_count: int


def report_filename(date_info: DateInfo) -> str:
    return f"zakah-report-{date_info.iso}.pdf"


def rate_label(calendar: CalendarBasis) -> str:
    return "2.5% (Lunar/Hijri)" if calendar == CalendarBasis.LUNAR else "2.577% (Solar/Gregorian)"


def settings_items(settings: ReportSettings) -> List[Tuple[str, str]]:
    return [
        ("Nisab Basis", "Silver — 612.36g" if settings.nisab_basis == NisabBasis.SILVER else "Gold — 87.48g"),
        ("Calendar", "Lunar / Hijri (2.5%)" if settings.calendar == CalendarBasis.LUNAR else "Solar / Gregorian (2.577%)"),
        (
            "Stock Method",
            "Short-term Trading" if settings.stock_method == StockMethod.TRADE else "Long-term Investment (25% proxy)",
        ),
        ("Currency", settings.currency),
    ]


def draw_cover(session: LayoutSession, date_info: DateInfo) -> float:
    gold = session.color("gold")
    dark = session.color("dark")
    white = session.color("white", "#FFFFFF")
    subtle = session.color("cover_subtle")

    session.rect(0, 0, PAGE_W, COVER_HEIGHT, fill=dark)
    session.rect(0, 0, PAGE_W, 3.5, fill=gold)

    # logo badge
    session.circle(MARGIN_L + 11, 24, 9.5, fill=gold)
    session.text(MARGIN_L + 11, 27.5, "ZC", 10, dark, weight="bold", align="center")

    session.text(MARGIN_L + 27, 20, "ZAKAH CALCULATOR", 20, white, weight="bold")
    session.text(MARGIN_L + 27, 29, config.BRAND_NAME, 10, gold)
    session.text(MARGIN_L + 27, 37, config.REPORT_TAG, 8.5, subtle)

    right = PAGE_W - MARGIN_R
    session.text(right, 21, date_info.display, 9, gold, weight="bold", align="right")
    session.text(right, 28, "Date of Report", 8, subtle, align="right")
    session.text(right, 34, f"ISO: {date_info.iso}", 8, subtle, align="right")

    session.rect(0, 44.5, PAGE_W, 2, fill=gold)
    session.y = 54
    return session.y


def draw_settings_banner(session: LayoutSession, settings: ReportSettings) -> float:
    y = session.ensure_space(20)
    session.round_rect(MARGIN_L, y, CONTENT_W, 20, 2.5, fill=session.color("settings_fill"))
    session.round_rect(MARGIN_L, y, CONTENT_W, 20, 2.5, stroke=session.color("gold"), line_width=0.4)
    session.text(MARGIN_L + 4, y + 6.5, "CALCULATION SETTINGS", 7.5, session.color("settings_title"), weight="bold")

    col_w = CONTENT_W / 4
    for i, (label, value) in enumerate(settings_items(settings)):
        sx = MARGIN_L + 4 + i * col_w
        session.text(sx, y + 13, label, 7.5, session.color("muted"))
        session.text(sx, y + 18, value, 8, session.color("settings_value"), weight="bold")
    return session.advance(26)


def draw_summary(session: LayoutSession, result: AggregationResult) -> float:
    currency = result.settings.currency
    # keep the header together with the summary figures and the banner
    y = session.ensure_space(70)
    gold = session.color("gold")
    session.rect(MARGIN_L, y, CONTENT_W, 11, fill=session.color("dark"))
    session.rect(MARGIN_L, y, CONTENT_W, 2, fill=gold)
    session.rect(MARGIN_L, y, 3.5, 11, fill=gold)
    session.text(MARGIN_L + 8, y + 7.5, "ZAKAH SUMMARY", 11, session.color("white", "#FFFFFF"), weight="bold")
    status = "ZAKAH OBLIGATORY" if result.is_eligible else "NOT YET ELIGIBLE"
    session.text(PAGE_W - MARGIN_R - 3, y + 7.5, status, 8, gold, weight="bold", align="right")
    session.advance(11)

    rows = [
        ("Total Assets", format_money(result.total_assets, currency), "teal", False),
        ("(-) Total Liabilities", format_money(result.total_liabilities, currency), "red", False),
        ("Net Zakatable Wealth", format_money(result.net_wealth, currency), "green", True),
        ("Nisab Threshold", format_money(result.nisab_value, currency), "muted", False),
        ("Rate Applied", rate_label(result.settings.calendar), "muted", False),
    ]
    for i, (label, value, accent, bold) in enumerate(rows):
        summary_row(session, i, label, value, accent, bold=bold)

    return highlight_banner(
        session,
        "ZAKAH DUE THIS YEAR",
        "Based on one full Hawl (1 Hijri year)",
        format_money(result.obligation_due, currency),
        result.is_eligible,
    )


def draw_disclaimer(session: LayoutSession) -> float:
    session.ensure_space(20)
    y = session.advance(4)
    lines = session.wrap(config.DISCLAIMER_TEXT, 7, CONTENT_W - 4, weight="italic")
    for i, line in enumerate(lines):
        session.text(MARGIN_L + 2, y + i * 4, line, 7, session.color("muted"), weight="italic")
    return session.advance(len(lines) * 4 + 4)


def draw_footer(session: LayoutSession, page_number: int, total_pages: int) -> None:
    session.rect(0, FOOTER_TOP, PAGE_W, PAGE_H - FOOTER_TOP, fill=session.color("dark"))
    session.rect(0, FOOTER_TOP, PAGE_W, 0.8, fill=session.color("gold"))
    text_color = session.color("footer_text")
    session.text(MARGIN_L, 293, config.FOOTER_TEXT, 7, text_color)
    session.text(PAGE_W - MARGIN_R, 293, f"Page {page_number} of {total_pages}", 7, text_color, align="right")


def compose_report(
    result: AggregationResult,
    date_info: DateInfo,
    output_path: Path,
    style: Optional[dict] = None,
) -> ComposedReport:
    style = style if style is not None else load_renderer_style()
    session = LayoutSession.open(output_path, style, title=f"Zakah Report {date_info.iso}")
    currency = result.settings.currency

    draw_cover(session, date_info)
    draw_settings_banner(session, result.settings)
    for section in result.asset_sections:
        render_section(session, section, currency)
    render_liabilities(session, result.liabilities, currency)
    draw_summary(session, result)
    draw_disclaimer(session)

    page_count = session.finalize(draw_footer)
    logger.info("Composed %s (%d pages)", output_path.name, page_count)
    return ComposedReport(path=output_path, page_count=page_count)
