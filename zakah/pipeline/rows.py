from __future__ import annotations

from typing import Sequence, Tuple

from ..models import Section
from .layout import CONTENT_W, MARGIN_L, MARGIN_R, PAGE_W, LayoutSession

VALUE_X = PAGE_W - MARGIN_R - 3
LABEL_X = MARGIN_L + 5

EMPTY_SECTION_TEXT = "No entries recorded for this section."


def format_money(value: float, currency: str) -> str:
    if value == 0:
        return f"{currency} 0.00"
    return f"{currency} {value:,.2f}"


def section_header(session: LayoutSession, title: str) -> float:
    y = session.ensure_space(12)
    session.rect(MARGIN_L, y, CONTENT_W, 9, fill=session.color("dark"))
    session.rect(MARGIN_L, y, 3.5, 9, fill=session.color("gold"))
    session.text(MARGIN_L + 8, y + 6.2, title, 9, session.color("white", "#FFFFFF"), weight="bold")
    return session.advance(9)


def data_row(session: LayoutSession, label: str, value: str, shade: bool, bold: bool = False) -> float:
    y = session.ensure_space(7)
    if shade:
        session.rect(MARGIN_L, y, CONTENT_W, 6.8, fill=session.color("row_fill"))
    weight = "bold" if bold else "normal"
    label_color = session.color("row_label_bold" if bold else "row_label")
    value_color = session.color("green" if bold else "row_value")
    session.text(LABEL_X, y + 4.8, label, 8.5, label_color, weight=weight)
    session.text(VALUE_X, y + 4.8, value, 8.5, value_color, weight=weight, align="right")
    return session.advance(6.8)


def empty_section_row(session: LayoutSession) -> float:
    y = session.ensure_space(7)
    session.text(LABEL_X, y + 5, EMPTY_SECTION_TEXT, 8, session.color("muted"), weight="italic")
    return session.advance(8)


def totals_row(session: LayoutSession, label: str, value: str, accent: str = "green") -> float:
    y = session.ensure_space(8)
    color = session.color(accent)
    session.rect(MARGIN_L, y, CONTENT_W, 8, fill=session.color("totals_fill"))
    session.line(MARGIN_L, y, MARGIN_L + CONTENT_W, y, stroke=color)
    session.text(LABEL_X, y + 5.5, label, 9.5, color, weight="bold")
    session.text(VALUE_X, y + 5.5, value, 9.5, color, weight="bold", align="right")
    return session.advance(11)


def liability_row(session: LayoutSession, label: str, value: str, shade: bool) -> float:
    y = session.ensure_space(7)
    if shade:
        session.rect(MARGIN_L, y, CONTENT_W, 6.8, fill=session.color("liability_fill"))
    session.text(LABEL_X, y + 4.8, label, 8.5, session.color("liability_label"))
    session.text(VALUE_X, y + 4.8, "(-) " + value, 8.5, session.color("red"), align="right")
    return session.advance(6.8)


def liability_totals_row(session: LayoutSession, label: str, value: str) -> float:
    y = session.ensure_space(8)
    red = session.color("red")
    session.rect(MARGIN_L, y, CONTENT_W, 8, fill=session.color("liability_totals_fill"))
    session.line(MARGIN_L, y, MARGIN_L + CONTENT_W, y, stroke=red)
    session.text(LABEL_X, y + 5.5, label, 9.5, red, weight="bold")
    session.text(VALUE_X, y + 5.5, "(-) " + value, 9.5, red, weight="bold", align="right")
    return session.advance(13)


def summary_row(session: LayoutSession, index: int, label: str, value: str, accent: str, bold: bool = False) -> float:
    y = session.ensure_space(8)
    fill = session.color("summary_fill") if index % 2 == 0 else session.color("white", "#FFFFFF")
    session.rect(MARGIN_L, y, CONTENT_W, 8, fill=fill)
    weight = "bold" if bold else "normal"
    size = 10 if bold else 9
    session.text(LABEL_X, y + 5.5, label, size, session.color("summary_label"), weight=weight)
    session.text(VALUE_X, y + 5.5, value, size, session.color(accent), weight=weight, align="right")
    return session.advance(8)


def highlight_banner(session: LayoutSession, title: str, subtitle: str, value: str, is_eligible: bool) -> float:
    y = session.ensure_space(16)
    accent = session.color("green") if is_eligible else session.color("gold")
    fill = session.color("eligible_fill") if is_eligible else session.color("ineligible_fill")
    session.rect(MARGIN_L, y, CONTENT_W, 16, fill=fill)
    session.rect(MARGIN_L, y, CONTENT_W, 16, stroke=accent, line_width=0.6)
    session.rect(MARGIN_L, y, 4, 16, fill=accent)
    session.text(MARGIN_L + 9, y + 7, title, 12, session.color("banner_title"), weight="bold")
    session.text(MARGIN_L + 9, y + 12.5, subtitle, 8.5, session.color("muted"))
    value_color = session.color("green") if is_eligible else session.color("caution")
    session.text(VALUE_X, y + 10, value, 16, value_color, weight="bold", align="right")
    return session.advance(20)


def render_section(session: LayoutSession, section: Section, currency: str) -> float:
    """Header, visible entries (or placeholder), then the section total."""
    section_header(session, section.title)
    visible: Sequence[Tuple[str, float]] = section.visible_entries
    if not visible:
        empty_section_row(session)
    else:
        for i, (label, amount) in enumerate(visible):
            data_row(session, label, format_money(amount, currency), shade=i % 2 == 0)
    totals_row(session, "Section Total", format_money(section.total, currency), accent=section.accent)
    return session.advance(2)


def render_liabilities(session: LayoutSession, section: Section, currency: str) -> float:
    section_header(session, section.title)
    visible = section.visible_entries
    if not visible:
        empty_section_row(session)
    else:
        for i, (label, amount) in enumerate(visible):
            liability_row(session, label, format_money(amount, currency), shade=i % 2 == 0)
    return liability_totals_row(session, "Total Liabilities", format_money(section.total, currency))
