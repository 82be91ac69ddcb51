from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Union

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from .. import config

logger = logging.getLogger(__name__)

# Page geometry in millimetres, measured from the top-left corner.
PAGE_W = 210.0
PAGE_H = 297.0
MARGIN_L = 15.0
MARGIN_R = 15.0
CONTENT_W = PAGE_W - MARGIN_L - MARGIN_R
BOTTOM_LIMIT = 278.0
HEADER_OFFSET = 18.0

Color = Union[str, colors.Color]


class RendererUnavailableError(RuntimeError):
    """The drawing environment (fonts, style preset) is not usable."""


def _hex(value: Color, default=colors.black) -> colors.Color:
    if isinstance(value, colors.Color):
        return value
    if not value:
        return default
    try:
        return colors.HexColor("#" + str(value).lstrip("#"))
    except Exception:
        return default


def _s(style: dict, key: str, default):
    return style.get(key, default)


def load_renderer_style() -> dict:
    """Load the style preset and make sure its fonts resolve."""
    try:
        style = config.load_style_preset()
    except (OSError, ValueError) as exc:
        raise RendererUnavailableError(f"Style preset unavailable: {config.STYLE_PRESET_PATH}") from exc
    for key in ("font_name", "font_bold", "font_italic"):
        name = str(_s(style, key, "Helvetica"))
        try:
            pdfmetrics.getFont(name)
        except Exception as exc:
            raise RendererUnavailableError(f"Font not available: {name}") from exc
    return style


def wrap_words(canv: canvas.Canvas, text: str, font_name: str, font_size: float, max_width: float) -> List[str]:
    """
    Word-wrap text so every line fits max_width (points).
    A single word wider than the line is placed on its own line.
    """
    words = (text or "").split()
    if not words:
        return [""]

    lines: List[str] = []
    cur: List[str] = []

    for w in words:
        test = (" ".join(cur + [w])).strip()
        if canv.stringWidth(test, font_name, font_size) <= max_width:
            cur.append(w)
            continue

        if cur:
            lines.append(" ".join(cur))
            cur = [w]
        else:
            lines.append(w)

    if cur:
        lines.append(" ".join(cur))

    return lines


class ReportCanvas(canvas.Canvas):
    """
    Canvas that holds finished pages back instead of emitting them.

    Content is laid out first; `stamp_and_save` then revisits every page
    with the final page count known, draws the footer, and writes the file.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._page_states: List[dict] = []
        self._page_total: Optional[int] = None

    def showPage(self) -> None:
        self._page_states.append(dict(self.__dict__))
        self._startPage()

    @property
    def page_count(self) -> int:
        if self._page_total is not None:
            return self._page_total
        return len(self._page_states) + 1

    def stamp_and_save(self, stamp: Callable[[int, int], None]) -> int:
        self._page_states.append(dict(self.__dict__))
        total = len(self._page_states)
        for number, state in enumerate(self._page_states, start=1):
            self.__dict__.update(state)
            stamp(number, total)
            canvas.Canvas.showPage(self)
        self._page_total = total
        canvas.Canvas.save(self)
        return total


class LayoutSession:
    """
    Owns the vertical cursor for one report.

    Coordinates are millimetres from the top-left of an A4 page; the session
    converts them to reportlab's bottom-up point space. `ensure_space` must
    be called with the full height of whatever is drawn next.
    """

    def __init__(self, canv: ReportCanvas, style: dict, y: float = 0.0) -> None:
        self.canv = canv
        self.style = style
        self.y = y
        self.page_index = 0
        self.finalized = False

    @classmethod
    def open(cls, output_path: Path, style: dict, title: str = "Zakah Report") -> "LayoutSession":
        canv = ReportCanvas(str(output_path), pagesize=A4)
        canv.setTitle(title)
        canv.setAuthor(config.BRAND_NAME)
        return cls(canv, style)

    @property
    def page_count(self) -> int:
        return self.canv.page_count

    # ---------- fonts / colours ----------
    def color(self, key: str, default: str = "#000000") -> colors.Color:
        return _hex(_s(self.style, key, default))

    def font(self, weight: str = "normal") -> str:
        if weight == "bold":
            return str(_s(self.style, "font_bold", "Helvetica-Bold"))
        if weight == "italic":
            return str(_s(self.style, "font_italic", "Helvetica-Oblique"))
        return str(_s(self.style, "font_name", "Helvetica"))

    # ---------- primitives (mm, top-down) ----------
    def rect(self, x: float, y: float, w: float, h: float, fill: Optional[Color] = None,
             stroke: Optional[Color] = None, line_width: float = 0.3) -> None:
        if fill is not None:
            self.canv.setFillColor(_hex(fill))
        if stroke is not None:
            self.canv.setStrokeColor(_hex(stroke))
            self.canv.setLineWidth(line_width * mm)
        self.canv.rect(
            x * mm, (PAGE_H - y - h) * mm, w * mm, h * mm,
            stroke=1 if stroke is not None else 0,
            fill=1 if fill is not None else 0,
        )

    def round_rect(self, x: float, y: float, w: float, h: float, radius: float,
                   fill: Optional[Color] = None, stroke: Optional[Color] = None, line_width: float = 0.4) -> None:
        if fill is not None:
            self.canv.setFillColor(_hex(fill))
        if stroke is not None:
            self.canv.setStrokeColor(_hex(stroke))
            self.canv.setLineWidth(line_width * mm)
        self.canv.roundRect(
            x * mm, (PAGE_H - y - h) * mm, w * mm, h * mm, radius * mm,
            stroke=1 if stroke is not None else 0,
            fill=1 if fill is not None else 0,
        )

    def line(self, x1: float, y1: float, x2: float, y2: float, stroke: Color, line_width: float = 0.3) -> None:
        self.canv.setStrokeColor(_hex(stroke))
        self.canv.setLineWidth(line_width * mm)
        self.canv.line(x1 * mm, (PAGE_H - y1) * mm, x2 * mm, (PAGE_H - y2) * mm)

    def circle(self, cx: float, cy: float, r: float, fill: Color) -> None:
        self.canv.setFillColor(_hex(fill))
        self.canv.circle(cx * mm, (PAGE_H - cy) * mm, r * mm, stroke=0, fill=1)

    def text(self, x: float, y: float, value: str, size: float, color: Color,
             weight: str = "normal", align: str = "left") -> None:
        self.canv.setFont(self.font(weight), size)
        self.canv.setFillColor(_hex(color))
        px, py = x * mm, (PAGE_H - y) * mm
        if align == "right":
            self.canv.drawRightString(px, py, value)
        elif align == "center":
            self.canv.drawCentredString(px, py, value)
        else:
            self.canv.drawString(px, py, value)

    def wrap(self, value: str, size: float, max_width: float, weight: str = "normal") -> List[str]:
        return wrap_words(self.canv, value, self.font(weight), size, max_width * mm)

    # ---------- page flow ----------
    def draw_page_header(self) -> float:
        """Condensed header repeated on every page after the first."""
        gold = self.color("gold", "#C9A84C")
        self.rect(0, 0, PAGE_W, 12, fill=self.color("dark", "#111827"))
        self.rect(0, 0, PAGE_W, 2, fill=gold)
        self.text(MARGIN_L, 8, config.PAGE_HEADER_TEXT, 8, gold, weight="bold")
        self.text(PAGE_W - MARGIN_R, 8, "cont.", 8, self.color("header_subtle", "#B4B4B4"), align="right")
        return HEADER_OFFSET

    def new_page(self) -> float:
        self.canv.showPage()
        self.page_index += 1
        self.y = self.draw_page_header()
        logger.debug("Page break: now on page %d", self.page_index + 1)
        return self.y

    def ensure_space(self, needed: float) -> float:
        if self.finalized:
            raise RuntimeError("Layout session already finalized")
        if self.y + needed > BOTTOM_LIMIT:
            self.new_page()
        return self.y

    def advance(self, delta: float) -> float:
        self.y += delta
        return self.y

    def finalize(self, footer: Callable[["LayoutSession", int, int], None]) -> int:
        """Second phase: stamp a footer on every laid-out page and write the file."""
        if self.finalized:
            raise RuntimeError("Layout session already finalized")
        self.finalized = True
        return self.canv.stamp_and_save(lambda number, total: footer(self, number, total))
