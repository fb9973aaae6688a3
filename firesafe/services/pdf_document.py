"""fpdf2 document for inspection reports.

Holds the drawing primitives (fonts, branded header, tables, embedded
images, page footer). Cursor bookkeeping lives in ``layout.RenderContext``.

Fonts: DejaVu Sans when it can be found, otherwise the core Helvetica font
with text mapped onto Latin-1 (enough for Portuguese).
    # Ubuntu/Debian: sudo apt install fonts-dejavu-core
    # Or place DejaVuSans.ttf + DejaVuSans-Bold.ttf into firesafe/services/fonts/
"""

from __future__ import annotations

import base64
import binascii
import logging
from datetime import date, datetime, timezone
from io import BytesIO
from pathlib import Path
from typing import Optional, Sequence

from fpdf import FPDF
from PIL import Image

from firesafe.config import settings
from firesafe.utils.text import to_latin1

logger = logging.getLogger(__name__)


# ── Color palette (FireSafe red + slate) ─────────────────────────────────────

RED = (212, 4, 45)
SLATE = (54, 69, 79)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
MUTED = (100, 100, 100)
SHADE = (240, 240, 240)
ROW_ALT = (247, 247, 247)
ALERT_BG = (255, 235, 235)
LINE = (200, 200, 200)

# ── Page geometry (mm, A4 portrait) ──────────────────────────────────────────

MARGIN = 20.0
PAGE_TOP_Y = 25.0
HEADER_END_Y = 45.0
HEADER_END_Y_WITH_SUMMARY = 55.0
CONTENT_BOTTOM = 24.0  # content never goes below page height minus this
FOOTER_RULE_OFFSET = 20.0
FOOTER_TEXT_OFFSET = 15.0

_BRAND_BOX = (60.0, 20.0)


# ── Font discovery ────────────────────────────────────────────────────────────


def _font_dirs() -> list[Path]:
    dirs = [
        Path(__file__).parent / "fonts",
        Path("/usr/share/fonts/truetype/dejavu"),
        Path("/usr/share/fonts/TTF"),
        Path("/usr/share/fonts/dejavu"),
        Path.home() / ".fonts",
        Path.home() / "Library" / "Fonts",
    ]
    if settings.PDF_FONT_DIR:
        dirs.insert(0, Path(settings.PDF_FONT_DIR))
    return dirs


def _font_dir() -> Optional[Path]:
    for d in _font_dirs():
        if (d / "DejaVuSans.ttf").is_file() and (d / "DejaVuSans-Bold.ttf").is_file():
            return d
    return None


# ── Data-URI images ───────────────────────────────────────────────────────────


def is_image_data_uri(value: object) -> bool:
    return isinstance(value, str) and value.strip().lower().startswith("data:image/")


def decode_image_data_uri(value: str) -> bytes:
    """Payload bytes of a ``data:image/...;base64,...`` string."""
    if not is_image_data_uri(value):
        raise ValueError("not an image data URI")
    header, _, payload = value.strip().partition(",")
    if not payload:
        raise ValueError("empty data URI payload")
    if ";base64" not in header.lower():
        raise ValueError("only base64 data URIs are supported")
    try:
        return base64.b64decode(payload, validate=False)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 payload: {exc}") from exc


# ── PDF class ─────────────────────────────────────────────────────────────────


class InspectionPDF(FPDF):
    """A4 report document with FireSafe styling."""

    def __init__(self, unicode_font: Optional[bool] = None, creation_date: Optional[date] = None) -> None:
        super().__init__("P", "mm", "A4")
        self._family = "helvetica"
        self.unicode_font = False
        self._italic = True
        self._footer: Optional[tuple[str, str, str]] = None

        want_unicode = settings.PDF_UNICODE_FONT if unicode_font is None else unicode_font
        if want_unicode:
            fd = _font_dir()
            if fd is None:
                logger.warning("DejaVuSans.ttf not found, falling back to Helvetica (Latin-1 only)")
            else:
                self.add_font("DV", "", str(fd / "DejaVuSans.ttf"))
                self.add_font("DV", "B", str(fd / "DejaVuSans-Bold.ttf"))
                oblique = fd / "DejaVuSans-Oblique.ttf"
                if oblique.is_file():
                    self.add_font("DV", "I", str(oblique))
                else:
                    self._italic = False
                self._family = "DV"
                self.unicode_font = True

        # Same input, same bytes: no wall clock in the document metadata
        stamp = creation_date or date.today()
        self.set_creation_date(datetime(stamp.year, stamp.month, stamp.day, tzinfo=timezone.utc))
        self.set_creator(settings.BRAND_NAME)

        self.set_auto_page_break(False)
        self.set_margins(MARGIN, PAGE_TOP_Y, MARGIN)
        self.alias_nb_pages()
        self.add_page()

    def normalize_text(self, text):
        if not self.unicode_font:
            text = to_latin1(text)
        return super().normalize_text(text)

    @property
    def pw(self) -> float:
        """Printable width (page minus margins)."""
        return self.w - 2 * MARGIN

    # ── fonts & measuring ─────────────────────────────────────────────────

    def use_font(self, size: float, style: str = "", color: Sequence[int] = BLACK) -> None:
        if "I" in style and not self._italic:
            style = style.replace("I", "")
        self.set_font(self._family, style, size)
        self.set_text_color(*color)

    def wrap(self, text: str, width: float) -> list[str]:
        """Lines that ``text`` occupies at the current font within ``width``."""
        if not text:
            return [""]
        room = width - 2 * self.c_margin
        glyphs = set(text) - {"\n"}
        if glyphs and max(self.get_string_width(ch) for ch in glyphs) >= room:
            return self._wrap_chars(text, room)
        lines = self.multi_cell(width, 5, text, dry_run=True, output="LINES")
        return list(lines) or [""]

    def _wrap_chars(self, text: str, room: float) -> list[str]:
        # Columns narrower than a glyph: one or more characters per line
        lines = []
        for para in text.split("\n"):
            line = ""
            for ch in para:
                if line and self.get_string_width(line + ch) > room:
                    lines.append(line)
                    line = ""
                line += ch
            lines.append(line)
        return lines

    def fit_text(self, text: str, width: float) -> str:
        """Truncate ``text`` with "..." until it fits ``width`` on one line."""
        if self.get_string_width(text) <= width:
            return text
        while text and self.get_string_width(text + "...") > width:
            text = text[:-1]
        return text + "..."

    # ── images ─────────────────────────────────────────────────────────────

    def embed_image(self, source: str, x: float, y: float, w: float, h: float) -> bool:
        """
        Draw a data-URI image scaled to fit (and centered in) the given box.

        Returns False, after logging a warning, when the image can't be
        decoded or embedded.
        """
        try:
            raw = decode_image_data_uri(source)
            with Image.open(BytesIO(raw)) as img:
                img.load()
                iw, ih = img.size
            scale = min(w / iw, h / ih)
            dw, dh = iw * scale, ih * scale
            self.image(BytesIO(raw), x=x + (w - dw) / 2, y=y + (h - dh) / 2, w=dw, h=dh)
        except Exception as e:
            logger.warning(f"Could not embed image ({str(source)[:40]}...): {e}")
            return False
        return True

    # ── branded header (first page) ───────────────────────────────────────

    def draw_header(
        self,
        title: str,
        company_name: str,
        logo: Optional[str] = None,
        summary: Optional[str] = None,
        show_brand: bool = True,
        show_company: bool = True,
    ) -> float:
        """Brand boxes, centered title and summary line; returns the content Y."""
        box_w, box_h = _BRAND_BOX
        top = 15.0

        if show_brand:
            self.set_fill_color(*RED)
            self.rect(MARGIN, top, box_w, box_h, "F")
            first, _, rest = settings.BRAND_NAME.partition(" ")
            self.use_font(12, "B", WHITE)
            self.set_xy(MARGIN + 5, top + 4)
            self.cell(box_w - 10, 6, first)
            if rest:
                self.set_xy(MARGIN + 5, top + 11)
                self.cell(box_w - 10, 6, rest.upper())

        if show_company:
            bx = self.w - MARGIN - box_w
            self.set_fill_color(*SLATE)
            self.rect(bx, top, box_w, box_h, "F")
            drawn = False
            if logo:
                drawn = self.embed_image(logo, bx + 2, top + 2, box_w - 4, box_h - 4)
            if not drawn:
                self.use_font(10, "", WHITE)
                lines = self.wrap(company_name, box_w - 6)[:2]
                ty = top + (box_h - 5 * len(lines)) / 2
                for line in lines:
                    self.set_xy(bx + 3, ty)
                    self.cell(box_w - 6, 5, line, align="C")
                    ty += 5

        # title: shrink until it fits on one line
        size = 14.0
        self.use_font(size, "B", SLATE)
        while size > 9 and self.get_string_width(title) > self.pw:
            size -= 0.5
            self.use_font(size, "B", SLATE)
        self.set_xy(MARGIN, top + box_h + 2)
        self.cell(self.pw, 7, self.fit_text(title, self.pw), align="C")

        if summary is None:
            return HEADER_END_Y

        self.use_font(10, "", SLATE)
        self.set_xy(MARGIN, top + box_h + 9)
        self.cell(self.pw, 6, self.fit_text(summary, self.pw), align="C")
        return HEADER_END_Y_WITH_SUMMARY

    # ── table with header + alternating rows ──────────────────────────────

    def add_table(
        self,
        hdrs: list[str],
        rows: list[list[str]],
        widths: list[float],
        y: float,
        x: float = MARGIN,
        aligns: Optional[list[str]] = None,
        top_y: float = PAGE_TOP_Y,
    ) -> float:
        """
        Draw a grid starting at ``y``; breaks pages between rows and repeats
        the header row. A row taller than a page is split across pages.
        Returns the Y just below the table.
        """
        n = len(hdrs)
        aligns = aligns or ["L"] * n
        total_w = sum(widths)
        inner = [max(w - 2, 1.0) for w in widths]
        lh = 4.5
        pad = 1.5
        bottom = self.h - CONTENT_BOTTOM

        def _lines(cells: list[str], bold: bool) -> list[list[str]]:
            self.use_font(8, "B" if bold else "")
            return [self.wrap(t, inner[i]) for i, t in enumerate(cells)]

        def _depth(lines: list[list[str]]) -> int:
            return max([1] + [len(cell) for cell in lines])

        def _draw(lines: list[list[str]], y0: float, hdr: bool, alt: bool) -> float:
            rh = _depth(lines) * lh + pad * 2
            if hdr:
                self.set_fill_color(*SLATE)
            elif alt:
                self.set_fill_color(*ROW_ALT)
            else:
                self.set_fill_color(*WHITE)
            self.set_draw_color(*LINE)
            self.set_line_width(0.2)
            self.rect(x, y0, total_w, rh, "DF")

            cx = x
            self.use_font(8, "B" if hdr else "", WHITE if hdr else BLACK)
            for i, cell_lines in enumerate(lines):
                ty = y0 + pad
                for line in cell_lines:
                    self.set_xy(cx + 1, ty)
                    self.cell(inner[i], lh, line, align="L" if hdr else aligns[i])
                    ty += lh
                cx += widths[i]
            return y0 + rh

        hdr_lines = _lines(hdrs, True)
        if y + _depth(hdr_lines) * lh + pad * 2 + lh * 2 > bottom:
            self.add_page()
            y = top_y
        y = _draw(hdr_lines, y, True, False)
        # body lines available on a continuation page, below the repeated header
        page_depth = int((bottom - top_y - _depth(hdr_lines) * lh - pad * 4) // lh)
        fresh = False
        for idx, r in enumerate(rows):
            lines = _lines(r, False)
            alt = idx % 2 == 1
            while True:
                room = int((bottom - y - pad * 2) // lh)
                if fresh:
                    room = max(room, 1)
                if _depth(lines) <= room:
                    y = _draw(lines, y, False, alt)
                    fresh = False
                    break
                if not fresh and (room < 1 or _depth(lines) <= page_depth):
                    self.add_page()
                    y = _draw(hdr_lines, top_y, True, False)
                    fresh = True
                    continue
                # taller than the room left: draw what fits, carry the rest over
                y = _draw([cell[:room] for cell in lines], y, False, alt)
                lines = [cell[room:] for cell in lines]
                fresh = False
        self.set_text_color(*BLACK)
        return min(y + 3, bottom)

    # ── page footer ───────────────────────────────────────────────────────

    def set_footer(self, left: str, center: str, page_fmt: str) -> None:
        """
        Footer fields for every page. ``page_fmt`` gets ``page`` and
        ``total``; the total is the ``{nb}`` alias filled in at output time.
        """
        self._footer = (left, center, page_fmt)

    def footer(self) -> None:
        if self._footer is None:
            return
        left, center, page_fmt = self._footer
        third = self.pw / 3

        y_rule = self.h - FOOTER_RULE_OFFSET
        self.set_draw_color(*RED)
        self.set_line_width(0.3)
        self.line(MARGIN, y_rule, self.w - MARGIN, y_rule)

        self.use_font(7, "", MUTED)
        y_text = self.h - FOOTER_TEXT_OFFSET
        self.set_xy(MARGIN, y_text)
        self.cell(third * 1.3, 5, self.fit_text(left, third * 1.3 - 2), align="L")
        self.set_xy(MARGIN + third * 1.3, y_text)
        self.cell(third * 0.9, 5, self.fit_text(center, third * 0.9), align="C")
        self.set_xy(MARGIN + third * 2.2, y_text)
        self.cell(third * 0.8, 5, page_fmt.format(page=self.page_no(), total="{nb}"), align="R")
