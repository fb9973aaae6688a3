"""Cursor, margins and page breaks for one render pass."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

from firesafe.forms.models import CompanyData

from .pdf_document import BLACK, CONTENT_BOTTOM, MARGIN, PAGE_TOP_Y, InspectionPDF

# ── Break thresholds (mm from the page bottom) ───────────────────────────────

THRESHOLD_FIELD = 30.0
THRESHOLD_SUBSECTION = 40.0
THRESHOLD_PHOTO = 50.0
THRESHOLD_SECTION = 60.0
THRESHOLD_SIGNATURE = 60.0
THRESHOLD_SUMMARY = 60.0
THRESHOLD_REPORT_SIGNATURES = 120.0

LINE_H = 4.5


@dataclass
class RenderContext:
    """
    Mutable layout state threaded through every renderer.

    ``y`` only grows on a page; ``new_page`` (or a table that broke pages
    itself, through ``adopt``) is what moves it back up.
    """

    pdf: InspectionPDF
    labels: Dict[str, str]
    language: str = "pt"
    company: Optional[CompanyData] = None
    y: float = PAGE_TOP_Y
    _lefts: List[float] = field(default_factory=lambda: [MARGIN])

    @property
    def left(self) -> float:
        return self._lefts[-1]

    @property
    def right(self) -> float:
        return self.pdf.w - MARGIN

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def page(self) -> int:
        return self.pdf.page

    @property
    def page_height(self) -> float:
        return self.pdf.h

    def label(self, key: str, **kwargs) -> str:
        text = self.labels[key]
        return text.format(**kwargs) if kwargs else text

    # ── cursor ────────────────────────────────────────────────────────────

    def advance(self, dy: float) -> None:
        self.y += dy

    def adopt(self, y: float) -> None:
        """Take over the Y reported by a primitive that paginates itself."""
        self.y = y

    def new_page(self) -> None:
        self.pdf.add_page()
        self.y = PAGE_TOP_Y

    def ensure_space(self, threshold: float, needed: float = 0.0) -> bool:
        """
        Start a new page when the cursor is within ``threshold`` of the page
        bottom, or when ``needed`` more mm would run into the footer.
        """
        limit = self.page_height - CONTENT_BOTTOM
        if self.y > self.page_height - threshold or (needed and self.y + needed > limit):
            self.new_page()
            return True
        return False

    @contextmanager
    def indented(self, dx: float) -> Iterator[None]:
        self._lefts.append(self.left + dx)
        try:
            yield
        finally:
            self._lefts.pop()

    # ── text ──────────────────────────────────────────────────────────────

    def text_lines(
        self,
        text: str,
        size: float = 9,
        style: str = "",
        color: Sequence[int] = BLACK,
        x_offset: float = 0.0,
        line_h: float = LINE_H,
        align: str = "L",
    ) -> None:
        """Wrap ``text`` to the current width and write it, breaking pages per line."""
        x = self.left + x_offset
        w = self.right - x
        self.pdf.use_font(size, style, color)
        for line in self.pdf.wrap(text, w):
            if self.ensure_space(THRESHOLD_FIELD, line_h):
                self.pdf.use_font(size, style, color)
            self.pdf.set_xy(x, self.y)
            self.pdf.cell(w, line_h, line, align=align)
            self.y += line_h

    def key_value(self, label: str, value: str, label_w: float = 60.0, size: float = 9) -> None:
        """Bold label column and wrapped value column side by side."""
        pdf = self.pdf
        label_w = min(label_w, self.width / 2)
        value_w = self.width - label_w
        pdf.use_font(size, "B")
        label_lines = pdf.wrap(label, label_w - 2)
        pdf.use_font(size)
        value_lines = pdf.wrap(value, value_w)
        height = max(len(label_lines), len(value_lines)) * LINE_H

        if height > 80:
            self.text_lines(label, size=size, style="B")
            self.text_lines(value, size=size, x_offset=4)
            return

        self.ensure_space(THRESHOLD_FIELD, height)
        pdf.use_font(size, "B")
        for i, line in enumerate(label_lines):
            pdf.set_xy(self.left, self.y + i * LINE_H)
            pdf.cell(label_w - 2, LINE_H, line)
        pdf.use_font(size)
        for i, line in enumerate(value_lines):
            pdf.set_xy(self.left + label_w, self.y + i * LINE_H)
            pdf.cell(value_w, LINE_H, line)
        self.y += height

    def rule(self, color: Sequence[int], width: Optional[float] = None, thickness: float = 0.5) -> None:
        self.pdf.set_draw_color(*color)
        self.pdf.set_line_width(thickness)
        self.pdf.line(self.left, self.y, self.left + (width or self.width), self.y)
