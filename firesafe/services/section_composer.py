"""Walks a form schema: sections, then their fields, then subsections."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from firesafe.forms.frequency import section_visible
from firesafe.forms.models import FormSchema, Section, Subsection

from .field_renderers import render_field
from .layout import LINE_H, THRESHOLD_SECTION, THRESHOLD_SUBSECTION, RenderContext
from .pdf_document import MUTED, RED, SHADE, SLATE

logger = logging.getLogger(__name__)


def is_section_visible(section: Section, form_data: Mapping[str, Any]) -> bool:
    return section_visible(
        section.conditional_display,
        section.required_frequencies,
        form_data.get("frequency") if isinstance(form_data, Mapping) else None,
    )


def _section_title(ctx: RenderContext, section: Section) -> None:
    pdf = ctx.pdf
    title = section.title.upper()
    if section.icon:
        title = f"{section.icon} {title}"

    pdf.set_fill_color(*SHADE)
    pdf.rect(ctx.left, ctx.y, ctx.width, 9, "F")
    pdf.use_font(11, "B", SLATE)
    pdf.set_xy(ctx.left + 3, ctx.y + 1.5)
    pdf.cell(ctx.width - 6, 6, pdf.fit_text(title, ctx.width - 6))
    ctx.advance(9)
    ctx.rule(RED, width=min(pdf.get_string_width(title) + 6, ctx.width))
    ctx.advance(3)


def _render_subsection(ctx: RenderContext, subsection: Subsection, form_data: Mapping[str, Any]) -> None:
    ctx.ensure_space(THRESHOLD_SUBSECTION)
    ctx.advance(1)
    if subsection.title:
        ctx.text_lines(subsection.title, size=10, style="B", color=SLATE, line_h=5)
    if subsection.description:
        ctx.text_lines(subsection.description, size=8.5, style="I", color=MUTED)
    ctx.advance(1.5)
    for field in subsection.fields:
        render_field(ctx, field, form_data)


def render_section(ctx: RenderContext, section: Section, form_data: Mapping[str, Any]) -> bool:
    """Draw one section; returns False when it is hidden for the selected frequency."""
    if not is_section_visible(section, form_data):
        logger.debug(f"Section {section.id} hidden for frequency {form_data.get('frequency')!r}")
        return False

    ctx.ensure_space(THRESHOLD_SECTION)
    _section_title(ctx, section)
    if section.description:
        ctx.text_lines(section.description, size=9, style="I", color=MUTED)
        ctx.advance(LINE_H / 2)

    for field in section.fields:
        render_field(ctx, field, form_data)
    for subsection in section.subsections:
        _render_subsection(ctx, subsection, form_data)
    ctx.advance(4)
    return True


def render_schema(ctx: RenderContext, schema: FormSchema, form_data: Mapping[str, Any]) -> int:
    """Render every section in declared order; returns how many were shown."""
    shown = 0
    for section in schema.sections:
        if render_section(ctx, section, form_data):
            shown += 1
    return shown
