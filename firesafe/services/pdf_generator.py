"""
Inspection report PDF generation.

Resolves the form schema, lays out header, general information, the form
body (schema driven, or the legacy layout when no schema applies) and the
signatures. Every page carries the footer; its page total is filled
in when the document is written.

Every call builds its own document and layout context; a ``PdfGenerator``
only holds configuration, so one instance can serve concurrent callers.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from firesafe.config import settings
from firesafe.forms.models import PdfOptions
from firesafe.utils.text import report_filename
from firesafe.utils.values import parse_date

from .audit import log_pdf_generation
from .labels import get_labels, language_code
from .layout import RenderContext
from .legacy_renderer import extract_sections, render_legacy, render_non_conformity_summary
from .pdf_document import InspectionPDF
from .report_blocks import (
    render_general_info,
    render_pump_info,
    render_signatures,
    render_structured_info,
    resolve_company,
    summary_line,
)
from .schema_resolver import resolve_schema
from .section_composer import render_schema

logger = logging.getLogger(__name__)

OptionsLike = Union[PdfOptions, Mapping[str, Any]]


@dataclass(frozen=True)
class RenderedReport:
    filename: str
    content: bytes
    page_count: int

    def to_base64(self) -> str:
        return base64.b64encode(self.content).decode("ascii")


def _coerce(options: OptionsLike) -> PdfOptions:
    if isinstance(options, PdfOptions):
        return options
    return PdfOptions.model_validate(options)


class PdfGenerator:
    """Renders inspection reports; safe to share between threads."""

    def __init__(
        self,
        output_dir: Optional[Union[str, Path]] = None,
        language: Optional[str] = None,
        unicode_font: Optional[bool] = None,
    ) -> None:
        self.output_dir = Path(output_dir or settings.PDF_OUTPUT_DIR)
        self.language = language
        self.unicode_font = unicode_font

    def render(self, options: OptionsLike) -> RenderedReport:
        options = _coerce(options)
        log_pdf_generation(options.report_id, options.user_id)

        lang = language_code(options.language or self.language)
        labels = get_labels(lang)
        company = resolve_company(options.pdf_company, options.company_name)
        schema = resolve_schema(options)
        filename = report_filename(
            options.form_title,
            options.property_name,
            options.report_date,
            property_fallback=labels["property_fallback"],
        )

        pdf = InspectionPDF(unicode_font=self.unicode_font, creation_date=parse_date(options.report_date))
        pdf.set_title(options.form_title)
        pdf.set_footer(filename, labels["generated_by"].format(brand=settings.BRAND_NAME), labels["page_of"])
        ctx = RenderContext(pdf=pdf, labels=labels, language=lang, company=company)

        # ── header + general information ──
        branding = options.pdf_branding
        info = options.general_information
        ctx.adopt(
            pdf.draw_header(
                options.form_title,
                company.name,
                logo=company.logo_url or None,
                summary=summary_line(info, company, lang) if info else None,
                show_brand=branding.show_fire_safe_logo,
                show_company=branding.show_company_logo,
            )
        )
        render_general_info(ctx, options.general_info, company)
        if info:
            render_structured_info(ctx, info)
        render_pump_info(ctx, options.form_data.get("selectedPump"))

        # ── body ──
        if schema is not None:
            shown = render_schema(ctx, schema, options.form_data)
            logger.debug(f"Rendered {shown}/{len(schema.sections)} sections of {schema.id}")
        else:
            sections = extract_sections(options.form_data)
            render_legacy(ctx, sections)
            render_non_conformity_summary(ctx, sections)

        if options.signatures:
            render_signatures(ctx, options.signatures)

        pages = pdf.page
        content = bytes(pdf.output())
        logger.info(f"PDF generated: {filename} ({pages} pages, {len(content)} bytes)")
        return RenderedReport(filename=filename, content=content, page_count=pages)

    def generate_pdf(self, options: OptionsLike, output_dir: Optional[Union[str, Path]] = None) -> Path:
        """Render and save under ``output_dir``; returns the file path."""
        report = self.render(options)
        target_dir = Path(output_dir) if output_dir else self.output_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / report.filename
        path.write_bytes(report.content)
        return path

    def generate_pdf_base64(self, options: OptionsLike) -> str:
        return self.render(options).to_base64()


# ── Public interface ─────────────────────────────────────────────────────────


def generate_inspection_pdf(options: OptionsLike, output_dir: Optional[Union[str, Path]] = None) -> Path:
    return PdfGenerator().generate_pdf(options, output_dir)


def generate_inspection_pdf_base64(options: OptionsLike) -> str:
    return PdfGenerator().generate_pdf_base64(options)


async def generate_report_pdf(options: OptionsLike) -> bytes:
    """
    Render a report without blocking the event loop.

    Args:
        options: ``PdfOptions`` or its camelCase JSON mapping.

    Returns:
        bytes of the finished PDF.
    """
    report = await asyncio.to_thread(PdfGenerator().render, options)
    return report.content
