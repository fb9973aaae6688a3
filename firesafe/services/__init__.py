from .audit import log_pdf_generation, setup_audit_logging
from .pdf_generator import (
    PdfGenerator,
    RenderedReport,
    generate_inspection_pdf,
    generate_inspection_pdf_base64,
    generate_report_pdf,
)
from .schema_resolver import resolve_schema

__all__ = [
    "log_pdf_generation", "setup_audit_logging",
    "PdfGenerator", "RenderedReport",
    "generate_inspection_pdf", "generate_inspection_pdf_base64", "generate_report_pdf",
    "resolve_schema",
]
