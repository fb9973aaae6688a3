# tests/conftest.py
import logging
from io import BytesIO

import pytest
from pypdf import PdfReader

from firesafe.config import settings
from firesafe.services.audit import AUDIT_LOGGER
from firesafe.services.labels import get_labels
from firesafe.services.layout import RenderContext
from firesafe.services.pdf_document import InspectionPDF

# 1x1 RGBA PNG
PNG_DATA_URI = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture(autouse=True)
def core_fonts(monkeypatch):
    """Helvetica everywhere, so extracted text does not depend on installed fonts"""
    monkeypatch.setattr(settings, "PDF_UNICODE_FONT", False)
    monkeypatch.setattr(settings, "PDF_LANGUAGE", "pt")


@pytest.fixture(autouse=True)
def reset_audit_logger():
    yield
    audit = logging.getLogger(AUDIT_LOGGER)
    for handler in list(audit.handlers):
        audit.removeHandler(handler)
        handler.close()
    audit.propagate = True


def pdf_pages(content: bytes) -> list[str]:
    reader = PdfReader(BytesIO(content))
    return [page.extract_text() or "" for page in reader.pages]


def pdf_text(content: bytes) -> str:
    return "\n".join(pdf_pages(content))


@pytest.fixture
def make_ctx():
    """Fresh layout context on a blank document"""

    def _make(language: str = "pt", company=None) -> RenderContext:
        pdf = InspectionPDF(unicode_font=False)
        return RenderContext(pdf=pdf, labels=get_labels(language), language=language, company=company)

    return _make


@pytest.fixture
def ctx(make_ctx):
    return make_ctx()


def ctx_text(ctx: RenderContext) -> str:
    return pdf_text(bytes(ctx.pdf.output()))
