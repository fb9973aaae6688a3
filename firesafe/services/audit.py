"""Audit trail of report generations (one JSON line per render)."""

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from firesafe.config import settings

logger = logging.getLogger(__name__)

AUDIT_LOGGER = "firesafe.audit"
ACTION_PDF_GENERATION = "pdf_generation"

audit_logger = logging.getLogger(AUDIT_LOGGER)


def setup_audit_logging(log_file: Optional[str] = None) -> Path:
    """Attach a rotating file handler (plus console) to the audit logger."""
    path = Path(log_file or settings.AUDIT_LOG_FILE)
    path.parent.mkdir(parents=True, exist_ok=True)

    audit_logger.setLevel(logging.INFO)
    audit_logger.propagate = False
    for handler in list(audit_logger.handlers):
        audit_logger.removeHandler(handler)
        handler.close()

    # File handler with rotation; the message already is the JSON record
    file_handler = RotatingFileHandler(
        path,
        maxBytes=settings.AUDIT_LOG_MAX_BYTES,
        backupCount=settings.AUDIT_LOG_BACKUPS,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter("%(message)s"))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter("[PDF_GENERATION_LOG] %(message)s"))

    audit_logger.addHandler(file_handler)
    audit_logger.addHandler(console_handler)

    logger.info(f"Audit logging configured: {path}")
    return path


def audit_record(report_id: Optional[str], user_id: Optional[str], now: Optional[datetime] = None) -> dict:
    return {
        "timestamp": (now or datetime.now(timezone.utc)).isoformat(),
        "reportId": report_id or "unknown",
        "userId": user_id or "anonymous",
        "action": ACTION_PDF_GENERATION,
    }


def log_pdf_generation(report_id: Optional[str], user_id: Optional[str]) -> None:
    """Emit the audit record; failures are logged and never reach the caller."""
    try:
        audit_logger.info(json.dumps(audit_record(report_id, user_id), ensure_ascii=False))
    except Exception as e:
        logger.error(f"Audit log error: {e}")
