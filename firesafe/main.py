import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from firesafe.config import settings
from firesafe.forms import get_all_form_schemas
from firesafe.services import PdfGenerator, setup_audit_logging

# Configure logging
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
logger = logging.getLogger(__name__)


def setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=LOG_FORMAT
    )
    setup_audit_logging()


def cmd_render(args: argparse.Namespace) -> int:
    """Render a report from a JSON payload (PdfOptions, camelCase keys)"""
    try:
        payload = json.loads(Path(args.payload).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read payload {args.payload}: {e}")
        return 1

    generator = PdfGenerator(output_dir=args.output_dir, language=args.language)
    try:
        if args.base64:
            sys.stdout.write(generator.generate_pdf_base64(payload) + "\n")
        else:
            path = generator.generate_pdf(payload)
            logger.info(f"Report saved: {path}")
    except ValidationError as e:
        logger.error(f"Invalid payload: {e}")
        return 1
    except Exception as e:
        logger.error(f"PDF generation failed: {e}")
        return 1
    return 0


def cmd_schemas(args: argparse.Namespace) -> int:
    """List registered form schemas"""
    for schema in get_all_form_schemas():
        sys.stdout.write(f"{schema.id}\t{schema.title}\t({len(schema.sections)} sections)\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="firesafe", description="FireSafe inspection report renderer")
    sub = ap.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a PDF report from a JSON payload")
    render.add_argument("payload", help="Path to the report payload JSON")
    render.add_argument("-o", "--output-dir", default=None, help="Directory for the PDF (default: PDF_OUTPUT_DIR)")
    render.add_argument("--language", default=None, choices=["pt", "en"], help="Report language")
    render.add_argument("--base64", action="store_true", help="Print the PDF as base64 instead of saving it")
    render.set_defaults(func=cmd_render)

    schemas = sub.add_parser("schemas", help="List registered form schemas")
    schemas.set_defaults(func=cmd_schemas)
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    setup_logging()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
