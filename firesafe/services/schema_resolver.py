"""Which form schema applies to a report request."""

import logging
from typing import Callable, Optional, Sequence, Tuple

from pydantic import ValidationError

from firesafe.forms.models import FormSchema, PdfOptions
from firesafe.forms.registry import get_form_schema, get_form_schema_by_title

logger = logging.getLogger(__name__)

Strategy = Callable[[PdfOptions], Optional[FormSchema]]


def from_explicit_schema(options: PdfOptions) -> Optional[FormSchema]:
    return options.form_schema


def from_schema_id(options: PdfOptions) -> Optional[FormSchema]:
    return get_form_schema(options.schema_id)


def from_form_data(options: PdfOptions) -> Optional[FormSchema]:
    """``formData.schema`` (object or id), then ``formData.schemaId``."""
    embedded = options.form_data.get("schema")
    if isinstance(embedded, dict):
        try:
            return FormSchema.model_validate(embedded)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid embedded schema: {e.error_count()} error(s)")
    elif isinstance(embedded, str):
        schema = get_form_schema(embedded)
        if schema is not None:
            return schema
    schema_id = options.form_data.get("schemaId")
    if isinstance(schema_id, str):
        return get_form_schema(schema_id)
    return None


def from_form_title(options: PdfOptions) -> Optional[FormSchema]:
    return get_form_schema_by_title(options.form_title)


# Tried in order; the first schema found wins
STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("explicit", from_explicit_schema),
    ("schema_id", from_schema_id),
    ("form_data", from_form_data),
    ("title", from_form_title),
)


def resolve_schema(
    options: PdfOptions, strategies: Sequence[Tuple[str, Strategy]] = STRATEGIES
) -> Optional[FormSchema]:
    for name, strategy in strategies:
        schema = strategy(options)
        if schema is not None:
            logger.debug(f"Schema {schema.id!r} resolved via {name}")
            return schema
    logger.info(f"No schema for form {options.form_title!r}, using legacy layout")
    return None
