"""Lookup of form schemas by id or title."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from firesafe.utils.values import is_missing, resolve_field_value

from .models import FormSchema

logger = logging.getLogger(__name__)


class FormSchemaRegistry:
    """In-memory schema catalogue; registration order is kept."""

    def __init__(self) -> None:
        self._schemas: Dict[str, FormSchema] = {}

    def register(self, schema: FormSchema) -> FormSchema:
        if schema.id in self._schemas:
            logger.info(f"Replacing form schema {schema.id}")
        self._schemas[schema.id] = schema
        return schema

    def get(self, form_id: Optional[str]) -> Optional[FormSchema]:
        if not form_id:
            return None
        return self._schemas.get(form_id)

    def get_by_title(self, title: Optional[str]) -> Optional[FormSchema]:
        if not title:
            return None
        wanted = title.strip().casefold()
        for schema in self._schemas.values():
            if schema.title.strip().casefold() == wanted:
                return schema
        return None

    def all(self) -> List[FormSchema]:
        return list(self._schemas.values())

    def __contains__(self, form_id: object) -> bool:
        return form_id in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)


def _default_registry() -> FormSchemaRegistry:
    from .builtin import BUILTIN_SCHEMAS

    registry = FormSchemaRegistry()
    for schema in BUILTIN_SCHEMAS:
        registry.register(schema)
    return registry


registry = _default_registry()


def get_form_schema(form_id: Optional[str]) -> Optional[FormSchema]:
    return registry.get(form_id)


def get_form_schema_by_title(title: Optional[str]) -> Optional[FormSchema]:
    return registry.get_by_title(title)


def get_all_form_schemas() -> List[FormSchema]:
    return registry.all()


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


def validate_form_data(form_id: str, form_data: Mapping[str, Any]) -> ValidationResult:
    """Check that every required field of the schema has a value."""
    schema = get_form_schema(form_id)
    if schema is None:
        return ValidationResult(False, [f"Schema não encontrado para o formulário: {form_id}"])

    errors = [
        f"Campo obrigatório não preenchido: {f.label or f.id}"
        for f in schema.iter_fields()
        if f.required and is_missing(resolve_field_value(f, form_data))
    ]
    return ValidationResult(not errors, errors)
