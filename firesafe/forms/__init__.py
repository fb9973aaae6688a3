from .frequency import Frequency, canonical_frequency, section_visible
from .models import (
    ColumnType,
    CompanyAddress,
    CompanyContact,
    CompanyData,
    Field,
    FieldOption,
    FieldType,
    FormSchema,
    GeneralInfo,
    GeneralInformation,
    PdfBranding,
    PdfOptions,
    Section,
    SignatureData,
    Subsection,
    TableColumn,
)
from .registry import (
    FormSchemaRegistry,
    ValidationResult,
    get_all_form_schemas,
    get_form_schema,
    get_form_schema_by_title,
    registry,
    validate_form_data,
)

__all__ = [
    "ColumnType",
    "CompanyAddress",
    "CompanyContact",
    "CompanyData",
    "Field",
    "FieldOption",
    "FieldType",
    "FormSchema",
    "FormSchemaRegistry",
    "Frequency",
    "GeneralInfo",
    "GeneralInformation",
    "PdfBranding",
    "PdfOptions",
    "Section",
    "SignatureData",
    "Subsection",
    "TableColumn",
    "ValidationResult",
    "canonical_frequency",
    "get_all_form_schemas",
    "get_form_schema",
    "get_form_schema_by_title",
    "registry",
    "section_visible",
    "validate_form_data",
]
