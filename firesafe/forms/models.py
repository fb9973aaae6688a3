"""Form schema and report request models.

Field names are snake_case; the camelCase keys sent by the web client are
accepted through aliases.
"""

from __future__ import annotations

import enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field as PydanticField, field_validator
from pydantic.alias_generators import to_camel


class FieldType(str, enum.Enum):
    SECTION_HEADER = "section-header"
    SUBSECTION_HEADER = "subsection-header"
    INPUT = "input"
    SELECT = "select"
    TEXTAREA = "textarea"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    PHOTO = "photo"
    REPEATER = "repeater"
    TABLE = "table"
    SIGNATURE = "signature"
    GENERIC = "generic"


class ColumnType(str, enum.Enum):
    TEXT = "text"
    DATE = "date"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    SELECT = "select"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _SchemaModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ── Schema ───────────────────────────────────────────────────────────────────


class FieldOption(_SchemaModel):
    value: Any = None
    label: str = ""

    @property
    def display(self) -> str:
        return self.label or ("" if self.value is None else str(self.value))


class TableColumn(_SchemaModel):
    id: str
    label: str = ""
    type: ColumnType = ColumnType.TEXT
    unit: Optional[str] = None
    options: List[FieldOption] = PydanticField(default_factory=list)
    align: Optional[str] = None
    width: Optional[float] = None

    @field_validator("type", mode="before")
    @classmethod
    def _unknown_column_type(cls, value: Any) -> Any:
        if isinstance(value, str) and value not in ColumnType._value2member_map_:
            return ColumnType.TEXT
        return value


class Field(_SchemaModel):
    id: str
    label: str = ""
    type: FieldType = FieldType.GENERIC
    data_key: Optional[str] = None
    options: List[FieldOption] = PydanticField(default_factory=list)
    columns: List[TableColumn] = PydanticField(default_factory=list)
    fields: List["Field"] = PydanticField(default_factory=list)
    unit: Optional[str] = None
    input_type: Optional[str] = None
    include_field: bool = False
    field_label: Optional[str] = None
    field_type: Optional[str] = None
    rows: Optional[int] = None
    help: Optional[str] = None
    placeholder: Optional[str] = None
    required: bool = False
    max_length: Optional[int] = None

    @field_validator("type", mode="before")
    @classmethod
    def _unknown_field_type(cls, value: Any) -> Any:
        # Unknown tags still render through the generic renderer
        if isinstance(value, str) and value not in FieldType._value2member_map_:
            return FieldType.GENERIC
        return value

    @property
    def key(self) -> str:
        return self.data_key or self.id


class Subsection(_SchemaModel):
    id: Optional[str] = None
    title: str = ""
    description: Optional[str] = None
    fields: List[Field] = PydanticField(default_factory=list)


class Section(_SchemaModel):
    id: str
    title: str = ""
    icon: Optional[str] = None
    description: Optional[str] = None
    fields: List[Field] = PydanticField(default_factory=list)
    subsections: List[Subsection] = PydanticField(default_factory=list)
    required_frequencies: List[str] = PydanticField(default_factory=list)
    conditional_display: bool = False


class FormSchema(_SchemaModel):
    id: str = ""
    title: str = ""
    description: str = ""
    version: str = "1.0.0"
    sections: List[Section] = PydanticField(default_factory=list)
    frequencies: List[str] = PydanticField(default_factory=list)
    estimated_time: Optional[str] = None

    def iter_fields(self):
        """Yield every field of every section and subsection, in order."""
        for section in self.sections:
            yield from section.fields
            for subsection in section.subsections:
                yield from subsection.fields


# ── Report inputs ────────────────────────────────────────────────────────────


class GeneralInfo(_CamelModel):
    """Flat property/inspector record typed on the form's first page."""

    property_name: Optional[str] = None
    property_address: Optional[str] = None
    property_phone: Optional[str] = None
    inspector: Optional[str] = None
    date: Optional[str] = None
    contract_number: Optional[str] = None


class GeneralInformation(BaseModel):
    """Structured inspection record stored by the backend."""

    model_config = ConfigDict(populate_by_name=True)

    empresa: Optional[str] = None
    nome_propriedade: Optional[str] = None
    id_propriedade: Optional[str] = None
    endereco: Optional[str] = None
    tipo_edificacao: Optional[str] = None
    area_total_piso_ft2: Optional[float] = None
    data_inspecao: Optional[str] = None
    tipo_inspecao: Optional[str] = None
    proxima_inspecao_programada: Optional[str] = None
    nome_inspetor: Optional[str] = None
    licenca_inspetor: Optional[str] = None
    observacoes_adicionais: Optional[str] = None
    temperatura_f: Optional[float] = None
    condicoes_climaticas: Optional[str] = None
    velocidade_vento_mph: Optional[float] = None


class _BlankableModel(_CamelModel):
    @field_validator("*", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class CompanyAddress(_BlankableModel):
    logradouro: str = ""
    numero: str = ""
    bairro: str = ""
    municipio: str = ""
    estado: str = ""
    cep: str = ""
    complemento: str = ""
    ibge: str = ""
    pais: str = ""


class CompanyContact(_BlankableModel):
    nome: str = ""
    email: str = ""
    telefone: str = ""


class CompanyData(_CamelModel):
    name: str = ""
    cnpj: str = ""
    ie: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    logo_url: str = ""
    address: CompanyAddress = PydanticField(default_factory=CompanyAddress)
    contato: CompanyContact = PydanticField(default_factory=CompanyContact)

    @field_validator("name", "cnpj", "ie", "email", "phone", "website", "logo_url", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("address", "contato", mode="before")
    @classmethod
    def _none_as_blank_record(cls, value: Any) -> Any:
        return {} if value is None else value


class PdfBranding(_CamelModel):
    show_company_logo: bool = True
    show_fire_safe_logo: bool = True


class SignatureData(_CamelModel):
    inspector_name: str = ""
    inspector_date: Optional[str] = None
    inspector_signature: Optional[str] = None
    client_name: str = ""
    client_date: Optional[str] = None
    client_signature: Optional[str] = None


class PdfOptions(_CamelModel):
    """Everything one report generation needs."""

    form_title: str
    form_data: Dict[str, Any] = PydanticField(default_factory=dict)
    general_info: GeneralInfo = PydanticField(default_factory=GeneralInfo)
    signatures: Optional[SignatureData] = None
    company_name: Optional[str] = None
    pdf_company: Optional[CompanyData] = None
    pdf_branding: PdfBranding = PydanticField(default_factory=PdfBranding)
    general_information: Optional[GeneralInformation] = None
    report_id: Optional[str] = None
    user_id: Optional[str] = None
    form_schema: Optional[FormSchema] = None
    schema_id: Optional[str] = None
    language: Optional[str] = None

    @field_validator("form_data", mode="before")
    @classmethod
    def _form_data_default(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def property_name(self) -> Optional[str]:
        if self.general_info.property_name:
            return self.general_info.property_name
        if self.general_information and self.general_information.nome_propriedade:
            return self.general_information.nome_propriedade
        return None

    @property
    def report_date(self) -> Optional[str]:
        if self.general_info.date:
            return self.general_info.date
        if self.general_information and self.general_information.data_inspecao:
            return self.general_information.data_inspecao
        return None


Field.model_rebuild()
