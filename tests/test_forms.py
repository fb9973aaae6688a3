import pytest

from firesafe.forms import (
    FieldType,
    FormSchema,
    FormSchemaRegistry,
    Frequency,
    canonical_frequency,
    get_all_form_schemas,
    get_form_schema,
    get_form_schema_by_title,
    section_visible,
    validate_form_data,
)
from firesafe.forms.models import ColumnType, Field, PdfOptions


class TestFrequency:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("mensal", "mensal"),
            ("Mensal", "mensal"),
            ("monthly", "mensal"),
            ("Diária", "diaria"),
            ("5 Anos", "5anos"),
            ("fiveyears", "5anos"),
            ("Testes", "testes"),
            ({"value": "anual", "label": "Anual"}, "anual"),
        ],
    )
    def test_canonical(self, value, expected):
        assert canonical_frequency(value) == expected

    def test_unknown_is_folded(self):
        assert canonical_frequency("Bi Anual") == "bianual"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty(self, value):
        assert canonical_frequency(value) is None

    def test_enum_values_are_canonical(self):
        for member in Frequency:
            assert canonical_frequency(member.value) == member.value

    def test_unconditional_sections_always_show(self):
        assert section_visible(False, ["anual"], "mensal")

    def test_exact_membership(self):
        assert section_visible(True, ["mensal"], "mensal")
        assert section_visible(True, ["mensal", "anual"], "Anual")
        assert not section_visible(True, ["anual"], "mensal")

    def test_no_selection_fails_open(self):
        assert section_visible(True, ["anual"], None)
        assert section_visible(True, ["anual"], "")


class TestModels:
    def test_unknown_field_type_is_generic(self):
        field = Field.model_validate({"id": "x", "type": "slider"})
        assert field.type is FieldType.GENERIC

    def test_unknown_column_type_is_text(self):
        schema = FormSchema.model_validate(
            {
                "id": "t",
                "sections": [
                    {
                        "id": "s",
                        "fields": [{"id": "tbl", "type": "table", "columns": [{"id": "c", "type": "rating"}]}],
                    }
                ],
            }
        )
        assert schema.sections[0].fields[0].columns[0].type is ColumnType.TEXT

    def test_camel_case_aliases(self):
        field = Field.model_validate(
            {"id": "p", "type": "radio", "dataKey": "a.b", "includeField": True, "fieldLabel": "Valor"}
        )
        assert field.key == "a.b"
        assert field.include_field
        assert field.field_label == "Valor"

    def test_options_property_and_date_fallbacks(self):
        options = PdfOptions.model_validate(
            {
                "formTitle": "T",
                "formData": None,
                "generalInformation": {"nome_propriedade": "Torre B", "data_inspecao": "2024-02-01"},
            }
        )
        assert options.form_data == {}
        assert options.property_name == "Torre B"
        assert options.report_date == "2024-02-01"

        options = PdfOptions.model_validate(
            {"formTitle": "T", "generalInfo": {"propertyName": "Torre A", "date": "2024-03-01"}}
        )
        assert options.property_name == "Torre A"
        assert options.report_date == "2024-03-01"

    def test_company_nulls_become_blank(self):
        options = PdfOptions.model_validate(
            {"formTitle": "T", "pdfCompany": {"name": None, "address": None, "contato": {"nome": None}}}
        )
        assert options.pdf_company.name == ""
        assert options.pdf_company.address.municipio == ""
        assert options.pdf_company.contato.nome == ""


class TestRegistry:
    def test_builtin_schemas(self):
        ids = [s.id for s in get_all_form_schemas()]
        assert ids == ["wet-sprinkler", "foam-water", "weekly-pump", "annual-pump", "hydrant-flow-test"]

    def test_builtin_fields_have_known_types(self):
        def walk(fields):
            for f in fields:
                yield f
                yield from walk(f.fields)

        for schema in get_all_form_schemas():
            for field in walk(schema.iter_fields()):
                assert field.type is not FieldType.GENERIC, f"{schema.id}:{field.id}"

    def test_lookup(self):
        assert get_form_schema("weekly-pump").title == "Inspeção Semanal de Bomba"
        assert get_form_schema("nope") is None
        assert get_form_schema(None) is None

    def test_title_lookup_is_case_insensitive(self):
        assert get_form_schema_by_title("  INSPEÇÃO SEMANAL DE BOMBA ").id == "weekly-pump"
        assert get_form_schema_by_title("Unknown form") is None

    def test_register_replaces(self):
        reg = FormSchemaRegistry()
        reg.register(FormSchema(id="a", title="First"))
        reg.register(FormSchema(id="a", title="Second"))
        assert len(reg) == 1
        assert "a" in reg
        assert reg.get("a").title == "Second"


class TestValidateFormData:
    def test_unknown_schema(self):
        result = validate_form_data("nope", {})
        assert not result.is_valid
        assert result.errors == ["Schema não encontrado para o formulário: nope"]

    def test_missing_required(self):
        result = validate_form_data("wet-sprinkler", {"propertyName": "Torre A", "inspector": "  "})
        assert not result.is_valid
        assert "Campo obrigatório não preenchido: Inspetor" in result.errors
        assert "Campo obrigatório não preenchido: Nome da Propriedade" not in result.errors

    def test_complete(self):
        data = {
            "propertyName": "Torre A",
            "propertyAddress": "Rua 1",
            "inspector": "João",
            "date": "2024-01-15",
            "frequency": "mensal",
            "inspectorSignature": "data:image/png;base64,AAAA",
            "clientSignature": "data:image/png;base64,AAAA",
        }
        result = validate_form_data("wet-sprinkler", data)
        assert result.is_valid
        assert result.errors == []
