import asyncio
import base64

import pytest
from pydantic import ValidationError

from firesafe.services import (
    PdfGenerator,
    RenderedReport,
    generate_inspection_pdf,
    generate_inspection_pdf_base64,
    generate_report_pdf,
)

from .conftest import PNG_DATA_URI, pdf_pages, pdf_text


@pytest.fixture
def options():
    return {
        "formTitle": "Inspeção Semanal de Bomba",
        "reportId": "rep-42",
        "userId": "user-7",
        "generalInfo": {
            "propertyName": "Torre A",
            "propertyAddress": "Av. Paulista, 1000",
            "inspector": "João Souza",
            "date": "2024-01-15",
        },
        "formData": {
            "propertyName": "Torre A",
            "pumphouse_temperature": "sim",
            "pumphouse_temperature_value": 55,
            "pump_condition": "nao",
        },
        "signatures": {
            "inspectorName": "João Souza",
            "inspectorDate": "2024-01-15",
            "inspectorSignature": PNG_DATA_URI,
            "clientName": "Maria Lima",
        },
    }


@pytest.fixture
def long_options():
    fields = [{"id": f"q{i}", "type": "radio", "label": f"Check item number {i}"} for i in range(90)]
    return {
        "formTitle": "Long Checklist",
        "language": "en",
        "generalInfo": {"propertyName": "Plant 3", "date": "2024-05-02"},
        "formSchema": {"id": "long", "title": "Long Checklist", "sections": [{"id": "s", "title": "Items", "fields": fields}]},
        "formData": {f"q{i}": "sim" for i in range(90)},
    }


class TestRender:
    def test_schema_report(self, options):
        report = PdfGenerator().render(options)
        assert isinstance(report, RenderedReport)
        assert report.filename == "Report_Inspecao_Semanal_de_Bomba_Torre_A_2024-01-15.pdf"
        assert report.content.startswith(b"%PDF")
        assert report.page_count == len(pdf_pages(report.content))

        text = pdf_text(report.content)
        assert "Torre A" in text
        assert "CASA DE BOMBAS" in text
        assert "Valor (psi)" not in text
        assert "Maria Lima" in text

    def test_same_input_same_bytes(self, options):
        generator = PdfGenerator()
        assert generator.render(options).content == generator.render(options).content

    def test_footer_on_every_page(self, long_options):
        report = PdfGenerator().render(long_options)
        pages = pdf_pages(report.content)
        assert report.page_count == len(pages) > 1
        for number, text in enumerate(pages, start=1):
            assert f"Page {number} of {len(pages)}" in text
            assert "Generated by FireSafe Tech" in text
            assert "Report_Long_Checklist_Plant_3_2024-05-02.pdf" in text

    def test_language_from_generator(self, options):
        report = PdfGenerator(language="en").render(options)
        assert "SIGNATURES" in pdf_text(report.content)

    def test_audit_record_per_render(self, options, mocker):
        audit = mocker.patch("firesafe.services.pdf_generator.log_pdf_generation")
        PdfGenerator().render(options)
        audit.assert_called_once_with("rep-42", "user-7")

    def test_invalid_options(self):
        with pytest.raises(ValidationError):
            PdfGenerator().render({"formData": {}})


class TestLegacyPath:
    def test_non_conformity_summary(self):
        report = PdfGenerator().render(
            {
                "formTitle": "Checklist Livre",
                "formData": {
                    "frequency": "mensal",
                    "weekly_test_connection": "nao",
                    "monthly_gauges_condition": "Não",
                    "annual_main_drain_test": "sim",
                },
            }
        )
        text = pdf_text(report.content)
        assert "FORMUL" in text
        assert "2 item(s)" in text

    def test_structured_info_prints_every_row(self):
        report = PdfGenerator().render(
            {
                "formTitle": "Checklist Livre",
                "generalInformation": {"empresa": "Acme Ltda", "nome_propriedade": "Galpão 2"},
                "formData": {"weekly_test_connection": "sim"},
            }
        )
        text = pdf_text(report.content)
        assert "Acme Ltda" in text
        assert "Licença do Inspetor" in text
        assert "Velocidade do" in text
        assert report.filename.startswith("Report_Checklist_Livre_Galpao_2_")

    def test_company_block(self):
        report = PdfGenerator().render(
            {
                "formTitle": "Checklist Livre",
                "pdfCompany": {
                    "name": "Acme Ltda",
                    "cnpj": "12.345.678/0001-90",
                    "address": {"logradouro": "Rua A", "numero": "10", "municipio": "Campinas", "estado": "SP"},
                },
                "generalInfo": {"contractNumber": "CT-{{empresa.cnpj}}"},
                "formData": {},
            }
        )
        text = pdf_text(report.content)
        assert "12.345.678/0001-90" in text
        assert "Rua A, 10, Campinas/SP" in text
        assert "CT-12.345.678/0001-90" in text


class TestOutputs:
    def test_generate_pdf_writes_file(self, options, tmp_path):
        path = generate_inspection_pdf(options, tmp_path / "out")
        assert path.parent == tmp_path / "out"
        assert path.name == "Report_Inspecao_Semanal_de_Bomba_Torre_A_2024-01-15.pdf"
        assert path.read_bytes().startswith(b"%PDF")

    def test_generator_output_dir(self, options, tmp_path):
        path = PdfGenerator(output_dir=tmp_path).generate_pdf(options)
        assert path.parent == tmp_path

    def test_base64(self, options):
        encoded = generate_inspection_pdf_base64(options)
        assert base64.b64decode(encoded).startswith(b"%PDF")

    def test_async(self, options):
        content = asyncio.run(generate_report_pdf(options))
        assert content.startswith(b"%PDF")
