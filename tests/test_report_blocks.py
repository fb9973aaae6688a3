from firesafe.forms.models import CompanyData, GeneralInformation, SignatureData
from firesafe.services.report_blocks import (
    render_company_block,
    render_pump_info,
    render_signatures,
    resolve_company,
    summary_line,
)

from .conftest import PNG_DATA_URI, ctx_text


class TestResolveCompany:
    def test_defaults(self):
        company = resolve_company(None)
        assert company.name == "Empresa Cliente"
        assert company.address.pais == "Brasil"

    def test_fallback_name(self):
        assert resolve_company(None, "Condomínio Sol").name == "Condomínio Sol"
        assert resolve_company(CompanyData(cnpj="1"), "Condomínio Sol").name == "Condomínio Sol"

    def test_supplied_company_kept(self):
        company = CompanyData.model_validate({"name": "Acme", "address": {"pais": "Portugal"}})
        assert resolve_company(company, "Other") is company


def test_summary_line_falls_back_to_company():
    info = GeneralInformation(nome_propriedade="Torre B", tipo_inspecao="Anual", data_inspecao="2024-01-15")
    assert summary_line(info, CompanyData(name="Acme")) == "Acme – Torre B | Anual | 15/01/2024"
    assert summary_line(info, CompanyData(name="Acme"), "en").endswith("| 01/15/2024")


def test_company_block_skipped_for_default(ctx):
    assert render_company_block(ctx, resolve_company(None)) is False
    assert render_company_block(ctx, CompanyData(name="Acme", email="a@acme.com")) is True
    assert "a@acme.com" in ctx_text(ctx)


class TestPumpInfo:
    def test_only_filled_rows(self, ctx):
        pump = {"pumpManufacturer": "Aurora", "ratedRpm": 1750, "pumpModel": "", "notes": None}
        assert render_pump_info(ctx, pump) is True
        text = ctx_text(ctx)
        assert "Pump Manufacturer:" in text
        assert "1750" in text
        assert "Pump Model" not in text

    def test_absent_or_empty(self, ctx):
        y0 = ctx.y
        assert render_pump_info(ctx, None) is False
        assert render_pump_info(ctx, {"pumpModel": ""}) is False
        assert ctx.y == y0


def test_signatures_block(ctx, mocker):
    image = mocker.spy(ctx.pdf, "image")
    ctx.y = 200
    render_signatures(
        ctx,
        SignatureData(inspector_name="João", inspector_signature=PNG_DATA_URI, client_name="Maria", client_date="2024-02-03"),
    )
    assert ctx.page == 2
    assert image.call_count == 1
    text = ctx_text(ctx)
    assert "ASSINATURAS" in text
    assert "Maria" in text
    assert "03/02/2024" in text


def test_company_address_zip_label(make_ctx):
    company = CompanyData.model_validate(
        {"name": "Acme", "address": {"logradouro": "Main St", "municipio": "Austin", "cep": "73301"}}
    )
    ctx = make_ctx("en")
    render_company_block(ctx, company)
    assert "Main St, Austin - ZIP: 73301" in ctx_text(ctx)
