"""Fixed report blocks: company, general information, pump, signatures."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from firesafe.config import settings
from firesafe.forms.models import (
    CompanyAddress,
    CompanyData,
    GeneralInfo,
    GeneralInformation,
    SignatureData,
)
from firesafe.utils.placeholders import fill_company_placeholders
from firesafe.utils.text import sanitize_text
from firesafe.utils.values import PLACEHOLDER, format_date, format_number, is_missing, stringify

from .layout import LINE_H, THRESHOLD_REPORT_SIGNATURES, THRESHOLD_SECTION, RenderContext
from .pdf_document import BLACK, MUTED, RED

SIGNATURE_IMAGE = (80.0, 25.0)

# (label, selectedPump key) in print order
_PUMP_ROWS = (
    ("Pump Manufacturer", "pumpManufacturer"),
    ("Pump Model", "pumpModel"),
    ("Pump Serial #", "pumpSerial"),
    ("Rated RPM", "ratedRpm"),
    ("Controller Mfr", "controllerMfr"),
    ("Controller Model", "controllerModel"),
    ("Controller S/N", "controllerSn"),
    ("Max Suction Pressure (psi)", "maxSuctionPressurePsi"),
    ("Max psi (shutoff) (psi)", "maxPsiShutoff"),
    ("Rated Capacity (gpm)", "ratedCapacityGpm"),
    ("Rated Pressure (psi)", "ratedPressurePsi"),
    ("150% Rated Capacity (gpm)", "cap150Gpm"),
    ("Rated Pressure @Rated Capacity (psi)", "ratedPressureAtRatedCapacityPsi"),
    ("Driver Mfr", "driverMfr"),
    ("Driver Model", "driverModel"),
    ("Notes", "notes"),
)


def resolve_company(company: Optional[CompanyData], fallback_name: Optional[str] = None) -> CompanyData:
    """Company used for the header and placeholders; never None."""
    name = fallback_name or settings.DEFAULT_COMPANY_NAME
    if company is None:
        return CompanyData(name=name, address=CompanyAddress(pais=settings.DEFAULT_COUNTRY))
    update = {}
    if not company.name:
        update["name"] = name
    if not company.address.pais:
        update["address"] = company.address.model_copy(update={"pais": settings.DEFAULT_COUNTRY})
    return company.model_copy(update=update) if update else company


def summary_line(info: GeneralInformation, company: CompanyData, language: str = "pt") -> str:
    """"Empresa – Propriedade | Tipo | Data" shown under the header title."""
    empresa = sanitize_text(info.empresa, 30)
    if empresa == PLACEHOLDER:
        empresa = company.name or PLACEHOLDER
    propriedade = sanitize_text(info.nome_propriedade, 40)
    tipo = sanitize_text(info.tipo_inspecao, 20)
    data = format_date(info.data_inspecao, language)
    return f"{empresa} – {propriedade} | {tipo} | {data}"


def block_title(ctx: RenderContext, text: str, threshold: float = THRESHOLD_SECTION) -> None:
    ctx.ensure_space(threshold)
    ctx.advance(4)
    ctx.text_lines(text, size=12, style="B", color=RED, line_h=6)
    ctx.advance(3)


# ── General information ───────────────────────────────────────────────────────


def _address_text(address: CompanyAddress, zip_label: str = "CEP") -> str:
    text = ""
    if address.logradouro:
        text += address.logradouro
        if address.numero:
            text += ", " + address.numero
    if address.bairro:
        text += " - " + address.bairro
    if address.municipio:
        text += ", " + address.municipio
    if address.estado:
        text += "/" + address.estado
    if address.cep:
        text += f" - {zip_label}: {address.cep}"
    return text.strip(" ,-")


def render_company_block(ctx: RenderContext, company: CompanyData) -> bool:
    """Responsible company details; skipped for the default client placeholder."""
    if not company.name or company.name == settings.DEFAULT_COMPANY_NAME:
        return False

    ctx.text_lines(ctx.label("company_block"), size=10, style="B")
    with ctx.indented(5):
        ctx.text_lines(f"{ctx.label('company_name')}: {company.name}", size=10)
        for key, value in (
            ("company_cnpj", company.cnpj),
            ("company_ie", company.ie),
            ("company_email", company.email),
            ("company_phone", company.phone),
            ("company_website", company.website),
        ):
            if value:
                ctx.text_lines(f"{ctx.label(key)}: {value}", size=10)
        if company.address.logradouro or company.address.municipio:
            ctx.text_lines(f"{ctx.label('company_address')}: {_address_text(company.address, ctx.label('zip_code'))}", size=10)
        contact = company.contato
        if contact.nome or contact.email or contact.telefone:
            ctx.text_lines(ctx.label("company_contact"), size=10)
            with ctx.indented(4):
                for key, value in (
                    ("company_name", contact.nome),
                    ("company_email", contact.email),
                    ("company_phone", contact.telefone),
                ):
                    if value:
                        ctx.text_lines(f"{ctx.label(key)}: {value}", size=10)
    ctx.advance(3)
    return True


def render_general_info(ctx: RenderContext, info: GeneralInfo, company: CompanyData) -> None:
    """Company block plus the flat property/inspector record."""
    block_title(ctx, ctx.label("general_info"))
    render_company_block(ctx, company)

    def _line(key: str, value: Optional[str]) -> None:
        if value:
            ctx.text_lines(f"{ctx.label(key)}: {fill_company_placeholders(value, company)}", size=10)

    _line("property", info.property_name)
    _line("address", info.property_address)
    _line("phone", info.property_phone)
    ctx.advance(3)
    _line("inspector", info.inspector)
    if info.date:
        ctx.text_lines(f"{ctx.label('inspection_date')}: {format_date(info.date, ctx.language)}", size=10)
    _line("contract_number", info.contract_number)
    ctx.advance(4)


def render_structured_info(ctx: RenderContext, info: GeneralInformation) -> None:
    """Every structured field is printed; absent values show "-"."""
    lang = ctx.language
    block_title(ctx, ctx.label("structured_info"))
    rows = (
        ("gi_company", sanitize_text(info.empresa)),
        ("gi_property_name", sanitize_text(info.nome_propriedade)),
        ("gi_property_id", sanitize_text(info.id_propriedade)),
        ("gi_address", sanitize_text(info.endereco, 80)),
        ("gi_building_type", sanitize_text(info.tipo_edificacao)),
        ("gi_floor_area", format_number(info.area_total_piso_ft2, "ft²", lang)),
        ("gi_inspection_date", format_date(info.data_inspecao, lang)),
        ("gi_inspection_type", sanitize_text(info.tipo_inspecao)),
        ("gi_next_inspection", format_date(info.proxima_inspecao_programada, lang)),
        ("gi_inspector_name", sanitize_text(info.nome_inspetor)),
        ("gi_inspector_license", sanitize_text(info.licenca_inspetor)),
        ("gi_notes", sanitize_text(info.observacoes_adicionais, 1000)),
    )
    for key, value in rows:
        ctx.key_value(f"{ctx.label(key)}:", value, size=10)

    ctx.advance(3)
    ctx.text_lines(ctx.label("environment"), size=10, style="B", color=RED)
    with ctx.indented(5):
        for key, value in (
            ("gi_temperature", format_number(info.temperatura_f, "°F", lang)),
            ("gi_weather", sanitize_text(info.condicoes_climaticas)),
            ("gi_wind", format_number(info.velocidade_vento_mph, "mph", lang)),
        ):
            ctx.key_value(f"{ctx.label(key)}:", value, size=10)
    ctx.advance(4)


def render_pump_info(ctx: RenderContext, pump: Any) -> bool:
    """``formData.selectedPump`` details; only filled values are printed."""
    if not isinstance(pump, Mapping):
        return False
    rows = [(label, pump.get(key)) for label, key in _PUMP_ROWS if not is_missing(pump.get(key))]
    if not rows:
        return False
    block_title(ctx, ctx.label("pump_info"))
    for label, value in rows:
        ctx.key_value(f"{label}:", stringify(value), size=10)
    ctx.advance(4)
    return True


# ── Signatures ────────────────────────────────────────────────────────────────


def _signature_column(
    ctx: RenderContext, x: float, top: float, title: str, name: str, day: Optional[str], image: Optional[str]
) -> None:
    pdf = ctx.pdf
    img_w, img_h = SIGNATURE_IMAGE
    pdf.use_font(10, "B", BLACK)
    pdf.set_xy(x, top)
    pdf.cell(img_w + 5, LINE_H, title)

    if image and not pdf.embed_image(image, x, top + 7, img_w, img_h):
        pdf.use_font(8, "I", MUTED)
        pdf.set_xy(x, top + 7 + img_h / 2)
        pdf.cell(img_w, LINE_H, ctx.label("photo_failed"), align="C")

    line_y = top + 7 + img_h + 3
    pdf.set_draw_color(*BLACK)
    pdf.set_line_width(0.3)
    pdf.line(x, line_y, x + img_w, line_y)

    pdf.use_font(9, "", BLACK)
    pdf.set_xy(x, line_y + 2)
    pdf.cell(img_w, LINE_H, pdf.fit_text(name or PLACEHOLDER, img_w))
    pdf.set_xy(x, line_y + 2 + LINE_H + 1)
    pdf.cell(img_w, LINE_H, f"{ctx.label('date_label')}: {format_date(day, ctx.language)}")


def render_signatures(ctx: RenderContext, signatures: SignatureData) -> None:
    """Inspector (left) and property representative (right) side by side."""
    block_title(ctx, ctx.label("signatures"), THRESHOLD_REPORT_SIGNATURES)
    top = ctx.y
    _signature_column(
        ctx,
        ctx.left,
        top,
        ctx.label("inspector_signature"),
        signatures.inspector_name,
        signatures.inspector_date,
        signatures.inspector_signature,
    )
    _signature_column(
        ctx,
        ctx.pdf.w / 2 + 10,
        top,
        ctx.label("client_signature"),
        signatures.client_name,
        signatures.client_date,
        signatures.client_signature,
    )
    ctx.adopt(top + 7 + SIGNATURE_IMAGE[1] + 3 + 2 + LINE_H * 2 + 8)
    ctx.text_lines(ctx.label("validation_statement"), size=8, style="I", color=MUTED, align="C")
    ctx.advance(6)
