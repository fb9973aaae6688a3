"""Report strings per language.

Keys are shared; every language table must define all of them.
"""

from typing import Dict, Optional

from firesafe.config import settings

_PT: Dict[str, str] = {
    # tri-state answers
    "yes": "Sim",
    "no": "Não",
    "na": "N/A",
    # empty renderings
    "not_filled": "(não preenchido)",
    "no_photo": "(nenhuma foto anexada)",
    "photo_failed": "(imagem não pôde ser carregada)",
    "signature_placeholder": "(Assinatura)",
    "signed_digitally": "Assinado digitalmente",
    "item": "Item",
    # header / footer
    "generated_by": "Gerado por {brand}",
    "page_of": "Página {page} de {total}",
    "property_fallback": "Propriedade",
    # general information
    "general_info": "INFORMAÇÕES GERAIS",
    "company_block": "EMPRESA RESPONSÁVEL:",
    "company_name": "Nome",
    "company_cnpj": "CNPJ",
    "company_ie": "IE",
    "company_email": "E-mail",
    "company_phone": "Telefone",
    "company_website": "Website",
    "company_address": "Endereço",
    "company_contact": "Contato:",
    "zip_code": "CEP",
    "property": "Propriedade",
    "address": "Endereço",
    "phone": "Telefone",
    "inspector": "Inspetor",
    "inspection_date": "Data da Inspeção",
    "contract_number": "Nº do Contrato",
    "structured_info": "GENERAL INFORMATION / INFORMAÇÕES DA PROPRIEDADE",
    "gi_company": "Empresa",
    "gi_property_name": "Nome da Propriedade",
    "gi_property_id": "ID da Propriedade",
    "gi_address": "Endereço",
    "gi_building_type": "Tipo de Edificação",
    "gi_floor_area": "Área Total do Piso (ft²)",
    "gi_inspection_date": "Data da Inspeção",
    "gi_inspection_type": "Tipo de Inspeção",
    "gi_next_inspection": "Próxima Inspeção",
    "gi_inspector_name": "Nome do Inspetor",
    "gi_inspector_license": "Licença do Inspetor",
    "gi_notes": "Observações Adicionais",
    "environment": "CONDIÇÕES AMBIENTAIS",
    "gi_temperature": "Temperatura (°F)",
    "gi_weather": "Condições Climáticas",
    "gi_wind": "Velocidade do Vento (mph)",
    # body
    "inspection_form": "FORMULÁRIO DE INSPEÇÃO",
    "pump_info": "Informações da Bomba e do Motor",
    "non_conformities": "RESUMO DE NÃO CONFORMIDADES",
    "non_conformity_warning": "ATENÇÃO: {count} item(s) requer(em) ação imediata:",
    # signatures
    "signatures": "ASSINATURAS",
    "inspector_signature": "INSPETOR RESPONSÁVEL:",
    "client_signature": "REPRESENTANTE DA PROPRIEDADE:",
    "date_label": "Data",
    "validation_statement": (
        "Este documento foi validado digitalmente e possui valor legal "
        "conforme a legislação vigente."
    ),
}

_EN: Dict[str, str] = {
    "yes": "Yes",
    "no": "No",
    "na": "N/A",
    "not_filled": "(not filled)",
    "no_photo": "(no photo attached)",
    "photo_failed": "(image could not be loaded)",
    "signature_placeholder": "(Signature)",
    "signed_digitally": "Signed digitally",
    "item": "Item",
    "generated_by": "Generated by {brand}",
    "page_of": "Page {page} of {total}",
    "property_fallback": "Property",
    "general_info": "GENERAL INFORMATION",
    "company_block": "RESPONSIBLE COMPANY:",
    "company_name": "Name",
    "company_cnpj": "Tax ID",
    "company_ie": "State reg.",
    "company_email": "E-mail",
    "company_phone": "Phone",
    "company_website": "Website",
    "company_address": "Address",
    "company_contact": "Contact:",
    "zip_code": "ZIP",
    "property": "Property",
    "address": "Address",
    "phone": "Phone",
    "inspector": "Inspector",
    "inspection_date": "Inspection date",
    "contract_number": "Contract no.",
    "structured_info": "GENERAL INFORMATION / PROPERTY DETAILS",
    "gi_company": "Company",
    "gi_property_name": "Property name",
    "gi_property_id": "Property ID",
    "gi_address": "Address",
    "gi_building_type": "Building type",
    "gi_floor_area": "Total floor area (ft²)",
    "gi_inspection_date": "Inspection date",
    "gi_inspection_type": "Inspection type",
    "gi_next_inspection": "Next inspection",
    "gi_inspector_name": "Inspector name",
    "gi_inspector_license": "Inspector license",
    "gi_notes": "Additional notes",
    "environment": "ENVIRONMENTAL CONDITIONS",
    "gi_temperature": "Temperature (°F)",
    "gi_weather": "Weather conditions",
    "gi_wind": "Wind speed (mph)",
    "inspection_form": "INSPECTION FORM",
    "pump_info": "Pump and Driver Information",
    "non_conformities": "NON-CONFORMITY SUMMARY",
    "non_conformity_warning": "ATTENTION: {count} item(s) require immediate action:",
    "signatures": "SIGNATURES",
    "inspector_signature": "RESPONSIBLE INSPECTOR:",
    "client_signature": "PROPERTY REPRESENTATIVE:",
    "date_label": "Date",
    "validation_statement": (
        "This document was digitally validated and is legally binding "
        "under current legislation."
    ),
}

LANGUAGES: Dict[str, Dict[str, str]] = {"pt": _PT, "en": _EN}


def get_labels(language: Optional[str] = None) -> Dict[str, str]:
    """Label table for ``language`` (settings default when None/unknown)."""
    if language:
        table = LANGUAGES.get(language.strip().lower())
        if table is not None:
            return table
    return LANGUAGES[settings.language]


def language_code(language: Optional[str] = None) -> str:
    if language and language.strip().lower() in LANGUAGES:
        return language.strip().lower()
    return settings.language
