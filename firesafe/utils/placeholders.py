"""Company placeholders in free text.

Form values such as "Contrato {{empresa.nome}} / {{empresa.cnpj}}" are filled
from the report's company record. The recognized tokens are listed in
``COMPANY_TOKENS``; anything else inside ``{{empresa.…}}`` becomes "".
"""

import re
from typing import Any, Callable, Dict

_TOKEN_RE = re.compile(r"\{\{\s*empresa\.([a-zA-Z_.]+)\s*\}\}")

COMPANY_TOKENS: Dict[str, Callable[[Any], str]] = {
    "nome": lambda c: c.name,
    "cnpj": lambda c: c.cnpj,
    "ie": lambda c: c.ie,
    "email": lambda c: c.email,
    "telefone": lambda c: c.phone,
    "site": lambda c: c.website,
    "endereco.logradouro": lambda c: c.address.logradouro,
    "endereco.numero": lambda c: c.address.numero,
    "endereco.bairro": lambda c: c.address.bairro,
    "endereco.municipio": lambda c: c.address.municipio,
    "endereco.estado": lambda c: c.address.estado,
    "endereco.cep": lambda c: c.address.cep,
    "endereco.complemento": lambda c: c.address.complemento,
    "endereco.ibge": lambda c: c.address.ibge,
    "endereco.pais": lambda c: c.address.pais,
    "contato.nome": lambda c: c.contato.nome,
    "contato.email": lambda c: c.contato.email,
    "contato.telefone": lambda c: c.contato.telefone,
}


def fill_company_placeholders(text: Any, company: Any) -> Any:
    """Replace ``{{empresa.X}}`` tokens; non-strings pass through untouched."""
    if not isinstance(text, str) or company is None or "{{" not in text:
        return text

    def _sub(match: re.Match) -> str:
        getter = COMPANY_TOKENS.get(match.group(1))
        if getter is None:
            return ""
        return getter(company) or ""

    return _TOKEN_RE.sub(_sub, text)
