"""Built-in NFPA 25 form schemas (same JSON shape the web client uses)."""

from typing import Any, Dict, List

from .models import FormSchema

_TRI_STATE = [
    {"value": "sim", "label": "Sim"},
    {"value": "nao", "label": "Não"},
    {"value": "na", "label": "N/A"},
]


def _radio(field_id: str, label: str, **extra: Any) -> Dict[str, Any]:
    return {"id": field_id, "type": "radio", "label": label, "options": _TRI_STATE, **extra}


def _psi(field_id: str, label: str) -> Dict[str, Any]:
    return _radio(field_id, label, includeField=True, fieldLabel="Valor (psi)", fieldType="number")


def _input(field_id: str, label: str, input_type: str = "text", **extra: Any) -> Dict[str, Any]:
    return {"id": field_id, "type": "input", "label": label, "inputType": input_type, **extra}


_PROPERTY_FIELDS: List[Dict[str, Any]] = [
    _input("propertyName", "Nome da Propriedade", required=True, placeholder="Ex: Centro Empresarial ABC"),
    _input("propertyAddress", "Endereço da Propriedade", required=True, placeholder="Endereço completo"),
    _input("propertyPhone", "Telefone", "tel", placeholder="(11) 99999-9999"),
    _input("inspector", "Inspetor", required=True, placeholder="Nome completo e credenciais"),
    _input("contractNumber", "Número do Contrato", placeholder="Número do contrato"),
    _input("date", "Data da Inspeção", "date", required=True),
]

_FREQUENCY_FIELD = {
    "id": "frequency",
    "type": "select",
    "label": "Frequência da Inspeção",
    "required": True,
    "options": [
        {"value": "diaria", "label": "Diária"},
        {"value": "semanal", "label": "Semanal"},
        {"value": "mensal", "label": "Mensal"},
        {"value": "trimestral", "label": "Trimestral"},
        {"value": "anual", "label": "Anual"},
        {"value": "5anos", "label": "5 Anos"},
        {"value": "testes", "label": "Testes"},
    ],
}


# ── Wet pipe sprinklers ───────────────────────────────────────────────────────

WET_SPRINKLER = {
    "id": "wet-sprinkler",
    "title": "Sistema de Sprinklers de Tubo Molhado (Wet Pipe)",
    "description": "Inspeção, Teste e Manutenção conforme NFPA 25 - Versão Integral",
    "version": "1.0.0",
    "frequencies": ["Diária", "Semanal", "Mensal", "Trimestral", "Anual", "5 Anos", "Testes"],
    "estimatedTime": "15-20 min",
    "sections": [
        {
            "id": "general",
            "title": "Informações Gerais",
            "icon": "📋",
            "fields": _PROPERTY_FIELDS + [_FREQUENCY_FIELD],
        },
        {
            "id": "daily",
            "title": "Inspeções Diárias",
            "icon": "📅",
            "description": "Verificações diárias de alarmes e monitoramento",
            "requiredFrequencies": ["diaria"],
            "conditionalDisplay": True,
            "fields": [
                _radio("daily_alarm_receipt", "Alarmes sendo recebidos adequadamente na estação de supervisão?"),
                _radio("daily_water_flow_alarms", "Alarmes de fluxo de água sendo recebidos na estação de supervisão?"),
                _radio("daily_supervisory_alarms", "Sinais de supervisão sendo recebidos na estação de supervisão?"),
            ],
        },
        {
            "id": "weekly",
            "title": "Inspeções Semanais",
            "icon": "📊",
            "description": "Verificações semanais de válvulas de controle e dispositivos de fluxo reverso",
            "requiredFrequencies": ["semanal"],
            "conditionalDisplay": True,
            "fields": [
                {"id": "weekly_section_header_backflow", "type": "section-header", "label": "Fluxo de Retorno (Backflow)"},
                _radio(
                    "weekly_isolation_valves",
                    "Válvulas de isolamento estão em posição aberta e travadas ou supervisionadas?",
                ),
                _radio(
                    "weekly_rpa_rpda",
                    "RPA e RPDA – válvula de alívio de detecção diferencial operando corretamente?",
                ),
                {
                    "id": "weekly_section_header_pressure_regulator",
                    "type": "section-header",
                    "label": "Dispositivo Regulador de Pressão Mestre",
                },
                _psi(
                    "weekly_downstream_pressures",
                    "As pressões a jusante (downstream) estão de acordo com os critérios de projeto?",
                ),
                _psi("weekly_supply_pressure", "A pressão de abastecimento está de acordo com os critérios de projeto?"),
            ],
        },
        {
            "id": "monthly",
            "title": "Inspeções Mensais",
            "icon": "📈",
            "description": "Inspeções mensais de válvulas e componentes do sistema",
            "requiredFrequencies": ["mensal"],
            "conditionalDisplay": True,
            "fields": [
                {"id": "monthly_section_header_water_supply", "type": "section-header", "label": "Abastecimento de Água"},
                _radio("monthly_control_valves_open", "Válvulas de controle abertas e em condições de serviço?"),
                _radio(
                    "monthly_valve_room_conditions",
                    "Casa de válvulas aquecida adequadamente (mín. 40°F/4°C)?",
                    includeField=True,
                    fieldLabel="Temperatura (°F)",
                    fieldType="number",
                ),
            ],
        },
        {
            "id": "signatures",
            "title": "Assinaturas",
            "icon": "✍️",
            "fields": [
                {"id": "inspectorSignature", "type": "signature", "label": "Assinatura do Inspetor", "required": True},
                {"id": "clientSignature", "type": "signature", "label": "Assinatura do Cliente", "required": True},
            ],
        },
    ],
}


# ── Foam-water sprinklers ─────────────────────────────────────────────────────

FOAM_WATER = {
    "id": "foam-water",
    "title": "Sistema de Sprinklers de Espuma-Água",
    "description": "Sistemas que combinam água com agente formador de espuma para proteção especial",
    "version": "1.0.0",
    "estimatedTime": "20-25 min",
    "sections": [
        {
            "id": "general",
            "title": "Informações Gerais",
            "icon": "📋",
            "fields": [
                _input("facilityName", "Nome da Instalação", required=True, placeholder="Nome da instalação"),
                _input(
                    "systemLocation",
                    "Localização do Sistema",
                    required=True,
                    placeholder="Ex: Hangar de Aeronaves, Área de Combustíveis",
                ),
                _input("inspectionDate", "Data da Inspeção", "date", required=True),
                _input("inspectorName", "Nome do Inspetor", required=True, placeholder="Nome completo e credenciais"),
            ],
        },
        {
            "id": "foam-system",
            "title": "Sistema de Concentrado de Espuma",
            "icon": "🧪",
            "fields": [
                {
                    "id": "foamConcentrateType",
                    "type": "select",
                    "label": "Tipo de Concentrado de Espuma",
                    "options": [
                        {"value": "afff", "label": "AFFF (Aqueous Film Forming Foam)"},
                        {"value": "ar-afff", "label": "AR-AFFF (Alcohol Resistant)"},
                        {"value": "protein", "label": "Protein Foam"},
                        {"value": "fluoroprotein", "label": "Fluoroprotein Foam"},
                        {"value": "high-expansion", "label": "High Expansion Foam"},
                    ],
                },
                _input(
                    "foamConcentrateLevel",
                    "Nível do Concentrado",
                    "number",
                    unit="%",
                    placeholder="Ex: 85",
                    help="Nível no tanque de armazenamento",
                ),
                {
                    "id": "foamConcentrateCondition",
                    "type": "select",
                    "label": "Condição do Concentrado",
                    "options": [
                        {"value": "excellent", "label": "Excelente"},
                        {"value": "good", "label": "Boa"},
                        {"value": "fair", "label": "Regular"},
                        {"value": "poor", "label": "Ruim"},
                        {"value": "expired", "label": "Vencido"},
                    ],
                },
            ],
        },
        {
            "id": "deficiencies",
            "title": "Deficiências e Ações Corretivas",
            "icon": "⚠️",
            "fields": [
                {"id": "deficienciesFound", "type": "textarea", "label": "Deficiências Encontradas", "rows": 4},
                {"id": "correctiveActions", "type": "textarea", "label": "Ações Corretivas Necessárias", "rows": 4},
            ],
        },
        {
            "id": "status",
            "title": "Status e Conclusões",
            "icon": "✅",
            "fields": [
                {"id": "systemOperational", "type": "checkbox", "label": "Sistema Operacional"},
                {"id": "inspectionPassed", "type": "checkbox", "label": "Inspeção Aprovada"},
                {"id": "additionalNotes", "type": "textarea", "label": "Observações Adicionais", "rows": 3},
            ],
        },
    ],
}


# ── Fire pumps ────────────────────────────────────────────────────────────────

WEEKLY_PUMP = {
    "id": "weekly-pump",
    "title": "Inspeção Semanal de Bomba",
    "description": "Inspeção semanal de sistemas de bomba conforme NFPA 25",
    "version": "1.0.0",
    "estimatedTime": "10-15 min",
    "sections": [
        {
            "id": "general",
            "title": "Informações Gerais",
            "icon": "📋",
            "fields": [
                _input("propertyName", "Nome da Propriedade", required=True),
                _input("propertyAddress", "Endereço da Propriedade", required=True),
                _input("inspector", "Inspetor", required=True),
                _input("date", "Data da Inspeção", "date", required=True),
            ],
        },
        {
            "id": "pumphouse",
            "title": "Casa de Bombas",
            "icon": "🏠",
            "fields": [
                _radio(
                    "pumphouse_temperature",
                    "Casa de bomba adequadamente aquecida (mín. 40°F/4°C)?",
                    includeField=True,
                    fieldLabel="Temperatura (°F)",
                    fieldType="number",
                ),
                _radio("pumphouse_ventilation", "Ventilação adequada presente?"),
            ],
        },
        {
            "id": "pumpsystems",
            "title": "Sistemas de Bomba",
            "icon": "⚙️",
            "fields": [
                _radio("pump_condition", "Bomba livre de danos físicos ou vazamentos incomuns?"),
                _psi("suction_pressure", "Pressão de sucção normal?"),
            ],
        },
    ],
}

ANNUAL_PUMP = {
    "id": "annual-pump",
    "title": "Teste Anual de Bomba de Incêndio",
    "description": "Teste anual de desempenho da bomba conforme NFPA 25",
    "version": "1.0.0",
    "frequencies": ["Anual"],
    "estimatedTime": "45-60 min",
    "sections": [
        {
            "id": "general",
            "title": "Informações Gerais",
            "icon": "📋",
            "fields": _PROPERTY_FIELDS,
        },
        {
            "id": "pumps",
            "title": "Bombas Testadas",
            "icon": "⚙️",
            "fields": [
                {
                    "id": "pumps",
                    "type": "repeater",
                    "label": "Bomba",
                    "fields": [
                        _input("pumpManufacturer", "Fabricante"),
                        _input("pumpModel", "Modelo"),
                        _input("pumpSerial", "Nº de Série"),
                        _input("ratedRpm", "Rotação Nominal", "number", unit="rpm"),
                        _input("ratedCapacityGpm", "Capacidade Nominal", "number", unit="gpm"),
                        _input("ratedPressurePsi", "Pressão Nominal", "number", unit="psi"),
                        {
                            "id": "driverType",
                            "type": "select",
                            "label": "Acionador",
                            "options": [
                                {"value": "electric", "label": "Motor Elétrico"},
                                {"value": "diesel", "label": "Motor Diesel"},
                                {"value": "steam", "label": "Turbina a Vapor"},
                            ],
                        },
                    ],
                },
            ],
        },
        {
            "id": "flow-test",
            "title": "Teste de Fluxo",
            "icon": "📈",
            "description": "Leituras em vazio, 100% e 150% da capacidade nominal",
            "fields": [
                {
                    "id": "flowTests",
                    "type": "table",
                    "label": "Leituras do Teste",
                    "columns": [
                        {"id": "testDate", "label": "Data", "type": "date", "width": 24},
                        {"id": "flowPercent", "label": "Fluxo", "type": "number", "unit": "%"},
                        {"id": "flowGpm", "label": "Vazão", "type": "number", "unit": "gpm"},
                        {"id": "suctionPsi", "label": "Sucção", "type": "number", "unit": "psi"},
                        {"id": "dischargePsi", "label": "Descarga", "type": "number", "unit": "psi"},
                        {"id": "rpm", "label": "Rotação", "type": "number"},
                        {"id": "acceptable", "label": "Aceitável", "type": "checkbox", "align": "center"},
                    ],
                },
                _radio("annual_curve_acceptable", "Desempenho dentro de 95% da curva de fábrica?"),
                _psi("annual_churn_pressure", "Pressão em vazio (churn) dentro do esperado?"),
            ],
            "subsections": [
                {
                    "title": "Controlador",
                    "fields": [
                        _radio("annual_controller_alarms", "Alarmes do controlador testados e operando?"),
                        _radio("annual_transfer_switch", "Chave de transferência automática testada?"),
                    ],
                },
            ],
        },
        {
            "id": "remarks",
            "title": "Observações",
            "icon": "📝",
            "fields": [
                {"id": "deficiencies", "type": "textarea", "label": "Deficiências Encontradas", "maxLength": 1000},
                {"id": "pumpPhotos", "type": "photo", "label": "Fotos da Bomba"},
                {"id": "inspectorSignature", "type": "signature", "label": "Assinatura do Inspetor", "required": True},
            ],
        },
    ],
}


# ── Hydrants ──────────────────────────────────────────────────────────────────

HYDRANT_FLOW_TEST = {
    "id": "hydrant-flow-test",
    "title": "Teste de Fluxo de Hidrante",
    "description": "Teste de fluxo e pressão residual conforme NFPA 291",
    "version": "1.0.0",
    "estimatedTime": "30-40 min",
    "sections": [
        {
            "id": "general",
            "title": "Informações Gerais",
            "icon": "📋",
            "fields": [
                _input("propertyName", "Nome da Propriedade", required=True),
                _input("testedBy", "Testado por", required=True),
                _input("address", "Endereço"),
                _input("date", "Data do Teste", "date", required=True),
                _input("contractNumber", "Número do Contrato"),
                _input("time", "Horário"),
                _input("weatherConditions", "Condições Climáticas"),
                _input("testLocation", "Local do Teste"),
            ],
        },
        {
            "id": "hydrants",
            "title": "Hidrantes",
            "icon": "🚒",
            "subsections": [
                {
                    "id": "residual",
                    "title": "Hidrante Residual",
                    "fields": [
                        _input("residualHydrantLocation", "Localização", dataKey="residual.location"),
                        _input("residualHydrantElevation", "Elevação", "number", unit="ft", dataKey="residual.elevation"),
                        _input("staticPressure", "Pressão Estática", "number", unit="psi", dataKey="residual.staticPressure"),
                        _input(
                            "residualPressure", "Pressão Residual", "number", unit="psi", dataKey="residual.residualPressure"
                        ),
                    ],
                },
                {
                    "id": "flow",
                    "title": "Hidrante de Fluxo",
                    "description": "Leituras de pitot em cada saída aberta",
                    "fields": [
                        _input("flowHydrantLocation", "Localização", dataKey="flow.location"),
                        _input("flowHydrantElevation", "Elevação", "number", unit="ft", dataKey="flow.elevation"),
                        {
                            "id": "outlets",
                            "type": "table",
                            "label": "Saídas",
                            "dataKey": "flow.outlets",
                            "columns": [
                                {"id": "nozzleSize", "label": "Bocal", "type": "number", "unit": "pol"},
                                {"id": "nozzleCoefficient", "label": "Coeficiente", "type": "number"},
                                {"id": "pitotPressure", "label": "Pitot", "type": "number", "unit": "psi"},
                                {"id": "flowGpm", "label": "Vazão", "type": "number", "unit": "gpm"},
                            ],
                        },
                    ],
                },
            ],
        },
        {
            "id": "results",
            "title": "Resultados",
            "icon": "📊",
            "fields": [
                _input("projectedResults", "Vazão Projetada a 20 psi", "number", unit="gpm"),
                {"id": "observations", "type": "textarea", "label": "Observações"},
                {"id": "locationMap", "type": "photo", "label": "Mapa de Localização"},
                {"id": "hydraulicChart", "type": "photo", "label": "Gráfico Hidráulico"},
                {"id": "testerSignature", "type": "signature", "label": "Assinatura do Responsável"},
            ],
        },
    ],
}


BUILTIN_SCHEMAS: List[FormSchema] = [
    FormSchema.model_validate(raw)
    for raw in (WET_SPRINKLER, FOAM_WATER, WEEKLY_PUMP, ANNUAL_PUMP, HYDRANT_FLOW_TEST)
]
