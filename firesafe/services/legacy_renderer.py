"""
Legacy layout for forms without a known schema.

Flat ``formData`` string answers become tri-state questions grouped by
inspection cadence; "não" answers are summarized at the end.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

from firesafe.forms.frequency import Frequency
from firesafe.utils.text import humanize_key
from firesafe.utils.values import normalize_answer

from .layout import THRESHOLD_FIELD, THRESHOLD_SECTION, THRESHOLD_SUBSECTION, THRESHOLD_SUMMARY, RenderContext
from .pdf_document import ALERT_BG, BLACK, RED, SHADE, SLATE

logger = logging.getLogger(__name__)

OTHER = "other"

# Keys carried by the general-info block, never questions
GENERAL_INFO_KEYS = frozenset(
    {
        "propertyName",
        "propertyAddress",
        "propertyPhone",
        "inspector",
        "date",
        "contractNumber",
        "frequency",
        "systemType",
        "pipeType",
        "jointType",
    }
)

# Ordered (substring, section) pairs; first match wins
SECTION_HINTS: Tuple[Tuple[str, str], ...] = (
    ("daily", Frequency.DAILY.value),
    ("weekly", Frequency.WEEKLY.value),
    ("monthly", Frequency.MONTHLY.value),
    ("quarterly", Frequency.QUARTERLY.value),
    ("annual", Frequency.ANNUAL.value),
    ("fiveyears", Frequency.FIVE_YEARS.value),
    ("5", Frequency.FIVE_YEARS.value),
    ("test", Frequency.TESTS.value),
)

SECTION_TITLES: Dict[str, str] = {
    Frequency.DAILY.value: "Inspeções Diárias",
    Frequency.WEEKLY.value: "Inspeções Semanais",
    Frequency.MONTHLY.value: "Inspeções Mensais",
    Frequency.QUARTERLY.value: "Inspeções Trimestrais",
    Frequency.SEMIANNUAL.value: "Inspeções Semestrais",
    Frequency.ANNUAL.value: "Inspeções Anuais",
    Frequency.FIVE_YEARS.value: "Inspeções 5 Anos",
    Frequency.TESTS.value: "Testes Especializados",
    "internal": "Inspeções Internas",
    OTHER: "Outros Itens",
}

# Recurring questions with their printed wording
KNOWN_QUESTIONS: Dict[str, Tuple[str, str]] = {
    "daily_valve_enclosure_temp": (
        Frequency.DAILY.value,
        "Válvula (Apenas Clima Frio/Estação de Aquecimento): O invólucro, não equipado com "
        "alarme de baixa temperatura, é inspecionado durante o tempo frio para verificar uma "
        "temperatura mínima de 4°C (40°F)?",
    ),
    "weekly_isolation_valves": (
        Frequency.WEEKLY.value,
        "Válvulas de isolamento estão em posição aberta e travadas ou supervisionadas?",
    ),
    "weekly_test_connection": (Frequency.WEEKLY.value, "Conexão de teste possui tampão ou cap?"),
    "weekly_strainer_differential": (
        Frequency.WEEKLY.value,
        "Pressão diferencial através do filtro não excede 5 psi?",
    ),
    "monthly_valve_supervision": (
        Frequency.MONTHLY.value,
        "Válvulas de controle principais estão abertas e supervisionadas/travadas?",
    ),
    "monthly_alarm_devices": (
        Frequency.MONTHLY.value,
        "Dispositivos de alarme de fluxo de água estão livres de obstáculos físicos?",
    ),
    "monthly_gauges_condition": (
        Frequency.MONTHLY.value,
        "Manômetros em boa condição e mostrando pressão adequada?",
    ),
    "monthly_hydraulic_nameplate": (Frequency.MONTHLY.value, "Placa hidráulica está segura e legível?"),
    "quarterly_sprinklers_condition": (
        Frequency.QUARTERLY.value,
        "Sprinklers estão em boa condição e livres de corrosão, cargas estranhas ou danos?",
    ),
    "quarterly_sprinklers_orientation": (
        Frequency.QUARTERLY.value,
        "Sprinklers estão instalados na orientação correta?",
    ),
    "quarterly_storage_clearance": (
        Frequency.QUARTERLY.value,
        "Distância livre mínima é mantida abaixo dos sprinklers?",
    ),
    "annual_main_drain_test": (Frequency.ANNUAL.value, "Teste do Dreno Principal (Anual)"),
    "annual_water_flow_alarm": (Frequency.ANNUAL.value, "Teste do Alarme de Fluxo de Água (Anual)"),
    "annual_inspector_test": (Frequency.ANNUAL.value, "Teste de Inspetor/Supervisor de Válvula (Anual)"),
    "fiveyears_sprinkler_sampling": (Frequency.FIVE_YEARS.value, "Amostragem de Sprinklers (5 Anos)"),
    "fiveyears_piping_obstruction": (
        Frequency.FIVE_YEARS.value,
        "Investigação de Obstrução em Tubulação (5 Anos)",
    ),
    "tests_flow_test": (Frequency.TESTS.value, "Teste de Fluxo de Sprinkler (Conforme necessário)"),
    "tests_hydrostatic": (Frequency.TESTS.value, "Teste Hidrostático (Conforme necessário)"),
}

_ANSWERS = ("sim", "nao", "na")
_ANSWER_LABELS = ("yes", "no", "na")
_MARKER_SPACING = 25.0
_MARKER_RADIUS = 3.0


@dataclass
class LegacyQuestion:
    id: str
    question: str
    answer: str
    section: str

    @property
    def is_non_conformity(self) -> bool:
        return normalize_answer(self.answer) == "nao"


@dataclass
class LegacySection:
    id: str
    title: str
    questions: List[LegacyQuestion] = field(default_factory=list)


def infer_section(key: str) -> str:
    """Section tag for a flat form key; ``"other"`` when nothing matches."""
    for hint, section in SECTION_HINTS:
        if hint in key:
            return section
    return OTHER


def section_title(section_id: str) -> str:
    return SECTION_TITLES.get(section_id, "Seção Adicional")


def question_for(key: str, answer: str) -> LegacyQuestion:
    known = KNOWN_QUESTIONS.get(key)
    if known:
        section, text = known
    else:
        section, text = infer_section(key), humanize_key(key)
    return LegacyQuestion(id=key, question=text, answer=answer, section=section)


def extract_sections(form_data: Mapping[str, Any]) -> List[LegacySection]:
    """Group non-empty string answers by section, in first-seen order."""
    sections: Dict[str, LegacySection] = {}
    for key, value in form_data.items():
        if not isinstance(value, str) or not value.strip() or key in GENERAL_INFO_KEYS:
            continue
        question = question_for(key, value)
        section = sections.get(question.section)
        if section is None:
            section = sections[question.section] = LegacySection(
                id=question.section, title=section_title(question.section)
            )
        section.questions.append(question)
    logger.debug(f"Legacy layout: {sum(len(s.questions) for s in sections.values())} questions in {len(sections)} sections")
    return list(sections.values())


def non_conformities(sections: List[LegacySection]) -> List[LegacyQuestion]:
    return [q for s in sections for q in s.questions if q.is_non_conformity]


# ── Drawing ───────────────────────────────────────────────────────────────────


def _draw_section_header(ctx: RenderContext, title: str) -> None:
    pdf = ctx.pdf
    ctx.ensure_space(THRESHOLD_SECTION)
    ctx.advance(4)
    pdf.set_fill_color(*SHADE)
    pdf.rect(ctx.left - 5, ctx.y, ctx.width + 10, 12, "F")
    pdf.use_font(11, "B", SLATE)
    pdf.set_xy(ctx.left, ctx.y + 3)
    pdf.cell(ctx.width, 6, title)
    pdf.set_draw_color(*RED)
    pdf.set_line_width(0.5)
    pdf.line(ctx.left, ctx.y + 10, ctx.left + min(pdf.get_string_width(title), ctx.width), ctx.y + 10)
    ctx.advance(16)


def _draw_question(ctx: RenderContext, question: LegacyQuestion) -> None:
    pdf = ctx.pdf
    markers_w = _MARKER_SPACING * len(_ANSWERS)
    text_w = ctx.width - markers_w - 5
    pdf.use_font(9)
    lines = pdf.wrap(question.question, text_w)
    height = max(len(lines) * 4, 2 * _MARKER_RADIUS)
    ctx.ensure_space(THRESHOLD_SUBSECTION, height + 3)

    pdf.use_font(9, "", BLACK)
    for i, line in enumerate(lines):
        pdf.set_xy(ctx.left, ctx.y + i * 4)
        pdf.cell(text_w, 4, line)

    answer = normalize_answer(question.answer)
    x0 = ctx.right - markers_w
    cy = ctx.y + 2
    pdf.set_draw_color(*BLACK)
    pdf.set_line_width(0.3)
    for idx, (value, label_key) in enumerate(zip(_ANSWERS, _ANSWER_LABELS)):
        x = x0 + idx * _MARKER_SPACING
        d = _MARKER_RADIUS * 2
        if answer == value:
            pdf.set_fill_color(*RED)
            pdf.ellipse(x, cy - _MARKER_RADIUS, d, d, "DF")
        else:
            pdf.ellipse(x, cy - _MARKER_RADIUS, d, d)
        pdf.use_font(8, "", BLACK)
        pdf.set_xy(x + d + 1, cy - 2)
        pdf.cell(_MARKER_SPACING - d - 2, 4, ctx.label(label_key))
    ctx.advance(height + 3)


def render_legacy(ctx: RenderContext, sections: List[LegacySection]) -> None:
    """Form title plus every section's questions."""
    if not sections:
        return
    ctx.ensure_space(THRESHOLD_SECTION)
    ctx.advance(6)
    ctx.text_lines(ctx.label("inspection_form"), size=14, style="B", color=RED, line_h=7)
    ctx.advance(2)
    for section in sections:
        _draw_section_header(ctx, section.title)
        for question in section.questions:
            _draw_question(ctx, question)


def render_non_conformity_summary(ctx: RenderContext, sections: List[LegacySection]) -> int:
    """Highlighted list of "não" answers; nothing is drawn when there are none."""
    items = non_conformities(sections)
    if not items:
        return 0

    pdf = ctx.pdf
    ctx.ensure_space(THRESHOLD_SUMMARY)
    ctx.advance(8)
    ctx.text_lines(ctx.label("non_conformities"), size=12, style="B", color=RED, line_h=6)
    ctx.advance(4)

    pdf.use_font(9)
    entries = [pdf.wrap(f"{n}. {q.question}", ctx.width - 4) for n, q in enumerate(items, start=1)]
    box_h = 10 + sum(len(lines) * 4 + 2 for lines in entries)
    if box_h < ctx.page_height - 60:
        ctx.ensure_space(THRESHOLD_SUMMARY, box_h)

    # a list longer than one page keeps the box on its first page only
    pdf.set_fill_color(*ALERT_BG)
    pdf.set_draw_color(*RED)
    pdf.set_line_width(0.4)
    pdf.rect(ctx.left - 3, ctx.y, ctx.width + 6, min(box_h, ctx.page_height - 24 - ctx.y), "DF")

    pdf.use_font(10, "B", RED)
    pdf.set_xy(ctx.left, ctx.y + 2)
    pdf.cell(ctx.width, 5, ctx.label("non_conformity_warning", count=len(items)))
    ctx.advance(9)
    for lines in entries:
        ctx.ensure_space(THRESHOLD_FIELD, len(lines) * 4)
        pdf.use_font(9, "", BLACK)
        for line in lines:
            pdf.set_xy(ctx.left, ctx.y)
            pdf.cell(ctx.width, 4, line)
            ctx.advance(4)
        ctx.advance(2)
    ctx.advance(4)
    return len(items)
