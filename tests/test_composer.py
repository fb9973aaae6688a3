import pytest

from firesafe.forms import get_form_schema
from firesafe.forms.models import FormSchema, Section
from firesafe.services.legacy_renderer import (
    OTHER,
    extract_sections,
    infer_section,
    non_conformities,
    render_legacy,
    render_non_conformity_summary,
    section_title,
)
from firesafe.services.section_composer import is_section_visible, render_schema, render_section

from .conftest import ctx_text


class TestSectionComposer:
    def test_monthly_selection(self, ctx):
        schema = get_form_schema("wet-sprinkler")
        shown = render_schema(ctx, schema, {"frequency": "mensal", "propertyName": "Torre A"})
        assert shown == 3
        text = ctx_text(ctx)
        assert "MENSAIS" in text
        assert "SEMANAIS" not in text
        assert "Torre A" in text

    def test_no_frequency_shows_everything(self, ctx):
        schema = get_form_schema("wet-sprinkler")
        assert render_schema(ctx, schema, {}) == len(schema.sections)

    def test_hidden_section_draws_nothing(self, ctx):
        section = Section.model_validate(
            {"id": "annual", "title": "Anual", "conditionalDisplay": True, "requiredFrequencies": ["anual"]}
        )
        y0 = ctx.y
        assert render_section(ctx, section, {"frequency": "mensal"}) is False
        assert ctx.y == y0

    def test_visibility_accepts_labels(self):
        section = Section.model_validate(
            {"id": "five", "conditionalDisplay": True, "requiredFrequencies": ["5anos"]}
        )
        assert is_section_visible(section, {"frequency": "5 Anos"})
        assert is_section_visible(section, {"frequency": {"value": "5anos", "label": "5 Anos"}})
        assert not is_section_visible(section, {"frequency": "anual"})

    def test_subsections_follow_fields(self, ctx):
        schema = FormSchema.model_validate(
            {
                "id": "s",
                "title": "S",
                "sections": [
                    {
                        "id": "main",
                        "title": "Principal",
                        "fields": [{"id": "a", "type": "input", "label": "Campo A"}],
                        "subsections": [
                            {"title": "Detalhes", "fields": [{"id": "b", "type": "input", "label": "Campo B"}]}
                        ],
                    }
                ],
            }
        )
        render_schema(ctx, schema, {"a": "primeiro", "b": "segundo"})
        text = ctx_text(ctx)
        assert text.index("primeiro") < text.index("Detalhes") < text.index("segundo")

    def test_long_section_paginates(self, ctx):
        fields = [{"id": f"q{i}", "type": "radio", "label": f"Pergunta {i}"} for i in range(80)]
        schema = FormSchema.model_validate({"id": "long", "sections": [{"id": "s", "title": "Longa", "fields": fields}]})
        render_schema(ctx, schema, {})
        assert ctx.page >= 2


class TestLegacySections:
    @pytest.mark.parametrize(
        "key, expected",
        [
            ("daily_heat_check", "diaria"),
            ("weekly_test_connection", "semanal"),
            ("monthly_gauges", "mensal"),
            ("quarterly_sprinklers", "trimestral"),
            ("annual_main_drain_test", "anual"),
            ("fiveyears_sampling", "5anos"),
            ("obstruction5", "5anos"),
            ("tests_hydrostatic", "testes"),
            ("randomKey", OTHER),
        ],
    )
    def test_infer_section(self, key, expected):
        assert infer_section(key) == expected

    def test_titles(self):
        assert section_title("semanal") == "Inspeções Semanais"
        assert section_title(OTHER) == "Outros Itens"
        assert section_title("mystery") == "Seção Adicional"

    def test_extract_sections(self):
        data = {
            "propertyName": "Torre A",
            "frequency": "mensal",
            "weekly_test_connection": "sim",
            "monthly_gauges_condition": "nao",
            "weekly_strainer_differential": "Não",
            "customCheck": "na",
            "blank": "  ",
            "count": 3,
            "nested": {"a": 1},
        }
        sections = extract_sections(data)
        assert [s.id for s in sections] == ["semanal", "mensal", OTHER]
        assert [q.id for q in sections[0].questions] == ["weekly_test_connection", "weekly_strainer_differential"]
        assert sections[0].questions[0].question == "Conexão de teste possui tampão ou cap?"
        assert sections[2].questions[0].question == "Custom Check"
        assert [q.id for q in non_conformities(sections)] == ["weekly_strainer_differential", "monthly_gauges_condition"]


class TestLegacyRendering:
    def test_summary_counts_non_conformities(self, ctx):
        sections = extract_sections({"weekly_test_connection": "nao", "monthly_gauges_condition": "Não", "x": "sim"})
        render_legacy(ctx, sections)
        assert render_non_conformity_summary(ctx, sections) == 2
        text = ctx_text(ctx)
        assert "2 item(s)" in text
        assert "1. Conex" in text

    def test_no_summary_without_non_conformities(self, ctx, mocker):
        sections = extract_sections({"weekly_test_connection": "sim"})
        spy = mocker.spy(ctx.pdf, "rect")
        y0 = ctx.y
        assert render_non_conformity_summary(ctx, sections) == 0
        spy.assert_not_called()
        assert ctx.y == y0
        assert "NÃO CONFORMIDADES" not in ctx_text(ctx)

    def test_selected_marker(self, ctx, mocker):
        spy = mocker.spy(ctx.pdf, "ellipse")
        render_legacy(ctx, extract_sections({"weekly_test_connection": "N/A"}))
        assert spy.call_count == 3
        assert "DF" in spy.call_args_list[2].args

    def test_empty_form_draws_nothing(self, ctx):
        y0 = ctx.y
        render_legacy(ctx, [])
        assert ctx.y == y0
