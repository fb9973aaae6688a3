import pytest

from firesafe.services.layout import THRESHOLD_FIELD, THRESHOLD_SECTION
from firesafe.services.pdf_document import (
    CONTENT_BOTTOM,
    HEADER_END_Y,
    HEADER_END_Y_WITH_SUMMARY,
    MARGIN,
    PAGE_TOP_Y,
    decode_image_data_uri,
    is_image_data_uri,
)

from .conftest import PNG_DATA_URI, ctx_text


class TestEnsureSpace:
    def test_no_break_with_room(self, ctx):
        ctx.y = 100
        assert ctx.ensure_space(THRESHOLD_SECTION) is False
        assert ctx.page == 1
        assert ctx.y == 100

    def test_break_inside_threshold(self, ctx):
        ctx.y = ctx.page_height - THRESHOLD_FIELD + 1
        assert ctx.ensure_space(THRESHOLD_FIELD) is True
        assert ctx.page == 2
        assert ctx.y == PAGE_TOP_Y

    def test_break_when_block_would_reach_footer(self, ctx):
        ctx.y = 200
        assert ctx.ensure_space(THRESHOLD_FIELD, needed=80) is True
        assert ctx.page == 2

    def test_needed_within_page(self, ctx):
        ctx.y = 200
        assert ctx.ensure_space(THRESHOLD_FIELD, needed=20) is False


def test_indented_restores_margin_on_error(ctx):
    assert ctx.left == MARGIN
    with pytest.raises(RuntimeError):
        with ctx.indented(6):
            with ctx.indented(4):
                assert ctx.left == MARGIN + 10
                raise RuntimeError("boom")
    assert ctx.left == MARGIN
    assert ctx.width == ctx.pdf.w - 2 * MARGIN


def test_text_lines_paginates(ctx):
    ctx.y = ctx.page_height - 40
    ctx.text_lines("linha " * 400, size=9)
    assert ctx.page >= 2
    assert ctx.y <= ctx.page_height - CONTENT_BOTTOM


def test_key_value_advances(ctx):
    ctx.y = 50
    ctx.key_value("Pressão", "62 psi")
    assert ctx.y > 50
    text = ctx_text(ctx)
    assert "62 psi" in text


class TestHeader:
    def test_without_summary(self, ctx):
        assert ctx.pdf.draw_header("Inspeção", "Acme") == HEADER_END_Y

    def test_with_summary(self, ctx):
        y = ctx.pdf.draw_header("Inspeção", "Acme", summary="Acme – Torre | Anual | 15/01/2024")
        assert y == HEADER_END_Y_WITH_SUMMARY
        text = ctx_text(ctx)
        assert "FireSafe" in text
        assert "Acme" in text

    def test_logo_replaces_company_name(self, ctx, mocker):
        spy = mocker.spy(ctx.pdf, "image")
        ctx.pdf.draw_header("Inspeção", "Acme Ltda", logo=PNG_DATA_URI)
        assert spy.call_count == 1
        assert "Acme Ltda" not in ctx_text(ctx)

    def test_hidden_boxes(self, ctx, mocker):
        spy = mocker.spy(ctx.pdf, "rect")
        ctx.pdf.draw_header("Inspeção", "Acme", show_brand=False, show_company=False)
        spy.assert_not_called()


class TestTable:
    def test_table_repeats_header_across_pages(self, ctx):
        rows = [[f"linha {i}", str(i)] for i in range(80)]
        end_y = ctx.pdf.add_table(["Coluna", "Valor"], rows, [100, 70], ctx.y)
        ctx.adopt(end_y)
        assert ctx.page >= 2
        assert PAGE_TOP_Y < ctx.y <= ctx.page_height - CONTENT_BOTTOM + 3
        pages = ctx_text(ctx).split("Coluna")
        assert len(pages) - 1 == ctx.page


class TestDataUri:
    def test_detection(self):
        assert is_image_data_uri(PNG_DATA_URI)
        assert not is_image_data_uri("https://example.com/a.png")
        assert not is_image_data_uri(None)

    def test_decode(self):
        assert decode_image_data_uri(PNG_DATA_URI).startswith(b"\x89PNG")

    @pytest.mark.parametrize("value", ["data:image/png;base64,", "data:image/svg+xml,<svg/>", "plain"])
    def test_decode_rejects(self, value):
        with pytest.raises(ValueError):
            decode_image_data_uri(value)

    def test_embed_failure_is_logged(self, ctx, caplog):
        assert ctx.pdf.embed_image("data:image/png;base64,AAAA", 20, 30, 40, 30) is False
        assert "Could not embed image" in caplog.text


class TestTableEdges:
    def test_columns_narrower_than_a_glyph(self, ctx):
        hdrs = [f"C{i}" for i in range(40)]
        rows = [["WWW"] * 40 for _ in range(3)]
        end_y = ctx.pdf.add_table(hdrs, rows, [170 / 40] * 40, ctx.y)
        assert PAGE_TOP_Y < end_y <= ctx.page_height - CONTENT_BOTTOM

    def test_wrap_chunks_characters_in_tiny_width(self, ctx):
        ctx.pdf.use_font(8)
        assert "".join(ctx.pdf.wrap("WWW", 2.5)) == "WWW"
        assert len(ctx.pdf.wrap("WWW", 2.5)) == 3

    def test_row_taller_than_a_page_is_split(self, ctx):
        end_y = ctx.pdf.add_table(["Nota"], [["palavra " * 400]], [20], ctx.y)
        ctx.adopt(end_y)
        assert ctx.page >= 3
        assert ctx.y <= ctx.page_height - CONTENT_BOTTOM
        text = ctx_text(ctx)
        assert text.count("palavra") == 400
        assert text.count("Nota") == ctx.page
