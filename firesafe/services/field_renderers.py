"""
Field renderers.

Every ``FieldType`` member has exactly one renderer registered with
``@renders``; ``render_field`` resolves the value and dispatches. Renderers
never raise on odd value shapes: they fall back to ``stringify``.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from firesafe.config import settings
from firesafe.forms.models import ColumnType, Field, FieldOption, FieldType, TableColumn
from firesafe.utils.placeholders import fill_company_placeholders
from firesafe.utils.text import humanize_key, truncate
from firesafe.utils.values import (
    PLACEHOLDER,
    format_date,
    format_number,
    is_checked,
    is_missing,
    normalize_answer,
    normalize_value,
    resolve_field_value,
    resolve_path,
    stringify,
)

from .layout import (
    LINE_H,
    THRESHOLD_FIELD,
    THRESHOLD_PHOTO,
    THRESHOLD_SIGNATURE,
    THRESHOLD_SUBSECTION,
    RenderContext,
)
from .pdf_document import BLACK, MUTED, RED, SLATE, WHITE, is_image_data_uri

Renderer = Callable[[RenderContext, Field, Any, Any], None]

_RENDERERS: Dict[FieldType, Renderer] = {}

RADIO_SPACING = 25.0
RADIO_RADIUS = 2.0
RADIO_ROW_H = 6.0
CHECKBOX_SIZE = 3.5
PHOTO_BOX = (60.0, 45.0)
SIGNATURE_BOX = (80.0, 25.0)
REPEATER_INDENT = 6.0
MIN_COLUMN_W = 8.0

_PHOTO_SOURCE_KEYS = ("dataUrl", "dataURL", "url", "src")
_PHOTO_LABEL_KEYS = ("name", "filename", "label", "description", "url", "path")


def renders(*types: FieldType) -> Callable[[Renderer], Renderer]:
    def deco(fn: Renderer) -> Renderer:
        for t in types:
            _RENDERERS[t] = fn
        return fn

    return deco


def render_field(ctx: RenderContext, field: Field, data: Any) -> None:
    """Resolve ``field`` against ``data`` and draw it at the cursor."""
    value = resolve_field_value(field, data)
    renderer = _RENDERERS.get(field.type, _RENDERERS[FieldType.GENERIC])
    renderer(ctx, field, value, data)


def registered_types() -> frozenset:
    return frozenset(_RENDERERS)


# ── Shared helpers ────────────────────────────────────────────────────────────


def _free_text(ctx: RenderContext, value: Any) -> str:
    return fill_company_placeholders(stringify(value), ctx.company)


def _label_text(field: Field) -> str:
    return field.label or humanize_key(field.id)


def _field_label(ctx: RenderContext, field: Field) -> None:
    ctx.ensure_space(THRESHOLD_FIELD, LINE_H)
    ctx.text_lines(_label_text(field), size=9, style="B", color=SLATE)


def _empty_caption(ctx: RenderContext, key: str) -> None:
    ctx.text_lines(ctx.label(key), size=8.5, style="I", color=MUTED, x_offset=4)


def match_option(options: Sequence[FieldOption], value: Any) -> Optional[int]:
    """Index of the first option whose value equals ``value`` case-insensitively."""
    answer = normalize_answer(value)
    if not answer:
        return None
    for idx, opt in enumerate(options):
        if normalize_answer(opt.value) == answer:
            return idx
    return None


def option_label(options: Sequence[FieldOption], value: Any) -> Optional[str]:
    """Display label of the option whose value equals ``value`` exactly."""
    for opt in options:
        if opt.value == value:
            return opt.display
    return None


def _default_radio_options(ctx: RenderContext) -> List[FieldOption]:
    return [
        FieldOption(value="sim", label=ctx.label("yes")),
        FieldOption(value="nao", label=ctx.label("no")),
        FieldOption(value="na", label=ctx.label("na")),
    ]


def format_cell(ctx: RenderContext, column: TableColumn, raw: Any) -> str:
    """Text of one table cell according to the column type."""
    value = normalize_value(raw)
    if column.type == ColumnType.CHECKBOX:
        if is_missing(value):
            return PLACEHOLDER
        return ctx.label("yes") if is_checked(value) else ctx.label("no")
    if is_missing(value):
        return PLACEHOLDER
    if column.type == ColumnType.DATE:
        text = format_date(value, ctx.language)
        return stringify(value) if text == PLACEHOLDER else text
    if column.type == ColumnType.NUMBER:
        text = format_number(value, column.unit, ctx.language)
        return stringify(value) if text == PLACEHOLDER else text
    if column.type == ColumnType.SELECT:
        return option_label(column.options, value) or stringify(value)
    return stringify(value)


def _follow_up_text(ctx: RenderContext, field: Field, data: Any) -> Optional[str]:
    raw = normalize_value(resolve_path(data, f"{field.key}_value"))
    if is_missing(raw):
        return None
    kind = (field.field_type or "").lower()
    if kind == "number":
        text = format_number(raw, field.unit, ctx.language)
    elif kind == "date":
        text = format_date(raw, ctx.language)
    else:
        text = _free_text(ctx, raw)
    if text == PLACEHOLDER:
        text = stringify(raw)
    return f"{field.field_label}: {text}" if field.field_label else text


# ── Headers ───────────────────────────────────────────────────────────────────


@renders(FieldType.SECTION_HEADER)
def _render_section_header(ctx: RenderContext, field: Field, value: Any, data: Any) -> None:
    ctx.ensure_space(THRESHOLD_SUBSECTION)
    ctx.advance(2)
    ctx.text_lines(_label_text(field), size=10, style="B", color=RED, line_h=5)
    ctx.rule(RED, width=40, thickness=0.4)
    ctx.advance(2)


@renders(FieldType.SUBSECTION_HEADER)
def _render_subsection_header(ctx: RenderContext, field: Field, value: Any, data: Any) -> None:
    ctx.ensure_space(THRESHOLD_SUBSECTION)
    ctx.advance(1)
    ctx.text_lines(_label_text(field), size=9.5, style="B", color=SLATE, line_h=5)
    ctx.advance(1)


# ── Scalars ───────────────────────────────────────────────────────────────────


@renders(FieldType.INPUT)
def _render_input(ctx: RenderContext, field: Field, value: Any, data: Any) -> None:
    value = normalize_value(value)
    kind = (field.input_type or "").lower()
    if is_missing(value):
        text = PLACEHOLDER
    elif kind == "number":
        text = format_number(value, field.unit, ctx.language)
        if text == PLACEHOLDER:
            text = stringify(value)
    elif kind == "date":
        text = format_date(value, ctx.language)
        if text == PLACEHOLDER:
            text = stringify(value)
    else:
        text = _free_text(ctx, value)
        if field.unit:
            text = f"{text} {field.unit}"
    ctx.key_value(_label_text(field), text)


@renders(FieldType.SELECT)
def _render_select(ctx: RenderContext, field: Field, value: Any, data: Any) -> None:
    if isinstance(value, (list, tuple)):
        parts = [normalize_value(v) for v in value if not is_missing(normalize_value(v))]
        text = ", ".join(option_label(field.options, v) or stringify(v) for v in parts) or PLACEHOLDER
    else:
        value = normalize_value(value)
        if is_missing(value):
            text = PLACEHOLDER
        else:
            text = option_label(field.options, value) or stringify(value)
    ctx.key_value(_label_text(field), text)


@renders(FieldType.TEXTAREA)
def _render_textarea(ctx: RenderContext, field: Field, value: Any, data: Any) -> None:
    _field_label(ctx, field)
    value = normalize_value(value)
    if is_missing(value):
        _empty_caption(ctx, "not_filled")
        ctx.advance(2)
        return
    budget = min(field.max_length or settings.TEXTAREA_MAX_CHARS, settings.TEXTAREA_MAX_CHARS_LIMIT)
    text = truncate(_free_text(ctx, value), budget)
    ctx.text_lines(text, size=9, x_offset=4)
    ctx.advance(2)


@renders(FieldType.CHECKBOX)
def _render_checkbox(ctx: RenderContext, field: Field, value: Any, data: Any) -> None:
    pdf = ctx.pdf
    pdf.use_font(9)
    lines = pdf.wrap(_label_text(field), ctx.width - CHECKBOX_SIZE - 3)
    ctx.ensure_space(THRESHOLD_FIELD, len(lines) * LINE_H)

    pdf.set_draw_color(*SLATE)
    pdf.set_line_width(0.3)
    box_y = ctx.y + (LINE_H - CHECKBOX_SIZE) / 2
    if is_checked(value):
        pdf.set_fill_color(*SLATE)
        pdf.rect(ctx.left, box_y, CHECKBOX_SIZE, CHECKBOX_SIZE, "DF")
    else:
        pdf.rect(ctx.left, box_y, CHECKBOX_SIZE, CHECKBOX_SIZE)

    pdf.use_font(9)
    for i, line in enumerate(lines):
        pdf.set_xy(ctx.left + CHECKBOX_SIZE + 3, ctx.y + i * LINE_H)
        pdf.cell(ctx.width - CHECKBOX_SIZE - 3, LINE_H, line)
    ctx.advance(len(lines) * LINE_H + 1)


@renders(FieldType.RADIO)
def _render_radio(ctx: RenderContext, field: Field, value: Any, data: Any) -> None:
    pdf = ctx.pdf
    options = list(field.options) or _default_radio_options(ctx)
    selected = match_option(options, value)

    # markers take the right-hand side, wrapping onto extra rows when needed
    per_row = max(1, int((ctx.width * 2 / 3 - 2) // RADIO_SPACING))
    rows = -(-len(options) // per_row)
    markers_w = RADIO_SPACING * min(len(options), per_row)
    text_w = max(ctx.width - markers_w - 2, ctx.width / 3)
    pdf.use_font(9)
    lines = pdf.wrap(_label_text(field), text_w)
    height = max(len(lines) * LINE_H, (rows - 1) * RADIO_ROW_H + 6.0)
    ctx.ensure_space(THRESHOLD_FIELD, height)

    pdf.use_font(9)
    for i, line in enumerate(lines):
        pdf.set_xy(ctx.left, ctx.y + i * LINE_H)
        pdf.cell(text_w, LINE_H, line)

    mx = max(ctx.right - markers_w, ctx.left)
    pdf.set_draw_color(*BLACK)
    pdf.set_line_width(0.3)
    for idx, opt in enumerate(options):
        row, col = divmod(idx, per_row)
        x = mx + col * RADIO_SPACING
        top = ctx.y + row * RADIO_ROW_H
        cy = top + LINE_H / 2
        if idx == selected:
            pdf.set_fill_color(*SLATE)
            pdf.ellipse(x, cy - RADIO_RADIUS, RADIO_RADIUS * 2, RADIO_RADIUS * 2, "DF")
        else:
            pdf.ellipse(x, cy - RADIO_RADIUS, RADIO_RADIUS * 2, RADIO_RADIUS * 2)
        pdf.use_font(8)
        pdf.set_xy(x + RADIO_RADIUS * 2 + 1, top)
        pdf.cell(RADIO_SPACING - RADIO_RADIUS * 2 - 2, LINE_H, pdf.fit_text(opt.display, RADIO_SPACING - 8))
    ctx.advance(height)

    if field.include_field:
        follow = _follow_up_text(ctx, field, data)
        if follow:
            ctx.text_lines(follow, size=8.5, color=MUTED, x_offset=4)
    ctx.advance(1.5)


# ── Attachments ───────────────────────────────────────────────────────────────


def _photo_source(item: Any) -> Optional[str]:
    if is_image_data_uri(item):
        return item
    if isinstance(item, Mapping):
        for key in _PHOTO_SOURCE_KEYS:
            if is_image_data_uri(item.get(key)):
                return item[key]
    return None


def _photo_label(item: Any) -> str:
    if isinstance(item, Mapping):
        for key in _PHOTO_LABEL_KEYS:
            candidate = item.get(key)
            if isinstance(candidate, str) and candidate.strip():
                return candidate.strip()
    return stringify(item)


@renders(FieldType.PHOTO)
def _render_photo(ctx: RenderContext, field: Field, value: Any, data: Any) -> None:
    items = value if isinstance(value, (list, tuple)) else [value]
    items = [item for item in items if not is_missing(item)]
    _field_label(ctx, field)
    if not items:
        _empty_caption(ctx, "no_photo")
        ctx.advance(2)
        return

    box_w, box_h = PHOTO_BOX
    for item in items:
        source = _photo_source(item)
        if source is None:
            ctx.text_lines(f"• {_photo_label(item)}", size=9, x_offset=4)
            continue
        ctx.ensure_space(THRESHOLD_PHOTO, box_h)
        if ctx.pdf.embed_image(source, ctx.left + 4, ctx.y, box_w, box_h):
            ctx.advance(box_h + 2)
        else:
            _empty_caption(ctx, "photo_failed")
    ctx.advance(2)


@renders(FieldType.SIGNATURE)
def _render_signature(ctx: RenderContext, field: Field, value: Any, data: Any) -> None:
    pdf = ctx.pdf
    box_w, box_h = SIGNATURE_BOX
    ctx.ensure_space(THRESHOLD_SIGNATURE, box_h + LINE_H)
    ctx.text_lines(_label_text(field), size=9, style="B", color=SLATE)

    x, y = ctx.left, ctx.y
    pdf.set_draw_color(*SLATE)
    pdf.set_line_width(0.3)
    pdf.set_fill_color(*WHITE)
    pdf.rect(x, y, box_w, box_h, "DF")

    value = normalize_value(value)
    drawn = False
    if is_image_data_uri(value):
        drawn = pdf.embed_image(value, x + 1, y + 1, box_w - 2, box_h - 2)
    if not drawn:
        key = "signed_digitally" if not is_missing(value) and value is not False else "signature_placeholder"
        pdf.use_font(8.5, "I", MUTED)
        pdf.set_xy(x, y + (box_h - LINE_H) / 2)
        pdf.cell(box_w, LINE_H, ctx.label(key), align="C")
    ctx.advance(box_h + 3)


# ── Collections ───────────────────────────────────────────────────────────────


def _as_items(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return [item for item in value if item is not None]
    if is_missing(value):
        return []
    return [value]


@renders(FieldType.REPEATER)
def _render_repeater(ctx: RenderContext, field: Field, value: Any, data: Any) -> None:
    items = _as_items(value)
    _field_label(ctx, field)
    if not items:
        _empty_caption(ctx, "not_filled")
        ctx.advance(2)
        return

    title = field.label or ctx.label("item")
    with ctx.indented(REPEATER_INDENT):
        for number, item in enumerate(items, start=1):
            ctx.ensure_space(THRESHOLD_FIELD, LINE_H * 2)
            ctx.text_lines(f"{title} #{number}", size=8.5, style="B", color=MUTED)
            if field.fields and isinstance(item, Mapping):
                for sub in field.fields:
                    render_field(ctx, sub, item)
            else:
                ctx.text_lines(_free_text(ctx, item), size=9, x_offset=2)
            ctx.advance(1.5)
    ctx.advance(1)


def _table_columns(field: Field, rows: List[Any]) -> List[TableColumn]:
    if field.columns:
        return list(field.columns)
    keys: List[str] = []
    for row in rows:
        if isinstance(row, Mapping):
            keys.extend(k for k in row if k not in keys)
    return [TableColumn(id=k, label=humanize_key(k)) for k in keys] or [TableColumn(id="value", label=field.label)]


def _column_widths(columns: List[TableColumn], total: float) -> List[float]:
    fixed = sum(c.width for c in columns if c.width)
    flexible = [c for c in columns if not c.width]
    share = max(total - fixed, 0) / len(flexible) if flexible else 0
    widths = [c.width or share for c in columns]
    scale = total / sum(widths) if sum(widths) else 1
    floor = min(MIN_COLUMN_W, total / len(columns))
    widths = [max(w * scale, floor) for w in widths]
    # give back what the floor added, taken from the wider columns
    excess = sum(widths) - total
    slack = sum(w - floor for w in widths)
    if excess > 0 and slack > 0:
        widths = [w - excess * (w - floor) / slack for w in widths]
    return widths


_ALIGN = {"left": "L", "center": "C", "right": "R"}


@renders(FieldType.TABLE)
def _render_table(ctx: RenderContext, field: Field, value: Any, data: Any) -> None:
    rows = _as_items(value)
    _field_label(ctx, field)
    if not rows:
        _empty_caption(ctx, "not_filled")
        ctx.advance(2)
        return

    columns = _table_columns(field, rows)
    body: List[List[str]] = []
    for row in rows:
        if isinstance(row, Mapping):
            body.append([format_cell(ctx, col, row.get(col.id)) for col in columns])
        else:
            body.append([stringify(row)] + [PLACEHOLDER] * (len(columns) - 1))

    headers = [f"{c.label or humanize_key(c.id)} ({c.unit})" if c.unit else (c.label or humanize_key(c.id)) for c in columns]
    aligns = [_ALIGN.get((c.align or "").lower(), "R" if c.type == ColumnType.NUMBER else "L") for c in columns]
    ctx.ensure_space(THRESHOLD_FIELD)
    end_y = ctx.pdf.add_table(
        headers, body, _column_widths(columns, ctx.width), ctx.y, x=ctx.left, aligns=aligns
    )
    ctx.adopt(end_y)


# ── Fallback ──────────────────────────────────────────────────────────────────


@renders(FieldType.GENERIC)
def _render_generic(ctx: RenderContext, field: Field, value: Any, data: Any) -> None:
    ctx.key_value(_label_text(field), _free_text(ctx, value))
