# template_service.py
from __future__ import annotations

from dataclasses import replace

from aggregation import resolve_column
from catalog import HEADER_BY_ID, LINE_ITEMS_BY_ID, SUMMARY_BY_ID
from config import Config
from models import HEADER_SUBSECTIONS, HeaderSelection, SummaryLayout, Template

SECTIONS = ("header", "line_items", "summary")

DEFAULT_HEADER = HeaderSelection(
    top_row=("companyName", "invoiceType"),
    left=("customerName", "cnic", "phone", "address"),
    right=("tcn", "invoiceNo", "bookingDate", "deliveryDate", "booker", "salesman"),
)
DEFAULT_LINE_ITEMS = (
    "sku", "ctn", "pcs", "rp", "tp", "tpVal", "tradeOffer",
    "slabDisc", "grossValue", "others", "getValue",
)
DEFAULT_SUMMARY = ("totalQty", "tpValue", "totalDiscount", "grossValue", "others", "netValue")


def default_template(name: str | None = None, font_size_px: int | None = None) -> Template:
    return Template(
        name=(name or "").strip() or Config.DEFAULT_TEMPLATE_NAME,
        header=DEFAULT_HEADER,
        line_items=DEFAULT_LINE_ITEMS,
        summary=DEFAULT_SUMMARY,
        font_size_px=int(font_size_px if font_size_px is not None else Config.DEFAULT_FONT_SIZE_PX),
    )


# -----------------------------
# Section access
# -----------------------------
def _check_section(section: str, subsection: str | None) -> None:
    if section not in SECTIONS:
        raise ValueError(f"Unknown section: {section!r}")
    if section == "header" and subsection not in HEADER_SUBSECTIONS:
        raise ValueError(f"Unknown header subsection: {subsection!r}")


def _active_ids(template: Template, section: str, subsection: str | None) -> tuple[str, ...]:
    if section == "header":
        return getattr(template.header, subsection)
    return getattr(template, section)


def _with_active_ids(template: Template, section: str, subsection: str | None, ids) -> Template:
    ids = tuple(ids)
    if section == "header":
        return replace(template, header=replace(template.header, **{subsection: ids}))
    return replace(template, **{section: ids})


def _known_field(template: Template, section: str, subsection: str | None, field_id: str) -> bool:
    if section == "header":
        return field_id in HEADER_BY_ID[subsection]
    if section == "summary":
        return field_id in SUMMARY_BY_ID
    return field_id in LINE_ITEMS_BY_ID or template.aggregation(field_id) is not None


# -----------------------------
# Reducers
# -----------------------------
def toggle_field(template: Template, section: str, field_id: str, subsection: str | None = None) -> Template:
    """Removes `field_id` from the section when active, otherwise appends it."""
    _check_section(section, subsection)
    if not _known_field(template, section, subsection, field_id):
        raise ValueError(f"Unknown field for {section}: {field_id!r}")

    active = _active_ids(template, section, subsection)
    if field_id in active:
        updated = [f for f in active if f != field_id]
    else:
        updated = [*active, field_id]
    return _with_active_ids(template, section, subsection, updated)


def move_field(
    template: Template,
    section: str,
    field_id: str,
    direction: str,
    subsection: str | None = None,
) -> Template:
    """Swaps an active field with its neighbour; no-op at either end."""
    _check_section(section, subsection)
    direction = (direction or "").strip().lower()
    if direction not in ("up", "down"):
        raise ValueError(f"Unknown direction: {direction!r} (expected 'up' or 'down')")

    arr = list(_active_ids(template, section, subsection))
    if field_id not in arr:
        return template

    i = arr.index(field_id)
    j = i - 1 if direction == "up" else i + 1
    if j < 0 or j >= len(arr):
        return template

    arr[i], arr[j] = arr[j], arr[i]
    return _with_active_ids(template, section, subsection, arr)


def column_label(template: Template, column_id: str) -> str:
    return resolve_column(column_id, template.aggregations, template.column_label_overrides).label


def set_column_label(template: Template, field_id: str, label: str) -> Template:
    """
    Renames a line-item column; a blank label restores the catalog default.
    Aggregation columns carry their own label, and a blank one keeps it.
    """
    agg = template.aggregation(field_id)
    if agg is not None:
        renamed = replace(agg, label=(label or "").strip() or agg.label)
        return replace(template, aggregations=tuple(renamed if a.id == field_id else a for a in template.aggregations))

    spec = LINE_ITEMS_BY_ID.get(field_id)
    if spec is None:
        raise ValueError(f"Unknown line-item field: {field_id!r}")

    overrides = dict(template.column_label_overrides)
    overrides[field_id] = (label or "").strip() or spec.label
    return replace(template, column_label_overrides=overrides)


def clamp_font_size(value) -> int:
    try:
        size = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Font size must be a whole number of px: {value!r}")
    return max(Config.FONT_SIZE_MIN_PX, min(Config.FONT_SIZE_MAX_PX, size))


_BOOL_OPTIONS = ("show_secondary_text_row", "show_barcode_row", "show_borders")


def set_options(template: Template, **options) -> Template:
    """
    Updates scalar layout options. Font size is kept inside the editor's
    slider range.
    """
    changes = {}
    for key, value in options.items():
        if key == "font_size_px":
            changes[key] = clamp_font_size(value)
        elif key == "summary_layout":
            try:
                changes[key] = SummaryLayout(str(value).strip().lower())
            except ValueError:
                raise ValueError(f"Unknown summary layout: {value!r} (expected 'split' or 'full')")
        elif key in _BOOL_OPTIONS:
            changes[key] = bool(value)
        elif key == "name":
            changes[key] = (value or "").strip() or template.name
        else:
            raise ValueError(f"Unknown template option: {key!r}")
    return replace(template, **changes)
