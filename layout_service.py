# layout_service.py
import logging
from dataclasses import dataclass

from aggregation import effective_columns
from catalog import INDEX_COLUMN_ID, classify
from constraints import adaptive_constraints
from models import ColumnType, LayoutResult, PageSize, Template
from paper import available_width_px, round_half_up

logger = logging.getLogger(__name__)

# Constraint widths are defined for 9px text
REFERENCE_FONT_SIZE_PX = 9.0

MAX_REFINEMENT_ITERATIONS = 5

# Product names truncate worst, so SKU columns give up 30% less per pass
PRIMARY_TEXT_PRIORITY = 0.7


@dataclass
class _Slot:
    id: str
    type: ColumnType
    width: float
    min_width: float


def _column_id_and_type(col) -> tuple[str, ColumnType]:
    if isinstance(col, str):
        return col, classify(col)
    if isinstance(col, dict):
        col_id = str(col["id"])
        raw_type = col.get("type")
        return col_id, ColumnType.parse(raw_type) if raw_type else classify(col_id)
    return str(col.id), ColumnType.parse(col.type)


def _total(slots) -> float:
    return sum(s.width for s in slots)


def _result(slots, font_size_px, available: float) -> LayoutResult:
    widths = {s.id: int(round_half_up(s.width)) for s in slots}
    return LayoutResult(widths=widths, font_size_px=font_size_px, available_px=available)


def compute_widths(page_size, ordered_columns, font_size_px) -> LayoutResult:
    """
    Pixel width for the row-number column and every line-item column so the
    table fits the printable width of `page_size`.

    `ordered_columns` holds ColumnSpec objects, {"id", "type"} dicts or bare ids.

    Pass 1 keeps optimal widths when they fit. Pass 2 scales everything by
    available/total, clamped to each type's minimum. Pass 3 spreads the remaining
    excess over the columns still above their minimum, at most
    MAX_REFINEMENT_ITERATIONS times. What is left after that is returned as is;
    the font size is never changed.
    """
    page_size = PageSize.parse(page_size)
    available = available_width_px(page_size)
    constraints = adaptive_constraints(page_size)
    font_scale = font_size_px / REFERENCE_FONT_SIZE_PX

    def slot(col_id: str, col_type: ColumnType) -> _Slot:
        c = constraints[col_type]
        return _Slot(col_id, col_type, c.optimal * font_scale, c.min * font_scale)

    slots = [slot(INDEX_COLUMN_ID, ColumnType.INDEX)]
    for col in ordered_columns:
        slots.append(slot(*_column_id_and_type(col)))

    # Pass 1: optimal widths fit
    total_optimal = _total(slots)
    if total_optimal <= available:
        logger.debug("layout %s: %d columns fit at optimal width (%.1f/%.1f px)",
                     page_size.value, len(slots), total_optimal, available)
        return _result(slots, font_size_px, available)

    # Pass 2: proportional scale with per-type minimums
    scale = available / total_optimal
    for s in slots:
        s.width = max(s.width * scale, s.min_width)
    total = _total(slots)

    # Pass 3: hand the excess to columns that can still shrink
    iterations = 0
    while total > available and iterations < MAX_REFINEMENT_ITERATIONS:
        reducible = [s for s in slots if s.width > s.min_width]
        if not reducible:
            break

        share = (total - available) / len(reducible)
        for s in reducible:
            factor = PRIMARY_TEXT_PRIORITY if s.type is ColumnType.PRIMARY_TEXT else 1.0
            s.width = max(s.width - share * factor, s.min_width)

        total = _total(slots)
        iterations += 1

    if total > available:
        logger.debug("layout %s: %d columns overflow by %.1f px after %d refinement passes",
                     page_size.value, len(slots), total - available, iterations)
    else:
        logger.debug("layout %s: %d columns compressed to fit (%d refinement passes)",
                     page_size.value, len(slots), iterations)

    return _result(slots, font_size_px, available)


def layout_for_template(template: Template, page_size) -> LayoutResult:
    """Widths for the template's effective line-item columns; empty when none are active."""
    columns = effective_columns(template)
    if not columns:
        return LayoutResult(
            widths={},
            font_size_px=template.font_size_px,
            available_px=available_width_px(page_size),
        )
    return compute_widths(page_size, columns, template.font_size_px)
