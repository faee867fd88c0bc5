# constraints.py
from models import ColumnType, PageSize, WidthConstraint
from paper import BASE_PAGE_WIDTH_MM, page_width_mm, round_half_up

# Reference widths (px) on A4 at the 9px reference font
BASE_WIDTH_CONSTRAINTS = {
    ColumnType.PRIMARY_TEXT: WidthConstraint(min=80, optimal=120),
    ColumnType.NUMERIC: WidthConstraint(min=35, optimal=50),
    ColumnType.SECONDARY_TEXT: WidthConstraint(min=40, optimal=60),
    ColumnType.INDEX: WidthConstraint(min=30, optimal=40),
}

# Hard floors (px): page scaling never goes below these
ABSOLUTE_MIN_WIDTHS = {
    ColumnType.PRIMARY_TEXT: 60,
    ColumnType.NUMERIC: 28,
    ColumnType.SECONDARY_TEXT: 32,
    ColumnType.INDEX: 25,
}

# Extra shrink on small pages, on top of the width ratio
PAGE_SHRINK_FACTORS = {
    PageSize.A5: 0.85,
}


def page_ratio(page_size) -> float:
    size = PageSize.parse(page_size)
    return (page_width_mm(size) / BASE_PAGE_WIDTH_MM) * PAGE_SHRINK_FACTORS.get(size, 1.0)


def adaptive_constraints(page_size) -> dict[ColumnType, WidthConstraint]:
    """
    Min/optimal widths per column type scaled to the page.

    Always holds: optimal >= min >= ABSOLUTE_MIN_WIDTHS[type].
    """
    ratio = page_ratio(page_size)

    constraints = {}
    for column_type, base in BASE_WIDTH_CONSTRAINTS.items():
        floor = ABSOLUTE_MIN_WIDTHS[column_type]
        adaptive_min = max(floor, int(round_half_up(base.min * ratio)))
        adaptive_optimal = max(adaptive_min, int(round_half_up(base.optimal * ratio)))
        constraints[column_type] = WidthConstraint(min=adaptive_min, optimal=adaptive_optimal)
    return constraints
