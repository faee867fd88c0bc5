import pytest

from constraints import (
    ABSOLUTE_MIN_WIDTHS,
    BASE_WIDTH_CONSTRAINTS,
    adaptive_constraints,
    page_ratio,
)
from models import ColumnType, PageSize, WidthConstraint


def test_a4_is_the_reference_page():
    assert page_ratio(PageSize.A4) == pytest.approx(1.0)
    assert adaptive_constraints(PageSize.A4) == BASE_WIDTH_CONSTRAINTS


def test_a5_shrinks_with_extra_factor():
    assert page_ratio(PageSize.A5) == pytest.approx(148 / 210 * 0.85)

    c = adaptive_constraints(PageSize.A5)
    assert c[ColumnType.PRIMARY_TEXT] == WidthConstraint(min=60, optimal=72)
    assert c[ColumnType.NUMERIC] == WidthConstraint(min=28, optimal=30)
    assert c[ColumnType.SECONDARY_TEXT] == WidthConstraint(min=32, optimal=36)
    assert c[ColumnType.INDEX] == WidthConstraint(min=25, optimal=25)


def test_a5_numeric_minimum_respects_absolute_floor():
    assert adaptive_constraints("A5")[ColumnType.NUMERIC].min >= ABSOLUTE_MIN_WIDTHS[ColumnType.NUMERIC] == 28


def test_letter_scales_up_slightly():
    c = adaptive_constraints(PageSize.LETTER)
    assert c[ColumnType.PRIMARY_TEXT] == WidthConstraint(min=82, optimal=123)
    assert c[ColumnType.NUMERIC] == WidthConstraint(min=36, optimal=51)
    assert c[ColumnType.SECONDARY_TEXT] == WidthConstraint(min=41, optimal=62)
    assert c[ColumnType.INDEX] == WidthConstraint(min=31, optimal=41)


@pytest.mark.parametrize("page_size", list(PageSize))
def test_optimal_at_least_min_at_least_floor(page_size):
    for column_type, c in adaptive_constraints(page_size).items():
        assert c.optimal >= c.min >= ABSOLUTE_MIN_WIDTHS[column_type]


def test_smaller_page_never_gets_wider_columns():
    a4 = adaptive_constraints(PageSize.A4)
    a5 = adaptive_constraints(PageSize.A5)
    for column_type in ColumnType:
        assert a5[column_type].optimal <= a4[column_type].optimal
        assert a5[column_type].min <= a4[column_type].min


def test_every_column_type_has_constraints():
    assert set(adaptive_constraints(PageSize.A4)) == set(ColumnType)
