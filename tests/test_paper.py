import pytest

from models import PageSize
from paper import (
    available_width_px,
    cell_padding_px,
    mm_to_px,
    page_height_mm,
    page_padding_mm,
    page_width_mm,
    paper_catalog,
    round_half_up,
)


def test_page_dimensions_in_mm():
    assert page_width_mm(PageSize.A4) == 210.0
    assert page_height_mm(PageSize.A4) == 297.0
    assert page_width_mm(PageSize.A5) == 148.0
    assert page_height_mm(PageSize.A5) == 210.0
    assert page_width_mm(PageSize.LETTER) == 215.9
    assert page_height_mm(PageSize.LETTER) == 279.4


def test_page_size_accepts_identifiers():
    assert page_width_mm("A4") == 210.0
    assert PageSize.parse("letter") is PageSize.LETTER
    assert PageSize.parse(" a5 ") is PageSize.A5


def test_unknown_page_size_fails_fast():
    with pytest.raises(ValueError, match="Unknown paper size"):
        PageSize.parse("B5")
    with pytest.raises(ValueError):
        available_width_px("Legal")


def test_mm_to_px_is_96_dpi():
    assert mm_to_px(25.4) == pytest.approx(96.0, abs=1e-6)


def test_page_padding_scales_with_width_and_rounds_to_one_decimal():
    assert page_padding_mm(PageSize.A4) == 12.0
    assert page_padding_mm(PageSize.A5) == 8.5
    assert page_padding_mm(PageSize.LETTER) == 12.3


def test_available_width():
    assert available_width_px(PageSize.A4) == pytest.approx(186 * 3.7795275591)
    assert available_width_px(PageSize.A4) == pytest.approx(702.99, abs=0.01)
    assert available_width_px(PageSize.A5) == pytest.approx(131 * 3.7795275591)
    assert available_width_px(PageSize.LETTER) == pytest.approx((215.9 - 24.6) * 3.7795275591)


def test_cell_padding_is_tighter_on_a5():
    assert cell_padding_px(PageSize.A5) == 6
    assert cell_padding_px(PageSize.A4) == 8
    assert cell_padding_px(PageSize.LETTER) == 8


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
    assert round_half_up(8.457, 1) == pytest.approx(8.5)
    assert round_half_up(12.337, 1) == pytest.approx(12.3)


def test_paper_catalog_lists_every_size():
    ids = [p["id"] for p in paper_catalog()]
    assert ids == ["A4", "A5", "Letter"]
