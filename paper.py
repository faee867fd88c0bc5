# paper.py
import math

from reportlab.lib.pagesizes import A4, A5, LETTER
from reportlab.lib.units import mm

from models import PageSize

# 1mm at 96 DPI
PX_PER_MM = 3.7795275591

# Page margin is 12mm on A4 and scales with page width, never below 8mm
BASE_PAGE_WIDTH_MM = 210.0
BASE_PAGE_PADDING_MM = 12.0
MIN_PAGE_PADDING_MM = 8.0


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Rounds .5 away from zero for positive values (round(2.5) -> 3, not 2)."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def _mm_pair(pagesize) -> dict:
    w, h = pagesize
    return {"width_mm": round(w / mm, 1), "height_mm": round(h / mm, 1)}


# Paper size dimensions in mm (portrait)
PAPER_SIZES = {
    PageSize.A4: _mm_pair(A4),
    PageSize.A5: _mm_pair(A5),
    PageSize.LETTER: _mm_pair(LETTER),
}


def page_width_mm(page_size) -> float:
    return PAPER_SIZES[PageSize.parse(page_size)]["width_mm"]


def page_height_mm(page_size) -> float:
    return PAPER_SIZES[PageSize.parse(page_size)]["height_mm"]


def mm_to_px(value_mm: float) -> float:
    return value_mm * PX_PER_MM


def page_padding_mm(page_size) -> float:
    proportional = BASE_PAGE_PADDING_MM * page_width_mm(page_size) / BASE_PAGE_WIDTH_MM
    return max(MIN_PAGE_PADDING_MM, round_half_up(proportional, 1))


def cell_padding_px(page_size) -> int:
    # Tighter table cells on A5
    return 6 if PageSize.parse(page_size) is PageSize.A5 else 8


def available_width_px(page_size) -> float:
    """Printable width between the left and right page margins, in px."""
    return mm_to_px(page_width_mm(page_size) - 2 * page_padding_mm(page_size))


def paper_catalog() -> list[dict]:
    out = []
    for size, dims in PAPER_SIZES.items():
        out.append({
            "id": size.value,
            "width_mm": dims["width_mm"],
            "height_mm": dims["height_mm"],
            "padding_mm": page_padding_mm(size),
            "available_px": round(available_width_px(size), 2),
        })
    return out
