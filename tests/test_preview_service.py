from datetime import date

import pytest

from aggregation import create_aggregation
from models import PageSize
from preview_service import build_preview
from template_service import default_template, move_field, set_column_label, set_options

PRINTED_ON = date(2026, 1, 8)


@pytest.fixture
def preview():
    return build_preview(default_template(), PageSize.A4, printed_on=PRINTED_ON)


def test_paper_block(preview):
    assert preview["paper"]["size"] == "A4"
    assert preview["paper"]["width_mm"] == 210.0
    assert preview["paper"]["padding_mm"] == 12.0
    assert preview["paper"]["cell_padding_px"] == 8
    assert preview["paper"]["available_px"] == pytest.approx(702.99, abs=0.01)


def test_header_fields_carry_labels_and_values(preview):
    top = preview["header"]["top_row"]
    assert top[0] == {"id": "companyName", "label": "Company/Distributor Name", "value": "Test Distributor"}
    assert [f["id"] for f in preview["header"]["right"]][:2] == ["tcn", "invoiceNo"]


def test_table_columns_use_solved_widths(preview):
    columns = preview["table"]["columns"]
    assert columns[0] == {"id": "index", "label": "#", "width": 40, "align": "left"}
    assert columns[1]["id"] == "sku"
    assert columns[1]["width"] == 120
    assert columns[2] == {"id": "ctn", "label": "Ctn", "width": 50, "align": "right"}
    assert preview["layout"]["overflows"] is False


def test_rows_format_numbers_and_sku_sublines(preview):
    first = preview["table"]["rows"][0]
    assert first["index"] == "1."
    cells = {c["id"]: c for c in first["cells"]}
    assert cells["sku"]["value"] == "ISLAMABAD TEA LEAF BLEND 430 GM"
    assert cells["sku"]["sublines"] == ["* Ct.Size (24)"]
    assert cells["ctn"]["value"] == "5.00"
    assert cells["grossValue"]["value"] == "490.86"
    assert len(preview["table"]["rows"]) == 3


def test_barcode_subline_when_enabled():
    tpl = set_options(default_template(), show_barcode_row=True, show_secondary_text_row=False)
    out = build_preview(tpl, "A4", printed_on=PRINTED_ON)
    sku = out["table"]["rows"][1]["cells"][0]
    assert sku["sublines"] == ["* Barcode (2345678901234)"]


def test_aggregation_cells_are_row_sums():
    tpl, agg = create_aggregation(default_template(), ["tp", "tpVal"], "TP Total", "replace")
    out = build_preview(tpl, "A4", printed_on=PRINTED_ON)

    labels = [c["label"] for c in out["table"]["columns"]]
    assert "TP Total" in labels
    assert "T.P" not in labels

    cells = {c["id"]: c["value"] for c in out["table"]["rows"][0]["cells"]}
    assert cells[agg.id] == "104520.00"


def test_sku_column_is_pinned_after_row_number():
    tpl = default_template()
    for _ in range(3):
        tpl = move_field(tpl, "line_items", "sku", "down")
    out = build_preview(tpl, "A4", printed_on=PRINTED_ON)
    assert [c["id"] for c in out["table"]["columns"]][:2] == ["index", "sku"]


def test_summary_block(preview):
    summary = preview["summary"]
    assert summary["layout"] == "split"
    rows = {r["id"]: r["value"] for r in summary["rows"]}
    assert rows["totalQty"] == "8Ctn, 1 Pcs"
    assert rows["netValue"] == "98662.86"
    assert summary["sign_area"] == {"title": "Sign & Stamp", "printed_on": "2026-01-08", "inline": False}


def test_a5_preview_uses_tighter_cells():
    out = build_preview(default_template(), PageSize.A5, printed_on=PRINTED_ON)
    assert out["paper"]["cell_padding_px"] == 6
    assert out["paper"]["padding_mm"] == 8.5


def test_renamed_aggregation_shows_in_table_header():
    tpl, agg = create_aggregation(default_template(), ["tp", "tpVal"], "TP Total", "add")
    tpl = set_column_label(tpl, agg.id, "Trade Total")
    columns = build_preview(tpl, PageSize.A4, printed_on=PRINTED_ON)["table"]["columns"]
    assert [c["label"] for c in columns if c["id"] == agg.id] == ["Trade Total"]
