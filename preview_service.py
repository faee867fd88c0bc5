# preview_service.py
from datetime import date

from aggregation import effective_columns, row_value
from catalog import HEADER_BY_ID, INDEX_COLUMN_ID, PLACEHOLDER_DATA, SUMMARY_BY_ID
from layout_service import layout_for_template
from models import ColumnType, HEADER_SUBSECTIONS, PageSize, SummaryLayout, Template
from paper import available_width_px, cell_padding_px, page_height_mm, page_padding_mm, page_width_mm


def _num(value) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "0.00"
    return f"{float(value):.2f}"


def _summary_value(value) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{float(value):.2f}"
    return "" if value is None else str(value)


def _sku_sublines(template: Template, item: dict) -> list[str]:
    lines = []
    if template.show_secondary_text_row and item.get("ctSize"):
        lines.append(f"* Ct.Size ({item['ctSize']})")
    if template.show_barcode_row and item.get("barcode"):
        lines.append(f"* Barcode ({item['barcode']})")
    return lines


def build_preview(template: Template, page_size, data: dict | None = None, printed_on: date | None = None) -> dict:
    """
    Everything the invoice renderer needs for one page: paper geometry,
    header fields, the table (labels, solved widths, formatted cells) and
    the summary block. Nothing is drawn here.
    """
    page_size = PageSize.parse(page_size)
    data = data or PLACEHOLDER_DATA
    printed_on = printed_on or date.today()

    layout = layout_for_template(template, page_size)
    widths = layout.widths

    header_values = data.get("header") or {}
    header = {}
    for sub in HEADER_SUBSECTIONS:
        header[sub] = [
            {"id": fid, "label": HEADER_BY_ID[sub][fid].label if fid in HEADER_BY_ID[sub] else fid,
             "value": header_values.get(fid, "")}
            for fid in getattr(template.header, sub)
        ]

    # The SKU column sits right after the row number regardless of its position in the order
    columns = effective_columns(template)
    columns = (
        [c for c in columns if c.type is ColumnType.PRIMARY_TEXT]
        + [c for c in columns if c.type is not ColumnType.PRIMARY_TEXT]
    )

    table_columns = [{"id": INDEX_COLUMN_ID, "label": "#", "width": widths.get(INDEX_COLUMN_ID), "align": "left"}]
    for col in columns:
        table_columns.append({
            "id": col.id,
            "label": col.label,
            "width": widths.get(col.id),
            "align": "left" if col.type is ColumnType.PRIMARY_TEXT else "right",
        })

    rows = []
    for n, item in enumerate(data.get("line_items") or [], start=1):
        cells = []
        for col in columns:
            agg = template.aggregation(col.id)
            if agg is not None:
                cells.append({"id": col.id, "value": _num(row_value(item, agg))})
            elif col.type is ColumnType.PRIMARY_TEXT:
                cells.append({"id": col.id, "value": str(item.get(col.id) or ""),
                              "sublines": _sku_sublines(template, item)})
            elif col.type is ColumnType.NUMERIC:
                cells.append({"id": col.id, "value": _num(item.get(col.id))})
            else:
                value = item.get(col.id)
                cells.append({"id": col.id, "value": "" if value is None else str(value)})
        rows.append({"index": f"{n}.", "cells": cells})

    summary_values = data.get("summary") or {}
    summary_rows = [
        {"id": fid, "label": SUMMARY_BY_ID[fid].label if fid in SUMMARY_BY_ID else fid,
         "value": _summary_value(summary_values.get(fid))}
        for fid in template.summary
    ]

    return {
        "template_name": template.name,
        "paper": {
            "size": page_size.value,
            "width_mm": page_width_mm(page_size),
            "height_mm": page_height_mm(page_size),
            "padding_mm": page_padding_mm(page_size),
            "cell_padding_px": cell_padding_px(page_size),
            "available_px": round(available_width_px(page_size), 2),
        },
        "font_size_px": layout.font_size_px,
        "show_borders": template.show_borders,
        "header": header,
        "table": {"columns": table_columns, "rows": rows},
        "summary": {
            "layout": template.summary_layout.value,
            "rows": summary_rows,
            "sign_area": {
                "title": "Sign & Stamp",
                "printed_on": printed_on.isoformat(),
                "inline": template.summary_layout is SummaryLayout.FULL,
            },
        },
        "layout": layout.to_dict(),
    }
