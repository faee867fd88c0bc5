# layout_report.py
import argparse
import json

from aggregation import resolve_effective_columns
from config import Config
from layout_service import compute_widths
from models import PageSize
from paper import page_padding_mm, page_width_mm
from template_service import DEFAULT_LINE_ITEMS


def _parse_columns(raw: str) -> list[str]:
    return [c.strip() for c in (raw or "").split(",") if c.strip()]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Show solved invoice column widths for a paper size.")
    parser.add_argument("--paper", type=str, default=Config.DEFAULT_PAPER_SIZE, help="A4, A5 or Letter.")
    parser.add_argument("--font-size", type=int, default=Config.DEFAULT_FONT_SIZE_PX, help="Table font size in px.")
    parser.add_argument("--columns", type=str, default="", help="Comma separated line-item ids (default: the default template's).")
    parser.add_argument("--json", action="store_true", help="Print the layout as JSON.")
    args = parser.parse_args(argv)

    try:
        page_size = PageSize.parse(args.paper)
    except ValueError as e:
        raise SystemExit(str(e))

    column_ids = _parse_columns(args.columns) or list(DEFAULT_LINE_ITEMS)
    columns = resolve_effective_columns(column_ids, ())
    result = compute_widths(page_size, columns, args.font_size)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    print(f"Paper:     {page_size.value} ({page_width_mm(page_size)}mm, margin {page_padding_mm(page_size)}mm)")
    print(f"Font size: {result.font_size_px}px")
    print(f"Available: {result.available_px:.1f}px")
    print("")
    labels = {"index": "#", **{c.id: c.label for c in columns}}
    for col_id, width in result.widths.items():
        print(f"  {col_id:<12} {labels.get(col_id, col_id):<16} {width:>4}px")
    print("")
    print(f"Total:     {result.total_width}px")
    if result.overflows:
        print(f"⚠️  Table overflows the printable width by {result.total_width - result.available_px:.1f}px")
    else:
        print("✅ Table fits the printable width.")


if __name__ == "__main__":
    main()
