# models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


# -----------------------------
# Enums
# -----------------------------
class PageSize(str, Enum):
    A4 = "A4"
    A5 = "A5"
    LETTER = "Letter"

    @classmethod
    def parse(cls, value) -> "PageSize":
        """
        Accepts a PageSize or its identifier ("A4", "a5", "letter").
        Unknown identifiers fail fast: the set of paper sizes is closed.
        """
        if isinstance(value, cls):
            return value
        raw = str(value or "").strip().lower()
        for size in cls:
            if size.value.lower() == raw:
                return size
        raise ValueError(f"Unknown paper size: {value!r} (expected one of {', '.join(s.value for s in cls)})")


class ColumnType(str, Enum):
    PRIMARY_TEXT = "primary_text"      # SKU / product name
    NUMERIC = "numeric"
    SECONDARY_TEXT = "secondary_text"  # Ct.Size and similar short text
    INDEX = "index"                    # synthetic row-number column

    @classmethod
    def parse(cls, value) -> "ColumnType":
        """Accepts a ColumnType, its value ("numeric") or its name ("NUMERIC")."""
        if isinstance(value, cls):
            return value
        raw = str(value or "").strip().lower()
        for column_type in cls:
            if column_type.value == raw:
                return column_type
        raise ValueError(f"Unknown column type: {value!r}")


class AggregationMode(str, Enum):
    ADD = "add"          # computed column shown alongside its sources
    REPLACE = "replace"  # sources are hidden once the aggregation exists

    @classmethod
    def parse(cls, value) -> "AggregationMode":
        if isinstance(value, cls):
            return value
        raw = str(value or "").strip().lower()
        for mode in cls:
            if mode.value == raw:
                return mode
        raise ValueError(f"Unknown aggregation mode: {value!r} (expected 'add' or 'replace')")


class SummaryLayout(str, Enum):
    SPLIT = "split"  # summary table + sign & stamp area side by side
    FULL = "full"    # full width summary, sign line underneath


# -----------------------------
# Value objects
# -----------------------------
@dataclass(frozen=True)
class WidthConstraint:
    """Pixel widths for one column type: `min` under pressure, `optimal` without."""
    min: float
    optimal: float


@dataclass(frozen=True)
class ColumnSpec:
    id: str
    type: ColumnType
    label: str


@dataclass(frozen=True)
class Aggregation:
    """
    A synthetic numeric column: the per-row sum of `source_field_ids`.
    In REPLACE mode the sources drop out of the effective column list.
    """
    id: str
    label: str
    source_field_ids: tuple[str, ...]
    mode: AggregationMode = AggregationMode.ADD

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "source_field_ids": list(self.source_field_ids),
            "mode": self.mode.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Aggregation":
        if not str(data.get("id") or "").strip():
            raise ValueError("Aggregation is missing its id")
        return cls(
            id=str(data["id"]),
            label=str(data.get("label") or data["id"]),
            source_field_ids=tuple(str(f) for f in (data.get("source_field_ids") or ())),
            mode=AggregationMode.parse(data.get("mode") or AggregationMode.ADD),
        )


@dataclass(frozen=True)
class HeaderSelection:
    top_row: tuple[str, ...] = ()
    left: tuple[str, ...] = ()
    right: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {"top_row": list(self.top_row), "left": list(self.left), "right": list(self.right)}


HEADER_SUBSECTIONS = ("top_row", "left", "right")


# -----------------------------
# Template (editor configuration)
# -----------------------------
@dataclass(frozen=True)
class Template:
    """
    The whole editor configuration for one invoice layout.

    Never mutated in place: every edit goes through a function in
    template_service / aggregation that returns a new Template.
    """
    name: str = "New Template"
    header: HeaderSelection = field(default_factory=HeaderSelection)
    line_items: tuple[str, ...] = ()
    summary: tuple[str, ...] = ()

    font_size_px: int = 9
    show_secondary_text_row: bool = True   # "* Ct.Size (..)" under the product name
    show_barcode_row: bool = False         # "* Barcode (..)" under the product name
    summary_layout: SummaryLayout = SummaryLayout.SPLIT
    show_borders: bool = False
    # Read-only view over a private copy, so snapshots never share it
    column_label_overrides: Mapping[str, str] = field(default_factory=dict, hash=False)

    aggregations: tuple[Aggregation, ...] = ()
    # Counter for aggregation ids (agg_1, agg_2, ...), scoped to this template
    next_aggregation_seq: int = 1

    def __post_init__(self):
        object.__setattr__(self, "column_label_overrides", MappingProxyType(dict(self.column_label_overrides)))

    def aggregation(self, aggregation_id: str) -> Optional[Aggregation]:
        for agg in self.aggregations:
            if agg.id == aggregation_id:
                return agg
        return None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "header": self.header.to_dict(),
            "line_items": list(self.line_items),
            "summary": list(self.summary),
            "font_size_px": self.font_size_px,
            "show_secondary_text_row": self.show_secondary_text_row,
            "show_barcode_row": self.show_barcode_row,
            "summary_layout": self.summary_layout.value,
            "show_borders": self.show_borders,
            "column_label_overrides": dict(self.column_label_overrides),
            "aggregations": [a.to_dict() for a in self.aggregations],
            "next_aggregation_seq": self.next_aggregation_seq,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "Template":
        """
        Builds a Template from its JSON form.
        Bad scalar options fall back to defaults rather than failing the request.
        """
        data = data if isinstance(data, dict) else {}
        defaults = cls()

        header_raw = data.get("header") if isinstance(data.get("header"), dict) else {}
        header = HeaderSelection(**{
            sub: tuple(str(f) for f in (header_raw.get(sub) or ())) for sub in HEADER_SUBSECTIONS
        })

        try:
            font_size = int(data.get("font_size_px", defaults.font_size_px))
        except (TypeError, ValueError):
            font_size = defaults.font_size_px

        layout_raw = str(data.get("summary_layout") or "").strip().lower()
        summary_layout = SummaryLayout(layout_raw) if layout_raw in ("split", "full") else SummaryLayout.SPLIT

        labels_raw = data.get("column_label_overrides")
        labels = {str(k): str(v) for k, v in labels_raw.items()} if isinstance(labels_raw, dict) else {}

        aggregations = tuple(Aggregation.from_dict(a) for a in (data.get("aggregations") or ()) if isinstance(a, dict))

        try:
            next_seq = int(data.get("next_aggregation_seq", len(aggregations) + 1))
        except (TypeError, ValueError):
            next_seq = len(aggregations) + 1

        return cls(
            name=str(data.get("name") or defaults.name),
            header=header,
            line_items=tuple(str(f) for f in (data.get("line_items") or ())),
            summary=tuple(str(f) for f in (data.get("summary") or ())),
            font_size_px=font_size,
            show_secondary_text_row=bool(data.get("show_secondary_text_row", defaults.show_secondary_text_row)),
            show_barcode_row=bool(data.get("show_barcode_row", defaults.show_barcode_row)),
            summary_layout=summary_layout,
            show_borders=bool(data.get("show_borders", defaults.show_borders)),
            column_label_overrides=labels,
            aggregations=aggregations,
            next_aggregation_seq=max(1, next_seq),
        )


# -----------------------------
# Solver output
# -----------------------------
@dataclass(frozen=True)
class LayoutResult:
    """
    Pixel width per column id (including "index") and the font size to render with.
    Derived data: recompute whenever paper size, columns or font size change.
    """
    widths: dict[str, int]
    font_size_px: float
    available_px: float = 0.0

    @property
    def total_width(self) -> int:
        return sum(self.widths.values())

    @property
    def overflows(self) -> bool:
        # Widths are rounded per column, so allow half a pixel of slack each
        return self.total_width > self.available_px + 0.5 * len(self.widths)

    def to_dict(self) -> dict:
        return {
            "widths": dict(self.widths),
            "font_size_px": self.font_size_px,
            "available_px": round(self.available_px, 2),
            "total_width": self.total_width,
            "overflows": self.overflows,
        }
