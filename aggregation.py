# aggregation.py
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Mapping, Sequence

from catalog import LINE_ITEM_FIELDS, classify, is_catalog_id, line_item_spec
from models import Aggregation, AggregationMode, ColumnSpec, ColumnType, Template

AGGREGATION_ID_PREFIX = "agg_"


def replaced_field_ids(aggregations: Iterable[Aggregation]) -> set[str]:
    out: set[str] = set()
    for agg in aggregations:
        if agg.mode is AggregationMode.REPLACE:
            out.update(agg.source_field_ids)
    return out


def resolve_column(
    column_id: str,
    aggregations: Sequence[Aggregation] = (),
    label_overrides: Mapping[str, str] | None = None,
) -> ColumnSpec:
    """
    Type and display label for one line-item column id.
    Label priority: aggregation label, user override, catalog label, the raw id.
    """
    for agg in aggregations:
        if agg.id == column_id:
            return ColumnSpec(id=column_id, type=ColumnType.NUMERIC, label=agg.label)

    override = (label_overrides or {}).get(column_id)
    spec = line_item_spec(column_id)
    if override:
        label = override
    elif spec:
        label = spec.label
    else:
        label = column_id
    return ColumnSpec(id=column_id, type=classify(column_id), label=label)


def resolve_effective_columns(
    base_column_order: Sequence[str],
    aggregations: Sequence[Aggregation],
    label_overrides: Mapping[str, str] | None = None,
) -> list[ColumnSpec]:
    """
    The ordered columns the table actually shows: the template's line-item order
    minus every source column of a REPLACE aggregation.
    """
    hidden = replaced_field_ids(aggregations)
    agg_ids = {a.id for a in aggregations}
    out = []
    for column_id in base_column_order:
        if column_id in hidden and column_id not in agg_ids:
            continue
        out.append(resolve_column(column_id, aggregations, label_overrides))
    return out


def effective_columns(template: Template) -> list[ColumnSpec]:
    return resolve_effective_columns(
        template.line_items, template.aggregations, template.column_label_overrides
    )


def eligible_aggregation_sources(template: Template) -> list[ColumnSpec]:
    """Numeric catalog columns that are not already hidden by a REPLACE aggregation."""
    hidden = replaced_field_ids(template.aggregations)
    return [s for s in LINE_ITEM_FIELDS if s.type is ColumnType.NUMERIC and s.id not in hidden]


def _next_aggregation_id(template: Template) -> tuple[str, int]:
    taken = {a.id for a in template.aggregations} | set(template.line_items)
    seq = max(1, template.next_aggregation_seq)
    while True:
        candidate = f"{AGGREGATION_ID_PREFIX}{seq}"
        if candidate not in taken and not is_catalog_id(candidate):
            return candidate, seq + 1
        seq += 1


def create_aggregation(
    template: Template,
    source_field_ids: Iterable[str],
    label: str,
    mode=AggregationMode.ADD,
) -> tuple[Template, Aggregation]:
    """
    Adds a computed sum column to the template.

    The new id is appended to the line-item order. In REPLACE mode the source
    columns are removed from that order in the same step.
    Returns (new_template, new_aggregation).
    """
    mode = AggregationMode.parse(mode)

    sources: list[str] = []
    for fid in source_field_ids or ():
        fid = str(fid).strip()
        if fid and fid not in sources:
            sources.append(fid)
    if not sources:
        raise ValueError("An aggregation needs at least one source field.")

    clean_label = (label or "").strip()
    if not clean_label:
        raise ValueError("An aggregation needs a label.")

    for fid in sources:
        spec = line_item_spec(fid)
        if spec is None or spec.type is not ColumnType.NUMERIC:
            raise ValueError(f"Only numeric line-item fields can be aggregated: {fid!r}")

    agg_id, next_seq = _next_aggregation_id(template)
    agg = Aggregation(id=agg_id, label=clean_label, source_field_ids=tuple(sources), mode=mode)

    line_items = list(template.line_items)
    if mode is AggregationMode.REPLACE:
        line_items = [f for f in line_items if f not in sources]
    line_items.append(agg_id)

    new_template = replace(
        template,
        aggregations=template.aggregations + (agg,),
        line_items=tuple(line_items),
        next_aggregation_seq=next_seq,
    )
    return new_template, agg


def remove_aggregation(template: Template, aggregation_id: str) -> Template:
    """
    Drops the aggregation and its column.

    Columns it replaced stay out of the line-item order; they come back only
    when toggled on again.
    """
    if template.aggregation(aggregation_id) is None:
        raise ValueError(f"Aggregation not found: {aggregation_id!r}")

    return replace(
        template,
        aggregations=tuple(a for a in template.aggregations if a.id != aggregation_id),
        line_items=tuple(f for f in template.line_items if f != aggregation_id),
    )


def _as_number(value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def row_value(item: Mapping, aggregation: Aggregation | None) -> float:
    """Sum of the aggregation's source values in one row; non-numeric values count as 0."""
    if aggregation is None or not aggregation.source_field_ids:
        return 0.0
    return sum(_as_number(item.get(fid)) for fid in aggregation.source_field_ids)
