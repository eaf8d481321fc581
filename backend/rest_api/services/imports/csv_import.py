"""
CSV parsing, header auto-mapping and dry-run validation for imports.

Nothing is written here: a dry run tells the caller how many rows would
be accepted, which ones fail and why, and shows a preview.
"""

from __future__ import annotations

import csv
import io
import math
from datetime import date
from typing import Optional, Union

from pydantic import BaseModel, Field

from rest_api.services.imports.registry import ColumnSpec, ImportTemplate, normalize_header
from shared.utils.costing import cost_per_base_unit

Cell = Union[str, float, None]
ParsedRow = dict[str, Cell]

PREVIEW_ROWS = 20


class RowError(BaseModel):
    row: int
    message: str


class DryRunResult(BaseModel):
    ok: bool
    accepted: int = 0
    rejected: int = 0
    mapping: dict[str, str] = Field(default_factory=dict)
    errors: list[RowError] = Field(default_factory=list)
    preview: list[ParsedRow] = Field(default_factory=list)


def parse_csv(text: str) -> tuple[list[str], list[list[str]]]:
    """
    Split CSV text into a header row and data rows.

    Blank lines are skipped. Raises ValueError on malformed CSV.
    """
    reader = csv.reader(io.StringIO(text.strip()))
    try:
        rows = [row for row in reader if any(cell.strip() for cell in row)]
    except csv.Error as exc:
        raise ValueError(f"Malformed CSV: {exc}") from exc

    if not rows:
        return [], []
    headers = [h.strip() for h in rows[0]]
    return headers, rows[1:]


def auto_map(headers: list[str], template: ImportTemplate) -> dict[str, str]:
    """
    Map CSV headers to template keys by normalised name or synonym.

    The result is partial when some columns cannot be matched.
    """
    normalized = [normalize_header(h) for h in headers]
    mapping: dict[str, str] = {}

    for column in template.columns:
        candidates = {normalize_header(c) for c in (column.key, *column.synonyms)}
        for header, norm in zip(headers, normalized):
            if norm in candidates and header not in mapping:
                mapping[header] = column.key
                break

    return mapping


def materialize_rows(
    headers: list[str],
    rows: list[list[str]],
    mapping: dict[str, str],
) -> list[ParsedRow]:
    """Turn raw rows into dicts keyed by template key; unmapped columns drop."""
    materialized = []
    for row in rows:
        obj: ParsedRow = {}
        for i, header in enumerate(headers):
            key = mapping.get(header)
            if key:
                obj[key] = row[i].strip() if i < len(row) else ""
        materialized.append(obj)
    return materialized


def _coerce(column: ColumnSpec, raw: str) -> Cell:
    """Convert one cell to its column type; raises ValueError when it can't."""
    if column.type == "string":
        return raw
    if column.type == "date":
        return date.fromisoformat(raw).isoformat()

    cleaned = raw.replace(",", "")
    if column.type == "money":
        cleaned = cleaned.replace("$", "")
    value = float(cleaned)
    if not math.isfinite(value):
        raise ValueError(raw)
    return value


def _validate_row(template: ImportTemplate, row: ParsedRow) -> tuple[Optional[ParsedRow], list[str]]:
    problems = []
    clean: ParsedRow = {}

    for column in template.columns:
        raw = row.get(column.key)
        if raw is None or raw == "":
            if column.required:
                problems.append(f"{column.label} is required")
            clean[column.key] = None
            continue
        try:
            clean[column.key] = _coerce(column, str(raw))
        except ValueError:
            problems.append(f"{column.label} is not a valid {column.type}: {raw!r}")

    if problems:
        return None, problems
    return clean, []


def dry_run(template: ImportTemplate, text: str) -> DryRunResult:
    """Parse, map and validate ``text`` against ``template`` without saving."""
    try:
        headers, rows = parse_csv(text)
    except ValueError as exc:
        return DryRunResult(ok=False, errors=[RowError(row=0, message=str(exc))])

    if not headers:
        return DryRunResult(ok=False, errors=[RowError(row=0, message="CSV is empty")])

    mapping = auto_map(headers, template)
    missing = [k for k in template.required_keys if k not in mapping.values()]
    if missing:
        return DryRunResult(
            ok=False,
            mapping=mapping,
            errors=[RowError(row=0, message=f"Missing column: {key}") for key in missing],
        )

    result = DryRunResult(ok=True, mapping=mapping)
    for number, row in enumerate(materialize_rows(headers, rows, mapping), start=1):
        clean, problems = _validate_row(template, row)
        if clean is None:
            result.rejected += 1
            result.errors.extend(RowError(row=number, message=p) for p in problems)
            continue

        result.accepted += 1
        if template.type == "receipts":
            clean["unit_cost"] = cost_per_base_unit(clean["total_cost"], clean["qty"])
        if len(result.preview) < PREVIEW_ROWS:
            result.preview.append(clean)

    result.ok = result.rejected == 0
    return result


def render_template(template: ImportTemplate) -> str:
    """Header row of template keys plus one example row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([c.key for c in template.columns])
    writer.writerow([c.example for c in template.columns])
    return buffer.getvalue()
