"""
CSV import templates and dry-run validation.
"""

from .registry import TEMPLATES, ColumnSpec, ImportTemplate, get_template, normalize_header
from .csv_import import (
    DryRunResult,
    auto_map,
    dry_run,
    materialize_rows,
    parse_csv,
    render_template,
)

__all__ = [
    "TEMPLATES",
    "ColumnSpec",
    "ImportTemplate",
    "get_template",
    "normalize_header",
    "DryRunResult",
    "auto_map",
    "dry_run",
    "materialize_rows",
    "parse_csv",
    "render_template",
]
