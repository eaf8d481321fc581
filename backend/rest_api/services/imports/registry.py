"""
Import template registry: receipts, sales and expenses.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal, Optional

ColumnType = Literal["string", "number", "date", "money"]


@dataclass(frozen=True)
class ColumnSpec:
    key: str
    label: str
    type: ColumnType
    required: bool = False
    synonyms: tuple[str, ...] = ()
    example: str = ""


@dataclass(frozen=True)
class ImportTemplate:
    type: str
    version: int
    description: str
    columns: tuple[ColumnSpec, ...] = field(default_factory=tuple)

    @property
    def required_keys(self) -> list[str]:
        return [c.key for c in self.columns if c.required]

    @property
    def filename(self) -> str:
        return f"{self.type}_template_v{self.version}.csv"


TEMPLATES: dict[str, ImportTemplate] = {
    "receipts": ImportTemplate(
        type="receipts",
        version=1,
        description="Receipt lines (one row per item in the receipt)",
        columns=(
            ColumnSpec("date", "Purchase date", "date", True, ("purchased_at", "purchase_date"), "2025-09-14"),
            ColumnSpec("vendor", "Vendor", "string", False, ("supplier", "store"), "Restaurant Depot"),
            ColumnSpec("note", "Note", "string", False, ("invoice", "memo"), "Invoice 1234"),
            ColumnSpec("item_name", "Item name", "string", True, ("item", "inventory_item"), "Mozzarella"),
            ColumnSpec("qty", "Qty (base)", "number", True, ("quantity", "qty_base"), "1000"),
            ColumnSpec("unit", "Unit (base)", "string", False, ("base_unit",), "g"),
            ColumnSpec("total_cost", "Total cost", "money", True, ("cost", "amount"), "57.89"),
        ),
    ),
    "sales": ImportTemplate(
        type="sales",
        version=1,
        description="Sales rows (one row per line item)",
        columns=(
            ColumnSpec("date", "Date", "date", True, ("sold_at",), "2025-09-01"),
            ColumnSpec("item_name", "Item", "string", True, ("product",), "Cheese Pizza 14\""),
            ColumnSpec("qty", "Qty", "number", True, ("quantity",), "2"),
            ColumnSpec("unit_price", "Unit $", "money", True, ("price",), "10.99"),
            ColumnSpec("tax", "Tax $", "money"),
            ColumnSpec("discount", "Discount $", "money"),
            ColumnSpec("channel", "Channel", "string", False, ("source", "pos"), "dine-in"),
            ColumnSpec("order_id", "Order ID", "string", False, (), "A1001"),
        ),
    ),
    "expenses": ImportTemplate(
        type="expenses",
        version=1,
        description="Expenses (one row per expense)",
        columns=(
            ColumnSpec("date", "Date", "date", True, (), "2025-09-01"),
            ColumnSpec("vendor", "Vendor", "string"),
            ColumnSpec("amount", "Amount", "money", True, ("total", "cost"), "120.00"),
            ColumnSpec("category", "Category", "string", True, (), "Utilities"),
            ColumnSpec("note", "Note", "string"),
            ColumnSpec("tax", "Tax", "money"),
        ),
    ),
}


_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_header(header: str) -> str:
    """``"Item Name"``, ``"item_name"`` and ``"ITEM-NAME"`` all become ``itemname``."""
    return _NON_ALNUM.sub("", header.lower()).strip()


def get_template(import_type: str) -> Optional[ImportTemplate]:
    return TEMPLATES.get(import_type)
