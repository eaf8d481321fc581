"""
Costing helpers used by inventory, receipts and recipes.

Prices are per purchase pack; ``pack_to_base_factor`` converts a pack into
base units (e.g. 1 kg pack -> 1000 g).
"""

import math
from typing import Optional


def _as_float(value: object) -> float:
    try:
        return float(value if value is not None else 0)
    except (TypeError, ValueError):
        return math.nan


def cost_per_base_unit(last_price: Optional[float], pack_to_base_factor: Optional[float]) -> float:
    """
    Price of ONE base unit.

    $8.00 per kg with a factor of 1000 (g per kg) gives $0.008 per gram.
    Missing, non-finite or non-positive inputs give 0.
    """
    price = _as_float(last_price)
    factor = _as_float(pack_to_base_factor)
    if not math.isfinite(price) or not math.isfinite(factor) or factor <= 0:
        return 0.0
    return price / factor


def cost_for_base_qty(qty_in_base: Optional[float], unit_cost: Optional[float]) -> float:
    """Cost of a quantity expressed in base units."""
    qty = _as_float(qty_in_base)
    cost = _as_float(unit_cost)
    if not math.isfinite(qty) or not math.isfinite(cost):
        return 0.0
    return qty * cost


def round_money(amount: Optional[float]) -> float:
    """Round to cents."""
    value = _as_float(amount)
    if not math.isfinite(value):
        return 0.0
    # half-up, not banker's rounding
    return math.floor(value * 100 + 0.5) / 100


def format_money(amount: Optional[float]) -> str:
    """Format as ``$x.xx``; anything unusable renders as ``$0.00``."""
    value = _as_float(amount)
    if not math.isfinite(value):
        return "$0.00"
    return f"${value:.2f}"
