from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from hackura import config as app_config


def _format_number(value: Decimal, decimal_sep: str, thousands_sep: str) -> str:
    sign = "-" if value.is_signed() else ""
    q = value.copy_abs()
    as_str = f"{q:.2f}"
    whole, frac = as_str.split(".")
    # group thousands
    groups = []
    while whole:
        groups.append(whole[-3:])
        whole = whole[:-3]
    grouped = thousands_sep.join(reversed(groups)) if groups else "0"
    return f"{sign}{grouped}{decimal_sep}{frac}"


def format_price(value: Any) -> str:
    """Format a numeric value with the store currency prefix.

    - Prefixes the currency symbol with no space: "GH₵12.50".
    - Two decimals, dot separator; thousands are comma-grouped.
    - Empty or unparsable values render as an empty string.
    """
    if value is None or value == "":
        return ""
    try:
        dec = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        return ""
    formatted = _format_number(dec, decimal_sep=".", thousands_sep=",")
    return f"{app_config.currency_symbol()}{formatted}"


def register_currency_filters(app: Any) -> None:
    """Register custom Jinja filters used by the storefront templates."""
    env = getattr(app, "jinja_env", None)
    if not env:
        return
    filters = getattr(env, "filters", None)
    if not isinstance(filters, dict):
        return
    if "format_price" not in filters:
        filters["format_price"] = format_price


__all__ = ["format_price", "register_currency_filters"]
