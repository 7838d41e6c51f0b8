"""Session-backed shopping cart.

The cart lives in the signed Flask session as ``{"<ebook_id>": quantity}``;
rows are materialized against the catalog on every read so deleted ebooks
drop out and prices are always current.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from flask import session

from hackura.db.repositories import ebooks_repo
from hackura.services.catalog_service import EbookCard, EbookNotFoundError, parse_ebook_id, to_card
from hackura.utils.logging import get_logger

LOG = get_logger("hackura.cart")

SESSION_CART_KEY = "cart"
MAX_QUANTITY = 10


@dataclass
class CartLine:
    ebook: EbookCard
    quantity: int

    @property
    def line_total(self) -> float:
        return round(self.ebook.price * self.quantity, 2)


def _clamp(quantity: int) -> int:
    return max(1, min(MAX_QUANTITY, quantity))


def _read_cart() -> Dict[str, int]:
    raw = session.get(SESSION_CART_KEY)
    if not isinstance(raw, dict):
        return {}
    cleaned: Dict[str, int] = {}
    for key, qty in raw.items():
        try:
            qty_int = int(qty)
            parse_ebook_id(key)
        except (TypeError, ValueError, EbookNotFoundError):
            continue
        if qty_int > 0:
            cleaned[str(key)] = _clamp(qty_int)
    return cleaned


def _write_cart(cart: Dict[str, int]) -> None:
    session[SESSION_CART_KEY] = cart
    session.modified = True


def add_to_cart(ebook_id: Any, quantity: int = 1) -> CartLine:
    target = parse_ebook_id(ebook_id)
    ebook = ebooks_repo.get_ebook(target)
    if ebook is None:
        raise EbookNotFoundError("ebook_missing")
    cart = _read_cart()
    key = str(target)
    cart[key] = _clamp(cart.get(key, 0) + max(1, int(quantity)))
    _write_cart(cart)
    LOG.debug("cart add ebook_id=%s qty=%s", target, cart[key])
    return CartLine(ebook=to_card(ebook), quantity=cart[key])


def remove_from_cart(ebook_id: Any) -> bool:
    key = str(parse_ebook_id(ebook_id))
    cart = _read_cart()
    if key not in cart:
        return False
    del cart[key]
    _write_cart(cart)
    return True


def set_quantity(ebook_id: Any, quantity: Any) -> int:
    """Set a line quantity; zero or less removes the line. Returns the stored quantity."""
    key = str(parse_ebook_id(ebook_id))
    try:
        qty = int(quantity)
    except (TypeError, ValueError):
        qty = 1
    cart = _read_cart()
    if qty <= 0:
        cart.pop(key, None)
        _write_cart(cart)
        return 0
    if key not in cart:
        raise EbookNotFoundError("ebook_missing")
    cart[key] = _clamp(qty)
    _write_cart(cart)
    return cart[key]


def clear_cart() -> None:
    session.pop(SESSION_CART_KEY, None)


def cart_count() -> int:
    return sum(_read_cart().values())


def cart_summary() -> Dict[str, Any]:
    cart = _read_cart()
    ebooks = ebooks_repo.get_ebooks(int(k) for k in cart)
    lines: List[CartLine] = []
    stale = []
    for key, qty in cart.items():
        ebook = ebooks.get(int(key))
        if ebook is None:
            stale.append(key)
            continue
        lines.append(CartLine(ebook=to_card(ebook), quantity=qty))
    if stale:
        LOG.info("pruning %s unavailable ebook(s) from cart", len(stale))
        for key in stale:
            cart.pop(key, None)
        _write_cart(cart)
    subtotal = round(sum(line.line_total for line in lines), 2)
    return {
        "items": lines,
        "count": sum(line.quantity for line in lines),
        "subtotal": subtotal,
    }


__all__ = [
    "SESSION_CART_KEY",
    "MAX_QUANTITY",
    "CartLine",
    "add_to_cart",
    "remove_from_cart",
    "set_quantity",
    "clear_cart",
    "cart_count",
    "cart_summary",
]
