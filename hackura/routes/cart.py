"""Shopping cart blueprint (session backed)."""
from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlsplit

from flask import Blueprint, abort, flash, jsonify, redirect, render_template, request, url_for
from flask_babel import gettext as _

from hackura.services import cart_service
from hackura.services.catalog_service import EbookNotFoundError
from hackura.utils.logging import get_logger

bp = Blueprint("cart", __name__, url_prefix="/cart")
LOG = get_logger("hackura.cart.routes")


def _wants_json() -> bool:
    if request.is_json:
        return True
    best = request.accept_mimetypes.best_match(["application/json", "text/html"])
    return best == "application/json" and request.accept_mimetypes[best] > request.accept_mimetypes["text/html"]


def _safe_next(default: str) -> str:
    """Return a same-site redirect target from ``next`` or the referrer."""
    candidate: Optional[str] = request.values.get("next") or request.referrer
    if not candidate:
        return default
    parts = urlsplit(candidate)
    if parts.netloc and parts.netloc != request.host:
        return default
    path = parts.path or "/"
    if not path.startswith("/") or path.startswith("//"):
        return default
    return path + (f"?{parts.query}" if parts.query else "")


def _read_quantity(default: int = 1) -> int:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    raw = payload.get("quantity", request.values.get("quantity", default))
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


@bp.route("/", methods=["GET"])
def view_cart():
    return render_template("cart.html", cart=cart_service.cart_summary())


@bp.route("/add/<raw_id>", methods=["POST"])
def add(raw_id: str):
    try:
        line = cart_service.add_to_cart(raw_id, max(1, _read_quantity()))
    except EbookNotFoundError:
        if _wants_json():
            return jsonify({"error": "ebook_missing"}), 404
        abort(404)
    if _wants_json():
        return jsonify({"status": "ok", "quantity": line.quantity, "count": cart_service.cart_count()})
    flash(_("\"%(title)s\" was added to your cart.", title=line.ebook.title), "success")
    return redirect(_safe_next(url_for("cart.view_cart")))


@bp.route("/update/<raw_id>", methods=["POST"])
def update(raw_id: str):
    try:
        quantity = cart_service.set_quantity(raw_id, _read_quantity())
    except EbookNotFoundError:
        if _wants_json():
            return jsonify({"error": "ebook_missing"}), 404
        abort(404)
    if _wants_json():
        return jsonify({"status": "ok", "quantity": quantity, "count": cart_service.cart_count()})
    return redirect(url_for("cart.view_cart"))


@bp.route("/remove/<raw_id>", methods=["POST"])
def remove(raw_id: str):
    try:
        removed = cart_service.remove_from_cart(raw_id)
    except EbookNotFoundError:
        abort(404)
    if _wants_json():
        return jsonify({"status": "ok", "removed": removed, "count": cart_service.cart_count()})
    if removed:
        flash(_("Item removed from your cart."), "success")
    return redirect(url_for("cart.view_cart"))


@bp.route("/clear", methods=["POST"])
def clear():
    cart_service.clear_cart()
    if _wants_json():
        return jsonify({"status": "ok", "count": 0})
    flash(_("Your cart is now empty."), "success")
    return redirect(url_for("cart.view_cart"))


@bp.route("/count.json", methods=["GET"])
def count():
    return jsonify({"count": cart_service.cart_count()})


def register_cart_blueprint(app: Any) -> None:
    if not getattr(app, "_hackura_cart_bp", None):
        app.register_blueprint(bp)
        setattr(app, "_hackura_cart_bp", bp)


__all__ = ["register_cart_blueprint", "bp"]
