"""Public storefront blueprint.

Routes:
    /                     -> home page with featured ebooks
    /ebooks               -> catalog listing (search, sort, pagination)
    /ebook/<id>           -> ebook detail with related ebooks
    /ebook/<id>/share.json -> Web Share payload for the detail page
    /contact              -> contact form (stored for the admin inbox)
"""
from __future__ import annotations

from typing import Any

from flask import Blueprint, abort, flash, jsonify, redirect, render_template, request, url_for
from flask_babel import gettext as _
from flask_babel import lazy_gettext as _l

from hackura.services import catalog_service, messages_service
from hackura.services.catalog_service import EbookNotFoundError
from hackura.services.messages_service import MessageValidationError
from hackura.utils.logging import get_logger

bp = Blueprint("storefront", __name__)
LOG = get_logger("hackura.storefront")

_ERROR_MESSAGES = {
    "name_required": _l("Please tell us your name."),
    "name_too_long": _l("Name is too long."),
    "email_invalid": _l("Enter a valid email address."),
    "message_required": _l("Message cannot be empty."),
    "message_too_long": _l("Message is too long."),
}


@bp.route("/", methods=["GET"])
def index():
    return render_template("index.html", featured=catalog_service.featured())


@bp.route("/ebooks", methods=["GET"])
def ebooks():
    listing = catalog_service.browse(
        search=request.args.get("q"),
        sort=request.args.get("sort"),
        page=request.args.get("page", 1),
    )
    return render_template("ebooks.html", listing=listing)


def _load_detail(raw_id: Any):
    try:
        return catalog_service.get_ebook_detail(raw_id)
    except EbookNotFoundError:
        LOG.info("Ebook not found id=%s", raw_id)
        abort(404)


@bp.route("/ebook/<raw_id>", methods=["GET"])
def ebook_detail(raw_id: str):
    detail = _load_detail(raw_id)
    ebook = detail["ebook"]
    share = catalog_service.share_payload(ebook, request.url)
    return render_template(
        "ebook_detail.html",
        ebook=ebook,
        cover_url=detail["cover_url"],
        related=detail["related"],
        share=share,
    )


@bp.route("/ebook/<raw_id>/share.json", methods=["GET"])
def ebook_share(raw_id: str):
    detail = _load_detail(raw_id)
    ebook = detail["ebook"]
    url = url_for("storefront.ebook_detail", raw_id=ebook.id, _external=True)
    return jsonify(catalog_service.share_payload(ebook, url))


@bp.route("/contact", methods=["GET", "POST"])
def contact():
    form = {"name": "", "email": "", "message": ""}
    if request.method == "POST":
        form = {key: (request.form.get(key) or "") for key in form}
        try:
            messages_service.submit_message(form["name"], form["email"], form["message"])
        except MessageValidationError as exc:
            flash(str(_ERROR_MESSAGES.get(str(exc), _("Message could not be sent."))), "error")
            return render_template("contact.html", form=form), 400
        flash(_("Thanks! Your message has been sent."), "success")
        return redirect(url_for("storefront.contact"))
    return render_template("contact.html", form=form)


def register_storefront_blueprint(app: Any) -> None:
    if not getattr(app, "_hackura_storefront_bp", None):
        app.register_blueprint(bp)
        setattr(app, "_hackura_storefront_bp", bp)


__all__ = ["register_storefront_blueprint", "bp"]
