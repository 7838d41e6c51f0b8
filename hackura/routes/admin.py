"""Hackura admin blueprint.

Routes:
    /admin/login                 -> password login for the admin area
    /admin/                      -> ebook table
    /admin/new                   -> create an ebook
    /admin/edit/<id>             -> edit title/author/description/price
    /admin/edit/<id>/cover       -> upload a replacement cover image
    /admin/delete/<id>           -> delete an ebook (and its stored cover)
    /admin/messages/             -> contact form inbox
    /admin/api/ebooks            -> JSON ebook list

All routes except login enforce admin access via ensure_admin.
"""
from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import urlencode

from flask import Blueprint, abort, flash, jsonify, redirect, render_template, request, url_for
from flask_babel import gettext as _
from flask_babel import lazy_gettext as _l

from hackura.services import admin_ebooks_service, messages_service
from hackura.services.admin_ebooks_service import CoverUploadError, EbookValidationError
from hackura.services.catalog_service import EbookNotFoundError
from hackura.services.messages_service import MessageNotFoundError
from hackura.utils import (
    PermissionError,
    ensure_admin,
    login_admin,
    logout_admin,
    verify_admin_password,
)
from hackura import config as app_config
from hackura.utils.logging import get_logger

bp = Blueprint("admin", __name__, url_prefix="/admin")
LOG = get_logger("hackura.admin")

_ERROR_MESSAGES = {
    "ebook_missing": _l("Ebook not found."),
    "message_missing": _l("Message could not be found."),
    "title_required": _l("Title is required."),
    "title_too_long": _l("Title is too long."),
    "author_too_long": _l("Author name is too long."),
    "invalid_price": _l("Price cannot be negative."),
    "file_missing": _l("Choose an image to upload."),
    "unsupported_type": _l("Cover must be a JPG, PNG or WEBP image."),
    "file_too_large": _l("Cover image is larger than 3 MB."),
    "api_key_missing": _l("Storage is not configured."),
    "http_error": _l("Storage request failed."),
    "network_error": _l("Storage could not be reached."),
    "invalid_credentials": _l("Incorrect password."),
    "admin_disabled": _l("Admin login is not configured."),
    "admin_required": _l("Admin privileges required."),
}


def _error_message_for(code: str) -> str:
    message = _ERROR_MESSAGES.get(code)
    return str(message) if message is not None else code


def _json_error(
    code: str,
    status: int = 400,
    *,
    message: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
):
    payload: Dict[str, Any] = {"error": code}
    final_message = message or _ERROR_MESSAGES.get(code)
    if final_message:
        payload["message"] = str(final_message)
    if details is not None:
        payload["details"] = details
    return jsonify(payload), status


def _login_redirect():
    target = request.full_path or request.path or "/"
    if target.endswith("?"):
        target = target[:-1]
    return redirect(f"{url_for('admin.login')}?{urlencode({'next': target})}")


def _ensure_admin(prefer_redirect: bool = False):
    try:
        ensure_admin()
    except PermissionError:
        if prefer_redirect:
            return _login_redirect()
        return _json_error("admin_required", 403)
    return True


def _require_admin():
    return _ensure_admin(prefer_redirect=True)


def _require_admin_json():
    return _ensure_admin(prefer_redirect=False)


def _safe_next(raw: Optional[str]) -> str:
    if raw and raw.startswith("/") and not raw.startswith("//"):
        return raw
    return url_for("admin.ebooks")


# ------------------- Session --------------------
@bp.route("/login", methods=["GET", "POST"])
def login():
    next_url = _safe_next(request.values.get("next"))
    if request.method == "POST":
        if not app_config.admin_login_enabled():
            flash(_error_message_for("admin_disabled"), "error")
            return render_template("admin/login.html", next_url=next_url), 503
        if not verify_admin_password(request.form.get("password")):
            LOG.warning("Failed admin login from %s", request.remote_addr)
            flash(_error_message_for("invalid_credentials"), "error")
            return render_template("admin/login.html", next_url=next_url), 401
        login_admin()
        LOG.info("Admin login from %s", request.remote_addr)
        return redirect(next_url)
    return render_template("admin/login.html", next_url=next_url)


@bp.route("/logout", methods=["POST"])
def logout():
    logout_admin()
    return redirect(url_for("storefront.index"))


# ------------------- Ebooks --------------------
@bp.route("/", methods=["GET"])
def ebooks():
    auth = _require_admin()
    if auth is not True:
        return auth
    return render_template("admin/ebooks.html", listing=admin_ebooks_service.list_for_admin())


@bp.route("/new", methods=["GET", "POST"])
def new_ebook():
    auth = _require_admin()
    if auth is not True:
        return auth
    form: Dict[str, Any] = {"title": "", "author": "", "price": 0, "description": ""}
    if request.method == "POST":
        form = {key: request.form.get(key, "") for key in form}
        try:
            ebook = admin_ebooks_service.create_ebook(form, request.files.get("cover"))
        except (EbookValidationError, CoverUploadError) as exc:
            flash(_("Error creating ebook: %(reason)s", reason=_error_message_for(str(exc))), "error")
            return render_template("admin/new.html", form=form), 400
        flash(_("\"%(title)s\" has been created.", title=ebook.title), "success")
        return redirect(url_for("admin.ebooks"))
    return render_template("admin/new.html", form=form)


def _load_or_404(raw_id: Any) -> Dict[str, Any]:
    try:
        return admin_ebooks_service.load_for_edit(raw_id)
    except EbookNotFoundError as exc:
        flash(_("Error fetching ebook: %(reason)s", reason=_error_message_for(str(exc))), "error")
        abort(404)


@bp.route("/edit/<raw_id>", methods=["GET"])
def edit_ebook(raw_id: str):
    auth = _require_admin()
    if auth is not True:
        return auth
    loaded = _load_or_404(raw_id)
    ebook = loaded["ebook"]
    form = {
        "title": ebook.title,
        "author": ebook.author,
        "price": ebook.price,
        "description": ebook.description,
    }
    return render_template("admin/edit.html", ebook=ebook, cover_url=loaded["cover_url"], form=form)


@bp.route("/edit/<raw_id>", methods=["POST"])
def save_ebook(raw_id: str):
    auth = _require_admin()
    if auth is not True:
        return auth
    loaded = _load_or_404(raw_id)
    form = {key: request.form.get(key, "") for key in ("title", "author", "price", "description")}
    try:
        ebook = admin_ebooks_service.update_ebook(loaded["ebook"].id, form)
    except EbookValidationError as exc:
        flash(_("Error updating ebook: %(reason)s", reason=_error_message_for(str(exc))), "error")
        return render_template(
            "admin/edit.html",
            ebook=loaded["ebook"],
            cover_url=loaded["cover_url"],
            form=form,
        ), 400
    except EbookNotFoundError:
        abort(404)
    flash(_("Ebook Updated: \"%(title)s\" has been successfully updated.", title=ebook.title), "success")
    return redirect(url_for("admin.ebooks"))


@bp.route("/edit/<raw_id>/cover", methods=["POST"])
def upload_cover(raw_id: str):
    auth = _require_admin()
    if auth is not True:
        return auth
    try:
        ebook = admin_ebooks_service.replace_cover(raw_id, request.files.get("cover"))
    except EbookNotFoundError:
        abort(404)
    except CoverUploadError as exc:
        flash(_("Cover upload failed: %(reason)s", reason=_error_message_for(str(exc))), "error")
        return redirect(url_for("admin.edit_ebook", raw_id=raw_id))
    flash(_("Cover image updated."), "success")
    return redirect(url_for("admin.edit_ebook", raw_id=ebook.id))


@bp.route("/delete/<raw_id>", methods=["POST"])
def delete_ebook(raw_id: str):
    auth = _require_admin()
    if auth is not True:
        return auth
    try:
        result = admin_ebooks_service.delete_ebook(raw_id)
    except EbookNotFoundError:
        abort(404)
    flash(_("\"%(title)s\" has been deleted.", title=result["title"]), "success")
    return redirect(url_for("admin.ebooks"))


@bp.route("/api/ebooks", methods=["GET"])
def api_ebooks():
    auth = _require_admin_json()
    if auth is not True:
        return auth
    listing = admin_ebooks_service.list_for_admin()
    return jsonify({
        "ebooks": [e.as_dict() for e in listing["ebooks"]],
        "summary": listing["summary"],
    })


# ------------------- Messages --------------------
@bp.route("/messages/", methods=["GET"])
def messages():
    auth = _require_admin()
    if auth is not True:
        return auth
    return render_template("admin/messages.html", inbox=messages_service.list_messages())


@bp.route("/messages/<int:message_id>/read", methods=["POST"])
def message_read(message_id: int):
    auth = _require_admin()
    if auth is not True:
        return auth
    is_read = request.form.get("is_read", "1") not in ("0", "false")
    try:
        messages_service.mark_read(message_id, is_read)
    except MessageNotFoundError:
        abort(404)
    return redirect(url_for("admin.messages"))


@bp.route("/messages/<int:message_id>/delete", methods=["POST"])
def message_delete(message_id: int):
    auth = _require_admin()
    if auth is not True:
        return auth
    try:
        messages_service.delete_message(message_id)
    except MessageNotFoundError:
        abort(404)
    flash(_("Message deleted."), "success")
    return redirect(url_for("admin.messages"))


def register_admin_blueprint(app: Any) -> None:
    if not getattr(app, "_hackura_admin_bp", None):
        app.register_blueprint(bp)
        setattr(app, "_hackura_admin_bp", bp)


__all__ = ["register_admin_blueprint", "bp"]
