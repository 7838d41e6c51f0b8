from __future__ import annotations

import pytest
from flask import Flask
from werkzeug.security import generate_password_hash

from hackura.utils import identity


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("HACKURA_ADMIN_PASSWORD_HASH", raising=False)
    monkeypatch.delenv("HACKURA_ADMIN_PASSWORD", raising=False)


def test_verify_admin_password_disabled_without_secret():
    assert identity.verify_admin_password("anything") is False


def test_verify_admin_password_prefers_hash(monkeypatch):
    monkeypatch.setenv("HACKURA_ADMIN_PASSWORD_HASH", generate_password_hash("hashed"))
    monkeypatch.setenv("HACKURA_ADMIN_PASSWORD", "plain")
    assert identity.verify_admin_password("hashed") is True
    assert identity.verify_admin_password("plain") is False


def test_verify_admin_password_plain(monkeypatch):
    monkeypatch.setenv("HACKURA_ADMIN_PASSWORD", "plain")
    assert identity.verify_admin_password("plain") is True
    assert identity.verify_admin_password("Plain") is False
    assert identity.verify_admin_password("") is False
    assert identity.verify_admin_password(None) is False


def test_login_logout_toggle_admin_session():
    app = Flask(__name__)
    app.config["SECRET_KEY"] = "identity-test"
    with app.test_request_context("/"):
        with pytest.raises(identity.PermissionError):
            identity.ensure_admin()
        identity.login_admin()
        assert identity.is_admin_user() is True
        identity.ensure_admin()
        identity.logout_admin()
        assert identity.is_admin_user() is False


def test_normalize_email():
    assert identity.normalize_email("  A@B.Co ") == "a@b.co"
    assert identity.normalize_email("   ") is None
    assert identity.normalize_email(42) is None
