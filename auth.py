"""
Login gate for the calculator host.

Off unless both CALCULATOR_USERNAME and CALCULATOR_PASSWORD are configured.
It only guards the host routes; the payout engine knows nothing about it.
"""

import hmac
import logging

from flask import Flask, jsonify, request, session

logger = logging.getLogger(__name__)

# Routes that anyone can visit
UNPROTECTED_ROUTES = {"/health", "/api", "/login", "/logout"}


def gate_enabled(app: Flask) -> bool:
    return bool(app.config.get("CALCULATOR_USERNAME") and app.config.get("CALCULATOR_PASSWORD"))


def check_credentials(app: Flask, username: str, password: str) -> bool:
    """Exact, case-sensitive match against the configured credentials."""
    expected_user = app.config.get("CALCULATOR_USERNAME") or ""
    expected_pass = app.config.get("CALCULATOR_PASSWORD") or ""
    user_ok = hmac.compare_digest(str(username).encode(), expected_user.encode())
    pass_ok = hmac.compare_digest(str(password).encode(), expected_pass.encode())
    return user_ok and pass_ok


def setup_auth(app: Flask) -> None:
    """Registers the gate and the login/logout routes."""

    @app.before_request
    def require_login():
        if not gate_enabled(app) or request.method == "OPTIONS":
            return None
        if request.path in UNPROTECTED_ROUTES or session.get("authenticated"):
            return None
        return jsonify({"error": "Authentication required", "status": "unauthorized"}), 401

    @app.route("/login", methods=["POST"])
    def login():
        if not gate_enabled(app):
            return jsonify({"status": "ok", "authenticated": True, "gate": "disabled"}), 200

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        if check_credentials(app, data.get("username", ""), data.get("password", "")):
            session["authenticated"] = True
            logger.info("Login succeeded")
            return jsonify({"status": "ok", "authenticated": True}), 200

        logger.warning("Login failed")
        return jsonify({
            "error": "Invalid credentials. Case-sensitive. Try again.",
            "status": "unauthorized"
        }), 401

    @app.route("/logout", methods=["POST"])
    def logout():
        session.pop("authenticated", None)
        return jsonify({"status": "ok", "authenticated": False}), 200
