"""Account registration and session endpoints."""

from __future__ import annotations

from flask import Blueprint, g, request

from insights.api.deps import json_response, require_session, timing
from insights.schemas import AccountSchema, LoginSchema, RegisterSchema, SessionSchema
from insights.services.accounts.dto import AccountRegisterIn
from insights.services.registry import get_services

bp = Blueprint("auth", __name__, url_prefix="/auth")

register_schema = RegisterSchema()
login_schema = LoginSchema()
account_schema = AccountSchema()
session_schema = SessionSchema()


@bp.post("/register")
@timing
def register():
    """Create an account and return its public representation."""

    payload = register_schema.load(request.get_json(silent=True) or {})
    account = get_services().accounts.register_account(
        AccountRegisterIn(email=payload["email"], password=payload["password"])
    )
    return json_response({"data": account_schema.dump(account)}, status=201)


@bp.post("/login")
@timing
def login():
    """Exchange email and password for a signed session."""

    data = login_schema.load(request.get_json(silent=True) or {})
    session = get_services().sessions.login(data["email"], data["password"])
    return json_response({"data": session_schema.dump(session)})


@bp.get("/whoami")
@require_session
@timing
def whoami():
    """Return the account behind the presented session."""

    account = get_services().accounts.get_account(g.account_id)
    return json_response({"data": account_schema.dump(account)})
