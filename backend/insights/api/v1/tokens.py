"""Access token management endpoints (session protected)."""

from __future__ import annotations

from flask import Blueprint, g

from insights.api.deps import json_response, require_session, timing
from insights.schemas import AccessTokenSchema, IssuedTokenSchema
from insights.services.registry import get_services

bp = Blueprint("tokens", __name__, url_prefix="/tokens")

issued_schema = IssuedTokenSchema()
token_list_schema = AccessTokenSchema(many=True)


@bp.post("")
@require_session
@timing
def issue():
    """Issue a new access token for the session's account."""

    issued = get_services().tokens.issue_token(g.account_id)
    return json_response({"data": issued_schema.dump(issued)}, status=201)


@bp.get("")
@require_session
@timing
def list_tokens():
    """List token metadata for the session's account."""

    tokens = get_services().tokens.list_tokens(g.account_id)
    return json_response({"data": token_list_schema.dump(tokens)})


@bp.delete("/<int:token_id>")
@require_session
@timing
def revoke(token_id: int):
    """Revoke one of the session account's tokens."""

    get_services().tokens.revoke_token(g.account_id, token_id)
    return "", 204
