"""Access token schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class IssuedTokenSchema(Schema):
    """Response for a newly issued token; the only time the secret is returned."""

    token = fields.String(required=True)
    token_id = fields.Integer(required=True)
    expires_at = fields.AwareDateTime(required=True)


class AccessTokenSchema(Schema):
    """Token metadata for listings."""

    id = fields.Integer(required=True)
    expires_at = fields.AwareDateTime(required=True)
    created_at = fields.AwareDateTime(required=True)
    expired = fields.Boolean(required=True)
