"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class RegisterSchema(Schema):
    """Input payload for account registration."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))


class LoginSchema(Schema):
    """Input payload for exchanging credentials for a session."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class SessionSchema(Schema):
    """Response payload carrying a signed session."""

    token = fields.String(required=True)
    token_type = fields.String(dump_default="bearer")
    expires_at = fields.AwareDateTime(required=True)


class AccountSchema(Schema):
    """Public representation of an account."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
