"""CORS configuration for the ingest and dashboard endpoints."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def init_app(app: Flask) -> None:
    """Configure CORS based on application config.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``API_BASE_PREFIX``, ``CORS_ORIGINS`` and
        ``CORS_MAX_AGE`` settings are consulted.

    Notes
    -----
    Page views are reported from arbitrary customer sites, so the ingest path
    (``<prefix>/v1/views``) accepts any origin. Every other API path follows
    ``CORS_ORIGINS``; a blank value or ``"*"`` allows any origin without
    credential support. Credentials travel in the ``Authorization`` header,
    never in cookies.
    """
    prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")
    raw_origins = app.config.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = len(origins) == 0 or origins == ["*"]
    max_age = app.config.get("CORS_MAX_AGE", 600)

    CORS(
        app,
        resources={
            rf"{prefix}/v1/views/?$": {
                "origins": "*",
                "allow_headers": ["Authorization", "Content-Type"],
                "supports_credentials": False,
            },
            rf"{prefix}/*": {
                "origins": "*" if wildcard else origins,
                "allow_headers": ["Authorization", "Content-Type", "X-Request-ID"],
                "supports_credentials": not wildcard,
            },
        },
        expose_headers=["X-Request-ID"],
        max_age=max_age,
    )
