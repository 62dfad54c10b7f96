"""Page view ingestion and reporting endpoints."""

from __future__ import annotations

from flask import Blueprint, g, request

from insights.api.deps import json_response, require_access_token, require_session, timing
from insights.schemas import (
    RecordViewSchema,
    ViewCountQuerySchema,
    ViewCountSchema,
    ViewEventSchema,
    ViewRangeQuerySchema,
)
from insights.services.registry import get_services

bp = Blueprint("views", __name__, url_prefix="/views")

record_schema = RecordViewSchema()
count_query_schema = ViewCountQuerySchema()
range_query_schema = ViewRangeQuerySchema()
count_schema = ViewCountSchema()
count_list_schema = ViewCountSchema(many=True)
event_list_schema = ViewEventSchema(many=True)


@bp.post("")
@require_access_token
@timing
def record():
    """Record one view for the token's account (ingest endpoint)."""

    data = record_schema.load(request.get_json(silent=True) or {})
    get_services().views.record_view(g.account_id, data["url"])
    return json_response({"data": {"url": data["url"]}}, status=201)


@bp.get("")
@require_session
@timing
def count():
    """Return the view count for ``?url=``."""

    args = count_query_schema.load(request.args)
    total = get_services().views.get_count(g.account_id, args["url"])
    return json_response({"data": count_schema.dump({"url": args["url"], "count": total})})


@bp.get("/all")
@require_session
@timing
def all_counts():
    """Return every counter of the session's account."""

    counts = get_services().views.get_all_counts(g.account_id)
    return json_response({"data": count_list_schema.dump(counts)})


@bp.get("/range")
@require_session
@timing
def events_in_range():
    """Return views of ``?url=`` between ``start`` and ``end`` (inclusive, UTC)."""

    args = range_query_schema.load(request.args)
    events = get_services().views.get_events_in_range(
        g.account_id, args["url"], args["start"], args["end"]
    )
    return json_response({"data": event_list_schema.dump(events)})
