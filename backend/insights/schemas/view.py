"""Page view schemas."""

from __future__ import annotations

import re
from datetime import UTC
from typing import Any

from marshmallow import Schema, ValidationError, fields, post_load, validate, validates_schema

# UTC wall time with milliseconds, e.g. ``2024-03-01 12:30:00.000``
RANGE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f"
RANGE_TIME_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3}", re.ASCII)


class MillisecondDateTime(fields.DateTime):
    """``DateTime`` that only accepts exactly three fractional digits."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(format=RANGE_TIME_FORMAT, **kwargs)

    def _deserialize(self, value: Any, attr: str | None, data: Any, **kwargs: Any):
        if not isinstance(value, str) or not RANGE_TIME_PATTERN.fullmatch(value):
            raise self.make_error("invalid", input=value, obj_type=self.OBJ_TYPE)
        return super()._deserialize(value, attr, data, **kwargs)


class RecordViewSchema(Schema):
    """Body of ``POST /views``."""

    url = fields.String(required=True, validate=validate.Length(min=1, max=2048))


class ViewCountQuerySchema(Schema):
    """Query string of ``GET /views``."""

    url = fields.String(required=True, validate=validate.Length(min=1, max=2048))


class ViewRangeQuerySchema(Schema):
    """Query string of ``GET /views/range``; both bounds inclusive, UTC."""

    url = fields.String(required=True, validate=validate.Length(min=1, max=2048))
    start = MillisecondDateTime(load_default=None)
    end = MillisecondDateTime(load_default=None)

    @post_load
    def attach_utc(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        for key in ("start", "end"):
            if data.get(key) is not None:
                data[key] = data[key].replace(tzinfo=UTC)
        return data

    @validates_schema
    def check_order(self, data: dict[str, Any], **_: Any) -> None:
        start, end = data.get("start"), data.get("end")
        if start is not None and end is not None and start > end:
            raise ValidationError("start must not be after end", field_name="start")


class ViewCountSchema(Schema):
    """Counter for one URL."""

    url = fields.String(required=True)
    count = fields.Integer(required=True)


class ViewEventSchema(Schema):
    """One recorded view."""

    timestamp = fields.AwareDateTime(required=True)
