from datetime import UTC, datetime

import pytest
from insights.schemas import ViewRangeQuerySchema
from marshmallow import ValidationError


class TestViewRangeQuerySchema:
    @pytest.fixture()
    def schema(self):
        return ViewRangeQuerySchema()

    def test_millisecond_bounds_load_as_utc(self, schema):
        data = schema.load(
            {"url": "/r", "start": "2024-03-01 12:00:00.250", "end": "2024-03-01 12:00:01.000"}
        )

        assert data["start"] == datetime(2024, 3, 1, 12, 0, 0, 250000, tzinfo=UTC)
        assert data["end"].tzinfo is UTC

    def test_bounds_are_optional(self, schema):
        data = schema.load({"url": "/r"})
        assert data["start"] is None and data["end"] is None

    @pytest.mark.parametrize(
        "value",
        [
            "2024-03-01 12:00:00.5",
            "2024-03-01 12:00:00.123456",
            "2024-03-01 12:00:00",
            "2024-03-01T12:00:00.000",
            "2024-03-01 12:00:00.000Z",
        ],
    )
    def test_rejects_anything_but_three_fraction_digits(self, schema, value):
        with pytest.raises(ValidationError) as excinfo:
            schema.load({"url": "/r", "start": value})
        assert "start" in excinfo.value.messages

    def test_rejects_start_after_end(self, schema):
        with pytest.raises(ValidationError):
            schema.load(
                {"url": "/r", "start": "2024-03-02 00:00:00.000", "end": "2024-03-01 00:00:00.000"}
            )
