"""Tests for ISO-8601 timestamp formatting."""

from datetime import datetime, timedelta, timezone

from rider_dashboard.models.readiness import ReadinessSnapshot, WearableMetrics
from rider_dashboard.normalize import to_iso_string
from rider_dashboard.utils.timestamps import format_iso, utc_now_iso


class TestFormatIso:
    """Test the shared UTC formatter."""

    def test_offset_converted_to_utc(self):
        moment = datetime(2024, 1, 15, 12, tzinfo=timezone(timedelta(hours=2)))
        assert format_iso(moment) == "2024-01-15T10:00:00.000Z"

    def test_milliseconds_kept(self):
        moment = datetime(2024, 1, 15, 10, 0, 0, 123456, tzinfo=timezone.utc)
        assert format_iso(moment) == "2024-01-15T10:00:00.123Z"


class TestUtcNowIso:
    """Test current-time stamps used as model defaults."""

    def test_current_time(self):
        before = datetime.now(timezone.utc) - timedelta(seconds=1)
        result = utc_now_iso()
        after = datetime.now(timezone.utc) + timedelta(seconds=1)

        assert result.endswith("Z")
        assert before <= datetime.fromisoformat(result.replace("Z", "+00:00")) <= after

    def test_model_defaults_share_format(self):
        """Model defaults round-trip through the payload normalizer unchanged."""
        metrics = WearableMetrics()
        created_at = ReadinessSnapshot(
            user_id="u1", captured_at=metrics.captured_at, metrics=metrics, readiness_score=50
        ).created_at

        assert to_iso_string(metrics.captured_at) == metrics.captured_at
        assert to_iso_string(created_at) == created_at
