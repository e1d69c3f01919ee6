"""Tests for freshness evaluation."""

from datetime import date, datetime, timedelta, timezone

import pytest

from freshtrack.lifecycle import FreshnessStatus, evaluate, expiring_threshold
from freshtrack.lifecycle.status import days_until

NOW = datetime(2025, 1, 30)


class TestExpiringThreshold:
    @pytest.mark.parametrize(
        "shelf_life, expected",
        [(7, 3), (5, 2), (10, 4), (15, 6), (1, 1), (0, 0), (365, 146)],
    )
    def test_forty_percent_rounded_up(self, shelf_life, expected):
        assert expiring_threshold(shelf_life) == expected


class TestDaysUntil:
    def test_whole_days_at_midnight(self):
        assert days_until(date(2025, 2, 1), NOW) == 2

    def test_truncates_toward_the_past(self):
        now = datetime(2025, 1, 30, 18, 0)
        assert days_until(date(2025, 2, 1), now) == 1

    def test_past_expiry_is_negative(self):
        now = datetime(2025, 1, 30, 0, 1)
        assert days_until(date(2025, 1, 30), now) == -1

    def test_accepts_plain_date(self):
        assert days_until(date(2025, 2, 1), date(2025, 1, 30)) == 2

    def test_timezone_aware_now(self):
        now = datetime(2025, 1, 30, tzinfo=timezone.utc)
        assert days_until(date(2025, 2, 1), now) == 2


class TestEvaluate:
    def test_dairy_scenario_is_expiring(self):
        result = evaluate(2, date(2025, 2, 1), 7, NOW)
        assert result.days_remaining == 2
        assert result.status is FreshnessStatus.EXPIRING

    def test_fresh_outside_window(self):
        result = evaluate(1, date(2025, 2, 10), 14, NOW)
        assert result.days_remaining == 11
        assert result.status is FreshnessStatus.FRESH

    def test_boundary_is_expiring(self):
        # threshold for 10 days is 4
        assert evaluate(1, NOW.date() + timedelta(days=4), 10, NOW).status is (
            FreshnessStatus.EXPIRING
        )
        assert evaluate(1, NOW.date() + timedelta(days=5), 10, NOW).status is (
            FreshnessStatus.FRESH
        )

    def test_expiry_day_itself_is_expiring(self):
        result = evaluate(1, NOW.date(), 7, NOW)
        assert result.days_remaining == 0
        assert result.status is FreshnessStatus.EXPIRING

    @pytest.mark.parametrize("shelf_life", [0, 1, 7, 30, 365, 10_000])
    @pytest.mark.parametrize("days_ago", [1, 2, 30])
    def test_past_expiry_is_expired_for_any_shelf_life(self, shelf_life, days_ago):
        expiry = NOW.date() - timedelta(days=days_ago)
        result = evaluate(3, expiry, shelf_life, NOW)
        assert result.status is FreshnessStatus.EXPIRED

    @pytest.mark.parametrize("offset", [-10, 0, 3, 100])
    def test_zero_quantity_is_consumed(self, offset):
        expiry = NOW.date() + timedelta(days=offset)
        result = evaluate(0, expiry, 7, NOW)
        assert result.status is FreshnessStatus.CONSUMED
        assert result.days_remaining == offset

    def test_idempotent(self):
        first = evaluate(2, date(2025, 2, 1), 7, NOW)
        second = evaluate(2, date(2025, 2, 1), 7, NOW)
        assert first == second
