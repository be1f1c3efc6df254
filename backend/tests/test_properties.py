"""
Property-based tests with Hypothesis.

Covers the pure helpers behind ids, stored JSON values, order lines,
status transitions, study statistics and current affairs scoring.
"""

import json
from datetime import date, datetime, timedelta, timezone

import pytest
from hypothesis import assume, given, settings, strategies as st

from rest_api.services.domain.app_user_service import parse_version, version_info
from rest_api.services.domain.current_affairs_rules import clamp_score, dedupe_by_title
from rest_api.services.domain.order_rules import (
    check_payment_transition,
    check_serving_transition,
    lines_amount,
    missing_dish_ids,
    normalize_lines,
)
from rest_api.services.domain.user_preferences_service import validate_preferences
from rest_api.services.domain.user_stats_service import average_score, next_streak, validate_stats
from rest_api.services.scheduler import seconds_until
from shared.config.constants import PaymentStatus, ServingStatus
from shared.utils.exceptions import InvalidTransitionError, ValidationError
from shared.utils.identifiers import id_suffix, next_id
from shared.utils.json_columns import parse_json_list
from shared.utils.validators import is_valid_hhmm, parse_iso_date, safe_file_name

dish_ids = st.text(alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-", min_size=1, max_size=12)
quantities = st.integers(min_value=1, max_value=999)


class TestIdentifierProperties:
    @given(numbers=st.lists(st.integers(min_value=0, max_value=10**6), max_size=20))
    def test_next_id_follows_highest_suffix(self, numbers):
        """Property: the next id is one past the highest stored suffix."""
        existing = [f"DISH-{n}" for n in numbers] + ["ORDER-999999999", None]
        expected = max(numbers, default=0) + 1
        assert next_id("DISH", existing) == f"DISH-{expected}"

    @given(prefix=st.sampled_from(["ORDER", "restro", "Manager", "Fb"]), number=st.integers(min_value=0))
    def test_suffix_round_trip(self, prefix, number):
        assert id_suffix(f"{prefix}-{number}") == number


class TestJsonListProperties:
    @given(values=st.lists(st.one_of(st.integers(), st.text(), st.booleans(), st.none())))
    def test_json_text_decodes_to_the_list(self, values):
        """Property: JSON text of a list reads back as that list."""
        assert parse_json_list(json.dumps(values)) == values

    @given(value=st.one_of(st.integers(), st.text(), st.dictionaries(st.text(), st.integers())))
    def test_always_a_list(self, value):
        assert isinstance(parse_json_list(value), list)


class TestOrderLineProperties:
    @given(lines=st.lists(st.tuples(dish_ids, quantities), min_size=1, max_size=10))
    def test_amount_is_price_times_quantity(self, lines):
        """Property: the amount is the sum of price x quantity."""
        prices = {dish_id: 25 for dish_id, _ in lines}
        normalized = normalize_lines({"DishId": d, "Quantity": q} for d, q in lines)

        assert lines_amount(normalized, prices) == 25 * sum(q for _, q in lines)
        assert missing_dish_ids(normalized, prices) == []

    @given(quantity=st.one_of(st.integers(max_value=0), st.integers(min_value=1000)))
    def test_out_of_range_quantity_rejected(self, quantity):
        with pytest.raises(ValidationError):
            normalize_lines([{"DishId": "DISH-1", "Quantity": quantity}])

    @given(ids=st.lists(dish_ids, min_size=1, max_size=10))
    def test_missing_ids_are_unique_and_unpriced(self, ids):
        lines = [{"DishId": i, "Quantity": 1} for i in ids]
        priced = {ids[0]: 10.0}

        missing = missing_dish_ids(lines, priced)

        assert len(missing) == len(set(missing))
        assert set(missing) == set(ids) - {ids[0]}


class TestStatusTransitionProperties:
    @given(status=st.sampled_from(list(ServingStatus)))
    def test_same_serving_status_is_noop(self, status):
        """Property: re-applying the current status never fails."""
        assert check_serving_transition(status.value, status.value.lower()) == status

    @given(status=st.sampled_from([ServingStatus.SERVED, ServingStatus.CANCELLED]))
    def test_terminal_serving_states(self, status):
        for target in ServingStatus:
            if target != status:
                with pytest.raises(InvalidTransitionError):
                    check_serving_transition(status.value, target.value)

    def test_paid_is_terminal(self):
        assert check_payment_transition("PENDING", "paid") == PaymentStatus.PAID
        with pytest.raises(InvalidTransitionError):
            check_payment_transition("PAID", "PENDING")


class TestStatsProperties:
    @given(total=st.integers(min_value=0, max_value=10**6), data=st.data())
    def test_average_within_bounds(self, total, data):
        correct = data.draw(st.integers(min_value=0, max_value=total))
        score = average_score(total, correct)
        assert 0.0 <= score <= 100.0

    @given(
        current=st.integers(min_value=0, max_value=1000),
        gap=st.timedeltas(min_value=timedelta(0), max_value=timedelta(days=30)),
    )
    def test_streak_continues_only_within_a_day(self, current, gap):
        now = datetime(2025, 1, 17, 12, tzinfo=timezone.utc)
        expected = current + 1 if gap <= timedelta(days=1) else 1
        assert next_streak(current, now - gap, now) == expected

    @given(value=st.integers(max_value=-1))
    @settings(max_examples=25)
    def test_negative_counters_rejected(self, value):
        assert validate_stats({"total_quizzes": value}) == ["total_quizzes must be a non-negative integer"]


class TestPreferenceProperties:
    @given(hour=st.integers(min_value=0, max_value=23), minute=st.integers(min_value=0, max_value=59))
    def test_clock_times_accepted(self, hour, minute):
        assert is_valid_hhmm(f"{hour:02d}:{minute:02d}")
        assert validate_preferences({"study_reminder_time": f"{hour}:{minute:02d}"}) == []

    @given(hour=st.integers(min_value=24, max_value=99), minute=st.integers(min_value=0, max_value=59))
    def test_hours_past_midnight_rejected(self, hour, minute):
        assert not is_valid_hhmm(f"{hour}:{minute:02d}")

    @given(interval=st.integers(max_value=0))
    def test_non_positive_autosave_rejected(self, interval):
        assert validate_preferences({"auto_save_interval": interval}) == [
            "auto_save_interval must be a positive integer"
        ]


class TestVersionProperties:
    @given(parts=st.lists(st.integers(min_value=0, max_value=500), min_size=1, max_size=4))
    def test_trailing_zeros_ignored(self, parts):
        version = ".".join(map(str, parts))
        assert parse_version(version + ".0") == parse_version(version)

    @given(parts=st.lists(st.integers(min_value=0, max_value=500), min_size=1, max_size=4))
    def test_latest_version_needs_no_update(self, parts):
        version = ".".join(map(str, parts))
        info = version_info(version, latest=version, minimum=version)
        assert info["is_force_update"] is False
        assert info["is_optional_update"] is False


class TestValidatorProperties:
    @given(name=st.text(max_size=60))
    def test_safe_file_name_is_flat(self, name):
        safe = safe_file_name(name)
        assert safe
        assert "/" not in safe

    @given(day=st.dates(min_value=date(1000, 1, 1)))
    def test_iso_dates_round_trip(self, day):
        assert parse_iso_date(day.isoformat()) == day

    @given(text=st.text(max_size=12))
    def test_non_iso_text_is_none(self, text):
        assume(len(text) != 10)
        assert parse_iso_date(text) is None


class TestSchedulerProperties:
    @given(
        hour=st.integers(min_value=0, max_value=23),
        now=st.datetimes(
            min_value=datetime(2000, 1, 1),
            max_value=datetime(2100, 1, 1),
            timezones=st.just(timezone.utc),
        ),
    )
    def test_next_run_within_a_day(self, hour, now):
        """Property: the next run is always in the future and at most a day away."""
        assert 0 < seconds_until(hour, now) <= 24 * 3600


class TestCurrentAffairsProperties:
    @given(value=st.one_of(st.integers(), st.text(), st.none(), st.booleans()))
    def test_scores_clamped(self, value):
        assert 1 <= clamp_score(value) <= 10

    @given(titles=st.lists(st.sampled_from(["Budget", "budget ", "ISRO", "isro", "Monsoon"]), max_size=15))
    def test_dedupe_keeps_first_of_each_title(self, titles):
        items = [{"title": t, "position": i} for i, t in enumerate(titles)]

        unique = dedupe_by_title(items)

        keys = [u["title"].strip().lower() for u in unique]
        assert len(keys) == len(set(keys))
        assert set(keys) == {t.strip().lower() for t in titles}
        assert [u["position"] for u in unique] == sorted(u["position"] for u in unique)
