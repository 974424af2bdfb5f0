import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from hr_policy.domain.collaborators import FixedClock
from hr_policy.domain.messages import translate_notification
from hr_policy.domain.relative_time import (
    count_unread_notifications,
    format_notification_time,
    parse_timestamp,
)
from hr_policy.models.notifications import Notification


NOW = datetime(2024, 1, 21, 10, 0, 0, tzinfo=timezone.utc)


class FakeTranslator:
    def __init__(self, catalog: dict[str, str], namespace: str | None = None):
        self.catalog = catalog
        self.namespace = namespace
        self.calls: list[tuple[str, dict | None]] = []

    def __call__(self, key: str, params=None) -> str:
        self.calls.append((key, dict(params) if params else None))
        if key not in self.catalog:
            return f"{self.namespace}.{key}" if self.namespace else key
        message = self.catalog[key]
        for name, value in (params or {}).items():
            message = message.replace("{" + name + "}", str(value))
        return message


def fake_format_date(value, locale):
    day = datetime.strptime(value, "%Y-%m-%d")
    if locale == "ja":
        return day.strftime("%Y年%m月%d日") + f"({day.strftime('%a')})"
    return day.strftime("%d/%m/%Y") + f" ({day.strftime('%a')})"


def test_translate_notification_interpolates_params():
    t = FakeTranslator({"codes.LEAVE_SUBMITTED": "{employeeName} submitted a leave request"})

    message = translate_notification("LEAVE_SUBMITTED", {"employeeName": "Nguyễn Văn A"}, t)

    assert message == "Nguyễn Văn A submitted a leave request"


def test_single_day_key_attempted_first():
    t = FakeTranslator(
        {
            "codes.LEAVE_SUBMITTED_SINGLE": "Leave on {startDate}",
            "codes.LEAVE_SUBMITTED": "Leave from {startDate} to {endDate}",
        }
    )

    message = translate_notification(
        "LEAVE_SUBMITTED", {"startDate": "2024-01-01", "endDate": "2024-01-01"}, t
    )

    assert message == "Leave on 2024-01-01"
    assert [key for key, _ in t.calls] == ["codes.LEAVE_SUBMITTED_SINGLE"]


@pytest.mark.parametrize("namespace", [None, "notifications"])
def test_single_day_falls_back_to_base_key(namespace):
    t = FakeTranslator({"codes.LEAVE_SUBMITTED": "Leave from {startDate} to {endDate}"}, namespace)

    message = translate_notification(
        "LEAVE_SUBMITTED", {"startDate": "2024-01-01", "endDate": "2024-01-01"}, t
    )

    assert message == "Leave from 2024-01-01 to 2024-01-01"
    assert [key for key, _ in t.calls] == ["codes.LEAVE_SUBMITTED_SINGLE", "codes.LEAVE_SUBMITTED"]


def test_date_range_uses_base_key_only():
    t = FakeTranslator({"codes.LEAVE_APPROVED": "Approved {startDate} - {endDate}"})

    translate_notification("LEAVE_APPROVED", {"startDate": "2024-01-01", "endDate": "2024-01-03"}, t)

    assert [key for key, _ in t.calls] == ["codes.LEAVE_APPROVED"]


def test_dates_formatted_with_weekday_when_locale_given():
    t = FakeTranslator({"codes.LEAVE_APPROVED": "Approved {startDate} - {endDate}"})
    params = {"startDate": "2024-01-01", "endDate": "2024-01-03", "days": 3}

    message = translate_notification("LEAVE_APPROVED", params, t, "vi", format_date=fake_format_date)

    assert message == "Approved 01/01/2024 (Mon) - 03/01/2024 (Wed)"
    assert params["startDate"] == "2024-01-01"


def test_dates_untouched_without_locale():
    t = FakeTranslator({"codes.LEAVE_APPROVED": "Approved {startDate}"})

    message = translate_notification(
        "LEAVE_APPROVED", {"startDate": "2024-01-01"}, t, format_date=fake_format_date
    )

    assert message == "Approved 2024-01-01"


def test_locale_without_formatter_leaves_dates_raw(caplog):
    caplog.set_level(logging.DEBUG, logger="hr_policy")
    t = FakeTranslator({"codes.LEAVE_APPROVED": "Approved {startDate}"})

    message = translate_notification("LEAVE_APPROVED", {"startDate": "2024-01-01"}, t, "ja")

    assert message == "Approved 2024-01-01"
    events = [json.loads(record.getMessage()) for record in caplog.records]
    assert {"event": "notification_dates_unformatted", "code": "LEAVE_APPROVED", "locale": "ja"} in events


def test_non_date_strings_not_reformatted():
    t = FakeTranslator({"codes.SALARY_PAID": "Paid for {period} on {when}"})

    message = translate_notification(
        "SALARY_PAID",
        {"period": "2024-01", "when": "2024-01-31T10:00:00"},
        t,
        "ja",
        format_date=fake_format_date,
    )

    assert message == "Paid for 2024-01 on 2024-01-31T10:00:00"


@pytest.mark.parametrize("namespace", [None, "notifications"])
def test_missing_translation_returns_code(namespace):
    t = FakeTranslator({}, namespace)

    assert translate_notification("DEPOSIT_REJECTED", {}, t) == "DEPOSIT_REJECTED"


def test_translator_failure_returns_code():
    def _t(key, params=None):
        raise RuntimeError("catalog not loaded")

    assert translate_notification("LEAVE_APPROVED", {}, _t) == "LEAVE_APPROVED"


def test_date_formatter_failure_returns_code():
    t = FakeTranslator({"codes.LEAVE_APPROVED": "Approved {startDate}"})

    def _bad_format(value, locale):
        raise ValueError("bad locale")

    result = translate_notification(
        "LEAVE_APPROVED", {"startDate": "2024-01-01"}, t, "en", format_date=_bad_format
    )

    assert result == "LEAVE_APPROVED"


def test_empty_code_returns_empty_string():
    assert translate_notification("", {}, FakeTranslator({})) == ""


def test_relative_time_just_now():
    t = FakeTranslator({"timeAgo.justNow": "Just now"})
    created = (NOW - timedelta(seconds=30)).isoformat()

    assert format_notification_time(created, t, FixedClock(NOW)) == "Just now"


@pytest.mark.parametrize(
    "delta,key,count",
    [
        (timedelta(minutes=1), "timeAgo.minutesAgo", 1),
        (timedelta(minutes=59, seconds=59), "timeAgo.minutesAgo", 59),
        (timedelta(minutes=90), "timeAgo.hoursAgo", 1),
        (timedelta(hours=23, minutes=59), "timeAgo.hoursAgo", 23),
        (timedelta(hours=24), "timeAgo.daysAgo", 1),
        (timedelta(days=800), "timeAgo.daysAgo", 800),
    ],
)
def test_relative_time_buckets(delta, key, count):
    t = FakeTranslator({key: "{count}"})

    result = format_notification_time((NOW - delta).isoformat(), t, FixedClock(NOW))

    assert result == str(count)
    assert t.calls == [(key, {"count": count})]


def test_relative_time_accepts_zulu_and_naive_timestamps():
    t = FakeTranslator({"timeAgo.hoursAgo": "{count}h"})

    assert format_notification_time("2024-01-21T06:00:00Z", t, FixedClock(NOW)) == "4h"
    assert format_notification_time("2024-01-21T06:00:00", t, FixedClock(NOW)) == "4h"
    assert format_notification_time(datetime(2024, 1, 21, 6), t, FixedClock(NOW)) == "4h"


@pytest.mark.parametrize("value", ["", None, "yesterday", "2024-13-45T99:00:00"])
def test_relative_time_unparsable_is_empty(value):
    t = FakeTranslator({"timeAgo.justNow": "Just now"})

    assert format_notification_time(value, t, FixedClock(NOW)) == ""
    assert parse_timestamp(value) is None


def test_relative_time_uses_wall_clock_by_default():
    t = FakeTranslator({"timeAgo.justNow": "Just now"})

    assert format_notification_time(datetime.now(timezone.utc).isoformat(), t) == "Just now"


def test_count_unread_notifications():
    notifications = [
        Notification(id=i, code="LEAVE_APPROVED", is_read=i % 3 == 0, created_at=NOW)
        for i in range(10)
    ]

    assert count_unread_notifications(notifications) == 6
    assert count_unread_notifications([]) == 0
