from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

from hr_policy.domain.collaborators import Clock, SystemClock, Translator
from hr_policy.models.notifications import Notification
from hr_policy.observability import log_event

_SECONDS_PER_MINUTE = 60
_SECONDS_PER_HOUR = 60 * 60
_SECONDS_PER_DAY = 60 * 60 * 24

_system_clock = SystemClock()


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_notification_time(
    created_at: str | datetime | None,
    t: Translator,
    clock: Clock | None = None,
) -> str:
    """Coarse "time ago" label; an unparsable timestamp gives ``""``."""
    created = parse_timestamp(created_at)
    if created is None:
        return ""

    now = (clock or _system_clock).now()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    diff_seconds = (now - created).total_seconds()

    minutes = int(diff_seconds // _SECONDS_PER_MINUTE)
    hours = int(diff_seconds // _SECONDS_PER_HOUR)
    days = int(diff_seconds // _SECONDS_PER_DAY)

    try:
        if minutes < 1:
            return t("timeAgo.justNow")
        if hours < 1:
            return t("timeAgo.minutesAgo", {"count": minutes})
        if days < 1:
            return t("timeAgo.hoursAgo", {"count": hours})
        return t("timeAgo.daysAgo", {"count": days})
    except Exception as exc:
        log_event("relative_time_render_failed", level=logging.WARNING, error=str(exc))
        return ""


def count_unread_notifications(notifications: Iterable[Notification]) -> int:
    return sum(1 for notification in notifications if not notification.is_read)
