from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Iterable, Literal, Mapping, Protocol

from hr_policy.models.features import PlanFeature


Locale = Literal["vi", "en", "ja"]
MessageParams = Mapping[str, str | int]


class Translator(Protocol):
    """Catalog lookup. An unknown key is echoed back, possibly namespace-prefixed."""

    def __call__(self, key: str, params: MessageParams | None = None, /) -> str: ...


class DateFormatter(Protocol):
    """Renders a date with its day of week, e.g. ``01/01/2024 (Mon)``."""

    def __call__(self, value: str | date | datetime, locale: Locale, /) -> str: ...


class Clock(Protocol):
    def now(self) -> datetime: ...


class FeatureListProvider(Protocol):
    def __call__(self, plan_id: str, /) -> Iterable[PlanFeature | Mapping[str, object]]: ...


class WorkModeProvider(Protocol):
    def __call__(self, /) -> str | None: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock pinned to one instant; naive values are taken as UTC."""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self._instant = instant

    def now(self) -> datetime:
        return self._instant
