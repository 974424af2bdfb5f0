from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Final, Iterable, Mapping, TypeVar, Union

from hr_policy.domain.collaborators import WorkModeProvider
from hr_policy.observability import log_event


class WorkMode(str, Enum):
    """Company-wide attendance policy."""

    FIXED_HOURS = "FIXED_HOURS"
    FLEXIBLE_SHIFT = "FLEXIBLE_SHIFT"


VisibilityRule = Union[bool, WorkMode]

SETTINGS_TAB_KEYS: Final[tuple[str, ...]] = (
    "workMode",
    "attendance",
    "payroll",
    "overtime",
    "allowance",
    "deduction",
)

# Keys are "tab" or "tab.section". Missing keys are visible.
SETTINGS_VISIBILITY: Final[Mapping[str, VisibilityRule]] = MappingProxyType(
    {
        "workMode": True,
        "attendance": True,
        "payroll": True,
        "overtime": True,
        "allowance": True,
        "deduction": True,
        "attendance.defaultWorkHours": WorkMode.FIXED_HOURS,
        "attendance.lateGracePeriod": WorkMode.FIXED_HOURS,
        "attendance.earlyLeaveGracePeriod": WorkMode.FIXED_HOURS,
        "attendance.shiftRounding": WorkMode.FLEXIBLE_SHIFT,
        "overtime.nightShiftPremium": WorkMode.FLEXIBLE_SHIFT,
    }
)


def coerce_work_mode(value: object) -> WorkMode | None:
    if isinstance(value, WorkMode):
        return value
    try:
        return WorkMode(value)
    except ValueError:
        return None


def current_work_mode(provider: WorkModeProvider) -> WorkMode | None:
    """Work mode from the provider, or None while it is unknown."""
    try:
        value = provider()
    except Exception as exc:
        log_event("work_mode_load_failed", level=logging.WARNING, error=str(exc))
        return None
    if value is None:
        return None
    mode = coerce_work_mode(value)
    if mode is None:
        log_event("work_mode_unrecognized", level=logging.WARNING, value=value)
    return mode


def is_visible(rule: VisibilityRule | None, mode: WorkMode | str | None) -> bool:
    if rule is None or rule is True:
        return True
    if rule is False:
        return False
    return rule == coerce_work_mode(mode)


def is_key_visible(
    key: str,
    mode: WorkMode | str | None,
    config: Mapping[str, VisibilityRule] = SETTINGS_VISIBILITY,
) -> bool:
    return is_visible(config.get(key), mode)


def is_settings_tab_visible(tab_key: str, mode: WorkMode | str | None) -> bool:
    return is_key_visible(tab_key, mode)


def is_settings_section_visible(tab_key: str, section_key: str, mode: WorkMode | str | None) -> bool:
    return is_key_visible(f"{tab_key}.{section_key}", mode)


T = TypeVar("T")


def _key_of(tab: object) -> str:
    if isinstance(tab, Mapping):
        return str(tab.get("key"))
    return str(getattr(tab, "key"))


def get_visible_tabs(
    tabs: Iterable[T],
    mode: WorkMode | str | None,
    config: Mapping[str, VisibilityRule] = SETTINGS_VISIBILITY,
) -> list[T]:
    return [tab for tab in tabs if is_key_visible(_key_of(tab), mode, config)]


def get_visible_settings_tabs(tabs: Iterable[T], mode: WorkMode | str | None) -> list[T]:
    return get_visible_tabs(tabs, mode, SETTINGS_VISIBILITY)
