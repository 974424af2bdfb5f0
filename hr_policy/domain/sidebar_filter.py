"""Work-mode pruning of the company sidebar and of composite pages' tab strips.

Schedules live inside the Shifts page, so the sidebar itself hides nothing in
either mode; Shifts suppresses its schedule tabs under fixed hours instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, Iterable, Mapping, Sequence

from hr_policy.auth.routes import remove_locale_prefix
from hr_policy.domain.work_mode import WorkMode, coerce_work_mode
from hr_policy.models.navigation import SidebarGroup, SidebarItem

SHIFTS_URL: Final[str] = "/company/shifts"
PLACEHOLDER_URL: Final[str] = "#"


@dataclass(frozen=True)
class WorkModeFilterConfig:
    hidden_urls: tuple[str, ...] = ()
    hidden_tabs_by_url: Mapping[str, tuple[str, ...]] = field(default_factory=dict)


WORK_MODE_FILTER_CONFIG: Final[Mapping[WorkMode, WorkModeFilterConfig]] = MappingProxyType(
    {
        WorkMode.FIXED_HOURS: WorkModeFilterConfig(
            hidden_urls=(),
            hidden_tabs_by_url=MappingProxyType({SHIFTS_URL: ("schedules", "templates")}),
        ),
        WorkMode.FLEXIBLE_SHIFT: WorkModeFilterConfig(),
    }
)

_NO_FILTER: Final[WorkModeFilterConfig] = WorkModeFilterConfig()


def _config_for(mode: WorkMode | str | None) -> WorkModeFilterConfig:
    resolved = coerce_work_mode(mode)
    if resolved is None:
        return _NO_FILTER
    return WORK_MODE_FILTER_CONFIG.get(resolved, _NO_FILTER)


def is_url_hidden_by_work_mode(url: str, mode: WorkMode | str | None) -> bool:
    return url in _config_for(mode).hidden_urls


def filter_items(items: Iterable[SidebarItem], mode: WorkMode | str | None) -> list[SidebarItem]:
    hidden = _config_for(mode).hidden_urls
    if not hidden:
        return list(items)
    return [item for item in items if item.url not in hidden]


def filter_groups(groups: Iterable[SidebarGroup], mode: WorkMode | str | None) -> list[SidebarGroup]:
    result: list[SidebarGroup] = []
    for group in groups:
        items = filter_items(group.items, mode)
        if not items:
            continue
        if len(items) != len(group.items):
            group = group.model_copy(update={"items": tuple(items)})
        result.append(group)
    return result


def get_hidden_tabs_for_url(url: str, mode: WorkMode | str | None) -> list[str]:
    return list(_config_for(mode).hidden_tabs_by_url.get(url, ()))


def visible_tab_keys(url: str, tab_keys: Sequence[str], mode: WorkMode | str | None) -> list[str]:
    hidden = set(get_hidden_tabs_for_url(url, mode))
    return [key for key in tab_keys if key not in hidden]


def resolve_active_tab(active: str | None, visible: Sequence[str], default: str) -> str:
    """Keep the selected tab unless it was hidden, then fall back to the first visible one."""
    if active and active in visible:
        return active
    if visible:
        return visible[0]
    return default


def is_route_active(item_url: str, pathname: str | None) -> bool:
    """Exact match or a nested route below ``item_url``; the home route matches only itself."""
    if not item_url or item_url == PLACEHOLDER_URL:
        return False
    path = remove_locale_prefix(pathname or "") or "/"
    if item_url == "/":
        return path == "/"
    return path == item_url or path.startswith(f"{item_url.rstrip('/')}/")


def _match_length(item: SidebarItem, pathname: str | None) -> int:
    best = len(item.url) if is_route_active(item.url, pathname) else -1
    for child in item.items or ():
        best = max(best, _match_length(child, pathname))
    return best


def is_sidebar_item_active(item: SidebarItem, pathname: str | None) -> bool:
    return _match_length(item, pathname) >= 0


def find_active_sidebar_item(items: Iterable[SidebarItem], pathname: str | None) -> SidebarItem | None:
    """Top-level item to highlight; the most specific match wins, ties go to the first."""
    active: SidebarItem | None = None
    best = -1
    for item in items:
        length = _match_length(item, pathname)
        if length > best:
            active, best = item, length
    return active
