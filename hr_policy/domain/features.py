from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping

from pydantic import ValidationError

from hr_policy.domain.collaborators import FeatureListProvider
from hr_policy.models.features import PlanFeature
from hr_policy.models.navigation import MenuGroup, MenuItem
from hr_policy.observability import log_event, record_fallback


FeatureLike = PlanFeature | Mapping[str, Any]


def _field(feature: FeatureLike, name: str) -> Any:
    if isinstance(feature, Mapping):
        return feature.get(name)
    return getattr(feature, name, None)


def has_feature(features: Iterable[FeatureLike] | None, code: str) -> bool:
    """True when any entry for ``code`` is enabled; duplicates do not cancel each other."""
    if not features:
        return False
    return any(
        _field(feature, "code") == code and _field(feature, "enabled") is True
        for feature in features
    )


def feature_checker(features: Iterable[FeatureLike] | None) -> Callable[[str], bool]:
    snapshot = tuple(features or ())

    def _check(code: str) -> bool:
        return has_feature(snapshot, code)

    return _check


def enabled_feature_codes(features: Iterable[FeatureLike] | None) -> set[str]:
    return {
        _field(feature, "code")
        for feature in features or ()
        if _field(feature, "enabled") is True
    }


def load_plan_features(plan_id: str | None, provider: FeatureListProvider) -> list[PlanFeature]:
    """Fetch the feature list of the active plan.

    No plan (logged out, or no subscription) resets to an empty list. A provider
    failure also yields an empty list so a previous session's features never leak.
    """
    if not plan_id:
        return []
    try:
        raw = list(provider(plan_id) or ())
    except Exception as exc:
        record_fallback("plan_features_load_failed", plan_id=plan_id, error=str(exc))
        return []

    features: list[PlanFeature] = []
    for entry in raw:
        if isinstance(entry, PlanFeature):
            features.append(entry)
            continue
        try:
            features.append(PlanFeature.model_validate(entry))
        except ValidationError as exc:
            log_event(
                "plan_feature_skipped",
                level=logging.WARNING,
                plan_id=plan_id,
                error=str(exc),
            )
    return features


def _role_allows(roles: tuple[str, ...] | None, role: str | None) -> bool:
    return roles is None or role in roles


def filter_menu_items(
    items: Iterable[MenuItem],
    is_enabled: Callable[[str], bool],
    role: str | None,
) -> list[MenuItem]:
    result: list[MenuItem] = []
    for item in items:
        if not _role_allows(item.roles, role):
            continue
        if item.feature_code and not is_enabled(item.feature_code):
            continue
        if item.children:
            children = filter_menu_items(item.children, is_enabled, role)
            if not children:
                continue
            if tuple(children) != item.children:
                item = item.model_copy(update={"children": tuple(children)})
        result.append(item)
    return result


def filter_menu_groups(
    groups: Iterable[MenuGroup],
    is_enabled: Callable[[str], bool],
    role: str | None,
) -> list[MenuGroup]:
    result: list[MenuGroup] = []
    for group in groups:
        if not _role_allows(group.roles, role):
            continue
        items = filter_menu_items(group.items, is_enabled, role)
        if not items:
            continue
        if tuple(items) != group.items:
            group = group.model_copy(update={"items": tuple(items)})
        result.append(group)
    return result
