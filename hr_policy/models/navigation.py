from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SidebarItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    url: str
    icon: Any = None
    items: tuple[SidebarItem, ...] | None = None


class SidebarGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    items: tuple[SidebarItem, ...] = ()


class MenuItem(BaseModel):
    """Static menu definition; ``roles``/``feature_code`` of None means unrestricted."""

    model_config = ConfigDict(frozen=True)

    code: str
    label_key: str
    href: str
    roles: tuple[str, ...] | None = None
    feature_code: str | None = None
    children: tuple[MenuItem, ...] | None = None


class MenuGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    label_key: str
    items: tuple[MenuItem, ...] = Field(default_factory=tuple)
    roles: tuple[str, ...] | None = None


class TabItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    icon: Any = None
