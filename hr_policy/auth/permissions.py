from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Literal, Mapping

from hr_policy.auth.roles import (
    ADMIN_COMPANY,
    ADMIN_TAMABEE,
    EMPLOYEE_COMPANY,
    EMPLOYEE_TAMABEE,
    MANAGER_COMPANY,
    MANAGER_TAMABEE,
)
from hr_policy.observability import record_fallback

# Platform scope
COMPANIES_VIEW: Final[str] = "companies.view"
COMPANIES_MANAGE: Final[str] = "companies.manage"
DEPOSITS_VIEW: Final[str] = "deposits.view"
DEPOSITS_APPROVE: Final[str] = "deposits.approve"
DEPOSITS_REJECT: Final[str] = "deposits.reject"
PLANS_MANAGE: Final[str] = "plans.manage"
SYSTEM_MANAGE: Final[str] = "system.manage"
SYSTEM_NOTIFICATIONS_SEND: Final[str] = "system_notifications.send"
FEEDBACKS_VIEW: Final[str] = "feedbacks.view"
PLATFORM_SETTINGS_MANAGE: Final[str] = "platform_settings.manage"
COMMISSIONS_VIEW_OWN: Final[str] = "commissions.view_own"

# Company scope
DEPOSITS_CREATE: Final[str] = "deposits.create"
EMPLOYEES_MANAGE: Final[str] = "employees.manage"
ATTENDANCE_VIEW_TEAM: Final[str] = "attendance.view_team"
ADJUSTMENTS_APPROVE: Final[str] = "adjustments.approve"
SHIFTS_MANAGE: Final[str] = "shifts.manage"
PAYROLL_MANAGE: Final[str] = "payroll.manage"
LEAVE_APPROVE: Final[str] = "leave.approve"
HOLIDAYS_MANAGE: Final[str] = "holidays.manage"
WALLET_VIEW: Final[str] = "wallet.view"
COMPANY_SETTINGS_MANAGE: Final[str] = "company_settings.manage"
COMPANY_PROFILE_VIEW: Final[str] = "company_profile.view"
SELF_SERVICE_USE: Final[str] = "self_service.use"


def _freeze(table: dict[str, tuple[str, ...]]) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType({key: tuple(dict.fromkeys(roles)) for key, roles in table.items()})


PLATFORM_PERMISSIONS: Final[Mapping[str, tuple[str, ...]]] = _freeze(
    {
        COMPANIES_VIEW: (ADMIN_TAMABEE, MANAGER_TAMABEE),
        COMPANIES_MANAGE: (ADMIN_TAMABEE,),
        DEPOSITS_VIEW: (ADMIN_TAMABEE, MANAGER_TAMABEE, EMPLOYEE_TAMABEE),
        DEPOSITS_APPROVE: (ADMIN_TAMABEE, MANAGER_TAMABEE),
        DEPOSITS_REJECT: (ADMIN_TAMABEE, MANAGER_TAMABEE),
        PLANS_MANAGE: (ADMIN_TAMABEE,),
        SYSTEM_MANAGE: (ADMIN_TAMABEE,),
        SYSTEM_NOTIFICATIONS_SEND: (ADMIN_TAMABEE, MANAGER_TAMABEE),
        FEEDBACKS_VIEW: (ADMIN_TAMABEE, MANAGER_TAMABEE),
        PLATFORM_SETTINGS_MANAGE: (ADMIN_TAMABEE,),
        COMMISSIONS_VIEW_OWN: (EMPLOYEE_TAMABEE,),
    }
)

COMPANY_PERMISSIONS: Final[Mapping[str, tuple[str, ...]]] = _freeze(
    {
        DEPOSITS_VIEW: (ADMIN_COMPANY, MANAGER_COMPANY),
        DEPOSITS_CREATE: (ADMIN_COMPANY,),
        EMPLOYEES_MANAGE: (ADMIN_COMPANY, MANAGER_COMPANY),
        ATTENDANCE_VIEW_TEAM: (ADMIN_COMPANY, MANAGER_COMPANY),
        ADJUSTMENTS_APPROVE: (ADMIN_COMPANY, MANAGER_COMPANY),
        SHIFTS_MANAGE: (ADMIN_COMPANY, MANAGER_COMPANY),
        PAYROLL_MANAGE: (ADMIN_COMPANY, MANAGER_COMPANY),
        LEAVE_APPROVE: (ADMIN_COMPANY, MANAGER_COMPANY),
        HOLIDAYS_MANAGE: (ADMIN_COMPANY, MANAGER_COMPANY),
        WALLET_VIEW: (ADMIN_COMPANY,),
        COMPANY_SETTINGS_MANAGE: (ADMIN_COMPANY,),
        COMPANY_PROFILE_VIEW: (ADMIN_COMPANY, MANAGER_COMPANY, EMPLOYEE_COMPANY),
        SELF_SERVICE_USE: (ADMIN_COMPANY, MANAGER_COMPANY, EMPLOYEE_COMPANY),
    }
)

PermissionScope = Literal["platform", "company"]

PERMISSION_TABLES: Final[Mapping[str, Mapping[str, tuple[str, ...]]]] = MappingProxyType(
    {
        "platform": PLATFORM_PERMISSIONS,
        "company": COMPANY_PERMISSIONS,
    }
)


def _tables(scope: PermissionScope | None) -> tuple[Mapping[str, tuple[str, ...]], ...]:
    if scope is None:
        return tuple(PERMISSION_TABLES.values())
    table = PERMISSION_TABLES.get(scope)
    return () if table is None else (table,)


def allowed_roles(permission_key: str, scope: PermissionScope | None = None) -> tuple[str, ...]:
    """Roles allowed to exercise ``permission_key``.

    Without a scope both tables are consulted. They never share a role, so
    concatenating them keeps each scope's ordering intact.
    """
    roles: tuple[str, ...] = ()
    for table in _tables(scope):
        roles += table.get(permission_key, ())
    return roles


def is_known_permission(permission_key: str, scope: PermissionScope | None = None) -> bool:
    return any(permission_key in table for table in _tables(scope))


def has_permission(
    role: str | None,
    permission_key: str,
    scope: PermissionScope | None = None,
) -> bool:
    if not is_known_permission(permission_key, scope):
        record_fallback(
            "permission_key_unknown",
            labels={"scope": scope or "any"},
            permission_key=permission_key,
        )
        return False
    return role in allowed_roles(permission_key, scope)


def permissions_for_role(role: str | None) -> set[str]:
    return {
        key
        for table in _tables(None)
        for key, roles in table.items()
        if role in roles
    }


@dataclass(frozen=True)
class DepositPermissions:
    can_view_deposits: bool
    can_approve_deposits: bool
    can_reject_deposits: bool
    can_create_deposits: bool


def get_deposit_permissions(role: str | None) -> DepositPermissions:
    return DepositPermissions(
        can_view_deposits=has_permission(role, DEPOSITS_VIEW),
        can_approve_deposits=has_permission(role, DEPOSITS_APPROVE),
        can_reject_deposits=has_permission(role, DEPOSITS_REJECT),
        can_create_deposits=has_permission(role, DEPOSITS_CREATE),
    )


def can_view_deposits(role: str | None) -> bool:
    return get_deposit_permissions(role).can_view_deposits


def can_approve_reject_deposits(role: str | None) -> bool:
    permissions = get_deposit_permissions(role)
    return permissions.can_approve_deposits and permissions.can_reject_deposits


def can_create_deposits(role: str | None) -> bool:
    return get_deposit_permissions(role).can_create_deposits
