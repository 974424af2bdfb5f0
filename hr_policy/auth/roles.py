from __future__ import annotations

from typing import Final

ADMIN_TAMABEE: Final[str] = "ADMIN_TAMABEE"
MANAGER_TAMABEE: Final[str] = "MANAGER_TAMABEE"
EMPLOYEE_TAMABEE: Final[str] = "EMPLOYEE_TAMABEE"
ADMIN_COMPANY: Final[str] = "ADMIN_COMPANY"
MANAGER_COMPANY: Final[str] = "MANAGER_COMPANY"
EMPLOYEE_COMPANY: Final[str] = "EMPLOYEE_COMPANY"

PLATFORM_ROLES: Final[tuple[str, ...]] = (ADMIN_TAMABEE, MANAGER_TAMABEE, EMPLOYEE_TAMABEE)
COMPANY_ROLES: Final[tuple[str, ...]] = (ADMIN_COMPANY, MANAGER_COMPANY, EMPLOYEE_COMPANY)

# Platform roles allowed into the /admin area.
PLATFORM_ADMIN_ROLES: Final[tuple[str, ...]] = (ADMIN_TAMABEE, MANAGER_TAMABEE)
MANAGEMENT_ROLES: Final[tuple[str, ...]] = (
    ADMIN_TAMABEE,
    MANAGER_TAMABEE,
    ADMIN_COMPANY,
    MANAGER_COMPANY,
)
ADMIN_ROLES: Final[tuple[str, ...]] = (ADMIN_TAMABEE, ADMIN_COMPANY)


def platform_roles() -> tuple[str, ...]:
    return PLATFORM_ROLES


def company_roles() -> tuple[str, ...]:
    return COMPANY_ROLES


def all_roles() -> tuple[str, ...]:
    return PLATFORM_ROLES + COMPANY_ROLES


def is_platform_role(role: str | None) -> bool:
    return role in PLATFORM_ROLES


def is_company_role(role: str | None) -> bool:
    return role in COMPANY_ROLES


def is_admin(role: str | None) -> bool:
    return role in ADMIN_ROLES


def is_manager(role: str | None) -> bool:
    return role in (MANAGER_TAMABEE, MANAGER_COMPANY)


def is_employee(role: str | None) -> bool:
    return role in (EMPLOYEE_TAMABEE, EMPLOYEE_COMPANY)


def is_staff(role: str | None) -> bool:
    """Platform operator of any level, as opposed to a customer company user."""
    return is_platform_role(role)


def is_management(role: str | None) -> bool:
    return role in MANAGEMENT_ROLES


def is_platform_admin(role: str | None) -> bool:
    return role in PLATFORM_ADMIN_ROLES
