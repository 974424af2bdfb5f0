from hr_policy.auth.permissions import (
    COMPANY_PERMISSIONS,
    PLATFORM_PERMISSIONS,
    allowed_roles,
    get_deposit_permissions,
    has_permission,
    permissions_for_role,
)
from hr_policy.auth.roles import all_roles, company_roles, platform_roles
from hr_policy.auth.routes import check_route_access, validate_tenant_domain

__all__ = [
    "COMPANY_PERMISSIONS",
    "PLATFORM_PERMISSIONS",
    "allowed_roles",
    "get_deposit_permissions",
    "has_permission",
    "permissions_for_role",
    "all_roles",
    "company_roles",
    "platform_roles",
    "check_route_access",
    "validate_tenant_domain",
]
