from __future__ import annotations

import re
from typing import Final

from hr_policy.auth.roles import is_platform_admin
from hr_policy.config import settings
from hr_policy.models.access import RouteAccessDecision, TenantDomainValidation

ADMIN_ROUTE_PREFIX: Final[str] = "/admin"
DASHBOARD_ROUTE_PREFIX: Final[str] = "/dashboard"
UNAUTHORIZED_PATH: Final[str] = "/unauthorized"

TENANT_DOMAIN_MIN_LENGTH: Final[int] = 3
TENANT_DOMAIN_MAX_LENGTH: Final[int] = 30
_TENANT_DOMAIN_CHARS: Final[re.Pattern[str]] = re.compile(r"[a-z0-9-]+")

_ALLOWED: Final[RouteAccessDecision] = RouteAccessDecision(allowed=True)


def remove_locale_prefix(path: str, locales: tuple[str, ...] | None = None) -> str:
    locales = locales or settings.supported_locales
    for locale in locales:
        prefix = f"/{locale}"
        if path == prefix:
            return "/"
        if path.startswith(f"{prefix}/"):
            return path[len(prefix):]
    return path


def _under(path: str, prefix: str) -> bool:
    stripped = remove_locale_prefix(path or "")
    return stripped == prefix or stripped.startswith(f"{prefix}/")


def is_admin_route(path: str) -> bool:
    return _under(path, ADMIN_ROUTE_PREFIX)


def is_dashboard_route(path: str) -> bool:
    return _under(path, DASHBOARD_ROUTE_PREFIX)


def check_admin_route_access(role: str | None) -> RouteAccessDecision:
    if is_platform_admin(role):
        return _ALLOWED
    return RouteAccessDecision(
        allowed=False,
        reason="unauthorized_role",
        redirect_to=UNAUTHORIZED_PATH,
    )


def validate_tenant_domain(domain: str | None) -> TenantDomainValidation:
    """Subdomain a company signs up with: lowercase letters, digits and inner hyphens."""
    domain = domain or ""
    if len(domain) < TENANT_DOMAIN_MIN_LENGTH:
        return TenantDomainValidation(valid=False, error_code="TOO_SHORT")
    if len(domain) > TENANT_DOMAIN_MAX_LENGTH:
        return TenantDomainValidation(valid=False, error_code="TOO_LONG")
    if not _TENANT_DOMAIN_CHARS.fullmatch(domain):
        return TenantDomainValidation(valid=False, error_code="INVALID_CHARS")
    if domain.startswith("-") or domain.endswith("-"):
        return TenantDomainValidation(valid=False, error_code="INVALID_HYPHEN")
    return TenantDomainValidation(valid=True)


def check_dashboard_route_access(tenant_domain: str | None) -> RouteAccessDecision:
    """Dashboard pages need a well-formed tenant; the platform's own domain counts as one."""
    if not tenant_domain:
        return RouteAccessDecision(
            allowed=False,
            reason="missing_tenant_domain",
            redirect_to=UNAUTHORIZED_PATH,
        )
    if not validate_tenant_domain(tenant_domain).valid:
        return RouteAccessDecision(
            allowed=False,
            reason="invalid_tenant_domain",
            redirect_to=UNAUTHORIZED_PATH,
        )
    return _ALLOWED


def check_route_access(
    path: str,
    role: str | None,
    tenant_domain: str | None,
) -> RouteAccessDecision:
    # Admin routes check only the role, dashboard routes only the tenant.
    if is_admin_route(path):
        return check_admin_route_access(role)
    if is_dashboard_route(path):
        return check_dashboard_route_access(tenant_domain)
    return _ALLOWED
