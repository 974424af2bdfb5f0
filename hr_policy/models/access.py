from pydantic import BaseModel, ConfigDict
from typing import Literal


RouteDenialReason = Literal["unauthorized_role", "missing_tenant_domain", "invalid_tenant_domain"]
TenantDomainError = Literal["TOO_SHORT", "TOO_LONG", "INVALID_CHARS", "INVALID_HYPHEN"]


class RouteAccessDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: RouteDenialReason | None = None
    redirect_to: str | None = None


class TenantDomainValidation(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    error_code: TenantDomainError | None = None
