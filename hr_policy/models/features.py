from pydantic import BaseModel, ConfigDict


class PlanFeature(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    enabled: bool = False
