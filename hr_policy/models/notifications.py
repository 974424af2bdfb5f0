from pydantic import BaseModel, Field
from datetime import datetime


class Notification(BaseModel):
    id: int
    code: str
    params: dict[str, str | int] = Field(default_factory=dict)
    is_read: bool = False
    created_at: datetime | str
