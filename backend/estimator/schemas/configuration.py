from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ConfigurationSet(BaseModel):
    value: str
    description: Optional[str] = None


class ConfigurationOut(BaseModel):
    key: str
    value: str
    description: Optional[str] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
