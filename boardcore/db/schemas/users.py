from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class UserStats(BaseModel):
    total_banned_users: int = Field(ge=0)
    logged_in_last_24_hours: int = Field(ge=0)
    logged_in_last_week: int = Field(ge=0)
    logged_in_last_month: int = Field(ge=0)
    logged_in_last_year: int = Field(ge=0)
    new_users_last_24_hours: int = Field(ge=0)
    new_users_last_week: int = Field(ge=0)
    new_users_last_month: int = Field(ge=0)
    new_users_last_year: int = Field(ge=0)
    total_registered_users: int = Field(ge=0)
    generated_at: datetime
    model_config = ConfigDict(from_attributes=True)
