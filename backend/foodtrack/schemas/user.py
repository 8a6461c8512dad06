from datetime import datetime
from uuid import UUID
from pydantic import BaseModel


class UserCreate(BaseModel):
    email: str
    full_name: str | None = None
    household_size: int = 1
    dietary_preferences: list[str] = []
    location: str | None = None


class UserUpdate(BaseModel):
    full_name: str | None = None
    household_size: int | None = None
    dietary_preferences: list[str] | None = None
    location: str | None = None


class UserResponse(BaseModel):
    id: UUID
    email: str
    full_name: str | None
    household_size: int
    dietary_preferences: list[str] | None
    location: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
