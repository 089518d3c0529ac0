# External imports
from pydantic import BaseModel, ConfigDict, Field, field_validator  # pydantic v2
from datetime import datetime
from typing import Any, List, Optional


class UserCredentials(BaseModel):
    """
    Username/password pair used for registration and login.
    Emptiness is checked by the user concept so the error message stays uniform.
    """
    username: str = Field(..., description="Account username", examples=["alice"])
    password: str = Field(..., description="Plain text password", examples=["alice123"])


class UserUpdate(BaseModel):
    """Partial update of the logged-in user's account."""
    username: Optional[str] = Field(None, description="New username")
    password: Optional[str] = Field(None, description="New password")


class UserOut(BaseModel):
    """Public view of a user; the password hash is never part of it."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    username: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> str:
        return str(v)


class Message(BaseModel):
    msg: str


class UserCreated(Message):
    user: UserOut


class UserList(BaseModel):
    users: List[UserOut]
