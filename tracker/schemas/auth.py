from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from tracker.models import UserRole


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    email: str
    role: UserRole


class LoginResponse(BaseModel):
    access_token: str
    token_type: str
    user: LoginUser


class MeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    email: str
    role: UserRole
    created_at: Optional[datetime] = None
