# app/schemas/token.py
from pydantic import BaseModel
from typing import Optional


class AdminTokenPayload(BaseModel):
    role: str
    tenant: Optional[str] = None
    iat: int
    exp: int  # Standard claim for expiration time

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    password: str
    tenant: Optional[str] = None


class SessionInfo(BaseModel):
    authenticated: bool
    tenant: Optional[str] = None
    expires_at: int
