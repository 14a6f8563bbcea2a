"""Auth and API key request/response schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from cliproom.schemas.common import ApiModel


class CredentialsRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserInfo(BaseModel):
    id: str
    username: str


class SignupResponse(ApiModel):
    user: UserInfo
    api_key: str = Field(alias="apiKey")
    message: str = "User created successfully"


class LoginResponse(BaseModel):
    user: UserInfo
    message: str = "Logged in successfully"


class MeResponse(BaseModel):
    user: UserInfo


class ApiKeyResponse(ApiModel):
    api_key: Optional[str] = Field(alias="apiKey")


class ApiKeyRegeneratedResponse(ApiKeyResponse):
    message: str = "API key regenerated successfully"
