"""Shared schema pieces."""

from pydantic import BaseModel, ConfigDict


class ApiModel(BaseModel):
    """Base for bodies whose wire names are camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
