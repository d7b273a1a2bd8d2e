"""Pydantic models for the n8n rows written by the injector."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class N8NUser(BaseModel):
    """Placeholder n8n user owning the injected API key."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    id: str = Field(..., description="User ID, taken from the API key subject")
    email: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    password: str = Field(..., description="Placeholder password hash")
    personalization_answers: str = Field(
        default="{}", alias="personalizationAnswers"
    )
    global_role_id: int = Field(default=1, alias="globalRoleId")


class ApiKeyRecord(BaseModel):
    """n8n ``api_key`` row holding the literal pre-shared key."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    id: str = Field(..., description="Random key ID, prefixed with ak_")
    label: str
    api_key: str = Field(alias="apiKey", description="Literal API key")
    user_id: str = Field(alias="userId", description="Owning user ID")


class InjectionStatus(str, Enum):
    """Outcome of an injection run."""

    INSERTED = "inserted"
    ALREADY_PRESENT = "already_present"


class InjectionResult(BaseModel):
    """Result of injecting an API key into the database."""

    status: InjectionStatus
    user_id: str
    api_key_id: str = Field(..., description="ID of the new or existing row")
