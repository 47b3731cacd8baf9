from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard.models.task import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH


class TaskPayload(BaseModel):
    """Body of task create and update requests."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"title": "Buy milk", "description": "2%"}},
    )

    title: str = Field(..., max_length=TITLE_MAX_LENGTH, description="Task title")
    description: str = Field(
        default="", max_length=DESCRIPTION_MAX_LENGTH, description="Task description"
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        # Stored exactly as submitted
        if not v.strip():
            raise ValueError("title must not be blank")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def none_description_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class TaskOut(BaseModel):
    id: int = Field(..., description="Task identifier")
    title: str = Field(..., description="Task title")
    description: str = Field(..., description="Task description")

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str = Field(..., description="Response message")


class TaskCreatedResponse(MessageResponse):
    id: int = Field(..., description="Identifier assigned to the new task")


class FieldError(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(MessageResponse):
    errors: list[FieldError] = Field(default_factory=list)


class FlashMessage(BaseModel):
    level: str = Field(..., description="success or error")
    message: str


class RegistrationForm(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    password: str = ""
    password_confirmation: str = ""
    csrf_token: str = ""


class RegisterPage(BaseModel):
    """Context of the registration form."""

    csrf_token: str
    flashes: list[FlashMessage] = Field(default_factory=list)


class LoginPage(BaseModel):
    """Context of the login form."""

    csrf_token: str
    last_username: str = ""
    error: str | None = None
    flashes: list[FlashMessage] = Field(default_factory=list)
    current_user: str | None = Field(
        default=None, description="E-mail of the signed-in user, if any"
    )
