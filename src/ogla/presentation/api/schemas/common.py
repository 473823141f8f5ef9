"""Common schemas shared across API endpoints.

Every response uses the same envelope::

    {"success": bool, "message": str, "data": ..., "errors": [...]}

Keys are camelCase on the wire; models accept snake_case too.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FieldErrorResponse(CamelModel):
    """A single validation failure."""

    field: str = Field(..., description="Offending field (camelCase)")
    message: str = Field(..., description="What is wrong with it")


class MessageResponse(CamelModel):
    """Envelope without a payload."""

    success: bool = True
    message: str


class ApiResponse(CamelModel, Generic[T]):
    """Envelope carrying a payload."""

    success: bool = True
    message: str
    data: T


class ErrorResponse(CamelModel):
    """Standard error envelope."""

    success: bool = False
    message: str = Field(..., description="Error message")
    code: str = Field(..., description="Error code for programmatic handling")
    errors: list[FieldErrorResponse] | None = None
    requires_verification: bool | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "Invalid email or password",
                "code": "INVALID_CREDENTIALS",
            },
        },
    )


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    api_versions: list[str] = Field(..., description="Mounted API versions")
