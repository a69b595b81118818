"""Response envelope shared by every endpoint: {success, message, data}."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Stable response shape; data is omitted (null) for plain acknowledgements."""

    success: bool = Field(default=True, description="Whether the request succeeded")
    message: str = Field(default="", description="Human-readable outcome")
    data: T | None = Field(default=None, description="Payload, if any")


class ErrorEnvelope(BaseModel):
    success: bool = False
    message: str
    data: None = None
