"""Readiness payload: whether the gate can resolve identities right now."""

from typing import Literal

from pydantic import BaseModel, Field


class GateStatus(BaseModel):
    model_config = {"populate_by_name": True}

    environment: str
    database: Literal["connected", "disconnected"]
    database_timeout_sec: float = Field(..., alias="databaseTimeoutSec")
    jwt_secret_configured: bool = Field(
        ...,
        alias="jwtSecretConfigured",
        description="False while the built-in development secret signs tokens",
    )
