"""Pydantic schemas for health check payloads."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    """Payload of the health check envelope."""

    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Database connectivity at the time of the check",
    )
