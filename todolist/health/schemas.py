"""Health check response schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for liveness probe."""

    status: str = Field(..., description="Health status (ok)")


class ReadinessResponse(BaseModel):
    """Response for readiness probe with per-table store checks."""

    status: str = Field(..., description="Overall status (ok, degraded)")
    checks: dict[str, str] = Field(
        default_factory=dict,
        description="Result per table: ok, timeout or error",
    )
