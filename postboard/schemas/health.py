"""Health check payload."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    What:  `data` member of GET /health.
    Who:   Docker health checks and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
