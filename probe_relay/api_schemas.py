from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(description="Health status")


class RootResponse(BaseModel):
    status: str
    message: str


class ConfigResponse(BaseModel):
    check_host_base_url: str
    node_id: str
    methods: dict[str, str]
    immediate_methods: list[str]
    poll_initial_delay_s: float
    poll_interval_s: float
    poll_max_attempts: int = Field(ge=0)
    submit_timeout_s: float
    result_timeout_s: float


# Field names follow the dashboard's wire format.
class CheckResponse(BaseModel):
    isUp: bool | None = None
    latency: int | None = Field(default=None, ge=0)
    statusCode: int
    errorRate: int | None = None
    message: str | None = None
    isBackendError: bool | None = None
    errorDetail: str | None = None


class CheckErrorResponse(BaseModel):
    error: str
    isBackendError: bool | None = None
    errorDetail: str | None = None
    statusCode: int | None = None
