from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

OutcomeKind = Literal["result", "immediate", "rejected", "transport_error", "exhausted"]

BACKEND_ERROR_KINDS = frozenset({"rejected", "transport_error"})

# Synthetic status for "the upstream accepted the check but never answered".
POLL_EXHAUSTED_STATUS = 599


@dataclass
class CheckOutcome:
    kind: OutcomeKind
    is_up: bool = False
    latency_ms: int = 0
    status_code: int = 0
    message: str | None = None
    error_detail: str | None = None

    @property
    def is_backend_error(self) -> bool:
        return self.kind in BACKEND_ERROR_KINDS

    @property
    def error_rate(self) -> int:
        return 0 if self.is_up else 1

    @classmethod
    def backend_error(cls, kind: OutcomeKind, error_detail: str) -> "CheckOutcome":
        return cls(kind=kind, error_detail=error_detail)

    @classmethod
    def exhausted(cls, latency_ms: int, error_detail: str) -> "CheckOutcome":
        return cls(
            kind="exhausted",
            is_up=False,
            latency_ms=max(latency_ms, 0),
            status_code=POLL_EXHAUSTED_STATUS,
            error_detail=error_detail,
        )

    def to_payload(self) -> dict[str, Any]:
        """Render the camelCase body the dashboard consumes.

        Each kind has its own shape; None values are dropped.
        """
        if self.is_backend_error:
            payload: dict[str, Any] = {
                "isBackendError": True,
                "errorDetail": self.error_detail,
                "statusCode": 0,
            }
        elif self.kind == "immediate":
            payload = {
                "isUp": self.is_up,
                "latency": self.latency_ms,
                "statusCode": self.status_code,
                "message": self.message,
            }
        elif self.kind == "exhausted":
            payload = {
                "latency": self.latency_ms,
                "statusCode": self.status_code,
                "isUp": self.is_up,
                "errorRate": self.error_rate,
                "errorDetail": self.error_detail,
            }
        else:
            payload = {
                "latency": self.latency_ms,
                "statusCode": self.status_code,
                "isUp": self.is_up,
                "errorRate": self.error_rate,
                "message": self.message,
            }
        return {k: v for k, v in payload.items() if v is not None}
