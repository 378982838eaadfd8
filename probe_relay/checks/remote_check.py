from __future__ import annotations

import logging
import math
import re
from typing import Any

from probe_relay.checks.results import CheckOutcome
from probe_relay.clients.check_host import (
    CheckHostClientError,
    get_check_result,
    start_check,
)
from probe_relay.config import settings
from probe_relay.models import IMMEDIATE_METHODS, METHOD_ENDPOINTS, UpstreamSubmission
from probe_relay.polling import Exhausted, PollPolicy, poll_until

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class CheckValidationError(ValueError):
    """The caller sent an incomplete request or an unsupported method."""

    def __init__(
        self, message: str, *, method: str | None = None, missing_fields: bool = False
    ) -> None:
        super().__init__(message)
        self.method = method
        self.missing_fields = missing_fields


def _is_one(value: Any) -> bool:
    # Upstream flags are the number 1; True is not accepted.
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float)) and value == 1


def _parse_latency_ms(raw: Any) -> int:
    if isinstance(raw, bool) or raw is None:
        return 0
    try:
        seconds = float(raw)
    except (TypeError, ValueError):
        return 0
    ms = seconds * 1000 + 0.5
    if not math.isfinite(ms) or ms <= 0.5:
        return 0
    return int(math.floor(ms))


def _parse_status_code(raw: Any) -> int:
    if raw is None or isinstance(raw, bool):
        return 0
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return 0
    try:
        return int(match.group(1))
    except ValueError:
        # digit run too long for int()
        return 0


def normalize_record(record: Any) -> CheckOutcome:
    """
    Turn a Check-Host result record ``[up, latency_s, message, status]`` into
    an outcome. Positions may be missing or hold unexpected types.
    """
    fields = list(record) if isinstance(record, (list, tuple)) else []
    fields += [None] * (4 - len(fields))
    up_flag, latency_s, message, status_raw = fields[:4]

    return CheckOutcome(
        kind="result",
        is_up=_is_one(up_flag),
        latency_ms=_parse_latency_ms(latency_s),
        status_code=_parse_status_code(status_raw),
        message=None if message is None else str(message),
    )


def validate_request(url: str | None, method: str | None) -> tuple[str, str, str]:
    """Return ``(url, method, endpoint)`` or raise CheckValidationError."""
    if not url or not method:
        raise CheckValidationError(
            "URL and Method are required.", method=method, missing_fields=True
        )
    endpoint = METHOD_ENDPOINTS.get(method)
    if endpoint is None:
        raise CheckValidationError(f"Unsupported method: {method}.", method=method)
    return url, method, endpoint


def _poll_policy() -> PollPolicy:
    return PollPolicy(
        initial_delay_s=settings.CHECK_POLL_INITIAL_DELAY_S,
        attempt_timeout_s=settings.CHECK_RESULT_TIMEOUT_S,
        interval_s=settings.CHECK_POLL_INTERVAL_S,
        max_attempts=settings.CHECK_POLL_MAX_ATTEMPTS,
    )


def _node_record(result_payload: Any, node_id: str) -> Any | None:
    if not isinstance(result_payload, dict):
        return None
    node_results = result_payload.get(node_id)
    if not node_results or not isinstance(node_results, (list, tuple)):
        return None
    return node_results[0] or None


def _run(url: str, method: str, endpoint: str) -> CheckOutcome:
    node_id = settings.CHECK_HOST_NODE_ID
    base_url = settings.CHECK_HOST_BASE_URL

    logger.info("Submitting %s check for %s via node %s", method, url, node_id)
    started = start_check(
        endpoint,
        url,
        base_url=base_url,
        node_id=node_id,
        timeout_s=settings.CHECK_SUBMIT_TIMEOUT_S,
    )

    request_id = started.get("request_id")
    if not _is_one(started.get("ok")) or not request_id:
        if method in IMMEDIATE_METHODS:
            upstream_message = started.get("message") or "Data received."
            return CheckOutcome(
                kind="immediate",
                is_up=True,
                latency_ms=0,
                status_code=200,
                message=f"Initial result for {method}: {upstream_message}",
            )
        logger.warning("Check-Host rejected %s check for %s: %s", method, url, started)
        return CheckOutcome.backend_error(
            "rejected",
            f"Check-Host API rejected the request for method {method}.",
        )

    submission = UpstreamSubmission(request_id=str(request_id), node_id=node_id)

    def fetch(timeout_s: float) -> Any | None:
        payload = get_check_result(
            submission.request_id, base_url=base_url, timeout_s=timeout_s
        )
        return _node_record(payload, submission.node_id)

    polled = poll_until(fetch, _poll_policy())
    if isinstance(polled, Exhausted):
        logger.warning(
            "No result for %s check %s after %d attempts",
            method,
            submission.request_id,
            polled.attempts,
        )
        return CheckOutcome.exhausted(
            latency_ms=settings.CHECK_TIMEOUT_LATENCY_MS,
            error_detail=(
                f"Check-Host node did not return result for {method} within timeout."
            ),
        )

    return normalize_record(polled.value)


def run_remote_check(url: str | None, method: str | None) -> CheckOutcome:
    """
    Submit ``url`` to Check-Host with ``method`` and wait for the node's result.

    Raises CheckValidationError before any network call when the input is
    incomplete or the method is unsupported. Every other failure is returned
    as an outcome.
    """
    url, method, endpoint = validate_request(url, method)

    try:
        return _run(url, method, endpoint)
    except CheckHostClientError as exc:
        if exc.timed_out:
            error_detail = f"Backend Timeout when calling Check-Host API for {method}."
        else:
            error_detail = f"Backend failed to connect to Check-Host: {exc}"
        logger.error("[BACKEND ERROR] %s", error_detail)
        return CheckOutcome.backend_error("transport_error", error_detail)
    except Exception as exc:
        error_detail = f"Backend failed to process Check-Host response: {exc}"
        logger.exception("[BACKEND ERROR] %s", error_detail)
        return CheckOutcome.backend_error("transport_error", error_detail)
