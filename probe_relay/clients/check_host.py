from __future__ import annotations

from typing import Any

import requests

_HEADERS = {"Accept": "application/json"}


class CheckHostClientError(RuntimeError):
    def __init__(self, message: str, *, timed_out: bool = False) -> None:
        super().__init__(message)
        self.timed_out = timed_out


def _get_json(url: str, *, params: dict[str, str] | None, timeout_s: float) -> Any:
    try:
        resp = requests.get(url, params=params, headers=_HEADERS, timeout=timeout_s)
    except requests.Timeout as exc:
        raise CheckHostClientError(
            f"Check-Host API timed out after {timeout_s}s", timed_out=True
        ) from exc
    except requests.ConnectionError as exc:
        raise CheckHostClientError(
            f"connection error: {exc.__class__.__name__}: {exc}"
        ) from exc
    except requests.RequestException as exc:
        raise CheckHostClientError(f"{exc.__class__.__name__}: {exc}") from exc

    if resp.status_code >= 400:
        snippet = resp.text[:240].replace("\n", "\\n")
        raise CheckHostClientError(
            f"Check-Host API returned HTTP {resp.status_code}: {snippet}"
        )

    try:
        return resp.json()
    except ValueError as exc:
        snippet = resp.text[:240].replace("\n", "\\n")
        raise CheckHostClientError(
            f"Check-Host API returned invalid JSON: {snippet}"
        ) from exc


def start_check(
    endpoint: str,
    host: str,
    *,
    base_url: str,
    node_id: str,
    timeout_s: float,
) -> dict[str, Any]:
    """Submit a check; the reply carries ``ok``, ``request_id`` and maybe ``message``."""
    payload = _get_json(
        f"{base_url.rstrip('/')}/{endpoint}",
        params={"host": host, "node": node_id},
        timeout_s=timeout_s,
    )
    if not isinstance(payload, dict):
        raise CheckHostClientError("Check-Host API returned an unexpected payload")
    return payload


def get_check_result(
    request_id: str,
    *,
    base_url: str,
    timeout_s: float,
) -> Any:
    # Maps node id to a list of result records, or null while pending.
    return _get_json(
        f"{base_url.rstrip('/')}/check-result/{request_id}",
        params=None,
        timeout_s=timeout_s,
    )
