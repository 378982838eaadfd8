from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel

CheckMethod = Literal["http", "ping", "tcp", "udp", "dns", "whois"]

# Check-Host endpoint per method.
METHOD_ENDPOINTS: dict[CheckMethod, str] = {
    "http": "check-http",
    "ping": "check-ping",
    "tcp": "check-tcp",
    "udp": "check-udp",  # the port goes in the host, e.g. example.com:53
    "dns": "check-dns",
    "whois": "check-whois",
}

# These answer in the submission response and cannot be polled.
IMMEDIATE_METHODS = frozenset({"dns", "whois"})


class CheckRequest(BaseModel):
    """Body of POST /api/check.

    Both fields are optional at the schema level so that a missing field is
    reported with the relay's own 400 envelope instead of a 422.
    """

    url: Optional[str] = None
    method: Optional[str] = None


class UpstreamSubmission(BaseModel):
    request_id: str
    node_id: str
