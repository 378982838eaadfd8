import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from probe_relay.api_schemas import (
    CheckErrorResponse,
    CheckResponse,
    ConfigResponse,
    HealthResponse,
    RootResponse,
)
from probe_relay.checks.remote_check import CheckValidationError, run_remote_check
from probe_relay.config import settings
from probe_relay.models import IMMEDIATE_METHODS, METHOD_ENDPOINTS, CheckRequest

logger = logging.getLogger(__name__)

MISSING_FIELDS_ERROR = "URL and Method are required."


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info(
        "Probe relay ready on port %s (monitoring node: %s)",
        settings.PORT,
        settings.CHECK_HOST_NODE_ID,
    )
    yield


app = FastAPI(
    title="Probe Relay",
    version="1.0.0",
    description=(
        "Relays URL checks from the status dashboard to Check-Host, "
        "polls for the node result and returns a normalized outcome."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.CORS_ALLOW_ORIGINS),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_: Request, exc: RequestValidationError):
    logger.info("Rejected malformed check request: %s", exc.errors())
    return JSONResponse(status_code=400, content={"error": MISSING_FIELDS_ERROR})


@app.get(
    "/",
    response_model=RootResponse,
    tags=["system"],
    summary="Relay Banner",
)
def root():
    return {
        "status": "Backend running OK",
        "message": "Ready to receive checks on /api/check",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["system"],
    summary="Health Check",
    description="Liveness endpoint used by probes and orchestration.",
)
def health():
    return {"status": "ok"}


@app.get(
    "/config",
    response_model=ConfigResponse,
    tags=["system"],
    summary="Current Effective Config",
    description="Returns non-secret runtime config values.",
)
def config():
    return {
        "check_host_base_url": settings.CHECK_HOST_BASE_URL,
        "node_id": settings.CHECK_HOST_NODE_ID,
        "methods": dict(METHOD_ENDPOINTS),
        "immediate_methods": sorted(IMMEDIATE_METHODS),
        "poll_initial_delay_s": settings.CHECK_POLL_INITIAL_DELAY_S,
        "poll_interval_s": settings.CHECK_POLL_INTERVAL_S,
        "poll_max_attempts": settings.CHECK_POLL_MAX_ATTEMPTS,
        "submit_timeout_s": settings.CHECK_SUBMIT_TIMEOUT_S,
        "result_timeout_s": settings.CHECK_RESULT_TIMEOUT_S,
    }


@app.post(
    "/api/check",
    response_model=CheckResponse,
    response_model_exclude_none=True,
    responses={400: {"model": CheckErrorResponse}},
    tags=["checks"],
    summary="Run Remote Check",
    description=(
        "Runs one check through Check-Host. Upstream failures and timeouts "
        "are reported in the body with HTTP 200; only invalid input is a 400."
    ),
)
def check(request: CheckRequest):
    try:
        outcome = run_remote_check(request.url, request.method)
    except CheckValidationError as exc:
        if exc.missing_fields:
            return JSONResponse(status_code=400, content={"error": str(exc)})
        return JSONResponse(
            status_code=400,
            content={
                "error": str(exc),
                "isBackendError": True,
                "errorDetail": str(exc),
                "statusCode": 0,
            },
        )
    return outcome.to_payload()
