import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stat_relay.api.router import api_router
from stat_relay.core.config import settings
from stat_relay.core.errors import RelayError
from stat_relay.core.schemas import ErrorResponse
from stat_relay.core.upstream import build_http_client

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


# One outbound client for the whole process, closed when the app stops
@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.http_client = build_http_client(settings)
    logger.info(f"Upstream: {settings.STATS_API_BASE} (verify TLS: {settings.VERIFY_TLS})")

    yield
    await app.state.http_client.aclose()


app = FastAPI(title="Stat Relay", lifespan=lifespan)


# Errors are reported in the body, the HTTP status stays 200
@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError):
    logger.error(f"{request.method} {request.url}: {type(exc).__name__}: {exc.message}")
    body = ErrorResponse(err_code=exc.err_code, err_msg=exc.message)
    return JSONResponse(status_code=200, content=body.model_dump())


# Include the master router containing all our endpoints
app.include_router(api_router)
