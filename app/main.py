# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.routes import router as api_router
from app.config import get_settings
from app.exceptions import AriClearError
from app.logging_config import setup_logging
from services.llm_client import build_openai_client
from services.storage import ScanStore, build_supabase_client

APP_VERSION = "0.1.0"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the outbound clients once per process."""
    settings = get_settings()
    setup_logging(settings.log_level)

    app.state.openai_client = build_openai_client(settings)
    supabase_client = build_supabase_client(settings)
    app.state.scan_store = ScanStore(supabase_client) if supabase_client else None

    logger.info(
        "[main] started version=%s openai=%s supabase=%s",
        APP_VERSION,
        app.state.openai_client is not None,
        supabase_client is not None,
    )
    yield


app = FastAPI(title="AriClear", version=APP_VERSION, lifespan=lifespan)


@app.exception_handler(AriClearError)
async def ariclear_error_handler(request: Request, exc: AriClearError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("[main] %s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("[main] invalid body %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body."})


@app.get("/health")
def health() -> dict:
    return {"status": "healthy", "version": APP_VERSION}


app.include_router(api_router, prefix="/api")
