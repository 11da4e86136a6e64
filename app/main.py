"""FastAPI application entrypoint. No business logic; only wiring, middleware and logging setup."""

import logging

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api.error_handlers import register_error_handlers
from app.api.v1 import router as v1_router
from app.core.config import settings
from app.core.responses import success_response

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)

app = FastAPI(
    title="Teamwork API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

# Uploaded avatars and post images; URLs are produced by app.services.storage.
app.mount(
    settings.STORAGE_URL_PREFIX,
    StaticFiles(directory=settings.STORAGE_ROOT, check_dir=False),
    name="storage",
)


@app.get("/")
def root() -> JSONResponse:
    """Root route; minimal payload for discovery."""
    return success_response(message="Teamwork API")
