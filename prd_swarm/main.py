import logging

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from .core.config import settings
from .errors import ProviderError, SwarmError
from .llm_providers import missing_credentials
from .middleware.error_handler import (
    generic_exception_handler,
    http_exception_handler,
    provider_exception_handler,
    swarm_exception_handler,
    validation_exception_handler,
)
from .routers import generate

logger = logging.getLogger(__name__)


app = FastAPI(
    title="PRD Swarm API",
    description="Multi-agent PRD generation with wave-scheduled specialist agents",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(ProviderError, provider_exception_handler)
app.add_exception_handler(SwarmError, swarm_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.include_router(generate.router)


@app.on_event("startup")
async def startup_event():
    """Validate configuration on startup."""
    logger.info("Starting PRD Swarm API...")

    settings.validate_production_config()

    missing = missing_credentials(settings.MODEL_PROVIDER)
    if missing:
        logger.warning(f"Provider {settings.MODEL_PROVIDER} is missing configuration: {missing}")

    if settings.DEBUG and settings.PRD_SWARM_ENV == "production":
        logger.warning("WARNING: DEBUG mode is enabled in production")


@app.get("/health", response_class=ORJSONResponse)
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "env": settings.PRD_SWARM_ENV,
        "provider": settings.MODEL_PROVIDER,
    }

