"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from visa_translator.config import settings
from visa_translator.core.errors import ConfigurationError, InvalidRequestError
from visa_translator.core.glossary import get_vocabulary_store
from visa_translator.logging_config import configure_logging
from visa_translator.api.dependencies import Pipeline
from visa_translator.api.v1.routes import glossary, translation

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging(settings.log_level)

    # Startup: warm the glossary cache so the first request does not pay for it
    get_vocabulary_store().load()

    if not settings.openai_api_key:
        logger.warning(
            "OPENAI_API_KEY is not set; translate requests will fail until it is configured"
        )

    yield
    # Shutdown: cleanup if needed


app = FastAPI(
    title=settings.app_name,
    description="Proper-noun-safe Japanese to English translation for visa documents",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(translation.router, tags=["translation"])
app.include_router(translation.router, prefix="/api", tags=["translation"])
app.include_router(glossary.router, prefix="/api/v1", tags=["glossary"])


# =============================================================================
# Error handlers
# =============================================================================


@app.exception_handler(InvalidRequestError)
async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("Configuration error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=500, content={"error": "Translation service is not configured"}
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        message = "Invalid JSON body"
    elif any("text" in error.get("loc", ()) for error in errors):
        message = "Invalid text input"
    elif any("mode" in error.get("loc", ()) for error in errors):
        message = "Only visa-strict mode is supported"
    else:
        message = "Invalid text input"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error on %s: %s", request.url.path, type(exc).__name__
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Visa Translator API", "version": "0.1.0"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/health/llm")
async def llm_health(pipeline: Pipeline):
    """Check that the translation provider is reachable."""
    if await pipeline.health_check():
        return {"status": "healthy"}
    return JSONResponse(status_code=503, content={"status": "unavailable"})
