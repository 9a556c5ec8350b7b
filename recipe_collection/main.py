# main.py
# Main application file for the FastAPI recipe collection service.

import logging
import logging.config
from pathlib import Path
from fastapi import FastAPI, Request
import uvicorn
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

# Import the CORS middleware
from fastapi.middleware.cors import CORSMiddleware

# Rate limiting
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

# Import local modules
from recipe_collection.db.session import engine
from recipe_collection import models
from recipe_collection.api import auth, recipes, public
from recipe_collection.core.config import settings
from recipe_collection.core.logging_middleware import StructuredLoggingMiddleware
from recipe_collection.core.rate_limit import limiter

# Load logging configuration, relative paths are resolved from the project root
_logging_config = Path(settings.LOGGING_CONFIG)
if not _logging_config.is_absolute():
    _logging_config = Path(__file__).resolve().parent.parent / _logging_config
if _logging_config.exists():
    logging.config.fileConfig(_logging_config, disable_existing_loggers=False)
else:
    logging.basicConfig(level=logging.INFO)

# Get the logger instance
logger = logging.getLogger(__name__)


# Create all database tables if they don't exist yet.
models.Base.metadata.create_all(bind=engine)

# Initialize the FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API for managing, scaling and sharing a personal recipe collection.",
    version="1.0.0",
    root_path=settings.ROOT_PATH,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
)

# Add rate limiter to app state and register exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# --- Add Structured Logging Middleware ---
app.add_middleware(StructuredLoggingMiddleware)

# --- Add CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept"],
    expose_headers=["X-Total-Count", "X-Collection-Count"],
)


# --- Security Headers Middleware ---

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.ENVIRONMENT in ["development", "testing"]:
            # Relaxed to allow FastAPI Swagger UI assets
            response.headers["Content-Security-Policy"] = (
                "default-src 'self'; "
                "img-src 'self' data: https://fastapi.tiangolo.com; "
                "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
                "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net"
            )
        else:
            response.headers["Content-Security-Policy"] = "default-src 'self'"
        return response


app.add_middleware(SecurityHeadersMiddleware)

# Include API routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(recipes.router, prefix="/recipes", tags=["Recipes"])
app.include_router(public.router, prefix="/public", tags=["Shared Recipes"])


@app.get("/", tags=["Root"])
async def read_root():
    """
    Root endpoint to check if the API is running.
    """
    logger.debug("Root endpoint accessed")
    return {"message": "Welcome to the Recipe Collection API!"}


@app.get("/health", tags=["Root"])
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    # Development server; use a process manager in production.
    uvicorn.run("recipe_collection.main:app", host="0.0.0.0", port=8000, reload=True)
