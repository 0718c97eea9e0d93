"""FastAPI application for the Fact Guard service."""

import contextlib
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..infrastructure.dependencies import ServiceContainer
from .endpoints import fact_check, health

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        container: Service container to use, built from the environment
            on startup if omitted

    Returns:
        Configured application
    """

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the pipeline on startup and close providers on shutdown."""
        if getattr(app.state, "container", None) is None:
            app.state.container = ServiceContainer()
        await app.state.container.start()

        yield  # Application runs here

        await app.state.container.shutdown()

    app = FastAPI(
        title="Fact Guard API",
        description="Fact-verification pipeline for prose with web cross-verification",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.container = container

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        if any(error.get("loc", ())[-1:] == ("mode",) for error in errors):
            return JSONResponse(status_code=400, content={"error": "Invalid mode", "message": message})
        logger.warning(f"⚠️ Rejected malformed request to {request.url.path}: {message}")
        return JSONResponse(status_code=400, content={"error": "Invalid request", "message": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    # Include routers
    app.include_router(health.router)
    app.include_router(fact_check.router)

    return app


app = create_app()
