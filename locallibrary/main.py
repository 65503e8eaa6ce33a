"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from locallibrary import __version__
from locallibrary.api import api_router
from locallibrary.config import settings
from locallibrary.core.exceptions import AppException, StoreTimeoutError
from locallibrary.core.logging import get_logger, setup_logging
from locallibrary.database import Database

logger = get_logger("main")


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the application around a store handle."""
    setup_logging(settings.log_level)
    database = database or Database.from_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup and shutdown."""
        # Startup
        await database.create_all()
        logger.info("Store ready")
        yield
        # Shutdown
        await database.close()
        logger.info("Store closed")

    app = FastAPI(
        title=settings.app_name,
        description="Local library catalog API",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.database = database

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        """Handle application exceptions."""
        status_code = 504 if isinstance(exc, StoreTimeoutError) else 400
        logger.warning(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content={
                "detail": exc.message,
                "error_code": exc.error_code,
                "details": exc.details,
            },
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_exception_handler(request: Request, exc: SQLAlchemyError):
        """Store failures end the request; they are not retried."""
        logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
        content = {"detail": "Store failure", "error_code": "STORE_FAILURE"}
        if settings.debug:
            content["type"] = type(exc).__name__
        return JSONResponse(status_code=503, content=content)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")

        if settings.debug:
            return JSONResponse(
                status_code=500,
                content={
                    "detail": str(exc),
                    "type": type(exc).__name__,
                },
            )

        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # Include API router
    app.include_router(api_router)

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "app": settings.app_name}

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": settings.app_name,
            "version": __version__,
            "catalog": "/catalog",
            "docs": "/docs" if settings.debug else None,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "locallibrary.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
