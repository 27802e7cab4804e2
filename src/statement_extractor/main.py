from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from statement_extractor import __version__
from statement_extractor.api.middleware.error_handler import (
    handle_generic_error,
    handle_statement_processing_error,
    handle_validation_error,
)
from statement_extractor.api.middleware.logging import RequestLoggingMiddleware
from statement_extractor.api.v1 import router as v1_router
from statement_extractor.api.v1.health import router as health_router
from statement_extractor.config import settings
from statement_extractor.core.exceptions import StatementProcessingError
from statement_extractor.core.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_file)
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Statement Extractor API",
        description="Credit card statement field extraction",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(StatementProcessingError, handle_statement_processing_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()


def run() -> None:
    """Serve the API on the configured host and port."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
