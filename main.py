"""
FastAPI application entry point (HTTP gateway for the payments service).
"""
from fastapi import Depends, FastAPI
from contextlib import asynccontextmanager

from api.routes import payments as payments_routes
from api.dependencies import get_processor
from api.middleware import RequestIDMiddleware, LoggingMiddleware
from application.factory import get_payment_processor
from application.services.payment_processor import PaymentProcessor
from core.config import settings
from core.exceptions import register_exception_handlers
from core.logging_config import get_logger, configure_logging


# Configure logging explicitly at the entry point
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_payment_processor()
    logger.info("app_started", project=settings.PROJECT_NAME, version=settings.VERSION)
    yield
    logger.info("app_stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # Middleware: the last added runs first, so RequestID wraps logging
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(payments_routes.router, prefix=settings.API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health(processor: PaymentProcessor = Depends(get_processor)):
        status = await processor.health()
        return {"status": status.status}

    return app


app = create_app()
