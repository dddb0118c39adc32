"""
Alert Relay - FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from alertrelay import __version__
from alertrelay.api.routes import health, notifications
from alertrelay.core.config import settings
from alertrelay.core.logging import setup_logging
from alertrelay.notification.factory import get_notification_dispatcher

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    logger.info("Starting Alert Relay", version=__version__, env=settings.APP_ENV)
    
    # Channels degrade rather than fail start-up
    dispatcher = get_notification_dispatcher()
    await dispatcher.start()
    app.state.dispatcher = dispatcher
    
    yield
    
    # Shutdown
    logger.info("Shutting down Alert Relay")
    await dispatcher.close()


# Create FastAPI application
app = FastAPI(
    title="Alert Relay",
    description="Chat notification channel for check-state alerts",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount Prometheus metrics endpoint
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)

# Include API routes
app.include_router(health.router, tags=["Health"])
app.include_router(
    notifications.router,
    prefix=f"{settings.API_PREFIX}/notifications",
    tags=["Notifications"],
)


def run():
    """Run the application using uvicorn."""
    import uvicorn
    
    uvicorn.run(
        "alertrelay.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.APP_DEBUG,
    )


if __name__ == "__main__":
    run()
