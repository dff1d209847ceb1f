"""DocCenter — FastAPI Application Entry Point.

Receives document-delivery webhooks and files each document into the
client's folder tree.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import init_db, test_connection
from app.api.webhook_routes import router as webhook_router
from app.api.system_routes import router as system_router
from app.core.logging import get_logger

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info("🚀 DocCenter starting up...")
    logger.info(f"📁 Client base path: {settings.client_base_path}")
    if test_connection():
        try:
            init_db()
        except Exception as e:
            logger.error(f"❌ Table creation failed: {e}")
    else:
        logger.error("❌ Database NOT connected — webhooks will not be stored")
    if not settings.webhook_token:
        logger.warning("⚠️  WEBHOOK_TOKEN is not set — every webhook will be unauthorized")
    yield
    logger.info("DocCenter shut down")


app = FastAPI(
    title="DocCenter",
    description="Document-delivery webhook receiver — stores each notification and files the referenced document into the client's folder.",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(webhook_router)
app.include_router(system_router)
