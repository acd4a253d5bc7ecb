# main.py

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from printshop.core.config import settings
from printshop.core.error_handlers import setup_error_handlers
from printshop.api.main import api_router
from printshop.logging import setup_logging
from printshop.services.config_loader import config_loader
from printshop.services.pricing_engine import pricing_engine

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager: configure logging and load pricing once."""
    setup_logging(settings.LOG_CONFIG)

    # Never raises; falls back to the embedded configuration
    config = await config_loader.load_async()
    pricing_engine.update_config(config)
    logger.info(f"Application startup completed (pricing from {config.source})")

    yield

    logger.info("Application shutdown")

app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)

# Set up error handlers
setup_error_handlers(app)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include the main API router (quotes + monitoring)
app.include_router(api_router, prefix="/api/v1")

@app.get("/", tags=["Root"])
async def read_root():
    """A simple health-check endpoint."""
    return {"status": "ok", "message": "Print Shop Pricing API is running"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
