# printshop/api/main.py

from fastapi import APIRouter
from .endpoints import quotes, monitoring

# Create main API router
api_router = APIRouter()

# Include quote endpoints with prefix
api_router.include_router(
    quotes.router,
    prefix="/quotes",
    tags=["Quotes"]
)

# Include monitoring endpoints with prefix
api_router.include_router(
    monitoring.router,
    prefix="/monitoring",
    tags=["Monitoring"]
)
