# printshop/api/endpoints/monitoring.py

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response, JSONResponse
import logging

from printshop.core.config import settings
from printshop.core.metrics import metrics
from printshop.services.pricing_engine import pricing_engine

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/metrics", response_class=Response)
async def get_prometheus_metrics():
    """Get Prometheus metrics."""
    try:
        return Response(
            content=metrics.export(),
            media_type="text/plain; version=0.0.4; charset=utf-8"
        )
    except Exception as e:
        logger.error(f"Error generating metrics: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate metrics")

@router.get("/health")
async def health_check():
    """Health check with the active pricing configuration source."""
    health_data = {
        "status": "healthy",
        "version": settings.API_VERSION,
        "config_source": pricing_engine.config.source,
        "products": pricing_engine.supported_products,
        **metrics.get_metrics_summary(),
    }
    return JSONResponse(content=health_data)
