# printshop/api/endpoints/quotes.py

from enum import Enum
from fastapi import APIRouter, Depends
from typing import Any, Dict, List
import logging

from printshop.core.config import settings
from printshop.core.error_handlers import failure_response
from printshop.schemas.quote import QuoteRequest, QuoteResponse, QuoteSummaryResponse, ProductInfo
from printshop.services.paper import Paper
from printshop.services.pricing_engine import PricingEngine, pricing_engine
from printshop.services.pricing_models import DesignServiceKind, QuoteFailure
from printshop.services.quote_summary import format_price, render_summary

logger = logging.getLogger(__name__)
router = APIRouter()

def get_pricing_engine() -> PricingEngine:
    """Shared engine; overridden in tests."""
    return pricing_engine

def _default_value(value: Any) -> Any:
    if isinstance(value, Paper):
        return value.code
    if isinstance(value, Enum):
        return value.value
    return value

@router.post(
    "/calculate",
    response_model=QuoteResponse,
    summary="Calculate an itemized quote"
)
def calculate_quote(request: QuoteRequest, engine: PricingEngine = Depends(get_pricing_engine)):
    quote = engine.calculate(request.product_type, request.options, request.quantity, request.design_service)
    if isinstance(quote, QuoteFailure):
        return failure_response(quote)

    return {
        **quote.to_dict(),
        "total_display": format_price(quote.total),
        "currency": settings.CURRENCY,
    }

@router.post(
    "/summary",
    response_model=QuoteSummaryResponse,
    summary="Describe the quoted configuration"
)
def quote_summary(request: QuoteRequest, engine: PricingEngine = Depends(get_pricing_engine)):
    quote = engine.calculate(request.product_type, request.options, request.quantity, request.design_service)
    if isinstance(quote, QuoteFailure):
        return failure_response(quote)

    return {
        "summary": render_summary(quote),
        "total": quote.total,
        "total_display": format_price(quote.total),
    }

@router.get("/products", response_model=List[ProductInfo])
def list_products(engine: PricingEngine = Depends(get_pricing_engine)):
    """Product families with their option defaults and available design services."""
    products = []
    for product_type, calculator in engine.calculators.items():
        defaults = {
            name: _default_value(field.default)
            for name, field in calculator.options_model.model_fields.items()
            if not field.is_required()
        }
        services = []
        if product_type in engine.design_calculator.profiles:
            services = [kind.value for kind in DesignServiceKind if kind is not DesignServiceKind.NONE]
        products.append({
            "product_type": product_type.value,
            "defaults": defaults,
            "design_services": services,
        })
    return products

@router.get("/config")
def get_config(engine: PricingEngine = Depends(get_pricing_engine)) -> Dict[str, Any]:
    """Source and contents summary of the loaded pricing configuration."""
    return {
        **engine.config.to_summary(),
        "currency": settings.CURRENCY,
    }
