# printshop/schemas/quote.py

from pydantic import BaseModel, Field, ConfigDict, StrictFloat, StrictInt
from typing import Any, Dict, List, Optional, Union

# ===================================================================
#  Request model
# ===================================================================
class QuoteRequest(BaseModel):
    """A quote request as sent by the storefront."""
    model_config = ConfigDict(extra="allow")

    product_type: str = Field(..., description="flyer, card, leaflet, letterhead, brochure, book or poster.")
    options: Dict[str, Any] = Field(default_factory=dict, description="Product-specific options.")
    # Numeric strings and booleans are rejected
    quantity: Optional[Union[StrictInt, StrictFloat]] = Field(
        None,
        description="Number of copies. Must be a number greater than zero."
    )
    design_service: Optional[Union[str, Dict[str, Any]]] = Field(
        None,
        description="Optional graphic design service: creation, layout, correction or none."
    )

# ===================================================================
#  Response models
# ===================================================================
class LineItemResponse(BaseModel):
    label: str
    amount: float

class DesignDetailsResponse(BaseModel):
    service: str
    hours: float
    rate: float
    description: str

class QuoteResponse(BaseModel):
    """Itemized quote."""
    product_type: str
    quantity: float
    base_price: float
    surcharges: List[LineItemResponse]
    adjustments: List[LineItemResponse]
    design_cost: float
    design_details: Optional[DesignDetailsResponse] = None
    details: Dict[str, Any]
    total: float
    total_display: str
    currency: str

class QuoteSummaryResponse(BaseModel):
    summary: str
    total: float
    total_display: str

class ProductInfo(BaseModel):
    product_type: str
    defaults: Dict[str, Any]
    design_services: List[str]
