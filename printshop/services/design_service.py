# printshop/services/design_service.py

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from printshop.services.pricing_models import (
    DesignServiceDetails, DesignServiceKind, DesignServiceRequest, ProductType
)
from printshop.services.pricing_primitives import round_money

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class LaborProfile:
    """Hours per service. For per-page products correction/layout are hours per page."""
    creation: float
    correction: float
    layout: float
    per_page: bool = False
    # Per-page hours used instead for the reduced (a5) format
    reduced_format_hours: Optional[Tuple[float, float]] = None

    def hours_for(self, kind: DesignServiceKind) -> float:
        return getattr(self, kind.value)

LABOR_PROFILES: Dict[ProductType, LaborProfile] = {
    ProductType.FLYER: LaborProfile(creation=4, correction=2, layout=2),
    ProductType.CARD: LaborProfile(creation=1, correction=0.5, layout=0.5),
    ProductType.LEAFLET: LaborProfile(creation=8, correction=3, layout=3),
    ProductType.LETTERHEAD: LaborProfile(creation=4, correction=2, layout=2),
    ProductType.POSTER: LaborProfile(creation=7, correction=1, layout=1),
    ProductType.BROCHURE: LaborProfile(
        creation=8, correction=0.17, layout=0.34, per_page=True, reduced_format_hours=(0.119, 0.238)
    ),
    ProductType.BOOK: LaborProfile(
        creation=12, correction=0.17, layout=0.25, per_page=True, reduced_format_hours=(0.119, 0.175)
    ),
}

HOURLY_RATES: Dict[DesignServiceKind, float] = {
    DesignServiceKind.CREATION: 55,
    DesignServiceKind.LAYOUT: 40,
    DesignServiceKind.CORRECTION: 40,
}

SERVICE_LABELS: Dict[DesignServiceKind, str] = {
    DesignServiceKind.CREATION: "Full creation",
    DesignServiceKind.LAYOUT: "Layout",
    DesignServiceKind.CORRECTION: "Simple correction",
}

REDUCED_FORMAT = "a5"

class DesignServiceCalculator:
    """Labour cost of the optional graphic design add-on."""

    def __init__(
        self,
        profiles: Optional[Dict[ProductType, LaborProfile]] = None,
        rates: Optional[Dict[DesignServiceKind, float]] = None
    ):
        self.profiles = profiles or LABOR_PROFILES
        self.rates = rates or HOURLY_RATES

    def hours(self, profile: LaborProfile, kind: DesignServiceKind, pages: int = 0, page_format: str = "a4") -> float:
        if not profile.per_page or kind is DesignServiceKind.CREATION:
            return profile.hours_for(kind)

        unit_hours = profile.hours_for(kind)
        if page_format == REDUCED_FORMAT and profile.reduced_format_hours:
            correction, layout = profile.reduced_format_hours
            unit_hours = correction if kind is DesignServiceKind.CORRECTION else layout
        return unit_hours * pages

    def calculate(
        self,
        product_type: ProductType,
        request: DesignServiceRequest,
        pages: int = 0,
        page_format: str = "a4"
    ) -> Optional[Tuple[float, DesignServiceDetails]]:
        """
        Cost and details of a design service for a product.

        Args:
            product_type: Product the design is for
            request: Requested service
            pages: Page count (page-based products only)
            page_format: Page format (page-based products only)

        Returns:
            (cost, details), or None when nothing is billed
        """
        if request is None or not request.requested:
            return None

        profile = self.profiles.get(product_type)
        if profile is None:
            logger.info(f"No design labour profile for {product_type}; design service not billed")
            return None

        hours = self.hours(profile, request.kind, pages, page_format)
        rate = self.rates[request.kind]
        details = DesignServiceDetails(
            service=request.kind,
            hours=round_money(hours),
            rate=rate,
            description=f"{SERVICE_LABELS[request.kind]} ({hours:.2f}h)",
        )
        return hours * rate, details

# Global calculator instance
design_service_calculator = DesignServiceCalculator()
