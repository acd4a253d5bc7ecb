# printshop/services/pricing_engine.py

import logging
import math
from typing import Any, Dict, Mapping, Optional, Union

from printshop.core.metrics import metrics
from printshop.core.exceptions import (
    PrintShopError, InvalidQuantityError, UnknownProductError, CalculationError
)
from printshop.schemas.products import BoundOptions
from printshop.services.design_service import DesignServiceCalculator, design_service_calculator
from printshop.services.pricing_config import PricingConfiguration
from printshop.services.pricing_models import (
    DesignServiceRequest, LineItem, ProductQuote, ProductType, QuoteFailure, QuoteResult
)
from printshop.services.pricing_primitives import round_money
from printshop.services.quote_summary import render_summary
from printshop.services.product_calculators import CALCULATORS, ProductCalculator

logger = logging.getLogger(__name__)

MINIMUM_PRICE_LABEL = "Minimum price adjustment"
UNKNOWN_PRODUCT_LABEL = "unknown"

QuoteOutcome = Union[QuoteResult, QuoteFailure]

class PricingEngine:
    """
    Single entry point for quote calculations.

    Pure with respect to its inputs: the configuration is read once per call
    and nothing is stored between calls.
    """

    def __init__(
        self,
        config: Optional[PricingConfiguration] = None,
        calculators: Optional[Dict[ProductType, ProductCalculator]] = None,
        design_calculator: Optional[DesignServiceCalculator] = None
    ):
        self.config = config or PricingConfiguration.default()
        self.calculators = calculators or CALCULATORS
        self.design_calculator = design_calculator or design_service_calculator
        logger.info(f"PricingEngine initialized with configuration from {self.config.source}")

    @property
    def supported_products(self) -> list:
        return [product.value for product in self.calculators]

    def update_config(self, new_config: PricingConfiguration):
        """Swap in a newly loaded configuration."""
        self.config = new_config
        logger.info(f"Pricing configuration updated from {new_config.source}")

    def calculate(
        self,
        product_type: Union[str, ProductType],
        options: Optional[Mapping[str, Any]] = None,
        quantity: Any = None,
        design_request: Any = None
    ) -> QuoteOutcome:
        """
        Calculate an itemized quote.

        Args:
            product_type: Product family (flyer, card, leaflet, letterhead, brochure, book, poster)
            options: Product-specific options; missing ones take their defaults
            quantity: Number of copies, strictly positive
            design_request: Optional design service (request, mapping or kind string)

        Returns:
            QuoteResult, or QuoteFailure describing why no quote could be produced
        """
        product_name = str(getattr(product_type, "value", product_type))
        label = self._metric_label(product_type)
        with metrics.time_quote(label):
            outcome = self._calculate(product_type, options, quantity, design_request)

        if isinstance(outcome, QuoteFailure):
            logger.warning(f"Quote failed for {product_name}: {outcome.code.value} {outcome.message}")
            metrics.record_quote(label, "failed")
            metrics.record_quote_failure(outcome.code.value)
        else:
            metrics.record_quote(label, "success")
        return outcome

    def _metric_label(self, product_type: Any) -> str:
        """Product label for metrics; unsupported names share one label."""
        product = self._lookup_product(product_type)
        return product.value if product is not None else UNKNOWN_PRODUCT_LABEL

    def _calculate(self, product_type, options, quantity, design_request) -> QuoteOutcome:
        config = self.config
        product_name = getattr(product_type, "value", product_type)

        try:
            quantity = self._validate_quantity(quantity)
            product = self._resolve_product(product_type)
        except PrintShopError as e:
            return QuoteFailure.from_error(e, product_type=product_name)

        try:
            draft = self.calculators[product].calculate(config, options, quantity)
            return self._finalize(config, product, quantity, draft, design_request)
        except PrintShopError as e:
            return QuoteFailure.from_error(e, product_type=product.value)
        except Exception as e:
            logger.exception(f"Quote calculation failed for {product.value}: {e}")
            error = CalculationError(str(e), product_type=product.value, technical_details=type(e).__name__)
            return QuoteFailure.from_error(error, product_type=product.value)

    def describe(
        self,
        product_type: Union[str, ProductType],
        options: Optional[Mapping[str, Any]] = None,
        quantity: Any = None,
        design_request: Any = None
    ) -> str:
        """Calculate a quote and render its configuration summary."""
        return render_summary(self.calculate(product_type, options, quantity, design_request))

    @staticmethod
    def _validate_quantity(quantity: Any) -> float:
        if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
            raise InvalidQuantityError(quantity)
        if not math.isfinite(quantity) or quantity <= 0:
            raise InvalidQuantityError(quantity)
        return quantity

    def _lookup_product(self, product_type: Any) -> Optional[ProductType]:
        try:
            product = ProductType(str(product_type).strip().lower())
        except ValueError:
            return None
        return product if product in self.calculators else None

    def _resolve_product(self, product_type: Union[str, ProductType]) -> ProductType:
        product = self._lookup_product(product_type)
        if product is None:
            raise UnknownProductError(product_type, self.supported_products)
        return product

    def _finalize(
        self,
        config: PricingConfiguration,
        product: ProductType,
        quantity: float,
        draft: ProductQuote,
        design_request: Any
    ) -> QuoteResult:
        base_price = draft.base_price
        adjustments = []

        # Floor applies to the printing price alone, before design work
        minimum = config.fixed_costs.minimum_price
        if base_price < minimum:
            adjustments.append(LineItem(MINIMUM_PRICE_LABEL, minimum - base_price))
            base_price = minimum

        design_cost, design_details = 0.0, None
        try:
            request = DesignServiceRequest.parse(design_request)
        except ValueError as e:
            raise CalculationError(f"Invalid design service: {design_request}", product_type=product.value,
                                   technical_details=str(e))
        if request is not None and request.requested:
            pages, page_format = 0, "a4"
            # Per-page design work is billed on the resolved page count, so a
            # brochure or book quoted without "pages" uses the product default
            if isinstance(draft.options, BoundOptions):
                pages, page_format = draft.options.pages, draft.options.format.value
            design = self.design_calculator.calculate(product, request, pages, page_format)
            if design is not None:
                design_cost, design_details = design

        surcharges = tuple(draft.surcharges)
        total = round_money(base_price + sum(item.amount for item in surcharges) + design_cost)

        result = QuoteResult(
            product_type=product,
            quantity=quantity,
            base_price=base_price,
            surcharges=surcharges,
            adjustments=tuple(adjustments),
            design_cost=design_cost,
            design_details=design_details,
            details=draft.details,
            total=total,
        )
        logger.info(f"Quote calculated: {product.value} x{quantity} = {total:.2f}")
        return result

# Global pricing engine instance; the application swaps in the loaded configuration at startup
pricing_engine = PricingEngine()
