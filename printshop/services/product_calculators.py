# printshop/services/product_calculators.py

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Type

from printshop.core.exceptions import raise_missing_table
from printshop.schemas.products import (
    ProductOptions, FlyerOptions, CardOptions, LeafletOptions, LetterheadOptions,
    PosterOptions, BoundOptions, BrochureOptions, BookOptions,
    PrintSide, CardFinish, PosterFormat
)
from printshop.services.paper import Paper, paper_display_name, paper_surcharge
from printshop.services.pricing_config import PricingConfiguration, RateTable
from printshop.services.pricing_models import ProductQuote, ProductType
from printshop.services.pricing_primitives import (
    band_price, cover_sheet_count, inner_sheet_count, price_for_quantity
)

logger = logging.getLogger(__name__)

# Cards are costed in batches of this many for the paper surcharge
CARD_BATCH_SIZE = 10
OVERSIZED_POSTER_FACTOR = 1.2

SIDE_LABELS = {PrintSide.recto: "Recto", PrintSide.recto_verso: "Recto/Verso"}

class ProductCalculator(ABC):
    """
    Prices one product family.

    Subclasses declare the option model and fill a ProductQuote draft; the
    orchestrator applies the minimum price, design service and total.
    """

    product_type: ProductType
    options_model: Type[ProductOptions]

    def parse_options(self, options: Optional[Mapping[str, Any]]) -> ProductOptions:
        return self.options_model.model_validate(dict(options or {}))

    def calculate(
        self,
        config: PricingConfiguration,
        options: Optional[Mapping[str, Any]],
        quantity: float
    ) -> ProductQuote:
        parsed = self.parse_options(options)
        quote = ProductQuote(options=parsed)
        self.price(config, parsed, quantity, quote)
        logger.debug(f"{self.product_type.value}: base={quote.base_price:.4f} "
                     f"surcharges={len(quote.surcharges)}")
        return quote

    @abstractmethod
    def price(self, config: PricingConfiguration, options: Any, quantity: float, quote: ProductQuote):
        """Fill base price, surcharges and details for the parsed options."""

    def add_paper_surcharge(
        self,
        config: PricingConfiguration,
        quote: ProductQuote,
        paper: Paper,
        sheets: float,
        label: Optional[str] = None
    ):
        fixed = config.fixed_costs
        amount = paper_surcharge(paper, sheets, fixed.offset_100_rate, fixed.coated_gram_rate)
        quote.add_surcharge(label or f"Paper surcharge {paper_display_name(paper)}", amount)

class TieredProductCalculator(ProductCalculator):
    """Products priced by smoothing over a published quantity table."""

    def rate_table(self, config: PricingConfiguration, options: Any) -> RateTable:
        table = getattr(config, self.product_type.value)
        if table is None:
            raise_missing_table(self.product_type.value, self.product_type.value)
        return table

    def paper_sheets(self, quantity: float) -> float:
        return quantity

    def details(self, options: Any) -> Dict[str, Any]:
        return {"paper": paper_display_name(options.paper)}

    def price(self, config: PricingConfiguration, options: Any, quantity: float, quote: ProductQuote):
        quote.base_price = price_for_quantity(self.rate_table(config, options), quantity)
        self.add_paper_surcharge(config, quote, options.paper, self.paper_sheets(quantity))
        quote.details = self.details(options)

class FlyerCalculator(TieredProductCalculator):
    product_type = ProductType.FLYER
    options_model = FlyerOptions

    def rate_table(self, config: PricingConfiguration, options: FlyerOptions) -> RateTable:
        table = config.flyer.get(options.side.value)
        if table is None:
            raise_missing_table(self.product_type.value, f"flyer.{options.side.value}")
        return table

    def details(self, options: FlyerOptions) -> Dict[str, Any]:
        return {
            "printing": SIDE_LABELS[options.side],
            "paper": paper_display_name(options.paper),
            "format": "Standard",
        }

class CardCalculator(TieredProductCalculator):
    product_type = ProductType.CARD
    options_model = CardOptions

    def rate_table(self, config: PricingConfiguration, options: CardOptions) -> RateTable:
        table = config.card.get(options.finish.value)
        if table is None:
            raise_missing_table(self.product_type.value, f"card.{options.finish.value}")
        return table

    def paper_sheets(self, quantity: float) -> float:
        return math.ceil(quantity / CARD_BATCH_SIZE)

    def details(self, options: CardOptions) -> Dict[str, Any]:
        return {
            "finish": "Standard" if options.finish is CardFinish.recto else "Laminated",
            "paper": paper_display_name(options.paper),
        }

class LeafletCalculator(TieredProductCalculator):
    product_type = ProductType.LEAFLET
    options_model = LeafletOptions

    def details(self, options: LeafletOptions) -> Dict[str, Any]:
        return {"format": "Tri-fold (A4 open)", "paper": paper_display_name(options.paper)}

class LetterheadCalculator(TieredProductCalculator):
    product_type = ProductType.LETTERHEAD
    options_model = LetterheadOptions

    def details(self, options: LetterheadOptions) -> Dict[str, Any]:
        return {"format": "A4", "paper": paper_display_name(options.paper)}

class PosterCalculator(TieredProductCalculator):
    """Poster tables hold unit prices; the oversized format costs 20% more per unit."""

    product_type = ProductType.POSTER
    options_model = PosterOptions

    def price(self, config: PricingConfiguration, options: PosterOptions, quantity: float, quote: ProductQuote):
        unit_price = price_for_quantity(self.rate_table(config, options), quantity)
        if options.format is PosterFormat.a3plus:
            unit_price *= OVERSIZED_POSTER_FACTOR
        quote.base_price = unit_price * quantity
        self.add_paper_surcharge(config, quote, options.paper, quantity)
        quote.details = self.details(options)

    def details(self, options: PosterOptions) -> Dict[str, Any]:
        return {
            "format": "A3 (30x42 cm)" if options.format is PosterFormat.a3 else "A3+ (32x48 cm)",
            "paper": paper_display_name(options.paper),
        }

class BoundProductCalculator(ProductCalculator):
    """Shared details and lamination for page-based products."""

    lamination_label = "Lamination"

    def add_lamination(self, config: PricingConfiguration, options: BoundOptions, quantity: float, quote: ProductQuote):
        if options.lamination:
            quote.add_surcharge(self.lamination_label, quantity * config.fixed_costs.lamination_unit)

    def details(self, options: BoundOptions) -> Dict[str, Any]:
        return {
            "format": options.format.value.upper(),
            "pages": options.pages,
            "binding": options.binding,
            "inner_paper": paper_display_name(options.inner_paper),
            "cover_paper": paper_display_name(options.cover_paper),
            "cover_printing": SIDE_LABELS[options.cover_side],
            "lamination": "Yes" if options.lamination else "No",
        }

class BrochureCalculator(BoundProductCalculator):
    """
    Colour brochures priced per press sheet.

    One volume band is chosen from interior plus cover sheets together and
    used for both; a one-sided cover gets a fixed discount off that band price.
    """

    product_type = ProductType.BROCHURE
    options_model = BrochureOptions
    lamination_label = "Cover lamination"

    def price(self, config: PricingConfiguration, options: BrochureOptions, quantity: float, quote: ProductQuote):
        page_format = options.format.value
        inner_sheets = inner_sheet_count(options.pages, page_format, quantity)
        cover_sheets = cover_sheet_count(page_format, quantity)

        sheet_price = band_price(inner_sheets + cover_sheets, config.sheet_bands)
        cover_price = sheet_price
        if options.cover_side is PrintSide.recto:
            cover_price -= config.fixed_costs.recto_cover_discount

        quote.base_price = inner_sheets * sheet_price + cover_sheets * cover_price

        fixed = config.fixed_costs
        paper_total = (
            paper_surcharge(options.inner_paper, inner_sheets, fixed.offset_100_rate, fixed.coated_gram_rate)
            + paper_surcharge(options.cover_paper, cover_sheets, fixed.offset_100_rate, fixed.coated_gram_rate)
        )
        quote.add_surcharge("Paper surcharge", paper_total)
        self.add_lamination(config, options, quantity, quote)

        quote.details = self.details(options)
        quote.details.update({"inner_sheets": inner_sheets, "cover_sheets": cover_sheets})

class BookCalculator(BoundProductCalculator):
    """Black-and-white interior on fixed-cost sheets with a colour cover."""

    product_type = ProductType.BOOK
    options_model = BookOptions

    def cover_unit_price(self, config: PricingConfiguration, options: BookOptions) -> float:
        prices = config.book_cover_prices.get(options.format.value)
        if not prices or options.cover_side.value not in prices:
            raise_missing_table(
                self.product_type.value,
                f"book_cover_prices.{options.format.value}.{options.cover_side.value}"
            )
        return prices[options.cover_side.value]

    def price(self, config: PricingConfiguration, options: BookOptions, quantity: float, quote: ProductQuote):
        inner_sheets = inner_sheet_count(options.pages, options.format.value, quantity)
        inner_cost = inner_sheets * config.fixed_costs.bw_sheet
        cover_cost = quantity * self.cover_unit_price(config, options)

        quote.base_price = inner_cost + cover_cost
        self.add_paper_surcharge(config, quote, options.inner_paper, inner_sheets, label="Inner paper surcharge")
        self.add_lamination(config, options, quantity, quote)

        quote.details = self.details(options)
        quote.details["inner_sheets"] = inner_sheets

# Registry used by the orchestrator to dispatch by product type
CALCULATORS: Dict[ProductType, ProductCalculator] = {
    calculator.product_type: calculator
    for calculator in (
        FlyerCalculator(),
        CardCalculator(),
        LeafletCalculator(),
        LetterheadCalculator(),
        BrochureCalculator(),
        BookCalculator(),
        PosterCalculator(),
    )
}
