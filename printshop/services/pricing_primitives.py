# printshop/services/pricing_primitives.py

import logging
import math
from typing import Optional, Sequence, Tuple

from printshop.services.pricing_models import RateTier

logger = logging.getLogger(__name__)

# Standard format prints 4 pages per sheet and one cover sheet per copy;
# the half-size format doubles the pages per sheet and shares cover sheets.
PAGES_PER_SHEET = {"a4": 4, "a5": 8}
COVER_SHEETS_PER_COPY = {"a4": 1.0, "a5": 0.5}

def price_for_quantity(tiers: Sequence[RateTier], quantity: float) -> float:
    """
    Smoothed price for `quantity` from a tier table.

    The table may be in any order and may repeat thresholds. A quantity equal
    to a threshold gets that tier's price exactly; between two thresholds the
    price is interpolated linearly. Outside the table the nearest tier's price
    is used as-is, never extrapolated.

    Args:
        tiers: Sequence of RateTier
        quantity: Requested quantity

    Returns:
        Price for the quantity (0 for an empty table)
    """
    if not tiers:
        return 0.0

    lower: Optional[RateTier] = None
    upper: Optional[RateTier] = None
    for tier in tiers:
        if tier.quantity <= quantity and (lower is None or tier.quantity > lower.quantity):
            lower = tier
        if tier.quantity >= quantity and (upper is None or tier.quantity < upper.quantity):
            upper = tier

    if lower is None:
        return upper.price
    if upper is None or lower.quantity == upper.quantity:
        return lower.price

    ratio = (quantity - lower.quantity) / (upper.quantity - lower.quantity)
    return lower.price + (upper.price - lower.price) * ratio

def band_price(total_sheets: float, bands: Sequence[Tuple[Optional[float], float]]) -> float:
    """Per-sheet colour price for the volume band `total_sheets` falls into."""
    for limit, price in bands:
        if limit is None or total_sheets < limit:
            return price
    # A well-formed scale always ends with an open band
    return bands[-1][1]

def inner_sheet_count(pages: int, page_format: str, quantity: float) -> int:
    """Press sheets needed for the interior pages of `quantity` copies."""
    return math.ceil(pages / PAGES_PER_SHEET[page_format] * quantity)

def cover_sheet_count(page_format: str, quantity: float) -> int:
    """Press sheets needed for the covers of `quantity` copies."""
    return math.ceil(COVER_SHEETS_PER_COPY[page_format] * quantity)

def round_money(amount: float) -> float:
    """Round to cents, halves away from zero."""
    cents = math.floor(abs(amount) * 100 + 0.5)
    return math.copysign(cents / 100, amount)
