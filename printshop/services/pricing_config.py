# printshop/services/pricing_config.py

import logging
import math
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Tuple

from printshop.services.pricing_models import RateTier

logger = logging.getLogger(__name__)

RateTable = Tuple[RateTier, ...]

# (exclusive upper bound on total sheets, price per colour sheet); None closes the scale
DEFAULT_SHEET_BANDS: Tuple[Tuple[Optional[int], float], ...] = (
    (25, 3.0),
    (50, 2.5),
    (100, 2.0),
    (200, 1.9),
    (300, 1.8),
    (400, 1.7),
    (500, 1.6),
    (None, 1.5),
)

DEFAULT_BOOK_COVER_PRICES: Dict[str, Dict[str, float]] = {
    "a4": {"recto": 1.3, "recto_verso": 1.5},
    "a5": {"recto": 0.65, "recto_verso": 0.75},
}

@dataclass(frozen=True)
class FixedCosts:
    """Fixed unit costs and the order floor."""
    lamination_unit: float = 0.1
    bw_sheet: float = 0.2
    offset_100_rate: float = 0.014
    coated_gram_rate: float = 0.0007
    minimum_price: float = 28.0
    recto_cover_discount: float = 0.2

@dataclass(frozen=True)
class PricingConfiguration:
    """
    Read-only pricing configuration.

    A table set to None is missing (the calculator reports it); an empty table
    prices at zero.
    """
    flyer: Dict[str, RateTable] = field(default_factory=dict)
    card: Dict[str, RateTable] = field(default_factory=dict)
    leaflet: Optional[RateTable] = None
    letterhead: Optional[RateTable] = None
    poster: Optional[RateTable] = None
    book_cover_prices: Dict[str, Dict[str, float]] = field(default_factory=dict)
    sheet_bands: Tuple[Tuple[Optional[int], float], ...] = DEFAULT_SHEET_BANDS
    fixed_costs: FixedCosts = field(default_factory=FixedCosts)
    source: str = "embedded-default"

    @classmethod
    def default(cls) -> "PricingConfiguration":
        """Minimal embedded configuration used when nothing can be loaded."""
        return cls(
            flyer={"recto": (), "recto_verso": ()},
            card={"recto": (), "laminated": ()},
            leaflet=(),
            letterhead=(),
            poster=(),
            book_cover_prices={fmt: dict(prices) for fmt, prices in DEFAULT_BOOK_COVER_PRICES.items()},
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], source: str = "document") -> "PricingConfiguration":
        """
        Build a configuration from a parsed document.

        Malformed sub-tables are dropped (logged) so the affected product reports
        a missing table instead of failing deep inside a calculator.

        Raises:
            ValueError: If the document is not a mapping
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Pricing configuration must be a mapping, got {type(data).__name__}")

        warnings: List[str] = []
        rates = data.get("rates", {})
        if not isinstance(rates, Mapping):
            warnings.append("'rates' section is not a mapping")
            rates = {}

        config = cls(
            flyer=_parse_table_group(rates.get("flyer"), "flyer", warnings),
            card=_parse_table_group(rates.get("card"), "card", warnings),
            leaflet=_parse_table(rates.get("leaflet"), "leaflet", warnings),
            letterhead=_parse_table(rates.get("letterhead"), "letterhead", warnings),
            poster=_parse_table(rates.get("poster"), "poster", warnings),
            book_cover_prices=_parse_cover_prices(data.get("book_cover_prices"), warnings),
            sheet_bands=_parse_sheet_bands(data.get("sheet_bands"), warnings),
            fixed_costs=_parse_fixed_costs(data.get("fixed_costs"), warnings),
            source=source,
        )

        for warning in warnings:
            logger.warning(f"Pricing configuration ({source}): {warning}")

        return config

    def to_summary(self) -> Dict[str, Any]:
        """Describe the loaded configuration for API responses."""
        return {
            "source": self.source,
            "tables": {
                "flyer": {side: len(table) for side, table in self.flyer.items()},
                "card": {finish: len(table) for finish, table in self.card.items()},
                "leaflet": None if self.leaflet is None else len(self.leaflet),
                "letterhead": None if self.letterhead is None else len(self.letterhead),
                "poster": None if self.poster is None else len(self.poster),
            },
            "book_cover_prices": self.book_cover_prices,
            "sheet_bands": [list(band) for band in self.sheet_bands],
            "fixed_costs": {f.name: getattr(self.fixed_costs, f.name) for f in fields(FixedCosts)},
        }

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)

def _parse_tier(raw: Any) -> RateTier:
    if isinstance(raw, Mapping):
        quantity, price = raw.get("quantity", raw.get("qty")), raw.get("price")
    elif isinstance(raw, (list, tuple)) and len(raw) == 2:
        quantity, price = raw
    else:
        raise ValueError(f"tier must be a mapping or a pair, got {raw!r}")
    if not _is_number(quantity) or not _is_number(price):
        raise ValueError(f"tier values must be numbers, got {raw!r}")
    return RateTier(quantity=quantity, price=price)

def _parse_table(raw: Any, name: str, warnings: List[str]) -> Optional[RateTable]:
    if raw is None:
        return None
    if not isinstance(raw, (list, tuple)):
        warnings.append(f"table '{name}' is not a list; dropped")
        return None
    try:
        return tuple(_parse_tier(tier) for tier in raw)
    except ValueError as e:
        warnings.append(f"table '{name}' is malformed ({e}); dropped")
        return None

def _parse_table_group(raw: Any, name: str, warnings: List[str]) -> Dict[str, RateTable]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        warnings.append(f"table group '{name}' is not a mapping; dropped")
        return {}
    group = {}
    for variant, table in raw.items():
        parsed = _parse_table(table, f"{name}.{variant}", warnings)
        if parsed is not None:
            group[str(variant)] = parsed
    return group

def _parse_cover_prices(raw: Any, warnings: List[str]) -> Dict[str, Dict[str, float]]:
    if raw is None:
        return {fmt: dict(prices) for fmt, prices in DEFAULT_BOOK_COVER_PRICES.items()}
    if not isinstance(raw, Mapping):
        warnings.append("'book_cover_prices' is not a mapping; dropped")
        return {}
    prices: Dict[str, Dict[str, float]] = {}
    for fmt, sides in raw.items():
        if not isinstance(sides, Mapping):
            warnings.append(f"book cover prices for '{fmt}' are not a mapping; dropped")
            continue
        valid = {str(side): price for side, price in sides.items() if _is_number(price)}
        if len(valid) != len(sides):
            warnings.append(f"book cover prices for '{fmt}' contain non-numeric values; ignored")
        prices[str(fmt).lower()] = valid
    return prices

def _parse_sheet_bands(raw: Any, warnings: List[str]) -> Tuple[Tuple[Optional[int], float], ...]:
    if raw is None:
        return DEFAULT_SHEET_BANDS
    try:
        bands = []
        for band in raw:
            limit, price = band.get("below"), band["price"]
            if (limit is not None and not _is_number(limit)) or not _is_number(price):
                raise ValueError(f"band values must be numbers, got {band!r}")
            bands.append((limit, price))
    except (TypeError, KeyError, AttributeError, ValueError) as e:
        warnings.append(f"'sheet_bands' is malformed ({e}); using defaults")
        return DEFAULT_SHEET_BANDS
    if not bands or bands[-1][0] is not None:
        warnings.append("'sheet_bands' must end with an open band (no 'below'); using defaults")
        return DEFAULT_SHEET_BANDS
    return tuple(bands)

def _parse_fixed_costs(raw: Any, warnings: List[str]) -> FixedCosts:
    if raw is None:
        return FixedCosts()
    if not isinstance(raw, Mapping):
        warnings.append("'fixed_costs' is not a mapping; using defaults")
        return FixedCosts()
    values = {}
    known = {f.name for f in fields(FixedCosts)}
    for key, value in raw.items():
        if key not in known:
            warnings.append(f"unknown fixed cost '{key}' ignored")
        elif not _is_number(value) or value < 0:
            warnings.append(f"invalid fixed cost {key}={value!r}; using default")
        else:
            values[key] = value
    return FixedCosts(**values)
