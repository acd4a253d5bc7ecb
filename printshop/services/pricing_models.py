# printshop/services/pricing_models.py

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from printshop.core.exceptions import ErrorCode, PrintShopError

class ProductType(str, Enum):
    """Product families the engine can price."""
    FLYER = "flyer"
    CARD = "card"
    LEAFLET = "leaflet"
    LETTERHEAD = "letterhead"
    BROCHURE = "brochure"
    BOOK = "book"
    POSTER = "poster"

    def __str__(self):
        return self.value

class DesignServiceKind(str, Enum):
    """Graphic design (PAO) services, each billed at its own hourly rate."""
    CREATION = "creation"
    LAYOUT = "layout"
    CORRECTION = "correction"
    NONE = "none"

    def __str__(self):
        return self.value

@dataclass(frozen=True)
class RateTier:
    """A published (quantity threshold, price) pair."""
    quantity: float
    price: float

@dataclass(frozen=True)
class LineItem:
    label: str
    amount: float

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "amount": self.amount}

@dataclass(frozen=True)
class DesignServiceRequest:
    kind: DesignServiceKind = DesignServiceKind.NONE

    @classmethod
    def parse(cls, value: Any) -> Optional["DesignServiceRequest"]:
        """
        Accept a request, a mapping with a "kind" (or "type") key, or a bare kind string.

        Raises:
            ValueError: If the kind is not a known design service
        """
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, DesignServiceKind):
            return cls(kind=value)
        if isinstance(value, Mapping):
            value = value.get("kind", value.get("type"))
            if value is None:
                return None
        return cls(kind=DesignServiceKind(str(value).strip().lower()))

    @property
    def requested(self) -> bool:
        return self.kind is not DesignServiceKind.NONE

@dataclass(frozen=True)
class DesignServiceDetails:
    service: DesignServiceKind
    hours: float
    rate: float
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "service": self.service.value,
            "hours": self.hours,
            "rate": self.rate,
            "description": self.description,
        }

@dataclass
class ProductQuote:
    """Draft filled in by a product calculator before the orchestrator finalizes it."""
    base_price: float = 0.0
    surcharges: List[LineItem] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)
    # Parsed product options the draft was priced from
    options: Any = None

    def add_surcharge(self, label: str, amount: float):
        """Append a surcharge line, skipping zero amounts."""
        if amount > 0:
            self.surcharges.append(LineItem(label, amount))

@dataclass(frozen=True)
class QuoteResult:
    """Complete, itemized quote. Never mutated once produced."""
    product_type: ProductType
    quantity: float
    base_price: float
    surcharges: Tuple[LineItem, ...]
    adjustments: Tuple[LineItem, ...]
    design_cost: float
    design_details: Optional[DesignServiceDetails]
    details: Mapping[str, Any]
    total: float

    def __post_init__(self):
        if not isinstance(self.details, MappingProxyType):
            object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    @property
    def surcharge_total(self) -> float:
        return sum(item.amount for item in self.surcharges)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses and persistence records."""
        return {
            "product_type": self.product_type.value,
            "quantity": self.quantity,
            "base_price": self.base_price,
            "surcharges": [item.to_dict() for item in self.surcharges],
            "adjustments": [item.to_dict() for item in self.adjustments],
            "design_cost": self.design_cost,
            "design_details": self.design_details.to_dict() if self.design_details else None,
            "details": dict(self.details),
            "total": self.total,
        }

@dataclass(frozen=True)
class QuoteFailure:
    """Typed failure returned instead of a quote."""
    code: ErrorCode
    message: str
    product_type: Optional[str] = None
    context: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_error(cls, error: PrintShopError, product_type: Optional[str] = None) -> "QuoteFailure":
        return cls(
            code=error.code,
            message=error.user_message,
            product_type=product_type,
            context=MappingProxyType(dict(error.context)),
        )

    def to_response(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "context": dict(self.context),
            }
        }
