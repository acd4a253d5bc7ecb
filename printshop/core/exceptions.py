# printshop/core/exceptions.py

from enum import Enum
from typing import Optional, Dict, Any, List
import logging

logger = logging.getLogger(__name__)

class ErrorCode(Enum):
    """Standardized error codes for the pricing service."""

    # Quote input errors
    INVALID_QUANTITY = "INVALID_QUANTITY"
    UNKNOWN_PRODUCT = "UNKNOWN_PRODUCT"

    # Pricing calculation errors
    MISSING_RATE_TABLE = "MISSING_RATE_TABLE"
    CALCULATION_ERROR = "CALCULATION_ERROR"

    # Configuration errors
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"

    # System errors
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"

class PrintShopError(Exception):
    """Base exception for all pricing service errors."""

    code = ErrorCode.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        user_message: str,
        technical_details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        suggested_action: Optional[str] = None,
        code: Optional[ErrorCode] = None
    ):
        if code is not None:
            self.code = code
        self.user_message = user_message
        self.technical_details = technical_details
        self.context = context or {}
        self.suggested_action = suggested_action

        logger.warning(
            f"PrintShop Error: {self.code.value}",
            extra={
                "error_code": self.code.value,
                "user_message": user_message,
                "technical_details": technical_details,
                "context": self.context,
                "suggested_action": suggested_action
            }
        )

        super().__init__(self.user_message)

    def to_response(self) -> Dict[str, Any]:
        """Convert to API response format."""
        response = {
            "error": {
                "code": self.code.value,
                "message": self.user_message,
                "context": self.context
            }
        }

        if self.suggested_action:
            response["error"]["suggested_action"] = self.suggested_action

        return response

class InvalidQuantityError(PrintShopError):
    """Quantity is absent, not a number, or not strictly positive."""

    code = ErrorCode.INVALID_QUANTITY

    def __init__(self, quantity: Any):
        super().__init__(
            user_message=f"Invalid quantity: {quantity!r}",
            context={"quantity": str(quantity)},
            suggested_action="Please provide a quantity greater than zero"
        )

class UnknownProductError(PrintShopError):
    """Product type is not one of the supported families."""

    code = ErrorCode.UNKNOWN_PRODUCT

    def __init__(self, product_type: Any, supported_products: List[str]):
        super().__init__(
            user_message=f"Unknown product: {product_type}",
            technical_details=f"Supported products: {', '.join(supported_products)}",
            context={
                "product_type": str(product_type),
                "supported_products": supported_products
            },
            suggested_action=f"Please choose from: {', '.join(supported_products)}"
        )

class MissingRateTableError(PrintShopError):
    """The loaded configuration lacks a table a calculator needs."""

    code = ErrorCode.MISSING_RATE_TABLE

    def __init__(self, product_type: str, table: str):
        super().__init__(
            user_message=f"Rate table not found for {product_type}: {table}",
            context={"product_type": product_type, "table": table}
        )

class CalculationError(PrintShopError):
    """Any other failure raised while pricing a specific product."""

    code = ErrorCode.CALCULATION_ERROR

    def __init__(self, message: str, product_type: Optional[str] = None, technical_details: Optional[str] = None):
        context = {}
        if product_type:
            context["product_type"] = product_type
        super().__init__(
            user_message=message,
            technical_details=technical_details,
            context=context
        )

class InvalidConfigurationError(PrintShopError):
    """A pricing configuration document that cannot be used at all."""

    code = ErrorCode.INVALID_CONFIGURATION

    def __init__(self, source: str, problem: str):
        super().__init__(
            user_message=f"Invalid pricing configuration from {source}",
            technical_details=problem,
            context={"source": source},
            suggested_action="Fix the configuration document; embedded defaults are used meanwhile"
        )

# Convenience function used by calculators
def raise_missing_table(product_type: str, table: str):
    """Raise a missing rate table error."""
    raise MissingRateTableError(product_type, table)
