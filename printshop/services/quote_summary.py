# printshop/services/quote_summary.py

from typing import Optional, Union

from printshop.core.config import settings
from printshop.services.pricing_models import ProductType, QuoteFailure, QuoteResult

UNAVAILABLE = "Configuration unavailable"

def format_price(amount: float, currency: Optional[str] = None) -> str:
    """Format an amount with two decimals and the display currency, e.g. '70.00 DT'."""
    return f"{amount:.2f} {currency or settings.CURRENCY}"

def _lamination_line(details) -> str:
    return "WITH lamination" if details.get("lamination") == "Yes" else "WITHOUT lamination"

def _bound_summary(details, heading_key: str, heading: str) -> str:
    return (
        f"Format: {details.get('format')} - {details.get('pages')} Pages\n"
        f"{heading}: {details.get(heading_key)}\n\n"
        f"Inner paper: {details.get('inner_paper')}\n"
        f"Cover paper: {details.get('cover_paper')}\n"
        f">>> Cover printing: {details.get('cover_printing')}\n"
        f">>> Cover finish: {_lamination_line(details)}"
    )

def render_summary(quote: Union[QuoteResult, QuoteFailure]) -> str:
    """
    Multi-line, human-readable description of what was quoted.

    Pure formatting of the quote's detail attributes; prices are not included.
    """
    if isinstance(quote, QuoteFailure):
        return UNAVAILABLE

    details = quote.details
    product = quote.product_type

    if product is ProductType.FLYER:
        summary = f"Format Standard\nPrinting: {details.get('printing')}\nPaper: {details.get('paper')}"
    elif product is ProductType.CARD:
        summary = f"Finish: {details.get('finish')}\nPaper: {details.get('paper')}"
    elif product is ProductType.LEAFLET:
        summary = f"3 Panels (A4 open)\nPaper: {details.get('paper')}"
    elif product is ProductType.LETTERHEAD:
        summary = f"Format A4\nPaper: {details.get('paper')}"
    elif product is ProductType.BROCHURE:
        summary = _bound_summary(details, "binding", "Finish")
    elif product is ProductType.BOOK:
        summary = _bound_summary(details, "binding", "Binding")
    elif product is ProductType.POSTER:
        summary = f"Large Format {details.get('format')}\nPaper: {details.get('paper')}"
    else:
        summary = ""

    if quote.design_details is not None:
        summary += f"\n\n[DESIGN OPTION]: {quote.design_details.description}"

    return summary
