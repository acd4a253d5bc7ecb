import copy

import pytest

from printshop.services.pricing_config import PricingConfiguration
from printshop.services.pricing_engine import PricingEngine

SAMPLE_CONFIG = {
    "rates": {
        "flyer": {
            "recto": [
                {"quantity": 100, "price": 40},
                {"quantity": 500, "price": 70},
                {"quantity": 1000, "price": 100},
            ],
            "recto_verso": [
                {"quantity": 100, "price": 55},
                {"quantity": 500, "price": 95},
                {"quantity": 1000, "price": 135},
            ],
        },
        "card": {
            "recto": [
                {"quantity": 100, "price": 25},
                {"quantity": 250, "price": 35},
                {"quantity": 500, "price": 50},
            ],
            "laminated": [
                {"quantity": 100, "price": 40},
                {"quantity": 250, "price": 55},
                {"quantity": 500, "price": 80},
            ],
        },
        "leaflet": [
            {"quantity": 100, "price": 90},
            {"quantity": 500, "price": 230},
        ],
        "letterhead": [
            {"quantity": 100, "price": 35},
            {"quantity": 500, "price": 95},
        ],
        "poster": [
            {"quantity": 1, "price": 12},
            {"quantity": 5, "price": 9},
            {"quantity": 10, "price": 7},
        ],
    },
    "book_cover_prices": {
        "a4": {"recto": 1.3, "recto_verso": 1.5},
        "a5": {"recto": 0.65, "recto_verso": 0.75},
    },
    "fixed_costs": {
        "lamination_unit": 0.1,
        "bw_sheet": 0.2,
        "offset_100_rate": 0.014,
        "coated_gram_rate": 0.0007,
        "minimum_price": 28,
        "recto_cover_discount": 0.2,
    },
}

@pytest.fixture
def config_data():
    """A fresh copy of the sample configuration document."""
    return copy.deepcopy(SAMPLE_CONFIG)

@pytest.fixture
def pricing_config(config_data):
    return PricingConfiguration.from_dict(config_data, source="tests")

@pytest.fixture
def engine(pricing_config):
    return PricingEngine(config=pricing_config)
