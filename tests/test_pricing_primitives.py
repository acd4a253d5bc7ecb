import pytest

from printshop.services.pricing_config import DEFAULT_SHEET_BANDS
from printshop.services.pricing_models import RateTier
from printshop.services.pricing_primitives import (
    band_price, cover_sheet_count, inner_sheet_count, price_for_quantity, round_money
)

FLYER_TIERS = (RateTier(100, 40), RateTier(500, 70), RateTier(1000, 100))


class TestPriceForQuantity:

    @pytest.mark.parametrize("quantity,expected", [
        (100, 40),
        (500, 70),
        (1000, 100),
    ])
    def test_exact_threshold_returns_tier_price(self, quantity, expected):
        assert price_for_quantity(FLYER_TIERS, quantity) == expected

    def test_interpolates_between_thresholds(self):
        assert price_for_quantity(FLYER_TIERS, 300) == pytest.approx(55)
        assert price_for_quantity(FLYER_TIERS, 750) == pytest.approx(85)

    def test_below_smallest_threshold_uses_smallest_tier(self):
        assert price_for_quantity(FLYER_TIERS, 10) == 40

    def test_above_largest_threshold_uses_largest_tier(self):
        assert price_for_quantity(FLYER_TIERS, 5000) == 100

    def test_table_order_does_not_matter(self):
        shuffled = (FLYER_TIERS[2], FLYER_TIERS[0], FLYER_TIERS[1])
        for quantity in (50, 100, 300, 500, 750, 2000):
            assert price_for_quantity(shuffled, quantity) == price_for_quantity(FLYER_TIERS, quantity)

    def test_duplicate_threshold_keeps_first_entry(self):
        tiers = (RateTier(100, 40), RateTier(100, 45), RateTier(500, 70))
        assert price_for_quantity(tiers, 100) == 40

    def test_empty_table_prices_at_zero(self):
        assert price_for_quantity((), 250) == 0

    def test_single_tier(self):
        tiers = (RateTier(100, 40),)
        assert price_for_quantity(tiers, 1) == 40
        assert price_for_quantity(tiers, 1000) == 40


class TestSheetCounts:

    def test_inner_sheets_rounded_up(self):
        assert inner_sheet_count(9, "a4", 3) == 7

    def test_inner_sheets_half_size_format(self):
        assert inner_sheet_count(16, "a5", 25) == 50

    @pytest.mark.parametrize("page_format,quantity,expected", [
        ("a4", 3, 3),
        ("a5", 3, 2),
        ("a5", 4, 2),
    ])
    def test_cover_sheets(self, page_format, quantity, expected):
        assert cover_sheet_count(page_format, quantity) == expected


class TestBandPrice:

    @pytest.mark.parametrize("sheets,expected", [
        (1, 3.0),
        (24, 3.0),
        (25, 2.5),
        (99, 2.0),
        (100, 1.9),
        (499, 1.6),
        (500, 1.5),
        (100000, 1.5),
    ])
    def test_default_bands(self, sheets, expected):
        assert band_price(sheets, DEFAULT_SHEET_BANDS) == expected


class TestRoundMoney:

    @pytest.mark.parametrize("amount,expected", [
        (70.0, 70.0),
        (12.344, 12.34),
        (12.346, 12.35),
        (0.125, 0.13),
        (-0.125, -0.13),
    ])
    def test_rounds_to_cents_half_away_from_zero(self, amount, expected):
        assert round_money(amount) == expected
