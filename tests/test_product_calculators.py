import pytest
from pydantic import ValidationError

from printshop.core.exceptions import MissingRateTableError
from printshop.services.pricing_config import PricingConfiguration
from printshop.services.product_calculators import (
    BookCalculator, BrochureCalculator, CardCalculator, FlyerCalculator,
    LeafletCalculator, LetterheadCalculator, PosterCalculator
)


def surcharges(quote):
    return {item.label: item.amount for item in quote.surcharges}


class TestTieredProducts:

    def test_flyer_standard_paper_has_no_surcharge(self, pricing_config):
        quote = FlyerCalculator().calculate(pricing_config, {"paper": "offset-80"}, 500)
        assert quote.base_price == 70
        assert quote.surcharges == []
        assert quote.details == {"printing": "Recto", "paper": "Offset 80gsm Standard", "format": "Standard"}

    def test_flyer_heavy_paper_surcharge(self, pricing_config):
        quote = FlyerCalculator().calculate(pricing_config, {"side": "recto", "paper": "coated-135-gloss"}, 300)
        assert quote.base_price == pytest.approx(55)
        assert surcharges(quote) == {"Paper surcharge Coated 135gsm Gloss": pytest.approx(9.45)}

    def test_flyer_mode_alias_and_case(self, pricing_config):
        quote = FlyerCalculator().calculate(pricing_config, {"mode": "RECTO_VERSO"}, 100)
        assert quote.base_price == 55
        assert quote.details["printing"] == "Recto/Verso"

    def test_flyer_missing_side_table(self, pricing_config):
        config = PricingConfiguration.from_dict({"rates": {"flyer": {"recto": [[100, 40]]}}})
        with pytest.raises(MissingRateTableError):
            FlyerCalculator().calculate(config, {"side": "recto_verso"}, 100)

    def test_card_surcharge_counts_batches_of_ten(self, pricing_config):
        calculator = CardCalculator()
        assert calculator.paper_sheets(100) == 10
        assert calculator.paper_sheets(101) == 11

        quote = calculator.calculate(pricing_config, {}, 100)
        assert quote.base_price == 25
        assert surcharges(quote) == {"Paper surcharge Coated 300gsm Matte": pytest.approx(1.47)}

    def test_laminated_card(self, pricing_config):
        quote = CardCalculator().calculate(pricing_config, {"finish": "laminated"}, 250)
        assert quote.base_price == 55
        assert quote.details["finish"] == "Laminated"

    def test_leaflet(self, pricing_config):
        quote = LeafletCalculator().calculate(pricing_config, {}, 100)
        assert quote.base_price == 90
        assert sum(item.amount for item in quote.surcharges) == pytest.approx(1.75)

    def test_letterhead_premium_offset(self, pricing_config):
        quote = LetterheadCalculator().calculate(pricing_config, {"paper": "offset-100"}, 100)
        assert quote.base_price == 35
        assert surcharges(quote) == {"Paper surcharge Offset 100gsm Premium": pytest.approx(1.4)}

    def test_missing_leaflet_table(self):
        with pytest.raises(MissingRateTableError):
            LeafletCalculator().calculate(PricingConfiguration.from_dict({}), {}, 100)

    def test_poster_unit_price_times_quantity(self, pricing_config):
        quote = PosterCalculator().calculate(pricing_config, {"paper": "coated-90-matte"}, 3)
        assert quote.base_price == pytest.approx(31.5)

    def test_oversized_poster_costs_twenty_percent_more(self, pricing_config):
        quote = PosterCalculator().calculate(pricing_config, {"format": "a3plus", "paper": "coated-90-matte"}, 10)
        assert quote.base_price == pytest.approx(84)
        assert quote.details["format"] == "A3+ (32x48 cm)"

    def test_unknown_poster_format_is_rejected(self, pricing_config):
        with pytest.raises(ValidationError):
            PosterCalculator().calculate(pricing_config, {"format": "a2"}, 10)


class TestBrochure:

    def test_defaults(self, pricing_config):
        quote = BrochureCalculator().calculate(pricing_config, {}, 10)

        # 20 inner + 10 cover sheets fall in the 25-49 band (2.50); recto cover 2.30
        assert quote.base_price == pytest.approx(73)
        assert surcharges(quote) == {"Paper surcharge": pytest.approx(1.12)}
        assert quote.details["inner_sheets"] == 20
        assert quote.details["cover_sheets"] == 10
        assert quote.details["binding"] == "Saddle stitched"

    def test_recto_verso_cover_pays_full_band_price(self, pricing_config):
        quote = BrochureCalculator().calculate(pricing_config, {"cover_side": "recto_verso"}, 10)
        assert quote.base_price == pytest.approx(75)

    def test_lamination(self, pricing_config):
        quote = BrochureCalculator().calculate(pricing_config, {"lamination": "with"}, 10)
        assert surcharges(quote)["Cover lamination"] == pytest.approx(1.0)
        assert quote.details["lamination"] == "Yes"

    def test_half_size_format(self, pricing_config):
        quote = BrochureCalculator().calculate(
            pricing_config, {"format": "a5", "pages": 16, "cover_paper": "coated-90-matte"}, 25
        )
        # 50 inner + 13 cover sheets: 50-99 band (2.00)
        assert quote.details["inner_sheets"] == 50
        assert quote.details["cover_sheets"] == 13
        assert quote.base_price == pytest.approx(50 * 2.0 + 13 * 1.8)

    def test_cover_type_alias(self, pricing_config):
        quote = BrochureCalculator().calculate(pricing_config, {"cover_type": "recto_verso"}, 10)
        assert quote.details["cover_printing"] == "Recto/Verso"

    @pytest.mark.parametrize("pages", [0, -4])
    def test_page_count_must_be_positive(self, pricing_config, pages):
        with pytest.raises(ValidationError):
            BrochureCalculator().calculate(pricing_config, {"pages": pages}, 10)


class TestBook:

    def test_defaults(self, pricing_config):
        quote = BookCalculator().calculate(pricing_config, {}, 10)

        # 125 inner sheets at 0.20 plus 10 covers at 1.30
        assert quote.base_price == pytest.approx(38)
        assert quote.surcharges == []
        assert quote.details["inner_sheets"] == 125
        assert quote.details["binding"] == "Plastic coil"

    def test_premium_inner_paper(self, pricing_config):
        quote = BookCalculator().calculate(pricing_config, {"inner_paper": "offset-100"}, 10)
        assert surcharges(quote) == {"Inner paper surcharge": pytest.approx(1.75)}

    def test_half_size_recto_verso_cover(self, pricing_config):
        quote = BookCalculator().calculate(
            pricing_config, {"format": "a5", "cover_side": "recto_verso", "pages": 40}, 20
        )
        assert quote.details["inner_sheets"] == 100
        assert quote.base_price == pytest.approx(100 * 0.2 + 20 * 0.75)

    def test_missing_cover_price(self):
        config = PricingConfiguration.from_dict({"book_cover_prices": {"a4": {"recto": 1.3}}})
        with pytest.raises(MissingRateTableError):
            BookCalculator().calculate(config, {"format": "a5"}, 10)
