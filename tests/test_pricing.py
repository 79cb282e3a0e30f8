"""
Unit tests for PricingEngine and the cent helpers.
"""

import json

import pytest

from screening_api.core.exceptions import CatalogLoadError, InvalidInputError
from screening_api.services.catalog import ServiceCatalog
from screening_api.services.money import cents_to_amount, format_cents, percent_of, to_cents
from screening_api.services.pricing import PricingEngine, PricingResult
from screening_api.services.rules import (
    DEFAULT_PRICING_RULES,
    BundleRule,
    PricingRules,
    VolumeTier,
    load_pricing_rules,
)

from conftest import ALL_CRIMINAL, ALL_VERIFICATION, service


@pytest.fixture
def engine(catalog):
    return PricingEngine(catalog)


class TestCalculate:
    """Test cases for PricingEngine.calculate."""

    def test_empty_selection(self, engine):
        assert engine.calculate([]) == PricingResult()

    def test_all_unknown_selection(self, engine):
        result = engine.calculate(["ghost", "phantom"])
        assert result.subtotal_cents == 0
        assert result.total_cents == 0
        assert result.discounts == ()
        assert result.resolved_service_count == 0

    def test_no_discount_below_thresholds(self, engine):
        result = engine.calculate(["state_criminal", "mvr"])
        assert result.subtotal_cents == 3500
        assert result.discounts == ()
        assert result.total_cents == 3500

    def test_maximum_discount_package(self, engine):
        result = engine.calculate(ALL_CRIMINAL + ALL_VERIFICATION + ["mvr"])

        assert result.subtotal_cents == 23000
        assert [(d.kind, d.amount_cents) for d in result.discounts] == [
            ("volume", 3450),
            ("bundle", 2000),
            ("bundle", 1500),
        ]
        assert result.discounts[0].label == "Volume Discount (15% for 8+ services)"
        assert result.total_discount_cents == 6950
        assert result.total_cents == 16050
        assert result.resolved_service_count == 8

    def test_ten_percent_tier(self, engine):
        ids = ["state_criminal", "county_criminal", "mvr", "employment_verification", "drug_5_panel"]
        result = engine.calculate(ids)

        assert result.subtotal_cents == 14000
        assert result.discounts[0].kind == "volume"
        assert result.discounts[0].amount_cents == 1400

    def test_bundle_stacks_without_volume(self, engine):
        result = engine.calculate(ALL_CRIMINAL)
        assert [d.label for d in result.discounts] == [
            "Criminal Bundle Discount (all 4 criminal searches)",
        ]
        assert result.total_cents == 13000 - 2000

    def test_duplicates_do_not_change_result(self, engine):
        ids = ALL_CRIMINAL + ["mvr"]
        assert engine.calculate(ids + ids[:3]) == engine.calculate(ids)

    def test_volume_tier_uses_resolved_count(self, engine):
        ids = ["state_criminal", "mvr", "employment_verification", "education_verification"]
        result = engine.calculate(ids + ["ghost_1", "ghost_2"])

        assert result.resolved_service_count == 4
        assert result.discounts == ()

    def test_volume_amount_rounds_half_up(self):
        catalog = ServiceCatalog.load([service(f"s{i}", f"S{i}", "20.01", "driving") for i in range(5)])
        result = PricingEngine(catalog).calculate([f"s{i}" for i in range(5)])

        # 10% of 100.05 is 10.005
        assert result.discounts[0].amount_cents == 1001
        assert result.total_cents == 10005 - 1001

    def test_total_floors_at_zero(self, catalog):
        rules = PricingRules(bundles=(
            BundleRule(key="big", name="Big", description="everything", service_ids=("mvr",), amount_cents=99999),
        ))
        result = PricingEngine(catalog, rules).calculate(["mvr"])

        assert result.total_discount_cents == 99999
        assert result.total_cents == 0

    def test_bundle_is_presence_test_on_requested_ids(self):
        catalog = ServiceCatalog.load([service("a", "A", 10, "driving")])
        rules = PricingRules(bundles=(
            BundleRule(key="ab", name="AB", description="a and b", service_ids=("a", "b"), amount_cents=100),
        ))
        result = PricingEngine(catalog, rules).calculate(["a", "b"])

        assert [d.kind for d in result.discounts] == ["bundle"]

    def test_tiers_evaluated_highest_first(self, catalog):
        rules = PricingRules(volume_tiers=(VolumeTier(min_count=2, pct=5), VolumeTier(min_count=3, pct=50)))
        result = PricingEngine(catalog, rules).calculate(["mvr", "state_criminal", "drug_5_panel"])

        assert len(result.discounts) == 1
        assert result.discounts[0].amount_cents == percent_of(8000, 50)

    def test_malformed_selection_rejected(self, engine):
        with pytest.raises(InvalidInputError):
            engine.calculate(None)


class TestItemize:
    """Test cases for PricingEngine.itemize."""

    def test_keeps_caller_order_and_skips_unknown(self, engine):
        items = engine.itemize(["mvr", "ghost", "state_criminal", "mvr"])

        assert [(i.id, i.price_cents) for i in items] == [("mvr", 2000), ("state_criminal", 1500)]
        assert items[0].name == "Motor Vehicle Report (MVR)"


class TestMoney:
    """Test cases for cent helpers."""

    @pytest.mark.parametrize("value, cents", [(15, 1500), (12.5, 1250), ("0.015", 2), ("19.994", 1999)])
    def test_to_cents(self, value, cents):
        assert to_cents(value) == cents

    @pytest.mark.parametrize("value", ["abc", True, float("nan")])
    def test_to_cents_rejects_non_numbers(self, value):
        with pytest.raises(ValueError):
            to_cents(value)

    @pytest.mark.parametrize("value", [1e30, "1E+400", 10**40])
    def test_to_cents_rejects_out_of_range(self, value):
        with pytest.raises(ValueError, match="out of range"):
            to_cents(value)

    def test_boundary_conversion(self):
        assert cents_to_amount(16050) == 160.5
        assert cents_to_amount(5) == 0.05
        assert format_cents(2000) == "$20"
        assert format_cents(1250) == "$12.50"


class TestPricingRulesFile:
    """Test cases for load_pricing_rules."""

    def test_defaults_when_unset(self):
        assert load_pricing_rules(None) is DEFAULT_PRICING_RULES

    def test_reads_json_file(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({
            "volume_tiers": [{"min_count": 3, "pct": 5}, {"min_count": 6, "pct": 12}],
            "bundles": [],
        }))

        rules = load_pricing_rules(str(path))
        assert [t.min_count for t in rules.volume_tiers] == [6, 3]
        assert rules.bundles == ()

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"volume_tiers": [{"min_count": 0, "pct": 500}]}))
        with pytest.raises(CatalogLoadError):
            load_pricing_rules(str(path))
