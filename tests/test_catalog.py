"""
Unit tests for the service catalog and its atomic reload.
"""

import json
import threading

import pytest

from screening_api.core.exceptions import CatalogLoadError
from screening_api.repositories.catalog import JsonCatalogSource
from screening_api.services.catalog import Category, CatalogStore, ServiceCatalog

from conftest import SCREENING_RECORDS, service


class ListSource:
    """Catalog source backed by a mutable list of records."""

    def __init__(self, records):
        self.records = records

    def read(self):
        return [dict(r) for r in self.records]


class TestServiceCatalogLoad:
    """Test cases for ServiceCatalog.load."""

    def test_load_indexes_by_id(self, catalog):
        assert len(catalog) == len(SCREENING_RECORDS)
        county = catalog.get("county_criminal")
        assert county.name == "County Criminal Search"
        assert county.base_price_cents == 2500
        assert county.category is Category.CRIMINAL
        assert county.dependencies == ("state_criminal",)

    def test_get_unknown_returns_none(self, catalog):
        assert catalog.get("nope") is None
        assert "nope" not in catalog

    def test_get_many_keeps_order_and_drops_unknown(self, catalog):
        services = catalog.get_many(["mvr", "ghost", "state_criminal"])
        assert [s.id for s in services] == ["mvr", "state_criminal"]

    def test_by_category_groups_every_service(self, catalog):
        grouped = catalog.by_category()
        assert set(grouped) == set(Category)
        assert [s.id for s in grouped[Category.DRIVING]] == ["mvr"]
        assert sum(len(v) for v in grouped.values()) == len(catalog)

    def test_price_converted_to_cents_half_up(self):
        catalog = ServiceCatalog.load([service("a", "A", "10.005", "driving")])
        assert catalog.get("a").base_price_cents == 1001

    def test_services_are_immutable(self, catalog):
        with pytest.raises(Exception):
            catalog.get("mvr").name = "changed"

    def test_malformed_records_all_reported(self):
        records = [
            service("ok", "Fine", 10, "driving"),
            {"name": "No id", "base_price": 5, "category": "driving"},
            {"id": "no_name", "base_price": 5, "category": "driving"},
            {"id": "no_price", "name": "No price", "category": "driving"},
            service("bad_cat", "Bad category", 5, "astrology"),
            service("neg", "Negative", -1, "driving"),
        ]

        with pytest.raises(CatalogLoadError) as exc_info:
            ServiceCatalog.load(records)

        failures = exc_info.value.failures
        assert [f["index"] for f in failures] == [1, 2, 3, 4, 5]
        assert failures[1]["id"] == "no_name"
        assert "missing 'name'" in failures[1]["reason"]
        assert "no_price" in exc_info.value.message

    def test_unhashable_category_reported_not_raised(self):
        records = [
            service("list_cat", "List category", 5, ["criminal"]),
            service("dict_cat", "Dict category", 5, {"name": "driving"}),
            service("neg", "Negative", -1, "driving"),
        ]

        with pytest.raises(CatalogLoadError) as exc_info:
            ServiceCatalog.load(records)

        failures = exc_info.value.failures
        assert [f["index"] for f in failures] == [0, 1, 2]
        assert failures[0]["id"] == "list_cat"

    @pytest.mark.parametrize("price", [1e30, "1e30", "1E+400"])
    def test_out_of_range_price_reported(self, price):
        with pytest.raises(CatalogLoadError) as exc_info:
            ServiceCatalog.load([service("huge", "Huge", price, "driving"), service("ok", "Fine", 1, "driving")])
        assert [f["id"] for f in exc_info.value.failures] == ["huge"]

    def test_duplicate_id_rejected(self):
        with pytest.raises(CatalogLoadError) as exc_info:
            ServiceCatalog.load([service("a", "A", 1, "driving"), service("a", "A again", 2, "driving")])
        assert exc_info.value.failures == [{"index": 1, "id": "a", "reason": "duplicate id"}]

    def test_non_list_source_rejected(self):
        with pytest.raises(CatalogLoadError):
            ServiceCatalog.load({"services": []})

    def test_unresolved_references_tolerated(self):
        catalog = ServiceCatalog.load([service("a", "A", 1, "driving", dependencies=["missing"])])
        assert catalog.unresolved_references() == [("a", "missing")]
        assert catalog.display_name("missing") == "missing"


class TestCatalogStore:
    """Test cases for CatalogStore reload."""

    def test_reload_publishes_new_generation(self):
        source = ListSource([service("a", "A", 1, "driving")])
        store = CatalogStore(source)
        old = store.snapshot()

        source.records = [service("a", "A", 1, "driving"), service("b", "B", 2, "driving")]
        new = store.reload()

        assert store.generation == 2
        assert store.snapshot() is new
        assert store.get("b") is not None
        # A snapshot taken earlier still answers from its own generation
        assert old.get("b") is None

    def test_failed_reload_keeps_previous_catalog(self):
        source = ListSource([service("a", "A", 1, "driving")])
        store = CatalogStore(source)

        source.records = [{"id": "broken"}]
        with pytest.raises(CatalogLoadError):
            store.reload()

        assert store.generation == 1
        assert store.get("a") is not None

    def test_initial_load_failure_is_fatal(self):
        with pytest.raises(CatalogLoadError):
            CatalogStore(ListSource([{"id": "broken"}]))

    def test_concurrent_readers_see_one_generation(self):
        ids = [f"svc_{i}" for i in range(50)]

        def records(price):
            return [service(sid, sid.upper(), price, "verification") for sid in ids]

        source = ListSource(records(1))
        store = CatalogStore(source)
        mixed = []
        stop = threading.Event()

        def reader():
            while not stop.is_set():
                snapshot = store.snapshot()
                prices = {s.base_price_cents for s in snapshot.get_many(ids)}
                if len(prices) != 1 or len(snapshot) != len(ids):
                    mixed.append(prices)

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for t in readers:
            t.start()
        for generation in range(2, 40):
            source.records = records(generation)
            store.reload()
        stop.set()
        for t in readers:
            t.join()

        assert mixed == []
        assert store.generation == 39


class TestJsonCatalogSource:
    """Test cases for the JSON file source."""

    def test_reads_services_list(self, tmp_path):
        path = tmp_path / "services.json"
        path.write_text(json.dumps({"services": [service("a", "A", 1, "driving")]}))

        assert JsonCatalogSource(path).read()[0]["id"] == "a"

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogLoadError):
            JsonCatalogSource(tmp_path / "absent.json").read()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "services.json"
        path.write_text("{not json")
        with pytest.raises(CatalogLoadError):
            JsonCatalogSource(path).read()

    def test_missing_services_key(self, tmp_path):
        path = tmp_path / "services.json"
        path.write_text(json.dumps({"items": []}))
        with pytest.raises(CatalogLoadError):
            JsonCatalogSource(path).read()
