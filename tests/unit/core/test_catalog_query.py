"""Tests for catalog listing: search, ordering and pagination."""

import pytest

from src.catalog.core.services import PAGE_SIZE


class TestSearch:
    """Substring search on name and SKU."""

    @pytest.fixture(autouse=True)
    def _products(self, product_factory):
        self.ids = {
            "mug": product_factory(name="Coffee Mug", sku="KIT-001"),
            "kettle": product_factory(name="Electric Kettle", sku="KIT-002"),
            "lamp": product_factory(name="Desk Lamp", sku="LGT-100"),
            "percent": product_factory(name="100% Cotton Tee", sku="APP_01"),
        }

    def _names(self, page):
        return {item.name for item in page.items}

    def test_matches_name_case_insensitively(self, catalog):
        page = catalog.list_products(search="mUg")

        assert self._names(page) == {"Coffee Mug"}
        assert page.total == 1

    @pytest.mark.parametrize("search", ["éclair", "ÉCLAIR", "café"])
    def test_matches_non_ascii_case_insensitively(self, catalog, product_factory, search):
        product_factory(name="ÉCLAIR AU CAFÉ", sku="BAK-001")

        page = catalog.list_products(search=search)

        assert self._names(page) == {"ÉCLAIR AU CAFÉ"}

    def test_matches_sku(self, catalog):
        page = catalog.list_products(search="kit-")

        assert self._names(page) == {"Coffee Mug", "Electric Kettle"}

    def test_matches_either_field(self, catalog):
        page = catalog.list_products(search="l")

        assert self._names(page) == {"Electric Kettle", "Desk Lamp"}

    def test_wildcards_are_literal(self, catalog):
        assert self._names(catalog.list_products(search="%")) == {"100% Cotton Tee"}
        assert self._names(catalog.list_products(search="_")) == {"100% Cotton Tee"}

    @pytest.mark.parametrize("search", [None, "", "   "])
    def test_empty_search_lists_everything(self, catalog, search):
        page = catalog.list_products(search=search)

        assert page.total == 4
        assert page.search is None

    def test_search_is_echoed_back(self, catalog):
        assert catalog.list_products(search="  lamp ").search == "lamp"

    def test_no_match(self, catalog):
        page = catalog.list_products(search="bicycle")

        assert page.items == []
        assert page.total == 0
        assert page.last_page == 1


class TestSoftDeleted:
    def test_deleted_products_are_never_listed(self, catalog, product_factory):
        product_factory(name="Visible Chair", sku="CH-1")
        product_factory(name="Hidden Chair", sku="CH-2", deleted=True)

        assert {p.name for p in catalog.list_products().items} == {"Visible Chair"}
        assert {p.name for p in catalog.list_products(search="chair").items} == {"Visible Chair"}
        assert catalog.list_products(search="CH-2").total == 0


class TestOrderingAndPaging:
    @pytest.fixture
    def twenty_five(self, product_factory):
        return [product_factory(name=f"Item {i:02d}") for i in range(25)]

    def test_newest_first(self, catalog, twenty_five):
        page = catalog.list_products()

        assert [item.id for item in page.items] == list(reversed(twenty_five))[:PAGE_SIZE]

    def test_pages_partition_the_result(self, catalog, twenty_five):
        seen = []
        for number in (1, 2, 3):
            page = catalog.list_products(page=number)
            assert page.page == number
            assert page.per_page == PAGE_SIZE
            assert page.total == 25
            assert page.last_page == 3
            seen.extend(item.id for item in page.items)

        assert len(seen) == 25
        assert set(seen) == set(twenty_five)

    def test_repeated_queries_are_stable(self, catalog, twenty_five):
        first = [item.id for item in catalog.list_products(page=2).items]
        second = [item.id for item in catalog.list_products(page=2).items]

        assert first == second

    def test_out_of_range_page_is_empty(self, catalog, twenty_five):
        page = catalog.list_products(page=4)

        assert page.items == []
        assert page.total == 25

    @pytest.mark.parametrize("number", [0, -3])
    def test_pages_below_one_are_treated_as_first(self, catalog, twenty_five, number):
        page = catalog.list_products(page=number)

        assert page.page == 1
        assert len(page.items) == PAGE_SIZE


class TestImageUrls:
    def test_items_carry_resolved_urls(self, catalog, product_factory):
        product_factory(name="With Image", image="products/abc.png")
        product_factory(name="Without Image")

        items = {item.name: item for item in catalog.list_products().items}

        assert items["With Image"].image == "products/abc.png"
        assert items["With Image"].image_url == "/storage/products/abc.png"
        assert items["Without Image"].image_url is None

    def test_listing_does_not_check_file_existence(self, catalog, product_factory, asset_store):
        product_factory(name="Dangling", image="products/missing.png")

        item = catalog.list_products().items[0]

        assert item.image_url == "/storage/products/missing.png"
        assert asset_store.paths() == []
