"""Application tests for catalogue browsing, administration and seeding."""

import pytest
from protean import current_domain
from protean.exceptions import InvalidDataError, ValidationError
from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.catalogue.seed import CATEGORIES, PRODUCTS, seed_catalogue
from storefront.catalogue.store import (
    create_category,
    create_product,
    featured_products,
    list_categories,
    list_products,
    product_details,
)


@pytest.fixture()
def catalogue(make_product):
    make_product(name="Cheap Tee", price=9.99, category="Clothing", rating=4.1)
    make_product(name="Denim Jacket", price=89.99, category="Clothing", rating=4.5, featured=True)
    make_product(name="Headphones", price=349.99, category="Electronics", rating=4.7, featured=True)
    make_product(name="Phone", price=999.99, category="Electronics", rating=4.8)


class TestListProducts:
    def test_lists_everything_by_default(self, catalogue):
        page = list_products()
        assert page.total == 4
        assert len(page.items) == 4

    def test_filter_by_category(self, catalogue):
        page = list_products(category="Electronics")
        assert {p["name"] for p in page.items} == {"Headphones", "Phone"}

    def test_search_by_name(self, catalogue):
        page = list_products(search="denim")
        assert [p["name"] for p in page.items] == ["Denim Jacket"]

    def test_price_range(self, catalogue):
        page = list_products(min_price=50, max_price=400)
        assert {p["name"] for p in page.items} == {"Denim Jacket", "Headphones"}

    def test_sort_by_price(self, catalogue):
        ascending = [p["price"] for p in list_products(sort="price_asc").items]
        descending = [p["price"] for p in list_products(sort="price_desc").items]
        assert ascending == sorted(ascending)
        assert descending == sorted(descending, reverse=True)

    def test_sort_by_rating(self, catalogue):
        names = [p["name"] for p in list_products(sort="rating").items]
        assert names[0] == "Phone"

    def test_pagination(self, catalogue):
        page = list_products(sort="price_asc", page=2, page_size=3)
        assert [p["name"] for p in page.items] == ["Phone"]
        assert page.pagination("products") == {"current_page": 2, "total_pages": 2, "total_products": 4}

    def test_filter_by_category_with_ampersand(self, make_product):
        make_product(name="Plant Pot", category="Home & Garden", brand="Green & Co")
        page = list_products(category="Home & Garden")
        assert [p["name"] for p in page.items] == ["Plant Pot"]
        assert page.items[0]["brand"] == "Green & Co"

    def test_inactive_products_are_hidden(self, catalogue):
        repo = current_domain.repository_for(Product)
        phone = repo.find_by_name("Phone")
        phone.is_active = False
        repo.add(phone)
        assert list_products().total == 3


class TestFeaturedAndCategories:
    def test_featured_products(self, catalogue):
        names = [p["name"] for p in featured_products()]
        assert names == ["Headphones", "Denim Jacket"]

    def test_categories_sorted_by_name(self):
        create_category(name="Electronics")
        create_category(name="Books")
        assert [c["name"] for c in list_categories()] == ["Books", "Electronics"]


class TestAdministration:
    def test_create_product_command(self):
        product_id = create_product(name="Plant Pot", price=34.99, stock=60, images=["pot.jpg"])
        details = product_details(product_id)
        assert details["name"] == "Plant Pot"
        assert details["stock"] == 60
        assert details["images"] == ["pot.jpg"]

    def test_create_product_rejects_bad_price(self):
        with pytest.raises((InvalidDataError, ValidationError)):
            create_product(name="Free Thing", price=0)


class TestSeed:
    def test_seed_creates_sample_catalogue(self):
        created = seed_catalogue()
        assert created == {"categories": len(CATEGORIES), "products": len(PRODUCTS)}
        assert list_products(page_size=100).total == len(PRODUCTS)

    def test_seed_is_idempotent(self):
        seed_catalogue()
        assert seed_catalogue() == {"categories": 0, "products": 0}
        assert len(current_domain.repository_for(Category)._dao.query.all().items) == len(CATEGORIES)

    def test_reseeding_keeps_names_verbatim(self):
        seed_catalogue()
        seed_catalogue()

        names = [c["name"] for c in list_categories()]
        assert names.count("Home & Garden") == 1
        expected = sum(1 for p in PRODUCTS if p["category"] == "Home & Garden")
        assert expected > 0
        assert list_products(category="Home & Garden", page_size=100).total == expected
