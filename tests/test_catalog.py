import pytest

from app.application.services.catalog_service import build_product_filter, parse_positive_int
from app.core.exceptions import MissingFieldError


@pytest.mark.asyncio
async def test_list_categories(client, add_catalog):
    add_catalog("Pizza", [])
    add_catalog("Drinks", [])

    response = await client.get("/api/categories")

    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Pizza", "Drinks"]
    assert set(response.json()[0]) == {"category_id", "name", "image_url"}


@pytest.mark.asyncio
async def test_filter_returns_second_page_sorted_by_price(client, add_catalog):
    prices = [12.0, 3.0, 7.5, 1.0, 9.0, 4.0, 11.0, 2.0, 6.0, 10.0, 5.0, 8.0]
    category = add_catalog("Burgers", [(f"item-{p}", p, True) for p in prices])
    add_catalog("Other", [("cheap-other", 0.5, True)])

    response = await client.get(
        "/api/filter", params={"category_id": category.category_id, "page": 2, "limit": 5}
    )

    assert response.status_code == 200
    assert [p["price"] for p in response.json()] == [6.0, 7.5, 8.0, 9.0, 10.0]


@pytest.mark.asyncio
async def test_filter_skips_inactive_products(client, add_catalog):
    category = add_catalog("Noodles", [("pho", 5.0, True), ("old", 1.0, False), ("bun", 3.0, True)])

    response = await client.get("/api/filter", params={"category_id": category.category_id})

    assert [p["name"] for p in response.json()] == ["bun", "pho"]


@pytest.mark.asyncio
async def test_filter_defaults_to_first_ten(client, add_catalog):
    category = add_catalog("Rice", [(f"r{i}", float(i), True) for i in range(15)])

    response = await client.get("/api/filter", params={"category_id": category.category_id})

    assert len(response.json()) == 10
    assert response.json()[0]["price"] == 0.0


@pytest.mark.asyncio
async def test_filter_empty_category_is_empty_list(client, add_catalog):
    category = add_catalog("Empty", [])

    response = await client.get("/api/filter", params={"category_id": category.category_id})

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_filter_requires_category_id(client):
    response = await client.get("/api/filter", params={"page": 1})

    assert response.status_code == 400
    assert response.json()["code"] == "MissingFieldError"


@pytest.mark.parametrize("value,expected", [
    ("3", 3), (None, 10), ("abc", 10), ("0", 10), ("-2", 10), (" 7 ", 7),
    ("2.5", 2), ("3abc", 3), ("+4", 4), ("", 10),
])
def test_parse_positive_int(value, expected):
    assert parse_positive_int(value, 10) == expected


def test_build_product_filter_offset():
    filters = build_product_filter("4", "3", "20")

    assert filters.category_id == 4
    assert filters.offset == 40


def test_build_product_filter_rejects_non_numeric_category():
    with pytest.raises(MissingFieldError):
        build_product_filter("pizza", None, None)


@pytest.mark.asyncio
async def test_filter_reads_leading_digits_of_page(client, add_catalog):
    category = add_catalog("Soup", [(f"s{i}", float(i), True) for i in range(6)])

    response = await client.get(
        "/api/filter", params={"category_id": category.category_id, "page": "2.5", "limit": "3"}
    )

    assert [p["price"] for p in response.json()] == [3.0, 4.0, 5.0]
