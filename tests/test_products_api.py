import logging

import pytest

from tests.conftest import get_product, make_product


def test_create_product_creates_tag_collections(client, admin_headers):
    product = make_product(client, admin_headers, tags=["Lanterns", "Copper"])

    assert sorted(product["tags"]) == ["Copper", "Lanterns"]
    names = [c["name"] for c in client.get("/collections").json()["data"]]
    assert sorted(names) == ["Copper", "Lanterns"]


def test_create_product_validation_messages(client, admin_headers):
    cases = [
        ({"title": "Lamp", "price": 5}, "SKU is required"),
        ({"sku": "A1", "price": 5}, "Title is missing"),
        ({"sku": "A1", "title": "Lamp"}, "Price is missing"),
    ]
    for payload, message in cases:
        resp = client.post("/products", json=payload, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["detail"] == message


def test_duplicate_sku_conflicts(client, admin_headers):
    make_product(client, admin_headers, sku="DUP")
    resp = client.post(
        "/products", json={"sku": "DUP", "title": "Again", "price": 3}, headers=admin_headers
    )
    assert resp.status_code == 409


def test_create_product_requires_admin(client, customer_headers):
    resp = client.post(
        "/products", json={"sku": "X", "title": "X", "price": 3}, headers=customer_headers
    )
    assert resp.status_code == 403


def test_arabic_view_and_admin_view(client, admin_headers):
    product = make_product(client, admin_headers)

    ar = client.get(f"/products/{product['id']}", params={"lang": "ar"}).json()["data"]
    assert ar["title"] == "فانوس نحاسي"
    assert ar["description"] == "فانوس مصنوع يدويا"
    assert "title_ar" not in ar

    en = client.get(f"/products/{product['id']}").json()["data"]
    assert en["title"] == "Brass Lantern"

    admin = get_product(client, product["id"])
    assert admin["title"] == "Brass Lantern"
    assert admin["title_ar"] == "فانوس نحاسي"


def test_arabic_view_falls_back_to_english(client, admin_headers):
    product = make_product(client, admin_headers, title_ar=None, description_ar=None)
    ar = client.get(f"/products/{product['id']}", params={"lang": "ar"}).json()["data"]
    assert ar["title"] == "Brass Lantern"


def test_list_and_batch_lookup(client, admin_headers):
    a = make_product(client, admin_headers, sku="A")
    b = make_product(client, admin_headers, sku="B")
    make_product(client, admin_headers, sku="C")

    assert len(client.get("/products").json()["data"]) == 3

    resp = client.post("/products/batch", json={"product_ids": [b["id"], a["id"], 999]})
    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()["data"]] == [a["id"], b["id"]]

    assert client.post("/products/batch", json={"product_ids": []}).status_code == 400


def test_get_missing_product(client):
    assert client.get("/products/404").status_code == 404


def test_update_product_fields_and_tags(client, admin_headers):
    product = make_product(client, admin_headers, tags=["Old"])

    resp = client.put(
        f"/products/{product['id']}",
        json={"title": "Copper Lantern", "stock": 3, "tags": ["New"]},
        headers=admin_headers,
    )

    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["title"] == "Copper Lantern"
    assert data["stock"] == 3
    assert data["tags"] == ["New"]
    assert data["price"] == pytest.approx(100.0)


def test_update_product_rejects_non_positive_price(client, admin_headers):
    product = make_product(client, admin_headers)
    resp = client.put(f"/products/{product['id']}", json={"price": 0}, headers=admin_headers)
    assert resp.status_code == 400


def test_update_product_sku_clash(client, admin_headers):
    make_product(client, admin_headers, sku="ONE")
    two = make_product(client, admin_headers, sku="TWO")
    resp = client.put(f"/products/{two['id']}", json={"sku": "ONE"}, headers=admin_headers)
    assert resp.status_code == 409


def test_delete_product_removes_membership_and_discounts(client, admin_headers):
    product = make_product(client, admin_headers, tags=["Lanterns"])
    client.post(
        "/discounts",
        json={"target_type": "product", "target_id": product["id"], "percentage": 10},
        headers=admin_headers,
    )

    resp = client.delete(f"/products/{product['id']}", headers=admin_headers)

    assert resp.status_code == 200, resp.text
    assert client.get(f"/products/{product['id']}").status_code == 404
    assert client.get("/discounts").json()["data"] == []
    lanterns = client.get("/collections").json()["data"][0]
    assert lanterns["product_ids"] == []


def test_failed_admin_request_keeps_status_and_is_logged(client, admin_headers, caplog):
    make_product(client, admin_headers, sku="DUP")

    with caplog.at_level(logging.INFO, logger="storefront.requests"):
        resp = client.post(
            "/products", json={"sku": "DUP", "title": "Again", "price": 3}, headers=admin_headers
        )
        missing = client.put("/products/999", json={"stock": 1}, headers=admin_headers)

    assert resp.status_code == 409
    assert resp.json()["detail"] == "SKU already exists"
    assert missing.status_code == 404

    lines = [r.getMessage() for r in caplog.records if r.name == "storefront.requests"]
    assert any(line.startswith("POST /products -> 409") for line in lines)
    assert any(line.startswith("PUT /products/999 -> 404") for line in lines)
    assert all("user=None" not in line for line in lines)
