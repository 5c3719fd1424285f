import pytest

from tests.conftest import get_product, make_product

ORDER_CONTACT = {"phone_number": "+96171234567", "location": "Beirut, Gemmayze"}


def place_order(client, headers, items):
    return client.post("/orders", json=dict(ORDER_CONTACT, items=items), headers=headers)


def test_place_order_snapshots_discounted_price(client, admin_headers, customer_headers):
    lamp = make_product(client, admin_headers, sku="LAMP", price=100.0, stock=5)
    rug = make_product(client, admin_headers, sku="RUG", price=40.0, stock=5)
    client.post(
        "/discounts",
        json={"target_type": "product", "target_id": lamp["id"], "percentage": 25},
        headers=admin_headers,
    )
    client.post("/cart/items", json={"product_id": lamp["id"]}, headers=customer_headers)

    resp = place_order(
        client,
        customer_headers,
        [
            {"product_id": lamp["id"], "quantity": 1},
            {"product_id": rug["id"], "quantity": 1},
            {"product_id": lamp["id"], "quantity": 1},
        ],
    )

    assert resp.status_code == 201, resp.text
    order = resp.json()["data"]
    assert order["order_number"].startswith("OS")
    assert order["status"] == "pending"
    assert order["discounted"] is True
    assert order["subtotal"] == pytest.approx(190.0)
    assert order["total"] == pytest.approx(190.0)
    lines = {i["product_id"]: i for i in order["items"]}
    assert lines[lamp["id"]]["quantity"] == 2
    assert lines[lamp["id"]]["unit_price"] == pytest.approx(75.0)

    assert get_product(client, lamp["id"])["stock"] == 3
    assert get_product(client, rug["id"])["stock"] == 4
    assert client.get("/cart", headers=customer_headers).json()["data"] == []


def test_insufficient_stock_rolls_back(client, admin_headers, customer_headers):
    lamp = make_product(client, admin_headers, sku="LAMP", stock=5)
    rug = make_product(client, admin_headers, sku="RUG", stock=1)

    resp = place_order(
        client,
        customer_headers,
        [{"product_id": lamp["id"], "quantity": 2}, {"product_id": rug["id"], "quantity": 3}],
    )

    assert resp.status_code == 400
    assert get_product(client, lamp["id"])["stock"] == 5
    assert client.get("/orders/me", headers=customer_headers).json()["data"] == []


def test_order_with_unknown_product(client, customer_headers):
    resp = place_order(client, customer_headers, [{"product_id": 404, "quantity": 1}])
    assert resp.status_code == 404


def test_empty_order_rejected(client, customer_headers):
    assert place_order(client, customer_headers, []).status_code == 400


def test_order_visibility(client, admin_headers, customer_headers):
    lamp = make_product(client, admin_headers, sku="LAMP")
    order = place_order(client, customer_headers, [{"product_id": lamp["id"], "quantity": 1}]).json()["data"]

    mine = client.get("/orders/me", headers=customer_headers).json()["data"]
    assert [o["id"] for o in mine] == [order["id"]]

    assert client.get(f"/orders/{order['id']}", headers=customer_headers).status_code == 200
    assert client.get(f"/orders/{order['id']}", headers=admin_headers).status_code == 200
    assert client.get("/orders", headers=customer_headers).status_code == 403
    assert len(client.get("/orders", headers=admin_headers).json()["data"]) == 1

    other = client.post(
        "/auth/signup",
        json={
            "first_name": "Lina",
            "last_name": "Khoury",
            "email": "lina@example.com",
            "phone_number": "+96176543210",
            "location": "Byblos",
            "password": "Another#Pass9",
        },
    ).json()["access_token"]
    resp = client.get(f"/orders/{order['id']}", headers={"Authorization": f"Bearer {other}"})
    assert resp.status_code == 403


def test_admin_updates_and_deletes_order(client, admin_headers, customer_headers):
    lamp = make_product(client, admin_headers, sku="LAMP")
    order = place_order(client, customer_headers, [{"product_id": lamp["id"], "quantity": 1}]).json()["data"]

    resp = client.put(f"/orders/{order['id']}", json={"status": "shipped"}, headers=admin_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["status"] == "shipped"

    bad = client.put(f"/orders/{order['id']}", json={"status": "lost"}, headers=admin_headers)
    assert bad.status_code == 400

    assert client.delete(f"/orders/{order['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/orders/{order['id']}", headers=admin_headers).status_code == 404
