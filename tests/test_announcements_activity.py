from tests.conftest import make_product


def test_announcement_crud(client, admin_headers, customer_headers):
    assert client.post("/announcements", json={"message": "Hi"}, headers=customer_headers).status_code == 403

    first = client.post("/announcements", json={"message": "Eid sale"}, headers=admin_headers)
    assert first.status_code == 201, first.text
    second = client.post("/announcements", json={"message": "Free delivery"}, headers=admin_headers)
    second_id = second.json()["data"]["id"]

    listed = client.get("/announcements").json()["data"]
    assert [a["message"] for a in listed] == ["Free delivery", "Eid sale"]

    resp = client.put(f"/announcements/{second_id}", json={"message": "Free delivery today"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["message"] == "Free delivery today"

    assert client.delete(f"/announcements/{second_id}", headers=admin_headers).status_code == 200
    assert client.put(f"/announcements/{second_id}", json={"message": "x"}, headers=admin_headers).status_code == 404
    assert client.post("/announcements", json={"message": ""}, headers=admin_headers).status_code == 400


def test_admin_actions_are_recorded(client, admin_headers, customer_headers):
    product = make_product(client, admin_headers, sku="LAMP")
    client.post(
        "/discounts",
        json={"target_type": "product", "target_id": product["id"], "percentage": 10},
        headers=admin_headers,
    )

    assert client.get("/activities", headers=customer_headers).status_code == 403

    resp = client.get("/activities", headers=admin_headers, params={"sort_by": "id"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 2
    messages = [a["message"] for a in body["data"]]
    assert messages[0].startswith("Created 10.0% discount on product")
    assert "created product 'Brass Lantern'" in messages[1]
    assert all(a["user_email"] == "admin@oldsouqs.com" for a in body["data"])


def test_health_check(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_activity_log_filters_and_pages(client, admin_headers):
    for sku in ("A", "B", "C"):
        make_product(client, admin_headers, sku=sku)

    resp = client.get(
        "/activities",
        headers=admin_headers,
        params={"email": "admin@", "page": 2, "page_size": 2, "sort_by": "id", "order": "asc"},
    )

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["total"] == 3
    assert body["page"] == 2
    assert len(body["data"]) == 1
    assert "SKU: C" in body["data"][0]["message"]

    none = client.get("/activities", headers=admin_headers, params={"email": "nobody"}).json()
    assert none["total"] == 0
