from tests.conftest import make_product


def test_create_and_get_collection(client, admin_headers):
    a = make_product(client, admin_headers, sku="A")
    resp = client.post(
        "/collections", json={"name": "Souq", "product_ids": [a["id"]]}, headers=admin_headers
    )

    assert resp.status_code == 201, resp.text
    collection = resp.json()["data"]
    assert collection["product_ids"] == [a["id"]]

    fetched = client.get(f"/collections/{collection['id']}").json()["data"]
    assert fetched["name"] == "Souq"


def test_create_collection_with_unknown_product(client, admin_headers):
    resp = client.post(
        "/collections", json={"name": "Souq", "product_ids": [12]}, headers=admin_headers
    )
    assert resp.status_code == 400


def test_duplicate_collection_name(client, admin_headers):
    client.post("/collections", json={"name": "Souq"}, headers=admin_headers)
    resp = client.post("/collections", json={"name": "Souq"}, headers=admin_headers)
    assert resp.status_code == 409


def test_hidden_collections(client, admin_headers):
    resp = client.post(
        "/collections", json={"name": "Secret", "show_collection": False}, headers=admin_headers
    )
    hidden_id = resp.json()["data"]["id"]

    assert client.get("/collections").json()["data"] == []
    assert client.get(f"/collections/{hidden_id}").status_code == 404

    everything = client.get("/collections/all", headers=admin_headers)
    assert everything.status_code == 200
    assert [c["name"] for c in everything.json()["data"]] == ["Secret"]


def test_collection_products_in_arabic(client, admin_headers):
    a = make_product(client, admin_headers, sku="A", tags=["Lanterns"])
    collection_id = client.get("/collections").json()["data"][0]["id"]

    resp = client.get(f"/collections/{collection_id}/products", params={"lang": "ar"})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert [p["id"] for p in data] == [a["id"]]
    assert data[0]["title"] == "فانوس نحاسي"


def test_update_collection_membership_and_visibility(client, admin_headers):
    a = make_product(client, admin_headers, sku="A")
    b = make_product(client, admin_headers, sku="B")
    collection = client.post(
        "/collections", json={"name": "Souq", "product_ids": [a["id"]]}, headers=admin_headers
    ).json()["data"]

    resp = client.put(
        f"/collections/{collection['id']}",
        json={"name": "Old Souq", "product_ids": [b["id"]], "show_collection": False},
        headers=admin_headers,
    )

    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["name"] == "Old Souq"
    assert data["product_ids"] == [b["id"]]
    assert data["show_collection"] is False


def test_delete_collection(client, admin_headers):
    collection = client.post("/collections", json={"name": "Souq"}, headers=admin_headers).json()["data"]

    resp = client.delete(f"/collections/{collection['id']}", headers=admin_headers)

    assert resp.status_code == 200
    assert client.delete(f"/collections/{collection['id']}", headers=admin_headers).status_code == 404


def test_collection_products_carry_all_their_tags(client, admin_headers):
    a = make_product(client, admin_headers, sku="A", tags=["Lanterns", "Copper"])
    b = make_product(client, admin_headers, sku="B", tags=["Lanterns"])
    lanterns = next(c for c in client.get("/collections").json()["data"] if c["name"] == "Lanterns")

    resp = client.get(f"/collections/{lanterns['id']}/products")

    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert [p["id"] for p in data] == [a["id"], b["id"]]
    assert sorted(data[0]["tags"]) == ["Copper", "Lanterns"]
    assert data[1]["tags"] == ["Lanterns"]

    assert client.get("/collections/999/products").status_code == 404
