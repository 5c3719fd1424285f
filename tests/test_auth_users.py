from tests.conftest import ADMIN_CREDENTIALS, CUSTOMER_SIGNUP, auth


def test_signup_returns_token(client):
    resp = client.post("/auth/signup", json=CUSTOMER_SIGNUP)

    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["expires_in"] == 24 * 3600

    me = client.get("/users/me", headers=auth(body["access_token"]))
    assert me.status_code == 200
    assert me.json()["data"]["email"] == "rami@example.com"
    assert me.json()["data"]["role"] == "customer"


def test_signup_validation(client):
    weak = dict(CUSTOMER_SIGNUP, password="short")
    assert client.post("/auth/signup", json=weak).status_code == 400

    bad_phone = dict(CUSTOMER_SIGNUP, phone_number="71234567")
    assert client.post("/auth/signup", json=bad_phone).status_code == 400

    bad_email = dict(CUSTOMER_SIGNUP, email="not-an-email")
    assert client.post("/auth/signup", json=bad_email).status_code == 400

    missing = dict(CUSTOMER_SIGNUP, location="")
    resp = client.post("/auth/signup", json=missing)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "All fields are required"


def test_signup_duplicate_email(client):
    client.post("/auth/signup", json=CUSTOMER_SIGNUP)
    upper = dict(CUSTOMER_SIGNUP, email="RAMI@example.com")
    assert client.post("/auth/signup", json=upper).status_code == 409


def test_login_and_bad_credentials(client, customer_headers):
    ok = client.post(
        "/auth/login", json={"email": "rami@example.com", "password": CUSTOMER_SIGNUP["password"]}
    )
    assert ok.status_code == 200
    assert ok.json()["access_token"]

    bad = client.post("/auth/login", json={"email": "rami@example.com", "password": "Wrong#Pass1"})
    assert bad.status_code == 401


def test_logout_invalidates_token(client, customer_headers):
    assert client.post("/auth/logout", headers=customer_headers).status_code == 200
    assert client.get("/users/me", headers=customer_headers).status_code == 401


def test_missing_or_malformed_token(client):
    assert client.get("/users/me").status_code == 401
    assert client.get("/users/me", headers={"Authorization": "Token abc"}).status_code == 401
    assert client.get("/users/me", headers=auth("garbage")).status_code == 401


def test_users_listing_is_admin_only(client, admin_headers, customer_headers):
    assert client.get("/users", headers=customer_headers).status_code == 403

    resp = client.get("/users", headers=admin_headers)
    assert resp.status_code == 200
    emails = [u["email"] for u in resp.json()["data"]]
    assert emails == [ADMIN_CREDENTIALS["email"], CUSTOMER_SIGNUP["email"]]


def test_self_or_admin_access(client, admin_headers, customer_headers):
    me = client.get("/users/me", headers=customer_headers).json()["data"]
    admin = client.get("/users/me", headers=admin_headers).json()["data"]

    assert client.get(f"/users/{me['id']}", headers=customer_headers).status_code == 200
    assert client.get(f"/users/{admin['id']}", headers=customer_headers).status_code == 403
    assert client.get(f"/users/{me['id']}", headers=admin_headers).status_code == 200


def test_update_user(client, customer_headers):
    me = client.get("/users/me", headers=customer_headers).json()["data"]

    resp = client.put(
        f"/users/{me['id']}",
        json={"location": "Tripoli", "phone_number": "0096170111222"},
        headers=customer_headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["location"] == "Tripoli"

    promote = client.put(f"/users/{me['id']}", json={"role": "admin"}, headers=customer_headers)
    assert promote.status_code == 403


def test_admin_changes_role(client, admin_headers, customer_headers):
    me = client.get("/users/me", headers=customer_headers).json()["data"]

    bad = client.put(f"/users/{me['id']}", json={"role": "owner"}, headers=admin_headers)
    assert bad.status_code == 400

    resp = client.put(f"/users/{me['id']}", json={"role": "admin"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["role"] == "admin"


def test_delete_user_deactivates(client, admin_headers, customer_headers):
    me = client.get("/users/me", headers=customer_headers).json()["data"]

    resp = client.delete(f"/users/{me['id']}", headers=admin_headers)

    assert resp.status_code == 200
    assert client.get("/users/me", headers=customer_headers).status_code == 401
    login = client.post(
        "/auth/login", json={"email": "rami@example.com", "password": CUSTOMER_SIGNUP["password"]}
    )
    assert login.status_code == 403
