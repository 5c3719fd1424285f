import asyncio
import os
import tempfile

# Settings are read at import time, so the environment must be ready first
_tmpdir = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ["DB_TYPE"] = "sqlite"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_tmpdir, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["ADMIN_EMAIL"] = "admin@oldsouqs.com"
os.environ["ADMIN_PASSWORD"] = "Admin@12345"
os.environ["DELIVERY_FEE"] = "0"

import pytest
from fastapi.testclient import TestClient

from storefront.core.db import Base, engine, AsyncSessionLocal
from storefront.scripts.create_admin import create_admin
from main import app

ADMIN_CREDENTIALS = {"email": "admin@oldsouqs.com", "password": "Admin@12345"}

CUSTOMER_SIGNUP = {
    "first_name": "Rami",
    "last_name": "Haddad",
    "email": "rami@example.com",
    "phone_number": "+96171234567",
    "location": "Beirut",
    "password": "Secret#2024x",
}


async def _reset_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def reset_db():
    asyncio.run(_reset_schema())


@pytest.fixture
async def session(anyio_backend):
    await _reset_schema()
    async with AsyncSessionLocal() as s:
        yield s


@pytest.fixture
def client(reset_db):
    with TestClient(app) as c:
        yield c


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    asyncio.run(create_admin())
    resp = client.post("/auth/login", json=ADMIN_CREDENTIALS)
    assert resp.status_code == 200, resp.text
    return auth(resp.json()["access_token"])


@pytest.fixture
def customer_headers(client):
    resp = client.post("/auth/signup", json=CUSTOMER_SIGNUP)
    assert resp.status_code == 201, resp.text
    return auth(resp.json()["access_token"])


def make_product(client, headers, **overrides) -> dict:
    payload = {
        "sku": "SKU-1",
        "title": "Brass Lantern",
        "title_ar": "فانوس نحاسي",
        "description": "Hand-made lantern",
        "description_ar": "فانوس مصنوع يدويا",
        "price": 100.0,
        "stock": 10,
        "tags": [],
    }
    payload.update(overrides)
    resp = client.post("/products", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def get_product(client, product_id: int) -> dict:
    resp = client.get(f"/products/{product_id}", params={"is_admin": True})
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]
