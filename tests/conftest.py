"""Shared fixtures for the dashboard tests.

Every test gets its own SQLite file, a fresh page cache and, where asked
for, a TestClient wired to both through dependency overrides.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from dashboard.api.deps import get_db_engine, get_page_cache
from dashboard.auth import create_user
from dashboard.cache import PageCache
from dashboard.config import DashboardSettings
from dashboard.db.engine import build_engine
from dashboard.db.schema import customers, invoices, metadata
from dashboard.main import create_app

TEST_EMAIL = "user@nextmail.com"
TEST_PASSWORD = "123456"

CUSTOMER_ID = "3958dc9e-712f-4377-85e9-fec4b6a6442a"
OTHER_CUSTOMER_ID = "cc27c14a-0acf-4f4a-a6c9-d45682c144b9"


@pytest.fixture()
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'dashboard.sqlite'}")
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def cache() -> PageCache:
    return PageCache(ttl_seconds=300)


@pytest.fixture()
def customer_ids(engine):
    """Two customers, no invoices."""
    with engine.begin() as conn:
        conn.execute(
            customers.insert(),
            [
                {
                    "id": CUSTOMER_ID,
                    "name": "Delba de Oliveira",
                    "email": "delba@oliveira.com",
                    "image_url": "/static/customers/placeholder.svg",
                },
                {
                    "id": OTHER_CUSTOMER_ID,
                    "name": "Amy Burns",
                    "email": "amy@burns.com",
                    "image_url": "/static/customers/placeholder.svg",
                },
            ],
        )
    return CUSTOMER_ID, OTHER_CUSTOMER_ID


@pytest.fixture()
def invoice_id(engine, customer_ids) -> str:
    invoice_id = "7a1f8e0c-1c55-4f2e-9b7d-0d4a8f1a2b3c"
    with engine.begin() as conn:
        conn.execute(
            invoices.insert().values(
                id=invoice_id,
                customer_id=CUSTOMER_ID,
                amount=20348,
                status="pending",
                date=date(2022, 11, 14),
            )
        )
    return invoice_id


@pytest.fixture()
def user_id(engine) -> str:
    with engine.begin() as conn:
        return create_user(conn, "User", TEST_EMAIL, TEST_PASSWORD)


@pytest.fixture()
def client(engine, cache):
    app = create_app(DashboardSettings(secret_key="test-secret", page_cache_ttl=300))
    app.dependency_overrides[get_db_engine] = lambda: engine
    app.dependency_overrides[get_page_cache] = lambda: cache

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_client(client, user_id):
    """A client already signed in as the test user."""
    resp = client.post(
        "/login",
        data={"email": TEST_EMAIL, "password": TEST_PASSWORD},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    return client
