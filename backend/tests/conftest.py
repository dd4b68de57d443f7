"""Shared test fixtures."""

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from datetime import date
from decimal import Decimal

from moolah.config import settings
from moolah.errors import Unauthenticated
from moolah.identity import Identity, IdentityProvider
from moolah.main import create_app
from moolah.models.category import CategoryType
from moolah.models.transaction import TransactionType
from moolah.services.market_service import MarketDataClient
from moolah.store.sql import SqlRecordStore

ALICE = "alice-uid"
BOB = "bob-uid"
ADMIN = "admin-uid"


class FakeIdentityProvider(IdentityProvider):
    """In-memory identity provider keyed by fixed bearer tokens."""

    def __init__(self):
        self.tokens = {
            "alice-token": Identity(uid=ALICE, email="alice@example.com"),
            "bob-token": Identity(uid=BOB, email="bob@example.com"),
            "admin-token": Identity(uid=ADMIN, email="admin@example.com", roles=frozenset({"admin"})),
        }
        self.accounts = {
            ALICE: {"display_name": "Alice", "email": "alice@example.com", "photo_url": None, "disabled": False},
        }
        self.updates = []
        self.deleted = []
        self.fail_sync = False

    def verify_token(self, token):
        try:
            return self.tokens[token]
        except KeyError:
            raise Unauthenticated("Invalid or expired token") from None

    def get_user(self, uid):
        return self.accounts.get(uid)

    def update_user(self, uid, **fields):
        if self.fail_sync:
            raise RuntimeError("identity provider is down")
        self.updates.append((uid, fields))

    def delete_user(self, uid):
        if self.fail_sync:
            raise RuntimeError("identity provider is down")
        self.deleted.append(uid)


class FakeUpstream:
    """httpx.MockTransport handler that records requests."""

    def __init__(self):
        self.handler = None
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    """Pin the settings tests depend on."""
    monkeypatch.setattr(settings, "seed_default_categories", False)
    monkeypatch.setattr(settings, "require_transaction_category", False)
    monkeypatch.setattr(settings, "budget_spent_within_period", False)
    monkeypatch.setattr(settings, "default_currency", "EUR")
    monkeypatch.setattr(settings, "default_page_size", 50)
    monkeypatch.setattr(settings, "max_page_size", 200)
    return settings


@pytest.fixture(scope="function")
def store():
    """A fresh SQL store for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    record_store = SqlRecordStore(engine=engine)
    record_store.open()

    try:
        yield record_store
    finally:
        record_store.close()


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture
def market_transport():
    """Upstream for the market data client; tests set .handler."""
    return FakeUpstream()


@pytest.fixture(scope="function")
def client(store, identity_provider, market_transport):
    """Create a test client wired to the test store and fake collaborators."""
    market_data = MarketDataClient(
        crypto_url="https://crypto.test/v1/getTop",
        exchange_rates_url="https://rates.test/v1/latest",
        crypto_api_key="test-key",
        transport=httpx.MockTransport(market_transport),
    )
    app = create_app(store=store, identity_provider=identity_provider, market_data=market_data)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def alice_headers():
    return {"Authorization": "Bearer alice-token"}


@pytest.fixture
def bob_headers():
    return {"Authorization": "Bearer bob-token"}


@pytest.fixture
def admin_headers():
    return {"Authorization": "Bearer admin-token"}


@pytest.fixture
def food_category(store):
    """Alice's top-level expense category."""
    return store.create("categories", ALICE, {
        "name": "Food",
        "name_lower": "food",
        "type": CategoryType.expense,
        "color": "#f59e0b",
        "icon": "utensils",
    })


@pytest.fixture
def salary_category(store):
    return store.create("categories", ALICE, {
        "name": "Salary",
        "name_lower": "salary",
        "type": CategoryType.income,
    })


@pytest.fixture
def sample_transaction(store, food_category):
    """Alice's grocery expense."""
    return store.create("transactions", ALICE, {
        "type": TransactionType.expense,
        "amount": Decimal("50.00"),
        "date": date(2024, 1, 15),
        "description": "Whole Foods groceries",
        "category_id": food_category["id"],
    })
