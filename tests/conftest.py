"""Pytest configuration and fixtures"""
import os
from unittest.mock import AsyncMock, Mock

import pytest

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ.setdefault("GROQ_API_KEY", "test_groq_key")
os.environ.setdefault("LOG_LEVEL", "WARNING")


class FakeTimer:
    """Stands in for an event-loop TimerHandle."""

    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.fired = True
        self.callback()


class FakeScheduler:
    """Records scheduled callbacks instead of waiting for them."""

    def __init__(self):
        self.timers = []

    def __call__(self, delay, callback):
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self):
        return [t for t in self.timers if not t.cancelled and not t.fired]


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def cart(scheduler):
    """Cart store with the default 100 shipping fee and a fake timer."""
    from decimal import Decimal
    from safeer.cart import CartStore

    return CartStore(shipping_fee=Decimal("100"), scheduler=scheduler)


@pytest.fixture
def mock_supabase_client():
    """Mock async Supabase client: every builder returns the same query mock."""
    client = Mock()

    query = Mock()
    for method in ("select", "insert", "update", "delete", "eq", "or_", "order", "limit", "ilike"):
        getattr(query, method).return_value = query
    query.execute = AsyncMock(return_value=Mock(data=[]))

    client.table.return_value = query
    return client


@pytest.fixture
def mock_database(mock_supabase_client):
    """Database facade over the mocked client"""
    from safeer.services.database import Database

    return Database(mock_supabase_client)


@pytest.fixture
def sample_category():
    return {
        "id": "cat-1",
        "name": "عطور رجالي",
        "description": "Men's fragrances",
        "image_url": None,
        "created_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def sample_service(sample_category):
    """Sample catalog row with embedded category and gallery"""
    return {
        "id": "svc-42",
        "title": "Sauvage",
        "description": "Dior Sauvage inspired",
        "price": "1200 ج",
        "sale_price": None,
        "image_url": "https://cdn.example.com/sauvage.jpg",
        "category_id": "cat-1",
        "category": sample_category,
        "product_images": [{"image_url": "https://cdn.example.com/sauvage-1.jpg"}],
        "created_at": "2025-01-02T00:00:00Z",
    }


@pytest.fixture
def sample_order():
    return {
        "id": "order-123",
        "customer_name": "Ahmed Ali",
        "customer_phone": "01027381559",
        "customer_address": "12 Tahrir Street, Cairo",
        "notes": None,
        "payment_method": "cashOnDelivery",
        "total_amount": 4100.0,
        "status": "pending",
        "created_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def valid_checkout_form():
    return {
        "name": "Ahmed Ali",
        "phone": "+20 102 738 1559",
        "address": "12 Tahrir Street, Cairo",
        "notes": "Call before delivery",
        "payment_method": "cashOnDelivery",
    }
