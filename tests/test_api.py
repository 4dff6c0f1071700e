"""Tests for API endpoints"""
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from api.index import app
from safeer.assistant import AssistantReply
from safeer.cart import CartSessionRegistry, CartStore
from safeer.config import CART_SESSION_COOKIE
from safeer.routers.deps import get_assistant, get_db, get_sessions


@pytest.fixture
def sessions(scheduler):
    return CartSessionRegistry(store_factory=lambda: CartStore(scheduler=scheduler))


@pytest.fixture
def assistant():
    mock = Mock()
    mock.whatsapp_number = "201027381559"
    mock.reply = AsyncMock(return_value=AssistantReply(text="أهلاً يا فندم", ok=True))
    return mock


@pytest.fixture
def client(mock_database, sessions, assistant):
    """Test client with the database, sessions and assistant swapped out"""
    app.dependency_overrides[get_db] = lambda: mock_database
    app.dependency_overrides[get_sessions] = lambda: sessions
    app.dependency_overrides[get_assistant] = lambda: assistant
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def supabase_query(mock_supabase_client):
    return mock_supabase_client.table.return_value


def test_health_check(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "safeer"}


# ==================== CART ====================

def test_cookieless_reads_do_not_start_sessions(client, sessions, valid_checkout_form):
    for _ in range(5):
        response = client.get("/api/cart")
        assert response.status_code == 200
        assert response.json()["items"] == []
        assert response.json()["total"] == "100.00"
        assert CART_SESSION_COOKIE not in response.cookies

    assert client.post("/api/cart/whatsapp").json()["success"] is False
    assert client.post("/api/checkout", json=valid_checkout_form).status_code == 400
    assert client.patch("/api/cart/items/missing", json={"quantity": 2}).status_code == 404
    assert len(sessions) == 0


def test_add_item_starts_session(client, sessions):
    response = client.post("/api/cart/items", json={"title": "Boss", "price": "800"})

    assert CART_SESSION_COOKIE in response.cookies
    assert len(sessions) == 1
    assert client.get("/api/cart").json()["item_count"] == 1
    assert len(sessions) == 1


def test_unknown_cookie_is_not_registered(client, sessions):
    client.cookies.set(CART_SESSION_COOKIE, "forged-session-id")

    assert client.get("/api/cart").json()["items"] == []
    assert len(sessions) == 0


def test_nan_price_counts_as_zero(client):
    response = client.post(
        "/api/cart/items",
        content='{"title": "Sample", "price": NaN}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 201
    assert response.json()["cart"]["subtotal"] == "0.00"


def test_cart_flow(client):
    client.post("/api/cart/items", json={"title": "Sauvage", "price": "1200 ج"})
    client.post("/api/cart/items", json={"title": "Sauvage", "price": "1200 ج"})
    response = client.post("/api/cart/items", json={"title": "Boss", "price": "800"})

    assert response.status_code == 201
    cart = response.json()["cart"]
    assert len(cart["items"]) == 2
    assert cart["item_count"] == 3
    assert cart["subtotal"] == "4000.00"
    assert cart["total"] == "4100.00"
    assert cart["is_open"] is True
    assert cart["is_auto_showing"] is True


def test_update_and_remove_items(client):
    item = client.post("/api/cart/items", json={"title": "Boss", "price": "800"}).json()["item"]

    response = client.patch(f"/api/cart/items/{item['id']}", json={"quantity": 3})
    assert response.json()["item_count"] == 3

    response = client.delete(f"/api/cart/items/{item['id']}")
    assert response.json()["items"] == []

    assert client.delete(f"/api/cart/items/{item['id']}").status_code == 404
    assert client.patch("/api/cart/items/missing", json={"quantity": 2}).status_code == 404


def test_toggle(client):
    client.post("/api/cart/items", json={"title": "Boss", "price": "800"})

    assert client.post("/api/cart/toggle", json={}).json()["is_open"] is False
    body = client.post("/api/cart/toggle", json={"open": True}).json()
    assert body["is_open"] is True
    assert body["is_auto_showing"] is False


def test_whatsapp_empty_cart_warns(client):
    response = client.post("/api/cart/whatsapp")

    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["warning"]


def test_whatsapp_order_link(client):
    client.post("/api/cart/items", json={"title": "Boss", "price": "800"})

    body = client.post("/api/cart/whatsapp").json()

    assert body["success"] is True
    assert body["url"].startswith("https://wa.me/201027381559?text=")
    assert body["cart"]["is_open"] is False


def test_end_session_discards_cart(client, sessions):
    client.post("/api/cart/items", json={"title": "Boss", "price": "800"})

    assert client.delete("/api/cart/session").json() == {"success": True}
    assert len(sessions) == 0


# ==================== CATALOG ====================

def test_search(client, supabase_query, sample_service):
    supabase_query.execute.return_value = Mock(data=[sample_service])

    response = client.get("/api/search", params={"q": "sauvage"})

    assert response.status_code == 200
    results = response.json()
    assert results[0]["title"] == "Sauvage"
    assert results[0]["numeric_price"] == 1200.0
    assert results[0]["image"] == "https://cdn.example.com/sauvage-1.jpg"


def test_search_short_query(client, supabase_query):
    assert client.get("/api/search", params={"q": "s"}).json() == []
    supabase_query.execute.assert_not_called()


def test_get_service_not_found(client):
    assert client.get("/api/services/nope").status_code == 404


def test_service_inquiry(client, supabase_query, sample_service):
    supabase_query.execute.return_value = Mock(data=[sample_service])

    body = client.get("/api/services/svc-42/inquiry").json()

    assert "Sauvage" in body["message"]
    assert "/product/svc-42" in body["message"]
    assert body["url"].startswith("https://wa.me/")


# ==================== CHECKOUT ====================

def test_checkout_success(client, supabase_query, sample_order, valid_checkout_form):
    supabase_query.execute.side_effect = [Mock(data=[sample_order]), Mock(data=[])]
    client.post("/api/cart/items", json={"title": "Boss", "price": "800", "product_id": "svc-7"})

    response = client.post("/api/checkout", json=valid_checkout_form)

    assert response.status_code == 201
    assert response.json() == {
        "order_id": "order-123",
        "redirect": "/order-confirmation/order-123",
    }
    assert client.get("/api/cart").json()["items"] == []


def test_checkout_validation_errors(client):
    client.post("/api/cart/items", json={"title": "Boss", "price": "800"})

    response = client.post("/api/checkout", json={"name": "A", "phone": "12"})

    assert response.status_code == 422
    assert set(response.json()["detail"]["errors"]) == {"name", "phone", "address"}


def test_checkout_empty_cart(client, valid_checkout_form):
    assert client.post("/api/checkout", json=valid_checkout_form).status_code == 400


def test_checkout_backend_failure_keeps_cart(client, supabase_query, valid_checkout_form):
    supabase_query.execute.side_effect = Exception("connection reset")
    client.post("/api/cart/items", json={"title": "Boss", "price": "800"})

    response = client.post("/api/checkout", json=valid_checkout_form)

    assert response.status_code == 502
    assert client.get("/api/cart").json()["item_count"] == 1


def test_get_order(client, supabase_query, sample_order):
    order_item = {
        "id": "line-1",
        "order_id": "order-123",
        "product_id": "svc-42",
        "product_name": "Sauvage",
        "quantity": 2,
        "price": 1200,
    }
    supabase_query.execute.side_effect = [Mock(data=[sample_order]), Mock(data=[order_item])]

    body = client.get("/api/orders/order-123").json()

    assert body["total_amount"] == "4100.00"
    assert body["status"] == "pending"
    assert body["items"] == [
        {"product_id": "svc-42", "product_name": "Sauvage", "quantity": 2, "price": "1200.00"}
    ]


def test_get_order_not_found(client):
    assert client.get("/api/orders/missing").status_code == 404


# ==================== AI CHAT ====================

def test_chat(client, assistant):
    response = client.post("/api/ai/chat", json={"message": "  عندكم عطور؟ "})

    assert response.status_code == 200
    assert response.json() == {
        "reply_text": "أهلاً يا فندم",
        "ok": True,
        "whatsapp_url": "https://wa.me/201027381559",
    }
    assistant.reply.assert_awaited_once_with("عندكم عطور؟")


def test_chat_blank_message(client, assistant):
    assert client.post("/api/ai/chat", json={"message": "   "}).status_code == 422
    assistant.reply.assert_not_called()


def test_greeting(client):
    assert client.get("/api/ai/greeting").json()["reply_text"]
