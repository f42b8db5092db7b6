"""
==============================================================================
API Integration Tests
==============================================================================

Tests for REST API endpoints.

==============================================================================
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from dashboard.db.models import Operator


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _create_product(client: TestClient, headers: dict, name: str = "Blue Widget", **fields):
    data = {"name": name, "description": f"{name} description", **fields}
    return client.post(
        "/api/v1/products",
        headers=headers,
        data=data,
        files={"image": ("photo.png", PNG_BYTES, "image/png")}
    )


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client: TestClient):
        """Test health check returns status."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] in ["healthy", "degraded"]
        assert data["components"]["catalog"] == "healthy"

    def test_readiness_probe(self, client: TestClient):
        """Test readiness probe."""
        response = client.get("/api/v1/health/ready")
        assert response.status_code == 200
        assert response.json()["ready"] is True

    def test_liveness_probe(self, client: TestClient):
        """Test liveness probe."""
        response = client.get("/api/v1/health/live")
        assert response.status_code == 200
        assert response.json()["alive"] is True


class TestAuthEndpoints:
    """Tests for authentication endpoints."""

    def test_login_success(self, client: TestClient, operator: Operator):
        """Test successful login."""
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "Owner@Example.com", "password": "owner123"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert "access_token" in data
        assert "refresh_token" in data
        assert data["operator"]["email"] == operator.email

    def test_login_invalid_password(self, client: TestClient, operator: Operator):
        """Test login with invalid password."""
        response = client.post(
            "/api/v1/auth/login",
            json={"email": operator.email, "password": "wrongpassword"}
        )
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"

    def test_login_unknown_email(self, client: TestClient):
        """Test login with nonexistent operator."""
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": "password123"}
        )
        assert response.status_code == 401

    def test_default_operator_created_on_startup(self, client: TestClient):
        """The configured default account can sign in on a fresh database."""
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "admin@example.com", "password": "admin123"}
        )
        assert response.status_code == 200

    def test_register(self, client: TestClient):
        """Test self-registration signs the new operator in."""
        response = client.post(
            "/api/v1/auth/register",
            json={"email": "new@shop.rw", "password": "secret1", "display_name": "New"}
        )
        assert response.status_code == 201
        data = response.json()
        assert data["operator"]["email"] == "new@shop.rw"

        me = client.get(
            "/api/v1/auth/me",
            headers={"Authorization": f"Bearer {data['access_token']}"}
        )
        assert me.json()["operator"]["display_name"] == "New"

    def test_register_duplicate(self, client: TestClient, operator: Operator):
        """Test registering an existing email."""
        response = client.post(
            "/api/v1/auth/register",
            json={"email": operator.email, "password": "secret1"}
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "EMAIL_EXISTS"

    def test_register_invalid_email(self, client: TestClient):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": "not-an-email", "password": "secret1"}
        )
        assert response.status_code == 422

    def test_refresh(self, client: TestClient, operator: Operator):
        """Test a refresh token yields a new pair; an access token does not."""
        login = client.post(
            "/api/v1/auth/login",
            json={"email": operator.email, "password": "owner123"}
        ).json()

        response = client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": login["refresh_token"]}
        )
        assert response.status_code == 200

        response = client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": login["access_token"]}
        )
        assert response.status_code == 401

    def test_get_current_operator(self, client: TestClient, operator_headers: dict, operator: Operator):
        """Test getting current operator info."""
        response = client.get("/api/v1/auth/me", headers=operator_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["operator"]["email"] == operator.email

    def test_get_current_operator_no_token(self, client: TestClient):
        """Test getting current operator without token."""
        response = client.get("/api/v1/auth/me")
        assert response.status_code == 401

    def test_change_password(self, client: TestClient, operator_headers: dict, operator: Operator):
        response = client.put(
            "/api/v1/auth/change-password",
            headers=operator_headers,
            json={"current_password": "owner123", "new_password": "newpass1"}
        )
        assert response.status_code == 200

        response = client.post(
            "/api/v1/auth/login",
            json={"email": operator.email, "password": "newpass1"}
        )
        assert response.status_code == 200

    def test_logout(self, client: TestClient, operator_headers: dict):
        response = client.post("/api/v1/auth/logout", headers=operator_headers)
        assert response.status_code == 200
        assert response.json()["success"] is True


class TestProductEndpoints:
    """Tests for product catalog endpoints."""

    def test_requires_auth(self, client: TestClient):
        assert client.get("/api/v1/products").status_code == 401

    def test_create_and_fetch(self, client: TestClient, operator_headers: dict):
        """Test creating a product with an image upload."""
        response = _create_product(
            client, operator_headers, price="12.5", stock_quantity="4", category="accessory"
        )
        assert response.status_code == 201
        product = response.json()["product"]
        assert product["category"] == "accessory"
        assert product["price"] == 12.5
        assert product["show"] is True
        assert product["image"].startswith("/media/products/Blue_Widget_")

        fetched = client.get(f"/api/v1/products/{product['id']}", headers=operator_headers)
        assert fetched.json()["product"]["name"] == "Blue Widget"

        image = client.get(product["image"])
        assert image.status_code == 200
        assert image.content == PNG_BYTES

    def test_create_defaults_category(self, client: TestClient, operator_headers: dict):
        product = _create_product(client, operator_headers).json()["product"]
        assert product["category"] == "lighting-group"

    def test_create_without_image(self, client: TestClient, operator_headers: dict):
        response = client.post(
            "/api/v1/products",
            headers=operator_headers,
            data={"name": "Lamp", "description": "Light"}
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "IMAGE_REQUIRED"

    def test_create_without_name(self, client: TestClient, operator_headers: dict):
        response = client.post(
            "/api/v1/products",
            headers=operator_headers,
            data={"description": "Light"},
            files={"image": ("photo.png", PNG_BYTES, "image/png")}
        )
        assert response.status_code == 400
        assert response.json()["error"]["details"]["field"] == "name"

    def test_create_negative_price(self, client: TestClient, operator_headers: dict):
        response = _create_product(client, operator_headers, price="-1")
        assert response.status_code == 422

    def test_create_unsupported_image(self, client: TestClient, operator_headers: dict):
        response = client.post(
            "/api/v1/products",
            headers=operator_headers,
            data={"name": "Lamp", "description": "Light"},
            files={"image": ("notes.txt", b"hello", "text/plain")}
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_IMAGE"

    def test_list_and_filter(self, client: TestClient, operator_headers: dict):
        _create_product(client, operator_headers, "Lamp")
        _create_product(client, operator_headers, "Trunk", category="cable-trunking")

        everything = client.get("/api/v1/products?category=all", headers=operator_headers).json()
        assert [p["name"] for p in everything["products"]] == ["Lamp", "Trunk"]

        filtered = client.get(
            "/api/v1/products", params={"category": "cable-trunking"}, headers=operator_headers
        ).json()
        assert filtered["category"] == "cable-trunking"
        assert filtered["total"] == 1

        unknown = client.get("/api/v1/products?category=garden", headers=operator_headers)
        assert unknown.status_code == 400

    def test_categories(self, client: TestClient, operator_headers: dict):
        data = client.get("/api/v1/products/categories", headers=operator_headers).json()
        assert data["default"] == "lighting-group"
        assert {"value": "lighting-group", "label": "Lighting Group"} in data["categories"]
        assert len(data["categories"]) == 8

    def test_update_partial(self, client: TestClient, operator_headers: dict):
        product = _create_product(client, operator_headers).json()["product"]

        response = client.patch(
            f"/api/v1/products/{product['id']}",
            headers=operator_headers,
            data={"stock_quantity": "20"}
        )
        assert response.status_code == 200
        updated = response.json()["product"]
        assert updated["stock_quantity"] == 20
        assert updated["name"] == product["name"]
        assert updated["image"] == product["image"]

    def test_toggle_visibility(self, client: TestClient, operator_headers: dict):
        product = _create_product(client, operator_headers).json()["product"]

        response = client.post(
            f"/api/v1/products/{product['id']}/toggle-visibility", headers=operator_headers
        )
        assert response.json()["product"]["show"] is False

    def test_delete(self, client: TestClient, operator_headers: dict):
        product = _create_product(client, operator_headers).json()["product"]

        response = client.delete(f"/api/v1/products/{product['id']}", headers=operator_headers)
        assert response.status_code == 200

        missing = client.get(f"/api/v1/products/{product['id']}", headers=operator_headers)
        assert missing.status_code == 404
        assert client.get(product["image"]).status_code == 404

    def test_search(self, client: TestClient, operator_headers: dict):
        for name in ("Blue Widget", "Red Gadget", "Blue Gizmo"):
            _create_product(client, operator_headers, name)

        data = client.get("/api/v1/products/search?q=blue", headers=operator_headers).json()
        assert data["query"] == "blue"
        assert [p["name"] for p in data["products"]] == ["Blue Widget", "Blue Gizmo"]

        empty = client.get("/api/v1/products/search?q=", headers=operator_headers).json()
        assert empty["total"] == 0


class TestOrderEndpoints:
    """Tests for order endpoints."""

    def test_list_tabs(self, client: TestClient, operator_headers: dict, make_order):
        make_order()
        make_order(paid=True)

        processing = client.get("/api/v1/orders", headers=operator_headers).json()
        assert processing["tab"] == "processing"
        assert processing["total"] == 1
        assert processing["orders"][0]["items"][0]["product_name"] == "Blue Widget"

        everything = client.get("/api/v1/orders?tab=all", headers=operator_headers).json()
        assert everything["total"] == 2

        assert client.get("/api/v1/orders?tab=bogus", headers=operator_headers).status_code == 422

    def test_toggle_paid_moves_tab(self, client: TestClient, operator_headers: dict, make_order):
        order = make_order()

        response = client.post(f"/api/v1/orders/{order.id}/toggle/paid", headers=operator_headers)
        assert response.status_code == 200
        assert response.json()["order"]["tab"] == "completed"

        response = client.post(f"/api/v1/orders/{order.id}/toggle/rejected", headers=operator_headers)
        assert response.json()["order"]["tab"] == "rejected"

    def test_patch_status(self, client: TestClient, operator_headers: dict, make_order):
        order = make_order()

        response = client.patch(
            f"/api/v1/orders/{order.id}", headers=operator_headers, json={"accepted": True}
        )
        assert response.json()["order"]["accepted"] is True

        empty = client.patch(f"/api/v1/orders/{order.id}", headers=operator_headers, json={})
        assert empty.status_code == 400

    def test_missing_order(self, client: TestClient, operator_headers: dict):
        response = client.get("/api/v1/orders/nope", headers=operator_headers)
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ORDER_NOT_FOUND"


class TestOverviewEndpoints:
    """Tests for overview endpoints."""

    def test_sales(self, client: TestClient, operator_headers: dict, make_order):
        make_order(paid=True, amount=10.0, ordered_at=datetime(2024, 3, 2))
        make_order(paid=True, amount=15.0, ordered_at=datetime(2024, 1, 9))

        data = client.get(
            "/api/v1/overview/sales?timeframe=monthly", headers=operator_headers
        ).json()
        assert data["labels"] == ["January", "March"]
        assert data["data"] == [15.0, 10.0]

    def test_categories(self, client: TestClient, operator_headers: dict, make_product):
        make_product("Lamp")

        data = client.get("/api/v1/overview/categories", headers=operator_headers).json()
        assert data["labels"] == ["lighting-group"]
        assert data["background_colors"] == ["rgba(255, 99, 132, 0.8)"]

    def test_summary(self, client: TestClient, operator_headers: dict):
        data = client.get("/api/v1/overview/summary", headers=operator_headers).json()
        assert data["products_total"] == 0
        assert data["orders"]["all"] == 0


class TestFeedbackEndpoints:
    """Tests for suggestions and advertisements."""

    def test_suggestion(self, client: TestClient, operator_headers: dict, operator: Operator):
        response = client.post(
            "/api/v1/feedback/suggestions", headers=operator_headers, json={"text": "More charts"}
        )
        assert response.status_code == 201
        assert response.json()["suggestion"]["submitted_by"] == operator.email

    def test_blank_suggestion(self, client: TestClient, operator_headers: dict):
        response = client.post(
            "/api/v1/feedback/suggestions", headers=operator_headers, json={"text": "   "}
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "EMPTY_SUGGESTION"

    def test_advertisements(self, client: TestClient, operator_headers: dict):
        response = client.post(
            "/api/v1/feedback/advertisements",
            headers=operator_headers,
            json={
                "title": "Holiday sale",
                "description": "10% off lighting",
                "start_date": "2024-12-01",
                "end_date": "2024-12-31",
                "budget": 50000
            }
        )
        assert response.status_code == 201

        data = client.get("/api/v1/feedback/advertisements", headers=operator_headers).json()
        assert data["total"] == 1
        assert data["advertisements"][0]["title"] == "Holiday sale"

    @pytest.mark.parametrize("payload", [
        {"title": "Sale", "budget": -5},
        {"title": "Sale", "start_date": "2024-12-31", "end_date": "2024-12-01"},
        {"title": "   "},
    ])
    def test_invalid_advertisement(self, client: TestClient, operator_headers: dict, payload: dict):
        response = client.post(
            "/api/v1/feedback/advertisements", headers=operator_headers, json=payload
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_ADVERTISEMENT"


class TestSettingsEndpoints:
    """Tests for operator settings."""

    def test_defaults(self, client: TestClient, operator_headers: dict):
        data = client.get("/api/v1/settings", headers=operator_headers).json()
        assert data["settings"] == {
            "notifications": True,
            "dark_mode": False,
            "language": "en",
            "currency": "RWF",
        }

    def test_update(self, client: TestClient, operator_headers: dict):
        response = client.put(
            "/api/v1/settings", headers=operator_headers, json={"language": "fr", "currency": "USD"}
        )
        settings = response.json()["settings"]
        assert settings["language"] == "fr"
        assert settings["currency"] == "USD"
        assert settings["notifications"] is True

        bad = client.put("/api/v1/settings", headers=operator_headers, json={"language": "de"})
        assert bad.status_code == 422

    def test_toggle(self, client: TestClient, operator_headers: dict):
        response = client.post("/api/v1/settings/toggle/dark_mode", headers=operator_headers)
        assert response.json()["settings"]["dark_mode"] is True

        response = client.post("/api/v1/settings/toggle/language", headers=operator_headers)
        assert response.status_code == 400
