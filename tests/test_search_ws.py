"""
==============================================================================
Live Search WebSocket Tests
==============================================================================

Tests for the /ws/search protocol and its catalog subscription.

==============================================================================
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from starlette.websockets import WebSocketDisconnect

from dashboard.main import app
from dashboard.services.product_service import ProductService
from dashboard.websockets.search import SearchWebSocketHandler


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _names(frame: dict) -> list:
    return [p["name"] for p in frame["products"]]


class TestSearchWebSocket:
    """Tests for live search."""

    def test_requires_token(self, client: TestClient):
        with client.websocket_connect("/ws/search") as ws:
            frame = ws.receive_json()
            assert frame["type"] == "error"
            assert frame["code"] == "AUTH_REQUIRED"

            with pytest.raises(WebSocketDisconnect):
                ws.receive_json()

    def test_query_and_live_updates(
        self,
        client: TestClient,
        db: Session,
        operator_token: str,
        operator_headers: dict,
        make_product
    ):
        make_product("Blue Widget")
        make_product("Red Gadget")
        # Rows inserted directly reach the feed on the next publish
        ProductService(db, app.state.catalog_feed).publish()

        with client.websocket_connect(f"/ws/search?token={operator_token}") as ws:
            ready = ws.receive_json()
            assert ready["type"] == "ready"
            assert ready["operator"] == "owner@example.com"

            ws.send_json({"type": "query", "query": "blue"})
            first = ws.receive_json()
            assert first["type"] == "results"
            assert first["query"] == "blue"
            assert _names(first) == ["Blue Widget"]

            response = client.post(
                "/api/v1/products",
                headers=operator_headers,
                data={"name": "Blue Gizmo", "description": "A gizmo"},
                files={"image": ("photo.png", PNG_BYTES, "image/png")}
            )
            assert response.status_code == 201

            update = ws.receive_json()
            assert update["type"] == "results"
            assert update["version"] > first["version"]
            assert _names(update) == ["Blue Widget", "Blue Gizmo"]

            ws.send_json({"type": "stop"})
            with pytest.raises(WebSocketDisconnect):
                ws.receive_json()

        assert app.state.catalog_feed.subscriber_count == 0

    def test_blank_query_returns_nothing(self, client: TestClient, operator_token: str):
        with client.websocket_connect(f"/ws/search?token={operator_token}") as ws:
            ws.receive_json()

            ws.send_json({"type": "query", "query": "   "})
            frame = ws.receive_json()

            assert frame["total"] == 0
            assert frame["products"] == []

    def test_unknown_message(self, client: TestClient, operator_token: str):
        with client.websocket_connect(f"/ws/search?token={operator_token}") as ws:
            ws.receive_json()

            ws.send_json({"type": "ping"})
            frame = ws.receive_json()

            assert frame["type"] == "error"
            assert frame["code"] == "BAD_MESSAGE"

    def test_non_json_text(self, client: TestClient, operator_token: str):
        with client.websocket_connect(f"/ws/search?token={operator_token}") as ws:
            ws.receive_json()

            ws.send_text("not json")
            frame = ws.receive_json()

            assert frame["type"] == "error"
            assert frame["code"] == "BAD_MESSAGE"

            ws.send_json({"type": "stop"})
            with pytest.raises(WebSocketDisconnect):
                ws.receive_json()

        assert app.state.catalog_feed.subscriber_count == 0

    def test_binary_frame_keeps_session_alive(self, client: TestClient, operator_token: str):
        with client.websocket_connect(f"/ws/search?token={operator_token}") as ws:
            ws.receive_json()

            ws.send_bytes(b"\x00\x01")
            frame = ws.receive_json()
            assert frame["type"] == "error"
            assert frame["code"] == "BAD_MESSAGE"

            ws.send_json({"type": "query", "query": "blue"})
            assert ws.receive_json()["type"] == "results"

            ws.send_json({"type": "stop"})
            with pytest.raises(WebSocketDisconnect):
                ws.receive_json()

        assert app.state.catalog_feed.subscriber_count == 0

    def test_disconnect_mid_query_releases_subscription(
        self,
        client: TestClient,
        operator_token: str
    ):
        with client.websocket_connect(f"/ws/search?token={operator_token}") as ws:
            ws.receive_json()
            assert app.state.catalog_feed.subscriber_count == 1

            ws.send_json({"type": "query", "query": "blue"})

        assert app.state.catalog_feed.subscriber_count == 0

    def test_receiver_failure_closes_socket(
        self,
        client: TestClient,
        operator_token: str,
        monkeypatch
    ):
        async def broken_frame(self):
            raise RuntimeError("socket state corrupted")

        monkeypatch.setattr(SearchWebSocketHandler, "_receive_frame", broken_frame)

        with client.websocket_connect(f"/ws/search?token={operator_token}") as ws:
            assert ws.receive_json()["type"] == "ready"

            with pytest.raises(WebSocketDisconnect) as exc_info:
                ws.receive_json()

            assert exc_info.value.code == 1011

        assert app.state.catalog_feed.subscriber_count == 0
