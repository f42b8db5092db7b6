"""
==============================================================================
Live Search WebSocket Module
==============================================================================

Fuzzy product search that stays current while the catalog changes.

Protocol:
---------
1. Client connects with JWT token as query parameter
2. Server answers {"type": "ready", "operator", "version"}
3. Client sends {"type": "query", "query": "..."} whenever the text changes
4. Server sends {"type": "results", "query", "version", "total", "products"}
   after every query and, once a query is set, after every catalog publish
5. Client sends {"type": "stop"} (or disconnects) to end the session

Malformed frames (binary, non-JSON text, unknown types) are answered with a
BAD_MESSAGE error and the session continues. The catalog subscription is
released however the session ends.

The matcher is re-run over the whole snapshot each time; nothing is cached
between frames.

==============================================================================
"""

import asyncio
import json
import logging
from typing import Optional, Tuple

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Query

from dashboard.config import get_settings
from dashboard.db.database import get_database_manager
from dashboard.db.models import Operator
from dashboard.core.exceptions import AppException
from dashboard.core.dependencies import AuthenticationManager
from dashboard.core.security import get_security_manager
from dashboard.catalog.feed import CatalogFeed
from dashboard.catalog.models import CatalogSnapshot
from dashboard.search.matcher import ProductMatcher


# Module logger
logger = logging.getLogger(__name__)

router = APIRouter()

Event = Tuple[str, object]


class SearchWebSocketHandler:
    """
    Handler for live search WebSocket connections.

    Holds one catalog subscription for the lifetime of the socket and
    answers each query against the latest snapshot.
    """

    def __init__(self, websocket: WebSocket, feed: CatalogFeed):
        self._websocket = websocket
        self._feed = feed
        self._matcher = ProductMatcher(get_settings().search_similarity_threshold)
        self._operator: Optional[Operator] = None
        self._snapshot: CatalogSnapshot = feed.snapshot()
        self._query: Optional[str] = None

    async def authenticate(self, token: Optional[str]) -> bool:
        """
        Authenticate operator from token.

        The session is only held for the lookup, not for the socket lifetime.
        """
        try:
            with get_database_manager().session_scope() as db:
                auth = AuthenticationManager(get_security_manager(), db)
                self._operator = auth.authenticate_from_token(token, "access")
        except AppException as e:
            logger.warning(f"Live search auth failed: {e.code}")
            return False
        return True

    async def send_error(self, message: str, code: str = "ERROR") -> None:
        """Send error message to client."""
        await self._websocket.send_json({
            "type": "error",
            "code": code,
            "message": message
        })

    async def send_results(self) -> None:
        """Match the current query against the current snapshot."""
        query = self._query or ""
        matched = self._matcher.match(query, self._snapshot.products)

        await self._websocket.send_json({
            "type": "results",
            "query": query,
            "version": self._snapshot.version,
            "total": len(matched),
            "products": [product.model_dump(mode="json") for product in matched]
        })

    async def _receive_frame(self) -> Tuple[Optional[object], Optional[str]]:
        """
        Read one client frame.

        Returns:
            Tuple of (decoded JSON, error message)

        Raises:
            WebSocketDisconnect: If the client went away
        """
        message = await self._websocket.receive()
        if message["type"] == "websocket.disconnect":
            raise WebSocketDisconnect(message.get("code", 1000))

        text = message.get("text")
        if text is None:
            return None, "Frames must be JSON text, not binary"

        try:
            return json.loads(text), None
        except ValueError:
            return None, "Frames must be JSON objects"

    async def _receive(self, queue: "asyncio.Queue[Event]") -> None:
        """Forward client frames into the event queue."""
        try:
            while True:
                data, error = await self._receive_frame()
                if error:
                    await queue.put(("error", error))
                    continue

                kind = data.get("type") if isinstance(data, dict) else None

                if kind == "query":
                    await queue.put(("query", str(data.get("query") or "")))
                elif kind == "stop":
                    await queue.put(("stop", None))
                    return
                else:
                    await queue.put(("error", f"Unknown message type: {kind}"))
        except WebSocketDisconnect:
            await queue.put(("disconnect", None))
        except Exception as e:
            logger.error(f"❌ Live search receiver failed: {e}")
            await queue.put(("abort", e))

    async def run(self, token: Optional[str]) -> None:
        """Main handler loop."""
        await self._websocket.accept()
        logger.info("🔎 Live search WebSocket connected")

        if not await self.authenticate(token):
            await self.send_error("Authentication required", "AUTH_REQUIRED")
            await self._websocket.close()
            return

        logger.info(f"✅ Operator authenticated: {self._operator.email}")

        loop = asyncio.get_running_loop()
        queue: "asyncio.Queue[Event]" = asyncio.Queue()

        def on_snapshot(snapshot: CatalogSnapshot) -> None:
            # Publishers may run outside this event loop
            loop.call_soon_threadsafe(queue.put_nowait, ("snapshot", snapshot))

        stopped = False
        aborted = False
        with self._feed.subscription(on_snapshot):
            receiver = asyncio.create_task(self._receive(queue))
            try:
                await self._websocket.send_json({
                    "type": "ready",
                    "operator": self._operator.email,
                    "version": self._snapshot.version
                })

                while True:
                    kind, payload = await queue.get()

                    if kind == "snapshot":
                        if payload.version < self._snapshot.version:
                            continue
                        self._snapshot = payload
                        if self._query is not None:
                            await self.send_results()
                    elif kind == "query":
                        self._query = payload
                        await self.send_results()
                    elif kind == "error":
                        await self.send_error(str(payload), "BAD_MESSAGE")
                    elif kind == "stop":
                        logger.info("🛑 Client requested stop")
                        stopped = True
                        break
                    elif kind == "abort":
                        aborted = True
                        break
                    else:
                        logger.info("🔎 Client disconnected")
                        break

            except WebSocketDisconnect:
                logger.info("🔎 Client disconnected")
            finally:
                receiver.cancel()

        if stopped:
            await self._websocket.close()
        elif aborted:
            await self._websocket.close(code=1011)
        logger.info("✅ Live search WebSocket closed")


@router.websocket("/ws/search")
async def websocket_search(
    websocket: WebSocket,
    token: str = Query(None)
):
    """Live fuzzy product search via WebSocket."""
    handler = SearchWebSocketHandler(websocket, websocket.app.state.catalog_feed)
    await handler.run(token)
