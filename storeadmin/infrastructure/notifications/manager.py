"""Connection management helpers for notification websockets."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Manage active admin websocket connections grouped by viewer."""

    def __init__(self) -> None:
        self._connections: DefaultDict[str, Set[WebSocket]] = defaultdict(set)

    async def connect(self, viewer_id: str, websocket: WebSocket) -> None:
        """Accept the websocket connection and register it for ``viewer_id``."""

        await websocket.accept()
        self._connections[viewer_id].add(websocket)

    def disconnect(self, viewer_id: str, websocket: WebSocket) -> None:
        """Remove ``websocket`` from the pool for ``viewer_id``."""

        connections = self._connections.get(viewer_id)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            self._connections.pop(viewer_id, None)

    def has_connections(self) -> bool:
        return any(self._connections.values())

    async def send_to_user(self, viewer_id: str, message: dict[str, Any]) -> None:
        """Send ``message`` to every active connection for ``viewer_id``."""

        connections = list(self._connections.get(viewer_id, set()))
        for connection in connections:
            try:
                await connection.send_json(message)
            except Exception as exc:  # pragma: no cover - socket already gone
                logger.debug("Dropping websocket for %s: %s", viewer_id, exc)
                self.disconnect(viewer_id, connection)

    async def broadcast(self, message: dict[str, Any]) -> None:
        """Send ``message`` to every connected viewer."""

        for viewer_id in list(self._connections):
            await self.send_to_user(viewer_id, message)


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
