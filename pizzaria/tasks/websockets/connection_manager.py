# pizzaria/tasks/websockets/connection_manager.py
import logging
from collections import defaultdict
from typing import Any, Dict, List

from fastapi import WebSocket


class ConnectionManager:
    """Mantém os sockets abertos por canal e distribui mensagens JSON."""

    def __init__(self, name: str):
        self.name = name
        self.active_connections: Dict[str, List[WebSocket]] = defaultdict(list)

    async def connect(self, websocket: WebSocket, channel: str = "all"):
        await websocket.accept()
        self.active_connections[channel].append(websocket)
        logging.info(f"WEBSOCKET >>> [{self.name}] conexão aberta no canal '{channel}'")

    def disconnect(self, websocket: WebSocket, channel: str = "all"):
        connections = self.active_connections.get(channel, [])
        if websocket in connections:
            connections.remove(websocket)
        if not connections:
            self.active_connections.pop(channel, None)
        logging.info(f"WEBSOCKET >>> [{self.name}] conexão encerrada no canal '{channel}'")

    def count(self, channel: str = "all") -> int:
        return len(self.active_connections.get(channel, []))

    async def broadcast(self, message: Dict[str, Any], channel: str = "all"):
        dead: List[WebSocket] = []
        for connection in list(self.active_connections.get(channel, [])):
            try:
                await connection.send_json(message)
            except Exception as e:
                logging.warning(f"WEBSOCKET >>> [{self.name}] falha ao enviar, removendo conexão -> {e}")
                dead.append(connection)

        for connection in dead:
            self.disconnect(connection, channel)
