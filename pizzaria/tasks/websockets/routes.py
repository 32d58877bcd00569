# pizzaria/tasks/websockets/routes.py
from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect, status
from sqlmodel import Session

from pizzaria.auth.auth import AuthRouter
from pizzaria.database.connection import engine
from pizzaria.tasks.websockets.notifications import STAFF_CHANNEL, tracking_channel
from pizzaria.tasks.websockets.ws_manager import order_ws_manager, restaurant_ws_manager

router = APIRouter()
auth = AuthRouter()


def _is_staff_token(token: str) -> bool:
    if not token:
        return False
    with Session(engine) as session:
        try:
            user = auth.user_from_token(token, session)
        except HTTPException:
            return False
        return user.is_employee


async def _keep_open(websocket: WebSocket, manager, channel: str):
    await manager.connect(websocket, channel)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        manager.disconnect(websocket, channel)


@router.websocket("/ws/orders")
async def websocket_staff_orders(websocket: WebSocket, token: str = ""):
    if not _is_staff_token(token):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    await _keep_open(websocket, order_ws_manager, STAFF_CHANNEL)


@router.websocket("/ws/orders/{order_id}")
async def websocket_order_tracking(websocket: WebSocket, order_id: int):
    await _keep_open(websocket, order_ws_manager, tracking_channel(order_id))


@router.websocket("/ws/restaurant")
async def websocket_restaurant(websocket: WebSocket):
    await _keep_open(websocket, restaurant_ws_manager, "all")
