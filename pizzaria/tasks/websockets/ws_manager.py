# pizzaria/tasks/websockets/ws_manager.py
from pizzaria.tasks.websockets.connection_manager import ConnectionManager

order_ws_manager = ConnectionManager("orders")
restaurant_ws_manager = ConnectionManager("restaurant")
