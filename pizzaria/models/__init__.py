# pizzaria/models/__init__.py

from .user.user import User
from .user.role import UserRoleAssignment
from .product.pizza import Pizza
from .product.beverage import Beverage
from .product.dessert import Dessert
from .product.extras import Crust, Addon
from .cart.cart import Cart
from .cart.cart_item import CartItem
from .order.order import Order
from .company.restaurant_settings import RestaurantSettings
from .review import Review
