from .menu_item import MenuItem
from .order import Order, OrderStatusEnum
from .order_item import OrderItem

__all__ = [
    "MenuItem",
    "Order",
    "OrderStatusEnum",
    "OrderItem",
]
