class CanteenError(Exception):
    """Base class for errors raised by the order workflow and menu catalog."""


class OrderValidationError(CanteenError, ValueError):
    """Submitted order data is incomplete or inconsistent."""


class OrderNotFoundError(CanteenError, LookupError):
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order with id={order_id} not found")


class InvalidStatusTransitionError(CanteenError):
    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"Cannot change order status from '{current.value}' to '{target.value}'")


class MenuItemNotFoundError(CanteenError, LookupError):
    def __init__(self, menu_item_id: int):
        self.menu_item_id = menu_item_id
        super().__init__(f"Menu item with id={menu_item_id} not found")


class MenuItemInUseError(CanteenError):
    def __init__(self, menu_item_id: int):
        self.menu_item_id = menu_item_id
        super().__init__(f"Menu item with id={menu_item_id} is referenced by existing orders")
