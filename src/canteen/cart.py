"""
Client-side cart.

A cart collects (menu item, quantity) pairs before an order is placed. It is a
plain value owned by whoever builds the order; nothing is persisted until
``to_order()`` is submitted to the order workflow.
"""
from decimal import Decimal
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, Field

from canteen.schemas.order import OrderCreate, OrderLineCreate


class Cart(BaseModel):
    """Menu item id -> quantity, in the order items were first added"""
    lines: Dict[int, int] = Field(default_factory=dict, description="Cart lines")

    def __len__(self) -> int:
        return len(self.lines)

    def __bool__(self) -> bool:
        return bool(self.lines)

    def add(self, item_id: int, quantity: int = 1) -> None:
        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        self.lines[item_id] = self.lines.get(item_id, 0) + quantity

    def set_quantity(self, item_id: int, quantity: int) -> None:
        """Set the quantity of an item; zero or less removes it."""
        if quantity <= 0:
            self.remove(item_id)
        else:
            self.lines[item_id] = quantity

    def remove(self, item_id: int) -> bool:
        return self.lines.pop(item_id, None) is not None

    def clear(self) -> None:
        self.lines.clear()

    def total(self, prices: Mapping[int, Decimal]) -> Decimal:
        """Sum of price * quantity using ``prices`` (menu item id -> unit price)."""
        total = sum(
            (Decimal(prices[item_id]) * qty for item_id, qty in self.lines.items()),
            Decimal("0"),
        )
        return total.quantize(Decimal("0.01"))

    def to_order(self, prices: Optional[Mapping[int, Decimal]] = None) -> OrderCreate:
        """
        Build the order-creation payload. With ``prices`` the cart total is sent
        as totalPrice, otherwise the server computes it.
        """
        return OrderCreate(
            items=[OrderLineCreate(item_id=item_id, quantity=qty) for item_id, qty in self.lines.items()],
            total_price=self.total(prices) if prices is not None else None,
        )
