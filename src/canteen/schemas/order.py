from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from canteen.models.order import OrderStatusEnum


class OrderMenuItemRead(BaseModel):
    """A menu item as it appears inside an order, with the ordered quantity."""

    id: int
    name: str
    description: str
    price: Decimal
    quantity: int

    @classmethod
    def from_order_item(cls, item):
        return cls(
            id=item.menu_item.id,
            name=item.menu_item.name,
            description=item.menu_item.description,
            price=item.menu_item.price,
            quantity=item.quantity,
        )


class OrderRead(BaseModel):
    id: int
    status: OrderStatusEnum
    total_price: Decimal = Field(alias="totalPrice")
    created_at: datetime = Field(alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    menu_items: List[OrderMenuItemRead] = Field(default_factory=list, alias="MenuItems")

    @classmethod
    def from_orm_with_items(cls, order):
        return cls(
            id=order.id,
            status=order.status,
            total_price=order.total_price,
            created_at=order.created_at,
            updated_at=order.updated_at,
            menu_items=[OrderMenuItemRead.from_order_item(i) for i in order.items],
        )

    class Config:
        populate_by_name = True


class OrderLineCreate(BaseModel):
    # both fields are optional here so that a missing value reaches the
    # workflow and is reported as invalid item data
    item_id: Optional[int] = Field(None, alias="itemId")
    quantity: Optional[int] = None

    class Config:
        populate_by_name = True


class OrderCreate(BaseModel):
    items: List[OrderLineCreate] = Field(default_factory=list)
    total_price: Optional[Decimal] = Field(None, alias="totalPrice")

    class Config:
        populate_by_name = True


class OrderStatusUpdate(BaseModel):
    status: Optional[str] = None

    class Config:
        extra = "forbid"


class OrderCreated(BaseModel):
    message: str
    order_id: int = Field(alias="orderId")

    class Config:
        populate_by_name = True


class MessageResponse(BaseModel):
    message: str


class MenuItemQuantity(BaseModel):
    menu_item_id: int = Field(alias="menuItemId")
    name: str
    total_quantity: int = Field(alias="totalQuantity")

    class Config:
        populate_by_name = True
