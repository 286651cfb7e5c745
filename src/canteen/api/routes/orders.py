import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.crud.order import create_order, get_orders, get_order_by_id, update_order_status, delete_order
from canteen.crud.order import get_menu_item_quantities
from canteen.db.deps import get_async_session
from canteen.exceptions import InvalidStatusTransitionError, OrderNotFoundError, OrderValidationError
from canteen.schemas.order import MenuItemQuantity, MessageResponse, OrderCreate, OrderCreated
from canteen.schemas.order import OrderRead, OrderStatusUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", response_model=OrderCreated, status_code=201)
async def create_order_endpoint(order_in: OrderCreate, db: AsyncSession = Depends(get_async_session)):
    """
    Place an order from the submitted cart lines.
    Only an acknowledgement and the new order id are returned.
    """
    try:
        order = await create_order(db, order_in)
    except OrderValidationError as e:
        logger.warning("Order rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        logger.exception("Error creating order")
        raise HTTPException(status_code=500, detail="Failed to place order.")

    return OrderCreated(message="Order placed successfully.", order_id=order.id)


@router.get("", response_model=List[OrderRead])
async def list_orders(
    status: Optional[str] = Query(None, description="Filter by status"),
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of orders"),
    offset: Optional[int] = Query(None, ge=0, description="Number of orders to skip"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Return every order with its menu items and ordered quantities.
    """
    try:
        orders = await get_orders(db, status=status, limit=limit, offset=offset)
    except OrderValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError:
        logger.exception("Error fetching orders")
        raise HTTPException(status_code=500, detail="Error fetching orders")

    return [OrderRead.from_orm_with_items(o) for o in orders]


@router.get("/stats/items", response_model=List[MenuItemQuantity])
async def get_menu_item_quantities_endpoint(
    limit: Optional[int] = Query(None, ge=1),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Total ordered quantity of each menu item across all orders.
    """
    try:
        rows = await get_menu_item_quantities(db, limit=limit)
    except SQLAlchemyError:
        logger.exception("Error fetching menu item quantities")
        raise HTTPException(status_code=500, detail="Error fetching order statistics")
    return [MenuItemQuantity(**row) for row in rows]


@router.get("/{order_id}", response_model=OrderRead)
async def get_order(
    order_id: int = Path(..., description="Order ID"),
    db: AsyncSession = Depends(get_async_session),
):
    try:
        order = await get_order_by_id(db, order_id)
    except SQLAlchemyError:
        logger.exception("Error fetching order %s", order_id)
        raise HTTPException(status_code=500, detail="Error fetching order")
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderRead.from_orm_with_items(order)


@router.put("/{order_id}/status", response_model=MessageResponse)
async def update_order_status_endpoint(
    order_in: OrderStatusUpdate,
    order_id: int = Path(..., description="Order ID"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Move an order to a new status: received -> picked -> prepared.
    """
    try:
        await update_order_status(db, order_id, order_in.status)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    except OrderValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidStatusTransitionError as e:
        logger.warning("Status change rejected for order %s: %s", order_id, e)
        raise HTTPException(status_code=409, detail=str(e))
    except SQLAlchemyError:
        logger.exception("Error updating status of order %s", order_id)
        raise HTTPException(status_code=500, detail="Error updating order status")

    return MessageResponse(message="Order status updated successfully")


@router.delete("/{order_id}", response_model=MessageResponse)
async def remove_order(order_id: int, db: AsyncSession = Depends(get_async_session)):
    """
    Delete an order and its line items.
    """
    try:
        await delete_order(db, order_id)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    except SQLAlchemyError:
        logger.exception("Error deleting order %s", order_id)
        raise HTTPException(status_code=500, detail="Error deleting order")

    return MessageResponse(message="Order deleted successfully")
