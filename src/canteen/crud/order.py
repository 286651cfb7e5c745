import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select, func, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from canteen.config import settings
from canteen.db.session import transaction
from canteen.exceptions import OrderNotFoundError, OrderValidationError
from canteen.models import Order, OrderItem, MenuItem, OrderStatusEnum
from canteen.schemas.order import OrderCreate, OrderLineCreate
from canteen.status import parse_status, validate_transition

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
# largest value the Numeric(10, 2) price columns hold
MAX_AMOUNT = Decimal("99999999.99")
MAX_LINE_QUANTITY = 10_000


def _collect_quantities(lines: Iterable[OrderLineCreate]) -> Dict[int, int]:
    """
    Map menu item id -> ordered quantity, summing lines that repeat an item.
    Raises OrderValidationError on the first line without an item id or quantity.
    """
    quantities: Dict[int, int] = {}
    for line in lines:
        if not line.item_id or not line.quantity:
            raise OrderValidationError("Invalid item data")
        if line.quantity < 1:
            raise OrderValidationError(f"Invalid item data: quantity for item {line.item_id} must be at least 1")
        quantities[line.item_id] = quantities.get(line.item_id, 0) + line.quantity
        if quantities[line.item_id] > MAX_LINE_QUANTITY:
            raise OrderValidationError(
                f"Invalid item data: quantity for item {line.item_id} must not exceed {MAX_LINE_QUANTITY}"
            )
    return quantities


def _to_amount(value: Decimal, label: str) -> Decimal:
    """Round to cents, rejecting values the price columns cannot store."""
    try:
        amount = value.quantize(CENT)
    except InvalidOperation:
        raise OrderValidationError(f"{label} is out of range") from None
    if not amount.is_finite() or amount > MAX_AMOUNT:
        raise OrderValidationError(f"{label} is out of range")
    return amount


def _orders_query():
    return (
        select(Order)
        .options(selectinload(Order.items).selectinload(OrderItem.menu_item))
        .execution_options(populate_existing=True)
    )


async def create_order(
    db: AsyncSession,
    order_in: OrderCreate,
    verify_total: Optional[bool] = None,
) -> Order:
    """
    Create an order and its lines in one transaction.

    The caller's totalPrice is stored as given unless it is omitted, in which
    case the total is computed from catalog prices. With ``verify_total``
    (defaults to the VERIFY_TOTAL_PRICE setting) a mismatching total is rejected.
    """
    if not order_in.items:
        raise OrderValidationError("Order must contain at least one item")
    quantities = _collect_quantities(order_in.items)

    total_in = order_in.total_price
    if total_in is not None and total_in.is_finite() and total_in < 0:
        raise OrderValidationError("Total price must not be negative")
    if verify_total is None:
        verify_total = settings.VERIFY_TOTAL_PRICE

    async with transaction(db):
        result = await db.execute(select(MenuItem).where(MenuItem.id.in_(list(quantities))))
        menu_items = {m.id: m for m in result.scalars().all()}

        missing = sorted(set(quantities) - set(menu_items))
        if missing:
            raise OrderValidationError(
                "Invalid item data: unknown menu item id(s) " + ", ".join(str(i) for i in missing)
            )

        computed_total = _to_amount(
            sum(
                (Decimal(menu_items[item_id].price) * qty for item_id, qty in quantities.items()),
                Decimal("0"),
            ),
            "Order total",
        )

        if order_in.total_price is None:
            total_price = computed_total
        else:
            total_price = _to_amount(order_in.total_price, "Total price")
            if verify_total and total_price != computed_total:
                raise OrderValidationError(
                    f"Total price {total_price} does not match menu prices ({computed_total})"
                )

        order = Order(status=OrderStatusEnum.received, total_price=total_price)
        order.items = [
            OrderItem(menu_item_id=item_id, quantity=qty, price=menu_items[item_id].price)
            for item_id, qty in quantities.items()
        ]
        db.add(order)
        await db.flush()

    logger.info("Order %s placed: %d line(s), total %s", order.id, len(quantities), total_price)
    return order


async def get_orders(
    db: AsyncSession,
    status: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> List[Order]:
    """
    Return orders with their lines and menu items, in creation order.
    Without arguments every order is returned.
    """
    stmt = _orders_query().order_by(Order.id)

    if status:
        stmt = stmt.where(Order.status == parse_status(status))
    if offset:
        stmt = stmt.offset(offset)
    if limit:
        stmt = stmt.limit(limit)

    result = await db.execute(stmt)
    return list(result.scalars().unique().all())


async def get_order_by_id(db: AsyncSession, order_id: int) -> Optional[Order]:
    result = await db.execute(_orders_query().where(Order.id == order_id))
    return result.scalars().unique().first()


async def update_order_status(db: AsyncSession, order_id: int, status: Optional[str]) -> Order:
    """
    Move an order to ``status``. The order must exist and the move must be an
    allowed transition.
    """
    async with transaction(db):
        order = await db.get(Order, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        target = parse_status(status)
        previous = order.status
        validate_transition(previous, target)
        order.status = target

    logger.info("Order %s status: %s -> %s", order_id, previous.value, target.value)
    return order


async def delete_order(db: AsyncSession, order_id: int) -> None:
    """Delete an order together with its lines."""
    async with transaction(db):
        order = await get_order_by_id(db, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        await db.delete(order)

    logger.info("Order %s deleted", order_id)


async def get_menu_item_quantities(db: AsyncSession, limit: Optional[int] = None) -> List[dict]:
    """
    Total ordered quantity per menu item across all orders, largest first.
    """
    stmt = (
        select(
            MenuItem.id.label("menu_item_id"),
            MenuItem.name.label("name"),
            func.sum(OrderItem.quantity).label("total_quantity"),
        )
        .join(MenuItem, MenuItem.id == OrderItem.menu_item_id)
        .group_by(MenuItem.id, MenuItem.name)
        .order_by(desc("total_quantity"), MenuItem.id)
    )
    if limit:
        stmt = stmt.limit(limit)

    result = await db.execute(stmt)
    return [
        {
            "menu_item_id": row.menu_item_id,
            "name": row.name,
            "total_quantity": int(row.total_quantity or 0),
        }
        for row in result.all()
    ]
