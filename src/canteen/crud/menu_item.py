import logging
from typing import List

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.db.session import transaction
from canteen.exceptions import MenuItemInUseError, MenuItemNotFoundError
from canteen.models import MenuItem, OrderItem
from canteen.schemas.menu_item import MenuItemCreate, MenuItemUpdate

logger = logging.getLogger(__name__)


async def get_menu_items(db: AsyncSession) -> List[MenuItem]:
    result = await db.execute(select(MenuItem).order_by(MenuItem.id))
    return list(result.scalars().all())


async def create_menu_item(db: AsyncSession, item_in: MenuItemCreate) -> MenuItem:
    async with transaction(db):
        item = MenuItem(name=item_in.name, description=item_in.description, price=item_in.price)
        db.add(item)
    # load server-side defaults (created_at / updated_at)
    await db.refresh(item)
    logger.info("Menu item %s created: %s", item.id, item.name)
    return item


async def update_menu_item(db: AsyncSession, menu_item_id: int, item_in: MenuItemUpdate) -> MenuItem:
    async with transaction(db):
        item = await db.get(MenuItem, menu_item_id)
        if item is None:
            raise MenuItemNotFoundError(menu_item_id)

        for key, value in item_in.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(item, key, value)

    logger.info("Menu item %s updated", menu_item_id)
    return item


async def delete_menu_item(db: AsyncSession, menu_item_id: int) -> None:
    """
    Delete a menu item. Items still referenced by order lines are kept,
    since orders never lose their lines.
    """
    async with transaction(db):
        item = await db.get(MenuItem, menu_item_id)
        if item is None:
            raise MenuItemNotFoundError(menu_item_id)

        references = await db.scalar(
            select(func.count(OrderItem.id)).where(OrderItem.menu_item_id == menu_item_id)
        )
        if references:
            raise MenuItemInUseError(menu_item_id)

        await db.delete(item)

    logger.info("Menu item %s deleted", menu_item_id)
