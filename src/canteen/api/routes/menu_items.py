import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.crud.menu_item import get_menu_items, create_menu_item, update_menu_item, delete_menu_item
from canteen.db.deps import get_async_session
from canteen.exceptions import MenuItemInUseError, MenuItemNotFoundError
from canteen.schemas.menu_item import MenuItemCreate, MenuItemRead, MenuItemUpdate
from canteen.schemas.order import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/menuItems", tags=["menu"])


@router.get("", response_model=List[MenuItemRead])
async def list_menu_items(db: AsyncSession = Depends(get_async_session)):
    try:
        items = await get_menu_items(db)
    except SQLAlchemyError:
        logger.exception("Error fetching menu items")
        raise HTTPException(status_code=500, detail="Error fetching menu items")
    return [MenuItemRead.from_orm_item(i) for i in items]


@router.post("", response_model=MenuItemRead, status_code=201)
async def create_menu_item_endpoint(item_in: MenuItemCreate, db: AsyncSession = Depends(get_async_session)):
    try:
        item = await create_menu_item(db, item_in)
    except SQLAlchemyError:
        logger.exception("Error adding menu item")
        raise HTTPException(status_code=500, detail="Error adding menu item")
    return MenuItemRead.from_orm_item(item)


@router.put("/{menu_item_id}", response_model=MessageResponse)
async def update_menu_item_endpoint(
    menu_item_id: int,
    item_in: MenuItemUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    """
    Partial update: name, description, price.
    """
    try:
        await update_menu_item(db, menu_item_id, item_in)
    except MenuItemNotFoundError:
        raise HTTPException(status_code=404, detail="Menu item not found")
    except SQLAlchemyError:
        logger.exception("Error updating menu item %s", menu_item_id)
        raise HTTPException(status_code=500, detail="Error updating menu item")
    return MessageResponse(message="Menu item updated successfully")


@router.delete("/{menu_item_id}", response_model=MessageResponse)
async def delete_menu_item_endpoint(menu_item_id: int, db: AsyncSession = Depends(get_async_session)):
    try:
        await delete_menu_item(db, menu_item_id)
    except MenuItemNotFoundError:
        raise HTTPException(status_code=404, detail="Menu item not found")
    except MenuItemInUseError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SQLAlchemyError:
        logger.exception("Error deleting menu item %s", menu_item_id)
        raise HTTPException(status_code=500, detail="Error deleting menu item")
    return MessageResponse(message="Menu item deleted successfully")
