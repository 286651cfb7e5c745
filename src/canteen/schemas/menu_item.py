from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class MenuItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    description: str = Field("", max_length=512)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=128)
    description: Optional[str] = Field(None, max_length=512)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)

    class Config:
        # clients send back the whole item they fetched (id, createdAt, ...)
        extra = "ignore"


class MenuItemRead(BaseModel):
    id: int
    name: str
    description: str
    price: Decimal
    created_at: datetime = Field(alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @classmethod
    def from_orm_item(cls, item):
        return cls(
            id=item.id,
            name=item.name,
            description=item.description,
            price=item.price,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )

    class Config:
        populate_by_name = True
