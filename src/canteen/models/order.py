import enum
from sqlalchemy import Column, Integer, Numeric, DateTime, Enum as SAEnum, func
from sqlalchemy.orm import relationship
from ..db.base import Base


class OrderStatusEnum(str, enum.Enum):
    received = "received"
    picked = "picked"
    prepared = "prepared"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    status = Column(SAEnum(OrderStatusEnum, name="order_status"), nullable=False, default=OrderStatusEnum.received)
    total_price = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # relationships
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan", order_by="OrderItem.id")
