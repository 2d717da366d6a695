"""
SQLAlchemy Order and OrderLine models
"""
import enum

from sqlalchemy import Column, Integer, String, Float, DateTime, JSON, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from order_inventory.database import Base


class OrderStatus(str, enum.Enum):
    """Order lifecycle states"""
    PENDING = "PENDING"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class Order(Base):
    """Order database model"""
    
    __tablename__ = "orders"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    customer_name = Column(String(255), nullable=True)
    customer_email = Column(String(255), nullable=True, index=True)
    total = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    extra_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    lines = relationship(
        "OrderLine",
        back_populates="order",
        order_by="OrderLine.position",
        cascade="all, delete-orphan",
    )
    
    # Constraints
    __table_args__ = (
        CheckConstraint('total >= 0', name='check_total_non_negative'),
        CheckConstraint("status IN ('PENDING', 'PAID', 'CANCELLED')", name='check_status_valid'),
    )
    
    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)
    
    def __repr__(self):
        return f"<Order(id={self.id}, total={self.total}, status='{self.status}')>"


class OrderLine(Base):
    """One (product, quantity, frozen price) entry of an order"""
    
    __tablename__ = "order_lines"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)  # Frozen at creation, never re-read
    subtotal = Column(Float, nullable=False)
    
    order = relationship("Order", back_populates="lines")
    product = relationship("Product", lazy="joined")
    
    # Constraints
    __table_args__ = (
        CheckConstraint('quantity >= 1', name='check_quantity_positive'),
        CheckConstraint('unit_price >= 0', name='check_unit_price_non_negative'),
        CheckConstraint('subtotal >= 0', name='check_subtotal_non_negative'),
    )
    
    def __repr__(self):
        return (
            f"<OrderLine(order_id={self.order_id}, product_id={self.product_id}, "
            f"quantity={self.quantity}, unit_price={self.unit_price})>"
        )
