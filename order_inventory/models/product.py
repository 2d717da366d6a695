"""
SQLAlchemy Product model
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, Text, JSON, CheckConstraint
from sqlalchemy.sql import func
from order_inventory.database import Base


class Product(Base):
    """Product database model; `stock` is the available quantity"""
    
    __tablename__ = "products"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    product_type = Column(String(50), nullable=True)
    platform = Column(String(50), nullable=True)
    category = Column(String(100), nullable=True, index=True)
    images = Column(JSON, nullable=False, default=list)
    extra_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    # Constraints
    __table_args__ = (
        CheckConstraint('price >= 0', name='check_price_non_negative'),
        CheckConstraint('stock >= 0', name='check_stock_non_negative'),
    )
    
    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price}, stock={self.stock})>"
