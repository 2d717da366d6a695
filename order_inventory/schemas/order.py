"""
Pydantic schemas for order request/response validation
"""
from pydantic import BaseModel, Field, EmailStr, ConfigDict, model_validator
from typing import Any, Dict, List, Optional
from datetime import datetime

from order_inventory.models.order import OrderStatus
from order_inventory.schemas.product import ProductSummary


class CustomerInfo(BaseModel):
    """Informational customer descriptor"""
    name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = Field(None, description="Customer email address")


class OrderLineCreate(BaseModel):
    """One requested (product, quantity) pair"""
    product_id: int = Field(..., description="Product ID")
    quantity: int = Field(..., description="Quantity to order (checked to be >= 1 by the service)")


class OrderCreate(BaseModel):
    """
    Schema for creating an order
    
    Either `items` (multi-line) or `product_id` + `quantity` (single-line).
    """
    items: List[OrderLineCreate] = Field(default_factory=list)
    product_id: Optional[int] = None
    quantity: Optional[int] = None
    customer: Optional[CustomerInfo] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    status: OrderStatus = Field(OrderStatus.PENDING, description="Initial status: PENDING or PAID")


class OrderUpdate(BaseModel):
    """Schema for a status transition and/or metadata patch"""
    status: Optional[OrderStatus] = None
    metadata: Optional[Dict[str, Any]] = None


class OrderLineResponse(BaseModel):
    """Schema for a persisted order line"""
    product_id: int
    quantity: int
    unit_price: float
    subtotal: float
    product: Optional[ProductSummary] = None
    
    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    """Schema for order response"""
    id: int
    customer: CustomerInfo
    status: OrderStatus
    total: float
    total_quantity: int
    lines: List[OrderLineResponse]
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime
    
    model_config = ConfigDict(from_attributes=True)
    
    @model_validator(mode="before")
    @classmethod
    def _flatten_orm_order(cls, data: Any) -> Any:
        # ORM orders keep customer fields flat and metadata under `extra_metadata`
        if isinstance(data, dict) or not hasattr(data, "extra_metadata"):
            return data
        return {
            "id": data.id,
            "customer": {"name": data.customer_name, "email": data.customer_email},
            "status": data.status,
            "total": data.total,
            "total_quantity": data.total_quantity,
            "lines": [
                OrderLineResponse.model_validate(line) for line in data.lines
            ],
            "metadata": data.extra_metadata or {},
            "created_at": data.created_at,
            "updated_at": data.updated_at,
        }


class OrderListResponse(BaseModel):
    """Schema for list of orders response"""
    orders: List[OrderResponse]
    total: int
