"""
Schemas package
"""
from order_inventory.schemas.product import (
    ProductBase,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductSummary
)
from order_inventory.schemas.order import (
    CustomerInfo,
    OrderLineCreate,
    OrderCreate,
    OrderUpdate,
    OrderLineResponse,
    OrderResponse,
    OrderListResponse
)

__all__ = [
    "ProductBase",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductSummary",
    "CustomerInfo",
    "OrderLineCreate",
    "OrderCreate",
    "OrderUpdate",
    "OrderLineResponse",
    "OrderResponse",
    "OrderListResponse"
]
