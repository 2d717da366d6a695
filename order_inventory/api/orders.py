"""
Order API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional

from order_inventory.api.errors import to_http_exception
from order_inventory.database import get_db
from order_inventory.exceptions import OrderServiceError
from order_inventory.models.order import OrderStatus
from order_inventory.services.order_service import OrderService
from order_inventory.schemas.order import (
    OrderCreate,
    OrderUpdate,
    OrderResponse,
    OrderListResponse
)

router = APIRouter(prefix="/orders", tags=["orders"])


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(db)


@router.get("", response_model=OrderListResponse, summary="List orders")
def get_orders(
    skip: int = Query(0, ge=0, description="Number of orders to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of orders to return"),
    order_status: Optional[OrderStatus] = Query(None, alias="status", description="Filter by status"),
    customer_email: Optional[str] = Query(None, description="Filter by customer email"),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve orders, newest first
    
    - **skip**: Number of orders to skip (default: 0)
    - **limit**: Maximum number of orders to return (default: 100, max: 1000)
    - **status**: Only orders in this status
    - **customer_email**: Only orders for this customer
    """
    return service.get_all_orders(
        skip=skip, limit=limit, status=order_status, customer_email=customer_email
    )


@router.get("/{order_id}", response_model=OrderResponse, summary="Get order by ID")
def get_order(
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve a specific order by ID
    
    - **order_id**: Order ID
    """
    order = service.get_order_by_id(order_id)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order with id={order_id} not found"
        )
    return order


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED, summary="Create order")
def create_order(
    order_data: OrderCreate,
    service: OrderService = Depends(get_order_service)
):
    """
    Create a new order, reserving stock for every line or for none
    
    - **items**: List of {product_id, quantity} (multi-line order)
    - **product_id** / **quantity**: Single-line order when `items` is empty
    - **customer**: Optional {name, email}
    - **metadata**: Free-form map
    - **status**: PENDING (default) or PAID
    """
    try:
        return service.create_order(order_data)
    except OrderServiceError as e:
        raise to_http_exception(e)


@router.patch("/{order_id}", response_model=OrderResponse, summary="Change order status")
def update_order(
    order_id: int,
    update_data: OrderUpdate,
    service: OrderService = Depends(get_order_service)
):
    """
    Change order status and/or replace its metadata
    
    Cancelling releases stock; reactivating a cancelled order reserves it again.
    A 409 with code `concurrent_conflict` means another change won: re-read and retry.
    """
    try:
        return service.transition_order(order_id, update_data.status, update_data.metadata)
    except OrderServiceError as e:
        raise to_http_exception(e)
