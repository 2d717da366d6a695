"""
Catalog endpoints used to seed products and reprice them
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from order_inventory.database import get_db
from order_inventory.services.product_service import ProductService
from order_inventory.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse
)

router = APIRouter(prefix="/products", tags=["products"])


def _not_found(product_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"code": "product_not_found", "message": f"Product {product_id} not found"}
    )


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)


@router.get("/{product_id}", response_model=ProductResponse, summary="Read product and its available stock")
def read_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    """Current price and available stock; `stock` already excludes every reserved unit"""
    product = service.get_product_by_id(product_id)
    if not product:
        raise _not_found(product_id)
    return product


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED, summary="Seed a product")
def seed_product(
    product_data: ProductCreate,
    service: ProductService = Depends(get_product_service)
):
    """
    Add a product with its opening stock
    
    After this call stock only changes when orders reserve or release it.
    """
    return service.create_product(product_data)


@router.put("/{product_id}", response_model=ProductResponse, summary="Reprice or relabel a product")
def reprice_product(
    product_id: int,
    product_data: ProductUpdate,
    service: ProductService = Depends(get_product_service)
):
    """
    Change catalog fields such as price, name or images
    
    Null and stock fields are ignored. Lines of existing orders keep their frozen unit price.
    """
    product = service.update_product(product_id, product_data)
    if not product:
        raise _not_found(product_id)
    return product
