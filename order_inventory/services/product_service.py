"""
Product Service - catalog management needed to seed and reprice products
"""
from typing import Optional
from sqlalchemy.orm import Session

from order_inventory.repositories.product_repository import ProductRepository
from order_inventory.schemas.product import ProductCreate, ProductUpdate, ProductResponse


class ProductService:
    """Service layer for product catalog operations"""
    
    def __init__(self, db: Session):
        self.repository = ProductRepository(db)
    
    def get_product_by_id(self, product_id: int) -> Optional[ProductResponse]:
        """Get product by ID"""
        product = self.repository.get_by_id(product_id)
        if not product:
            return None
        return ProductResponse.model_validate(product)
    
    def create_product(self, product_data: ProductCreate) -> ProductResponse:
        """Create new product"""
        product = self.repository.create(product_data)
        return ProductResponse.model_validate(product)
    
    def update_product(self, product_id: int, product_data: ProductUpdate) -> Optional[ProductResponse]:
        """Update catalog fields; existing order lines keep their frozen prices"""
        product = self.repository.update(product_id, product_data)
        if not product:
            return None
        return ProductResponse.model_validate(product)
