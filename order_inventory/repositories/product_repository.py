"""
Product Repository - Data Access Layer and Stock Ledger
"""
import enum
from typing import Dict, Iterable, Optional
from sqlalchemy import update
from sqlalchemy.orm import Session

from order_inventory.models.product import Product
from order_inventory.schemas.product import ProductCreate, ProductUpdate


class StockOutcome(str, enum.Enum):
    """Result of a single conditional stock update"""
    RESERVED = "reserved"
    RELEASED = "released"
    INSUFFICIENT = "insufficient"
    NOT_FOUND = "not_found"


class ProductRepository:
    """Repository for Product CRUD operations and conditional stock updates"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Get product by ID"""
        return self.db.query(Product).filter(Product.id == product_id).first()
    
    def get_many(self, product_ids: Iterable[int]) -> Dict[int, Product]:
        """Get products keyed by ID; missing IDs are simply absent"""
        ids = set(product_ids)
        if not ids:
            return {}
        products = self.db.query(Product).filter(Product.id.in_(ids)).all()
        return {product.id: product for product in products}
    
    def exists(self, product_id: int) -> bool:
        return self.db.query(Product.id).filter(Product.id == product_id).first() is not None
    
    def create(self, product_data: ProductCreate) -> Product:
        """Create new product"""
        product = Product(**product_data.model_dump())
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product
    
    def update(self, product_id: int, product_data: ProductUpdate) -> Optional[Product]:
        """Update catalog fields of an existing product"""
        product = self.get_by_id(product_id)
        if not product:
            return None
        
        # Update only provided, non-null fields; name and images are NOT NULL
        update_data = product_data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(product, field, value)
        
        self.db.commit()
        self.db.refresh(product)
        return product
    
    def reserve(self, product_id: int, quantity: int) -> StockOutcome:
        """
        Decrement stock only if enough is available, in one conditional UPDATE
        
        The availability check and the decrement happen in the same statement,
        so concurrent reservations on one product are serialized by the database.
        Does not commit.
        
        Args:
            product_id: Product ID
            quantity: Units to take (>= 1)
        
        Returns:
            RESERVED, INSUFFICIENT, or NOT_FOUND
        """
        result = self.db.execute(
            update(Product)
            .where(Product.id == product_id, Product.stock >= quantity)
            .values(stock=Product.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            return StockOutcome.RESERVED
        if not self.exists(product_id):
            return StockOutcome.NOT_FOUND
        return StockOutcome.INSUFFICIENT
    
    def release(self, product_id: int, quantity: int) -> StockOutcome:
        """
        Increment stock by a previously reserved quantity. Does not commit.
        
        Returns:
            RELEASED, or NOT_FOUND if the product no longer exists
        """
        result = self.db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(stock=Product.stock + quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            return StockOutcome.RELEASED
        return StockOutcome.NOT_FOUND
