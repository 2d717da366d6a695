"""
Order Repository - Data Access Layer
"""
from typing import Any, Dict, List, Optional
from sqlalchemy import desc, update
from sqlalchemy.orm import Session

from order_inventory.models.order import Order


class OrderRepository:
    """Repository for Order persistence and status-matched updates"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def _filtered(self, status: Optional[str] = None, customer_email: Optional[str] = None):
        query = self.db.query(Order)
        if status is not None:
            query = query.filter(Order.status == status)
        if customer_email is not None:
            query = query.filter(Order.customer_email == customer_email)
        return query
    
    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        status: Optional[str] = None,
        customer_email: Optional[str] = None
    ) -> List[Order]:
        """Get orders, newest first, with optional filters and pagination"""
        return self._filtered(status, customer_email).order_by(
            desc(Order.created_at), desc(Order.id)
        ).offset(skip).limit(limit).all()
    
    def count(self, status: Optional[str] = None, customer_email: Optional[str] = None) -> int:
        """Count orders matching the same filters as get_all"""
        return self._filtered(status, customer_email).count()
    
    def get_by_id(self, order_id: int) -> Optional[Order]:
        """Get order by ID"""
        return self.db.query(Order).filter(Order.id == order_id).first()
    
    def add(self, order: Order) -> Order:
        """
        Stage a new order with its lines and flush it to obtain an ID
        
        Does not commit: the caller commits together with the stock reservation.
        """
        self.db.add(order)
        self.db.flush()
        return order
    
    def update_if_status(self, order_id: int, expected_status: str, values: Dict[str, Any]) -> bool:
        """
        Update an order only if its status still equals `expected_status`
        
        Args:
            order_id: Order ID
            expected_status: Status read at the start of the transition
            values: Column values to write
        
        Returns:
            True if the row was updated, False if the status had already changed
        """
        result = self.db.execute(
            update(Order)
            .where(Order.id == order_id, Order.status == expected_status)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
