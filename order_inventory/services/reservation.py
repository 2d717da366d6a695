"""
Stock Reservation - all-or-nothing reserve/release over the stock ledger
"""
import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from sqlalchemy.orm import Session

from order_inventory.exceptions import InsufficientStockError, ProductNotFoundError
from order_inventory.repositories.product_repository import ProductRepository, StockOutcome

logger = logging.getLogger(__name__)

LineRequest = Tuple[int, int]


@dataclass(frozen=True)
class ReservedLine:
    """A successfully reserved line with its price frozen at reservation time"""
    product_id: int
    quantity: int
    unit_price: float
    subtotal: float


class StockReservation:
    """
    Reserve or release stock for a batch of lines as one unit
    
    Every stock change goes through this class so the non-negative stock
    invariant is enforced in one place. Nothing here commits; the caller owns
    the surrounding transaction.
    """
    
    def __init__(self, db: Session):
        self.ledger = ProductRepository(db)
    
    def reserve_all(self, lines: Sequence[LineRequest]) -> List[ReservedLine]:
        """
        Reserve every (product_id, quantity) pair in order, or none of them
        
        Duplicate product IDs are reserved one after another, each against
        the stock left by the previous one.
        
        Args:
            lines: Requested (product_id, quantity) pairs
        
        Returns:
            Reserved lines with frozen unit price and subtotal, in input order
        
        Raises:
            ProductNotFoundError: If any product does not exist
            InsufficientStockError: If any line cannot be satisfied
        """
        products = self.ledger.get_many(product_id for product_id, _ in lines)
        reserved: List[ReservedLine] = []
        
        try:
            for product_id, quantity in lines:
                product = products.get(product_id)
                if product is None:
                    raise ProductNotFoundError(f"Product {product_id} not found", product_id=product_id)
                
                outcome = self.ledger.reserve(product_id, quantity)
                if outcome is StockOutcome.NOT_FOUND:
                    raise ProductNotFoundError(f"Product {product_id} not found", product_id=product_id)
                if outcome is StockOutcome.INSUFFICIENT:
                    raise InsufficientStockError(
                        f"Insufficient stock for {product.name}. Requested: {quantity}",
                        product_id=product_id,
                        requested=quantity
                    )
                
                unit_price = float(product.price)
                reserved.append(ReservedLine(
                    product_id=product_id,
                    quantity=quantity,
                    unit_price=unit_price,
                    subtotal=unit_price * quantity
                ))
        except Exception:
            self._compensate(reserved)
            raise
        
        logger.debug("Reserved stock for %d line(s)", len(reserved))
        return reserved
    
    def release_all(self, lines: Sequence[LineRequest]) -> List[int]:
        """
        Give back every line's quantity to the ledger
        
        Returns:
            IDs of products that no longer exist and could not be restocked
        """
        missing = []
        for product_id, quantity in lines:
            if self.ledger.release(product_id, quantity) is StockOutcome.NOT_FOUND:
                missing.append(product_id)
        
        if missing:
            logger.warning("Could not release stock for missing products: %s", missing)
        return missing
    
    def _compensate(self, reserved: Sequence[ReservedLine]) -> None:
        # Undo in reverse so each release mirrors its reserve
        for line in reversed(reserved):
            self.ledger.release(line.product_id, line.quantity)
        if reserved:
            logger.info("Rolled back %d partial reservation(s)", len(reserved))
