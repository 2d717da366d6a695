"""
Order Service - Business Logic Layer

Builds orders on top of stock reservations and drives status transitions.
Every public mutating method runs as one database transaction: either the
stock changes and the order write commit together, or neither does.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from sqlalchemy.exc import OperationalError, SQLAlchemyError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from order_inventory.exceptions import (
    ConcurrentConflictError,
    InvalidInputError,
    OrderNotFoundError,
    OrderServiceError,
    StorageError,
    TransactionTimeoutError
)
from order_inventory.models.order import Order, OrderLine, OrderStatus
from order_inventory.repositories.order_repository import OrderRepository
from order_inventory.schemas.order import CustomerInfo, OrderCreate, OrderListResponse, OrderResponse
from order_inventory.services.order_state_machine import StockEffect, plan_transition
from order_inventory.services.reservation import StockReservation

logger = logging.getLogger(__name__)

INITIAL_STATUSES = (OrderStatus.PENDING, OrderStatus.PAID)

# Largest value an INTEGER column holds on every supported backend
MAX_INTEGER = 2**31 - 1


class OrderService:
    """Service layer for order business logic"""
    
    def __init__(self, db: Session):
        self.db = db
        self.repository = OrderRepository(db)
        self.reservation = StockReservation(db)
    
    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Commit on success; roll back and raise a typed error otherwise"""
        try:
            yield
            self.db.commit()
        except OrderServiceError:
            self.db.rollback()
            raise
        except (OperationalError, PoolTimeoutError) as e:
            self.db.rollback()
            logger.warning("Transaction timed out or was locked: %s", e)
            raise TransactionTimeoutError(f"Transaction timed out: {e}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Storage failure, transaction rolled back: %s", e)
            raise StorageError(f"Storage failure: {e}") from e
        except Exception:
            self.db.rollback()
            raise

    def get_all_orders(
        self,
        skip: int = 0,
        limit: int = 100,
        status: Optional[OrderStatus] = None,
        customer_email: Optional[str] = None
    ) -> OrderListResponse:
        """Get orders, newest first, optionally filtered by status or customer email"""
        status_value = OrderStatus(status).value if status is not None else None
        orders = self.repository.get_all(
            skip=skip, limit=limit, status=status_value, customer_email=customer_email
        )
        total = self.repository.count(status=status_value, customer_email=customer_email)
        
        return OrderListResponse(
            orders=[OrderResponse.model_validate(o) for o in orders],
            total=total
        )
    
    def get_order_by_id(self, order_id: int) -> Optional[OrderResponse]:
        """Get order by ID"""
        order = self.repository.get_by_id(order_id)
        if not order:
            return None
        return OrderResponse.model_validate(order)
    
    def create_order(self, order_data: OrderCreate) -> OrderResponse:
        """
        Create an order from a request body
        
        A body with `items` takes the multi-line path; otherwise `product_id`
        and `quantity` (default 1) take the single-line path.
        
        Raises:
            InvalidInputError: If the request has no lines or a bad quantity
            ProductNotFoundError: If a product does not exist
            InsufficientStockError: If any line cannot be satisfied
        """
        if order_data.items:
            return self.create_multi_order(
                [(item.product_id, item.quantity) for item in order_data.items],
                customer=order_data.customer,
                metadata=order_data.metadata,
                status=order_data.status
            )
        if order_data.product_id is not None:
            quantity = order_data.quantity if order_data.quantity is not None else 1
            return self.create_single_order(
                order_data.product_id,
                quantity,
                customer=order_data.customer,
                metadata=order_data.metadata,
                status=order_data.status
            )
        raise InvalidInputError("Order lines are required to create an order")
    
    def create_single_order(
        self,
        product_id: int,
        quantity: int,
        customer: Optional[CustomerInfo] = None,
        metadata: Optional[Dict[str, Any]] = None,
        status: Union[OrderStatus, str] = OrderStatus.PENDING
    ) -> OrderResponse:
        """Create an order with exactly one line"""
        return self._build_order([(product_id, quantity)], customer, metadata, status)
    
    def create_multi_order(
        self,
        lines: Sequence[Tuple[int, int]],
        customer: Optional[CustomerInfo] = None,
        metadata: Optional[Dict[str, Any]] = None,
        status: Union[OrderStatus, str] = OrderStatus.PENDING
    ) -> OrderResponse:
        """Create an order with one line per (product_id, quantity) pair; duplicates stay separate"""
        return self._build_order(list(lines), customer, metadata, status)
    
    def _build_order(
        self,
        lines: List[Tuple[int, int]],
        customer: Optional[CustomerInfo],
        metadata: Optional[Dict[str, Any]],
        status: Union[OrderStatus, str]
    ) -> OrderResponse:
        initial_status = self._validate_request(lines, status)
        customer = customer or CustomerInfo()
        
        with self._transaction():
            reserved = self.reservation.reserve_all(lines)
            
            order = Order(
                customer_name=customer.name,
                customer_email=customer.email,
                total=sum(line.subtotal for line in reserved),
                status=initial_status.value,
                extra_metadata=dict(metadata or {}),
                lines=[
                    OrderLine(
                        position=position,
                        product_id=line.product_id,
                        quantity=line.quantity,
                        unit_price=line.unit_price,
                        subtotal=line.subtotal
                    )
                    for position, line in enumerate(reserved)
                ]
            )
            self.repository.add(order)
        
        self.db.refresh(order)
        logger.info(
            "Order %s created with %d line(s), total=%s, status=%s",
            order.id, len(reserved), order.total, order.status
        )
        return OrderResponse.model_validate(order)
    
    @staticmethod
    def _validate_request(lines: List[Tuple[int, int]], status: Union[OrderStatus, str]) -> OrderStatus:
        if not lines:
            raise InvalidInputError("Order lines are required to create an order")
        
        for product_id, quantity in lines:
            if isinstance(product_id, bool) or not isinstance(product_id, int) or not 0 < product_id <= MAX_INTEGER:
                raise InvalidInputError(f"Invalid product_id: {product_id!r}")
            if isinstance(quantity, bool) or not isinstance(quantity, int) or not 1 <= quantity <= MAX_INTEGER:
                raise InvalidInputError(
                    f"Quantity must be an integer between 1 and {MAX_INTEGER}, "
                    f"got {quantity!r} for product {product_id}",
                    product_id=product_id
                )
        
        try:
            initial_status = OrderStatus(status)
        except ValueError:
            raise InvalidInputError(f"Unknown order status: {status!r}") from None
        if initial_status not in INITIAL_STATUSES:
            raise InvalidInputError(f"Orders cannot be created as {initial_status.value}")
        return initial_status
    
    def transition_order(
        self,
        order_id: int,
        new_status: Optional[Union[OrderStatus, str]] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> OrderResponse:
        """
        Move an order to a new status and apply the matching stock effect
        
        Steps (one transaction):
        1. Read the order and its current status
        2. Validate the transition and work out its stock effect
        3. Write the new status/metadata only if the status is still the one read in step 1
        4. Release or re-reserve every line's quantity; a shortfall rolls back step 3
        
        Args:
            order_id: Order ID
            new_status: Target status; None keeps the current status (metadata-only patch)
            metadata: Replacement metadata map, if given
        
        Returns:
            Updated order
        
        Raises:
            OrderNotFoundError: If the order does not exist
            InvalidTransitionError: If the status change is not allowed
            InsufficientStockError: If reactivation cannot re-reserve every line
            ConcurrentConflictError: If another transition changed the status first
        """
        if new_status is not None:
            try:
                new_status = OrderStatus(new_status)
            except ValueError:
                raise InvalidInputError(f"Unknown order status: {new_status!r}") from None
        
        with self._transaction():
            order = self.repository.get_by_id(order_id)
            if not order:
                raise OrderNotFoundError(f"Order {order_id} not found", order_id=order_id)
            
            previous_status = OrderStatus(order.status)
            target_status = new_status if new_status is not None else previous_status
            effect = plan_transition(previous_status, target_status)
            
            lines = [(line.product_id, line.quantity) for line in order.lines]
            values: Dict[str, Any] = {"status": target_status.value}
            if metadata is not None:
                values["extra_metadata"] = dict(metadata)

            # Claim the order before touching stock so a lost race is always a conflict
            if not self.repository.update_if_status(order_id, previous_status.value, values):
                logger.warning(
                    "Order %s changed status concurrently while moving %s -> %s",
                    order_id, previous_status.value, target_status.value
                )
                raise ConcurrentConflictError(
                    "Order status changed concurrently. Re-read the order and try again.",
                    order_id=order_id
                )

            if effect is StockEffect.RELEASE:
                self.reservation.release_all(lines)
            elif effect is StockEffect.RESERVE:
                # Prices stay frozen; only the stock is taken again
                self.reservation.reserve_all(lines)
        
        self.db.refresh(order)
        logger.info(
            "Order %s moved %s -> %s (stock effect: %s)",
            order_id, previous_status.value, target_status.value, effect.value
        )
        return OrderResponse.model_validate(order)
