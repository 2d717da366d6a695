"""
Typed failures returned by the order / inventory core
"""


class OrderServiceError(Exception):
    """Base exception for order service errors"""
    
    code = "order_error"
    
    def __init__(self, message: str, **details):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidInputError(OrderServiceError):
    """Malformed request, rejected before any stock access"""
    code = "invalid_input"


class ProductNotFoundError(OrderServiceError):
    """Product not found"""
    code = "product_not_found"


class InsufficientStockError(OrderServiceError):
    """Insufficient stock"""
    code = "insufficient_stock"


class OrderNotFoundError(OrderServiceError):
    """Order not found"""
    code = "order_not_found"


class InvalidTransitionError(OrderServiceError):
    """Requested status change is not allowed from the current status"""
    code = "invalid_transition"


class ConcurrentConflictError(OrderServiceError):
    """Another transition changed the order status first; re-read and retry"""
    code = "concurrent_conflict"


class TransactionTimeoutError(OrderServiceError):
    """Storage timed out or was locked; nothing was committed"""
    code = "transaction_timeout"


class StorageError(OrderServiceError):
    """Underlying storage failure; nothing was committed"""
    code = "storage_error"
