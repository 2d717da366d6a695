"""
Translate typed service errors into HTTP errors
"""
from fastapi import HTTPException, status

from order_inventory.exceptions import OrderServiceError

STATUS_BY_CODE = {
    "invalid_input": status.HTTP_400_BAD_REQUEST,
    "product_not_found": status.HTTP_404_NOT_FOUND,
    "order_not_found": status.HTTP_404_NOT_FOUND,
    "insufficient_stock": status.HTTP_409_CONFLICT,
    "invalid_transition": status.HTTP_409_CONFLICT,
    "concurrent_conflict": status.HTTP_409_CONFLICT,
    "transaction_timeout": status.HTTP_503_SERVICE_UNAVAILABLE,
    "storage_error": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_exception(error: OrderServiceError) -> HTTPException:
    return HTTPException(
        status_code=STATUS_BY_CODE.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail={"code": error.code, "message": error.message, **error.details}
    )
