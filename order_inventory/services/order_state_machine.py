"""
Order status transitions and their stock side effects
"""
import enum
from typing import Dict, Tuple, Union

from order_inventory.exceptions import InvalidTransitionError
from order_inventory.models.order import OrderStatus


class StockEffect(str, enum.Enum):
    """What a transition does to the stock ledger"""
    NONE = "none"
    RELEASE = "release"
    RESERVE = "reserve"


# PAID is terminal: refunds (PAID -> CANCELLED) are not modelled
TRANSITIONS: Dict[Tuple[OrderStatus, OrderStatus], StockEffect] = {
    (OrderStatus.PENDING, OrderStatus.PAID): StockEffect.NONE,
    (OrderStatus.PENDING, OrderStatus.CANCELLED): StockEffect.RELEASE,
    (OrderStatus.CANCELLED, OrderStatus.PENDING): StockEffect.RESERVE,
    (OrderStatus.CANCELLED, OrderStatus.PAID): StockEffect.RESERVE,
}


def plan_transition(
    current: Union[OrderStatus, str],
    requested: Union[OrderStatus, str]
) -> StockEffect:
    """
    Return the stock effect of moving an order from `current` to `requested`
    
    Staying in the same status is always allowed and has no effect.
    
    Raises:
        InvalidTransitionError: If the transition is not allowed
    """
    current = OrderStatus(current)
    requested = OrderStatus(requested)
    
    if current == requested:
        return StockEffect.NONE
    
    try:
        return TRANSITIONS[(current, requested)]
    except KeyError:
        raise InvalidTransitionError(
            f"Cannot change order status from {current.value} to {requested.value}",
            current=current.value,
            requested=requested.value
        ) from None
