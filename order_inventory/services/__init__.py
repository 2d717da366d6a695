"""
Services package
"""
from order_inventory.services.order_service import OrderService
from order_inventory.services.product_service import ProductService
from order_inventory.services.reservation import StockReservation, ReservedLine
from order_inventory.services.order_state_machine import StockEffect, plan_transition

__all__ = [
    "OrderService",
    "ProductService",
    "StockReservation",
    "ReservedLine",
    "StockEffect",
    "plan_transition"
]
