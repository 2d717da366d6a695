"""
Models package
"""
from order_inventory.models.product import Product
from order_inventory.models.order import Order, OrderLine, OrderStatus

__all__ = ["Product", "Order", "OrderLine", "OrderStatus"]
