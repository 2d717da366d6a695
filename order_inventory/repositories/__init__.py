"""
Repositories package
"""
from order_inventory.repositories.product_repository import ProductRepository, StockOutcome
from order_inventory.repositories.order_repository import OrderRepository

__all__ = ["ProductRepository", "StockOutcome", "OrderRepository"]
