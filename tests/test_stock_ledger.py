"""Conditional stock updates on the product repository."""
from order_inventory.repositories.product_repository import ProductRepository, StockOutcome


def test_reserve_decrements_stock(db, make_product, stock_of):
    product = make_product(stock=5)
    ledger = ProductRepository(db)

    assert ledger.reserve(product.id, 3) is StockOutcome.RESERVED
    db.commit()
    assert stock_of(product.id) == 2


def test_reserve_can_take_the_last_unit(db, make_product, stock_of):
    product = make_product(stock=2)
    ledger = ProductRepository(db)

    assert ledger.reserve(product.id, 2) is StockOutcome.RESERVED
    db.commit()
    assert stock_of(product.id) == 0


def test_reserve_more_than_available_leaves_stock_untouched(db, make_product, stock_of):
    product = make_product(stock=2)
    ledger = ProductRepository(db)

    assert ledger.reserve(product.id, 3) is StockOutcome.INSUFFICIENT
    db.commit()
    assert stock_of(product.id) == 2


def test_reserve_unknown_product(db):
    assert ProductRepository(db).reserve(9999, 1) is StockOutcome.NOT_FOUND


def test_release_restores_stock_without_upper_bound(db, make_product, stock_of):
    product = make_product(stock=0)
    ledger = ProductRepository(db)

    assert ledger.release(product.id, 4) is StockOutcome.RELEASED
    db.commit()
    assert stock_of(product.id) == 4


def test_release_unknown_product(db):
    assert ProductRepository(db).release(9999, 1) is StockOutcome.NOT_FOUND
