"""Order creation: validation, price freezing, totals and rollback."""
import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from order_inventory.exceptions import (
    InsufficientStockError,
    InvalidInputError,
    ProductNotFoundError,
    StorageError,
    TransactionTimeoutError,
)
from order_inventory.models import OrderStatus
from order_inventory.schemas.order import CustomerInfo, OrderCreate, OrderLineCreate
from order_inventory.schemas.product import ProductUpdate
from order_inventory.services.product_service import ProductService


def test_checkout_scenario(service, make_product, stock_of):
    product = make_product(price=100.0, stock=5)

    first = service.create_single_order(product.id, 3)
    assert first.total == 300.0
    assert first.status is OrderStatus.PENDING
    assert stock_of(product.id) == 2

    with pytest.raises(InsufficientStockError):
        service.create_single_order(product.id, 3)
    assert stock_of(product.id) == 2

    service.transition_order(first.id, OrderStatus.CANCELLED)
    assert stock_of(product.id) == 5

    paid = service.transition_order(first.id, OrderStatus.PAID)
    assert paid.status is OrderStatus.PAID
    assert stock_of(product.id) == 2


def test_totals_match_lines(service, make_product):
    game = make_product(name="Game", price=59.99, stock=10)
    key = make_product(name="Key", price=19.95, stock=10)
    figure = make_product(name="Figure", price=0.0, stock=1)

    order = service.create_multi_order([(game.id, 3), (key.id, 2), (figure.id, 1)])

    assert order.total == sum(line.subtotal for line in order.lines)
    for line in order.lines:
        assert line.subtotal == line.quantity * line.unit_price
    assert [line.product_id for line in order.lines] == [game.id, key.id, figure.id]
    assert order.total_quantity == 6


def test_one_unsatisfiable_line_changes_no_stock(service, make_product, stock_of):
    a = make_product(name="A", stock=10)
    b = make_product(name="B", stock=10)
    c = make_product(name="C", stock=1)

    with pytest.raises(InsufficientStockError):
        service.create_multi_order([(a.id, 5), (b.id, 5), (c.id, 2)])

    assert [stock_of(p.id) for p in (a, b, c)] == [10, 10, 1]
    assert service.get_all_orders().total == 0


def test_unknown_product_changes_no_stock(service, make_product, stock_of):
    product = make_product(stock=4)

    with pytest.raises(ProductNotFoundError) as exc_info:
        service.create_multi_order([(product.id, 1), (777, 1)])

    assert exc_info.value.code == "product_not_found"
    assert stock_of(product.id) == 4


def test_duplicate_product_lines_are_not_merged(service, make_product, stock_of):
    product = make_product(price=10.0, stock=5)

    order = service.create_multi_order([(product.id, 2), (product.id, 3)])

    assert [(line.product_id, line.quantity) for line in order.lines] == [
        (product.id, 2), (product.id, 3)
    ]
    assert order.total == 50.0
    assert stock_of(product.id) == 0


@pytest.mark.parametrize("lines", [
    [],
    [(1, 0)],
    [(1, -2)],
])
def test_invalid_lines_rejected_before_stock_access(service, make_product, stock_of, lines):
    product = make_product(stock=5)

    with pytest.raises(InvalidInputError) as exc_info:
        service.create_multi_order([(product.id, qty) for _, qty in lines])

    assert exc_info.value.code == "invalid_input"
    assert stock_of(product.id) == 5


def test_cannot_create_cancelled_order(service, make_product, stock_of):
    product = make_product(stock=5)

    with pytest.raises(InvalidInputError):
        service.create_single_order(product.id, 1, status=OrderStatus.CANCELLED)
    assert stock_of(product.id) == 5


def test_create_as_paid(service, make_product, stock_of):
    product = make_product(stock=5)

    order = service.create_single_order(product.id, 2, status="PAID")

    assert order.status is OrderStatus.PAID
    assert stock_of(product.id) == 3


def test_request_body_dispatch(service, make_product, stock_of):
    product = make_product(price=25.0, stock=5)

    single = service.create_order(OrderCreate(product_id=product.id))
    multi = service.create_order(OrderCreate(
        items=[OrderLineCreate(product_id=product.id, quantity=2)],
        customer=CustomerInfo(name="Ana", email="ana@example.com"),
        metadata={"channel": "web"},
    ))

    assert single.total == 25.0
    assert multi.total == 50.0
    assert multi.customer.email == "ana@example.com"
    assert multi.metadata == {"channel": "web"}
    assert stock_of(product.id) == 2

    with pytest.raises(InvalidInputError):
        service.create_order(OrderCreate())


def test_price_change_does_not_touch_existing_orders(db, service, make_product):
    product = make_product(price=100.0, stock=5)
    order = service.create_single_order(product.id, 2)

    ProductService(db).update_product(product.id, ProductUpdate(price=150.0))

    reread = service.get_order_by_id(order.id)
    assert reread.lines[0].unit_price == 100.0
    assert reread.lines[0].subtotal == 200.0
    assert reread.total == 200.0
    assert reread.lines[0].product.price == 150.0


def test_failed_persistence_releases_reservation(service, make_product, stock_of, monkeypatch):
    product = make_product(stock=5)

    def broken_add(order):
        raise IntegrityError("INSERT INTO orders", {}, Exception("disk full"))

    monkeypatch.setattr(service.repository, "add", broken_add)

    with pytest.raises(StorageError) as exc_info:
        service.create_single_order(product.id, 3)

    assert exc_info.value.code == "storage_error"
    assert stock_of(product.id) == 5


def test_lock_timeout_surfaces_as_transaction_timeout(service, make_product, stock_of, monkeypatch):
    first = make_product(name="First", stock=5)
    second = make_product(name="Second", stock=5)
    reserve = service.reservation.ledger.reserve

    def reserve_then_time_out(product_id, quantity):
        if product_id == second.id:
            raise OperationalError("UPDATE products", {}, Exception("database is locked"))
        return reserve(product_id, quantity)

    monkeypatch.setattr(service.reservation.ledger, "reserve", reserve_then_time_out)

    with pytest.raises(TransactionTimeoutError) as exc_info:
        service.create_multi_order([(first.id, 2), (second.id, 2)])

    assert exc_info.value.code == "transaction_timeout"
    assert stock_of(first.id) == 5
    assert stock_of(second.id) == 5


def test_list_orders_newest_first_with_filters(service, make_product):
    product = make_product(stock=10)
    older = service.create_single_order(
        product.id, 1, customer=CustomerInfo(email="old@example.com")
    )
    newer = service.create_single_order(
        product.id, 1, customer=CustomerInfo(email="new@example.com")
    )
    service.transition_order(older.id, OrderStatus.CANCELLED)

    listing = service.get_all_orders()
    assert [o.id for o in listing.orders] == [newer.id, older.id]
    assert listing.total == 2

    cancelled = service.get_all_orders(status=OrderStatus.CANCELLED)
    assert [o.id for o in cancelled.orders] == [older.id]

    by_customer = service.get_all_orders(customer_email="new@example.com")
    assert [o.id for o in by_customer.orders] == [newer.id]


def test_out_of_range_quantity_is_invalid_and_leaves_no_partial_reservation(service, make_product, stock_of):
    a = make_product(name="A", stock=5)
    b = make_product(name="B", stock=5)
    c = make_product(name="C", stock=5)

    with pytest.raises(InvalidInputError):
        service.create_multi_order([(a.id, 2), (b.id, 2**63)])

    service.create_single_order(c.id, 1)
    assert (stock_of(a.id), stock_of(b.id), stock_of(c.id)) == (5, 5, 4)


def test_unexpected_failure_is_not_committed_by_a_later_order(service, make_product, stock_of, monkeypatch):
    a = make_product(name="A", stock=5)
    b = make_product(name="B", stock=5)
    c = make_product(name="C", stock=5)
    reserve = service.reservation.ledger.reserve

    def reserve_then_fail(product_id, quantity):
        if product_id == b.id:
            raise RuntimeError("driver exploded")
        return reserve(product_id, quantity)

    monkeypatch.setattr(service.reservation.ledger, "reserve", reserve_then_fail)

    with pytest.raises(RuntimeError):
        service.create_multi_order([(a.id, 2), (b.id, 2)])

    service.create_single_order(c.id, 1)
    assert (stock_of(a.id), stock_of(b.id), stock_of(c.id)) == (5, 5, 4)
