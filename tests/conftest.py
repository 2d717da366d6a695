"""Shared fixtures: a file-backed SQLite database per test."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from order_inventory.database import Base, build_engine, get_db
from order_inventory.main import app
from order_inventory.models import Product
from order_inventory.services.order_service import OrderService


@pytest.fixture
def engine(tmp_path):
    eng = build_engine(f"sqlite:///{tmp_path / 'orders.db'}", timeout_seconds=30)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def service(db):
    return OrderService(db)


@pytest.fixture
def make_product(db):
    def _make(name="Widget", price=100.0, stock=5, **fields):
        product = Product(name=name, price=price, stock=stock, images=[], **fields)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product
    return _make


@pytest.fixture
def stock_of(session_factory):
    """Read committed stock through a fresh session."""
    def _stock(product_id):
        session = session_factory()
        try:
            return session.get(Product, product_id).stock
        finally:
            session.close()
    return _stock


@pytest.fixture
def client(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
