import pytest

from pos_core.config import Config
from pos_core.db import SnapshotStore
from pos_core.models import Customer, DBState, Item, Settings, Store


@pytest.fixture
def config(tmp_path):
    return Config(db_path=str(tmp_path / "pos.db"), snapshot_key="pos_db")


@pytest.fixture
def snapshot_store(config):
    return SnapshotStore(config=config)


@pytest.fixture
def state():
    """Two items in one store, one customer who already owes 30."""
    return DBState(
        items=(
            Item(id="A", code="A-1", name="Tea", sale_price=10, purchase_price=6,
                 quantity=20, store_id="S1", low_stock_threshold=5),
            Item(id="B", code="B-1", name="Sugar", sale_price=25,
                 quantity=6, store_id="S1", low_stock_threshold=5),
        ),
        customers=(Customer(id="X", name="Hassan", phone="0100", address="Cairo", balance=30),),
        stores=(Store(id="S1", name="Main Store"),),
        sales=(),
        settings=Settings(company_name="Test Shop", currency="EGP", username="admin", password="secret"),
    )
