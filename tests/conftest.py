from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, delete
from sqlalchemy.orm import sessionmaker

import cupdesk.persistence.db as db
from cupdesk.persistence.models import Base, KeyValueModel


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("db") / "test.sqlite"


@pytest.fixture(scope="session", autouse=True)
def configure_test_engine(test_db_path: Path):
    engine = create_engine(
        f"sqlite+pysqlite:///{test_db_path}",
        future=True,
        connect_args={"check_same_thread": False},
    )
    TestSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

    db.engine = engine
    db.SessionLocal = TestSessionLocal

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_kv_store(configure_test_engine):
    with db.session_scope() as s:
        s.execute(delete(KeyValueModel))
    yield


@pytest.fixture()
def client(configure_test_engine):
    from cupdesk.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture()
def session(configure_test_engine):
    with db.session_scope() as s:
        yield s


def build_order(
    order_id: str,
    skus: list[tuple[str, int | None]] | None = None,
    total: str | None = "25.00",
    taxes: str | None = None,
    shipping: str | None = None,
    statuses: list[int] | None = None,
    created: int | None = 1_700_000_000,
) -> dict[str, Any]:
    sku_module = []
    for name, quantity in skus if skus is not None else [("Purple Body", 1)]:
        line: dict[str, Any] = {"sku_name": name}
        if quantity is not None:
            line["quantity"] = quantity
        sku_module.append(line)

    price_module: dict[str, Any] = {}
    if total is not None:
        price_module["grand_total"] = {"price_val": total, "format_price": f"${total}"}
    if taxes is not None:
        price_module["taxes"] = {"price_val": taxes}
    if shipping is not None:
        price_module["shipping_origin_fee"] = {"price_val": shipping}

    order: dict[str, Any] = {
        "main_order_id": order_id,
        "sku_module": sku_module,
        "price_module": price_module,
        "order_status_module": [{"main_order_status": code} for code in (statuses if statuses is not None else [101])],
    }
    if created is not None:
        order["trade_order_module"] = {"create_time": str(created)}
    return order


def build_payload(*orders: dict[str, Any]) -> dict[str, Any]:
    return {"code": 0, "data": {"main_orders": list(orders)}}


@pytest.fixture()
def make_order():
    return build_order


@pytest.fixture()
def make_payload():
    return build_payload
