from __future__ import annotations

import logging
from contextlib import contextmanager

from sqlalchemy.exc import OperationalError

import cupdesk.persistence.db as db
from cupdesk.persistence.kv_store import KeyValueStore
from cupdesk.services.production_service import (
    COMPLETED_BATCHES_KEY,
    SELECTED_PLAN_KEY,
    ProductionService,
)


def _service() -> ProductionService:
    return ProductionService(session_factory=lambda: db.session_scope(), default_plan="72h")


def _snapshot() -> tuple:
    with db.session_scope() as s:
        store = KeyValueStore(s)
        return store.get(SELECTED_PLAN_KEY), store.get(COMPLETED_BATCHES_KEY)


def test_changes_are_snapshotted_and_reloaded():
    service = _service()
    service.load()
    service.toggle_batch("p2_d1_b1")
    service.select_plan("1week")

    assert _snapshot() == ("1week", {"p2_d1_b1": True})

    reloaded = _service()
    state = reloaded.load()
    assert state.selected_plan == "1week"
    assert state.is_complete("p2_d1_b1")


def test_reset_clears_snapshot():
    service = _service()
    service.toggle_batch("p2_d1_b1")
    service.select_plan("1week")

    state = service.reset()

    assert state.selected_plan == "72h"
    assert not state.completed
    assert _snapshot() == (None, None)


def test_load_ignores_stale_snapshot_entries():
    with db.session_scope() as s:
        store = KeyValueStore(s)
        store.set(SELECTED_PLAN_KEY, "fortnight")
        store.set(COMPLETED_BATCHES_KEY, {"p1_d1_b1": True, "gone": True})

    state = _service().load()
    assert state.selected_plan == "72h"
    assert state.completed == frozenset({"p1_d1_b1"})


def test_snapshot_failure_keeps_in_memory_state(caplog):
    @contextmanager
    def broken_session():
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))
        yield

    service = ProductionService(session_factory=broken_session, default_plan="72h")
    with caplog.at_level(logging.WARNING, logger="cupdesk.services.production_service"):
        state = service.toggle_batch("p1_d1_b1")

    assert state.is_complete("p1_d1_b1")
    assert "snapshot failed" in caplog.text
