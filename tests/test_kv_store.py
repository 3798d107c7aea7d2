from __future__ import annotations

from cupdesk.persistence.kv_store import KeyValueStore
from cupdesk.persistence.models import KeyValueModel


def test_set_get_and_overwrite(session):
    store = KeyValueStore(session)
    assert store.get("selectedPlan") is None
    assert store.get("selectedPlan", "72h") == "72h"

    store.set("selectedPlan", "1week")
    store.set("completedBatches", {"p1_d1_b1": True})
    assert store.get("selectedPlan") == "1week"
    assert store.get("completedBatches") == {"p1_d1_b1": True}

    store.set("selectedPlan", "72h")
    assert store.get("selectedPlan") == "72h"
    assert store.get("completedBatches") == {"p1_d1_b1": True}


def test_delete(session):
    store = KeyValueStore(session)
    store.set("a", 1)
    store.set("b", 2)

    assert store.delete("a", "missing") == 1
    assert store.delete() == 0
    assert store.get("a") is None
    assert store.get("b") == 2


def test_corrupt_value_reads_as_default(session):
    session.add(KeyValueModel(key="completedBatches", value="{broken"))
    session.flush()

    assert KeyValueStore(session).get("completedBatches", {}) == {}
