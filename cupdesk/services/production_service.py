from __future__ import annotations

import logging
import threading
from contextlib import AbstractContextManager
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cupdesk.domain.production import state as tracker
from cupdesk.domain.production.state import ProductionState
from cupdesk.persistence.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

SELECTED_PLAN_KEY = "selectedPlan"
COMPLETED_BATCHES_KEY = "completedBatches"

SessionFactory = Callable[[], AbstractContextManager[Session]]


class ProductionService:
    """Batch checklist state, snapshotted to the key-value store on every change."""

    def __init__(self, session_factory: SessionFactory, default_plan: str = tracker.PLAN_72H):
        self._session_factory = session_factory
        self._default_plan = default_plan
        self._lock = threading.Lock()
        self._state = tracker.initial_state(default_plan)

    @property
    def state(self) -> ProductionState:
        return self._state

    def load(self) -> ProductionState:
        with self._session_factory() as session:
            store = KeyValueStore(session)
            selected = store.get(SELECTED_PLAN_KEY)
            completed = store.get(COMPLETED_BATCHES_KEY, {})
        with self._lock:
            self._state = tracker.restore(selected, completed, default_plan=self._default_plan)
        logger.info(
            "production state loaded: plan=%s completed_batches=%s",
            self._state.selected_plan,
            len(self._state.completed),
        )
        return self._state

    def _persist(self, state: ProductionState) -> None:
        try:
            with self._session_factory() as session:
                store = KeyValueStore(session)
                store.set(SELECTED_PLAN_KEY, state.selected_plan)
                store.set(COMPLETED_BATCHES_KEY, state.completed_map())
        except SQLAlchemyError as exc:
            logger.warning("production state snapshot failed, keeping in-memory state: %s", exc)

    def toggle_batch(self, batch_id: str) -> ProductionState:
        with self._lock:
            self._state = tracker.toggle_batch(self._state, batch_id)
            updated = self._state
        logger.info("batch toggled: batch_id=%s complete=%s", batch_id, updated.is_complete(batch_id))
        self._persist(updated)
        return updated

    def select_plan(self, plan_id: str) -> ProductionState:
        with self._lock:
            self._state = tracker.select_plan(self._state, plan_id)
            updated = self._state
        self._persist(updated)
        return updated

    def reset(self) -> ProductionState:
        with self._lock:
            self._state = tracker.reset(self._default_plan)
            updated = self._state
        try:
            with self._session_factory() as session:
                KeyValueStore(session).delete(SELECTED_PLAN_KEY, COMPLETED_BATCHES_KEY)
        except SQLAlchemyError as exc:
            logger.warning("production state reset could not clear snapshot: %s", exc)
        logger.info("production state reset: plan=%s", updated.selected_plan)
        return updated
