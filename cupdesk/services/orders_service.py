from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping

from cupdesk.domain.orders import state as board
from cupdesk.domain.orders.payload import ParseError
from cupdesk.domain.orders.state import OrderBoardState
from cupdesk.domain.orders.table import SortKey

logger = logging.getLogger(__name__)


class OrdersService:
    """Owns the in-memory order board and applies reducers one at a time."""

    def __init__(self, page_size: int = board.DEFAULT_PAGE_SIZE):
        self._lock = threading.Lock()
        self._state = board.initial_state(page_size=page_size)

    @property
    def state(self) -> OrderBoardState:
        return self._state

    def _apply(self, reducer: Callable[..., OrderBoardState], *args: Any, **kwargs: Any) -> OrderBoardState:
        with self._lock:
            self._state = reducer(self._state, *args, **kwargs)
            return self._state

    def ingest(self, payload: str | bytes | Mapping[str, Any]) -> tuple[OrderBoardState, int]:
        with self._lock:
            before = len(self._state.orders)
            updated = board.ingest(self._state, payload)
            self._state = updated
        if updated.error:
            logger.warning("order import rejected: %s", updated.error)
            raise ParseError(updated.error)
        added = len(updated.orders) - before
        logger.info("order import merged: added=%s total=%s", added, len(updated.orders))
        return updated, added

    def clear(self) -> OrderBoardState:
        cleared = self._apply(board.clear)
        logger.info("order board cleared")
        return cleared

    def update_filters(self, **changes: Any) -> OrderBoardState:
        return self._apply(board.update_filters, **changes)

    def request_sort(self, key: SortKey) -> OrderBoardState:
        return self._apply(board.request_sort, key)

    def set_page(self, page: int) -> OrderBoardState:
        return self._apply(board.set_page, page)

    def set_page_size(self, page_size: int) -> OrderBoardState:
        return self._apply(board.set_page_size, page_size)

    def set_piece_color(self, color: str) -> OrderBoardState:
        return self._apply(board.set_piece_color, color)
