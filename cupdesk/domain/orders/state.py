"""Order dashboard state and its reducers.

Every user interaction on the order dashboard is a pure transition
``(state, event) -> state``. Derived views (statistics, the table page) are
recomputed from the resulting state by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Mapping

from cupdesk.domain.orders.aggregates import ALL, OrderStats, compute_order_stats
from cupdesk.domain.orders.payload import Order, ParseError, merge_orders, parse_orders_payload
from cupdesk.domain.orders.table import OrderFilters, SortConfig, SortKey, TablePage, build_table_page

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class OrderBoardState:
    orders: tuple[Order, ...] = ()
    error: str | None = None
    filters: OrderFilters = field(default_factory=OrderFilters)
    sort: SortConfig = field(default_factory=SortConfig)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    piece_color: str = ALL

    @property
    def order_ids(self) -> list[str]:
        return [order.main_order_id for order in self.orders]


def initial_state(page_size: int = DEFAULT_PAGE_SIZE) -> OrderBoardState:
    return OrderBoardState(page_size=page_size)


def ingest(state: OrderBoardState, payload: str | bytes | Mapping[str, Any]) -> OrderBoardState:
    try:
        incoming = parse_orders_payload(payload)
    except ParseError as exc:
        return replace(state, error=str(exc))
    merged = merge_orders(state.orders, incoming)
    return replace(state, orders=tuple(merged), error=None)


def clear(state: OrderBoardState) -> OrderBoardState:
    return initial_state(page_size=state.page_size)


def update_filters(state: OrderBoardState, **changes: Any) -> OrderBoardState:
    filters = OrderFilters.model_validate({**state.filters.model_dump(), **changes})
    return replace(state, filters=filters, page=1)


def request_sort(state: OrderBoardState, key: SortKey) -> OrderBoardState:
    direction = "asc"
    if state.sort.key == key and state.sort.direction == "asc":
        direction = "desc"
    return replace(state, sort=SortConfig(key=key, direction=direction))


def set_page(state: OrderBoardState, page: int) -> OrderBoardState:
    if page < 1:
        raise ValueError("page must be >= 1")
    return replace(state, page=page)


def set_page_size(state: OrderBoardState, page_size: int) -> OrderBoardState:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return replace(state, page_size=page_size, page=1)


def set_piece_color(state: OrderBoardState, color: str) -> OrderBoardState:
    return replace(state, piece_color=color or ALL)


def recompute_stats(state: OrderBoardState) -> OrderStats:
    return compute_order_stats(state.orders)


def table_page(state: OrderBoardState, now: datetime) -> TablePage:
    return build_table_page(state.orders, state.filters, state.sort, state.page, state.page_size, now)
