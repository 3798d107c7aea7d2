from cupdesk.domain.orders.aggregates import OrderStats, compute_order_stats
from cupdesk.domain.orders.catalog import SkuClass, classify_sku, status_label
from cupdesk.domain.orders.payload import Order, ParseError, merge_orders, parse_orders_payload
from cupdesk.domain.orders.state import OrderBoardState
from cupdesk.domain.orders.table import OrderFilters, SortConfig, build_table_page

__all__ = [
    "Order",
    "OrderBoardState",
    "OrderFilters",
    "OrderStats",
    "ParseError",
    "SkuClass",
    "SortConfig",
    "build_table_page",
    "classify_sku",
    "compute_order_stats",
    "merge_orders",
    "parse_orders_payload",
    "status_label",
]
