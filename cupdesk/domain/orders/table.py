from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterable, Literal

from pydantic import BaseModel, ConfigDict, Field

from cupdesk.domain.orders.catalog import classify_sku, status_label
from cupdesk.domain.orders.payload import Order

SortKey = Literal["date", "items", "total", "id"]
SortDirection = Literal["asc", "desc"]
DateRange = Literal["all", "today", "week", "month"]

ALL = "all"


class OrderFilters(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    search: str = ""
    status: str = ALL
    min_items: int | None = Field(default=None, ge=0)
    max_items: int | None = Field(default=None, ge=0)
    min_value: float | None = Field(default=None, ge=0)
    max_value: float | None = Field(default=None, ge=0)
    date_range: DateRange = ALL
    product_category: str = ALL
    product_type: str = ALL


class SortConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: SortKey = "date"
    direction: SortDirection = "desc"


@dataclass(frozen=True)
class TablePage:
    rows: list[dict[str, Any]]
    total: int
    page: int
    page_size: int
    total_pages: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": self.rows,
            "total": self.total,
            "page": self.page,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
        }


def _months_back(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 - months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def date_cutoff(date_range: DateRange, now: datetime) -> datetime | None:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    if date_range == "today":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if date_range == "week":
        return now - timedelta(days=7)
    if date_range == "month":
        return _months_back(now, 1)
    return None


def _has_sku_matching(order: Order, predicate: Callable[[str], bool]) -> bool:
    return any(predicate(line.sku_name) for line in order.sku_module)


def filter_orders(orders: Iterable[Order], filters: OrderFilters, now: datetime) -> list[Order]:
    result = list(orders)

    if filters.search:
        needle = filters.search.lower()
        result = [order for order in result if needle in order.main_order_id.lower()]

    if filters.status != ALL:
        wanted = filters.status.lower()
        result = [
            order
            for order in result
            if order.order_status_module and status_label(order.first_status_code).lower() == wanted
        ]

    if filters.min_items is not None:
        result = [order for order in result if order.item_count >= filters.min_items]
    if filters.max_items is not None:
        result = [order for order in result if order.item_count <= filters.max_items]

    if filters.min_value is not None:
        result = [order for order in result if order.grand_total >= filters.min_value]
    if filters.max_value is not None:
        result = [order for order in result if order.grand_total <= filters.max_value]

    cutoff = date_cutoff(filters.date_range, now)
    if cutoff is not None:
        cutoff_ts = cutoff.timestamp()
        result = [order for order in result if order.create_time and order.create_time >= cutoff_ts]

    if filters.product_category != ALL:
        result = [
            order
            for order in result
            if _has_sku_matching(order, lambda name: classify_sku(name).category == filters.product_category)
        ]
    if filters.product_type != ALL:
        result = [
            order
            for order in result
            if _has_sku_matching(order, lambda name: classify_sku(name).product_type == filters.product_type)
        ]

    return result


_SORT_KEYS: dict[str, Callable[[Order], Any]] = {
    "date": lambda order: order.create_time,
    "items": lambda order: order.item_count,
    "total": lambda order: order.grand_total,
    "id": lambda order: order.main_order_id,
}


def sort_orders(orders: Iterable[Order], sort: SortConfig) -> list[Order]:
    ordered = sorted(orders, key=_SORT_KEYS[sort.key])
    if sort.direction == "desc":
        # Descending is the mirror image of ascending, ties included.
        ordered.reverse()
    return ordered


def paginate(items: list, page: int, page_size: int) -> tuple[list, int]:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    if page < 1:
        raise ValueError("page must be >= 1")
    total_pages = math.ceil(len(items) / page_size)
    start = (page - 1) * page_size
    return items[start : start + page_size], total_pages


def order_row(order: Order) -> dict[str, Any]:
    grand_total = order.price_module.grand_total if order.price_module else None
    skus = []
    for line in order.sku_module:
        classification = classify_sku(line.sku_name)
        skus.append({"sku_name": line.sku_name, "quantity": line.effective_quantity, **classification.to_dict()})
    return {
        "main_order_id": order.main_order_id,
        "create_time": order.create_time or None,
        "item_count": order.item_count,
        "status": status_label(order.first_status_code) if order.order_status_module else None,
        "total": order.grand_total,
        "total_display": grand_total.display() if grand_total is not None else "N/A",
        "categories": list(dict.fromkeys(sku["category"] for sku in skus)),
        "product_types": list(dict.fromkeys(sku["product_type"] for sku in skus)),
        "skus": skus,
    }


def build_table_page(
    orders: Iterable[Order],
    filters: OrderFilters,
    sort: SortConfig,
    page: int,
    page_size: int,
    now: datetime,
) -> TablePage:
    visible = sort_orders(filter_orders(orders, filters, now), sort)
    current, total_pages = paginate(visible, page, page_size)
    return TablePage(
        rows=[order_row(order) for order in current],
        total=len(visible),
        page=page,
        page_size=page_size,
        total_pages=total_pages,
    )
