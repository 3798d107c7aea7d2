from __future__ import annotations

import json
import math
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

INVALID_JSON_MESSAGE = "Invalid JSON format. Please check your data and try again."
MISSING_ORDERS_MESSAGE = "Invalid JSON format: missing main_orders array"


class ParseError(ValueError):
    pass


def _to_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    # NaN and infinities are not JSON-serializable totals.
    return result if math.isfinite(result) else 0.0


class _Module(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class SkuLine(_Module):
    sku_name: str = ""
    quantity: int | None = None

    @field_validator("sku_name", mode="before")
    @classmethod
    def _name_to_str(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def _lenient_quantity(cls, value: Any) -> int | None:
        if value in (None, ""):
            return None
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            return None

    @property
    def effective_quantity(self) -> int:
        # A missing or zero quantity counts as a single unit.
        return self.quantity or 1


class PriceField(_Module):
    price_val: str | float | int | None = None
    format_price: str | None = None

    @field_validator("price_val", mode="before")
    @classmethod
    def _scalar_or_none(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return None
        return value

    @field_validator("format_price", mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @property
    def amount(self) -> float:
        return _to_float(self.price_val)

    def display(self) -> str:
        if self.format_price:
            return self.format_price
        return "" if self.price_val is None else str(self.price_val)


class PriceModule(_Module):
    grand_total: PriceField | None = None
    taxes: PriceField | None = None
    shipping_origin_fee: PriceField | None = None

    @field_validator("grand_total", "taxes", "shipping_origin_fee", mode="before")
    @classmethod
    def _object_or_none(cls, value: Any) -> Any:
        return value if isinstance(value, Mapping) else None


class OrderStatusEntry(_Module):
    main_order_status: int | None = None

    @field_validator("main_order_status", mode="before")
    @classmethod
    def _lenient_code(cls, value: Any) -> int | None:
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            return None


class TradeOrderModule(_Module):
    create_time: int | None = None

    @field_validator("create_time", mode="before")
    @classmethod
    def _lenient_time(cls, value: Any) -> int | None:
        if value in (None, ""):
            return None
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return None


class Order(_Module):
    main_order_id: str
    sku_module: list[SkuLine] = Field(default_factory=list)
    price_module: PriceModule | None = None
    order_status_module: list[OrderStatusEntry] = Field(default_factory=list)
    trade_order_module: TradeOrderModule | None = None

    @field_validator("main_order_id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise ValueError("main_order_id must be a string")
        text = str(value).strip()
        if not text:
            raise ValueError("main_order_id must not be empty")
        return text

    @field_validator("sku_module", "order_status_module", mode="before")
    @classmethod
    def _objects_only(cls, value: Any) -> list:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, Mapping)]

    @field_validator("price_module", "trade_order_module", mode="before")
    @classmethod
    def _object_or_none(cls, value: Any) -> Any:
        return value if isinstance(value, Mapping) else None

    @property
    def item_count(self) -> int:
        return sum(line.effective_quantity for line in self.sku_module)

    @property
    def grand_total(self) -> float:
        if self.price_module is None or self.price_module.grand_total is None:
            return 0.0
        return self.price_module.grand_total.amount

    @property
    def taxes(self) -> float:
        if self.price_module is None or self.price_module.taxes is None:
            return 0.0
        return self.price_module.taxes.amount

    @property
    def shipping_fee(self) -> float:
        if self.price_module is None or self.price_module.shipping_origin_fee is None:
            return 0.0
        return self.price_module.shipping_origin_fee.amount

    @property
    def create_time(self) -> int:
        if self.trade_order_module is None or self.trade_order_module.create_time is None:
            return 0
        return self.trade_order_module.create_time

    @property
    def first_status_code(self) -> int | None:
        if not self.order_status_module:
            return None
        return self.order_status_module[0].main_order_status


def _load(payload: str | bytes | Mapping[str, Any]) -> Any:
    if isinstance(payload, Mapping):
        return payload
    text = payload.decode("utf-8") if isinstance(payload, bytes) else payload
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(INVALID_JSON_MESSAGE) from exc


def parse_orders_payload(payload: str | bytes | Mapping[str, Any]) -> list[Order]:
    data = _load(payload)
    if not isinstance(data, Mapping):
        raise ParseError(MISSING_ORDERS_MESSAGE)
    inner = data.get("data")
    if not isinstance(inner, Mapping):
        raise ParseError(MISSING_ORDERS_MESSAGE)
    raw_orders = inner.get("main_orders")
    if not isinstance(raw_orders, list):
        raise ParseError(MISSING_ORDERS_MESSAGE)

    orders: list[Order] = []
    for index, raw in enumerate(raw_orders):
        if not isinstance(raw, Mapping):
            raise ParseError(f"Invalid JSON format: main_orders[{index}] is not an object")
        try:
            orders.append(Order.model_validate(raw))
        except ValidationError as exc:
            raise ParseError(f"Invalid JSON format: main_orders[{index}] is missing main_order_id") from exc
    return orders


def merge_orders(existing: Iterable[Order], incoming: Iterable[Order]) -> list[Order]:
    merged = list(existing)
    known = {order.main_order_id for order in merged}
    for order in incoming:
        if order.main_order_id in known:
            continue
        known.add(order.main_order_id)
        merged.append(order)
    return merged
