from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from cupdesk.domain.orders.catalog import (
    CATEGORY_CUP,
    TYPE_OWALA,
    SkuClass,
    classify_sku,
    extract_piece_color,
    pieces_for_sku,
    status_label,
)
from cupdesk.domain.orders.payload import Order

ALL = "all"


@dataclass(frozen=True)
class SkuStat:
    name: str
    quantity: int
    classification: SkuClass

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "quantity": self.quantity, **self.classification.to_dict()}


@dataclass(frozen=True)
class NamedCount:
    name: str
    quantity: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "quantity": self.quantity}


@dataclass(frozen=True)
class FinancialStats:
    total_sales: float = 0.0
    total_taxes: float = 0.0
    total_shipping: float = 0.0
    average_order_value: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {
            "total_sales": self.total_sales,
            "total_taxes": self.total_taxes,
            "total_shipping": self.total_shipping,
            "average_order_value": self.average_order_value,
        }


@dataclass(frozen=True)
class PieceRequirement:
    name: str
    type: str
    quantity: int

    @property
    def color(self) -> str:
        return extract_piece_color(self.name)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type, "color": self.color, "quantity": self.quantity}


@dataclass(frozen=True)
class OrderStats:
    order_count: int = 0
    total_items: int = 0
    cups: int = 0
    other_items: int = 0
    sku_stats: list[SkuStat] = field(default_factory=list)
    category_stats: list[NamedCount] = field(default_factory=list)
    product_type_stats: list[NamedCount] = field(default_factory=list)
    financial: FinancialStats = field(default_factory=FinancialStats)
    status_counts: dict[str, int] = field(default_factory=dict)
    pieces_required: list[PieceRequirement] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "order_count": self.order_count,
            "total_items": self.total_items,
            "cups": self.cups,
            "other_items": self.other_items,
            "sku_stats": [row.to_dict() for row in self.sku_stats],
            "category_stats": [row.to_dict() for row in self.category_stats],
            "product_type_stats": [row.to_dict() for row in self.product_type_stats],
            "financial": self.financial.to_dict(),
            "status_counts": [{"name": name, "count": count} for name, count in self.status_counts.items()],
            "pieces_required": [piece.to_dict() for piece in self.pieces_required],
            "filter_options": {
                "statuses": list(self.status_counts),
                "categories": product_categories(self.sku_stats),
                "product_types": product_types(self.sku_stats),
                "piece_colors": piece_colors(self.pieces_required),
            },
        }


def _by_quantity_desc(counts: dict[str, int]) -> list[tuple[str, int]]:
    # sorted() is stable, so equal quantities keep first-seen order.
    return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)


def compute_sku_stats(orders: Iterable[Order]) -> list[SkuStat]:
    quantities: dict[str, int] = {}
    for order in orders:
        for line in order.sku_module:
            quantities[line.sku_name] = quantities.get(line.sku_name, 0) + line.effective_quantity
    return [
        SkuStat(name=name, quantity=quantity, classification=classify_sku(name))
        for name, quantity in _by_quantity_desc(quantities)
    ]


def _group_counts(sku_stats: Iterable[SkuStat], attr: str) -> list[NamedCount]:
    counts: dict[str, int] = {}
    for row in sku_stats:
        key = getattr(row.classification, attr)
        counts[key] = counts.get(key, 0) + row.quantity
    return [NamedCount(name=name, quantity=quantity) for name, quantity in _by_quantity_desc(counts)]


def compute_financial_stats(orders: list[Order]) -> FinancialStats:
    total_sales = sum(order.grand_total for order in orders)
    total_taxes = sum(order.taxes for order in orders)
    total_shipping = sum(order.shipping_fee for order in orders)
    average = total_sales / len(orders) if orders else 0.0
    return FinancialStats(
        total_sales=total_sales,
        total_taxes=total_taxes,
        total_shipping=total_shipping,
        average_order_value=average,
    )


def compute_status_counts(orders: Iterable[Order]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for order in orders:
        for entry in order.order_status_module:
            label = status_label(entry.main_order_status)
            counts[label] = counts.get(label, 0) + 1
    return counts


def compute_pieces_required(sku_stats: Iterable[SkuStat]) -> list[PieceRequirement]:
    totals: dict[str, int] = {}
    types: dict[str, str] = {}
    for row in sku_stats:
        if row.classification.product_type != TYPE_OWALA:
            continue
        for piece in pieces_for_sku(row.name):
            totals[piece.name] = totals.get(piece.name, 0) + row.quantity
            types[piece.name] = piece.type
    pieces = [PieceRequirement(name=name, type=types[name], quantity=qty) for name, qty in totals.items()]
    pieces.sort(key=lambda piece: (piece.type, piece.name))
    return pieces


def filter_pieces_by_color(pieces: Iterable[PieceRequirement], color: str = ALL) -> list[PieceRequirement]:
    if color == ALL:
        return list(pieces)
    return [piece for piece in pieces if piece.color == color]


def piece_colors(pieces: Iterable[PieceRequirement]) -> list[str]:
    return sorted({piece.color for piece in pieces})


def product_categories(sku_stats: Iterable[SkuStat]) -> list[str]:
    return list(dict.fromkeys(row.classification.category for row in sku_stats))


def product_types(sku_stats: Iterable[SkuStat]) -> list[str]:
    return list(dict.fromkeys(row.classification.product_type for row in sku_stats))


def compute_order_stats(orders: Iterable[Order]) -> OrderStats:
    order_list = list(orders)
    sku_stats = compute_sku_stats(order_list)
    cups = sum(row.quantity for row in sku_stats if row.classification.category == CATEGORY_CUP)
    total_items = sum(row.quantity for row in sku_stats)
    return OrderStats(
        order_count=len(order_list),
        total_items=total_items,
        cups=cups,
        other_items=total_items - cups,
        sku_stats=sku_stats,
        category_stats=_group_counts(sku_stats, "category"),
        product_type_stats=_group_counts(sku_stats, "product_type"),
        financial=compute_financial_stats(order_list),
        status_counts=compute_status_counts(order_list),
        pieces_required=compute_pieces_required(sku_stats),
    )
