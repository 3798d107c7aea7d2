from __future__ import annotations

import pytest

from cupdesk.domain.orders.aggregates import (
    compute_order_stats,
    filter_pieces_by_color,
    piece_colors,
)
from cupdesk.domain.orders.payload import parse_orders_payload


def _stats(make_payload, *orders):
    return compute_order_stats(parse_orders_payload(make_payload(*orders)))


def test_single_owala_order_expands_into_pieces(make_order, make_payload):
    stats = _stats(make_payload, make_order("A1", skus=[("Purple Body", 2)]))

    assert stats.order_count == 1
    assert stats.total_items == 2
    assert stats.cups == 2
    assert stats.other_items == 0
    assert [(p.type, p.name, p.quantity) for p in stats.pieces_required] == [
        ("Bottle", "Purple Bottle", 2),
        ("Button", "Orange Button", 2),
        ("Handle", "Yellow Handle", 2),
        ("Lid", "Magenta Lid", 2),
        ("Ring", "Blue Ring", 2),
    ]


def test_shared_pieces_are_summed_across_skus(make_order, make_payload):
    stats = _stats(
        make_payload,
        make_order("A1", skus=[("Purple Body", 2), ("Orange Body", 1)]),
        make_order("A2", skus=[("Orange Body", 3), ("Green", 4), ("Default", 1)]),
    )

    pieces = {p.name: p.quantity for p in stats.pieces_required}
    assert pieces["Orange Button"] == 6
    assert pieces["Orange Bottle"] == 4
    assert "Green" not in pieces
    assert stats.cups == 10
    assert stats.other_items == 1


def test_sku_stats_sorted_by_quantity_with_stable_ties(make_order, make_payload):
    stats = _stats(
        make_payload,
        make_order("A1", skus=[("Blue", 1), ("Default", 2), ("White Body", 1)]),
        make_order("A2", skus=[("Default", 1), ("Gradient", None)]),
    )

    assert [(row.name, row.quantity) for row in stats.sku_stats] == [
        ("Default", 3),
        ("Blue", 1),
        ("White Body", 1),
        ("Gradient", 1),
    ]
    assert [(row.name, row.quantity) for row in stats.category_stats] == [("Other", 3), ("Cup", 3)]
    assert [(row.name, row.quantity) for row in stats.product_type_stats] == [
        ("Keychain", 3),
        ("Stanley", 2),
        ("Owala", 1),
    ]


def test_financial_stats(make_order, make_payload):
    stats = _stats(
        make_payload,
        make_order("A1", total="30.00", taxes="2.40", shipping="5.00"),
        make_order("A2", total="10.50", taxes="0.84"),
        make_order("A3", total=None),
    )

    assert stats.financial.total_sales == pytest.approx(40.5)
    assert stats.financial.total_taxes == pytest.approx(3.24)
    assert stats.financial.total_shipping == pytest.approx(5.0)
    assert stats.financial.average_order_value == pytest.approx(13.5)


def test_empty_stats_have_zero_average():
    stats = compute_order_stats([])
    assert stats.order_count == 0
    assert stats.financial.average_order_value == 0.0
    assert stats.pieces_required == []


def test_status_counts_use_every_status_entry(make_order, make_payload):
    stats = _stats(
        make_payload,
        make_order("A1", statuses=[101]),
        make_order("A2", statuses=[102, 103]),
        make_order("A3", statuses=[999]),
        make_order("A4", statuses=[101]),
    )

    assert stats.status_counts == {
        "Awaiting Shipment": 2,
        "Shipped": 1,
        "Delivered": 1,
        "Status 999": 1,
    }


def test_piece_color_filter(make_order, make_payload):
    stats = _stats(make_payload, make_order("A1", skus=[("Lime/Neon Green Body", 1), ("White Body", 1)]))

    assert piece_colors(stats.pieces_required) == ["Black", "Blue", "Gray", "Green", "Lime Green", "Mint Green", "White"]
    mint = filter_pieces_by_color(stats.pieces_required, "Mint Green")
    assert [p.name for p in mint] == ["Mint Green Button", "Mint Green Ring"]
    assert len(filter_pieces_by_color(stats.pieces_required)) == len(stats.pieces_required)


def test_stats_dict_exposes_filter_options(make_order, make_payload):
    stats = _stats(make_payload, make_order("A1", skus=[("Default", 1), ("Pink Body", 1)], statuses=[104]))
    data = stats.to_dict()

    assert data["status_counts"] == [{"name": "Completed", "count": 1}]
    assert data["filter_options"]["statuses"] == ["Completed"]
    assert data["filter_options"]["categories"] == ["Other", "Cup"]
    assert data["filter_options"]["product_types"] == ["Keychain", "Owala"]
    assert "Pink" in data["filter_options"]["piece_colors"]


def test_non_finite_prices_count_as_zero(make_order, make_payload):
    stats = _stats(
        make_payload,
        make_order("A1", total="NaN", taxes="Infinity"),
        make_order("A2", total="12.00", shipping="-Infinity"),
    )

    assert stats.financial.total_sales == pytest.approx(12.0)
    assert stats.financial.total_taxes == 0.0
    assert stats.financial.total_shipping == 0.0
    assert stats.financial.average_order_value == pytest.approx(6.0)
