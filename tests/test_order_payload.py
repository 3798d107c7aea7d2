from __future__ import annotations

import json

import pytest

from cupdesk.domain.orders.payload import (
    INVALID_JSON_MESSAGE,
    MISSING_ORDERS_MESSAGE,
    ParseError,
    merge_orders,
    parse_orders_payload,
)


def test_malformed_json_is_rejected():
    with pytest.raises(ParseError) as exc:
        parse_orders_payload('{"data": {"main_orders": [')
    assert str(exc.value) == INVALID_JSON_MESSAGE


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"data": None},
        {"data": {}},
        {"data": {"main_orders": {"not": "a list"}}},
        [1, 2, 3],
    ],
)
def test_missing_main_orders_is_rejected(payload):
    with pytest.raises(ParseError) as exc:
        parse_orders_payload(json.dumps(payload))
    assert str(exc.value) == MISSING_ORDERS_MESSAGE


def test_order_without_id_is_rejected(make_order, make_payload):
    broken = make_order("A1")
    del broken["main_order_id"]
    with pytest.raises(ParseError):
        parse_orders_payload(make_payload(make_order("A0"), broken))


def test_lenient_field_parsing(make_payload):
    payload = make_payload(
        {
            "main_order_id": 5761234,
            "sku_module": [{"sku_name": "Green"}, {"sku_name": "Default", "quantity": 3}, "junk"],
            "price_module": {"grand_total": {"price_val": "not-a-number"}, "taxes": {"price_val": 1.25}},
            "order_status_module": "nope",
            "trade_order_module": {"create_time": "1712000000"},
            "buyer_module": {"ignored": True},
        }
    )
    [order] = parse_orders_payload(payload)

    assert order.main_order_id == "5761234"
    assert [line.effective_quantity for line in order.sku_module] == [1, 3]
    assert order.item_count == 4
    assert order.grand_total == 0.0
    assert order.taxes == pytest.approx(1.25)
    assert order.shipping_fee == 0.0
    assert order.order_status_module == []
    assert order.create_time == 1712000000


def test_bytes_payload_is_accepted(make_order, make_payload):
    raw = json.dumps(make_payload(make_order("B1"))).encode("utf-8")
    assert [o.main_order_id for o in parse_orders_payload(raw)] == ["B1"]


def test_merge_orders_dedups_by_id(make_order, make_payload):
    first = parse_orders_payload(make_payload(make_order("A1"), make_order("A2")))
    second = parse_orders_payload(
        make_payload(make_order("A2", total="99.00"), make_order("A3"), make_order("A3", total="1.00"))
    )

    merged = merge_orders(first, second)

    assert [o.main_order_id for o in merged] == ["A1", "A2", "A3"]
    # Known ids keep their first record; within a payload the first occurrence wins.
    assert merged[1].grand_total == pytest.approx(25.0)
    assert merged[2].grand_total == pytest.approx(25.0)


def test_merge_orders_is_idempotent(make_order, make_payload):
    orders = parse_orders_payload(make_payload(make_order("A1"), make_order("A2")))
    once = merge_orders([], orders)
    twice = merge_orders(once, orders)
    assert len(twice) == len(once) == 2


def test_out_of_range_numbers_fall_back():
    raw = (
        '{"data": {"main_orders": [{"main_order_id": "N1",'
        ' "sku_module": [{"sku_name": "White Body", "quantity": 1e400}],'
        ' "price_module": {"grand_total": {"price_val": "NaN"}, "taxes": {"price_val": 1e400},'
        ' "shipping_origin_fee": {"price_val": "-Infinity"}},'
        ' "order_status_module": [{"main_order_status": 1e400}],'
        ' "trade_order_module": {"create_time": 1e400}}]}}'
    )
    [order] = parse_orders_payload(raw)

    assert order.item_count == 1
    assert order.grand_total == 0.0
    assert order.taxes == 0.0
    assert order.shipping_fee == 0.0
    assert order.first_status_code is None
    assert order.create_time == 0
