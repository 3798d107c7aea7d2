from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cupdesk.domain.production.catalog import CUP_REQUIREMENTS

PLAN_72H = "72h"
PLAN_1WEEK = "1week"


class UnknownPlanError(ValueError):
    pass


class UnknownBatchError(ValueError):
    pass


@dataclass(frozen=True)
class Batch:
    id: str
    day: int
    item: str
    count: int
    time: float
    start_hour: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "day": self.day,
            "item": self.item,
            "count": self.count,
            "time": self.time,
            "start_hour": self.start_hour,
        }


@dataclass(frozen=True)
class Printer:
    key: str
    name: str
    batches: tuple[Batch, ...]


@dataclass(frozen=True)
class ProductionPlan:
    plan_id: str
    label: str
    total_hours: int
    total_cups: int
    distribution: dict[str, int]
    printers: tuple[Printer, ...]

    @property
    def days(self) -> int:
        return self.total_hours // 24

    def iter_batches(self):
        for printer in self.printers:
            yield from printer.batches

    def batch_ids(self) -> set[str]:
        return {batch.id for batch in self.iter_batches()}


def _batch(batch_id: str, day: int, item: str, count: int, time: float, start_hour: float | None = None) -> Batch:
    return Batch(id=batch_id, day=day, item=item, count=count, time=time, start_hour=start_hour)


SCHEDULE_72H = ProductionPlan(
    plan_id=PLAN_72H,
    label="72 Hours",
    total_hours=72,
    total_cups=254,
    distribution={"mint": 120, "white": 48, "pink": 36, "purple": 24, "orange": 14, "lime": 12},
    printers=(
        Printer(
            "printer1",
            "Mint Bottles",
            (
                _batch("p1_d1_b1", 1, "Mint Bottles", 24, 13),
                _batch("p1_d1_b2", 1, "Mint Bottles", 24, 13, 13),
                _batch("p1_d2_b1", 2, "Mint Bottles", 24, 13),
                _batch("p1_d2_b2", 2, "Mint Bottles", 24, 13, 13),
                _batch("p1_d3_b1", 3, "Mint Bottles", 24, 13),
            ),
        ),
        Printer(
            "printer2",
            "Other Bottles",
            (
                _batch("p2_d1_b1", 1, "White Bottles", 24, 13),
                _batch("p2_d1_b2", 1, "White Bottles", 24, 13, 13),
                _batch("p2_d2_b1", 2, "Pink Bottles", 24, 13),
                _batch("p2_d2_b2", 2, "Pink Bottles", 12, 6.5, 13),
                _batch("p2_d3_b1", 3, "Purple Bottles", 24, 13),
                _batch("p2_d3_b2", 3, "Orange Bottles", 14, 7.6, 13),
                _batch("p2_d3_b3", 3, "Lime Bottles", 12, 6.5, 20.6),
            ),
        ),
        Printer(
            "printer3",
            "Lids",
            (
                _batch("p3_d1_b1", 1, "Pink Lids", 30, 8),
                _batch("p3_d1_b2", 1, "Pink Lids", 30, 8, 8),
                _batch("p3_d1_b3", 1, "Pink Lids", 30, 8, 16),
                _batch("p3_d2_b1", 2, "Pink Lids", 30, 8),
                _batch("p3_d2_b2", 2, "Gray Lids", 30, 8, 8),
                _batch("p3_d2_b3", 2, "Gray Lids", 30, 8, 16),
                _batch("p3_d3_b1", 3, "Purple Lids", 30, 8),
                _batch("p3_d3_b2", 3, "Purple Lids", 30, 8, 8),
                _batch("p3_d3_b3", 3, "Magenta Lids", 24, 6.4, 16),
                _batch("p3_d3_b4", 3, "Blue Lids", 12, 3.2, 22.4),
            ),
        ),
        Printer(
            "printer4",
            "Handles, Buttons & Rings",
            (
                _batch("p4_d1_b1", 1, "White Handles", 56, 3),
                _batch("p4_d1_b2", 1, "White Handles", 56, 3, 3),
                _batch("p4_d1_b3", 1, "White Handles", 56, 3, 6),
                _batch("p4_d1_b4", 1, "Yellow Handles", 56, 3, 9),
                _batch("p4_d1_b5", 1, "Yellow Handles", 56, 3, 12),
                _batch("p4_d1_b6", 1, "Brown Handles", 56, 3, 15),
                _batch("p4_d1_b7", 1, "Green Handles", 56, 3, 18),
                _batch("p4_d1_b8", 1, "Brown Buttons", 60, 1.5, 21),
                _batch("p4_d1_b9", 1, "Brown Buttons", 60, 1.5, 22.5),
                _batch("p4_d2_b1", 2, "Brown Buttons", 60, 1.5),
                _batch("p4_d2_b2", 2, "Black Buttons", 60, 1.5, 1.5),
                _batch("p4_d2_b3", 2, "Orange Buttons", 60, 1.5, 3),
                _batch("p4_d2_b4", 2, "Mint Buttons", 60, 1.5, 4.5),
                _batch("p4_d2_b5", 2, "Yellow Rings", 62, 0.75, 6),
                _batch("p4_d2_b6", 2, "Yellow Rings", 62, 0.75, 6.75),
                _batch("p4_d2_b7", 2, "Yellow Rings", 62, 0.75, 7.5),
                _batch("p4_d2_b8", 2, "Black Rings", 62, 0.75, 8.25),
                _batch("p4_d2_b9", 2, "Blue Rings", 62, 0.75, 9),
                _batch("p4_d2_b10", 2, "White Rings", 62, 0.75, 9.75),
                _batch("p4_d2_b11", 2, "Mint Rings", 62, 0.75, 10.5),
            ),
        ),
    ),
)

SCHEDULE_1WEEK = ProductionPlan(
    plan_id=PLAN_1WEEK,
    label="1 Week",
    total_hours=168,
    total_cups=597,
    distribution={"mint": 288, "white": 96, "pink": 85, "purple": 64, "orange": 34, "lime": 30},
    printers=(
        Printer(
            "printer1",
            "Mint Bottles",
            (
                _batch("p1_d1_b1", 1, "Mint Bottles", 24, 13),
                _batch("p1_d1_b2", 1, "Mint Bottles", 24, 13, 13),
                _batch("p1_d2_b1", 2, "Mint Bottles", 24, 13),
                _batch("p1_d2_b2", 2, "Mint Bottles", 24, 13, 13),
                _batch("p1_d3_b1", 3, "Mint Bottles", 24, 13),
                _batch("p1_d3_b2", 3, "Mint Bottles", 24, 13, 13),
                _batch("p1_d4_b1", 4, "Mint Bottles", 24, 13),
                _batch("p1_d4_b2", 4, "Mint Bottles", 24, 13, 13),
                _batch("p1_d5_b1", 5, "Mint Bottles", 24, 13),
                _batch("p1_d5_b2", 5, "Mint Bottles", 24, 13, 13),
                _batch("p1_d6_b1", 6, "Mint Bottles", 24, 13),
                _batch("p1_d6_b2", 6, "Mint Bottles", 24, 13, 13),
                _batch("p1_d7_b1", 7, "Mint Bottles", 24, 13),
            ),
        ),
        Printer(
            "printer2",
            "Other Bottles",
            (
                _batch("p2_d1_b1", 1, "White Bottles", 24, 13),
                _batch("p2_d1_b2", 1, "White Bottles", 24, 13, 13),
                _batch("p2_d2_b1", 2, "White Bottles", 24, 13),
                _batch("p2_d2_b2", 2, "White Bottles", 24, 13, 13),
                _batch("p2_d3_b1", 3, "Pink Bottles", 24, 13),
                _batch("p2_d3_b2", 3, "Pink Bottles", 24, 13, 13),
                _batch("p2_d4_b1", 4, "Pink Bottles", 24, 13),
                _batch("p2_d4_b2", 4, "Pink Bottles", 13, 7, 13),
                _batch("p2_d5_b1", 5, "Purple Bottles", 24, 13),
                _batch("p2_d5_b2", 5, "Purple Bottles", 24, 13, 13),
                _batch("p2_d6_b1", 6, "Purple Bottles", 16, 8.5),
                _batch("p2_d6_b2", 6, "Orange Bottles", 24, 13, 8.5),
                _batch("p2_d7_b1", 7, "Orange Bottles", 10, 5.5),
                _batch("p2_d7_b2", 7, "Lime Bottles", 30, 16, 5.5),
            ),
        ),
        Printer(
            "printer3",
            "Lids",
            (
                _batch("p3_d1_b1", 1, "Pink Lids", 30, 8),
                _batch("p3_d1_b2", 1, "Pink Lids", 30, 8, 8),
                _batch("p3_d1_b3", 1, "Pink Lids", 30, 8, 16),
                _batch("p3_d2_b1", 2, "Pink Lids", 30, 8),
                _batch("p3_d2_b2", 2, "Gray Lids", 30, 8, 8),
                _batch("p3_d2_b3", 2, "Gray Lids", 30, 8, 16),
                _batch("p3_d3_b1", 3, "Gray Lids", 30, 8),
                _batch("p3_d3_b2", 3, "Gray Lids", 30, 8, 8),
                _batch("p3_d3_b3", 3, "Purple Lids", 30, 8, 16),
                _batch("p3_d4_b1", 4, "Purple Lids", 30, 8),
                _batch("p3_d4_b2", 4, "Magenta Lids", 30, 8, 8),
                _batch("p3_d4_b3", 4, "Magenta Lids", 30, 8, 16),
                _batch("p3_d5_b1", 5, "Blue Lids", 30, 8),
                _batch("p3_d5_b2", 5, "Magenta Lids", 30, 8, 8),
                _batch("p3_d5_b3", 5, "Gray Lids", 30, 8, 16),
                _batch("p3_d6_b1", 6, "Blue Lids", 30, 8),
                _batch("p3_d6_b2", 6, "Gray Lids", 30, 8, 8),
                _batch("p3_d6_b3", 6, "Gray Lids", 30, 8, 16),
                _batch("p3_d7_b1", 7, "Blue Lids", 30, 8),
            ),
        ),
        Printer(
            "printer4",
            "Handles, Buttons & Rings",
            (
                _batch("p4_d1_b1", 1, "White Handles", 56, 3),
                _batch("p4_d1_b2", 1, "White Handles", 56, 3, 3),
                _batch("p4_d1_b3", 1, "White Handles", 56, 3, 6),
                _batch("p4_d1_b4", 1, "Yellow Handles", 56, 3, 9),
                _batch("p4_d1_b5", 1, "Brown Buttons", 60, 1.5, 12),
                _batch("p4_d1_b6", 1, "Brown Buttons", 60, 1.5, 13.5),
                _batch("p4_d1_b7", 1, "Yellow Rings", 62, 0.75, 15),
                _batch("p4_d1_b8", 1, "Yellow Rings", 62, 0.75, 15.75),
                _batch("p4_d1_b9", 1, "Yellow Rings", 62, 0.75, 16.5),
                _batch("p4_d2_b1", 2, "Yellow Handles", 56, 3),
                _batch("p4_d2_b2", 2, "Yellow Handles", 56, 3, 3),
                _batch("p4_d2_b3", 2, "Brown Handles", 56, 3, 6),
                _batch("p4_d2_b4", 2, "Black Buttons", 60, 1.5, 9),
                _batch("p4_d2_b5", 2, "Black Buttons", 60, 1.5, 10.5),
                _batch("p4_d2_b6", 2, "Black Rings", 62, 0.75, 12),
                _batch("p4_d2_b7", 2, "Black Rings", 62, 0.75, 12.75),
                _batch("p4_d3_b1", 3, "Green Handles", 56, 3),
                _batch("p4_d3_b2", 3, "Orange Buttons", 60, 1.5, 3),
                _batch("p4_d3_b3", 3, "Orange Buttons", 60, 1.5, 4.5),
                _batch("p4_d3_b4", 3, "Blue Rings", 62, 0.75, 6),
                _batch("p4_d3_b5", 3, "Blue Rings", 62, 0.75, 6.75),
                _batch("p4_d4_b1", 4, "White Handles", 56, 3),
                _batch("p4_d4_b2", 4, "White Handles", 56, 3, 3),
                _batch("p4_d4_b3", 4, "Mint Buttons", 60, 1.5, 6),
                _batch("p4_d4_b4", 4, "Mint Buttons", 60, 1.5, 7.5),
                _batch("p4_d4_b5", 4, "Mint Rings", 62, 0.75, 9),
                _batch("p4_d4_b6", 4, "Mint Rings", 62, 0.75, 9.75),
                _batch("p4_d5_b1", 5, "Yellow Handles", 56, 3),
                _batch("p4_d5_b2", 5, "Yellow Handles", 56, 3, 3),
                _batch("p4_d5_b3", 5, "Brown Buttons", 60, 1.5, 6),
                _batch("p4_d5_b4", 5, "White Rings", 62, 0.75, 7.5),
                _batch("p4_d5_b5", 5, "White Rings", 62, 0.75, 8.25),
                _batch("p4_d6_b1", 6, "Brown Handles", 56, 3),
                _batch("p4_d6_b2", 6, "Brown Handles", 56, 3, 3),
                _batch("p4_d6_b3", 6, "Orange Buttons", 60, 1.5, 6),
                _batch("p4_d6_b4", 6, "Yellow Rings", 62, 0.75, 7.5),
                _batch("p4_d6_b5", 6, "Yellow Rings", 62, 0.75, 8.25),
                _batch("p4_d7_b1", 7, "Green Handles", 56, 3),
                _batch("p4_d7_b2", 7, "White Buttons", 60, 1.5, 3),
                _batch("p4_d7_b3", 7, "White Rings", 62, 0.75, 4.5),
            ),
        ),
    ),
)

PLANS: dict[str, ProductionPlan] = {
    SCHEDULE_72H.plan_id: SCHEDULE_72H,
    SCHEDULE_1WEEK.plan_id: SCHEDULE_1WEEK,
}

ALL_BATCH_IDS: frozenset[str] = frozenset().union(*(plan.batch_ids() for plan in PLANS.values()))


def get_plan(plan_id: str) -> ProductionPlan:
    plan = PLANS.get(plan_id)
    if plan is None:
        raise UnknownPlanError(f"unknown production plan: {plan_id}")
    return plan


def _check_distribution(plan: ProductionPlan) -> None:
    unknown = set(plan.distribution) - set(CUP_REQUIREMENTS)
    if unknown:
        raise ValueError(f"plan {plan.plan_id} references unknown variants: {sorted(unknown)}")
    if sum(plan.distribution.values()) != plan.total_cups:
        raise ValueError(f"plan {plan.plan_id} distribution does not add up to total_cups")


for _plan in PLANS.values():
    _check_distribution(_plan)
