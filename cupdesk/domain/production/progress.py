from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable

from cupdesk.domain.production.catalog import (
    COMPONENT_KINDS,
    CUP_REQUIREMENTS,
    matches_component,
    normalize_component_name,
)
from cupdesk.domain.production.schedules import ProductionPlan


@dataclass
class CupProgress:
    variant: str
    total: int
    completed: int = 0
    components_completed: dict[str, int] = field(default_factory=lambda: {kind: 0 for kind in COMPONENT_KINDS})

    @property
    def remaining(self) -> int:
        return self.total - self.completed

    def to_dict(self) -> dict[str, Any]:
        return {
            "variant": self.variant,
            "name": CUP_REQUIREMENTS[self.variant].name,
            "total": self.total,
            "completed": self.completed,
            "remaining": self.remaining,
            "components_completed": dict(self.components_completed),
        }


@dataclass
class ProgressStats:
    plan_id: str
    total_cups: int
    total_completed: int
    total_remaining: int
    components_completed: dict[str, int]
    components_remaining: dict[str, int]
    cups_progress: dict[str, CupProgress]

    @property
    def percent_complete(self) -> float:
        if not self.total_cups:
            return 0.0
        return self.total_completed / self.total_cups * 100

    def to_dict(self) -> dict[str, Any]:
        return {
            "plan_id": self.plan_id,
            "total_cups": self.total_cups,
            "total_completed": self.total_completed,
            "total_remaining": self.total_remaining,
            "percent_complete": round(self.percent_complete, 1),
            "components_completed": dict(self.components_completed),
            "components_remaining": dict(self.components_remaining),
            "cups_progress": [progress.to_dict() for progress in self.cups_progress.values()],
        }


def compute_progress(plan: ProductionPlan, completed_ids: Iterable[str]) -> ProgressStats:
    completed = set(completed_ids)
    components_completed: dict[str, int] = {}
    components_remaining: dict[str, int] = {}
    cups = {
        variant: CupProgress(variant=variant, total=total)
        for variant, total in plan.distribution.items()
    }

    for batch in plan.iter_batches():
        if batch.id not in completed:
            components_remaining[batch.item] = components_remaining.get(batch.item, 0) + batch.count
            continue
        components_completed[batch.item] = components_completed.get(batch.item, 0) + batch.count
        for variant, progress in cups.items():
            requirement = CUP_REQUIREMENTS[variant]
            for kind, component in requirement.components().items():
                if matches_component(batch.item, component):
                    progress.components_completed[kind] += batch.count

    for progress in cups.values():
        buildable = min(progress.components_completed.values())
        progress.completed = max(0, min(buildable, progress.total))

    total_completed = sum(progress.completed for progress in cups.values())
    return ProgressStats(
        plan_id=plan.plan_id,
        total_cups=plan.total_cups,
        total_completed=total_completed,
        total_remaining=plan.total_cups - total_completed,
        components_completed=components_completed,
        components_remaining=components_remaining,
        cups_progress=cups,
    )


def remaining_needs(progress: ProgressStats) -> list[dict[str, Any]]:
    needs = []
    for cup in progress.cups_progress.values():
        if cup.remaining <= 0:
            continue
        requirement = CUP_REQUIREMENTS[cup.variant]
        components = requirement.components()
        needs.append(
            {
                "variant": cup.variant,
                "name": requirement.name,
                "completed": cup.completed,
                "total": cup.total,
                "remaining": cup.remaining,
                "needed": {
                    kind: {
                        "component": components[kind],
                        "count": max(0, cup.remaining - cup.components_completed[kind]),
                    }
                    for kind in COMPONENT_KINDS
                },
            }
        )
    return needs


def component_needs(plan: ProductionPlan) -> dict[str, dict[str, int]]:
    needs: dict[str, dict[str, int]] = {kind: {} for kind in COMPONENT_KINDS}
    for variant, count in plan.distribution.items():
        for kind, component in CUP_REQUIREMENTS[variant].components().items():
            needs[kind][component] = needs[kind].get(component, 0) + count
    return needs


def _sum_matching(counts: dict[str, int], component: str) -> int:
    key = normalize_component_name(component)
    return sum(count for item, count in counts.items() if normalize_component_name(item) == key)


def component_progress(plan: ProductionPlan, progress: ProgressStats) -> dict[str, list[dict[str, Any]]]:
    lists: dict[str, list[dict[str, Any]]] = {}
    for kind, needs in component_needs(plan).items():
        rows = []
        for component, needed in needs.items():
            done = _sum_matching(progress.components_completed, component)
            rows.append(
                {
                    "component": component,
                    "needed": needed,
                    "completed": done,
                    "scheduled_remaining": _sum_matching(progress.components_remaining, component),
                    "percent_complete": round(done / needed * 100, 1) if needed else 0.0,
                }
            )
        lists[kind] = rows
    return lists


def plan_summary(plan: ProductionPlan) -> dict[str, Any]:
    return {
        "plan_id": plan.plan_id,
        "label": plan.label,
        "total_hours": plan.total_hours,
        "total_cups": plan.total_cups,
        "days": plan.days,
        # Halves round up.
        "daily_target": math.floor(plan.total_cups / (plan.total_hours / 24) + 0.5),
        "distribution": [
            {
                "variant": variant,
                "name": CUP_REQUIREMENTS[variant].name,
                "cups": count,
                "percentage": round(count / plan.total_cups * 100, 1) if plan.total_cups else 0.0,
            }
            for variant, count in plan.distribution.items()
        ],
    }


def day_schedule(plan: ProductionPlan, day: int, completed_ids: Iterable[str]) -> list[dict[str, Any]]:
    if day < 1 or day > plan.days:
        raise ValueError(f"day must be between 1 and {plan.days} for plan {plan.plan_id}")
    completed = set(completed_ids)
    printers = []
    for printer in plan.printers:
        batches = [batch for batch in printer.batches if batch.day == day]
        if not batches:
            continue
        printers.append(
            {
                "printer": printer.key,
                "name": printer.name,
                "batches": [
                    {
                        **batch.to_dict(),
                        "start_hour_display": math.floor(batch.start_hour or 0),
                        "complete": batch.id in completed,
                    }
                    for batch in batches
                ],
            }
        )
    return printers
