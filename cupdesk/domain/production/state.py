from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

from cupdesk.domain.production.progress import ProgressStats, compute_progress
from cupdesk.domain.production.schedules import (
    ALL_BATCH_IDS,
    PLAN_72H,
    PLANS,
    ProductionPlan,
    UnknownBatchError,
    UnknownPlanError,
    get_plan,
)


@dataclass(frozen=True)
class ProductionState:
    selected_plan: str = PLAN_72H
    completed: frozenset[str] = frozenset()

    @property
    def plan(self) -> ProductionPlan:
        return get_plan(self.selected_plan)

    def is_complete(self, batch_id: str) -> bool:
        return batch_id in self.completed

    def completed_map(self) -> dict[str, bool]:
        return {batch_id: True for batch_id in sorted(self.completed)}


def initial_state(default_plan: str = PLAN_72H) -> ProductionState:
    if default_plan not in PLANS:
        raise UnknownPlanError(f"unknown production plan: {default_plan}")
    return ProductionState(selected_plan=default_plan)


def restore(selected_plan: Any, completed_map: Any, default_plan: str = PLAN_72H) -> ProductionState:
    """Rebuild state from persisted snapshots, dropping anything unrecognized."""
    plan_id = selected_plan if isinstance(selected_plan, str) and selected_plan in PLANS else default_plan
    completed: set[str] = set()
    if isinstance(completed_map, Mapping):
        completed = {
            str(batch_id)
            for batch_id, done in completed_map.items()
            if done is True and str(batch_id) in ALL_BATCH_IDS
        }
    return ProductionState(selected_plan=plan_id, completed=frozenset(completed))


def toggle_batch(state: ProductionState, batch_id: str) -> ProductionState:
    if batch_id not in state.plan.batch_ids():
        raise UnknownBatchError(f"unknown batch for plan {state.selected_plan}: {batch_id}")
    if batch_id in state.completed:
        return replace(state, completed=state.completed - {batch_id})
    return replace(state, completed=state.completed | {batch_id})


def select_plan(state: ProductionState, plan_id: str) -> ProductionState:
    get_plan(plan_id)
    return replace(state, selected_plan=plan_id)


def reset(default_plan: str = PLAN_72H) -> ProductionState:
    return initial_state(default_plan)


def recompute(state: ProductionState) -> ProgressStats:
    return compute_progress(state.plan, state.completed)
