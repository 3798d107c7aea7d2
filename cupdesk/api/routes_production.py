from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from cupdesk.api.utils import get_production_service
from cupdesk.domain.production.catalog import CUP_REQUIREMENTS, PRODUCTION_CONSTRAINTS
from cupdesk.domain.production.progress import (
    component_progress,
    day_schedule,
    plan_summary,
    remaining_needs,
)
from cupdesk.domain.production.schedules import PLANS
from cupdesk.domain.production.state import ProductionState, recompute
from cupdesk.services.production_service import ProductionService

router = APIRouter(tags=["production"])


class PlanSelection(BaseModel):
    plan: str


def _state_payload(state: ProductionState) -> dict:
    return {
        "selected_plan": state.selected_plan,
        "completed_batches": sorted(state.completed),
        "progress": recompute(state).to_dict(),
    }


@router.get("/production/plans")
def list_plans():
    return {
        "plans": [plan_summary(plan) for plan in PLANS.values()],
        "variants": [requirement.to_dict() for requirement in CUP_REQUIREMENTS.values()],
        "constraints": [constraint.to_dict() for constraint in PRODUCTION_CONSTRAINTS.values()],
    }


@router.get("/production/state")
def get_state(service: ProductionService = Depends(get_production_service)):
    return _state_payload(service.state)


@router.put("/production/plan")
def select_plan(body: PlanSelection, service: ProductionService = Depends(get_production_service)):
    return _state_payload(service.select_plan(body.plan))


@router.post("/production/batches/{batch_id}/toggle")
def toggle_batch(batch_id: str, service: ProductionService = Depends(get_production_service)):
    state = service.toggle_batch(batch_id)
    return {"batch_id": batch_id, "complete": state.is_complete(batch_id), **_state_payload(state)}


@router.post("/production/reset")
def reset_state(service: ProductionService = Depends(get_production_service)):
    return _state_payload(service.reset())


@router.get("/production/schedule/{day}")
def get_day_schedule(day: int, service: ProductionService = Depends(get_production_service)):
    state = service.state
    try:
        printers = day_schedule(state.plan, day, state.completed)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"plan_id": state.selected_plan, "day": day, "printers": printers}


@router.get("/production/needs")
def get_remaining_needs(service: ProductionService = Depends(get_production_service)):
    state = service.state
    return {"plan_id": state.selected_plan, "needs": remaining_needs(recompute(state))}


@router.get("/production/components")
def get_component_progress(service: ProductionService = Depends(get_production_service)):
    state = service.state
    return {"plan_id": state.selected_plan, "components": component_progress(state.plan, recompute(state))}
