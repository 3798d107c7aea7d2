from cupdesk.domain.production.catalog import CUP_REQUIREMENTS, CupRequirement, normalize_component_name
from cupdesk.domain.production.progress import ProgressStats, compute_progress
from cupdesk.domain.production.schedules import (
    PLANS,
    ProductionPlan,
    UnknownBatchError,
    UnknownPlanError,
    get_plan,
)
from cupdesk.domain.production.state import ProductionState

__all__ = [
    "CUP_REQUIREMENTS",
    "CupRequirement",
    "PLANS",
    "ProductionPlan",
    "ProductionState",
    "ProgressStats",
    "UnknownBatchError",
    "UnknownPlanError",
    "compute_progress",
    "get_plan",
    "normalize_component_name",
]
