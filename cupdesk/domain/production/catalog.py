from __future__ import annotations

from dataclasses import dataclass
from typing import Any

COMPONENT_KINDS = ("bottle", "lid", "button", "ring", "handle")


@dataclass(frozen=True)
class CupRequirement:
    key: str
    name: str
    bottle: str
    lid: str
    button: str
    ring: str
    handle: str
    sales_percentage: float

    def components(self) -> dict[str, str]:
        return {kind: getattr(self, kind) for kind in COMPONENT_KINDS}

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "components": self.components(),
            "sales_percentage": self.sales_percentage,
        }


@dataclass(frozen=True)
class ProductionConstraint:
    kind: str
    capacity: int
    time_hours: float

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "capacity": self.capacity, "time_hours": self.time_hours}


CUP_REQUIREMENTS: dict[str, CupRequirement] = {
    req.key: req
    for req in (
        CupRequirement("mint", "Mint", "Mint Bottle", "Pink Lid", "Brown Button", "Yellow Ring", "White Handle", 48.2),
        CupRequirement("white", "White", "White Bottle", "Gray Lid", "Black Button", "Black Ring", "White Handle", 16.3),
        CupRequirement("pink", "Pink", "Pink Bottle", "Purple Lid", "Brown Button", "Yellow Ring", "Yellow Handle", 14.2),
        CupRequirement(
            "purple", "Purple", "Purple Bottle", "Magenta Lid", "Orange Button", "Blue Ring", "Yellow Handle", 10.6
        ),
        CupRequirement(
            "orange", "Orange", "Orange Bottle", "Gray Lid", "Orange Button", "White Ring", "Brown Handle", 5.7
        ),
        CupRequirement("lime", "Lime", "Lime Bottle", "Blue Lid", "Mint Button", "Mint Ring", "Green Handle", 5.0),
    )
}

# Printer capacity per batch and print time in hours, per component kind.
PRODUCTION_CONSTRAINTS: dict[str, ProductionConstraint] = {
    "bottle": ProductionConstraint("bottle", capacity=24, time_hours=13),
    "lid": ProductionConstraint("lid", capacity=30, time_hours=8),
    "handle": ProductionConstraint("handle", capacity=56, time_hours=3),
    "button": ProductionConstraint("button", capacity=60, time_hours=1.5),
    "ring": ProductionConstraint("ring", capacity=62, time_hours=0.75),
}


def normalize_component_name(name: str) -> str:
    normalized = name.strip().lower()
    if normalized.endswith("s"):
        normalized = normalized[:-1]
    return normalized


def matches_component(batch_item: str, component: str) -> bool:
    return normalize_component_name(batch_item) == normalize_component_name(component)
