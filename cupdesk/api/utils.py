from __future__ import annotations

from datetime import datetime

from fastapi import Request

from cupdesk.core.config import get_settings
from cupdesk.services.orders_service import OrdersService
from cupdesk.services.production_service import ProductionService


def now_local() -> datetime:
    return datetime.now(get_settings().local_timezone())


def get_orders_service(request: Request) -> OrdersService:
    return request.app.state.orders_service


def get_production_service(request: Request) -> ProductionService:
    return request.app.state.production_service
