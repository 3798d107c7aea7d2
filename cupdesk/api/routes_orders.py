from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, ConfigDict, Field

from cupdesk.api.utils import get_orders_service, now_local
from cupdesk.core.config import get_settings
from cupdesk.domain.orders import state as board
from cupdesk.domain.orders.aggregates import ALL, filter_pieces_by_color, piece_colors
from cupdesk.domain.orders.table import DateRange, SortKey
from cupdesk.services.orders_service import OrdersService

router = APIRouter(tags=["orders"])


class FiltersUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    search: str | None = None
    status: str | None = None
    min_items: int | None = Field(default=None, ge=0)
    max_items: int | None = Field(default=None, ge=0)
    min_value: float | None = Field(default=None, ge=0)
    max_value: float | None = Field(default=None, ge=0)
    date_range: DateRange | None = None
    product_category: str | None = None
    product_type: str | None = None


class PageUpdate(BaseModel):
    page: int | None = Field(default=None, ge=1)
    page_size: int | None = Field(default=None, ge=1)


class PieceColorUpdate(BaseModel):
    color: str = ALL


def _view_state(state: board.OrderBoardState) -> dict:
    return {
        "order_count": len(state.orders),
        "error": state.error,
        "filters": state.filters.model_dump(),
        "sort": state.sort.model_dump(),
        "page": state.page,
        "page_size": state.page_size,
        "piece_color": state.piece_color,
    }


@router.post("/orders/import")
async def import_orders(request: Request, service: OrdersService = Depends(get_orders_service)):
    body = await request.body()
    if not body.strip():
        raise HTTPException(status_code=400, detail="empty payload")
    state, added = service.ingest(body)
    return {"added": added, "total": len(state.orders), "view": _view_state(state)}


@router.delete("/orders")
def clear_orders(service: OrdersService = Depends(get_orders_service)):
    state = service.clear()
    return {"cleared": True, "view": _view_state(state)}


@router.get("/orders/stats")
def get_order_stats(service: OrdersService = Depends(get_orders_service)):
    state = service.state
    return {"error": state.error, "stats": board.recompute_stats(state).to_dict()}


@router.get("/orders/pieces")
def get_pieces_required(
    color: str | None = Query(default=None, description="color token, or 'all'; defaults to the selected one"),
    service: OrdersService = Depends(get_orders_service),
):
    state = service.state
    selected = color or state.piece_color
    stats = board.recompute_stats(state)
    pieces = filter_pieces_by_color(stats.pieces_required, selected)
    return {
        "color": selected,
        "colors": piece_colors(stats.pieces_required),
        "count": len(pieces),
        "pieces": [piece.to_dict() for piece in pieces],
    }


@router.put("/orders/view/filters")
def update_filters(body: FiltersUpdate, service: OrdersService = Depends(get_orders_service)):
    changes = body.model_dump(exclude_unset=True)
    for key in ("status", "product_category", "product_type", "date_range"):
        if key in changes and changes[key] is None:
            changes[key] = ALL
    if "search" in changes and changes["search"] is None:
        changes["search"] = ""
    state = service.update_filters(**changes)
    return _view_state(state)


@router.post("/orders/view/sort/{key}")
def request_sort(key: SortKey, service: OrdersService = Depends(get_orders_service)):
    return _view_state(service.request_sort(key))


@router.put("/orders/view/page")
def update_page(body: PageUpdate, service: OrdersService = Depends(get_orders_service)):
    settings = get_settings()
    state = service.state
    if body.page_size is not None:
        if body.page_size > settings.max_page_size:
            raise HTTPException(status_code=400, detail=f"page_size must be <= {settings.max_page_size}")
        state = service.set_page_size(body.page_size)
    if body.page is not None:
        state = service.set_page(body.page)
    return _view_state(state)


@router.get("/orders/table")
def get_order_table(service: OrdersService = Depends(get_orders_service)):
    state = service.state
    page = board.table_page(state, now=now_local())
    return {"view": _view_state(state), **page.to_dict()}


@router.put("/orders/view/piece-color")
def update_piece_color(body: PieceColorUpdate, service: OrdersService = Depends(get_orders_service)):
    return _view_state(service.set_piece_color(body.color))
