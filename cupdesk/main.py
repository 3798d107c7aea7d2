from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cupdesk.api.routes_orders import router as orders_router
from cupdesk.api.routes_production import router as production_router
from cupdesk.core.config import get_settings
from cupdesk.core.logging import configure_logging
from cupdesk.domain.orders.payload import ParseError
from cupdesk.domain.production.schedules import UnknownBatchError, UnknownPlanError
from cupdesk.persistence import db
from cupdesk.services.orders_service import OrdersService
from cupdesk.services.production_service import ProductionService

configure_logging()
logger = logging.getLogger(__name__)
settings = get_settings()

app = FastAPI(title=settings.app_name)


@app.on_event("startup")
def on_startup() -> None:
    db.init_db()
    app.state.orders_service = OrdersService(page_size=settings.default_page_size)
    # Resolve the session factory at call time so tests can swap the engine.
    production = ProductionService(session_factory=lambda: db.session_scope(), default_plan=settings.default_plan)
    production.load()
    app.state.production_service = production
    logger.info("dashboard ready: env=%s plan=%s", settings.env, production.state.selected_plan)


@app.exception_handler(ParseError)
async def parse_error_handler(_: Request, exc: ParseError):
    return JSONResponse(
        status_code=400,
        content={
            "detail": str(exc),
            "error": "parse_error",
        },
    )


@app.exception_handler(UnknownPlanError)
@app.exception_handler(UnknownBatchError)
async def unknown_reference_handler(_: Request, exc: ValueError):
    return JSONResponse(
        status_code=404,
        content={
            "detail": str(exc),
            "error": "not_found",
        },
    )


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok"}


app.include_router(orders_router)
app.include_router(production_router)


def run() -> None:
    uvicorn.run("cupdesk.main:app", host=settings.api_host, port=settings.api_port)
