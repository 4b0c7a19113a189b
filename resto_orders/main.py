"""
FastAPI Application Entry Point

Staff order management for a hotel restaurant: browse the menu, place
room-service orders, track status and payment, notify the kitchen,
print bills and export the day's orders.

Endpoints:
    - GET  /api/menu: Menu grouped by category
    - POST /api/orders: Place an order
    - GET  /api/orders: List orders (date / status / room filters)
    - GET  /api/orders/{id}: Single order with items and history
    - POST /api/orders/{id}/items: Append items
    - PUT  /api/orders/{id}: Update status, payment status or notes
    - POST /api/orders/{id}/send-whatsapp: Send ticket to the kitchen
    - GET  /api/orders/{id}/print: Printable HTML bill
    - GET  /api/export/csv: CSV export for one day
    - GET  /health: System health check

Every /api/orders and /api/export route requires the staff passphrase.
"""

import logging
from dataclasses import asdict
from datetime import date, datetime
from functools import lru_cache
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Header, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from resto_orders.core.config import Settings, get_settings, setup_logging
from resto_orders.core.exceptions import OrderNotFoundError, OrderValidationError
from resto_orders.menu import MENU_VERSIONS, MENUS, filter_menu, group_menu_by_category
from resto_orders.schemas import (
    AddItemsRequest,
    ErrorResponse,
    HealthResponse,
    MenuResponse,
    OkResponse,
    OrderCreate,
    OrderResponse,
    OrderUpdate,
)
from resto_orders.models import OrderStatus
from resto_orders.services.auth import CredentialValidator, get_credential_validator
from resto_orders.services.billing import render_bill
from resto_orders.services.export import export_filename, orders_to_csv
from resto_orders.services.notifications import BaseKitchenNotifier, get_kitchen_notifier
from resto_orders.store import OrderFilter, OrderStore

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


@lru_cache()
def get_order_store() -> OrderStore:
    """Process-wide order store. Orders live only as long as the process."""
    return OrderStore(default_menu_version=settings.default_menu_version)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    logger.info("=" * 60)
    logger.info(f"Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    notifier = get_kitchen_notifier()
    logger.info(f"Kitchen Notifier: {notifier.provider_name}")

    logger.info("Application ready")

    yield

    logger.info(f"Shutting down, discarding {len(get_order_store())} in-memory orders")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Room-service order management for restaurant staff.",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# AUTHENTICATION
# =============================================================================

def require_passphrase(
    x_passphrase: Optional[str] = Header(None, alias="x-passphrase"),
    pass_param: Optional[str] = Query(None, alias="pass"),
    validator: CredentialValidator = Depends(get_credential_validator),
) -> None:
    """Reject the request unless the header or ``pass`` query matches."""
    if not validator.validate(x_passphrase or pass_param):
        raise HTTPException(status_code=401, detail="Unauthorized")


orders_router = APIRouter(
    prefix="/api",
    tags=["Orders"],
    dependencies=[Depends(require_passphrase)],
    responses={401: {"model": ErrorResponse}},
)

public_router = APIRouter(prefix="/api", tags=["Menu"])


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    store: OrderStore = Depends(get_order_store),
    notifier: BaseKitchenNotifier = Depends(get_kitchen_notifier),
) -> HealthResponse:
    """Report store size and kitchen notifier status."""
    notifier_ok = await notifier.health_check()

    return HealthResponse(
        status="operational" if notifier_ok else "degraded",
        orders_in_memory=len(store),
        notification_service=f"{notifier.provider_name}: {'healthy' if notifier_ok else 'unhealthy'}",
        timestamp=datetime.now(),
    )


# =============================================================================
# MENU ENDPOINTS
# =============================================================================

@public_router.get("/ping")
async def ping() -> dict[str, str]:
    return {"message": settings.ping_message}


@public_router.get("/menu/versions")
async def menu_versions() -> list[str]:
    return list(MENU_VERSIONS)


@public_router.get(
    "/menu",
    response_model=MenuResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_menu(
    version: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    q: Optional[str] = Query(None, description="Case-insensitive name search"),
) -> MenuResponse:
    """Menu items grouped by category, in the fixed category order."""
    version = version or settings.default_menu_version
    if version not in MENUS:
        raise HTTPException(status_code=404, detail=f"Unknown menu version {version}")

    items = filter_menu(MENUS[version], search=q, category=category)
    return MenuResponse(
        version=version,
        categories=[asdict(group) for group in group_menu_by_category(items)],
    )


# =============================================================================
# ORDER API ENDPOINTS
# =============================================================================

@orders_router.post(
    "/orders",
    response_model=OrderResponse,
    summary="Place Order",
)
async def create_order(
    order_data: OrderCreate,
    store: OrderStore = Depends(get_order_store),
) -> OrderResponse:
    logger.info(f"Creating order for room {order_data.room_no or '-'}")

    order = store.create(
        guest_name=order_data.guest_name,
        room_no=order_data.room_no,
        notes=order_data.notes,
        menu_version=order_data.menu_version,
        items=[item.to_spec() for item in order_data.items],
    )
    return OrderResponse.model_validate(order)


@orders_router.get(
    "/orders",
    response_model=list[OrderResponse],
    summary="List Orders",
)
async def list_orders(
    day: Optional[date] = Query(None, alias="date"),
    status: Optional[str] = Query(None),
    room_no: Optional[str] = Query(None),
    store: OrderStore = Depends(get_order_store),
) -> list[OrderResponse]:
    """
    All matching orders, newest first.

    ``status`` is an exact match; a value no order can have lists nothing.
    """
    if status:
        try:
            status_filter = OrderStatus(status)
        except ValueError:
            return []
    else:
        status_filter = None

    orders = store.list_orders(OrderFilter(day=day, status=status_filter, room_no=room_no or None))
    return [OrderResponse.model_validate(order) for order in orders]


@orders_router.get(
    "/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(
    order_id: str,
    store: OrderStore = Depends(get_order_store),
) -> OrderResponse:
    return OrderResponse.model_validate(store.get(order_id))


@orders_router.post(
    "/orders/{order_id}/items",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def add_order_items(
    order_id: str,
    body: AddItemsRequest,
    store: OrderStore = Depends(get_order_store),
) -> OrderResponse:
    """Append items as new lines; the order moves to ``Updated``."""
    order = store.add_items(order_id, [item.to_spec() for item in body.items])
    return OrderResponse.model_validate(order)


@orders_router.put(
    "/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_order(
    order_id: str,
    body: OrderUpdate,
    store: OrderStore = Depends(get_order_store),
) -> OrderResponse:
    order = store.update_fields(
        order_id,
        status=body.status,
        payment_status=body.payment_status,
        notes=body.resolved_notes(),
    )
    return OrderResponse.model_validate(order)


@orders_router.post(
    "/orders/{order_id}/send-whatsapp",
    response_model=OkResponse,
    responses={404: {"model": ErrorResponse}},
)
async def send_whatsapp(
    order_id: str,
    store: OrderStore = Depends(get_order_store),
    notifier: BaseKitchenNotifier = Depends(get_kitchen_notifier),
) -> OkResponse:
    """
    Send the order ticket to the kitchen.

    A failed delivery is logged but does not fail the request; the
    attempt is always recorded in the order history.
    """
    order = store.get(order_id)

    result = await notifier.send_order_to_kitchen(order)
    if not result.success:
        logger.warning(
            f"Kitchen notification for {order.order_no} failed "
            f"via {result.provider}: {result.error_message}"
        )

    store.record_whatsapp_sent(order_id)
    return OkResponse(ok=True)


@orders_router.get(
    "/orders/{order_id}/print",
    response_class=HTMLResponse,
)
async def print_bill(
    order_id: str,
    store: OrderStore = Depends(get_order_store),
    app_settings: Settings = Depends(get_settings),
) -> Response:
    """Printable HTML bill; the page opens the print dialog itself."""
    try:
        order = store.get(order_id)
    except OrderNotFoundError:
        return PlainTextResponse("Order not found", status_code=404)

    return HTMLResponse(render_bill(order, app_settings))


@orders_router.get(
    "/export/csv",
    response_class=Response,
    responses={400: {"model": ErrorResponse}},
)
async def export_csv(
    day: Optional[date] = Query(None, alias="date"),
    store: OrderStore = Depends(get_order_store),
) -> Response:
    """CSV attachment of every order created on ``date``."""
    if day is None:
        raise HTTPException(status_code=400, detail="date required")

    content = orders_to_csv(store.orders_for_day(day))
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(day)}"'},
    )


app.include_router(public_router)
app.include_router(orders_router)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(OrderNotFoundError)
async def order_not_found_handler(request: Request, exc: OrderNotFoundError) -> JSONResponse:
    logger.info(f"Order {exc.order_id} not found ({request.method} {request.url.path})")
    return JSONResponse(status_code=404, content={"error": "order not found"})


@app.exception_handler(OrderValidationError)
async def order_validation_handler(request: Request, exc: OrderValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "resto_orders.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )
