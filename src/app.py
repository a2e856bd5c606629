"""Yapee FastAPI application.

Storefront JSON API under ``/api`` and the back office under ``/api/admin``.
Every admin route requires a signed-in administrator.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalogue.api import (
    admin_brand_router,
    admin_category_router,
    admin_product_router,
    brand_router,
    category_router,
    product_router,
)
from identity.api import admin_user_router, auth_router
from identity.auth import require_admin
from marketing.api import (
    admin_banner_router,
    admin_campaign_router,
    admin_flash_deal_router,
    banner_router,
    campaign_router,
    flash_deal_router,
)
from ordering.api import admin_order_router, cart_router, order_router
from reporting.api import admin_report_router
from reviews.api import review_router
from settings_store.api import admin_setting_router
from shared.config import get_config
from shared.database import db, setup_db
from shared.domain import init_domain, yapee
from shared.handlers import register_error_handlers
from shared.logging import add_context, clear_context, configure_logging, get_logger

API_PREFIX = "/api"
ADMIN_PREFIX = f"{API_PREFIX}/admin"

logger = get_logger(__name__)

# Protean-persisted aggregates are registered before the first request
init_domain()


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    configure_logging(config)
    if not db.initialized:
        db.init(config.database.url, config.database.echo)
    setup_db(db)
    logger.info("application_started", env=config.env, database=db.engine.url.render_as_string(hide_password=True))
    yield
    logger.info("application_stopped")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Yapee API",
    description="E-commerce storefront and back-office API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().cors.allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the Protean domain context for each request."""
    with yapee.domain_context():
        return await call_next(request)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Bind a request id to every log line emitted while handling the request."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    clear_context()
    add_context(request_id=request_id, method=request.method, path=request.url.path)

    started = time.perf_counter()
    try:
        response = await call_next(request)
    finally:
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
    response.headers["X-Request-ID"] = request_id
    logger.info("request_completed", status=response.status_code, duration_ms=elapsed_ms)
    clear_context()
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
for public_router in (
    auth_router,
    category_router,
    product_router,
    review_router,
    brand_router,
    flash_deal_router,
    banner_router,
    campaign_router,
    cart_router,
    order_router,
):
    app.include_router(public_router, prefix=API_PREFIX)

for admin_router in (
    admin_report_router,
    admin_order_router,
    admin_product_router,
    admin_category_router,
    admin_brand_router,
    admin_user_router,
    admin_setting_router,
    admin_campaign_router,
    admin_banner_router,
    admin_flash_deal_router,
):
    app.include_router(admin_router, prefix=ADMIN_PREFIX, dependencies=[Depends(require_admin)])


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    config = get_config()
    return JSONResponse(
        content={
            "status": "ok",
            "name": config.name,
            "env": config.env,
            "domain": {"name": yapee.name},
        }
    )
