"""
Parts Ledger FastAPI Application Entry Point

- Global exception handler (domain exceptions → HTTP responses)
- Observer Pattern: EventBus initialized at startup with AuditLogHandler
- Reorder scheduler started/stopped with the application lifecycle
"""
import logging
import time
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from partsledger.config import settings
from partsledger.database import create_tables, engine
from partsledger.core.exceptions import PartsLedgerException, to_http_exception
from partsledger.services.reorder_scheduler import ReorderScheduler
from partsledger.utils.events import configure_event_bus
from partsledger.utils.logging import configure_logging
from partsledger.routers import inventory, orders, reorder

configure_logging(log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Inventory ledger, purchase orders and automatic reordering for a parts catalog",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS Middleware ───────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """
    Adds request correlation metadata.
    - Reads incoming X-Request-ID (if present) or generates one
    - Exposes request_id on request.state for handlers/endpoints
    - Adds timing header
    """
    start = time.perf_counter()
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    response = await call_next(request)

    duration_ms = (time.perf_counter() - start) * 1000
    if settings.ENABLE_REQUEST_ID:
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"

    if settings.ENABLE_REQUEST_LOGGING:
        logger.info(
            "request_completed method=%s path=%s status=%s duration_ms=%.2f request_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request_id,
        )

    return response

# ── Global Exception Handlers ─────────────────────────────────────────────────

@app.exception_handler(PartsLedgerException)
async def parts_ledger_exception_handler(request: Request, exc: PartsLedgerException) -> JSONResponse:
    """Routers never catch domain exceptions; they all end up here."""
    http_exc = to_http_exception(exc)
    return JSONResponse(
        status_code=http_exc.status_code,
        content={"success": False, "error": http_exc.detail},
    )


# ── API Routers ───────────────────────────────────────────────────────────────
API_PREFIX = "/api"
app.include_router(inventory.router, prefix=API_PREFIX)
app.include_router(orders.router, prefix=API_PREFIX)
app.include_router(reorder.router, prefix=API_PREFIX)


# ── Lifecycle Events ──────────────────────────────────────────────────────────

@app.on_event("startup")
def startup_event():
    """
    Application startup:
    1. Create database tables (development only; production runs Alembic)
    2. Initialize EventBus with AuditLogHandler (Observer Pattern)
    3. Start the reorder scheduler when enabled
    """
    logger.info("Starting %s v%s", settings.APP_NAME, settings.APP_VERSION)
    if settings.AUTO_CREATE_TABLES:
        create_tables()
    configure_event_bus()
    logger.info("EventBus initialized with AuditLogHandler")

    app.state.reorder_scheduler = None
    if settings.AUTO_REORDER_ENABLED:
        scheduler = ReorderScheduler()
        scheduler.start()
        app.state.reorder_scheduler = scheduler


@app.on_event("shutdown")
def shutdown_event():
    scheduler = getattr(app.state, "reorder_scheduler", None)
    if scheduler is not None:
        scheduler.stop()
    logger.info("%s shutting down.", settings.APP_NAME)


# ── Health Endpoints ──────────────────────────────────────────────────────────

@app.get("/health", tags=["Health"])
def health_check():
    return {"status": "healthy", "app": settings.APP_NAME}


@app.get("/ready", tags=["Health"])
def readiness_check(request: Request):
    """
    Lightweight readiness endpoint intended for orchestrators.
    """
    db_ok = True
    db_error = None

    if settings.READINESS_CHECK_DATABASE:
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as exc:  # noqa: BLE001
            db_ok = False
            db_error = str(exc)

    status = "ready" if db_ok else "not_ready"
    status_code = 200 if db_ok else 503

    return JSONResponse(
        status_code=status_code,
        content={
            "status": status,
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "request_id": getattr(request.state, "request_id", None),
            "checks": {
                "database": {
                    "enabled": settings.READINESS_CHECK_DATABASE,
                    "ok": db_ok,
                    "error": db_error,
                }
            },
        },
    )
