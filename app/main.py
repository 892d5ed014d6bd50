import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from app.config import settings
from app.database import SessionLocal, check_db_connection, create_tables
from app.seed import seed_roles, ensure_admin
from app.services.reservation_cache import ReservationCache
from app.utils.exceptions import AppException
from app.middleware.error_handler import (
    app_exception_handler,
    validation_exception_handler,
    integrity_error_handler,
    generic_exception_handler,
)

from app.api.v1 import auth
from app.api.v1 import users
from app.api.v1 import reservations
from app.api.v1 import dashboard
from app.api.v1 import vehicles
from app.api.v1 import audit_logs

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=APP_VERSION,
        description="Car rental admin back-office API: reservations, dashboard statistics, fleet",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # ─── Shared state ─────────────────────────────────────────────────────────
    app.state.reservation_cache = ReservationCache(ttl_seconds=settings.RESERVATION_CACHE_TTL_SECONDS)

    # ─── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ─── Exception Handlers ───────────────────────────────────────────────────
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # ─── Routers ──────────────────────────────────────────────────────────────
    PREFIX = "/api/v1"
    app.include_router(auth.router,         prefix=PREFIX, tags=["Auth"])
    app.include_router(users.router,        prefix=PREFIX, tags=["Users"])
    app.include_router(reservations.router, prefix=PREFIX, tags=["Reservations"])
    app.include_router(dashboard.router,    prefix=PREFIX, tags=["Dashboard"])
    app.include_router(vehicles.router,     prefix=PREFIX, tags=["Vehicles"])
    app.include_router(audit_logs.router,   prefix=PREFIX, tags=["Audit Logs"])

    # ─── Startup ──────────────────────────────────────────────────────────────
    @app.on_event("startup")
    def on_startup():
        ok = check_db_connection()
        logger.info("DB connected" if ok else "DB connection FAILED")
        if ok and settings.DATABASE_AUTO_CREATE:
            create_tables()
            db = SessionLocal()
            try:
                seed_roles(db)
                ensure_admin(db)
            finally:
                db.close()

    # ─── Health ───────────────────────────────────────────────────────────────
    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok", "app": settings.APP_NAME, "version": APP_VERSION}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.APP_HOST, port=settings.APP_PORT,
                reload=settings.is_development)
