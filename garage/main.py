import logging
import os
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

import garage.models  # noqa: F401  registers every model before mappers configure
from garage.config import settings
from garage.database import check_db_connection, get_db
from garage.schemas.common import ErrorResponse
from garage.utils.exceptions import AppException
from garage.middleware.error_handler import (
    app_exception_handler,
    validation_exception_handler,
    integrity_error_handler,
    generic_exception_handler,
)

from garage.api.v1 import parts
from garage.api.v1 import workers
from garage.api.v1 import services
from garage.api.v1 import vehicles
from garage.api.v1 import invoices
from garage.api.v1 import archive

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description="Garage administration API: vehicles, services, parts, workers and invoicing",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        responses={
            400: {"model": ErrorResponse, "description": "Validation or precondition failure"},
            404: {"model": ErrorResponse, "description": "Resource not found"},
            409: {"model": ErrorResponse, "description": "Conflicts with existing data"},
        },
    )

    # ─── CORS ─────────────────────────────────────────────────────────────────
    # No configured origins = permissive during bring-up
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins() or ["*"],
        allow_credentials=False,
        allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # ─── Exception Handlers ───────────────────────────────────────────────────
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # ─── Routers ──────────────────────────────────────────────────────────────
    PREFIX = "/api"
    app.include_router(parts.router,    prefix=PREFIX, tags=["Parts"])
    app.include_router(workers.router,  prefix=PREFIX, tags=["Workers"])
    app.include_router(services.router, prefix=PREFIX, tags=["Services"])
    app.include_router(vehicles.router, prefix=PREFIX, tags=["Vehicles"])
    app.include_router(invoices.router, prefix=PREFIX, tags=["Invoices"])
    app.include_router(archive.router,  prefix=PREFIX, tags=["Archive"])

    # ─── Uploaded files ───────────────────────────────────────────────────────
    os.makedirs(settings.invoice_archive_dir, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_ROOT), name="uploads")

    # ─── Startup ──────────────────────────────────────────────────────────────
    @app.on_event("startup")
    def on_startup():
        ok = check_db_connection()
        logger.info("DB connection successful" if ok else "DB connection FAILED")

    # ─── Health ───────────────────────────────────────────────────────────────
    @app.get("/healthz", tags=["Health"])
    def health(db: Session = Depends(get_db)):
        try:
            db.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Health check failed: {e}")
            return JSONResponse(status_code=500, content={"ok": False})
        return {"ok": True}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("garage.main:app", host=settings.APP_HOST, port=settings.APP_PORT,
                reload=settings.is_development)
