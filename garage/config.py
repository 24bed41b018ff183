import os
from decimal import Decimal
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # ─── Application ───────────────────────────────────────────────────────────
    APP_NAME: str = "Garage Management System"
    APP_ENV:  str = "development"
    APP_HOST:  str = "0.0.0.0"
    APP_PORT:  int = 5000

    # ─── Database ──────────────────────────────────────────────────────────────
    DATABASE_URL:          str
    DATABASE_POOL_SIZE:    int  = 10
    DATABASE_MAX_OVERFLOW: int  = 20
    DATABASE_POOL_TIMEOUT: int  = 30
    DATABASE_ECHO:         bool = False

    # ─── CORS ──────────────────────────────────────────────────────────────────
    # Empty = allow every origin (bring-up mode)
    CORS_ORIGINS: str = ""

    # ─── Files ─────────────────────────────────────────────────────────────────
    UPLOAD_ROOT:   str = os.path.join(os.getcwd(), "uploads")
    ASSETS_DIR:    str = os.path.join(os.getcwd(), "assets")
    PDF_LOGO_PATH: str | None = None

    # ─── Invoicing ─────────────────────────────────────────────────────────────
    GARAGE_STAY_RATE: Decimal = Decimal("5000")
    TAX_RATE:         Decimal = Decimal("0.18")
    CURRENCY:         str     = "RWF"

    def get_cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def logo_path(self) -> str:
        return self.PDF_LOGO_PATH or os.path.join(self.ASSETS_DIR, "logo.png")

    @property
    def invoice_archive_dir(self) -> str:
        return os.path.join(self.UPLOAD_ROOT, "invoices")

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

    model_config = {"env_file": ".env", "case_sensitive": True, "extra": "ignore"}


settings = Settings()
