from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class Settings(BaseSettings):
    # ─── Application ───────────────────────────────────────────────────────────
    APP_NAME: str = "Ou Faris Drive Car Admin"
    APP_ENV:  str = "development"
    APP_HOST:  str = "0.0.0.0"
    APP_PORT:  int = 8000

    # ─── Database ──────────────────────────────────────────────────────────────
    DATABASE_URL:          str  = "sqlite:///./car_rental.db"
    DATABASE_POOL_SIZE:    int  = 10
    DATABASE_MAX_OVERFLOW: int  = 20
    DATABASE_POOL_TIMEOUT: int  = 30
    DATABASE_ECHO:         bool = False
    DATABASE_AUTO_CREATE:  bool = True    # create tables + seed roles on startup

    # ─── JWT ───────────────────────────────────────────────────────────────────
    SECRET_KEY:                    str
    ALGORITHM:                     str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES:   int = 15
    REFRESH_TOKEN_EXPIRE_DAYS:     int = 7

    # ─── Bootstrap admin ───────────────────────────────────────────────────────
    ADMIN_EMAIL:    str | None = None
    ADMIN_PASSWORD: str | None = None

    # ─── Dashboard ─────────────────────────────────────────────────────────────
    REPORT_TIMEZONE:               str = "UTC"
    DASHBOARD_DAYS:                int = 7
    DASHBOARD_TOP:                 int = 5
    RESERVATION_CACHE_TTL_SECONDS: int = 60

    # ─── CORS ──────────────────────────────────────────────────────────────────
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173,http://localhost:8080"

    @field_validator("REPORT_TIMEZONE")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        if not v or v.upper() == "UTC":
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {v!r}")
        return v

    def get_cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    model_config = {"env_file": ".env", "case_sensitive": True, "extra": "ignore"}


settings = Settings()
