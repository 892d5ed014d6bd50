from datetime import datetime, timezone, tzinfo

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.user import User
from app.models.role import RoleName
from app.services.reservation_cache import ReservationCache
from app.services.reservation_store import ReservationStore, SqlReservationStore
from app.utils.reservation_stats import resolve_timezone
from app.utils.security import verify_access_token
from app.utils.exceptions import (
    UnauthorizedException,
    ForbiddenException,
    AccountInactiveException,
)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


# ─── Get Current User ─────────────────────────────────────────────────────────
def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Validate JWT Bearer token and return the current User.
    Raises 401 if token is missing, invalid, expired, or the user is gone.
    Raises 403 if account is inactive.
    """
    if not credentials:
        raise UnauthorizedException("No authentication token provided")

    payload = verify_access_token(credentials.credentials)
    user_id: str | None = payload.get("sub")

    if user_id is None:
        raise UnauthorizedException("Invalid token payload")

    user = db.query(User).filter(User.id == int(user_id)).first()
    if not user:
        raise UnauthorizedException("Account no longer exists")

    if not user.isActive:
        raise AccountInactiveException()

    return user


# ─── Role Guards ──────────────────────────────────────────────────────────────
def require_roles(*roles: RoleName):
    """
    Factory that returns a FastAPI dependency requiring one of the given roles.

    Usage:
        @router.get("/admin-only")
        def admin_route(current_user = Depends(require_roles(RoleName.ADMIN))):
            ...
    """
    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role.name not in roles:
            raise ForbiddenException(
                f"This action requires one of these roles: {[r.value for r in roles]}"
            )
        return current_user
    return dependency


def get_admin_user(current_user: User = Depends(require_roles(RoleName.ADMIN))) -> User:
    return current_user


# ─── Reservations ─────────────────────────────────────────────────────────────
def get_reservation_store(db: Session = Depends(get_db)) -> ReservationStore:
    return SqlReservationStore(db)


def get_reservation_cache(request: Request) -> ReservationCache:
    return request.app.state.reservation_cache


def get_now() -> datetime:
    """Reference instant for dashboard windows. Overridden in tests."""
    return datetime.now(timezone.utc)


def get_report_timezone() -> tzinfo:
    return resolve_timezone(settings.REPORT_TIMEZONE)
