from datetime import datetime, tzinfo
from fastapi import APIRouter, Depends, Query
from typing import Optional

from app.config import settings
from app.dependencies import (
    get_admin_user, get_reservation_store, get_reservation_cache,
    get_report_timezone, get_now,
)
from app.models.user import User
from app.schemas.common import success_response
from app.services.dashboard_service import dashboard_service
from app.services.reservation_cache import ReservationCache
from app.services.reservation_store import ReservationStore

router = APIRouter(prefix="/dashboard")


@router.get("", summary="Reservation statistics for the admin dashboard (Admin)")
def get_dashboard(
    days:  Optional[int] = Query(None, ge=1, le=90, description="Length of the per-day series"),
    top:   Optional[int] = Query(None, ge=1, le=20, description="Entries in the popular-cars ranking"),
    store: ReservationStore = Depends(get_reservation_store),
    cache: ReservationCache = Depends(get_reservation_cache),
    now:   datetime         = Depends(get_now),
    tz:    tzinfo           = Depends(get_report_timezone),
    _:     User             = Depends(get_admin_user),
):
    data = dashboard_service.overview(
        store, cache, now, tz,
        days=days or settings.DASHBOARD_DAYS,
        top=top or settings.DASHBOARD_TOP,
    )
    return success_response("Dashboard statistics generated", data)
