from datetime import date, tzinfo
from fastapi import APIRouter, Depends, Query
from typing import Optional

from app.dependencies import (
    get_admin_user, get_reservation_store, get_reservation_cache, get_report_timezone,
)
from app.models.user import User
from app.schemas.common import success_response, paginated_response
from app.services.reservation_cache import ReservationCache
from app.services.reservation_service import reservation_service
from app.services.reservation_store import ReservationStore

router = APIRouter(prefix="/reservations")


@router.get("", summary="List reservations, newest first (Admin)")
def list_reservations(
    page:      int            = Query(1, ge=1),
    limit:     int            = Query(50, ge=1, le=200),
    search:    Optional[str]  = Query(None, description="Matches car name or category"),
    startDate: Optional[date] = Query(None, description="Created on or after (YYYY-MM-DD)"),
    endDate:   Optional[date] = Query(None, description="Created on or before (YYYY-MM-DD)"),
    store:     ReservationStore = Depends(get_reservation_store),
    cache:     ReservationCache = Depends(get_reservation_cache),
    tz:        tzinfo           = Depends(get_report_timezone),
    _:         User             = Depends(get_admin_user),
):
    data, total = reservation_service.list_reservations(
        store, cache, page, limit, search, startDate, endDate, tz,
    )
    return paginated_response("Reservations retrieved successfully", data, total, page, limit)


@router.get("/{reservation_id}", summary="Get reservation by ID (Admin)")
def get_reservation(
    reservation_id: str,
    store: ReservationStore = Depends(get_reservation_store),
    tz:    tzinfo           = Depends(get_report_timezone),
    _:     User             = Depends(get_admin_user),
):
    return success_response("Reservation retrieved",
                            reservation_service.get_reservation(store, reservation_id, tz))


@router.delete("/{reservation_id}", summary="Delete reservation permanently (Admin)")
def delete_reservation(
    reservation_id: str,
    store: ReservationStore = Depends(get_reservation_store),
    cache: ReservationCache = Depends(get_reservation_cache),
    current_user: User      = Depends(get_admin_user),
):
    reservation_service.delete_reservation(store, cache, reservation_id, current_user.id)
    return success_response("Reservation deleted", None)
