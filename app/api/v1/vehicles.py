from fastapi import APIRouter, Depends, Query
from typing import Optional

from app.dependencies import get_admin_user
from app.models.user import User
from app.schemas.common import success_response
from app.services.vehicle_service import vehicle_service

router = APIRouter(prefix="/vehicles")


@router.get("", summary="Fleet catalog (Admin)")
def list_vehicles(
    category: Optional[str] = Query(None),
    _:        User          = Depends(get_admin_user),
):
    return success_response("Vehicles retrieved successfully", vehicle_service.list_vehicles(category))


@router.get("/categories", summary="Fleet categories (Admin)")
def list_categories(_: User = Depends(get_admin_user)):
    return success_response("Categories retrieved", vehicle_service.list_categories())


@router.get("/{vehicle_id}", summary="Get vehicle by ID (Admin)")
def get_vehicle(vehicle_id: int, _: User = Depends(get_admin_user)):
    return success_response("Vehicle retrieved", vehicle_service.get_vehicle(vehicle_id))
