from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.dependencies import get_admin_user
from app.models.role import RoleName
from app.models.user import User
from app.schemas.user import RoleUpdateRequest
from app.schemas.common import success_response, paginated_response
from app.services.user_service import user_service

router = APIRouter(prefix="/users")


# GET /users (admin only)
@router.get("", status_code=status.HTTP_200_OK, summary="List accounts (paginated)")
def list_users(
    page:     int                = Query(1,    ge=1),
    limit:    int                = Query(20,   ge=1, le=100),
    search:   Optional[str]      = Query(None, description="Search by name or email"),
    role:     Optional[RoleName] = Query(None),
    isActive: Optional[bool]     = Query(None),
    db:       Session            = Depends(get_db),
    _:        User               = Depends(get_admin_user),
):
    data, total = user_service.list_users(db, page, limit, search, role, isActive)
    return paginated_response("Users retrieved successfully", data, total, page, limit)


# PATCH /users/{id}/role (admin only)
@router.patch("/{user_id}/role", status_code=status.HTTP_200_OK, summary="Grant or revoke admin rights")
def update_role(
    user_id: int,
    body:    RoleUpdateRequest,
    db:      Session = Depends(get_db),
    current_user: User = Depends(get_admin_user),
):
    data = user_service.update_role(db, user_id, body, current_user.id)
    return success_response("User role updated", data)


# PATCH /users/{id}/toggle-active (admin only)
@router.patch("/{user_id}/toggle-active", status_code=status.HTTP_200_OK,
              summary="Activate or deactivate an account")
def toggle_active(
    user_id: int,
    db:      Session = Depends(get_db),
    current_user: User = Depends(get_admin_user),
):
    data = user_service.toggle_active(db, user_id, current_user.id)
    status_str = "activated" if data["isActive"] else "deactivated"
    return success_response(f"User {status_str} successfully", data)
