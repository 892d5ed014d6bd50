from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.dependencies import get_admin_user
from app.models.user import User
from app.schemas.common import paginated_response
from app.services.audit_service import audit_service

router = APIRouter(prefix="/audit-logs")


@router.get("", summary="Audit logs (Admin)")
def get_audit_logs(
    page:       int           = Query(1, ge=1),
    limit:      int           = Query(50, ge=1, le=200),
    userId:     Optional[int] = Query(None),
    entityType: Optional[str] = Query(None, description="Reservation | User"),
    action:     Optional[str] = Query(None),
    db:         Session       = Depends(get_db),
    _:          User          = Depends(get_admin_user),
):
    data, total = audit_service.list_logs(db, page, limit, userId, entityType, action)
    return paginated_response("Audit logs retrieved", data, total, page, limit)
