"""
Import all models here so that:
1. Alembic can auto-detect them when generating migrations
2. Relationships between models resolve correctly

Order matters: import parent tables before child tables.
"""

from app.models.role import Role, RoleName
from app.models.user import User
from app.models.refresh_token import RefreshToken
from app.models.reservation import Reservation
from app.models.audit_log import AuditLog

__all__ = [
    "Role",
    "RoleName",
    "User",
    "RefreshToken",
    "Reservation",
    "AuditLog",
]
