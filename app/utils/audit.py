from sqlalchemy.orm import Session
from app.models.audit_log import AuditLog


def log_action(
    db: Session,
    user_id: int | None,
    action: str,
    entity_type: str,
    entity_id: int | str | None = None,
    description: str | None = None,
) -> None:
    """
    Add an audit log entry to the current transaction.

    Args:
        db:          Active DB session (adds but does NOT commit, caller commits)
        user_id:     ID of the operator performing the action (None = system action)
        action:      Verb: DELETE, GRANT_ADMIN, REVOKE_ADMIN, LOGIN, LOGOUT, ...
        entity_type: "Reservation" or "User"
        entity_id:   Primary key of the affected record (reservation UUIDs are strings)
        description: Human-readable description (shown in the audit log view)

    Usage:
        log_action(db, current_user.id, "DELETE", "Reservation", reservation_id,
                   f"Deleted reservation for {row.carName}")
        db.commit()
    """
    db.add(AuditLog(
        userId=user_id,
        action=action,
        entityType=entity_type,
        entityId=str(entity_id) if entity_id is not None else None,
        description=description,
    ))
