from sqlalchemy.orm import Session

from app.models.audit_log import AuditLog


class AuditService:

    def list_logs(
        self, db: Session, page: int, limit: int,
        user_id: int | None, entity_type: str | None, action: str | None,
    ) -> tuple[list[dict], int]:
        q = db.query(AuditLog)
        if user_id:     q = q.filter(AuditLog.userId     == user_id)
        if entity_type: q = q.filter(AuditLog.entityType == entity_type)
        if action:      q = q.filter(AuditLog.action     == action)

        total = q.count()
        items = q.order_by(AuditLog.createdAt.desc(), AuditLog.id.desc())\
                 .offset((page - 1) * limit).limit(limit).all()

        return [{
            "id":          l.id,
            "user":        {"id": l.user.id, "email": l.user.email} if l.user else None,
            "action":      l.action,
            "entityType":  l.entityType,
            "entityId":    l.entityId,
            "description": l.description,
            "createdAt":   l.createdAt.isoformat(),
        } for l in items], total


audit_service = AuditService()
