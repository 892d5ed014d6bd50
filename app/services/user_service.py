from sqlalchemy.orm import Session
from sqlalchemy import or_

from app.models.user import User
from app.models.role import Role, RoleName
from app.schemas.user import RoleUpdateRequest
from app.utils.audit import log_action
from app.utils.exceptions import NotFoundException, ForbiddenException


def _serialize_user(u: User) -> dict:
    return {
        "id":        u.id,
        "name":      u.name,
        "email":     u.email,
        "isActive":  u.isActive,
        "role":      u.role.name.value,
        "isAdmin":   u.isAdmin,
        "createdAt": u.createdAt.isoformat(),
    }


class UserService:

    # ─── List ─────────────────────────────────────────────────────────────────
    def list_users(
        self, db: Session,
        page: int, limit: int,
        search: str | None,
        role: RoleName | None,
        is_active: bool | None,
    ) -> tuple[list[dict], int]:
        q = db.query(User)

        if search:
            kw = f"%{search}%"
            q = q.filter(or_(User.name.ilike(kw), User.email.ilike(kw)))
        if role is not None:
            q = q.join(User.role).filter(Role.name == role)
        if is_active is not None:
            q = q.filter(User.isActive == is_active)

        total = q.count()
        users = q.order_by(User.createdAt.desc(), User.id.desc()).offset((page - 1) * limit).limit(limit).all()
        return [_serialize_user(u) for u in users], total

    # ─── Role ─────────────────────────────────────────────────────────────────
    def update_role(self, db: Session, user_id: int, data: RoleUpdateRequest, actor_id: int) -> dict:
        u = db.query(User).filter(User.id == user_id).first()
        if not u:
            raise NotFoundException("User")
        if u.id == actor_id and data.role != RoleName.ADMIN:
            raise ForbiddenException("You cannot remove your own admin rights")

        role = db.query(Role).filter(Role.name == data.role).first()
        if not role:
            raise NotFoundException("Role")

        u.roleId = role.id
        u.role = role
        action = "GRANT_ADMIN" if data.role == RoleName.ADMIN else "REVOKE_ADMIN"
        log_action(db, actor_id, action, "User", u.id, f"{u.email} is now {data.role.value}")
        db.commit()
        db.refresh(u)
        return _serialize_user(u)

    # ─── Toggle Active ────────────────────────────────────────────────────────
    def toggle_active(self, db: Session, user_id: int, actor_id: int) -> dict:
        u = db.query(User).filter(User.id == user_id).first()
        if not u:
            raise NotFoundException("User")
        if u.id == actor_id:
            raise ForbiddenException("You cannot deactivate your own account")

        u.isActive = not u.isActive
        action = "ACTIVATE" if u.isActive else "DEACTIVATE"
        log_action(db, actor_id, action, "User", u.id,
                   f"Admin {action.lower()}d user {u.email}")
        db.commit()
        db.refresh(u)
        return _serialize_user(u)


user_service = UserService()
