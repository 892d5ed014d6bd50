import logging

from sqlalchemy.orm import Session

from app.config import settings
from app.models.role import Role, RoleName
from app.models.user import User
from app.utils.audit import log_action
from app.utils.security import hash_password

logger = logging.getLogger(__name__)


def seed_roles(db: Session) -> None:
    """Make sure every RoleName has a row. Safe to call on every startup."""
    existing = {r.name for r in db.query(Role).all()}
    for name in RoleName:
        if name not in existing:
            db.add(Role(name=name))
    db.commit()


def ensure_admin(db: Session, email: str | None = None, password: str | None = None) -> User | None:
    """
    Create (or promote) the bootstrap admin from ADMIN_EMAIL / ADMIN_PASSWORD.
    Without it nobody could grant admin rights to the first signed-up account.
    """
    email = email or settings.ADMIN_EMAIL
    password = password or settings.ADMIN_PASSWORD
    if not email or not password:
        return None

    admin_role = db.query(Role).filter(Role.name == RoleName.ADMIN).first()
    user = db.query(User).filter(User.email == email).first()
    if user:
        if user.roleId != admin_role.id:
            user.roleId = admin_role.id
            log_action(db, None, "GRANT_ADMIN", "User", user.id, f"{email} promoted at startup")
            db.commit()
            logger.info(f"Bootstrap admin {email} promoted")
        return user

    user = User(email=email, name="Administrator", password=hash_password(password),
                isActive=True, roleId=admin_role.id)
    db.add(user)
    db.flush()
    log_action(db, None, "CREATE", "User", user.id, f"Bootstrap admin {email} created")
    db.commit()
    db.refresh(user)
    logger.info(f"Bootstrap admin {email} created")
    return user
