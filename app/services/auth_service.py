from datetime import datetime, timezone

from sqlalchemy.orm import Session

from app.models.user import User
from app.models.role import Role, RoleName
from app.models.refresh_token import RefreshToken
from app.schemas.auth import LoginRequest, RegisterRequest, LoginResponse, RefreshResponse
from app.utils.security import (
    verify_password, hash_password,
    create_access_token, create_refresh_token, verify_refresh_token,
)
from app.utils.audit import log_action
from app.utils.exceptions import (
    UnauthorizedException, AccountInactiveException,
    NotFoundException, DuplicateEntryException,
    RefreshTokenInvalidException,
)
from app.config import settings


def serialize_user(user: User) -> dict:
    return {
        "id":      user.id,
        "name":    user.name,
        "email":   user.email,
        "role":    user.role.name.value,
        "isAdmin": user.isAdmin,
    }


class AuthService:

    # ─── Login ────────────────────────────────────────────────────────────────
    def login(self, db: Session, data: LoginRequest) -> dict:
        user = db.query(User).filter(User.email == data.email).first()

        if not user or not verify_password(data.password, user.password):
            raise UnauthorizedException("Invalid email or password")

        if not user.isActive:
            raise AccountInactiveException()

        access_token = create_access_token(user.id, user.role.name.value)
        refresh_token_str, refresh_expires = create_refresh_token(user.id)

        db.add(RefreshToken(
            userId=user.id,
            token=refresh_token_str,
            expiresAt=refresh_expires,
            revoked=False,
        ))
        log_action(db, user.id, "LOGIN", "User", user.id, f"{user.email} logged in")
        db.commit()

        return LoginResponse(
            accessToken=access_token,
            refreshToken=refresh_token_str,
            expiresIn=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            user=serialize_user(user),
        ).model_dump()

    # ─── Refresh Token ────────────────────────────────────────────────────────
    def refresh_token(self, db: Session, refresh_token_str: str) -> dict:
        payload = verify_refresh_token(refresh_token_str)
        user_id = int(payload.get("sub"))

        stored = db.query(RefreshToken).filter(
            RefreshToken.token == refresh_token_str,
            RefreshToken.userId == user_id,
            RefreshToken.revoked == False,  # noqa: E712
        ).first()

        if not stored:
            raise RefreshTokenInvalidException()

        if stored.is_expired(datetime.now(timezone.utc)):
            stored.revoked = True
            db.commit()
            raise RefreshTokenInvalidException()

        user = db.query(User).filter(User.id == user_id).first()
        if not user or not user.isActive:
            raise AccountInactiveException()

        return RefreshResponse(
            accessToken=create_access_token(user.id, user.role.name.value),
            expiresIn=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        ).model_dump()

    # ─── Logout ───────────────────────────────────────────────────────────────
    def logout(self, db: Session, refresh_token_str: str, user_id: int) -> None:
        stored = db.query(RefreshToken).filter(
            RefreshToken.token == refresh_token_str,
            RefreshToken.userId == user_id,
        ).first()
        if stored:
            stored.revoked = True

        log_action(db, user_id, "LOGOUT", "User", user_id, "User logged out")
        db.commit()

    # ─── Register ─────────────────────────────────────────────────────────────
    def register(self, db: Session, data: RegisterRequest) -> User:
        """New accounts start as USER; an existing admin grants ADMIN afterwards."""
        if db.query(User).filter(User.email == data.email).first():
            raise DuplicateEntryException("Email already registered", field="email")

        role = db.query(Role).filter(Role.name == RoleName.USER).first()
        if not role:
            raise NotFoundException("Role")

        user = User(
            name=data.name,
            email=str(data.email),
            password=hash_password(data.password),
            isActive=True,
            roleId=role.id,
        )
        db.add(user)
        db.flush()  # Get user.id without committing

        log_action(db, user.id, "REGISTER", "User", user.id, f"New account: {user.email}")
        db.commit()
        db.refresh(user)
        return user


auth_service = AuthService()
