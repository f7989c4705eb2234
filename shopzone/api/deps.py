# shopzone/api/deps.py
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from shopzone.data.database import get_db
from shopzone.data.models.user import UserModel
from shopzone.domain.errors import NotAuthorized
from shopzone.services.auth_service import AuthService
from shopzone.services.lock_service import LockService
from shopzone.services.notification_service import NotificationService

bearer_scheme = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    return credentials.credentials if credentials else None


def get_lock_service(request: Request) -> LockService:
    return request.app.state.lock_service


def get_notification_service(request: Request) -> NotificationService:
    return request.app.state.notification_service


def get_auth_service(request: Request, db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db, secret_key=request.app.state.secret_key)


def get_current_user(
    token: str | None = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service),
) -> UserModel:
    """Authentication gate: valid session -> existing, active user."""
    return auth.authenticate(token)


def require_admin(user: UserModel = Depends(get_current_user)) -> UserModel:
    """Authorization gate for admin-only operations."""
    if not user.is_admin:
        raise NotAuthorized("Admin access required")
    return user
