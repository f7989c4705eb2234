# shopzone/services/user_service.py
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shopzone.data.models.user import ROLE_CUSTOMER, UserModel
from shopzone.domain.errors import (
    DuplicateEmail,
    InvalidCredentials,
    NotAuthorized,
    NotFound,
    ValidationError,
)
from shopzone.repos.user_repo import UserRepo
from shopzone.services.auth_service import (
    MAX_PASSWORD_BYTES,
    MIN_PASSWORD_LENGTH,
    AuthService,
    dummy_password_hash,
    hash_password,
    verify_password,
)
from shopzone.utils.logging import get_logger

logger = get_logger(__name__)

PROFILE_FIELDS = ("first_name", "last_name", "phone")


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _validate_password(password: str | None) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")


def _required(value: str | None, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field} is required", details={"field": field})
    return cleaned


class UserService:
    """Identity use cases: registration, login, profile and lookups."""

    def __init__(self, db: Session, auth: AuthService | None = None):
        self.db = db
        self.repo = UserRepo(db)
        self.auth = auth

    # queries
    def find_by_id(self, user_id: str) -> UserModel | None:
        return self.repo.get_user(user_id)

    def find_by_email(self, email: str) -> UserModel | None:
        return self.repo.get_by_email(normalize_email(email))

    def list_users(self) -> list[UserModel]:
        return self.repo.list_users()

    def get_user(self, caller: UserModel, user_id: str) -> UserModel:
        if not caller.is_admin and caller.id != user_id:
            raise NotAuthorized()
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    # commands
    def create_user(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: str | None = None,
        role: str = ROLE_CUSTOMER,
    ) -> UserModel:
        """Validate and stage a new user. The caller commits."""
        email = normalize_email(email)
        if not email:
            raise ValidationError("email is required", details={"field": "email"})
        if "@" not in email:
            raise ValidationError("email is not valid", details={"field": "email"})

        _validate_password(password)
        first_name = _required(first_name, "first_name")
        last_name = _required(last_name, "last_name")
        phone = (phone or "").strip() or None

        if self.repo.get_by_email(email):
            raise DuplicateEmail("User with this email already exists")

        user = UserModel(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            role=role,
            is_active=True,
        )
        try:
            return self.repo.add_user(user)
        except IntegrityError:
            # lost a race against a concurrent registration
            self.db.rollback()
            raise DuplicateEmail("User with this email already exists")

    def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: str | None = None,
    ) -> dict[str, Any]:
        user = self.create_user(email, password, first_name, last_name, phone)
        token = self.auth.issue_token(user)
        self.db.commit()

        logger.info(f"New user registered: {user.id}")
        return {"token": token, "user": user}

    def verify_credentials(self, email: str, password: str) -> UserModel:
        user = self.repo.get_by_email(normalize_email(email))

        # one error for unknown email, wrong password and deactivated account
        if not user:
            verify_password(password or "", dummy_password_hash())
            raise InvalidCredentials()
        if not verify_password(password or "", user.password_hash):
            raise InvalidCredentials()
        if not user.is_active:
            raise InvalidCredentials()

        return user

    def login(self, email: str, password: str) -> dict[str, Any]:
        try:
            user = self.verify_credentials(email, password)
        except InvalidCredentials:
            logger.warning("Failed login attempt")
            raise

        token = self.auth.issue_token(user)
        self.db.commit()

        logger.info(f"User logged in: {user.id}")
        return {"token": token, "user": user}

    def update_profile(self, user_id: str, fields: dict[str, Any]) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")

        unknown = set(fields) - set(PROFILE_FIELDS)
        if unknown:
            raise ValidationError(
                "Only first_name, last_name and phone can be changed",
                details={"fields": sorted(unknown)},
            )

        changes = {}
        for field in ("first_name", "last_name"):
            if field in fields:
                changes[field] = _required(fields[field], field)
        if "phone" in fields:
            changes["phone"] = (fields["phone"] or "").strip() or None

        for field, value in changes.items():
            setattr(user, field, value)

        self.db.commit()
        logger.info(f"Profile updated for user {user.id}")
        return user

    def change_password(
        self,
        user_id: str,
        current_password: str,
        new_password: str,
        keep_token: str | None = None,
    ) -> bool:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")

        if not verify_password(current_password or "", user.password_hash):
            raise InvalidCredentials("Current password is incorrect")

        _validate_password(new_password)
        user.password_hash = hash_password(new_password)

        if self.auth:
            revoked = self.auth.revoke_other_sessions(user.id, keep_token=keep_token)
            logger.info(f"Password changed for user {user.id}, revoked {revoked} session(s)")

        self.db.commit()
        return True
