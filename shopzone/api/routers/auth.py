# shopzone/api/routers/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shopzone.api.deps import get_auth_service, get_bearer_token, get_current_user
from shopzone.data.database import get_db
from shopzone.data.models.user import UserModel
from shopzone.domain.schemas import AuthOut, LoginIn, PasswordChange, ProfileUpdate, RegisterIn, UserRead
from shopzone.services.auth_service import AuthService
from shopzone.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


def get_service(db: Session, auth: AuthService) -> UserService:
    return UserService(db, auth=auth)


@router.post("/register", response_model=AuthOut, status_code=201)
def register(
    payload: RegisterIn,
    db: Session = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    svc = get_service(db, auth)
    return svc.register(
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        phone=payload.phone,
    )


@router.post("/login", response_model=AuthOut)
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    svc = get_service(db, auth)
    return svc.login(payload.email, payload.password)


@router.post("/logout")
def logout(
    user: UserModel = Depends(get_current_user),
    token: str | None = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service),
):
    return {"logged_out": auth.logout(token)}


@router.get("/me", response_model=UserRead)
def me(user: UserModel = Depends(get_current_user)):
    return user


@router.patch("/me", response_model=UserRead)
def update_profile(
    payload: ProfileUpdate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    svc = get_service(db, auth)
    return svc.update_profile(user.id, payload.model_dump(exclude_unset=True))


@router.post("/change-password")
def change_password(
    payload: PasswordChange,
    user: UserModel = Depends(get_current_user),
    token: str | None = Depends(get_bearer_token),
    db: Session = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    svc = get_service(db, auth)
    svc.change_password(user.id, payload.current_password, payload.new_password, keep_token=token)
    return {"changed": True}
