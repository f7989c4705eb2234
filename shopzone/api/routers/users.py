# shopzone/api/routers/users.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shopzone.api.deps import get_current_user, require_admin
from shopzone.data.database import get_db
from shopzone.data.models.user import UserModel
from shopzone.domain.schemas import UserRead
from shopzone.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserRead])
def list_users(
    admin: UserModel = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return UserService(db).list_users()


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: str,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserService(db).get_user(user, user_id)
