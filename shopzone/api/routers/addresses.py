# shopzone/api/routers/addresses.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shopzone.api.deps import get_current_user
from shopzone.data.database import get_db
from shopzone.data.models.user import UserModel
from shopzone.domain.schemas import AddressIn, AddressOut, AddressUpdate
from shopzone.services.address_service import AddressService

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.get("", response_model=List[AddressOut])
def list_addresses(
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return AddressService(db).list_addresses(user.id)


@router.post("", response_model=AddressOut, status_code=201)
def create_address(
    payload: AddressIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return AddressService(db).create_address(user.id, payload.model_dump())


@router.patch("/{address_id}", response_model=AddressOut)
def update_address(
    address_id: str,
    payload: AddressUpdate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return AddressService(db).update_address(user.id, address_id, payload.model_dump(exclude_unset=True))


@router.post("/{address_id}/default", response_model=AddressOut)
def set_default(
    address_id: str,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return AddressService(db).set_default(user.id, address_id)


@router.delete("/{address_id}")
def delete_address(
    address_id: str,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"deleted": AddressService(db).delete_address(user.id, address_id)}
