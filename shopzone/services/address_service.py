# shopzone/services/address_service.py
from typing import Any

from sqlalchemy.orm import Session

from shopzone.data.models.address import AddressModel
from shopzone.domain.errors import NotFound, ValidationError
from shopzone.repos.address_repo import AddressRepo
from shopzone.utils.logging import get_logger

logger = get_logger(__name__)

REQUIRED_FIELDS = ("label", "first_name", "last_name", "street", "city", "state", "zip_code", "country")
OPTIONAL_FIELDS = ("company", "phone")


def _clean(fields: dict[str, Any], partial: bool) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, value in fields.items():
        if key in REQUIRED_FIELDS:
            text = (value or "").strip()
            if not text:
                raise ValidationError(f"{key} is required", details={"field": key})
            cleaned[key] = text
        elif key in OPTIONAL_FIELDS:
            cleaned[key] = (value or "").strip() or None
        elif key == "is_default":
            cleaned[key] = bool(value)
        else:
            raise ValidationError(f"Unknown address field {key!r}", details={"field": key})

    if not partial:
        missing = [f for f in REQUIRED_FIELDS if f not in cleaned]
        if missing:
            raise ValidationError("Missing address fields", details={"fields": missing})
    return cleaned


class AddressService:
    """
    A user's address book. At most one address per user is the default:
    making one default clears the flag on the others in the same transaction.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = AddressRepo(db)

    def list_addresses(self, user_id: str) -> list[AddressModel]:
        return self.repo.list_for_user(user_id)

    def _get(self, user_id: str, address_id: str) -> AddressModel:
        address = self.repo.get_for_user(user_id, address_id)
        if not address:
            # someone else's address looks exactly like a missing one
            raise NotFound("Address not found", details={"address_id": address_id})
        return address

    def create_address(self, user_id: str, fields: dict[str, Any]) -> AddressModel:
        cleaned = _clean(fields, partial=False)
        make_default = cleaned.pop("is_default", False) or self.repo.count_for_user(user_id) == 0

        try:
            if make_default:
                self.repo.clear_defaults(user_id)
            address = self.repo.add_address(
                AddressModel(user_id=user_id, is_default=make_default, **cleaned)
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Address {address.id} created for user {user_id} (default={make_default})")
        return address

    def update_address(self, user_id: str, address_id: str, fields: dict[str, Any]) -> AddressModel:
        address = self._get(user_id, address_id)
        cleaned = _clean(fields, partial=True)
        make_default = cleaned.pop("is_default", None)

        try:
            for key, value in cleaned.items():
                setattr(address, key, value)
            if make_default:
                self.repo.clear_defaults(user_id, keep_id=address.id)
                address.is_default = True
            elif make_default is False:
                address.is_default = False
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        return address

    def set_default(self, user_id: str, address_id: str) -> AddressModel:
        return self.update_address(user_id, address_id, {"is_default": True})

    def delete_address(self, user_id: str, address_id: str) -> bool:
        address = self._get(user_id, address_id)
        self.repo.delete_address(address)
        self.db.commit()
        logger.info(f"Address {address_id} deleted for user {user_id}")
        return True
