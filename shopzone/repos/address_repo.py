# shopzone/repos/address_repo.py
from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from shopzone.data.models.address import AddressModel


class AddressRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: str) -> list[AddressModel]:
        return list(
            self.db.execute(
                select(AddressModel)
                .where(AddressModel.user_id == user_id)
                .order_by(AddressModel.is_default.desc(), AddressModel.created_at, AddressModel.id)
            ).scalars()
        )

    def get_for_user(self, user_id: str, address_id: str) -> AddressModel | None:
        return self.db.execute(
            select(AddressModel).where(
                AddressModel.id == address_id,
                AddressModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def count_for_user(self, user_id: str) -> int:
        return self.db.execute(
            select(func.count()).select_from(AddressModel).where(AddressModel.user_id == user_id)
        ).scalar_one()

    def add_address(self, address: AddressModel) -> AddressModel:
        self.db.add(address)
        self.db.flush()
        return address

    def delete_address(self, address: AddressModel) -> None:
        self.db.delete(address)
        self.db.flush()

    def clear_defaults(self, user_id: str, keep_id: str | None = None) -> int:
        stmt = update(AddressModel).where(
            AddressModel.user_id == user_id,
            AddressModel.is_default.is_(True),
        )
        if keep_id:
            stmt = stmt.where(AddressModel.id != keep_id)
        result = self.db.execute(
            stmt.values(is_default=False).execution_options(synchronize_session="fetch")
        )
        return result.rowcount
