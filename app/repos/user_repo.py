from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_user_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.email == email.lower())
        ).scalar_one_or_none()

    def get_user_by_email_for_update(self, email: str) -> UserModel | None:
        #SELECT ... FOR UPDATE + swiezy stan z bazy zamiast tego z identity map
        return self.db.execute(
            select(UserModel)
            .where(UserModel.email == email.lower())
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user

    def update_wallet(self, user_id: int, old_version: int, wallet_money: Decimal) -> int:
        """Bez commita, checkout zamyka transakcje razem z czyszczeniem koszyka."""
        result = self.db.execute(
            update(UserModel)
            .where(UserModel.id == user_id, UserModel.version == old_version)
            .values(wallet_money=wallet_money, version=old_version + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def refresh(self, user: UserModel) -> UserModel:
        self.db.refresh(user)
        return user

    def update_address(self, user: UserModel, address: str) -> UserModel:
        user.address = address
        user.version = user.version + 1
        self.db.commit()
        self.db.refresh(user)
        return user
