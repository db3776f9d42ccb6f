from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.user import UserModel
from app.domain.errors import ConflictError, InvalidInputError, NotFoundError
from app.domain.schemas import UserCreate
from app.repos.user_repo import UserRepo
from app.utils.security import hash_password, verify_password
from app.utils.settings import ShopConfig, shop_config
from app.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session, config: ShopConfig = shop_config):
        self.repo = UserRepo(db)
        self.config = config

    def create_user(self, payload: UserCreate) -> UserModel:
        email = payload.email.lower()

        if self.repo.get_user_by_email(email):
            raise ConflictError("Email already taken")

        user = UserModel(
            name=payload.name,
            email=email,
            password=hash_password(payload.password),
            wallet_money=(
                payload.wallet_money
                if payload.wallet_money is not None
                else self.config.default_wallet_money
            ),
            address=payload.address or self.config.default_address,
            version=1,
        )

        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            #unique na email, wyscig dwoch rejestracji
            raise ConflictError("Email already taken")

        logger.info(f"Utworzono uzytkownika {created.id}")
        return created

    def get_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def get_user_address(self, user_id: int) -> dict:
        user = self.get_user(user_id)
        return {"id": user.id, "email": user.email, "address": user.address}

    def set_address(self, user: UserModel, address: str) -> str:
        updated = self.repo.update_address(user, address)
        logger.info(f"Zmieniono adres uzytkownika {user.id}")
        return updated.address

    def verify_credentials(self, email: str, password: str) -> UserModel:
        user = self.repo.get_user_by_email(email)
        if not user or not verify_password(password, user.password):
            raise InvalidInputError("Incorrect email or password")
        return user
