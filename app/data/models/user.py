from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Numeric, DateTime

from app.data.database import Base
from app.utils.settings import shop_config


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    password = Column(String, nullable=False)

    wallet_money = Column(Numeric(12, 2), nullable=False, default=shop_config.default_wallet_money)
    address = Column(String, nullable=False, default=shop_config.default_address)
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
