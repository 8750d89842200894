# storefront/data/models/user.py
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from storefront.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)
    # hash bcrypt, nigdy nie wychodzi poza warstwe tozsamosci
    password = Column(String(255), nullable=False)
    admin = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
