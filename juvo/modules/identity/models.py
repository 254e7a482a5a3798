"""Identity ORM models."""

from __future__ import annotations

from sqlalchemy import Boolean, Enum as SAEnum, String
from sqlalchemy.orm import Mapped, mapped_column

from juvo.core.database import Base, BaseModelMixin
from juvo.core.enums import AccountTypeEnum


class User(BaseModelMixin, Base):
    """Marketplace account mirrored from the identity provider."""

    __tablename__ = "users"

    email: Mapped[str | None] = mapped_column(String(255), unique=True, index=True, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), unique=True, nullable=True)
    username: Mapped[str | None] = mapped_column(String(128), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    account_type: Mapped[AccountTypeEnum] = mapped_column(
        SAEnum(AccountTypeEnum, name="account_type_enum", native_enum=False),
        default=AccountTypeEnum.MEMBER,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    profile_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
