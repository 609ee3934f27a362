from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from user_service.database.base import Base


class UserRow(Base):
    """
    SQLAlchemy model for a persisted user.

    One row per user; `user_name` is the natural key and carries the unique
    constraint that duplicate inserts trip over.
    """
    __tablename__ = "user_table"

    # Surrogate primary key, also gives select-all a stable order
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False
    )

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)

    last_name: Mapped[str] = mapped_column(String(255), nullable=False)

    address: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<UserRow(id={self.id!r}, user_name={self.user_name!r})>"
