"""Product category; deleting one removes its products."""
from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.session import Base
from storefront.models.base import IntegerPrimaryKeyMixin, TimestampMixin


class Category(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
