"""ORM model for a user's shareable portfolio page settings.

One row per user (1:1 with :class:`User`). Rows are upserted on save.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cloudhub.data.db import Base

if TYPE_CHECKING:
    from cloudhub.data.models.user import User


class Portfolio(Base):
    """Portfolio page content and visibility for a user."""

    __tablename__ = "portfolios"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    headline: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # JSON-encoded list of skill names
    skills: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    # JSON-encoded mapping of network name to URL
    social_links: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    theme_color: Mapped[str] = mapped_column(String(16), nullable=False, default="#000000")
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    user: Mapped[User] = relationship("User", back_populates="portfolio")
