"""Profile model for storing user contact and personal information.

This model stores personal data separately from authentication.
It has a 1:1 relationship with the User model.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cloudhub.data.db import Base

if TYPE_CHECKING:
    from cloudhub.data.models.user import User


class Profile(Base):
    """User profile with contact and personal information.

    Attributes:
        id: Auto-incrementing primary key.
        user_id: Foreign key to users table (unique, 1:1 relationship).
        avatar_url: URL of the profile picture.
        phone: Phone number.
        location: City/region shown on the profile.
        address: Postal address.
        website: Personal website URL.
        linkedin_url: LinkedIn profile URL.
        github_url: GitHub profile URL.
        cgpa: Cumulative grade point average on a 10-point scale.
        skills: JSON-encoded list of skills.
        achievements: JSON-encoded list of achievements.
        updated_at: UTC timestamp when the profile was last updated.
    """

    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    avatar_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    linkedin_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    github_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cgpa: Mapped[float | None] = mapped_column(Float, nullable=True)
    skills: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    achievements: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    # Relationships
    user: Mapped[User] = relationship("User", back_populates="profile")
