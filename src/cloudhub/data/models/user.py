"""User account model.

Holds identity, role and approval state. Passwords are stored as salted
PBKDF2 hashes, never in plaintext. Every per-user record hangs off this
table and is removed with it.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cloudhub.constants import AccountStatus, Role
from cloudhub.data.db import Base

if TYPE_CHECKING:
    from cloudhub.data.models.certificate import Certificate
    from cloudhub.data.models.note import Note
    from cloudhub.data.models.portfolio import Portfolio
    from cloudhub.data.models.profile import Profile
    from cloudhub.data.models.project import Project
    from cloudhub.data.models.resume import Resume


class User(Base):
    """Application user account.

    Attributes:
        id: Auto-incrementing primary key.
        email: Unique, lower-cased login identifier.
        full_name: Display name.
        password_hash: Salted hash of the user's password.
        role: One of :class:`Role`.
        roll_no: Unique student roll number (students only).
        department: Academic department.
        year_semester: Year/semester label, e.g. "3rd Year - Sem 5".
        designation: Job title (teachers only).
        account_status: One of :class:`AccountStatus`.
        created_at: UTC timestamp when the account was created.
        updated_at: UTC timestamp of the last change.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=Role.STUDENT.value)
    roll_no: Mapped[str | None] = mapped_column(
        String(64), unique=True, nullable=True, index=True
    )
    department: Mapped[str | None] = mapped_column(String(128), nullable=True)
    year_semester: Mapped[str | None] = mapped_column(String(64), nullable=True)
    designation: Mapped[str | None] = mapped_column(String(128), nullable=True)
    account_status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=AccountStatus.PENDING.value, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    projects: Mapped[list[Project]] = relationship(
        "Project", back_populates="user", cascade="all, delete-orphan"
    )
    certificates: Mapped[list[Certificate]] = relationship(
        "Certificate", back_populates="user", cascade="all, delete-orphan"
    )
    notes: Mapped[list[Note]] = relationship(
        "Note", back_populates="user", cascade="all, delete-orphan"
    )
    resumes: Mapped[list[Resume]] = relationship(
        "Resume", back_populates="user", cascade="all, delete-orphan"
    )
    portfolio: Mapped[Portfolio | None] = relationship(
        "Portfolio", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    profile: Mapped[Profile | None] = relationship(
        "Profile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
