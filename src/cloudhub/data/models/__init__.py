"""ORM models package for database tables.

This package provides SQLAlchemy ORM models representing database tables:
- User: Accounts with role and approval status
- Project, Certificate, Note, Resume: Per-user collections saved as whole lists
- Portfolio, Profile: One-per-user records, upserted

All models inherit from the shared Base declarative class defined in data.db.
"""

from cloudhub.data.db import Base
from cloudhub.data.models.certificate import Certificate
from cloudhub.data.models.note import Note
from cloudhub.data.models.portfolio import Portfolio
from cloudhub.data.models.profile import Profile
from cloudhub.data.models.project import Project
from cloudhub.data.models.resume import Resume
from cloudhub.data.models.user import User

__all__ = [
    "Base",
    "Certificate",
    "Note",
    "Portfolio",
    "Profile",
    "Project",
    "Resume",
    "User",
]
