"""Teacher dashboard: student directory, stats and per-student files."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sqlalchemy import or_, select

from cloudhub.constants import AccountStatus, CollectionKind, Role
from cloudhub.data.db import get_session
from cloudhub.data.models import Certificate, Project, User
from cloudhub.exceptions import NotFoundError
from cloudhub.services.collections import get_collection
from cloudhub.services.users import find_user, user_to_dict

RECENT_ACTIVITY_WINDOW = timedelta(days=7)


def _student_query(session):
    return session.query(User).filter(
        User.role == Role.STUDENT.value,
        User.account_status == AccountStatus.APPROVED.value,
    )


def list_students(
    search: str | None = None,
    department: str | None = None,
    year_semester: str | None = None,
) -> list[dict]:
    """Return approved students, optionally filtered.

    ``search`` matches name, email or roll number case-insensitively.
    ``department`` and ``year_semester`` must match exactly; ``"all"`` or
    empty values disable the filter.
    """
    with get_session() as session:
        query = _student_query(session)
        if search and search.strip():
            pattern = f"%{search.strip().lower()}%"
            query = query.filter(
                or_(
                    User.full_name.ilike(pattern),
                    User.email.ilike(pattern),
                    User.roll_no.ilike(pattern),
                )
            )
        if department and department != "all":
            query = query.filter(User.department == department)
        if year_semester and year_semester != "all":
            query = query.filter(User.year_semester == year_semester)

        students = query.order_by(User.full_name, User.id).all()
        return [user_to_dict(student) for student in students]


def get_teacher_stats(now: datetime | None = None) -> dict[str, int]:
    """Return dashboard totals across all approved students.

    ``recent_activities`` counts projects and certificates saved within the
    last seven days.
    """
    since = (now or datetime.now(UTC)) - RECENT_ACTIVITY_WINDOW
    with get_session() as session:
        total_students = _student_query(session).count()
        student_ids = select(User.id).where(
            User.role == Role.STUDENT.value,
            User.account_status == AccountStatus.APPROVED.value,
        )
        total_projects = session.query(Project).filter(Project.user_id.in_(student_ids)).count()
        total_certificates = (
            session.query(Certificate).filter(Certificate.user_id.in_(student_ids)).count()
        )
        recent_projects = (
            session.query(Project)
            .filter(Project.user_id.in_(student_ids), Project.created_at >= since)
            .count()
        )
        recent_certificates = (
            session.query(Certificate)
            .filter(Certificate.user_id.in_(student_ids), Certificate.created_at >= since)
            .count()
        )

    return {
        "total_students": total_students,
        "total_projects": total_projects,
        "total_certificates": total_certificates,
        "recent_activities": recent_projects + recent_certificates,
    }


def get_student_files(email: str) -> dict[str, list[dict]]:
    """Return every collection of one student, each item tagged with its owner.

    Raises:
        NotFoundError: If the email does not belong to a student.
    """
    with get_session() as session:
        student = find_user(session, email)
        if student is None or student.role != Role.STUDENT:
            raise NotFoundError("Student not found")
        student_email = student.email

    files: dict[str, list[dict]] = {}
    for kind in CollectionKind:
        items = get_collection(kind, student_email)
        for item in items:
            item["student_email"] = student_email
        files[kind.value] = items
    return files
