"""Tests for admin listing/deletion and the teacher dashboard queries."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from cloudhub.data.db import get_session
from cloudhub.data.models import Project, User
from cloudhub.exceptions import NotFoundError, ValidationFailedError
from cloudhub.services import admin, storage, teacher
from cloudhub.services.collections import get_collection, save_collection


def test_list_users_filter_and_counts(create_account) -> None:
    create_account("a@uni.edu", status="pending")
    create_account("b@uni.edu", status="approved")
    create_account("c@uni.edu", status="rejected")
    create_account("d@uni.edu", role="teacher", status="pending")

    pending = admin.list_users("pending")
    counts = admin.count_by_status()

    assert {u["email"] for u in pending} == {"a@uni.edu", "d@uni.edu"}
    assert counts == {"pending": 2, "approved": 1, "rejected": 1, "total": 4}
    assert len(admin.list_users()) == 4
    with pytest.raises(ValidationFailedError):
        admin.list_users("unknown")


def test_list_users_newest_first(create_account) -> None:
    create_account("first@uni.edu")
    create_account("second@uni.edu")

    emails = [u["email"] for u in admin.list_users()]

    assert emails.index("second@uni.edu") < emails.index("first@uni.edu")


def test_delete_user_cascades(create_account) -> None:
    create_account("gone@uni.edu")
    save_collection("projects", "gone@uni.edu", [{"title": "P"}])
    storage.store_file("project", "gone@uni.edu", "p.zip", b"zip")

    deleted = admin.delete_user("gone@uni.edu", acting_email="root@uni.edu")

    assert deleted["email"] == "gone@uni.edu"
    with get_session() as session:
        assert session.query(User).filter(User.email == "gone@uni.edu").first() is None
        assert session.query(Project).count() == 0
    assert storage.delete_user_files("gone@uni.edu") == 0


def test_admin_cannot_delete_self(create_account) -> None:
    create_account("root@uni.edu", role="admin")
    with pytest.raises(ValidationFailedError):
        admin.delete_user("root@uni.edu", acting_email="ROOT@uni.edu")
    with pytest.raises(NotFoundError):
        admin.delete_user("ghost@uni.edu")


def test_list_students_filters(create_account) -> None:
    create_account("ravi@uni.edu", full_name="Ravi Kumar", roll_no="CS01")
    create_account(
        "mia@uni.edu", full_name="Mia Wong", department="Mechanical", roll_no="ME07"
    )
    create_account("pending@uni.edu", status="pending")
    create_account("prof@uni.edu", role="teacher")

    everyone = teacher.list_students()
    assert {s["email"] for s in everyone} == {"ravi@uni.edu", "mia@uni.edu"}

    assert [s["email"] for s in teacher.list_students(search="RAVI")] == ["ravi@uni.edu"]
    assert [s["email"] for s in teacher.list_students(search="me07")] == ["mia@uni.edu"]
    assert [s["email"] for s in teacher.list_students(department="Mechanical")] == [
        "mia@uni.edu"
    ]
    assert len(teacher.list_students(department="all")) == 2
    assert teacher.list_students(year_semester="1st Year - Sem 1") == []


def test_teacher_stats_counts_recent_activity(create_account) -> None:
    create_account("s1@uni.edu")
    create_account("s2@uni.edu")
    save_collection("projects", "s1@uni.edu", [{"title": "A"}, {"title": "B"}])
    save_collection("certificates", "s2@uni.edu", [{"title": "C"}])

    with get_session() as session:
        old = session.query(Project).filter(Project.title == "A").one()
        old.created_at = datetime.now(UTC) - timedelta(days=30)

    stats = teacher.get_teacher_stats()

    assert stats == {
        "total_students": 2,
        "total_projects": 2,
        "total_certificates": 1,
        "recent_activities": 2,
    }


def test_resaving_unchanged_list_is_not_recent_activity(create_account) -> None:
    create_account("s1@uni.edu")
    save_collection("projects", "s1@uni.edu", [{"title": "Thesis"}])
    with get_session() as session:
        row = session.query(Project).filter(Project.title == "Thesis").one()
        row.created_at = datetime.now(UTC) - timedelta(days=60)

    unchanged = get_collection("projects", "s1@uni.edu")
    save_collection("projects", "s1@uni.edu", unchanged)

    stats = teacher.get_teacher_stats()

    assert stats["total_projects"] == 1
    assert stats["recent_activities"] == 0


def test_student_files_tagged_with_owner(create_account) -> None:
    create_account("s1@uni.edu")
    save_collection("notes", "s1@uni.edu", [{"title": "OS"}])

    files = teacher.get_student_files("S1@uni.edu")

    assert files["notes"][0]["student_email"] == "s1@uni.edu"
    assert files["projects"] == []

    create_account("prof@uni.edu", role="teacher")
    with pytest.raises(NotFoundError):
        teacher.get_student_files("prof@uni.edu")
