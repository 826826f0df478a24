"""Teacher dashboard routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from cloudhub.api.dependencies import require_teacher
from cloudhub.api.schemas.admin import StudentFilesResponse, StudentListResponse, TeacherStats
from cloudhub.api.schemas.users import UserResponse
from cloudhub.services import teacher

router = APIRouter(prefix="/teacher", tags=["teacher"])


@router.get("/students", response_model=StudentListResponse)
def list_students(
    _teacher_email: Annotated[str, Depends(require_teacher)],
    search: Annotated[str | None, Query(description="Name, email or roll number")] = None,
    department: Annotated[str | None, Query()] = None,
    year_semester: Annotated[str | None, Query(alias="yearSemester")] = None,
) -> StudentListResponse:
    """List approved students with dashboard totals."""
    students = teacher.list_students(search, department, year_semester)
    return StudentListResponse(
        students=[UserResponse.model_validate(student) for student in students],
        stats=TeacherStats.model_validate(teacher.get_teacher_stats()),
    )


@router.get("/student-files/{email}", response_model=StudentFilesResponse)
def get_student_files(
    email: Annotated[str, Path(description="Student email")],
    _teacher_email: Annotated[str, Depends(require_teacher)],
) -> StudentFilesResponse:
    """Return a student's projects, certificates, notes and resumes."""
    return StudentFilesResponse.model_validate(teacher.get_student_files(email))
