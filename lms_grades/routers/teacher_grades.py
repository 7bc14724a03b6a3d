from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from lms_grades.core import config
from lms_grades.core.deps import get_db, get_now
from lms_grades.core.permissions import require_teacher
from lms_grades.models.user import User
from lms_grades.schemas.grade_list import GradeListRead
from lms_grades.schemas.gradebook import AssignmentSummaryPage, GradebookRead
from lms_grades.schemas.student_grades import ClassroomGradesRead
from lms_grades.services.export import XLSX_MEDIA_TYPE, export_classroom_grades
from lms_grades.services.grade_list import classroom_grade_list
from lms_grades.services.gradebook import assignment_summaries, classroom_gradebook
from lms_grades.services.student_grades import student_grades

router = APIRouter(prefix="/teachers/classrooms", tags=["teacher grades"])

StatusFilter = Literal["all", "graded", "ungraded"]


@router.get("/{classroom_id}/gradebook", response_model=GradebookRead)
def gradebook(
    classroom_id: int,
    search: str = Query("", max_length=config.SEARCH_MAX_LENGTH),
    page: int = Query(1, ge=1),
    page_size: int = Query(
        config.GRADEBOOK_PAGE_SIZE,
        ge=config.GRADEBOOK_PAGE_SIZE_MIN,
        le=config.GRADEBOOK_PAGE_SIZE_MAX,
    ),
    columns: int = Query(config.GRADEBOOK_COLUMNS, ge=1, le=config.GRADEBOOK_COLUMNS_MAX),
    col_page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
    now: datetime = Depends(get_now),
):
    return classroom_gradebook(
        db,
        teacher,
        classroom_id,
        now,
        search=search,
        page=page,
        page_size=page_size,
        columns=columns,
        col_page=col_page,
    )


@router.get("/{classroom_id}/gradebook/assignments", response_model=AssignmentSummaryPage)
def gradebook_assignments(
    classroom_id: int,
    search: str = Query("", max_length=config.SEARCH_MAX_LENGTH),
    page: int = Query(1, ge=1),
    page_size: int = Query(
        config.GRADEBOOK_PAGE_SIZE,
        ge=config.GRADEBOOK_PAGE_SIZE_MIN,
        le=config.GRADEBOOK_PAGE_SIZE_MAX,
    ),
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
    now: datetime = Depends(get_now),
):
    return assignment_summaries(
        db, teacher, classroom_id, now, search=search, page=page, page_size=page_size
    )


@router.get("/{classroom_id}/grades", response_model=GradeListRead)
def grade_list(
    classroom_id: int,
    status: StatusFilter = "all",
    search: str = Query("", max_length=config.SEARCH_MAX_LENGTH),
    page: int = Query(1, ge=1),
    page_size: int = Query(config.GRADE_LIST_PAGE_SIZE, ge=1, le=config.GRADE_LIST_PAGE_SIZE_MAX),
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
    now: datetime = Depends(get_now),
):
    return classroom_grade_list(
        db,
        teacher,
        classroom_id,
        now,
        status=status,
        search=search,
        page=page,
        page_size=page_size,
    )


@router.get(
    "/{classroom_id}/students/{student_id}/grades",
    response_model=ClassroomGradesRead,
)
def one_student_grades(
    classroom_id: int,
    student_id: int,
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
    now: datetime = Depends(get_now),
):
    return student_grades(db, teacher, classroom_id, student_id, now)


@router.get("/{classroom_id}/grades/export")
def grade_export(
    classroom_id: int,
    status: StatusFilter = "all",
    search: str = Query("", max_length=config.SEARCH_MAX_LENGTH),
    assignment_id: int | None = None,
    sort: Literal["recent", "due", "grade"] = "recent",
    limit: int = Query(config.EXPORT_LIMIT, ge=1, le=config.EXPORT_LIMIT_MAX),
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
    now: datetime = Depends(get_now),
):
    filename, content = export_classroom_grades(
        db,
        teacher,
        classroom_id,
        now,
        status=status,
        search=search,
        assignment_id=assignment_id,
        sort=sort,
        limit=limit,
    )
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Cache-Control": "private, no-store",
        },
    )
