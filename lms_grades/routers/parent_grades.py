from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lms_grades.core import config
from lms_grades.core.deps import get_db, get_now
from lms_grades.core.permissions import require_parent
from lms_grades.models.user import User
from lms_grades.schemas.parent import ChildGradesRead, ChildrenGradesRead
from lms_grades.schemas.student_grades import ClassroomGradesRead
from lms_grades.services.parent_grades import (
    all_children_grades,
    child_classroom_grades,
    child_grades,
)

router = APIRouter(prefix="/parent/children", tags=["parent grades"])


@router.get("/grades", response_model=ChildrenGradesRead)
def children_grades(
    db: Session = Depends(get_db),
    parent: User = Depends(require_parent),
    now: datetime = Depends(get_now),
):
    return all_children_grades(db, parent, now)


@router.get("/{child_id}/grades", response_model=ChildGradesRead)
def one_child_grades(
    child_id: int,
    window_days: int | None = None,
    limit: int | None = None,
    cursor: int | None = None,
    db: Session = Depends(get_db),
    parent: User = Depends(require_parent),
    now: datetime = Depends(get_now),
):
    # clamp into 1..max to keep the query bounded
    if window_days is not None:
        window_days = min(max(window_days, 1), config.PARENT_WINDOW_DAYS_MAX)
    if limit is not None:
        limit = min(max(limit, 1), config.PARENT_LIMIT_MAX)

    return child_grades(
        db,
        parent,
        child_id,
        now,
        window_days=window_days,
        limit=limit,
        cursor=cursor,
    )


@router.get(
    "/{child_id}/classrooms/{classroom_id}/grades",
    response_model=ClassroomGradesRead,
)
def one_child_classroom_grades(
    child_id: int,
    classroom_id: int,
    db: Session = Depends(get_db),
    parent: User = Depends(require_parent),
    now: datetime = Depends(get_now),
):
    return child_classroom_grades(db, parent, child_id, classroom_id, now)
