import logging
from datetime import datetime

from sqlalchemy.orm import Session

from lms_grades.grading.classify import ClassifiedRecord, classify_pairs
from lms_grades.models.user import User
from lms_grades.services.access import ensure_classroom_owner
from lms_grades.services.payloads import page_offset, pagination
from lms_grades.services.providers import (
    list_assignments_for_classroom,
    list_latest_attempts_for,
    list_students_in_classroom,
)

logger = logging.getLogger(__name__)

STATUS_ALL = "all"
STATUS_GRADED = "graded"
STATUS_UNGRADED = "ungraded"


def _activity_key(row: dict) -> tuple[int, float]:
    """
    Most recent activity first:
    - submitted_at when there is a submission
    - else the effective deadline
    - rows with neither go last
    """
    moment = row["submitted_at"] or row["assignment"]["due_date"]
    if moment is None:
        return (1, 0.0)
    return (0, -moment.timestamp())


def _row(record: ClassifiedRecord, student: User, assignment) -> dict:
    return {
        "submission_id": record.submission_id,
        "synthetic": record.synthetic,
        "student": {
            "id": student.id,
            "full_name": student.display_name,
            "email": student.email,
        },
        "assignment": {
            "id": assignment.id,
            "title": assignment.title,
            "type": assignment.type,
            "due_date": record.deadline,
        },
        "attempt": record.attempt,
        "grade": record.grade,
        "feedback": record.feedback,
        "submitted_at": record.submitted_at,
        "status": record.status.value,
    }


def filter_rows(rows: list[dict], status: str = STATUS_ALL, search: str = "") -> list[dict]:
    if status == STATUS_GRADED:
        rows = [r for r in rows if r["grade"] is not None]
    elif status == STATUS_UNGRADED:
        rows = [r for r in rows if r["grade"] is None]

    needle = search.strip().lower()
    if needle:
        rows = [
            r
            for r in rows
            if needle in r["student"]["full_name"].lower()
            or needle in r["student"]["email"].lower()
            or needle in (r["assignment"]["title"] or "").lower()
        ]
    return rows


def classroom_grade_list(
    db: Session,
    teacher: User,
    classroom_id: int,
    now: datetime,
    status: str = STATUS_ALL,
    search: str = "",
    page: int = 1,
    page_size: int = 20,
) -> dict:
    """
    One row per (student, assignment) pair of the classroom: the latest real
    attempt, a synthesized zero for work missed past deadline, or a pending
    placeholder. Filtered, searched, then sorted newest activity first.
    """
    ensure_classroom_owner(db, classroom_id, teacher)

    assignments = list_assignments_for_classroom(db, classroom_id)
    students = list_students_in_classroom(db, classroom_id)

    rows: list[dict] = []
    if assignments and students:
        student_by_id = {s.id: s for s in students}
        assignment_by_id = {a.id: a for a in assignments}

        latest = list_latest_attempts_for(db, list(student_by_id), list(assignment_by_id))
        records = classify_pairs(list(student_by_id), assignments, latest, now)
        rows = [
            _row(r, student_by_id[r.student_id], assignment_by_id[r.assignment_id])
            for r in records
        ]

    rows = filter_rows(rows, status, search)
    rows.sort(key=_activity_key)

    total = len(rows)
    graded = sum(1 for r in rows if r["grade"] is not None)
    offset = page_offset(page, page_size)

    logger.info(
        "grade list classroom=%s status=%s rows=%s graded=%s",
        classroom_id,
        status,
        total,
        graded,
    )

    return {
        "rows": rows[offset:offset + page_size],
        "statistics": {"total": total, "graded": graded},
        "pagination": pagination(page, page_size, total),
    }
