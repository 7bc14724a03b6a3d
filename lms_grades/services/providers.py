"""
Read-side queries feeding the grade views.

Each function is one round trip; classification and aggregation happen in
memory over what they return.
"""
from collections import defaultdict
from typing import Iterable

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from lms_grades.grading.attempts import select_latest
from lms_grades.models.assignment import Assignment, AssignmentClassroom
from lms_grades.models.classroom import Classroom, ClassroomStudent
from lms_grades.models.submission import Submission
from lms_grades.models.user import User


def _student_order_by():
    """
    Student ordering:
    - full_name NULLs last (SQLite-safe)
    - full_name ascending
    - email ascending
    """
    return (
        User.full_name.is_(None),
        User.full_name.asc(),
        User.email.asc(),
    )


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _students_query(db: Session, classroom_id: int, search: str = ""):
    q = (
        db.query(User)
        .join(ClassroomStudent, ClassroomStudent.student_id == User.id)
        .filter(ClassroomStudent.classroom_id == classroom_id)
    )
    if search:
        # plain substring match, like the in-memory filters of the other views
        like = f"%{escape_like(search)}%"
        q = q.filter(
            or_(
                User.full_name.ilike(like, escape="\\"),
                User.email.ilike(like, escape="\\"),
            )
        )
    return q


def list_students_in_classroom(
    db: Session,
    classroom_id: int,
    search: str = "",
    offset: int = 0,
    limit: int | None = None,
) -> list[User]:
    q = _students_query(db, classroom_id, search).order_by(*_student_order_by())
    if offset:
        q = q.offset(offset)
    if limit is not None:
        q = q.limit(limit)
    return q.all()


def count_students_in_classroom(db: Session, classroom_id: int, search: str = "") -> int:
    return (
        _students_query(db, classroom_id, search)
        .with_entities(func.count(User.id))
        .scalar()
    ) or 0


def list_assignments_for_classroom(db: Session, classroom_id: int) -> list[Assignment]:
    """Assignments attached to the classroom, most recently attached first."""
    return (
        db.query(Assignment)
        .join(AssignmentClassroom, AssignmentClassroom.assignment_id == Assignment.id)
        .filter(AssignmentClassroom.classroom_id == classroom_id)
        .order_by(AssignmentClassroom.added_at.desc(), Assignment.id.desc())
        .all()
    )


def list_classroom_ids_by_student(
    db: Session, student_ids: Iterable[int]
) -> dict[int, list[int]]:
    student_ids = list(student_ids)
    if not student_ids:
        return {}

    rows = (
        db.query(ClassroomStudent.student_id, ClassroomStudent.classroom_id)
        .filter(ClassroomStudent.student_id.in_(student_ids))
        .order_by(ClassroomStudent.classroom_id.asc())
        .all()
    )

    result: dict[int, list[int]] = defaultdict(list)
    for r in rows:
        result[r.student_id].append(r.classroom_id)
    return dict(result)


def list_assignment_links(
    db: Session, classroom_ids: Iterable[int]
) -> list[tuple[Assignment, Classroom]]:
    """
    Every (assignment, classroom) attachment for the given classrooms,
    most recently attached first. An assignment shared by several
    classrooms appears once per classroom.
    """
    classroom_ids = list(classroom_ids)
    if not classroom_ids:
        return []

    rows = (
        db.query(Assignment, Classroom)
        .join(AssignmentClassroom, AssignmentClassroom.assignment_id == Assignment.id)
        .join(Classroom, Classroom.id == AssignmentClassroom.classroom_id)
        .filter(AssignmentClassroom.classroom_id.in_(classroom_ids))
        .order_by(AssignmentClassroom.added_at.desc(), Assignment.id.desc())
        .all()
    )
    return [(a, c) for a, c in rows]


def list_attempts_for(
    db: Session, student_ids: Iterable[int], assignment_ids: Iterable[int]
) -> list[Submission]:
    """All attempts of the given students on the given assignments, in one query."""
    student_ids = list(student_ids)
    assignment_ids = list(assignment_ids)
    if not student_ids or not assignment_ids:
        return []

    return (
        db.query(Submission)
        .filter(
            Submission.student_id.in_(student_ids),
            Submission.assignment_id.in_(assignment_ids),
        )
        .all()
    )


def list_latest_attempts_for(
    db: Session, student_ids: Iterable[int], assignment_ids: Iterable[int]
) -> dict[tuple[int, int], Submission]:
    return select_latest(list_attempts_for(db, student_ids, assignment_ids))
