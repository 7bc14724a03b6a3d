"""
Per-student grade views.

One student's assignments come either from every classroom they belong to or
from a single classroom. The teacher, student and parent views all build on
``classroom_scope`` / ``student_scope``; only the access check in front of
them differs.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.orm import Session

from lms_grades.grading.classify import ClassifiedRecord, classify_pairs
from lms_grades.grading.errors import NotFound
from lms_grades.grading.stats import student_statistics
from lms_grades.models.assignment import Assignment
from lms_grades.models.classroom import Classroom
from lms_grades.models.user import ROLE_STUDENT, User
from lms_grades.services.access import ensure_classroom_owner, ensure_student_in_classroom
from lms_grades.services.payloads import classroom_payload, stats_payload, student_payload
from lms_grades.services.providers import (
    list_assignment_links,
    list_assignments_for_classroom,
    list_classroom_ids_by_student,
    list_latest_attempts_for,
)

logger = logging.getLogger(__name__)


def reachable_assignments(
    links: list[tuple[Assignment, Classroom]], classroom_ids
) -> list[tuple[Assignment, Classroom]]:
    """Distinct assignments reachable through ``classroom_ids``; first link wins."""
    classroom_ids = set(classroom_ids)
    seen: set[int] = set()
    result: list[tuple[Assignment, Classroom]] = []
    for assignment, classroom in links:
        if classroom.id not in classroom_ids or assignment.id in seen:
            continue
        seen.add(assignment.id)
        result.append((assignment, classroom))
    return result


def grade_row(record: ClassifiedRecord, assignment: Assignment, classroom: Classroom | None) -> dict:
    return {
        "submission_id": record.submission_id,
        "synthetic": record.synthetic,
        "assignment_id": assignment.id,
        "assignment_title": assignment.title,
        "assignment_type": assignment.type,
        "due_date": record.deadline,
        "attempt": record.attempt,
        "grade": record.grade,
        "feedback": record.feedback,
        "submitted_at": record.submitted_at,
        "status": record.status.value,
        "classroom": classroom_payload(classroom),
    }


@dataclass
class GradeScope:
    """Classified records of one student plus what is needed to render them."""

    student: User
    records: list[ClassifiedRecord]
    assignments: dict[int, Assignment] = field(default_factory=dict)
    # keyed by assignment id
    classrooms: dict[int, Classroom] = field(default_factory=dict)

    def rows(self, records: list[ClassifiedRecord] | None = None) -> list[dict]:
        if records is None:
            records = self.records
        return [
            grade_row(r, self.assignments[r.assignment_id], self.classrooms.get(r.assignment_id))
            for r in records
        ]

    def statistics(self) -> dict:
        return stats_payload(
            student_statistics(self.records, total_assignments=len(self.assignments))
        )


def build_scope(
    student: User,
    pairs: list[tuple[Assignment, Classroom]],
    latest_by_pair,
    now: datetime,
) -> GradeScope:
    assignments = [a for a, _ in pairs]
    return GradeScope(
        student=student,
        records=classify_pairs([student.id], assignments, latest_by_pair, now),
        assignments={a.id: a for a in assignments},
        classrooms={a.id: c for a, c in pairs},
    )


def student_scope(db: Session, student: User, now: datetime) -> GradeScope:
    """Every assignment reaching the student through any of their classrooms."""
    classroom_ids = list_classroom_ids_by_student(db, [student.id]).get(student.id, [])
    pairs = reachable_assignments(list_assignment_links(db, classroom_ids), classroom_ids)
    latest = list_latest_attempts_for(db, [student.id], [a.id for a, _ in pairs])
    return build_scope(student, pairs, latest, now)


def classroom_scope(db: Session, student: User, classroom: Classroom, now: datetime) -> GradeScope:
    pairs = [(a, classroom) for a in list_assignments_for_classroom(db, classroom.id)]
    latest = list_latest_attempts_for(db, [student.id], [a.id for a, _ in pairs])
    return build_scope(student, pairs, latest, now)


def classroom_view(scope: GradeScope, classroom: Classroom) -> dict:
    return {
        "student": student_payload(scope.student),
        "classroom": classroom_payload(classroom),
        "grades": scope.rows(),
        "statistics": scope.statistics(),
    }


def get_student_or_404(db: Session, student_id: int) -> User:
    student = db.get(User, student_id)
    if not student or student.role != ROLE_STUDENT:
        raise NotFound("Student not found")
    return student


def student_grades(
    db: Session,
    teacher: User,
    classroom_id: int,
    student_id: int,
    now: datetime,
) -> dict:
    """One student of the teacher's classroom, one row per classroom assignment."""
    ensure_classroom_owner(db, classroom_id, teacher)
    student = get_student_or_404(db, student_id)
    classroom = ensure_student_in_classroom(db, classroom_id, student.id)

    scope = classroom_scope(db, student, classroom, now)
    logger.info(
        "teacher student grades classroom=%s student=%s assignments=%s",
        classroom_id,
        student.id,
        len(scope.assignments),
    )
    return classroom_view(scope, classroom)


def my_grades(db: Session, student: User, now: datetime) -> dict:
    scope = student_scope(db, student, now)
    logger.info("student grades student=%s assignments=%s", student.id, len(scope.assignments))
    return {
        "student": student_payload(student),
        "grades": scope.rows(),
        "statistics": scope.statistics(),
    }


def my_classroom_grades(db: Session, student: User, classroom_id: int, now: datetime) -> dict:
    classroom = ensure_student_in_classroom(db, classroom_id, student.id)
    return classroom_view(classroom_scope(db, student, classroom, now), classroom)
