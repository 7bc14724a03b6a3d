from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Mapping

from lms_grades.grading.deadline import as_utc, deadline_passed, effective_deadline


class GradeStatus(str, Enum):
    PENDING = "pending"
    SUBMITTED = "submitted"
    GRADED = "graded"
    OVERDUE_MISSING = "overdue_missing"


@dataclass(frozen=True)
class ClassifiedRecord:
    student_id: int
    assignment_id: int
    status: GradeStatus
    grade: float | None = None
    feedback: str | None = None
    submitted_at: datetime | None = None
    submission_id: int | None = None
    attempt: int | None = None
    deadline: datetime | None = None
    synthetic: bool = False

    @property
    def is_real(self) -> bool:
        return self.submission_id is not None and not self.synthetic

    @property
    def is_gradable(self) -> bool:
        # counted in averages: real grades and synthesized zeros
        return self.status in (GradeStatus.GRADED, GradeStatus.OVERDUE_MISSING)


def classify(row, deadline: datetime | None, now: datetime) -> GradeStatus:
    if row is not None:
        if row.grade is not None:
            return GradeStatus.GRADED
        return GradeStatus.SUBMITTED
    if deadline_passed(deadline, now):
        return GradeStatus.OVERDUE_MISSING
    return GradeStatus.PENDING


def synthesize_missing(
    student_id: int, assignment_id: int, deadline: datetime | None
) -> ClassifiedRecord:
    """Zero-grade placeholder for work missed past its deadline. Never persisted."""
    return ClassifiedRecord(
        student_id=student_id,
        assignment_id=assignment_id,
        status=GradeStatus.OVERDUE_MISSING,
        grade=0.0,
        feedback=None,
        submitted_at=None,
        submission_id=None,
        attempt=None,
        deadline=deadline,
        synthetic=True,
    )


def build_record(student_id: int, assignment, row, now: datetime) -> ClassifiedRecord:
    deadline = effective_deadline(assignment)
    status = classify(row, deadline, now)

    if status is GradeStatus.OVERDUE_MISSING:
        return synthesize_missing(student_id, assignment.id, deadline)

    if row is None:
        return ClassifiedRecord(
            student_id=student_id,
            assignment_id=assignment.id,
            status=status,
            deadline=deadline,
        )

    return ClassifiedRecord(
        student_id=student_id,
        assignment_id=assignment.id,
        status=status,
        grade=row.grade,
        feedback=row.feedback,
        submitted_at=as_utc(row.submitted_at),
        submission_id=row.id,
        attempt=row.attempt,
        deadline=deadline,
    )


def classify_pairs(
    student_ids: Iterable[int],
    assignments: Iterable,
    latest_by_pair: Mapping[tuple[int, int], object],
    now: datetime,
) -> list[ClassifiedRecord]:
    """One record per (student, assignment) pair, student-major."""
    assignments = list(assignments)
    records: list[ClassifiedRecord] = []
    for student_id in student_ids:
        for assignment in assignments:
            row = latest_by_pair.get((student_id, assignment.id))
            records.append(build_record(student_id, assignment, row, now))
    return records
