"""
Statistics over classified records.

Every figure that is displayed or aggregated goes through ``round1`` so the
gradebook, the grade list and the parent views never disagree. Synthesized
overdue zeros count as graded: they sit in the denominator of every average
and pin the classroom ``lowest`` to 0.
"""
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping, Sequence

from lms_grades.grading.classify import ClassifiedRecord, GradeStatus

_ONE_DECIMAL = Decimal("0.1")


def round1(value: float) -> float:
    """Round half away from zero to one decimal place."""
    # str() first so 6.05 rounds as written, not as its binary approximation
    return float(Decimal(str(value)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def _rate(numerator: int, denominator: int) -> float:
    if denominator <= 0:
        return 0.0
    return round1(numerator / denominator * 100)


class _GradeFold:
    """Single pass accumulator shared by every aggregate below."""

    def __init__(self, records: Iterable[ClassifiedRecord]):
        self.submitted = 0
        self.graded = 0
        self.awaiting = 0
        self.pending = 0
        self.overdue_missing = 0
        self.grades: list[float] = []
        self.assignment_ids: set[int] = set()

        for r in records:
            self.assignment_ids.add(r.assignment_id)
            if r.is_real:
                self.submitted += 1
            if r.status is GradeStatus.GRADED:
                self.graded += 1
            elif r.status is GradeStatus.SUBMITTED:
                self.awaiting += 1
            elif r.status is GradeStatus.PENDING:
                self.pending += 1
            else:
                self.overdue_missing += 1
            if r.is_gradable:
                self.grades.append(float(r.grade))

    @property
    def gradable(self) -> int:
        return len(self.grades)

    def average(self) -> float | None:
        if not self.grades:
            return None
        return round1(sum(self.grades) / len(self.grades))

    def highest(self) -> float | None:
        if not self.grades:
            return None
        return round1(max(self.grades))

    def lowest(self) -> float | None:
        if not self.grades:
            return None
        # a missed deadline is always the visible floor
        if self.overdue_missing > 0:
            return 0.0
        return round1(min(self.grades))


@dataclass(frozen=True)
class StudentStatistics:
    total_assignments: int
    submitted_count: int
    graded_count: int
    overdue_missing_count: int
    total_pending: int
    average_grade: float | None
    submission_rate: float


@dataclass(frozen=True)
class ClassroomStatistics:
    total_students: int
    total_assignments: int
    submitted_count: int
    graded_count: int
    awaiting_grading_count: int
    pending_count: int
    overdue_missing_count: int
    submission_rate: float
    average_grade: float | None
    highest: float | None
    lowest: float | None


@dataclass(frozen=True)
class AssignmentStatistics:
    total_students: int
    submitted_count: int
    graded_count: int
    awaiting_grading_count: int
    overdue_missing_count: int
    submission_rate: float
    average_grade: float | None
    highest: float | None
    lowest: float | None


@dataclass(frozen=True)
class ParentOverview:
    total_children: int
    total_assignments: int
    submitted_count: int
    graded_count: int
    overdue_missing_count: int
    total_pending: int
    overall_average: float | None


def student_statistics(
    records: Iterable[ClassifiedRecord], total_assignments: int | None = None
) -> StudentStatistics:
    """
    Fold one student's records.

    total_assignments defaults to the distinct assignments present in
    ``records``; pass it explicitly when records were built for a subset.
    """
    fold = _GradeFold(records)
    total = len(fold.assignment_ids) if total_assignments is None else total_assignments

    return StudentStatistics(
        total_assignments=total,
        submitted_count=fold.submitted,
        graded_count=fold.gradable,
        overdue_missing_count=fold.overdue_missing,
        total_pending=max(0, total - fold.gradable),
        average_grade=fold.average(),
        submission_rate=_rate(fold.submitted, total),
    )


def classroom_statistics(
    records: Iterable[ClassifiedRecord], total_students: int, total_assignments: int
) -> ClassroomStatistics:
    fold = _GradeFold(records)

    return ClassroomStatistics(
        total_students=total_students,
        total_assignments=total_assignments,
        submitted_count=fold.submitted,
        graded_count=fold.gradable,
        awaiting_grading_count=fold.awaiting,
        pending_count=fold.pending,
        overdue_missing_count=fold.overdue_missing,
        submission_rate=_rate(fold.submitted, total_students * total_assignments),
        average_grade=fold.average(),
        highest=fold.highest(),
        lowest=fold.lowest(),
    )


def assignment_statistics(
    records: Iterable[ClassifiedRecord], total_students: int
) -> AssignmentStatistics:
    fold = _GradeFold(records)

    return AssignmentStatistics(
        total_students=total_students,
        submitted_count=fold.submitted,
        graded_count=fold.gradable,
        awaiting_grading_count=fold.awaiting,
        overdue_missing_count=fold.overdue_missing,
        submission_rate=_rate(fold.submitted, total_students),
        average_grade=fold.average(),
        highest=fold.highest(),
        lowest=fold.lowest(),
    )


def parent_overview(
    records_by_child: Mapping[int, Sequence[ClassifiedRecord]],
) -> ParentOverview:
    per_child = [student_statistics(records) for records in records_by_child.values()]
    pooled = _GradeFold(r for records in records_by_child.values() for r in records)

    return ParentOverview(
        total_children=len(per_child),
        total_assignments=sum(s.total_assignments for s in per_child),
        submitted_count=sum(s.submitted_count for s in per_child),
        graded_count=sum(s.graded_count for s in per_child),
        overdue_missing_count=sum(s.overdue_missing_count for s in per_child),
        total_pending=sum(s.total_pending for s in per_child),
        overall_average=pooled.average(),
    )
