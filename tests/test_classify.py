from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from lms_grades.grading.classify import (
    GradeStatus,
    build_record,
    classify,
    classify_pairs,
    synthesize_missing,
)

NOW = datetime(2024, 1, 15, tzinfo=timezone.utc)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def assignment(id, due_date=None, lock_at=None):
    return SimpleNamespace(id=id, due_date=due_date, lock_at=lock_at)


def row(student_id, assignment_id, grade, number=1, id=100):
    return SimpleNamespace(
        id=id,
        student_id=student_id,
        assignment_id=assignment_id,
        attempt=number,
        grade=grade,
        feedback="ok" if grade is not None else None,
        submitted_at=utc(2024, 1, 9),
    )


@pytest.mark.parametrize(
    "submission, deadline, expected",
    [
        (row(1, 1, 7), utc(2024, 1, 10), GradeStatus.GRADED),
        (row(1, 1, 0), None, GradeStatus.GRADED),
        (row(1, 1, None), utc(2024, 1, 10), GradeStatus.SUBMITTED),
        (None, utc(2024, 1, 10), GradeStatus.OVERDUE_MISSING),
        (None, utc(2024, 1, 20), GradeStatus.PENDING),
        (None, None, GradeStatus.PENDING),
    ],
)
def test_classify(submission, deadline, expected):
    assert classify(submission, deadline, NOW) is expected


def test_missed_due_date_synthesizes_zero():
    # due 01-10, no lock, checked 01-15, nothing submitted
    record = build_record(1, assignment(1, due_date=utc(2024, 1, 10)), None, NOW)
    assert record.status is GradeStatus.OVERDUE_MISSING
    assert record.grade == 0
    assert record.synthetic is True
    assert record.submission_id is None
    assert record.submitted_at is None
    assert record.feedback is None


def test_open_lock_at_keeps_pair_pending():
    a = assignment(1, due_date=utc(2024, 1, 10), lock_at=utc(2024, 1, 20))
    record = build_record(1, a, None, NOW)
    assert record.status is GradeStatus.PENDING
    assert record.grade is None
    assert record.synthetic is False


def test_ungraded_resubmission_is_submitted_not_graded():
    from lms_grades.grading.attempts import select_latest

    rows = [row(1, 1, 5, number=1, id=10), row(1, 1, None, number=2, id=11)]
    latest = select_latest(rows)
    record = build_record(1, assignment(1, due_date=utc(2024, 1, 10)), latest[(1, 1)], NOW)
    assert record.status is GradeStatus.SUBMITTED
    assert record.submission_id == 11
    assert record.attempt == 2
    assert record.grade is None


def test_real_zero_grade_is_not_synthetic():
    record = build_record(1, assignment(1), row(1, 1, 0), NOW)
    assert record.status is GradeStatus.GRADED
    assert record.grade == 0
    assert record.synthetic is False
    assert record.is_real


def test_synthesize_missing_keeps_deadline():
    record = synthesize_missing(3, 4, utc(2024, 1, 10))
    assert (record.student_id, record.assignment_id) == (3, 4)
    assert record.deadline == utc(2024, 1, 10)
    assert not record.is_real
    assert record.is_gradable


def test_classify_pairs_covers_every_pair_once():
    assignments = [
        assignment(1, due_date=utc(2024, 1, 10)),
        assignment(2, lock_at=utc(2024, 1, 20)),
        assignment(3),
    ]
    latest = {(1, 1): row(1, 1, 9), (2, 3): row(2, 3, None)}
    records = classify_pairs([1, 2], assignments, latest, NOW)

    assert [(r.student_id, r.assignment_id) for r in records] == [
        (1, 1), (1, 2), (1, 3), (2, 1), (2, 2), (2, 3),
    ]
    assert [r.status for r in records] == [
        GradeStatus.GRADED,
        GradeStatus.PENDING,
        GradeStatus.PENDING,
        GradeStatus.OVERDUE_MISSING,
        GradeStatus.PENDING,
        GradeStatus.SUBMITTED,
    ]
    assert all(isinstance(r.status, GradeStatus) for r in records)
