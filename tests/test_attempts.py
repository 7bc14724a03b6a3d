from datetime import datetime, timezone
from types import SimpleNamespace

from lms_grades.grading.attempts import select_latest


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def attempt(student_id, assignment_id, number, grade=None, submitted_at=None, id=None):
    return SimpleNamespace(
        id=id,
        student_id=student_id,
        assignment_id=assignment_id,
        attempt=number,
        grade=grade,
        feedback=None,
        submitted_at=submitted_at or utc(2024, 1, number),
    )


def test_highest_attempt_wins_regardless_of_row_order():
    rows = [
        attempt(1, 10, 2, id="second"),
        attempt(1, 10, 3, id="third"),
        attempt(1, 10, 1, id="first"),
    ]
    latest = select_latest(rows)
    assert latest[(1, 10)].id == "third"


def test_one_row_per_pair_in_bulk():
    rows = [
        attempt(1, 10, 1),
        attempt(1, 10, 2),
        attempt(1, 11, 1),
        attempt(2, 10, 1),
        attempt(2, 10, 4),
    ]
    latest = select_latest(rows)
    assert set(latest) == {(1, 10), (1, 11), (2, 10)}
    for key, row in latest.items():
        numbers = [r.attempt for r in rows if (r.student_id, r.assignment_id) == key]
        assert row.attempt == max(numbers)


def test_duplicate_attempt_numbers_break_on_latest_submission():
    rows = [
        attempt(1, 10, 2, submitted_at=utc(2024, 1, 12), id="late"),
        attempt(1, 10, 2, submitted_at=utc(2024, 1, 11), id="early"),
    ]
    assert select_latest(rows)[(1, 10)].id == "late"


def test_pairs_without_rows_are_absent():
    latest = select_latest([attempt(1, 10, 1)])
    assert (2, 10) not in latest
    assert select_latest([]) == {}


def test_naive_and_aware_timestamps_compare():
    rows = [
        attempt(1, 10, 1, submitted_at=datetime(2024, 1, 12), id="naive"),
        attempt(1, 10, 1, submitted_at=utc(2024, 1, 11), id="aware"),
    ]
    assert select_latest(rows)[(1, 10)].id == "naive"
