from datetime import datetime, timezone
from typing import Iterable

from lms_grades.grading.deadline import as_utc

Pair = tuple[int, int]

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def pair_key(row) -> Pair:
    return (row.student_id, row.assignment_id)


def _rank(row) -> tuple[int, datetime]:
    return (row.attempt or 0, as_utc(row.submitted_at) or _EPOCH)


def select_latest(rows: Iterable) -> dict[Pair, object]:
    """
    Group attempt rows by (student_id, assignment_id) and keep one per pair.

    The highest attempt number wins; duplicated attempt numbers fall back to
    the later submitted_at. Pairs without any row are simply absent.
    """
    latest: dict[Pair, object] = {}
    for row in rows:
        key = pair_key(row)
        current = latest.get(key)
        if current is None or _rank(row) > _rank(current):
            latest[key] = row
    return latest
