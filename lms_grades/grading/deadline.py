from datetime import datetime, timezone


def as_utc(value: datetime | None) -> datetime | None:
    # SQLite often returns naive datetimes; treat as UTC
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def effective_deadline(assignment) -> datetime | None:
    """
    The one deadline every overdue check uses:
    - lock_at (hard cutoff) when set
    - otherwise due_date
    - otherwise None (never overdue)
    """
    if assignment.lock_at is not None:
        return as_utc(assignment.lock_at)
    return as_utc(assignment.due_date)


def deadline_passed(deadline: datetime | None, now: datetime) -> bool:
    if deadline is None:
        return False
    return as_utc(deadline) < as_utc(now)


def is_overdue(assignment, now: datetime) -> bool:
    return deadline_passed(effective_deadline(assignment), now)
