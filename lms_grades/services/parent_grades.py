"""
Parent views: one child across all of their classrooms, one child inside a
single classroom, and every actively linked child at once.

The classification is the same one the teacher views use; only the scope
(which assignments reach the child) differs.
"""
import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from lms_grades.grading.classify import ClassifiedRecord
from lms_grades.grading.deadline import as_utc
from lms_grades.grading.stats import parent_overview, student_statistics
from lms_grades.models.assignment import Assignment
from lms_grades.models.user import User
from lms_grades.services.access import (
    active_children,
    ensure_active_parent_link,
    ensure_student_in_classroom,
)
from lms_grades.services.payloads import stats_payload, student_payload
from lms_grades.services.providers import (
    list_assignment_links,
    list_classroom_ids_by_student,
    list_latest_attempts_for,
)
from lms_grades.services.student_grades import (
    build_scope,
    classroom_scope,
    classroom_view,
    reachable_assignments,
    student_scope,
)

logger = logging.getLogger(__name__)


def _in_window(record: ClassifiedRecord, assignment: Assignment, since: datetime) -> bool:
    anchor = record.deadline or as_utc(assignment.created_at)
    if anchor is not None and anchor >= since:
        return True
    return record.submitted_at is not None and record.submitted_at >= since


def child_grades(
    db: Session,
    parent: User,
    child_id: int,
    now: datetime,
    window_days: int | None = None,
    limit: int | None = None,
    cursor: int | None = None,
) -> dict:
    """
    Every assignment reaching the child through their classrooms.

    window_days narrows the set to recent work; limit/cursor page through it
    by assignment id descending. Statistics cover the whole (windowed) set.
    """
    child = ensure_active_parent_link(db, parent, child_id)
    scope = student_scope(db, child, now)

    records = scope.records
    if window_days:
        since = as_utc(now) - timedelta(days=window_days)
        records = [r for r in records if _in_window(r, scope.assignments[r.assignment_id], since)]

    statistics = student_statistics(records, total_assignments=len(records))

    page = sorted(records, key=lambda r: r.assignment_id, reverse=True)
    if cursor is not None:
        page = [r for r in page if r.assignment_id < cursor]

    has_more = False
    next_cursor = None
    if limit is not None and len(page) > limit:
        page = page[:limit]
        has_more = True
        next_cursor = page[-1].assignment_id

    logger.info(
        "parent child grades child=%s assignments=%s window=%s",
        child.id,
        len(records),
        window_days,
    )

    return {
        "student": student_payload(child),
        "grades": scope.rows(page),
        "statistics": stats_payload(statistics),
        "page_info": {"next_cursor": next_cursor, "has_more": has_more, "limit": limit},
    }


def child_classroom_grades(
    db: Session,
    parent: User,
    child_id: int,
    classroom_id: int,
    now: datetime,
) -> dict:
    child = ensure_active_parent_link(db, parent, child_id)
    classroom = ensure_student_in_classroom(db, classroom_id, child.id)
    return classroom_view(classroom_scope(db, child, classroom, now), classroom)


def all_children_grades(db: Session, parent: User, now: datetime) -> dict:
    """Every actively linked child, plus totals across all of them."""
    children = active_children(db, parent)
    child_ids = [c.id for c in children]

    classrooms_by_child = list_classroom_ids_by_student(db, child_ids)
    all_classroom_ids = {cid for ids in classrooms_by_child.values() for cid in ids}
    links = list_assignment_links(db, all_classroom_ids)
    assignment_ids = {a.id for a, _ in links}

    latest = list_latest_attempts_for(db, child_ids, assignment_ids)

    summaries: list[dict] = []
    records_by_child: dict[int, list[ClassifiedRecord]] = {}
    for child in children:
        pairs = reachable_assignments(links, classrooms_by_child.get(child.id, []))
        scope = build_scope(child, pairs, latest, now)
        records_by_child[child.id] = scope.records

        summaries.append(
            {
                "student": student_payload(child),
                "grades": scope.rows(),
                "statistics": scope.statistics(),
            }
        )

    overview = parent_overview(records_by_child)
    logger.info(
        "parent all children parent=%s children=%s assignments=%s",
        parent.id,
        len(children),
        len(assignment_ids),
    )

    return {"children": summaries, "statistics": stats_payload(overview)}
