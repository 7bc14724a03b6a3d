import logging
from collections import defaultdict
from datetime import datetime

from sqlalchemy.orm import Session

from lms_grades.grading.classify import build_record, classify_pairs
from lms_grades.grading.stats import (
    assignment_statistics,
    classroom_statistics,
    student_statistics,
)
from lms_grades.models.user import User
from lms_grades.services.access import ensure_classroom_owner
from lms_grades.services.payloads import (
    assignment_payload,
    page_offset,
    pagination,
    record_payload,
    stats_payload,
    student_payload,
)
from lms_grades.services.providers import (
    count_students_in_classroom,
    list_assignments_for_classroom,
    list_latest_attempts_for,
    list_students_in_classroom,
)

logger = logging.getLogger(__name__)


def classroom_gradebook(
    db: Session,
    teacher: User,
    classroom_id: int,
    now: datetime,
    search: str = "",
    page: int = 1,
    page_size: int = 10,
    columns: int = 8,
    col_page: int = 1,
) -> dict:
    """
    Matrix view: students (rows, searchable and paginated) by assignments
    (columns, paginated). Classroom statistics always cover every student and
    every assignment, whatever page is shown.
    """
    ensure_classroom_owner(db, classroom_id, teacher)
    search = search.strip()

    assignments = list_assignments_for_classroom(db, classroom_id)
    all_students = list_students_in_classroom(db, classroom_id)
    student_ids = [s.id for s in all_students]

    latest = list_latest_attempts_for(db, student_ids, [a.id for a in assignments])
    records = classify_pairs(student_ids, assignments, latest, now)

    by_student = defaultdict(list)
    for r in records:
        by_student[r.student_id].append(r)

    total_filtered = count_students_in_classroom(db, classroom_id, search)
    page_students = list_students_in_classroom(
        db,
        classroom_id,
        search,
        offset=page_offset(page, page_size),
        limit=page_size,
    )

    col_offset = page_offset(col_page, columns)
    visible = assignments[col_offset:col_offset + columns]
    visible_ids = {a.id for a in visible}

    rows: list[dict] = []
    for s in page_students:
        student_records = by_student.get(s.id, [])
        rows.append(
            {
                "student": student_payload(s),
                "cells": [
                    record_payload(r) for r in student_records if r.assignment_id in visible_ids
                ],
                "statistics": stats_payload(
                    student_statistics(student_records, total_assignments=len(assignments))
                ),
            }
        )

    statistics = classroom_statistics(records, len(all_students), len(assignments))

    logger.info(
        "gradebook classroom=%s students=%s assignments=%s page=%s col_page=%s",
        classroom_id,
        len(all_students),
        len(assignments),
        page,
        col_page,
    )

    return {
        "students": rows,
        "assignments": [assignment_payload(a, now) for a in visible],
        "statistics": stats_payload(statistics),
        "pagination": pagination(page, page_size, total_filtered),
        "column_pagination": pagination(col_page, columns, len(assignments)),
    }


def _matches_assignment(assignment, search: str) -> bool:
    if not search:
        return True
    needle = search.lower()
    return needle in (assignment.title or "").lower() or needle == (assignment.type or "").lower()


def assignment_summaries(
    db: Session,
    teacher: User,
    classroom_id: int,
    now: datetime,
    search: str = "",
    page: int = 1,
    page_size: int = 10,
) -> dict:
    """Per-assignment statistics across the classroom's students."""
    ensure_classroom_owner(db, classroom_id, teacher)
    search = search.strip()

    assignments = [
        a for a in list_assignments_for_classroom(db, classroom_id) if _matches_assignment(a, search)
    ]
    offset = page_offset(page, page_size)
    visible = assignments[offset:offset + page_size]

    students = list_students_in_classroom(db, classroom_id)
    student_ids = [s.id for s in students]
    latest = list_latest_attempts_for(db, student_ids, [a.id for a in visible])

    result: list[dict] = []
    for a in visible:
        records = [build_record(sid, a, latest.get((sid, a.id)), now) for sid in student_ids]
        result.append(
            {
                **assignment_payload(a, now),
                "statistics": stats_payload(assignment_statistics(records, len(student_ids))),
            }
        )

    logger.info(
        "assignment summaries classroom=%s assignments=%s page=%s",
        classroom_id,
        len(assignments),
        page,
    )

    return {
        "assignments": result,
        "pagination": pagination(page, page_size, len(assignments)),
    }
