import math
from dataclasses import asdict
from datetime import datetime

from lms_grades.grading.classify import ClassifiedRecord
from lms_grades.grading.deadline import effective_deadline, is_overdue
from lms_grades.models.assignment import Assignment
from lms_grades.models.classroom import Classroom
from lms_grades.models.user import User


def page_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def pagination(page: int, page_size: int, total: int) -> dict:
    return {
        "page": page,
        "page_size": page_size,
        "total": total,
        "total_pages": max(1, math.ceil(total / page_size)),
    }


def student_payload(user: User) -> dict:
    return {
        "id": user.id,
        "full_name": user.display_name,
        "email": user.email,
    }


def assignment_payload(assignment: Assignment, now: datetime) -> dict:
    return {
        "id": assignment.id,
        "title": assignment.title,
        "type": assignment.type,
        "due_date": effective_deadline(assignment),
        "is_overdue": is_overdue(assignment, now),
    }


def classroom_payload(classroom: Classroom | None) -> dict | None:
    if classroom is None:
        return None
    teacher = classroom.teacher
    return {
        "id": classroom.id,
        "name": classroom.name,
        "code": classroom.code,
        "teacher": (
            {"id": teacher.id, "full_name": teacher.full_name, "email": teacher.email}
            if teacher
            else None
        ),
    }


def record_payload(record: ClassifiedRecord) -> dict:
    data = asdict(record)
    data["status"] = record.status.value
    return data


def stats_payload(stats) -> dict:
    return asdict(stats)
