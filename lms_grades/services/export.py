import io
import logging
import re
import unicodedata
from datetime import datetime

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from sqlalchemy.orm import Session

from lms_grades.grading.deadline import as_utc, effective_deadline
from lms_grades.grading.stats import round1
from lms_grades.models.user import User
from lms_grades.services.access import ensure_classroom_owner
from lms_grades.services.grade_list import STATUS_GRADED, STATUS_UNGRADED
from lms_grades.services.providers import (
    list_assignments_for_classroom,
    list_latest_attempts_for,
    list_students_in_classroom,
)

logger = logging.getLogger(__name__)

SORT_RECENT = "recent"
SORT_DUE = "due"
SORT_GRADE = "grade"

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADERS = [
    "Student",
    "Email",
    "Assignment",
    "Type",
    "Deadline",
    "Submitted at",
    "Grade",
    "Status",
    "Feedback",
]
COLUMN_WIDTHS = [22, 28, 40, 10, 20, 20, 8, 18, 60]


def slugify(value: str) -> str:
    s = unicodedata.normalize("NFKD", value.lower())
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = re.sub(r"[^a-z0-9]+", "-", s).strip("-")
    return (s or "classroom")[:60]


def _fmt(value: datetime | None) -> str:
    if value is None:
        return ""
    return as_utc(value).strftime("%Y-%m-%d %H:%M:%S")


def _sort_key(sort: str):
    def submitted_desc(item) -> float:
        return -as_utc(item["submission"].submitted_at).timestamp()

    if sort == SORT_GRADE:
        return lambda item: (
            item["submission"].grade is None,
            -(item["submission"].grade or 0),
            submitted_desc(item),
        )
    if sort == SORT_DUE:
        return lambda item: (
            item["deadline"] is None,
            item["deadline"].timestamp() if item["deadline"] else 0.0,
            submitted_desc(item),
        )
    return submitted_desc


def export_rows(
    db: Session,
    teacher: User,
    classroom_id: int,
    status: str = "all",
    search: str = "",
    assignment_id: int | None = None,
    sort: str = SORT_RECENT,
    limit: int = 5000,
) -> tuple[str, list[dict]]:
    """
    Latest real submission per (student, assignment) pair of the classroom.

    Synthesized overdue zeros are a read-time view only and never exported.
    """
    classroom = ensure_classroom_owner(db, classroom_id, teacher)

    assignments = {a.id: a for a in list_assignments_for_classroom(db, classroom_id)}
    if assignment_id is not None:
        assignments = {k: v for k, v in assignments.items() if k == assignment_id}
    students = {s.id: s for s in list_students_in_classroom(db, classroom_id)}

    latest = list_latest_attempts_for(db, list(students), list(assignments))
    needle = search.strip().lower()

    items: list[dict] = []
    for (student_id, aid), sub in latest.items():
        if status == STATUS_GRADED and sub.grade is None:
            continue
        if status == STATUS_UNGRADED and sub.grade is not None:
            continue

        student = students[student_id]
        assignment = assignments[aid]
        if needle and not (
            needle in student.display_name.lower()
            or needle in student.email.lower()
            or needle in (assignment.title or "").lower()
        ):
            continue

        items.append(
            {
                "submission": sub,
                "student": student,
                "assignment": assignment,
                "deadline": effective_deadline(assignment),
            }
        )

    items.sort(key=_sort_key(sort))
    return classroom.name, items[:limit]


def build_workbook(items: list[dict]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Grades"

    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color="305496", end_color="305496", fill_type="solid")

    for col, header in enumerate(HEADERS, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center")

    for row, item in enumerate(items, 2):
        sub = item["submission"]
        student = item["student"]
        assignment = item["assignment"]
        grade = round1(sub.grade) if sub.grade is not None else None

        values = [
            student.display_name,
            student.email,
            assignment.title,
            assignment.type,
            _fmt(item["deadline"]),
            _fmt(sub.submitted_at),
            grade,
            "Graded" if grade is not None else "Awaiting grading",
            sub.feedback or "",
        ]
        for col, value in enumerate(values, 1):
            ws.cell(row=row, column=col, value=value)

    for col, width in enumerate(COLUMN_WIDTHS, 1):
        ws.column_dimensions[get_column_letter(col)].width = width

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def export_classroom_grades(
    db: Session,
    teacher: User,
    classroom_id: int,
    now: datetime,
    status: str = "all",
    search: str = "",
    assignment_id: int | None = None,
    sort: str = SORT_RECENT,
    limit: int = 5000,
) -> tuple[str, bytes]:
    classroom_name, items = export_rows(
        db,
        teacher,
        classroom_id,
        status=status,
        search=search,
        assignment_id=assignment_id,
        sort=sort,
        limit=limit,
    )
    content = build_workbook(items)

    filename = f"grades-{slugify(classroom_name)}-{now.strftime('%Y-%m-%d_%H-%M-%S')}.xlsx"
    logger.info("export classroom=%s rows=%s file=%s", classroom_id, len(items), filename)
    return filename, content
