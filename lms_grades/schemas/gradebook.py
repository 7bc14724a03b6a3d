from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

from lms_grades.schemas.common import Pagination, StudentRead
from lms_grades.schemas.statistics import (
    AssignmentStatisticsRead,
    ClassroomStatisticsRead,
    StudentStatisticsRead,
)

GradeStatusLiteral = Literal["pending", "submitted", "graded", "overdue_missing"]


class GradebookAssignment(BaseModel):
    id: int
    title: str
    type: str
    due_date: Optional[datetime] = None  # effective deadline
    is_overdue: bool = False


class GradebookCell(BaseModel):
    student_id: int
    assignment_id: int
    status: GradeStatusLiteral

    submission_id: Optional[int] = None
    attempt: Optional[int] = None
    grade: Optional[float] = None
    feedback: Optional[str] = None
    submitted_at: Optional[datetime] = None
    deadline: Optional[datetime] = None

    # read-time zero for work missed past deadline; never stored
    synthetic: bool = False


class GradebookStudentRow(BaseModel):
    student: StudentRead
    cells: list[GradebookCell]
    statistics: StudentStatisticsRead


class GradebookRead(BaseModel):
    students: list[GradebookStudentRow]
    assignments: list[GradebookAssignment]
    statistics: ClassroomStatisticsRead
    pagination: Pagination
    column_pagination: Pagination


class AssignmentSummary(GradebookAssignment):
    statistics: AssignmentStatisticsRead


class AssignmentSummaryPage(BaseModel):
    assignments: list[AssignmentSummary]
    pagination: Pagination
