from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from lms_grades.schemas.common import Pagination, StudentRead
from lms_grades.schemas.gradebook import GradeStatusLiteral


class GradeListAssignment(BaseModel):
    id: int
    title: str
    type: str
    due_date: Optional[datetime] = None


class GradeListRow(BaseModel):
    submission_id: Optional[int] = None
    synthetic: bool = False

    student: StudentRead
    assignment: GradeListAssignment

    attempt: Optional[int] = None
    grade: Optional[float] = None
    feedback: Optional[str] = None
    submitted_at: Optional[datetime] = None
    status: GradeStatusLiteral


class GradeListStatistics(BaseModel):
    total: int
    graded: int


class GradeListRead(BaseModel):
    rows: list[GradeListRow]
    statistics: GradeListStatistics
    pagination: Pagination
