from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from lms_grades.schemas.common import StudentRead
from lms_grades.schemas.gradebook import GradeStatusLiteral
from lms_grades.schemas.statistics import StudentStatisticsRead


class TeacherBrief(BaseModel):
    id: int
    full_name: Optional[str] = None
    email: str


class ClassroomBrief(BaseModel):
    id: int
    name: str
    code: str
    teacher: Optional[TeacherBrief] = None


class GradeRow(BaseModel):
    submission_id: Optional[int] = None
    synthetic: bool = False

    assignment_id: int
    assignment_title: str
    assignment_type: str
    due_date: Optional[datetime] = None

    attempt: Optional[int] = None
    grade: Optional[float] = None
    feedback: Optional[str] = None
    submitted_at: Optional[datetime] = None
    status: GradeStatusLiteral

    classroom: Optional[ClassroomBrief] = None


class StudentGradesRead(BaseModel):
    student: StudentRead
    grades: list[GradeRow]
    statistics: StudentStatisticsRead


class ClassroomGradesRead(StudentGradesRead):
    classroom: ClassroomBrief
