from typing import Optional

from pydantic import BaseModel

from lms_grades.schemas.statistics import ParentOverviewRead
from lms_grades.schemas.student_grades import StudentGradesRead


class PageInfo(BaseModel):
    next_cursor: Optional[int] = None
    has_more: bool = False
    limit: Optional[int] = None


class ChildGradesRead(StudentGradesRead):
    page_info: PageInfo


class ChildrenGradesRead(BaseModel):
    children: list[StudentGradesRead]
    statistics: ParentOverviewRead
