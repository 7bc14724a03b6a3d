from pydantic import BaseModel


class StudentStatisticsRead(BaseModel):
    total_assignments: int
    submitted_count: int
    graded_count: int  # includes synthesized overdue zeros
    overdue_missing_count: int
    total_pending: int
    average_grade: float | None
    submission_rate: float

    class Config:
        from_attributes = True


class ClassroomStatisticsRead(BaseModel):
    total_students: int
    total_assignments: int
    submitted_count: int
    graded_count: int
    awaiting_grading_count: int
    pending_count: int
    overdue_missing_count: int
    submission_rate: float
    average_grade: float | None
    highest: float | None
    lowest: float | None

    class Config:
        from_attributes = True


class AssignmentStatisticsRead(BaseModel):
    total_students: int
    submitted_count: int
    graded_count: int
    awaiting_grading_count: int
    overdue_missing_count: int
    submission_rate: float
    average_grade: float | None
    highest: float | None
    lowest: float | None

    class Config:
        from_attributes = True


class ParentOverviewRead(BaseModel):
    total_children: int
    total_assignments: int
    submitted_count: int
    graded_count: int
    overdue_missing_count: int
    total_pending: int
    overall_average: float | None

    class Config:
        from_attributes = True
