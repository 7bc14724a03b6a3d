from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lms_grades.core.deps import get_db, get_now
from lms_grades.core.permissions import require_student
from lms_grades.models.user import User
from lms_grades.schemas.student_grades import ClassroomGradesRead, StudentGradesRead
from lms_grades.services.student_grades import my_classroom_grades, my_grades

router = APIRouter(prefix="/students", tags=["student grades"])


@router.get("/grades", response_model=StudentGradesRead)
def own_grades(
    db: Session = Depends(get_db),
    student: User = Depends(require_student),
    now: datetime = Depends(get_now),
):
    return my_grades(db, student, now)


@router.get("/classrooms/{classroom_id}/grades", response_model=ClassroomGradesRead)
def own_classroom_grades(
    classroom_id: int,
    db: Session = Depends(get_db),
    student: User = Depends(require_student),
    now: datetime = Depends(get_now),
):
    return my_classroom_grades(db, student, classroom_id, now)
