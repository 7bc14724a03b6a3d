from sqlalchemy.orm import Session

from lms_grades.grading.errors import NotAuthorized, NotFound
from lms_grades.models.classroom import Classroom, ClassroomStudent
from lms_grades.models.parent_student import LINK_ACTIVE, ParentStudent
from lms_grades.models.user import ROLE_STUDENT, User


def get_classroom_or_404(db: Session, classroom_id: int) -> Classroom:
    classroom = db.query(Classroom).filter(Classroom.id == classroom_id).first()
    if not classroom:
        raise NotFound("Classroom not found")
    return classroom


def ensure_classroom_owner(db: Session, classroom_id: int, user: User) -> Classroom:
    classroom = get_classroom_or_404(db, classroom_id)
    if classroom.teacher_id != user.id:
        raise NotAuthorized("Not your classroom")
    return classroom


def ensure_active_parent_link(db: Session, parent: User, student_id: int) -> User:
    link = (
        db.query(ParentStudent)
        .filter(
            ParentStudent.parent_id == parent.id,
            ParentStudent.student_id == student_id,
        )
        .first()
    )
    if not link:
        raise NotAuthorized("No relationship found with this student")
    if link.status != LINK_ACTIVE:
        raise NotAuthorized("Relationship is not active")

    student = db.get(User, student_id)
    if not student or student.role != ROLE_STUDENT:
        raise NotFound("Student not found")
    return student


def ensure_student_in_classroom(db: Session, classroom_id: int, student_id: int) -> Classroom:
    classroom = get_classroom_or_404(db, classroom_id)
    is_member = (
        db.query(ClassroomStudent)
        .filter(
            ClassroomStudent.classroom_id == classroom_id,
            ClassroomStudent.student_id == student_id,
        )
        .first()
        is not None
    )
    if not is_member:
        raise NotAuthorized("Student is not a member of this classroom")
    return classroom


def active_children(db: Session, parent: User) -> list[User]:
    return (
        db.query(User)
        .join(ParentStudent, ParentStudent.student_id == User.id)
        .filter(
            ParentStudent.parent_id == parent.id,
            ParentStudent.status == LINK_ACTIVE,
            User.role == ROLE_STUDENT,
        )
        .order_by(User.full_name.is_(None), User.full_name.asc(), User.email.asc())
        .all()
    )
