from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lms_grades.db.base_class import Base

ROLE_TEACHER = "teacher"
ROLE_STUDENT = "student"
ROLE_PARENT = "parent"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    full_name: Mapped[str | None] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(50), nullable=False, default=ROLE_STUDENT)

    classroom_links = relationship(
        "ClassroomStudent", back_populates="student", cascade="all, delete-orphan"
    )

    submissions = relationship(
        "Submission", back_populates="student", cascade="all, delete-orphan"
    )

    @property
    def display_name(self) -> str:
        name = (self.full_name or "").strip()
        return name or self.email.split("@")[0] or "Student"
