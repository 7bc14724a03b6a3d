from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lms_grades.db.base_class import Base

LINK_ACTIVE = "ACTIVE"
LINK_PENDING = "PENDING"
LINK_REVOKED = "REVOKED"


class ParentStudent(Base):
    __tablename__ = "parent_students"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    parent_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    student_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=LINK_PENDING)

    __table_args__ = (
        UniqueConstraint("parent_id", "student_id", name="uq_parent_students_parent_student"),
    )

    student = relationship("User", foreign_keys=[student_id])
