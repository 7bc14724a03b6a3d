from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import relationship

from lms_grades.db.base_class import Base

TYPE_ESSAY = "essay"
TYPE_QUIZ = "quiz"


class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(20), nullable=False, default=TYPE_ESSAY)

    # soft due date; lock_at is the hard cutoff and wins when both are set
    due_date = Column(DateTime(timezone=True), nullable=True)
    lock_at = Column(DateTime(timezone=True), nullable=True)
    max_attempts = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    classroom_links = relationship(
        "AssignmentClassroom", back_populates="assignment", cascade="all, delete-orphan"
    )

    submissions = relationship("Submission", back_populates="assignment", cascade="all, delete-orphan")


class AssignmentClassroom(Base):
    __tablename__ = "assignment_classrooms"

    id = Column(Integer, primary_key=True, index=True)
    assignment_id = Column(Integer, ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False, index=True)
    classroom_id = Column(Integer, ForeignKey("classrooms.id", ondelete="CASCADE"), nullable=False, index=True)
    added_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("assignment_id", "classroom_id", name="uq_assignment_classroom"),
    )

    assignment = relationship("Assignment", back_populates="classroom_links")
    classroom = relationship("Classroom", back_populates="assignment_links")
