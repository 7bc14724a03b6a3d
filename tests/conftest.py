import os
from datetime import datetime, timezone

TEST_DB_FILE = "test_lms_grades.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# must be set before lms_grades.db.session builds its engine
os.environ["LMS_DATABASE_URL"] = TEST_DB_URL

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from lms_grades.core.deps import get_db, get_now  # noqa: E402
from lms_grades.db.base import Base  # noqa: E402
from lms_grades.main import app  # noqa: E402
from lms_grades.models.assignment import Assignment, AssignmentClassroom  # noqa: E402
from lms_grades.models.classroom import Classroom, ClassroomStudent  # noqa: E402
from lms_grades.models.parent_student import ParentStudent  # noqa: E402
from lms_grades.models.submission import Submission  # noqa: E402
from lms_grades.models.user import User  # noqa: E402

# every API test runs "at" this instant
NOW = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create a fresh schema once for the whole test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture()
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def seed_data():
    """
    Seed a clean dataset for each test.

    Math 7A (teacher1): Alice, Bob, Carol
      Essay 1  due 01-10                -> past
      Quiz 1   due 01-10, lock 01-20    -> lock wins, still open
      Essay 2  no deadline
    Science 7A (teacher1): Alice
      Lab report due 01-12              -> past
    parent1 is ACTIVE for Alice and PENDING for Bob.
    """
    db = TestingSessionLocal()
    try:
        # Clear tables (child -> parent)
        db.query(Submission).delete()
        db.query(ParentStudent).delete()
        db.query(AssignmentClassroom).delete()
        db.query(ClassroomStudent).delete()
        db.query(Assignment).delete()
        db.query(Classroom).delete()
        db.query(User).delete()
        db.commit()

        # Users
        teacher = User(email="teacher1@example.com", full_name="Teacher One", role="teacher")
        other_teacher = User(email="teacher2@example.com", full_name="Teacher Two", role="teacher")
        alice = User(email="alice@example.com", full_name="Alice Nguyen", role="student")
        bob = User(email="bob@example.com", full_name="Bob Tran", role="student")
        carol = User(email="carol@example.com", full_name=None, role="student")
        parent = User(email="parent1@example.com", full_name="Parent One", role="parent")
        db.add_all([teacher, other_teacher, alice, bob, carol, parent])
        db.commit()

        # Classrooms
        math = Classroom(name="Math 7A", code="MATH7A", teacher_id=teacher.id)
        science = Classroom(name="Science 7A", code="SCI7A", teacher_id=teacher.id)
        art = Classroom(name="Art 7A", code="ART7A", teacher_id=other_teacher.id)
        db.add_all([math, science, art])
        db.commit()

        db.add_all(
            [
                ClassroomStudent(classroom_id=math.id, student_id=alice.id),
                ClassroomStudent(classroom_id=math.id, student_id=bob.id),
                ClassroomStudent(classroom_id=math.id, student_id=carol.id),
                ClassroomStudent(classroom_id=science.id, student_id=alice.id),
                ClassroomStudent(classroom_id=art.id, student_id=bob.id),
            ]
        )

        # Assignments
        essay1 = Assignment(
            title="Essay 1", type="essay", due_date=utc(2024, 1, 10), created_at=utc(2024, 1, 1)
        )
        quiz1 = Assignment(
            title="Quiz 1",
            type="quiz",
            due_date=utc(2024, 1, 10),
            lock_at=utc(2024, 1, 20),
            max_attempts=2,
            created_at=utc(2024, 1, 1),
        )
        essay2 = Assignment(title="Essay 2", type="essay", created_at=utc(2024, 1, 1))
        lab = Assignment(
            title="Lab report", type="essay", due_date=utc(2024, 1, 12), created_at=utc(2024, 1, 1)
        )
        db.add_all([essay1, quiz1, essay2, lab])
        db.commit()

        db.add_all(
            [
                AssignmentClassroom(assignment_id=essay1.id, classroom_id=math.id, added_at=utc(2024, 1, 1)),
                AssignmentClassroom(assignment_id=quiz1.id, classroom_id=math.id, added_at=utc(2024, 1, 2)),
                AssignmentClassroom(assignment_id=essay2.id, classroom_id=math.id, added_at=utc(2024, 1, 3)),
                AssignmentClassroom(assignment_id=lab.id, classroom_id=science.id, added_at=utc(2024, 1, 4)),
            ]
        )

        # Submissions
        db.add_all(
            [
                Submission(
                    assignment_id=essay1.id, student_id=alice.id, attempt=1,
                    grade=8, feedback="Good", submitted_at=utc(2024, 1, 9),
                ),
                # resubmitted quiz: attempt 2 is ungraded
                Submission(
                    assignment_id=quiz1.id, student_id=alice.id, attempt=1,
                    grade=5, submitted_at=utc(2024, 1, 11),
                ),
                Submission(
                    assignment_id=quiz1.id, student_id=alice.id, attempt=2,
                    grade=None, submitted_at=utc(2024, 1, 13),
                ),
                Submission(
                    assignment_id=essay1.id, student_id=bob.id, attempt=1,
                    grade=6, submitted_at=utc(2024, 1, 8),
                ),
                Submission(
                    assignment_id=essay2.id, student_id=bob.id, attempt=1,
                    grade=10, submitted_at=utc(2024, 1, 14),
                ),
            ]
        )

        # Parent links
        db.add_all(
            [
                ParentStudent(parent_id=parent.id, student_id=alice.id, status="ACTIVE"),
                ParentStudent(parent_id=parent.id, student_id=bob.id, status="PENDING"),
            ]
        )
        db.commit()

        yield {
            "teacher": teacher.id,
            "other_teacher": other_teacher.id,
            "alice": alice.id,
            "bob": bob.id,
            "carol": carol.id,
            "parent": parent.id,
            "math": math.id,
            "science": science.id,
            "art": art.id,
            "essay1": essay1.id,
            "quiz1": quiz1.id,
            "essay2": essay2.id,
            "lab": lab.id,
        }
    finally:
        db.close()


@pytest.fixture()
def client():
    """Test client on the test DB with the clock pinned to NOW."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: NOW
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
