from lms_grades.db.base import Base
from lms_grades.db.session import engine


def init_db() -> None:
    Base.metadata.create_all(bind=engine)
