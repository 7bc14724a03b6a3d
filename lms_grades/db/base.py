# import models so Base.metadata knows every table
from lms_grades.db.base_class import Base  # noqa: F401
from lms_grades.models import (  # noqa: F401
    assignment,
    classroom,
    parent_student,
    submission,
    user,
)
