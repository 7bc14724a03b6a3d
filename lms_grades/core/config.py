import os
from datetime import timedelta
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

DATABASE_URL = os.getenv("LMS_DATABASE_URL", f"sqlite:///{BASE_DIR}/lms_grades.db")

# DEV ONLY: override LMS_SECRET_KEY in any shared environment.
SECRET_KEY = os.getenv("LMS_SECRET_KEY", "change-me-in-production")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE = timedelta(minutes=60)

LOG_LEVEL = os.getenv("LMS_LOG_LEVEL", "INFO")

# Teacher gradebook matrix
GRADEBOOK_PAGE_SIZE = 10
GRADEBOOK_PAGE_SIZE_MIN = 5
GRADEBOOK_PAGE_SIZE_MAX = 50
GRADEBOOK_COLUMNS = 8
GRADEBOOK_COLUMNS_MAX = 30

# Teacher grade list
GRADE_LIST_PAGE_SIZE = 20
GRADE_LIST_PAGE_SIZE_MAX = 100

# Export
EXPORT_LIMIT = 5000
EXPORT_LIMIT_MAX = 10000

# Parent views
PARENT_WINDOW_DAYS_MAX = 365
PARENT_LIMIT_MAX = 200

SEARCH_MAX_LENGTH = 200
