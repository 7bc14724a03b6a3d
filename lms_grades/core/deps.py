from datetime import datetime, timezone

from lms_grades.db.session import SessionLocal


# every request that needs DB will get a fresh session, and it will always close.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# read once per request; tests override this to pin the clock
def get_now() -> datetime:
    return datetime.now(timezone.utc)
