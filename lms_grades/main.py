import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from lms_grades.core.config import LOG_LEVEL
from lms_grades.core.logging_middleware import LoggingMiddleware
from lms_grades.db.init_db import init_db
from lms_grades.grading.errors import NotAuthorized, NotFound
from lms_grades.routers.parent_grades import router as parent_grades_router
from lms_grades.routers.student_grades import router as student_grades_router
from lms_grades.routers.teacher_grades import router as teacher_grades_router

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="LMS Grades")

# Middleware
app.add_middleware(LoggingMiddleware)


@app.exception_handler(NotAuthorized)
async def not_authorized_handler(request: Request, exc: NotAuthorized):
    logger.warning("forbidden %s %s: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"detail": exc.detail},
    )


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": exc.detail},
    )


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Startup event
@app.on_event("startup")
def on_startup():
    init_db()


# Include routers
app.include_router(teacher_grades_router)
app.include_router(parent_grades_router)
app.include_router(student_grades_router)
