class GradingError(Exception):
    """Base class for errors raised by the grade views."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotAuthorized(GradingError):
    """Caller lacks the owning teacher or active parent relationship."""


class NotFound(GradingError):
    """Referenced classroom, assignment or student does not exist."""
