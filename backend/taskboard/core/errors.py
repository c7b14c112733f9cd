"""Error types surfaced by the API and translation of store faults."""

from sqlalchemy.exc import SQLAlchemyError

from taskboard.models.task import VALID_PRIORITIES, VALID_STATUSES

ENUM_HINT = (
    f"Status must be one of: {', '.join(VALID_STATUSES)}. "
    f"Priority must be one of: {', '.join(VALID_PRIORITIES)}"
)
SCHEMA_HINT = "Run schema initialization: python -m taskboard.db.init_db"
CONNECTION_HINT = "Check the DATABASE_URL setting in your .env file"
CREDENTIALS_HINT = "Check the database username and password in DATABASE_URL"


class TaskAPIError(Exception):
    """Base error rendered as ``{error, details?, code?, hint?}``."""

    status_code = 500
    code = "error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details
        self.hint = hint

    def to_dict(self) -> dict:
        body = {"error": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        if self.hint:
            body["hint"] = self.hint
        return body


class TaskValidationError(TaskAPIError):
    """Client sent a payload that cannot be stored."""

    status_code = 400
    code = "invalid_request"

    def __init__(self, message: str, *, allowed_values: list[str] | None = None, **kwargs) -> None:
        self.allowed_values = allowed_values or []
        if self.allowed_values and "hint" not in kwargs:
            kwargs["hint"] = f"Must be one of: {', '.join(self.allowed_values)}"
        super().__init__(message, **kwargs)


class TaskNotFound(TaskAPIError):
    status_code = 404
    code = "not_found"

    def __init__(self, task_id) -> None:
        self.task_id = task_id
        super().__init__("Task not found", details=f"No task with id '{task_id}'")


class SchemaInitError(TaskAPIError):
    """Raised when the schema step fails; the app keeps serving."""

    code = "schema_init_failed"


class StoreError(TaskAPIError):
    code = "store_error"


def _sqlstate(exc: SQLAlchemyError) -> str | None:
    orig = getattr(exc, "orig", None)
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def classify_store_error(exc: SQLAlchemyError, action: str = "complete the request") -> TaskAPIError:
    """Map a SQLAlchemy error onto one of the API error categories."""
    state = _sqlstate(exc) or ""
    orig = getattr(exc, "orig", None)
    details = str(orig if orig is not None else exc)
    lowered = details.lower()

    if state == "23514" or "check constraint" in lowered:
        return TaskValidationError(
            "Invalid status or priority value",
            code="constraint_violation",
            details=details,
            hint=ENUM_HINT,
        )
    if state == "42P01" or "no such table" in lowered or ("relation" in lowered and "does not exist" in lowered):
        return StoreError(
            "Database table does not exist",
            code="schema_missing",
            details=details,
            hint=SCHEMA_HINT,
        )
    if state in ("28P01", "28000") or "authentication failed" in lowered:
        return StoreError(
            "Database authentication failed",
            code="auth_failed",
            details=details,
            hint=CREDENTIALS_HINT,
        )
    if (
        state == "3D000"
        or state.startswith("08")
        or "could not connect" in lowered
        or "unable to open database" in lowered
        or "connection refused" in lowered
    ):
        return StoreError(
            "Database connection failed",
            code="connection_failed",
            details=details,
            hint=CONNECTION_HINT,
        )
    return StoreError(f"Failed to {action}", details=details)
