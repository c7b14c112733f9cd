"""Request validation for task payloads, run before anything is persisted."""

from taskboard.core.errors import TaskValidationError
from taskboard.models.task import VALID_PRIORITIES, VALID_STATUSES


def validate_enum(status: str | None = None, priority: str | None = None) -> None:
    """Check status and priority membership; omitted values are always valid."""
    if status is not None and status not in VALID_STATUSES:
        raise TaskValidationError(
            f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}",
            code="invalid_status",
            allowed_values=VALID_STATUSES,
        )
    if priority is not None and priority not in VALID_PRIORITIES:
        raise TaskValidationError(
            f"Invalid priority. Must be one of: {', '.join(VALID_PRIORITIES)}",
            code="invalid_priority",
            allowed_values=VALID_PRIORITIES,
        )


def validate_title(title: str) -> None:
    if not title.strip():
        raise TaskValidationError("Title cannot be empty", code="missing_fields")


def validate_required(title: str | None, priority: str | None, status: str | None) -> None:
    """Creation needs all three; a missing one yields a single combined error."""
    if not (title and title.strip()) or not priority or not status:
        raise TaskValidationError(
            "Title, priority, and status are required",
            code="missing_fields",
        )
