# tests/test_validation.py

from __future__ import annotations

import pytest

from taskboard.core.errors import TaskValidationError
from taskboard.core.validation import validate_enum, validate_required


def test_validate_enum_accepts_members_and_omissions() -> None:
    validate_enum()
    validate_enum(status="In Progress")
    validate_enum(priority="Low")
    validate_enum(status="Completed", priority="High")


def test_validate_enum_rejects_unknown_status() -> None:
    with pytest.raises(TaskValidationError) as excinfo:
        validate_enum(status="Blocked", priority="High")

    error = excinfo.value
    assert error.status_code == 400
    assert error.code == "invalid_status"
    assert error.allowed_values == ["To Do", "In Progress", "Completed"]
    assert "To Do, In Progress, Completed" in error.message


def test_validate_enum_rejects_unknown_priority() -> None:
    with pytest.raises(TaskValidationError) as excinfo:
        validate_enum(priority="urgent")

    assert excinfo.value.code == "invalid_priority"
    assert excinfo.value.allowed_values == ["High", "Medium", "Low"]
    assert excinfo.value.to_dict()["hint"] == "Must be one of: High, Medium, Low"


def test_enum_values_are_case_sensitive() -> None:
    with pytest.raises(TaskValidationError):
        validate_enum(status="to do")


@pytest.mark.parametrize(
    "title, priority, status",
    [
        (None, "High", "To Do"),
        ("   ", "High", "To Do"),
        ("Ship report", None, "To Do"),
        ("Ship report", "High", ""),
        (None, None, None),
    ],
)
def test_validate_required_reports_one_combined_error(title, priority, status) -> None:
    with pytest.raises(TaskValidationError) as excinfo:
        validate_required(title, priority, status)

    assert excinfo.value.message == "Title, priority, and status are required"
    assert excinfo.value.code == "missing_fields"


def test_validate_required_passes_complete_payload() -> None:
    validate_required("Ship report", "High", "To Do")
