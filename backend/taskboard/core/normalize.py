"""Translation between the client-facing and stored task representations.

Tags are stored as one comma-joined string and exposed as a list. Subtasks
are stored as JSON and exposed as a list of ``{id, text, completed}``.
Minor malformations are repaired rather than rejected: blank subtasks are
dropped and unparseable stored data reads back as an empty list.
"""

import json
import logging
import time
from typing import Any

logger = logging.getLogger(__name__)

TAG_SEPARATOR = ", "


def normalize_tags_in(tags: str | list[str] | None) -> str | None:
    """List -> comma-joined string; string passes through; empty -> None."""
    if tags is None:
        return None
    if isinstance(tags, (list, tuple)):
        cleaned = [str(tag).strip() for tag in tags if tag is not None and str(tag).strip()]
        return TAG_SEPARATOR.join(cleaned) or None
    return str(tags).strip() or None


def normalize_tags_out(stored: str | None) -> list[str]:
    if not stored:
        return []
    return [segment.strip() for segment in stored.split(",") if segment.strip()]


def _subtask_text(item: Any) -> str:
    if not isinstance(item, dict):
        return ""
    text = item.get("text")
    if isinstance(text, str):
        return text.strip()
    title = item.get("title")
    if isinstance(title, str):
        return title.strip()
    return ""


def normalize_subtasks_in(raw: Any, now: float | None = None) -> list[dict]:
    """Clean a subtask list from a request body.

    Entries without text are dropped. An entry without a usable id gets one
    built from the current time in milliseconds and its position.
    """
    if not isinstance(raw, list):
        return []

    stamp = int((time.time() if now is None else now) * 1000)
    subtasks = []
    for index, item in enumerate(raw):
        text = _subtask_text(item)
        if not text:
            logger.debug("Dropping blank subtask at position %s", index)
            continue

        subtask_id = item.get("id")
        if isinstance(subtask_id, str) and subtask_id.strip():
            subtask_id = subtask_id.strip()
        else:
            subtask_id = f"{stamp}-{index}"

        subtasks.append(
            {
                "id": subtask_id,
                "text": text,
                "completed": bool(item.get("completed", False)),
            }
        )
    return subtasks


def normalize_subtasks_out(stored: Any) -> list:
    if isinstance(stored, list):
        return stored
    if isinstance(stored, str):
        try:
            parsed = json.loads(stored)
        except ValueError:
            logger.warning("Stored subtasks are not valid JSON, returning empty list")
            return []
        return parsed if isinstance(parsed, list) else []
    return []
