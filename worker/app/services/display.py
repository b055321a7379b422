# worker/app/services/display.py
from __future__ import annotations

from dataclasses import dataclass

from worker.app.config import settings


@dataclass(frozen=True)
class DisplayText:
    text: str
    total_lines: int
    shown_lines: int
    truncated: bool


def count_lines(text: str) -> int:
    return text.count("\n") + 1 if text else 0


def cap_lines(text: str, max_lines: int | None = None) -> DisplayText:
    """
    Cap a result for rendering. The stored result is never altered; callers
    keep the full text and show ``DisplayText.text``.
    """
    if max_lines is None:
        max_lines = int(settings.MAX_DISPLAY_LINES)
    total = count_lines(text)
    if max_lines <= 0 or total <= max_lines:
        return DisplayText(text, total, total, False)
    shown = "\n".join(text.split("\n", max_lines)[:max_lines])
    return DisplayText(shown, total, max_lines, True)
