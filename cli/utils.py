"""Shared CLI utility functions for KeepPrompt commands.

Updates:
  v0.1.1 - 2026-10-11 - Add prompt table formatting and confirmation helpers.
  v0.1.0 - 2026-09-30 - Extract stdout logging and path helpers.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Sequence
    from logging import Logger

    from models.prompt_model import Prompt

_TITLE_WIDTH = 40


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def describe_path(
    path_value: object,
    *,
    expect_directory: bool,
    allow_missing_file: bool = False,
) -> str:
    """Return a human-friendly description of *path_value* suitability."""
    try:
        path = Path(path_value) if path_value is not None else None  # type: ignore[arg-type]
    except TypeError:
        path = None
    if path is None:
        return "not set"

    resolved = path.expanduser()
    if resolved.exists():
        if expect_directory and not resolved.is_dir():
            return f"{resolved} (exists but is not a directory)"
        if not expect_directory and resolved.is_dir():
            return f"{resolved} (exists but is a directory)"
        return f"{resolved} (exists)"

    message = f"{resolved} (missing)"
    if not expect_directory and allow_missing_file:
        message = f"{resolved} (missing - created on demand)"
    parent = resolved.parent
    if not parent.exists():
        message += f", parent missing: {parent}"
    return message


def shorten(text: str, width: int = _TITLE_WIDTH) -> str:
    """Return *text* on one line, truncated with an ellipsis past *width*."""
    single_line = " ".join(text.split())
    if len(single_line) <= width:
        return single_line
    return single_line[: max(width - 3, 0)] + "..."


def format_prompt_rows(prompts: Sequence[Prompt]) -> list[str]:
    """Return one display line per prompt."""
    lines: list[str] = []
    for prompt in prompts:
        star = "*" if prompt.is_favorite else " "
        tags = ", ".join(prompt.tags) if prompt.tags else "-"
        lines.append(
            f"{star} {prompt.id}  {shorten(prompt.title):<{_TITLE_WIDTH}}  "
            f"[{prompt.category}]  uses={prompt.usage_count}  tags={tags}"
        )
    return lines


def confirm(question: str) -> bool:
    """Ask a yes/no *question* on stdin; non-interactive sessions answer no."""
    if not sys.stdin.isatty():
        return False
    response = input(f"{question} [y/N]: ").strip().lower()
    return response in {"y", "yes"}


__all__ = [
    "confirm",
    "describe_path",
    "format_prompt_rows",
    "print_and_log",
    "shorten",
]
