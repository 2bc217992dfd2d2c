"""Common exception classes for the core package.

All exceptions ultimately inherit from :class:`KeepPromptError`, allowing
callers to catch a single base class for any store-related failure while
still distinguishing individual error categories when needed.

Updates:
  v0.3.0 - 2026-09-28 - Add category exception hierarchy.
  v0.2.0 - 2026-09-21 - Split storage failures into read and write errors.
  v0.1.0 - 2026-09-14 - Created module.
"""

from __future__ import annotations

from collections.abc import Iterable


class KeepPromptError(Exception):
    """Base exception for KeepPrompt failures."""


class PromptValidationError(KeepPromptError):
    """Raised when a prompt payload fails validation on a write path."""

    def __init__(self, errors: Iterable[str]) -> None:
        """Store the individual violation messages."""
        self.errors: list[str] = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid prompt")


# ---------------------------------------------------------------------------
# Storage errors
# ---------------------------------------------------------------------------


class StorageError(KeepPromptError):
    """Base class for storage backend failures."""


class StorageReadError(StorageError):
    """Raised when stored data cannot be read or parsed."""


class StorageWriteError(StorageError):
    """Raised when persisting data to the backend fails (e.g. quota exceeded)."""


class ImportFormatError(KeepPromptError):
    """Raised when an import payload is malformed or has an unsupported shape."""


# ---------------------------------------------------------------------------
# Category errors
# ---------------------------------------------------------------------------


class CategoryError(KeepPromptError):
    """Base class for prompt category management failures."""


class CategoryNotFoundError(CategoryError):
    """Raised when a requested category does not exist."""


class DuplicateCategoryError(CategoryError):
    """Raised when a category id is already taken."""


__all__ = [
    "CategoryError",
    "CategoryNotFoundError",
    "DuplicateCategoryError",
    "ImportFormatError",
    "KeepPromptError",
    "PromptValidationError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
