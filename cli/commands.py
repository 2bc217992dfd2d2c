"""CLI command handlers for KeepPrompt.

Every handler receives the shared :class:`PromptWorkspace`, the parsed
arguments, and the CLI logger, and returns a process exit code:

* ``0`` success
* ``1`` the target prompt or category does not exist
* ``4`` the user declined a confirmation
* ``5`` invalid input (validation errors, unreadable files)
* ``6`` export, import, or clear failure

Updates:
  v0.2.1 - 2026-10-19 - Exit with the transfer failure code when clearing fails.
  v0.2.0 - 2026-10-11 - Add export/import, category, and settings commands.
  v0.1.0 - 2026-09-30 - Introduce prompt CRUD command handlers.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from core.exceptions import (
    CategoryNotFoundError,
    DuplicateCategoryError,
    KeepPromptError,
    PromptValidationError,
)
from core.query import ALL_CATEGORIES, SortKey, SortOrder
from models.category_model import DEFAULT_CATEGORY_COLOR
from models.prompt_model import PromptDraft, PromptUpdate

from .utils import confirm, format_prompt_rows, print_and_log

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from core.workspace import PromptWorkspace

CommandHandler = Callable[["PromptWorkspace", argparse.Namespace, logging.Logger], int]

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_DECLINED = 4
EXIT_INVALID = 5
EXIT_TRANSFER_FAILED = 6


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler


def _read_content(args: argparse.Namespace) -> str | None:
    content_file = getattr(args, "content_file", None)
    if content_file is None:
        return getattr(args, "content", None)
    try:
        return Path(content_file).expanduser().read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ValueError(f"Unable to read {content_file}: {exc}") from exc


def _report_validation(logger: logging.Logger, exc: PromptValidationError) -> int:
    for message in exc.errors:
        print_and_log(logger, logging.ERROR, message)
    return EXIT_INVALID


def run_list(
    workspace: PromptWorkspace,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    workspace.search(getattr(args, "term", "") or "")
    workspace.filter_category(getattr(args, "category", ALL_CATEGORIES))
    workspace.sort(
        getattr(args, "sort", SortKey.UPDATED_AT.value),
        getattr(args, "order", SortOrder.DESC.value),
    )
    workspace.pipeline.flush()

    prompts = workspace.visible
    if getattr(args, "favorites", False):
        prompts = [prompt for prompt in prompts if prompt.is_favorite]
    if not prompts:
        print("No prompts found.")
        return EXIT_OK
    for line in format_prompt_rows(prompts):
        print(line)
    logger.debug("Listed prompts", extra={"count": len(prompts)})
    return EXIT_OK


def run_show(
    workspace: PromptWorkspace,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    prompt = workspace.store.get(args.prompt_id)
    if prompt is None:
        print_and_log(logger, logging.ERROR, f"Prompt {args.prompt_id} not found.")
        return EXIT_NOT_FOUND
    print(f"{prompt.title} [{prompt.category}]")
    if prompt.description:
        print(prompt.description)
    if prompt.tags:
        print("Tags: " + ", ".join(prompt.tags))
    print(f"Uses: {prompt.usage_count}  Favourite: {'yes' if prompt.is_favorite else 'no'}")
    print()
    print(prompt.content)
    return EXIT_OK


def run_add(
    workspace: PromptWorkspace,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        content = _read_content(args) or ""
    except ValueError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_INVALID
    draft = PromptDraft(
        title=args.title,
        content=content,
        description=args.description,
        tags=list(args.tags or []),
        category=args.category or "",
        is_favorite=bool(getattr(args, "favorite", False)),
    )
    try:
        prompt = workspace.create_prompt(draft)
    except PromptValidationError as exc:
        return _report_validation(logger, exc)
    if prompt is None:
        return EXIT_TRANSFER_FAILED
    print(prompt.id)
    return EXIT_OK


def run_edit(
    workspace: PromptWorkspace,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        content = _read_content(args)
    except ValueError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_INVALID
    tags: list[str] | None = None
    if args.tags is not None:
        tags = list(args.tags)
    elif getattr(args, "clear_tags", False):
        tags = []
    changes = PromptUpdate(
        title=args.title,
        content=content,
        description=args.description,
        tags=tags,
        category=args.category,
    )
    try:
        prompt = workspace.update_prompt(args.prompt_id, changes)
    except PromptValidationError as exc:
        return _report_validation(logger, exc)
    if prompt is None:
        return EXIT_NOT_FOUND if workspace.store.get(args.prompt_id) is None else EXIT_INVALID
    return EXIT_OK


def run_delete(
    workspace: PromptWorkspace,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    confirm_delete = workspace.settings.get().confirm_delete
    if confirm_delete and not args.yes and not confirm(f"Delete prompt {args.prompt_id}?"):
        print_and_log(logger, logging.WARNING, "Deletion cancelled.")
        return EXIT_DECLINED
    return EXIT_OK if workspace.delete_prompt(args.prompt_id) else EXIT_NOT_FOUND


def run_favorite(
    workspace: PromptWorkspace,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    del logger
    return EXIT_OK if workspace.toggle_favorite(args.prompt_id) is not None else EXIT_NOT_FOUND


def run_use(
    workspace: PromptWorkspace,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    del logger
    prompt = workspace.use_prompt(args.prompt_id)
    if prompt is None:
        return EXIT_NOT_FOUND
    print(prompt.content)
    return EXIT_OK


def run_export(
    workspace: PromptWorkspace,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    destination = workspace.export_to_file(Path(args.path))
    if destination is None:
        return EXIT_TRANSFER_FAILED
    print_and_log(logger, logging.INFO, f"Backup written to {destination}")
    return EXIT_OK


def run_import(
    workspace: PromptWorkspace,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    summary = workspace.import_from_file(Path(args.path))
    if summary is None:
        return EXIT_TRANSFER_FAILED
    parts: list[str] = []
    if summary.prompts is not None:
        parts.append(f"{summary.prompts} prompt(s)")
    if summary.categories is not None:
        parts.append(f"{summary.categories} category(ies)")
    if summary.settings:
        parts.append("settings")
    print_and_log(logger, logging.INFO, "Imported " + (", ".join(parts) or "nothing"))
    return EXIT_OK


def run_categories(
    workspace: PromptWorkspace,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    action = getattr(args, "category_action", None) or "list"
    store = workspace.categories
    try:
        if action == "add":
            category = store.add(
                args.name,
                color=args.color or DEFAULT_CATEGORY_COLOR,
                category_id=args.category_id,
            )
            print_and_log(logger, logging.INFO, f"Added category {category.id}")
            return EXIT_OK
        if action == "remove":
            if not store.delete(args.category_id):
                print_and_log(logger, logging.ERROR, f"Category {args.category_id} not found.")
                return EXIT_NOT_FOUND
            print_and_log(logger, logging.INFO, f"Removed category {args.category_id}")
            return EXIT_OK
    except (DuplicateCategoryError, CategoryNotFoundError) as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_INVALID
    except KeepPromptError as exc:
        print_and_log(logger, logging.ERROR, f"Failed to save categories: {exc}")
        return EXIT_TRANSFER_FAILED

    for category in store.get_all():
        print(f"{category.id:<16} {category.name:<20} {category.color}")
    return EXIT_OK


def run_settings(
    workspace: PromptWorkspace,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    action = getattr(args, "settings_action", None) or "show"
    if action == "theme":
        updated = workspace.settings.toggle_theme()
        if updated is None:
            return EXIT_TRANSFER_FAILED
        print_and_log(logger, logging.INFO, f"Theme set to {updated.theme}")
        return EXIT_OK
    for key, value in workspace.settings.get().to_record().items():
        print(f"{key}: {value}")
    return EXIT_OK


def run_clear(
    workspace: PromptWorkspace,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    if not args.yes and not confirm("Delete all prompts, categories, and settings?"):
        print_and_log(logger, logging.WARNING, "Clear cancelled.")
        return EXIT_DECLINED
    if not workspace.clear_all_data():
        print_and_log(logger, logging.ERROR, "Failed to clear stored data.")
        return EXIT_TRANSFER_FAILED
    return EXIT_OK


COMMAND_SPECS: dict[str | None, CommandSpec] = {
    None: CommandSpec(run_list),
    "list": CommandSpec(run_list),
    "search": CommandSpec(run_list),
    "show": CommandSpec(run_show),
    "add": CommandSpec(run_add),
    "edit": CommandSpec(run_edit),
    "delete": CommandSpec(run_delete),
    "favorite": CommandSpec(run_favorite),
    "use": CommandSpec(run_use),
    "export": CommandSpec(run_export),
    "import": CommandSpec(run_import),
    "categories": CommandSpec(run_categories),
    "settings": CommandSpec(run_settings),
    "clear": CommandSpec(run_clear),
}


__all__ = ["COMMAND_SPECS", "CommandSpec"]
