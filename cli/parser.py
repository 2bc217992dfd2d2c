"""Argument parser for the KeepPrompt CLI.

Updates:
  v0.2.0 - 2026-10-11 - Add export/import, category, and settings subcommands.
  v0.1.0 - 2026-09-30 - Introduce list/add/edit/delete subcommands.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from core.query import ALL_CATEGORIES, SortKey, SortOrder

_SORT_CHOICES = tuple(key.value for key in SortKey)
_ORDER_CHOICES = tuple(order.value for order in SortOrder)


def _add_query_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--category",
        default=ALL_CATEGORIES,
        help=f"Category id or tag to filter by (default: {ALL_CATEGORIES}).",
    )
    parser.add_argument(
        "--sort",
        choices=_SORT_CHOICES,
        default=SortKey.UPDATED_AT.value,
        help="Field used to order results (default: updatedAt).",
    )
    parser.add_argument(
        "--order",
        choices=_ORDER_CHOICES,
        default=SortOrder.DESC.value,
        help="Sort direction (default: desc).",
    )
    parser.add_argument(
        "--favorites",
        action="store_true",
        help="Only show prompts marked as favourite.",
    )


def _add_prompt_fields(parser: argparse.ArgumentParser, *, required: bool) -> None:
    parser.add_argument("--title", required=required, help="Prompt title.")
    content = parser.add_mutually_exclusive_group(required=required)
    content.add_argument("--content", help="Prompt body text.")
    content.add_argument(
        "--content-file",
        type=Path,
        help="Read the prompt body from a UTF-8 text file.",
    )
    parser.add_argument("--description", default=None, help="Optional short description.")
    parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        default=None,
        help="Tag to attach (repeat for several tags).",
    )
    parser.add_argument("--category", default=None, help="Category id (default: general).")


def build_parser() -> argparse.ArgumentParser:
    """Return the configured argument parser."""
    parser = argparse.ArgumentParser(description="KeepPrompt prompt library")
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="List stored prompts.")
    _add_query_arguments(list_parser)

    search_parser = subparsers.add_parser(
        "search",
        help="Search titles, content, descriptions, and tags (case-insensitive).",
    )
    search_parser.add_argument("term", type=str, help="Text to look for.")
    _add_query_arguments(search_parser)

    show_parser = subparsers.add_parser("show", help="Print a single prompt.")
    show_parser.add_argument("prompt_id", help="Identifier of the prompt.")

    add_parser = subparsers.add_parser("add", help="Create a new prompt.")
    _add_prompt_fields(add_parser, required=True)
    add_parser.add_argument(
        "--favorite",
        action="store_true",
        help="Mark the new prompt as favourite.",
    )

    edit_parser = subparsers.add_parser("edit", help="Update fields of an existing prompt.")
    edit_parser.add_argument("prompt_id", help="Identifier of the prompt.")
    _add_prompt_fields(edit_parser, required=False)
    edit_parser.add_argument(
        "--clear-tags",
        action="store_true",
        help="Remove all tags (ignored when --tag is given).",
    )

    delete_parser = subparsers.add_parser("delete", help="Delete a prompt.")
    delete_parser.add_argument("prompt_id", help="Identifier of the prompt.")
    delete_parser.add_argument(
        "--yes",
        action="store_true",
        help="Skip the confirmation question.",
    )

    favorite_parser = subparsers.add_parser("favorite", help="Toggle the favourite flag.")
    favorite_parser.add_argument("prompt_id", help="Identifier of the prompt.")

    use_parser = subparsers.add_parser(
        "use",
        help="Print the prompt content and record one use.",
    )
    use_parser.add_argument("prompt_id", help="Identifier of the prompt.")

    export_parser = subparsers.add_parser(
        "export",
        help="Export prompts, categories, and settings to a JSON backup.",
    )
    export_parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=Path("."),
        help="Destination file or directory (default: keepprompt-backup-YYYY-MM-DD.json).",
    )

    import_parser = subparsers.add_parser(
        "import",
        help="Replace stored data with the contents of a JSON backup.",
    )
    import_parser.add_argument("path", type=Path, help="Backup file to import.")

    categories_parser = subparsers.add_parser("categories", help="List or manage categories.")
    categories_sub = categories_parser.add_subparsers(dest="category_action")
    categories_sub.add_parser("list", help="List categories (default).")
    category_add = categories_sub.add_parser("add", help="Add a category.")
    category_add.add_argument("name", help="Display name.")
    category_add.add_argument("--color", default=None, help="Hex colour, e.g. #2563eb.")
    category_add.add_argument("--id", dest="category_id", default=None, help="Explicit id.")
    category_remove = categories_sub.add_parser("remove", help="Remove a category.")
    category_remove.add_argument("category_id", help="Identifier of the category.")

    settings_parser = subparsers.add_parser("settings", help="Show or change user settings.")
    settings_sub = settings_parser.add_subparsers(dest="settings_action")
    settings_sub.add_parser("show", help="Print the stored settings (default).")
    settings_sub.add_parser("theme", help="Toggle between the light and dark theme.")

    clear_parser = subparsers.add_parser("clear", help="Delete every stored prompt and setting.")
    clear_parser.add_argument(
        "--yes",
        action="store_true",
        help="Skip the confirmation question.",
    )

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for the KeepPrompt launcher."""
    return build_parser().parse_args(argv)


__all__ = ["build_parser", "parse_args"]
