"""Application entry point for KeepPrompt.

Updates:
  v0.2.0 - 2026-10-11 - Log queued notifications and close the workspace on exit.
  v0.1.1 - 2026-10-01 - Add --print-settings summary.
  v0.1.0 - 2026-09-30 - Modularise CLI parsing and command dispatch.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cli.commands import COMMAND_SPECS
from cli.parser import parse_args
from cli.runtime import log_notifications, setup_logging
from cli.settings_summary import print_settings_summary
from config import SettingsError, load_settings
from core import KeepPromptError, build_workspace

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config import KeepPromptSettings
    from core import PromptWorkspace


def _initialise_workspace(
    settings: KeepPromptSettings,
    logger: logging.Logger,
) -> PromptWorkspace | None:
    try:
        return build_workspace(settings)
    except KeepPromptError as exc:
        logger.error("Failed to initialise storage: %s", exc)
        return None


def main(argv: list[str] | None = None) -> int:
    """Entrypoint that wires settings, services, and CLI commands."""
    args = parse_args(argv)
    setup_logging(args.logging_config)

    logger = logging.getLogger("keepprompt.main")
    try:
        settings = load_settings()
    except SettingsError as exc:
        logger.error("Failed to load settings: %s", exc)
        return 2

    if args.print_settings:
        print_settings_summary(settings)
        return 0

    spec = COMMAND_SPECS.get(getattr(args, "command", None))
    if spec is None:  # pragma: no cover - argparse rejects unknown commands
        logger.error("Unknown command: %s", args.command)
        return 2

    workspace = _initialise_workspace(settings, logger)
    if workspace is None:
        return 3

    subscription = log_notifications(workspace.notifications, logging.getLogger("keepprompt.cli"))
    try:
        return spec.handler(workspace, args, logger)
    finally:
        subscription.close()
        workspace.close()


if __name__ == "__main__":
    raise SystemExit(main())
