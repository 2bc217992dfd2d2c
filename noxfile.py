"""noxfile.py - Nox sessions for KeepPrompt.

Updates:
  v0.3.0 - 2026-10-19 - Drop the unused test alias; `all` reuses the other sessions.
  v0.2.0 - 2026-10-12 - Lint and test the CLI package alongside core.
  v0.1.0 - 2026-09-14 - Initial scaffold of format/lint/typecheck/test sessions.

Install the project with `pip install -e .[dev]` inside `.venv` before running these sessions.
This file defines automation sessions:
- format: format code with ruff
- lint: run ruff lint and format checks
- typecheck: run pyright
- test: run pytest with coverage
- all: run lint, typecheck, and test

Sessions run directly in the host Python environment (no isolated venv) but
invoke tools from the project `.venv`.
"""

from __future__ import annotations

import sys
from pathlib import Path

import nox

CODE_LOCATIONS: tuple[str, ...] = (
    "main.py",
    "cli",
    "config",
    "core",
    "models",
    "tests",
)

TYPECHECK_LOCATIONS: tuple[str, ...] = CODE_LOCATIONS[:-1]

PYTEST_ARGS: tuple[str, ...] = (
    "-n",
    "auto",
    "--cov=core",
    "--cov=models",
    "--cov-report=term-missing",
    "--cov-fail-under=80",
    "tests",
)


def _venv_executable(command: str) -> Path:
    """Return the path to *command* inside the project virtual environment."""
    venv_dir = Path(".venv")
    if sys.platform == "win32":
        return venv_dir / "Scripts" / f"{command}.exe"
    return venv_dir / "bin" / command


def _require_venv_tool(session: nox.Session, command: str) -> str:
    """Return the `.venv` tool path, failing with guidance when missing."""
    candidate = _venv_executable(command)
    if candidate.exists():
        return str(candidate)
    session.error(
        "Project virtual environment tool is missing: "
        f"{candidate}. Create `.venv` and install dev tools with "
        "`python -m venv .venv && . .venv/bin/activate && pip install -e .[dev]`."
    )
    raise RuntimeError("unreachable")  # pragma: no cover


@nox.session(venv_backend="none")
def format(session: nox.Session) -> None:
    """Rewrite sources with ``ruff format``."""
    ruff = _require_venv_tool(session, "ruff")
    session.run(ruff, "format", *CODE_LOCATIONS, external=True)


@nox.session(venv_backend="none")
def lint(session: nox.Session) -> None:
    """Check sources with ``ruff check`` and verify formatting."""
    ruff = _require_venv_tool(session, "ruff")
    session.run(ruff, "check", *CODE_LOCATIONS, external=True)
    session.run(ruff, "format", "--check", *CODE_LOCATIONS, external=True)


@nox.session(venv_backend="none")
def typecheck(session: nox.Session) -> None:
    """Type-check the KeepPrompt packages with pyright."""
    pyright = _require_venv_tool(session, "pyright")
    session.run(pyright, *TYPECHECK_LOCATIONS, external=True)


@nox.session(venv_backend="none")
def test(session: nox.Session) -> None:
    """Run the suite in parallel with coverage; extra args go to pytest."""
    pytest = _require_venv_tool(session, "pytest")
    session.run(pytest, *PYTEST_ARGS, *session.posargs, external=True)


@nox.session(venv_backend="none")
def all(session: nox.Session) -> None:
    """Run lint, typecheck, and test in one pass."""
    lint(session)
    typecheck(session)
    test(session)
