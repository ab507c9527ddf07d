"""``seda doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment satisfies seda's requirements.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  It purely collects and displays
diagnostic data.
"""

from __future__ import annotations

import importlib
import importlib.metadata
import platform
import sys

from seda.cli import exit_codes
from seda.cli.console import console, escape
from seda.config import Settings
from seda.core.editor import resolve_editor
from seda.infra.executable_detector import detect_executable
from seda.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 12)
    status = OK if ok else "[red]FAIL (>=3.12 required)[/red]"
    return "Python", version, status


def _seda_version_check() -> tuple[str, str, str]:
    return "seda", __version__, OK


def _git_check() -> tuple[str, str, str]:
    """git is required by both ``code`` and ``degit``."""
    status = detect_executable("git")
    if status.found:
        return "git", str(status.path) if status.path else "found", OK
    return "git", "not found", FAIL


def _editor_check(settings: Settings) -> tuple[str, str, str]:
    """A missing editor only breaks ``code``, so it is a warning."""
    editor = resolve_editor(settings.editor_override)
    status = detect_executable(editor.command)
    label = f"editor ({editor.command})"
    if status.found:
        return label, str(status.path) if status.path else "found", OK
    return label, "not found", WARN


def _library_check(dist_name: str, module: str, *, required: bool) -> tuple[str, str, str]:
    """Return (label, value, status) for an importable library."""
    try:
        importlib.import_module(module)
    except ImportError:
        return dist_name, "NOT INSTALLED", FAIL if required else WARN

    try:
        version = importlib.metadata.version(dist_name)
    except importlib.metadata.PackageNotFoundError:
        version = "unknown"
    return dist_name, version, OK


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nseda doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<20} {'Value':<34} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<20} {value:<34} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def _print_rich_doctor_table(checks: list[tuple[str, str, str]], table_class: type) -> None:
    table = table_class(
        title="seda doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)

    for label, value, status in checks:
        table.add_row(escape(label), escape(value), status)

    console.print()
    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: Settings | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    settings = settings or Settings.from_env()

    checks = [
        _seda_version_check(),
        _python_version_check(),
        _git_check(),
        _editor_check(settings),
        _library_check("httpx", "httpx", required=True),
        _library_check("rich", "rich", required=False),
        _library_check("questionary", "questionary", required=False),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        Table = None

    if Table is not None:
        _print_rich_doctor_table(checks, Table)
    else:
        _print_plain_doctor_table(checks)

    git_status = detect_executable("git")
    if not git_status.found and git_status.install_commands:
        console.print("git is not installed.")
        console.print("Install using one of the following commands:\n")
        for cmd in git_status.install_commands:
            console.print(f"  {cmd}")
        console.print()

    if has_failure:
        console.print("Some checks failed.")
        return exit_codes.GENERAL_ERROR

    console.print("All checks passed.")
    return exit_codes.SUCCESS
