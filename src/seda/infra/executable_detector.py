"""Infrastructure: executable detection and platform guidance.

This module locates the executables seda shells out to (``git`` and the
configured editor) on the system PATH and provides platform-specific
installation guidance for git when it is missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No permanent PATH modification.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ExecutableStatus:
    """Result of a PATH probe.

    Attributes
    ----------
    name : str
        The executable that was looked for.
    found : bool
        Whether it was located on PATH.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing it on the current
        platform.  Empty when already present or when no guidance exists.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_executable(name: str) -> ExecutableStatus:
    """Probe PATH for *name*.

    Returns an :class:`ExecutableStatus` regardless of whether the
    executable is present — the caller decides whether to abort or warn.
    """
    result = shutil.which(name)

    if result is not None:
        return ExecutableStatus(
            name=name,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )

    guidance = _git_install_commands() if name == "git" else ()
    return ExecutableStatus(
        name=name,
        found=False,
        path=None,
        install_commands=guidance,
    )


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def _git_install_commands() -> tuple[str, ...]:
    """Return git install commands appropriate for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        return (
            "winget install Git.Git",
            "choco install git",
        )
    if system == "linux":
        return (
            "sudo apt install git",
            "sudo dnf install git",
            "sudo pacman -S git",
        )
    if system == "darwin":
        return ("brew install git", "xcode-select --install")
    return ("Please install git from https://git-scm.com/downloads",)
