"""Custom exception hierarchy for seda.

All exceptions that cross layer boundaries must inherit from
:class:`SedaError`.  Raw exceptions from subprocess, httpx, or tarfile
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
SedaError
├── ProcessLaunchError
├── CloneFailedError
├── PathResolutionError
├── EditorLaunchError
├── InvalidRepositoryError
├── RefResolutionError
├── DestinationError
│   └── DestinationNotEmptyError
├── ArchiveDownloadError
├── ArchiveExtractionError
└── EnvironmentError
"""

from __future__ import annotations


class SedaError(Exception):
    """Base exception for all seda errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- External processes ----------------------------------------------------

class ProcessLaunchError(SedaError):
    """Raised when an external executable cannot be started at all."""

    def __init__(self, message: str, *, command: str, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.command: str = command


# --- code: clone → resolve → open ------------------------------------------

class CloneFailedError(SedaError):
    """Raised when ``git clone`` fails to start or exits non-zero."""


class PathResolutionError(SedaError):
    """Raised when the clone target cannot be turned into an absolute path."""


class EditorLaunchError(SedaError):
    """Raised when the editor fails to start or exits non-zero."""


# --- degit -----------------------------------------------------------------

class InvalidRepositoryError(SedaError):
    """Raised when a repository reference cannot be parsed."""


class RefResolutionError(SedaError):
    """Raised when remote refs cannot be listed or the wanted ref is absent."""


class DestinationError(SedaError):
    """Raised when the degit destination cannot be created or used."""


class DestinationNotEmptyError(DestinationError):
    """Raised when degit would write into a non-empty directory."""


class ArchiveDownloadError(SedaError):
    """Raised when a repository tarball cannot be downloaded."""


class ArchiveExtractionError(SedaError):
    """Raised when a cached tarball cannot be extracted."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(SedaError):
    """Raised when a required runtime dependency is not available."""


def describe_exit_status(code: int) -> str:
    """Render a child exit status the way a shell user expects to read it."""
    if code < 0:
        return f"terminated by signal {-code}"
    return f"exit status {code}"
