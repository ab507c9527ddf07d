"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so tests can substitute recording fakes for ``git``,
the editor, and the network.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Protocol

from seda.core.models import CachedRepo


class Runner(Protocol):
    """Contract for launching an external executable and waiting for it.

    Any object that implements :meth:`run` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def run(
        self,
        command: str,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        quiet: bool = False,
    ) -> int:
        """Run *command* with *args* and return its exit status.

        The child inherits the caller's stdout and stderr unless *quiet*
        is set, in which case both are discarded.  No timeout is applied.

        Raises
        ------
        ProcessLaunchError
            When the executable cannot be started (not found, not
            executable, ...).
        """
        ...  # pragma: no cover


class RefLister(Protocol):
    """Contract for listing the refs of a remote repository."""

    def list_refs(self, url: str) -> str:
        """Return raw ``git ls-remote`` output for *url*.

        Raises
        ------
        RefResolutionError
            When the remote cannot be queried.
        """
        ...  # pragma: no cover


class ArchiveFetcher(Protocol):
    """Contract for downloading a repository tarball to disk."""

    def fetch(
        self,
        url: str,
        dest: Path,
        *,
        progress_callback: Callable[[dict[str, Any]], None] | None = None,
    ) -> None:
        """Download *url* into the file *dest*.

        Parameters
        ----------
        url:
            Archive URL.
        dest:
            Target file.  Only written once the download completes.
        progress_callback:
            Optional callable invoked with progress-hook dicts
            (``status``, ``downloaded_bytes``, ``total_bytes``,
            ``filename``).

        Raises
        ------
        ArchiveDownloadError
            When the download fails for any reason.
        """
        ...  # pragma: no cover


class RepoIndex(Protocol):
    """Contract for the store of previously degit-ed repositories."""

    def load(self) -> list[CachedRepo]:
        """Return cached repositories, most recently used first."""
        ...  # pragma: no cover

    def record(self, url: str, name: str) -> None:
        """Add or refresh the entry for *url*."""
        ...  # pragma: no cover
