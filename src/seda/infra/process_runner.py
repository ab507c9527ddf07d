"""subprocess backed implementation of :class:`~seda.core.protocols.Runner`.

This module is the **only** place in the codebase that launches
long-running child processes.  ``OSError`` from a failed launch is caught
here and re-raised as :class:`~seda.exceptions.ProcessLaunchError`.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from seda.exceptions import ProcessLaunchError


class SubprocessRunner:
    """Concrete :class:`Runner` backed by :func:`subprocess.run`.

    The child is started without a shell, inherits stdin/stdout/stderr,
    and is waited on without a timeout.  Signal handling is left to the
    process group.
    """

    def run(
        self,
        command: str,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        quiet: bool = False,
    ) -> int:
        """Run *command* and return its exit status.

        Raises
        ------
        ProcessLaunchError
            If the executable is missing or cannot be executed.
        """
        stream = subprocess.DEVNULL if quiet else None
        try:
            completed = subprocess.run(
                [command, *args],
                cwd=cwd,
                stdout=stream,
                stderr=stream,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ProcessLaunchError(
                f"executable {command!r} not found in PATH",
                command=command,
                hint=f"Install {command} or make sure it is on your PATH.",
            ) from exc
        except OSError as exc:
            raise ProcessLaunchError(
                f"could not start {command!r}: {exc.strerror or exc}",
                command=command,
            ) from exc
        return completed.returncode
