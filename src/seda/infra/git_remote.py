"""Infrastructure: remote ref listing via ``git ls-remote``.

Output is captured (not streamed) because it is parsed by the core
layer.  Failures map to :class:`~seda.exceptions.RefResolutionError`.
"""

from __future__ import annotations

import subprocess

from seda.exceptions import RefResolutionError


class GitRemote:
    """Concrete :class:`RefLister` that shells out to ``git ls-remote``."""

    def __init__(self, timeout: float = 60.0) -> None:
        self._timeout = timeout

    def list_refs(self, url: str) -> str:
        """Return the raw ``git ls-remote`` output for *url*.

        Raises
        ------
        RefResolutionError
            If git is missing, times out, or exits non-zero.
        """
        try:
            result = subprocess.run(
                ["git", "ls-remote", url],
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise RefResolutionError(
                "git is not installed or not on PATH.",
                hint="Run 'seda doctor' for installation guidance.",
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise RefResolutionError(
                f"timed out listing refs for {url}",
                hint="Check your network connection.",
            ) from exc
        except OSError as exc:
            raise RefResolutionError(f"could not run git ls-remote: {exc}") from exc

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            raise RefResolutionError(
                f"failed to fetch refs for {url}: {detail}",
                hint="Check the repository URL and your access to it.",
            )
        return result.stdout
