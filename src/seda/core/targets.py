"""Target directory naming and path resolution.

Pure string and path arithmetic.  The only environmental input — the
current working directory — is injected as a callable.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

from seda.exceptions import PathResolutionError

GIT_SUFFIX: str = ".git"


def derive_target_name(repo_url: str) -> str:
    """Return the directory name ``git clone`` would be pointed at.

    Takes the last ``/``-delimited segment of *repo_url* and removes one
    trailing, case-sensitive ``.git``.  Nothing else is normalised, so a
    URL ending in ``/`` yields an empty name and ``git@host:repo.git``
    yields ``git@host:repo``.
    """
    last_segment = repo_url.rsplit("/", 1)[-1]
    return last_segment.removesuffix(GIT_SUFFIX)


def resolve_target_path(
    target_name: str,
    getcwd: Callable[[], str] = os.getcwd,
) -> Path:
    """Return the absolute, lexically cleaned path of *target_name*.

    The path does not need to exist.  Absolute targets are only cleaned;
    relative ones are joined onto ``getcwd()``.

    Raises
    ------
    PathResolutionError
        If the working directory cannot be determined.
    """
    if os.path.isabs(target_name):
        return Path(os.path.normpath(target_name))
    try:
        cwd = getcwd()
    except OSError as exc:
        raise PathResolutionError(
            f"could not determine the current directory: {exc}",
            hint="The working directory may have been removed.",
        ) from exc
    return Path(os.path.normpath(os.path.join(cwd, target_name)))
