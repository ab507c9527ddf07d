"""Runtime configuration read from the process environment.

The environment is read exactly once, at the CLI entry point, and the
resulting :class:`Settings` is passed down explicitly.  Nothing below the
CLI layer looks at ``os.environ``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

EDITOR_ENV_VAR: str = "VSCODE_ALTERNATIVE"
"""Names an editor executable to use instead of ``code``."""

CACHE_DIR_ENV_VAR: str = "SEDA_CACHE_DIR"
"""Overrides the root directory of the degit tarball cache."""


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable snapshot of user configuration."""

    editor_override: str | None
    """Editor executable to launch, or ``None`` for the default."""

    cache_dir: Path
    """Root of the degit cache (tarballs and the repository index)."""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *environ* (defaults to ``os.environ``).

        Empty values are treated the same as unset ones.
        """
        env = os.environ if environ is None else environ

        editor = env.get(EDITOR_ENV_VAR) or None

        cache_raw = env.get(CACHE_DIR_ENV_VAR)
        if cache_raw:
            cache_dir = Path(cache_raw).expanduser()
        else:
            cache_dir = default_cache_dir()

        return cls(editor_override=editor, cache_dir=cache_dir)


def default_cache_dir() -> Path:
    return Path.home() / ".seda" / "cache"
