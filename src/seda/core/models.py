"""Domain models for seda.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and live only for the duration of one invocation.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from seda.core.targets import derive_target_name


# ---------------------------------------------------------------------------
# code: clone and open
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CloneRequest:
    """What to clone and where to put it."""

    repo_url: str
    """Passed verbatim to ``git clone``."""

    target_name: str
    """Directory name (or path) the repository is cloned into."""

    @classmethod
    def from_args(cls, repo_url: str, new_name: str | None = None) -> CloneRequest:
        """Build a request from CLI positionals.

        An explicit *new_name* is used verbatim; otherwise the target is
        derived from the URL.
        """
        if new_name is None:
            return cls(repo_url=repo_url, target_name=derive_target_name(repo_url))
        return cls(repo_url=repo_url, target_name=new_name)


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """The editor to launch on the cloned directory."""

    name: str
    """Human-readable name used in messages."""

    command: str
    """Executable looked up on ``PATH``."""


class Stage(enum.Enum):
    """Milestones of a ``code`` run, in the order they are reached."""

    ARGS_PARSED = "args_parsed"
    CLONED = "cloned"
    PATH_RESOLVED = "path_resolved"
    EDITOR_LAUNCHED = "editor_launched"


# ---------------------------------------------------------------------------
# degit
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RepoSpec:
    """A parsed degit repository reference."""

    site: str
    """Hosting site key (``github``, ``gitlab``, ``bitbucket``, ``git.sr.ht``)."""

    user: str
    name: str

    ref: str
    """Branch, tag, or commit prefix.  ``HEAD`` when not specified."""

    url: str
    """HTTPS URL of the repository (no ``.git`` suffix)."""

    ssh: str
    """SSH form of the repository URL."""

    subdir: str | None = None
    """Optional sub-directory (leading ``/``) to extract instead of the root."""

    @property
    def full_name(self) -> str:
        return f"{self.user}/{self.name}"


@dataclass(frozen=True, slots=True)
class RemoteRef:
    """One line of ``git ls-remote`` output."""

    type: str
    """``HEAD``, ``branch``, ``tag``, ``pull`` or another refs/ namespace."""

    name: str | None
    """Ref name without its namespace (``None`` for ``HEAD``)."""

    hash: str


@dataclass(frozen=True, slots=True)
class CachedRepo:
    """Entry of the degit repository index."""

    url: str
    name: str
    last_used: str
    """ISO-8601 timestamp of the last successful degit."""
