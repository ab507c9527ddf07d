"""Shared pytest fixtures and configuration for the seda test suite.

Guidelines
----------
* No internet access in any test.
* ``git`` and the editor are never spawned — use :class:`RecordingRunner`.
* Core tests must be pure — no side effects outside ``tmp_path``.
* Tests must not depend on the process environment.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from seda.config import Settings
from seda.exceptions import ProcessLaunchError


@dataclass
class Invocation:
    command: str
    args: list[str]
    cwd: Path | None = None
    quiet: bool = False


@dataclass
class RecordingRunner:
    """Fake :class:`~seda.core.protocols.Runner` that records every call.

    ``exit_codes`` maps a command name to the status it returns (default
    0); commands listed in ``missing`` raise :class:`ProcessLaunchError`.
    ``on_run`` lets a test simulate side effects (e.g. creating the clone).
    """

    exit_codes: dict[str, int] = field(default_factory=dict)
    missing: set[str] = field(default_factory=set)
    on_run: Callable[[Invocation], None] | None = None
    calls: list[Invocation] = field(default_factory=list)

    def run(
        self,
        command: str,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        quiet: bool = False,
    ) -> int:
        invocation = Invocation(command, list(args), cwd, quiet)
        self.calls.append(invocation)
        if command in self.missing:
            raise ProcessLaunchError(
                f"executable {command!r} not found in PATH", command=command,
            )
        if self.on_run is not None:
            self.on_run(invocation)
        return self.exit_codes.get(command, 0)

    @property
    def commands(self) -> list[list[str]]:
        return [[call.command, *call.args] for call in self.calls]


@pytest.fixture()
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(editor_override=None, cache_dir=tmp_path / "cache")
