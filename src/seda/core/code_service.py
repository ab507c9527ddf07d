"""Core ``code`` service — clone a repository, then open it in an editor.

This service delegates process execution to a
:class:`~seda.core.protocols.Runner` injected at construction time.  It
is responsible for:

* Invoking ``git clone <url> <target>``.
* Resolving the clone target to an absolute path.
* Invoking ``<editor> <absolute-path>``.
* Ensuring only :class:`~seda.exceptions.SedaError` subclasses escape.

Guarantees
----------
* Strictly sequential — the editor is never launched unless the clone
  exited 0.
* Exactly one attempt per step, no cleanup of a partial clone.
* No ``print()``; progress is reported through ``on_stage``.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

from seda.core.editor import resolve_editor
from seda.core.models import CloneRequest, EditorConfig, Stage
from seda.core.protocols import Runner
from seda.core.targets import resolve_target_path
from seda.exceptions import (
    CloneFailedError,
    EditorLaunchError,
    ProcessLaunchError,
    describe_exit_status,
)

GIT_COMMAND: str = "git"

StageCallback = Callable[[Stage, str], None]


class CodeService:
    """Drives the ``START → CLONED → PATH_RESOLVED → EDITOR_LAUNCHED`` run.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`Runner` protocol.
    editor_override:
        Editor executable chosen by the user, or ``None`` for the default.
    getcwd:
        Working-directory lookup used for path resolution.
    """

    def __init__(
        self,
        runner: Runner,
        *,
        editor_override: str | None = None,
        getcwd: Callable[[], str] = os.getcwd,
    ) -> None:
        self._runner: Runner = runner
        self._editor: EditorConfig = resolve_editor(editor_override)
        self._getcwd = getcwd

    @property
    def editor(self) -> EditorConfig:
        return self._editor

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def clone(self, request: CloneRequest) -> None:
        """Run ``git clone`` for *request*.

        Raises
        ------
        CloneFailedError
            If git cannot be started or exits non-zero.
        """
        try:
            code = self._runner.run(
                GIT_COMMAND, ["clone", request.repo_url, request.target_name],
            )
        except ProcessLaunchError as exc:
            raise CloneFailedError(
                f"failed to clone repository: {exc}",
                hint=exc.hint,
            ) from exc
        if code != 0:
            raise CloneFailedError(
                f"failed to clone repository: {describe_exit_status(code)}",
            )

    def resolve_path(self, request: CloneRequest) -> Path:
        """Return the absolute path of the clone target."""
        return resolve_target_path(request.target_name, self._getcwd)

    def open_editor(self, path: Path) -> None:
        """Launch the configured editor on *path*.

        Raises
        ------
        EditorLaunchError
            If the editor cannot be started or exits non-zero.
        """
        editor = self._editor
        try:
            code = self._runner.run(editor.command, [str(path)])
        except ProcessLaunchError as exc:
            raise EditorLaunchError(
                f"failed to open {editor.name}: {exc}",
                hint=exc.hint,
            ) from exc
        if code != 0:
            raise EditorLaunchError(
                f"failed to open {editor.name}: {describe_exit_status(code)}",
            )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(
        self,
        request: CloneRequest,
        *,
        on_stage: StageCallback | None = None,
    ) -> Path:
        """Clone, resolve, and open; return the opened path.

        *on_stage* is called with each :class:`Stage` as it is reached,
        together with a short detail string (URL, target, or path).  The
        first failing step raises and later steps never run.
        """
        report = on_stage or _ignore_stage

        report(Stage.ARGS_PARSED, request.repo_url)
        self.clone(request)
        report(Stage.CLONED, request.target_name)
        path = self.resolve_path(request)
        report(Stage.PATH_RESOLVED, str(path))
        self.open_editor(path)
        report(Stage.EDITOR_LAUNCHED, str(path))
        return path


def _ignore_stage(_stage: Stage, _detail: str) -> None:
    return None
