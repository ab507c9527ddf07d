"""Rich progress bar for degit tarball downloads.

The infra fetcher reports progress as plain dicts
(``status``, ``downloaded_bytes``, ``total_bytes``, ``filename``);
:class:`TarballProgress` turns them into a Rich
:class:`~rich.progress.Progress` display on stderr.
"""

from __future__ import annotations

from typing import Any

from seda.cli.console import get_rich_console
from seda.exceptions import EnvironmentError


class TarballProgress:
    """Callable progress adapter, usable as a context manager::

        with TarballProgress() as hook:
            service.degit(src, dest, progress_callback=hook)

    Calls made while the display is stopped are ignored.
    """

    def __init__(self) -> None:
        try:
            from rich.progress import (
                BarColumn,
                DownloadColumn,
                Progress,
                SpinnerColumn,
                TextColumn,
                TransferSpeedColumn,
            )
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "rich is not installed. Install with: pip install rich",
            ) from exc

        self._progress: Any = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=get_rich_console(),
            transient=True,
        )
        self._task_id: Any = None
        self._started: bool = False

    def __enter__(self) -> TarballProgress:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    def start(self) -> None:
        if not self._started:
            self._progress.start()
            self._started = True

    def stop(self) -> None:
        """Stop the display (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False

    def __call__(self, event: dict[str, Any]) -> None:
        if not self._started:
            return

        status = event.get("status")
        if status == "downloading":
            total = event.get("total_bytes")
            downloaded = event.get("downloaded_bytes") or 0
            if self._task_id is None:
                self._task_id = self._progress.add_task(
                    event.get("filename", "Downloading"), total=total,
                )
            self._progress.update(self._task_id, total=total, completed=downloaded)
        elif status == "finished" and self._task_id is not None:
            task = self._progress.tasks[0]
            if task.total is not None:
                self._progress.update(self._task_id, completed=task.total)
