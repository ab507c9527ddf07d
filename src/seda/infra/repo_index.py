"""Infrastructure: JSON index of previously degit-ed repositories.

Stored as ``<cache>/repos.json``::

    {"repos": [{"url": "...", "name": "user/repo", "last_used": "..."}]}

An unreadable or malformed index is treated as empty rather than fatal;
it is rewritten on the next successful degit.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from seda.core.models import CachedRepo
from seda.exceptions import SedaError

INDEX_FILENAME: str = "repos.json"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class JsonRepoIndex:
    """Concrete :class:`RepoIndex` persisted as a JSON file."""

    def __init__(self, cache_dir: Path, *, clock: Callable[[], str] = _now_iso) -> None:
        self.path: Path = cache_dir / INDEX_FILENAME
        self._clock = clock

    def load(self) -> list[CachedRepo]:
        """Return cached repositories, most recently used first."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return []

        entries = data.get("repos", []) if isinstance(data, dict) else []
        repos: list[CachedRepo] = []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            url = entry.get("url")
            name = entry.get("name")
            if not isinstance(url, str) or not isinstance(name, str):
                continue
            repos.append(
                CachedRepo(url=url, name=name, last_used=str(entry.get("last_used", ""))),
            )
        repos.sort(key=lambda repo: repo.last_used, reverse=True)
        return repos

    def record(self, url: str, name: str) -> None:
        """Add *url* to the index or refresh its timestamp.

        Raises
        ------
        SedaError
            If the index cannot be written.
        """
        repos = [repo for repo in self.load() if repo.url != url]
        repos.insert(0, CachedRepo(url=url, name=name, last_used=self._clock()))

        payload = {
            "repos": [
                {"url": repo.url, "name": repo.name, "last_used": repo.last_used}
                for repo in repos
            ],
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise SedaError(f"could not write {self.path}: {exc}") from exc
