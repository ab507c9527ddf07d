"""Core degit service — copy a repository snapshot without its history.

Pipeline
--------
1. Parse the repository reference.
2. Refuse to write into a non-empty destination unless forced.
3. Resolve the wanted ref to a commit via ``git ls-remote``.
4. Download the commit tarball into the cache (skipped when cached).
5. Extract it into the destination.
6. Optionally ``git init`` + commit the snapshot.
7. Record the repository in the index for interactive reuse.

Every collaborator is injected; the service itself only inspects and
creates directories.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from seda.core.models import RepoSpec
from seda.core.protocols import ArchiveFetcher, RefLister, RepoIndex, Runner
from seda.core.repo_url import archive_url, parse_remote_refs, parse_repo_url, select_ref
from seda.exceptions import (
    ArchiveDownloadError,
    DestinationError,
    DestinationNotEmptyError,
    ProcessLaunchError,
    RefResolutionError,
    SedaError,
    describe_exit_status,
)

Extractor = Callable[[Path, Path, str | None], None]
"""``(tarball, destination, subdir) -> None``."""


@dataclass(frozen=True, slots=True)
class DegitOptions:
    force: bool = False
    verbose: bool = False
    git: bool = True


@dataclass(frozen=True, slots=True)
class DegitResult:
    repo: RepoSpec
    commit: str
    destination: Path
    from_cache: bool


class DegitService:
    """Orchestrates one degit run.

    Parameters
    ----------
    ref_lister:
        Lists remote refs (``git ls-remote``).
    fetcher:
        Downloads tarballs.
    extractor:
        Unpacks a tarball into a directory.
    index:
        Store of previously used repositories.
    runner:
        Runs ``git`` for the optional init/commit.
    cache_dir:
        Root of the tarball cache.
    """

    def __init__(
        self,
        *,
        ref_lister: RefLister,
        fetcher: ArchiveFetcher,
        extractor: Extractor,
        index: RepoIndex,
        runner: Runner,
        cache_dir: Path,
    ) -> None:
        self._ref_lister = ref_lister
        self._fetcher = fetcher
        self._extractor = extractor
        self._index = index
        self._runner = runner
        self._cache_dir = cache_dir

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def resolve_commit(self, repo: RepoSpec) -> str:
        """Return the commit hash *repo.ref* points at.

        Raises
        ------
        RefResolutionError
            If the remote cannot be listed or has no matching ref.
        """
        output = self._ref_lister.list_refs(repo.url)
        refs = parse_remote_refs(output)
        commit = select_ref(refs, repo.ref)
        if commit is None:
            raise RefResolutionError(
                f"could not find ref {repo.ref!r} in {repo.full_name}",
                hint="Check the branch, tag, or commit name after '#'.",
            )
        return commit

    def tarball_path(self, repo: RepoSpec, commit: str) -> Path:
        return self._cache_dir / repo.site / repo.user / repo.name / f"{commit}.tar.gz"

    def init_git(self, destination: Path, *, verbose: bool) -> str | None:
        """Initialise a repository in *destination* and commit everything.

        Returns a warning message instead of raising, since a failed init
        still leaves a usable snapshot behind.
        """
        for args in (["init"], ["add", "."], ["commit", "-m", "Init"]):
            step = " ".join(["git", *args])
            try:
                code = self._runner.run("git", args, cwd=destination, quiet=not verbose)
            except ProcessLaunchError as exc:
                return f"failed to initialize git repository: {exc}"
            if code != 0:
                return f"failed to initialize git repository: {step} ({describe_exit_status(code)})"
        return None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def ensure_destination(self, destination: Path, *, force: bool) -> None:
        """Raise if *destination* is not a directory, or has content and
        *force* is not set.
        """
        if destination.exists() and not destination.is_dir():
            raise DestinationError(
                f"destination exists and is not a directory: {destination}",
                hint="Choose a different destination.",
            )
        if destination.is_dir() and any(destination.iterdir()) and not force:
            raise DestinationNotEmptyError(
                f"destination directory is not empty: {destination}",
                hint="Use --force to overwrite.",
            )

    def degit(
        self,
        source: str,
        destination: Path,
        options: DegitOptions = DegitOptions(),
        *,
        log: Callable[[str], None] | None = None,
        warn: Callable[[str], None] | None = None,
        progress_callback: Callable[[dict[str, Any]], None] | None = None,
    ) -> DegitResult:
        """Copy *source* into *destination*.

        *log* receives verbose step messages (only when
        ``options.verbose``); *warn* receives non-fatal problems.

        Raises
        ------
        SedaError
            Any failure before the snapshot is in place.
        """

        def _log(message: str) -> None:
            if options.verbose and log is not None:
                log(message)

        _log(f"Parsing repository: {source}")
        repo = parse_repo_url(source)

        self.ensure_destination(destination, force=options.force)

        _log(f"Fetching refs for {repo.full_name}")
        commit = self.resolve_commit(repo)
        _log(f"Found commit hash: {commit}")

        tarball = self.tarball_path(repo, commit)
        from_cache = tarball.is_file()
        if from_cache:
            _log(f"Using cached file: {tarball}")
        else:
            url = archive_url(repo, commit)
            _log(f"Downloading {url}")
            try:
                tarball.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise ArchiveDownloadError(
                    f"could not create cache directory {tarball.parent}: {exc}",
                    hint="Check that SEDA_CACHE_DIR points to a writable directory.",
                ) from exc
            self._fetcher.fetch(url, tarball, progress_callback=progress_callback)

        _log(f"Extracting to {destination}")
        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DestinationError(
                f"could not create destination directory {destination}: {exc}",
                hint="Choose a different destination.",
            ) from exc
        self._extractor(tarball, destination, repo.subdir)

        if options.git and (destination / ".git").exists():
            _log("Skipping git init - already in a git repository")
        elif options.git:
            _log(f"Initializing git repository in {destination}")
            problem = self.init_git(destination, verbose=options.verbose)
            if problem is not None and warn is not None:
                warn(problem)

        try:
            self._index.record(source, repo.full_name)
        except SedaError as exc:
            if warn is not None:
                warn(f"could not update repository cache: {exc}")

        return DegitResult(
            repo=repo,
            commit=commit,
            destination=destination,
            from_cache=from_cache,
        )
