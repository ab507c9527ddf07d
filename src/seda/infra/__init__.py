"""Infrastructure layer — external system integration.

This layer wraps all interaction with git, the editor executable, the
network, and the on-disk cache.  Every raw third-party or OS exception
must be caught here and re-raised as a
:class:`~seda.exceptions.SedaError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from seda.infra.executable_detector import ExecutableStatus, detect_executable
from seda.infra.git_remote import GitRemote
from seda.infra.process_runner import SubprocessRunner
from seda.infra.repo_index import JsonRepoIndex
from seda.infra.tarball import HttpTarballFetcher, extract_tarball

__all__: list[str] = [
    "ExecutableStatus",
    "GitRemote",
    "HttpTarballFetcher",
    "JsonRepoIndex",
    "SubprocessRunner",
    "detect_executable",
    "extract_tarball",
]
