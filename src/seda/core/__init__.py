"""Core / service layer — business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No subprocess or network access — those arrive through protocols.
* No imports from ``cli`` or ``infra``.
* Filesystem access is limited to inspecting and creating directories.
"""

from seda.core.code_service import CodeService
from seda.core.degit_service import DegitOptions, DegitResult, DegitService
from seda.core.editor import resolve_editor
from seda.core.models import CachedRepo, CloneRequest, EditorConfig, RemoteRef, RepoSpec, Stage
from seda.core.protocols import ArchiveFetcher, RefLister, RepoIndex, Runner
from seda.core.targets import derive_target_name, resolve_target_path

__all__: list[str] = [
    "ArchiveFetcher",
    "CachedRepo",
    "CloneRequest",
    "CodeService",
    "DegitOptions",
    "DegitResult",
    "DegitService",
    "EditorConfig",
    "RefLister",
    "RemoteRef",
    "RepoIndex",
    "RepoSpec",
    "Runner",
    "Stage",
    "derive_target_name",
    "resolve_editor",
    "resolve_target_path",
]
