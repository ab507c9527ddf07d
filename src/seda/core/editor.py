"""Editor selection."""

from __future__ import annotations

from seda.core.models import EditorConfig

DEFAULT_EDITOR: EditorConfig = EditorConfig(name="Visual Studio Code", command="code")


def resolve_editor(editor_override: str | None) -> EditorConfig:
    """Return the editor to launch.

    A non-empty *editor_override* names the executable (and is used as its
    display name); anything else falls back to :data:`DEFAULT_EDITOR`.
    There is no fallback chain beyond that.
    """
    if editor_override:
        return EditorConfig(name=editor_override, command=editor_override)
    return DEFAULT_EDITOR
