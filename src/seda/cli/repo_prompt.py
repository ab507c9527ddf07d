"""Interactive repository picker for ``seda degit`` without a URL.

This module is responsible for:

* Prompting the user to pick a previously used repository via
  questionary arrow keys.
* Returning the selected repository URL.

No business logic, no downloading, no cache I/O.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from seda.core.models import CachedRepo
from seda.exceptions import EnvironmentError, SedaError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _build_choice_label(repo: CachedRepo) -> str:
    """Build the label shown in the selector: ``"user/repo (url)"``."""
    return f"{repo.name} ({repo.url})"


def prompt_repo_selection(repos: Sequence[CachedRepo]) -> str:
    """Prompt the user to choose one of *repos*.

    Returns
    -------
    str
        The URL of the chosen repository.

    Raises
    ------
    SedaError
        If the user cancels the prompt (Esc / Ctrl+C return ``None``).
    """
    questionary = _import_questionary()

    choices = [
        questionary.Choice(title=_build_choice_label(repo), value=repo.url)
        for repo in repos
    ]

    selected: str | None = questionary.select(
        "Select a repository to clone:",
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()

    if selected is None:
        raise SedaError(
            "No repository selected.",
            hint="Use arrow keys to pick a repository, then press Enter.",
        )
    return selected
