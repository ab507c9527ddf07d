"""Tests for the interactive repository picker (cli/repo_prompt.py).

questionary is mocked — no terminal interaction.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from seda.cli.repo_prompt import _build_choice_label, prompt_repo_selection
from seda.core.models import CachedRepo
from seda.exceptions import SedaError

REPOS = [
    CachedRepo(url="https://github.com/a/one", name="a/one", last_used="2026-01-02T00:00:00Z"),
    CachedRepo(url="https://gitlab.com/b/two", name="b/two", last_used="2026-01-01T00:00:00Z"),
]


def test_choice_label() -> None:
    assert _build_choice_label(REPOS[0]) == "a/one (https://github.com/a/one)"


@patch("seda.cli.repo_prompt._import_questionary")
def test_returns_selected_url(mock_import: MagicMock) -> None:
    questionary = mock_import.return_value
    questionary.select.return_value.ask.return_value = REPOS[1].url

    assert prompt_repo_selection(REPOS) == "https://gitlab.com/b/two"

    titles = [call.kwargs["title"] for call in questionary.Choice.call_args_list]
    values = [call.kwargs["value"] for call in questionary.Choice.call_args_list]
    assert titles == ["a/one (https://github.com/a/one)", "b/two (https://gitlab.com/b/two)"]
    assert values == [repo.url for repo in REPOS]
    assert questionary.select.call_args.args[0] == "Select a repository to clone:"


@patch("seda.cli.repo_prompt._import_questionary")
def test_cancel_raises(mock_import: MagicMock) -> None:
    mock_import.return_value.select.return_value.ask.return_value = None

    with pytest.raises(SedaError, match="No repository selected"):
        prompt_repo_selection(REPOS)
