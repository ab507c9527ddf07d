"""Tests for ``seda code`` routing and the process error boundary.

The recording runner stands in for git and the editor; settings are
injected so the process environment is never touched.

Coverage:
* Argument-count validation (usage errors perform no work).
* Clone/editor invocation wiring through ``main``.
* ``cli()`` exit statuses and where diagnostics are printed.
"""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path

import pytest

from seda.cli import exit_codes
from seda.cli.app import cli, main
from seda.config import Settings

URL = "https://example.com/org/sample.git"


# ---------------------------------------------------------------------------
# Argument count
# ---------------------------------------------------------------------------

class TestArgumentCount:
    @pytest.mark.parametrize(
        "argv",
        [
            ["code"],
            ["code", URL, "myproj", "extra"],
            ["code", URL, "a", "b", "c"],
        ],
    )
    def test_wrong_count_is_usage_error(
        self,
        argv: list[str],
        runner,
        settings: Settings,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(argv, settings=settings, runner=runner)

        assert exc_info.value.code == exit_codes.USAGE_ERROR
        assert runner.calls == []
        err = capsys.readouterr().err
        assert "accepts between 1 and 2 arg(s)" in err
        assert f"received {len(argv) - 1}" in err


# ---------------------------------------------------------------------------
# Wiring through main()
# ---------------------------------------------------------------------------

class TestCodeCommand:
    def test_one_argument(
        self,
        runner,
        settings: Settings,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        code = main(["code", URL], settings=settings, runner=runner)

        assert code == exit_codes.SUCCESS
        assert runner.commands == [
            ["git", "clone", URL, "sample"],
            ["code", str(Path.cwd() / "sample")],
        ]

    def test_two_arguments(
        self,
        runner,
        settings: Settings,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        main(["code", URL, "myproj"], settings=settings, runner=runner)

        assert runner.commands[0] == ["git", "clone", URL, "myproj"]
        assert runner.commands[1] == ["code", str(Path.cwd() / "myproj")]

    def test_editor_override_from_settings(
        self,
        runner,
        settings: Settings,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        custom = dataclasses.replace(settings, editor_override="myeditor")
        main(["code", URL], settings=custom, runner=runner)

        assert runner.commands[1] == ["myeditor", str(Path.cwd() / "sample")]

    def test_clone_failure_raises_before_editor(self, runner, settings: Settings) -> None:
        from seda.exceptions import CloneFailedError

        runner.exit_codes["git"] = 128
        with pytest.raises(CloneFailedError):
            main(["code", URL], settings=settings, runner=runner)
        assert [call.command for call in runner.calls] == ["git"]

    def test_settings_default_to_environment(
        self,
        runner,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("VSCODE_ALTERNATIVE", "myeditor")
        main(["code", URL], runner=runner)

        assert runner.commands[1][0] == "myeditor"

    @pytest.mark.parametrize("new_name", ["proj[/b]", "[/wip]", "[bold]x"])
    def test_bracketed_target_is_cloned_and_opened(
        self,
        new_name: str,
        runner,
        settings: Settings,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        code = main(["code", URL, new_name], settings=settings, runner=runner)

        assert code == exit_codes.SUCCESS
        assert runner.commands == [
            ["git", "clone", URL, new_name],
            ["code", os.path.normpath(os.path.join(os.getcwd(), new_name))],
        ]

    def test_bracketed_url_is_cloned_and_opened(
        self,
        runner,
        settings: Settings,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.chdir(tmp_path)
        url = "https://example.com/x/[/y]"
        code = main(["code", url], settings=settings, runner=runner)

        assert code == exit_codes.SUCCESS
        assert runner.commands[0] == ["git", "clone", url, "y]"]
        assert runner.commands[1] == ["code", str(Path.cwd() / "y]")]
        assert f"Cloning repository: {url}" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# cli() error boundary
# ---------------------------------------------------------------------------

def _run_cli(monkeypatch: pytest.MonkeyPatch, argv: list[str]) -> int:
    monkeypatch.setattr(sys, "argv", ["seda", *argv])
    with pytest.raises(SystemExit) as exc_info:
        cli()
    return exc_info.value.code  # type: ignore[return-value]


class TestErrorBoundary:
    def test_success_exits_zero(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from seda.cli import app as app_module

        monkeypatch.setattr(app_module, "main", lambda: exit_codes.SUCCESS)
        assert _run_cli(monkeypatch, []) == exit_codes.SUCCESS

    def test_clone_failure_reported_on_stdout(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from seda.cli import app as app_module
        from seda.exceptions import CloneFailedError

        def _fail() -> int:
            raise CloneFailedError("failed to clone repository: exit status 128")

        monkeypatch.setattr(app_module, "main", _fail)
        assert _run_cli(monkeypatch, []) == exit_codes.GENERAL_ERROR

        captured = capsys.readouterr()
        assert "failed to clone repository: exit status 128" in captured.out

    def test_hint_is_printed(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from seda.cli import app as app_module
        from seda.exceptions import EditorLaunchError

        def _fail() -> int:
            raise EditorLaunchError("failed to open myeditor", hint="Install myeditor")

        monkeypatch.setattr(app_module, "main", _fail)
        assert _run_cli(monkeypatch, []) == exit_codes.GENERAL_ERROR
        assert "Install myeditor" in capsys.readouterr().out

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from seda.cli import app as app_module

        def _interrupt() -> int:
            raise KeyboardInterrupt

        monkeypatch.setattr(app_module, "main", _interrupt)
        assert _run_cli(monkeypatch, []) == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from seda.cli import app as app_module

        def _boom() -> int:
            raise RuntimeError("kaboom")

        monkeypatch.setattr(app_module, "main", _boom)
        assert _run_cli(monkeypatch, []) == exit_codes.UNEXPECTED_ERROR
        assert "RuntimeError: kaboom" in capsys.readouterr().out

    def test_usage_error_exits_two(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert _run_cli(monkeypatch, ["code"]) == exit_codes.USAGE_ERROR

    def test_bracketed_error_text_is_printed_verbatim(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from seda.cli import app as app_module
        from seda.exceptions import EditorLaunchError

        def _fail() -> int:
            raise EditorLaunchError("failed to open [/ed]", hint="install [/ed]")

        monkeypatch.setattr(app_module, "main", _fail)
        assert _run_cli(monkeypatch, []) == exit_codes.GENERAL_ERROR
        stdout = capsys.readouterr().out
        assert "failed to open [/ed]" in stdout
        assert "install [/ed]" in stdout

    def test_bracketed_unexpected_error_is_printed_verbatim(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from seda.cli import app as app_module

        def _boom() -> int:
            raise RuntimeError("kaboom [/z]")

        monkeypatch.setattr(app_module, "main", _boom)
        assert _run_cli(monkeypatch, []) == exit_codes.UNEXPECTED_ERROR
        assert "RuntimeError: kaboom [/z]" in capsys.readouterr().out


class TestCliWithRunner:
    """``cli()`` driving the real ``main`` with a recording runner."""

    @pytest.fixture(autouse=True)
    def _wire(
        self,
        runner,
        settings: Settings,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        from seda.cli import app as app_module

        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(
            app_module, "main", lambda: main(settings=settings, runner=runner),
        )

    def test_clone_failure_exits_one(
        self,
        runner,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        runner.exit_codes["git"] = 128

        assert _run_cli(monkeypatch, ["code", URL]) == exit_codes.GENERAL_ERROR
        assert "failed to clone repository: exit status 128" in capsys.readouterr().out
        assert runner.commands == [["git", "clone", URL, "sample"]]

    def test_bracketed_url_runs_clone_and_editor(
        self,
        runner,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        url = "https://example.com/x/[/y]"

        assert _run_cli(monkeypatch, ["code", url]) == exit_codes.SUCCESS
        assert [call.command for call in runner.calls] == ["git", "code"]
