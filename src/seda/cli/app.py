"""CLI application entry point and command routing for seda.

This module is the **sole error boundary** for the entire application.
It catches :class:`~seda.exceptions.SedaError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* The environment is read once, here, into a :class:`~seda.config.Settings`.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from pathlib import Path

from seda.cli import exit_codes
from seda.cli.console import console, escape, out
from seda.config import Settings
from seda.core.models import EditorConfig, Stage
from seda.core.protocols import Runner
from seda.exceptions import SedaError
from seda.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``seda code <repository_url> [new_name]``
    * ``seda degit [repository] [destination]``
    * ``seda doctor``
    * ``seda --version``
    """
    parser = argparse.ArgumentParser(
        prog="seda",
        description="A CLI toolkit for managing Git repositories and development workflows.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    code = subparsers.add_parser(
        "code",
        help="Clone a repository and open it in your editor.",
        description=(
            "Clone a Git repository from the given URL and open it in Visual "
            "Studio Code (or the editor named by $VSCODE_ALTERNATIVE)."
        ),
        usage="%(prog)s repository_url [new_name]",
    )
    # Counted by hand so the error names the accepted range.
    code.add_argument(
        "positionals",
        nargs="*",
        metavar="ARG",
        help="repository URL, optionally followed by the directory name to clone into",
    )
    code.set_defaults(subparser=code)

    degit = subparsers.add_parser(
        "degit",
        help="Clone a repository without git history.",
        description="Copy the latest tree of a repository without its history.",
    )
    degit.add_argument(
        "repository",
        nargs="?",
        default=None,
        help="Repository URL (e.g. https://github.com/user/repo). "
        "Omit to pick from previously used repositories.",
    )
    degit.add_argument("destination", nargs="?", default=".", help="Destination directory.")
    degit.add_argument("-f", "--force", action="store_true", help="Overwrite existing files.")
    degit.add_argument("-v", "--verbose", action="store_true", help="Verbose output.")
    degit.add_argument(
        "--no-git",
        dest="git",
        action="store_false",
        help="Skip git init and initial commit.",
    )

    subparsers.add_parser("doctor", help="Run environment diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _stage_reporter(editor: EditorConfig) -> Callable[[Stage, str], None]:
    def report(stage: Stage, detail: str) -> None:
        if stage is Stage.ARGS_PARSED:
            console.print(f"[blue]Cloning repository:[/blue] {escape(detail)}")
        elif stage is Stage.CLONED:
            console.print("[green]Repository cloned successfully.[/green]")
        elif stage is Stage.PATH_RESOLVED:
            console.print(f"[blue]Opening in {escape(editor.name)}:[/blue] {escape(detail)}")

    return report


def _handle_code(
    parser: argparse.ArgumentParser,
    positionals: list[str],
    settings: Settings,
    runner: Runner,
) -> int:
    """Clone ``positionals[0]`` and open it in the editor.

    Flow:
    1. Validate the argument count (1 or 2).
    2. Build the clone request (derive the target name if needed).
    3. Clone, resolve the absolute path, launch the editor.
    """
    from seda.core.code_service import CodeService
    from seda.core.models import CloneRequest

    if not 1 <= len(positionals) <= 2:
        parser.error(f"accepts between 1 and 2 arg(s), received {len(positionals)}")

    request = CloneRequest.from_args(*positionals)
    service = CodeService(runner, editor_override=settings.editor_override)
    service.run(request, on_stage=_stage_reporter(service.editor))
    return exit_codes.SUCCESS


def _handle_degit(args: argparse.Namespace, settings: Settings, runner: Runner) -> int:
    """Dispatch ``seda degit``.

    Flow:
    1. Without a URL-like repository, offer previously used repositories
       (a non-URL first argument then names the destination).
    2. Resolve, download (with Rich progress), and extract the snapshot.
    3. Optionally ``git init`` it and record it in the index.
    """
    from seda.cli.progress import TarballProgress
    from seda.core.degit_service import DegitOptions, DegitService
    from seda.core.repo_url import looks_like_url
    from seda.infra.git_remote import GitRemote
    from seda.infra.repo_index import JsonRepoIndex
    from seda.infra.tarball import HttpTarballFetcher, extract_tarball

    index = JsonRepoIndex(settings.cache_dir)
    repository: str | None = args.repository
    destination: str = args.destination

    if not looks_like_url(repository):
        from seda.cli.repo_prompt import prompt_repo_selection

        if repository:
            destination = repository
        cached = index.load()
        if not cached:
            console.print("[yellow]No cached repositories found.[/yellow]")
            console.print(
                "[dim]Use: seda degit <repository-url> to clone a repository first.[/dim]",
            )
            return exit_codes.SUCCESS
        repository = prompt_repo_selection(cached)

    service = DegitService(
        ref_lister=GitRemote(),
        fetcher=HttpTarballFetcher(),
        extractor=extract_tarball,
        index=index,
        runner=runner,
        cache_dir=settings.cache_dir,
    )
    options = DegitOptions(force=args.force, verbose=args.verbose, git=args.git)

    with TarballProgress() as hook:
        result = service.degit(
            repository,
            Path(destination),
            options,
            log=lambda message: console.print(f"[cyan]> {escape(message)}[/cyan]"),
            warn=lambda message: console.print(f"[yellow]> Warning: {escape(message)}[/yellow]"),
            progress_callback=hook,
        )

    console.print(
        f"[green]✓ Cloned {escape(result.repo.full_name)}#{escape(result.repo.ref)} "
        f"to {escape(destination)}[/green]",
    )
    return exit_codes.SUCCESS


def _handle_doctor(settings: Settings) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from seda.cli.doctor import run_doctor

    return run_doctor(settings)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    *,
    settings: Settings | None = None,
    runner: Runner | None = None,
) -> int:
    """Run the seda CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    settings:
        Configuration.  Read from the environment when ``None``.
    runner:
        Process runner for ``git`` and the editor.  A
        :class:`~seda.infra.process_runner.SubprocessRunner` when ``None``.

    Returns
    -------
    int
        OS process exit code.  Usage errors raise ``SystemExit(2)``.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if settings is None:
        settings = Settings.from_env()
    if runner is None:
        from seda.infra.process_runner import SubprocessRunner

        runner = SubprocessRunner()

    if args.command == "code":
        return _handle_code(args.subparser, args.positionals, settings, runner)
    if args.command == "degit":
        return _handle_degit(args, settings, runner)
    return _handle_doctor(settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Known errors are reported on stdout; the process never exits with a
    raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except SedaError as exc:
        out.print(f"[bold red]Error:[/bold red] {escape(exc)}")
        if exc.hint:
            out.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        out.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
