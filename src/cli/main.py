"""merge-pdf CLI (Typer).

The CLI only parses flags, configures logging and prints. Everything else is
delegated to `core.services.merge_pipeline`.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from adapters.json_exporter import export_merge_report_json
from cli import doctor
from cli.ui_components import build_outline_tree, build_sources_table, build_summary_panel, print_banner
from core.config import APP_NAME, AppSettings
from core.errors import MergePdfError
from core.logging_config import configure_logging, resolve_level
from core.services.merge_pipeline import MergeRequest, PipelineHooks, merge_documents

app = typer.Typer(
    no_args_is_help=True,
    help="Merge PDF files into one document with a generated outline.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _package_version() -> str:
    try:
        return version(APP_NAME)
    except PackageNotFoundError:
        # PyInstaller binaries ship without dist-info.
        return "0.0.0+unknown"


@app.command(name="version")
def show_version() -> None:
    """Print the installed version."""

    _console.print(f"{APP_NAME} {_package_version()}")


@app.command()
def merge(
    files: Optional[List[str]] = typer.Option(
        None,
        "--files",
        "-f",
        help="PDF to merge; repeat the flag, order is kept. Relative to --predir; http(s) URLs are downloaded.",
    ),
    predir: Path = typer.Option(
        Path("."),
        "--predir",
        "-p",
        help="Base directory for --files and for the default output.",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path (default: <predir>/merged.pdf).",
    ),
    compress: Optional[bool] = typer.Option(
        None,
        "--compress/--no-compress",
        help="Recompress page content streams.",
    ),
    contents_page: Optional[bool] = typer.Option(
        None,
        "--contents-page/--no-contents-page",
        help="Prepend a rendered table-of-contents page.",
    ),
    bookmark_label: Optional[str] = typer.Option(
        None,
        "--bookmark-label",
        "-l",
        help="Bookmark label: a preset (index, name, stem) or a template using {index}, {name}, {stem}.",
    ),
    password: Optional[str] = typer.Option(
        None,
        "--password",
        help="Password for encrypted inputs.",
    ),
    report_json: Optional[Path] = typer.Option(
        None,
        "--report-json",
        help="Also write a JSON report of the merge.",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print errors."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Merge the given PDF files, in order, into a single document."""

    settings = AppSettings()
    configure_logging(resolve_level(settings.log_level, verbose=verbose, quiet=quiet))

    if not quiet:
        print_banner(_console)

    def _warn(message: str) -> None:
        if not quiet:
            _console.print(f"[yellow]Warning:[/yellow] {escape(message)}", soft_wrap=True)

    def _loaded(index: int, total: int, reference: str) -> None:
        if not quiet:
            _console.print(f"[dim]loaded {index}/{total}[/dim] {escape(reference)}")

    request = MergeRequest(
        files=list(files or []),
        predir=predir,
        output=output,
        bookmark_label=bookmark_label,
        contents_page=contents_page,
        compress=compress,
        password=password,
    )

    try:
        result = merge_documents(
            request,
            settings=settings,
            hooks=PipelineHooks(warning=_warn, document_loaded=_loaded),
        )
        if report_json is not None:
            export_merge_report_json(report=result.report, output_path=report_json)
    except MergePdfError as exc:
        _console.print(f"[bold red]ERROR:[/bold red] {escape(str(exc))}", soft_wrap=True)
        if exc.detail:
            _console.print(f"[dim]{escape(exc.detail)}[/dim]", soft_wrap=True)
        raise typer.Exit(code=1) from exc

    report = result.report

    if quiet:
        return

    _console.print(build_sources_table(report))
    if report.outline is not None:
        _console.print(build_outline_tree(report.outline))
    _console.print(build_summary_panel(report))
    if report_json is not None:
        _console.print(f"[green]Report:[/green] {escape(str(report_json))}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
