"""Doctor command for environment diagnostics."""

from __future__ import annotations

from io import BytesIO

import pypdf
import typer
from rich.console import Console
from rich.table import Table

from adapters.contents_page import render_contents_pdf
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.labels import LabelPreset, validate_template
from core.domain.models import ContentsEntry
from core.errors import ContentsPageError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_contents_page() -> tuple[bool, str]:
    """Render a one-line contents page to detect WeasyPrint issues."""

    try:
        payload = render_contents_pdf(
            "Doctor",
            [ContentsEntry(label="Page 1", source="doctor.pdf", page_number=2)],
        )
        pages = len(pypdf.PdfReader(BytesIO(payload)).pages)
        return True, f"OK ({pages} page)"
    except ContentsPageError as exc:
        return False, f"{exc} ({exc.detail})" if exc.detail else str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="merge-pdf Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("pypdf", "OK", pypdf.__version__)

    # Config
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))
    table.add_row("Output name", "OK", settings.output_name)
    try:
        validate_template(LabelPreset.lookup(settings.bookmark_label))
        table.add_row("Bookmark label", "OK", settings.bookmark_label)
    except ValueError as exc:
        table.add_row("Bookmark label", "FAIL", str(exc))

    ok_pdf, detail_pdf = _check_contents_page()
    table.add_row("WeasyPrint contents page", "OK" if ok_pdf else "FAIL", detail_pdf)

    _console.print(table)

    if not ok_pdf:
        _console.print(
            "\n[yellow]Note:[/yellow] When rendering fails, `--contents-page` is skipped with a warning "
            "and the merge still completes."
        )


@app.command(name="init-config")
def init_config() -> None:
    """Interactive defaults setup (stored in the user config .env).

    Designed for the standalone binary: no manual .env editing.
    """

    settings = AppSettings()

    output_name = typer.prompt("Default output file name", default=settings.output_name).strip()
    contents_title = typer.prompt("Root bookmark title", default=settings.contents_title).strip()
    bookmark_label = typer.prompt(
        "Bookmark label (index, name, stem or a template)",
        default=settings.bookmark_label,
    ).strip()
    contents_page = typer.confirm("Render a contents page by default?", default=settings.contents_page)
    compress = typer.confirm("Compress page streams by default?", default=settings.compress)

    if not output_name or not contents_title:
        raise typer.BadParameter("output name and root bookmark title are required")
    try:
        validate_template(LabelPreset.lookup(bookmark_label))
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    env_path = write_user_env_vars(
        {
            "MERGE_PDF_OUTPUT_NAME": output_name,
            "MERGE_PDF_CONTENTS_TITLE": contents_title,
            "MERGE_PDF_BOOKMARK_LABEL": bookmark_label,
            "MERGE_PDF_CONTENTS_PAGE": str(contents_page).lower(),
            "MERGE_PDF_COMPRESS": str(compress).lower(),
        }
    )

    _console.print(f"[green]Saved defaults to:[/green] {env_path}")
