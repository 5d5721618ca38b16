"""UI components for the CLI (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets `merge` and `doctor` reuse the same tables and panels.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from core.domain.models import Bookmark, MergeReport


def print_banner(console: Console) -> None:
    """Print the welcome banner.

    Why here:
    - Avoids circular imports (main <-> doctor).
    - The banner is skipped in quiet mode (scripts, CI).
    """

    title = Text("MERGE-PDF", style="bold cyan")
    subtitle = Text("Concatenate • Bookmark • Publish", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_sources_table(report: MergeReport) -> Table:
    """One row per input, in merge order."""

    table = Table(title="Merged documents")
    table.add_column("#", style="dim", justify="right", no_wrap=True)
    table.add_column("Source", style="cyan")
    table.add_column("Pages", style="white", justify="right")
    table.add_column("Starts at", style="green", justify="right")

    for index, source in enumerate(report.sources, start=1):
        starts_at = "-" if source.first_page_index is None else str(source.first_page_index + 1)
        table.add_row(str(index), source.location, str(source.page_count), starts_at)
    return table


def build_outline_tree(outline: Bookmark) -> Tree:
    """Outline as shown by a PDF viewer, with 1-based page numbers."""

    def _label(bookmark: Bookmark) -> Text:
        page = "?" if bookmark.page_index is None else str(bookmark.page_index + 1)
        style = "bold" if bookmark.style.bold else ""
        if bookmark.style.italic:
            style = f"{style} italic".strip()
        return Text.assemble((bookmark.title, style or "white"), (f"  p.{page}", "dim"))

    def _add(node: Tree, bookmark: Bookmark) -> None:
        for child in bookmark.children:
            _add(node.add(_label(child)), child)

    tree = Tree(_label(outline), guide_style="cyan")
    _add(tree, outline)
    return tree


def build_summary_panel(report: MergeReport) -> Panel:
    body = Text()
    body.append(f"{report.output_path}\n", style="bold")
    body.append(f"{report.total_pages} pages from {len(report.sources)} documents")
    if report.contents_page_count:
        body.append(f", {report.contents_page_count} contents page(s)")
    if report.compressed:
        body.append(", compressed", style="dim")
    return Panel(body, title=Text("Output", style="bold green"), border_style="green")
