"""Unified Rich theme and reusable UI helper functions for the CLI."""

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.theme import Theme
from rich.tree import Tree

from models.chapter import Chapter
from models.enums import ChapterStatus
from models.project import EbookProject
from workflow.publishing import chapter_label

STUDIO_THEME = Theme({
    "app.title": "bold",
    "success": "green",
    "warning": "yellow",
    "error": "red",
    "info": "blue",
    "muted": "dim",
    "accent": "cyan",
    "stat.label": "dim",
    "stat.value": "bold",
    "chapter.num": "blue",
    "status.drafting": "dim",
    "status.review": "cyan",
    "status.flagged": "bold red",
    "status.final": "bold green",
})


def get_console() -> Console:
    """Return a Console instance with the studio theme applied."""
    return Console(theme=STUDIO_THEME)


def app_header(title: str = "ebookstudio") -> Rule:
    """Return a Rule element for the application header banner."""
    return Rule(title=f"[bold]{title}[/]", style="dim")


def command_panel(title: str, fields: dict[str, str]) -> Panel:
    """Return a Panel displaying command parameters.

    Args:
        title: Panel title (e.g. "Generate plan").
        fields: Ordered dict of label -> value pairs.
    """
    lines = []
    for label, value in fields.items():
        lines.append(f"  [stat.label]{label}:[/] [stat.value]{escape(value)}[/]")
    body = "\n".join(lines)
    return Panel(body, title=f"[bold]{title}[/]", box=box.ROUNDED, border_style="dim", padding=(0, 2))


def success_panel(title: str, body: str) -> Panel:
    """Return a green-bordered Panel for success results."""
    return Panel(body, title=f"[success]{title}[/]", box=box.ROUNDED, border_style="green", padding=(0, 2))


def status_badge(status: ChapterStatus) -> str:
    return f"[status.{status.value}]{status.value}[/]"


def project_panel(project: EbookProject) -> Panel:
    """Return a Panel with the project title block and outline stats."""
    body = (
        f"  [stat.label]Subtitle:[/] {escape(project.subtitle)}\n"
        f"  [stat.label]Audience:[/] {escape(project.target_audience)}\n"
        f"  [stat.label]Theme:[/] {escape(project.theme)}  "
        f"[muted]|[/]  [stat.label]Chapters:[/] [stat.value]{len(project.chapters)}[/]"
    )
    return Panel(
        body,
        title=f"[bold]{escape(project.title or 'Untitled')}[/]",
        box=box.ROUNDED,
        border_style="dim",
        padding=(0, 2),
    )


def outline_tree(project: EbookProject, overview_chars: int = 80) -> Tree:
    """Build a Rich Tree showing the chapter outline."""
    tree = Tree(f"[bold]{escape(project.title or 'Outline')}[/]")
    for ch in project.chapters:
        overview = ch.overview
        if len(overview) > overview_chars:
            overview = overview[:overview_chars] + "..."
        branch = tree.add(f"[chapter.num]Chapter {ch.number}[/] {escape(ch.title)}  {status_badge(ch.status)}")
        if overview:
            branch.add(f"[muted]{escape(overview)}[/]")
    return tree


def chapter_table(chapters: tuple[Chapter, ...] | list[Chapter]) -> Table:
    """Build a Rich Table summarizing chapter status and integrity."""
    table = Table(box=box.ROUNDED, border_style="dim", show_header=True, padding=(0, 1))
    table.add_column("#", style="chapter.num", justify="right")
    table.add_column("Title")
    table.add_column("Status")
    table.add_column("Risk", justify="right")
    table.add_column("Publish", style="muted")

    for ch in chapters:
        risk = "-" if ch.integrity_score is None else f"{ch.integrity_score}%"
        table.add_row(str(ch.number), escape(ch.title), status_badge(ch.status), risk, chapter_label(ch))
    return table


def integrity_panel(chapter: Chapter) -> Panel:
    """Return a Panel with the integrity score and report of a chapter."""
    flagged = chapter.status is ChapterStatus.FLAGGED
    score = "-" if chapter.integrity_score is None else f"{chapter.integrity_score}%"
    body = (
        f"  [stat.label]AI-likeness:[/] [stat.value]{score}[/]  "
        f"[muted]|[/]  [stat.label]Status:[/] {status_badge(chapter.status)}\n\n"
        f"{escape(chapter.integrity_report or '')}"
    )
    return Panel(
        body,
        title="[error]Integrity risk[/]" if flagged else "[success]Integrity check[/]",
        box=box.ROUNDED,
        border_style="red" if flagged else "green",
        padding=(0, 2),
    )
