"""eBook Studio CLI entry point.

Usage:
  ebookstudio                 open the studio console (default)
  ebookstudio plan ...        generate a master plan
  ebookstudio draft ...       plan and draft a chapter
  ebookstudio check FILE      integrity-check a manuscript file
  ebookstudio --help          list all commands
"""

import asyncio
import logging
import sys
from pathlib import Path

import click
from rich.markdown import Markdown
from rich.markup import escape

from agents.delegate import StudioDelegate
from cli.theme import (
    get_console,
    app_header,
    command_panel,
    success_panel,
    project_panel,
    outline_tree,
    integrity_panel,
)
from config.exceptions import MissingInputError, StudioError
from config.logging_config import setup_logging
from config.settings import Settings
from models.chapter import Chapter
from models.enums import ChapterStatus
from models.project import EbookProject
from workflow.callbacks import RichStatusCallback
from workflow.state import AppState, ProjectStore
from workflow.studio import Studio

console = get_console()


def _init_logging(verbose: bool):
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    settings = Settings()
    setup_logging(level=level, log_dir=settings.log_dir, console_enabled=verbose)


def _make_studio(state: AppState | None = None) -> Studio:
    settings = Settings()
    return Studio(
        StudioDelegate(settings),
        settings=settings,
        state=state,
        callback=RichStatusCallback(console),
    )


def _file_studio(path: Path) -> tuple[Studio, Chapter]:
    """Wrap a markdown file as a one-chapter project so chapter operations apply."""
    content = path.read_text(encoding="utf-8")
    chapter = Chapter(id="file", number=1, title=path.stem, content=content, status=ChapterStatus.REVIEW)
    project = EbookProject(id="file", title=path.stem, chapters=(chapter,))
    studio = _make_studio(AppState(project_store=ProjectStore(project)))
    return studio, chapter


def _run(coro):
    """Run ``coro`` and turn studio errors into a clean exit."""
    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        console.print("\n[warning]Interrupted[/]")
        sys.exit(130)
    except StudioError as e:
        console.print(f"\n[error]Failed: {escape(str(e))}[/]")
        sys.exit(1)


def _print_usage_summary(delegate) -> None:
    """Print how many delegate calls the command made."""
    usage = delegate.get_usage_summary()
    console.print(f"[muted]Delegate calls: {usage['text_calls']} text, {usage['media_calls']} media[/]")


def _write_or_print(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[success]Saved to {output}[/]")
    else:
        console.print(Markdown(text))


@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, verbose):
    """eBook Studio: AI-assisted ebook authoring console

    \b
    Run ebookstudio with no command to open the console, or use a
    subcommand for a single step:
      ebookstudio plan -t "digital burnout"
      ebookstudio draft -t "digital burnout" -c 3
      ebookstudio check chapter.md
    """
    _init_logging(verbose)
    if ctx.invoked_subcommand is None:
        from cli.tui import StudioApp

        app = StudioApp(_make_studio())
        app.run()


# ---------------------------------------------------------------------------
# Persona and outline
# ---------------------------------------------------------------------------

@cli.command()
@click.option("--name", required=True, help="Author name to research")
@click.option("--handles", default="", help="Social handles, comma separated")
def research(name, handles):
    """Research the author's public identity and print the summary."""
    studio = _make_studio()
    studio.set_persona_field("name", name)
    studio.set_persona_field("social_handles", handles)
    console.print(app_header())
    console.print(command_panel("Identity research", {"Name": name, "Handles": handles or "-"}))

    history = _run(studio.research_identity())
    console.print(success_panel("Professional history", escape(history)))
    _print_usage_summary(studio.delegate)


def _apply_persona(studio: Studio, name: str, style: str, history: str) -> None:
    for field, value in (("name", name), ("writing_style", style), ("professional_history", history)):
        if value:
            studio.set_persona_field(field, value)


@cli.command()
@click.option("--theme", "-t", required=True, help="Core theme of the book")
@click.option("--name", default="", help="Author name")
@click.option("--style", default="", help="Writing style (e.g. 'warm, direct')")
@click.option("--history", default="", help="Professional history")
@click.option("--chapters", "-c", default=None, type=click.IntRange(min=1), help="Number of chapters to plan")
def plan(theme, name, style, history, chapters):
    """Generate a master plan and print the outline.

    Example:
      ebookstudio plan -t "digital burnout" --name "Jane Doe" -c 8
    """
    studio = _make_studio()
    if chapters:
        studio.settings.outline_chapter_count = chapters
    _apply_persona(studio, name, style, history)

    console.print(app_header())
    console.print(command_panel("Generate plan", {
        "Theme": theme,
        "Chapters": str(studio.settings.outline_chapter_count),
    }))

    project = _run(studio.generate_plan(theme))
    console.print(project_panel(project))
    console.print(outline_tree(project))
    _print_usage_summary(studio.delegate)


async def _plan_and_draft(studio: Studio, theme: str, number: int) -> Chapter:
    project = await studio.generate_plan(theme)
    if number > len(project.chapters):
        raise click.BadParameter(
            f"plan has only {len(project.chapters)} chapters", param_hint="--chapter"
        )
    drafted = None
    # Earlier chapters first, so the running summary carries real context
    for n in range(1, number + 1):
        chapter = studio.state.project_store.get_chapter_by_number(n)
        drafted = await studio.draft_chapter(chapter.id)
    return drafted


@cli.command()
@click.option("--theme", "-t", required=True, help="Core theme of the book")
@click.option("--chapter", "-c", "number", required=True, type=click.IntRange(min=1), help="Chapter number to draft")
@click.option("--name", default="", help="Author name")
@click.option("--style", default="", help="Writing style")
@click.option("--output", "-o", default=None, help="Write the chapter markdown to this file")
def draft(theme, number, name, style, output):
    """Plan a book and draft chapters 1..N, printing chapter N."""
    studio = _make_studio()
    _apply_persona(studio, name, style, "")

    console.print(app_header())
    console.print(command_panel("Draft chapter", {"Theme": theme, "Chapter": str(number)}))

    chapter = _run(_plan_and_draft(studio, theme, number))
    console.print(app_header(f"Chapter {chapter.number}: {escape(chapter.title)}"))
    _write_or_print(chapter.content, output)
    console.print(f"\n[muted]Summary: {escape(chapter.summary)}[/]")
    _print_usage_summary(studio.delegate)


# ---------------------------------------------------------------------------
# File-based chapter commands
# ---------------------------------------------------------------------------

_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


@cli.command()
@click.argument("file", type=_FILE)
def check(file):
    """Score a manuscript file for AI-likeness."""
    studio, chapter = _file_studio(file)
    checked = _run(studio.check_integrity(chapter.id))
    console.print(integrity_panel(checked))
    _print_usage_summary(studio.delegate)
    if checked.status is ChapterStatus.FLAGGED:
        console.print(f"[warning]Above the risk threshold ({studio.settings.integrity_risk_threshold}%), "
                      f"try: ebookstudio humanize {file}[/]")


@cli.command()
@click.argument("file", type=_FILE)
@click.option("--output", "-o", default=None, help="Output file (prints to the terminal by default)")
def humanize(file, output):
    """Rewrite a manuscript file for a more natural voice."""
    studio, chapter = _file_studio(file)
    rewritten = _run(studio.humanize_chapter(chapter.id))
    _write_or_print(rewritten.content, output)
    _print_usage_summary(studio.delegate)


@cli.command()
@click.argument("file", type=_FILE)
@click.option("--start", required=True, type=click.IntRange(min=0), help="Start offset (inclusive)")
@click.option("--end", required=True, type=click.IntRange(min=0), help="End offset (exclusive)")
@click.option("--instruction", "-i", required=True, help="How to rewrite the selection")
@click.option("--output", "-o", default=None, help="Output file (prints to the terminal by default)")
def tweak(file, start, end, instruction, output):
    """Rewrite the [START, END) range of a manuscript file."""
    studio, chapter = _file_studio(file)
    try:
        selection = studio.select_text(chapter.id, start, end)
    except MissingInputError as e:
        raise click.BadParameter(e.message, param_hint="--start/--end")
    console.print(command_panel("Tweak", {"Selection": selection.text[:80], "Instruction": instruction}))
    tweaked = _run(studio.tweak_selection(selection, instruction))
    _write_or_print(tweaked.content, output)
    _print_usage_summary(studio.delegate)


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------

@cli.command()
@click.option("--title", required=True, help="Book title")
@click.option("--theme", "-t", required=True, help="Book theme")
@click.option("--output", "-o", required=True, help="Where to save the cover image")
def cover(title, theme, output):
    """Generate cover art for a title and theme."""
    delegate = StudioDelegate(Settings())
    prompt = f"{title}: {theme}"
    console.print(command_panel("Cover art", {"Prompt": prompt}))
    with console.status("[info]Generating cover art...[/]", spinner="dots"):
        asset = _run(delegate.generate_cover(prompt))
    _print_usage_summary(delegate)
    path = asset.save(output)
    console.print(success_panel("Cover", f"  {asset.mime_type}, {len(asset.data):,} bytes\n  {path}"))


@cli.command()
@click.argument("file", type=_FILE)
@click.option("--output", "-o", required=True, help="Where to save the audio")
def narrate(file, output):
    """Narrate a preview of a manuscript file."""
    studio, chapter = _file_studio(file)
    asset = _run(studio.narrate_chapter(chapter.id))
    _print_usage_summary(studio.delegate)
    path = asset.save(output)
    console.print(success_panel("Narration preview", f"  {asset.mime_type}, {len(asset.data):,} bytes\n  {path}"))


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
