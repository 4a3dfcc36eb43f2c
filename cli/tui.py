"""eBook Studio TUI: Textual console with one tab per authoring stage.

Layout:
  ┌─ banner (static) ───────────────────────────────┐
  ├─ tabs: Author | Research | Chapters | Publish ──┤
  ├─ active tab body ───────────────────────────────┤
  └─ operation status line ─────────────────────────┘

Delegated operations run as async workers on the app loop so they share the
Studio's locks and state; each button is disabled while its operation runs.
"""

from typing import Optional

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import (
    Button,
    Input,
    Markdown,
    ProgressBar,
    Select,
    Static,
    TabbedContent,
    TabPane,
    TextArea,
)

from cli.theme import chapter_table, integrity_panel, outline_tree, project_panel
from config.exceptions import StudioError
from models.enums import AppTab, ChapterStatus, OperationKind, OperationStatus
from models.project import MediaAsset
from workflow.callbacks import LoggingCallback
from workflow.publishing import export_markdown
from workflow.state import OperationResult
from workflow.studio import Studio

_PERSONA_INPUTS = ("name", "social_handles", "writing_style", "core_why")
_PERSONA_AREAS = ("professional_history", "personal_stories")

_STATUS_STYLE = {
    OperationStatus.RUNNING: "yellow",
    OperationStatus.SUCCEEDED: "green",
    OperationStatus.FAILED: "red",
    OperationStatus.CANCELLED: "dim",
}


def location_to_offset(text: str, location: tuple[int, int]) -> int:
    """Convert a TextArea ``(row, column)`` location into a string offset."""
    row, column = location
    lines = text.split("\n")
    row = min(row, len(lines) - 1)
    return sum(len(line) + 1 for line in lines[:row]) + min(column, len(lines[row]))


class ConsoleCallback:
    """Keeps the console controls and status line in step with the Studio.

    ``on_operation_start`` fires once the operation holds its key and chapter
    lock, so the refresh there disables the triggering control.
    """

    def __init__(self, app: "StudioApp"):
        self._app = app
        self._log = LoggingCallback()

    def on_operation_start(self, kind: OperationKind, chapter_id: Optional[str]) -> None:
        self._log.on_operation_start(kind, chapter_id)
        self._app.refresh_operations()

    def on_operation_complete(self, result: OperationResult) -> None:
        self._log.on_operation_complete(result)
        self._app.refresh_operations()

    def on_operation_error(self, result: OperationResult) -> None:
        self._log.on_operation_error(result)
        self._app.refresh_operations()


class StudioApp(App):
    """eBook Studio Textual application."""

    CSS = """
    Screen {
        background: black;
    }

    #banner {
        height: auto;
        background: #121212;
        border: tall #3a3a3a;
        padding: 0 2;
        content-align: center middle;
    }

    #op_status {
        height: 1;
        padding: 0 2;
        color: #767676;
    }

    Input, TextArea {
        margin-bottom: 1;
    }

    .field-area {
        height: 6;
    }

    #chapter_content {
        height: 1fr;
        min-height: 12;
    }

    #chapter_actions Button, #publish_actions Button {
        margin-right: 1;
    }

    #chapter_actions, #publish_actions, #tweak_row {
        height: auto;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("escape", "cancel_operation", "Cancel"),
    ]

    def __init__(self, studio: Studio):
        super().__init__()
        self.studio = studio
        self.studio.callback = ConsoleCallback(self)
        self.active_chapter_id: Optional[str] = None

    # ── Layout ────────────────────────────────────────────────────────────

    def compose(self) -> ComposeResult:
        persona = self.studio.state.persona
        yield Static("[bold]eBook Studio[/]  [dim]persona → plan → chapters → publish[/]", id="banner")
        with TabbedContent(initial=AppTab.AUTHOR.value, id="tabs"):
            with TabPane("Author", id=AppTab.AUTHOR.value):
                with VerticalScroll():
                    for name in _PERSONA_INPUTS:
                        yield Input(value=getattr(persona, name), placeholder=name.replace("_", " ").title(),
                                    id=f"persona_{name}")
                    yield Button("Research identity", id="research_identity", variant="primary")
                    for name in _PERSONA_AREAS:
                        yield Static(f"[dim]{name.replace('_', ' ').title()}[/]")
                        yield TextArea(getattr(persona, name), id=f"persona_{name}", classes="field-area")
            with TabPane("Research", id=AppTab.RESEARCH.value):
                with VerticalScroll():
                    yield Input(placeholder="Core theme, e.g. the psychology of digital burnout", id="theme")
                    yield Button("Generate master plan", id="generate_plan", variant="primary")
                    yield Static(id="outline")
            with TabPane("Chapters", id=AppTab.CHAPTERS.value):
                with VerticalScroll():
                    yield Select([], prompt="Select a chapter", id="chapter_select")
                    with Horizontal(id="chapter_actions"):
                        yield Button("Draft", id="draft_chapter", variant="primary")
                        yield Button("Check integrity", id="check_integrity")
                        yield Button("Humanize", id="humanize", variant="warning")
                        yield Button("Approve", id="approve", variant="success")
                        yield Button("Cover art", id="generate_cover")
                    yield Static(id="integrity")
                    yield Static("[dim]Pointers[/]")
                    yield TextArea(id="chapter_pointers", classes="field-area")
                    yield TextArea(id="chapter_content")
                    with Horizontal(id="tweak_row"):
                        yield Input(placeholder="Tweak instruction for the selected text", id="tweak_instruction")
                        yield Button("Tweak selection", id="tweak")
            with TabPane("Publish", id=AppTab.PUBLISH.value):
                with VerticalScroll():
                    yield Static(id="project_summary")
                    yield ProgressBar(total=100, show_eta=False, id="readiness")
                    yield Static(id="publish_table")
                    with Horizontal(id="publish_actions"):
                        yield Button("Narrate preview", id="narrate")
                        yield Button("Refresh manuscript", id="refresh_manuscript")
                    yield Markdown(id="manuscript")
        yield Static(id="op_status")

    def on_mount(self) -> None:
        self._refresh_all()

    # ── Helpers ───────────────────────────────────────────────────────────

    @property
    def project(self):
        return self.studio.state.project

    def _active_chapter(self):
        if self.active_chapter_id is None:
            return None
        try:
            return self.studio.state.project_store.get_chapter(self.active_chapter_id)
        except StudioError:
            return None

    def _refresh_all(self) -> None:
        self._refresh_persona()
        self._refresh_outline()
        self._refresh_chapter_list()
        self._refresh_editor()
        self._refresh_publish()
        self._refresh_buttons()

    def _refresh_persona(self) -> None:
        persona = self.studio.state.persona
        for name in _PERSONA_INPUTS:
            widget = self.query_one(f"#persona_{name}", Input)
            if widget.value != getattr(persona, name):
                widget.value = getattr(persona, name)
        for name in _PERSONA_AREAS:
            area = self.query_one(f"#persona_{name}", TextArea)
            if area.text != getattr(persona, name):
                area.load_text(getattr(persona, name))

    def _refresh_outline(self) -> None:
        outline = self.query_one("#outline", Static)
        if self.project.is_planned:
            outline.update(outline_tree(self.project))
        else:
            outline.update("[dim]No plan yet.[/]")

    def _refresh_chapter_list(self) -> None:
        select = self.query_one("#chapter_select", Select)
        options = [(f"{c.number}. {c.title} [{c.status.value}]", c.id) for c in self.project.chapters]
        select.set_options(options)
        if self._active_chapter() is None:
            self.active_chapter_id = self.project.chapters[0].id if self.project.chapters else None
        if self.active_chapter_id is not None:
            select.value = self.active_chapter_id

    def _refresh_editor(self) -> None:
        chapter = self._active_chapter()
        content = self.query_one("#chapter_content", TextArea)
        pointers = self.query_one("#chapter_pointers", TextArea)
        integrity = self.query_one("#integrity", Static)
        if chapter is None:
            content.load_text("")
            pointers.load_text("")
            integrity.update("")
            return
        if content.text != chapter.content:
            content.load_text(chapter.content)
        if pointers.text != chapter.pointers:
            pointers.load_text(chapter.pointers)
        integrity.update(integrity_panel(chapter) if chapter.integrity_score is not None else "")

    def _refresh_publish(self) -> None:
        self.query_one("#project_summary", Static).update(project_panel(self.project))
        self.query_one("#readiness", ProgressBar).update(progress=self.studio.publication_readiness())
        self.query_one("#publish_table", Static).update(chapter_table(self.project.chapters))

    def _refresh_buttons(self) -> None:
        chapter = self._active_chapter()
        has_content = chapter is not None and chapter.has_content
        busy = chapter is not None and self.studio.is_chapter_busy(chapter.id)
        running = self.studio.is_running

        self.query_one("#research_identity", Button).disabled = running(OperationKind.RESEARCH_IDENTITY)
        self.query_one("#generate_plan", Button).disabled = running(OperationKind.GENERATE_PLAN)
        self.query_one("#generate_cover", Button).disabled = (
            not self.project.is_planned or running(OperationKind.GENERATE_COVER)
        )
        self.query_one("#draft_chapter", Button).disabled = chapter is None or busy
        for button_id in ("check_integrity", "humanize", "tweak", "narrate"):
            self.query_one(f"#{button_id}", Button).disabled = not has_content or busy
        self.query_one("#humanize", Button).variant = (
            "error" if chapter is not None and chapter.status is ChapterStatus.FLAGGED else "warning"
        )
        self.query_one("#approve", Button).disabled = (
            chapter is None or chapter.status is not ChapterStatus.REVIEW or not has_content or busy
        )

    def _show_status(self) -> None:
        parts = []
        for result in self.studio.state.operations.values():
            if result.status is OperationStatus.IDLE:
                continue
            style = _STATUS_STYLE.get(result.status, "dim")
            label = result.kind.value if result.chapter_id is None else f"{result.kind.value}#{result.chapter_id}"
            parts.append(f"[{style}]{label}: {result.status.value}[/]")
        self.query_one("#op_status", Static).update("  ".join(parts[-4:]))

    def refresh_operations(self) -> None:
        self._refresh_buttons()
        self._show_status()

    # ── Events ────────────────────────────────────────────────────────────

    def on_tabbed_content_tab_activated(self, event: TabbedContent.TabActivated) -> None:
        active = self.query_one("#tabs", TabbedContent).active
        if active in AppTab._value2member_map_:
            self.studio.set_active_tab(AppTab(active))

    def on_input_changed(self, event: Input.Changed) -> None:
        input_id = event.input.id or ""
        if input_id.startswith("persona_"):
            self.studio.set_persona_field(input_id.removeprefix("persona_"), event.value)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        area_id = event.text_area.id or ""
        text = event.text_area.text
        if area_id.startswith("persona_"):
            field = area_id.removeprefix("persona_")
            if getattr(self.studio.state.persona, field) != text:
                self.studio.set_persona_field(field, text)
            return
        chapter = self._active_chapter()
        if chapter is None:
            return
        if area_id == "chapter_content" and text != chapter.content:
            self.studio.edit_content(chapter.id, text)
            self._refresh_buttons()
        elif area_id == "chapter_pointers" and text != chapter.pointers:
            self.studio.edit_pointers(chapter.id, text)

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "chapter_select" and isinstance(event.value, str):
            self.active_chapter_id = event.value
            self._refresh_editor()
            self._refresh_buttons()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        chapter = self._active_chapter()
        if button_id == "research_identity":
            self._run_op(self.studio.research_identity())
        elif button_id == "generate_plan":
            self._run_op(self.studio.generate_plan(self.query_one("#theme", Input).value))
        elif button_id == "generate_cover":
            self._run_op(self.studio.generate_cover())
        elif button_id == "refresh_manuscript":
            self.query_one("#manuscript", Markdown).update(export_markdown(self.project))
        elif chapter is None:
            self.notify("Generate a plan first", severity="warning")
        elif button_id == "draft_chapter":
            self._run_op(self.studio.draft_chapter(chapter.id))
        elif button_id == "check_integrity":
            self._run_op(self.studio.check_integrity(chapter.id))
        elif button_id == "humanize":
            self._run_op(self.studio.humanize_chapter(chapter.id))
        elif button_id == "narrate":
            self._run_op(self.studio.narrate_chapter(chapter.id))
        elif button_id == "approve":
            self._guard(lambda: self.studio.approve_chapter(chapter.id))
            self._refresh_all()
        elif button_id == "tweak":
            self._start_tweak(chapter.id)

    def _start_tweak(self, chapter_id: str) -> None:
        area = self.query_one("#chapter_content", TextArea)
        start, end = sorted(location_to_offset(area.text, loc) for loc in area.selection)
        instruction = self.query_one("#tweak_instruction", Input).value
        selection = self._guard(lambda: self.studio.select_text(chapter_id, start, end))
        if selection is not None:
            self._run_op(self.studio.tweak_selection(selection, instruction))

    def _guard(self, fn):
        try:
            return fn()
        except StudioError as e:
            self.notify(str(e), severity="error")
            return None

    @work(exit_on_error=False)
    async def _run_op(self, coro) -> None:
        """Worker: await a studio operation and refresh the views."""
        try:
            result = await coro
        except StudioError as e:
            self.notify(str(e), severity="error")
        else:
            if isinstance(result, MediaAsset):
                self.notify(f"Media ready: {result.mime_type}, {len(result.data):,} bytes")
        finally:
            self._refresh_all()
            self._show_status()

    # ── Actions ───────────────────────────────────────────────────────────

    def action_cancel_operation(self) -> None:
        cancelled = False
        for result in list(self.studio.state.operations.values()):
            if result.is_running:
                cancelled = self.studio.cancel(result.kind, result.chapter_id) or cancelled
        if cancelled:
            self.notify("Cancelled running operations")

    def action_quit(self) -> None:
        self.exit()
