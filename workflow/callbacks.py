"""Operation callbacks for monitoring and real-time reporting."""

import logging
from typing import Optional, Protocol, runtime_checkable

from rich.markup import escape

from models.enums import OperationKind
from workflow.state import OperationResult

logger = logging.getLogger(__name__)


@runtime_checkable
class OperationCallback(Protocol):
    """Protocol for hooking into the lifecycle of delegated operations."""

    def on_operation_start(self, kind: OperationKind, chapter_id: Optional[str]) -> None:
        """Called when an operation is accepted and its call is sent."""
        ...

    def on_operation_complete(self, result: OperationResult) -> None:
        """Called after a successful merge into state."""
        ...

    def on_operation_error(self, result: OperationResult) -> None:
        """Called when an operation failed or was cancelled."""
        ...


class LoggingCallback:
    """Lightweight callback that logs progress to the standard logger."""

    def on_operation_start(self, kind: OperationKind, chapter_id: Optional[str]) -> None:
        logger.debug("→ %s%s", kind.value, f" [{chapter_id}]" if chapter_id else "")

    def on_operation_complete(self, result: OperationResult) -> None:
        logger.info("%s complete: %s", result.kind.value, result.message)

    def on_operation_error(self, result: OperationResult) -> None:
        logger.error("%s %s: %s", result.kind.value, result.status.value, result.message)


class RichStatusCallback:
    """Shows a Rich spinner while a one-shot CLI operation is in flight."""

    _LABELS: dict[OperationKind, str] = {
        OperationKind.RESEARCH_IDENTITY: "Researching author identity",
        OperationKind.GENERATE_PLAN: "Generating master plan",
        OperationKind.DRAFT_CHAPTER: "Drafting chapter",
        OperationKind.CHECK_INTEGRITY: "Checking integrity",
        OperationKind.HUMANIZE: "Running humanize pass",
        OperationKind.TWEAK: "Applying tweak",
        OperationKind.GENERATE_COVER: "Generating cover art",
        OperationKind.NARRATE: "Narrating preview",
    }

    def __init__(self, console=None):
        self._console = console
        self._status = None

    def _get_console(self):
        if self._console is None:
            from rich.console import Console
            self._console = Console()
        return self._console

    def on_operation_start(self, kind: OperationKind, chapter_id: Optional[str]) -> None:
        self._stop()
        label = self._LABELS.get(kind, kind.value)
        self._status = self._get_console().status(f"[info]{label}...[/]", spinner="dots")
        self._status.start()

    def on_operation_complete(self, result: OperationResult) -> None:
        self._stop()
        self._get_console().print(f"  [success]✓[/] {escape(result.message)}")

    def on_operation_error(self, result: OperationResult) -> None:
        self._stop()
        self._get_console().print(f"  [error]✗ {result.kind.value} {result.status.value}:[/] {escape(result.message)}")

    def _stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None
