"""Workflow package: app state, transition rules, and the Studio operation layer."""

from workflow.state import AppState, OperationResult, PersonaStore, ProjectStore
from workflow.callbacks import OperationCallback, LoggingCallback, RichStatusCallback
from workflow.studio import Studio
from workflow.publishing import chapter_label, export_markdown, publication_readiness

__all__ = [
    "AppState",
    "OperationResult",
    "PersonaStore",
    "ProjectStore",
    "OperationCallback",
    "LoggingCallback",
    "RichStatusCallback",
    "Studio",
    "chapter_label",
    "export_markdown",
    "publication_readiness",
]
