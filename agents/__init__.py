"""Agents package: one agent per generation intent, plus the delegate."""

from agents.base_agent import BaseAgent
from agents.research_agent import ResearchAgent
from agents.planner_agent import PlannerAgent
from agents.writer_agent import WriterAgent
from agents.integrity_agent import IntegrityAgent
from agents.editor_agent import HumanizerAgent, TweakAgent
from agents.media_agent import CoverAgent, NarrationAgent
from agents.delegate import GenerationDelegate, StudioDelegate

__all__ = [
    "BaseAgent",
    "ResearchAgent",
    "PlannerAgent",
    "WriterAgent",
    "IntegrityAgent",
    "HumanizerAgent",
    "TweakAgent",
    "CoverAgent",
    "NarrationAgent",
    "GenerationDelegate",
    "StudioDelegate",
]
