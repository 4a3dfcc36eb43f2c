"""Author persona data model."""

from dataclasses import dataclass, fields

PERSONA_FIELDS = (
    "name",
    "professional_history",
    "writing_style",
    "core_why",
    "personal_stories",
    "social_handles",
)


@dataclass(frozen=True)
class AuthorPersona:
    """The author's voice and background used to condition generated text."""
    name: str = ""
    professional_history: str = ""  # Free text, may be filled by identity research
    writing_style: str = ""
    core_why: str = ""
    personal_stories: str = ""
    social_handles: str = ""

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
