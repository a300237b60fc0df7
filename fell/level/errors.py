"""Exceptions raised by level generation."""

from typing import Optional, Tuple


class GenerationError(RuntimeError):
    """Base class for failures that abort a level generation pass.

    Carries the seed and the failing room coordinate when they are known so
    the message can be reproduced from the log alone.
    """

    def __init__(self, message: str, seed: Optional[int] = None, room: Optional[Tuple[int, int]] = None):
        super().__init__(message)
        self.message = message
        self.seed = seed
        self.room = room

    def __str__(self) -> str:
        context = []
        if self.seed is not None:
            context.append(f"seed={self.seed}")
        if self.room is not None:
            context.append(f"room={self.room}")
        if context:
            return f"{self.message} ({', '.join(context)})"
        return self.message


class ConfigurationError(GenerationError, ValueError):
    """Invalid generator setup: grid size, room options, templates, archetypes."""


class ContentError(GenerationError):
    """Authored content (room templates) cannot satisfy the generator."""


class TemplateFormatError(ContentError, ValueError):
    """A room template does not match the expected text format."""


class SpawnPointNotFoundError(ContentError):
    """No standable tile was found in the start room."""
