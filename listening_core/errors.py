"""Exceptions raised by the listening engine."""
from __future__ import annotations


class ListeningCoreError(Exception):
    """Base class for all engine errors."""


class MissingTranscriptError(ListeningCoreError, ValueError):
    """Reference transcript is empty or has no alignable words."""


class InputTooLongError(ListeningCoreError, ValueError):
    """Transcript or attempt exceeds the configured token limit."""

    def __init__(self, field: str, size: int, limit: int):
        super().__init__(f"{field} has {size} tokens, limit is {limit}")
        self.field = field
        self.size = size
        self.limit = limit


class AlignmentIntegrityError(ListeningCoreError, RuntimeError):
    """An alignment step pointed outside the token sequences."""


class CoachServiceError(ListeningCoreError):
    """The coaching model endpoint could not produce a usable answer."""
