"""
Exceptions raised by the classification engine.

Numeric edge cases (all-zero priors, non-finite marginals) are handled
locally with fallbacks and never show up here.
"""

from __future__ import annotations


class TypeCoachError(Exception):
    """Base class for engine errors."""


class InvalidAnswerError(TypeCoachError, ValueError):
    """Raised when an answer token is not one of the five levels."""

    def __init__(self, answer: object):
        self.answer = answer
        super().__init__(f"Invalid answer level: {answer!r}")


class UnknownQuestionError(TypeCoachError, KeyError):
    """Raised when a question id is not present in the bank."""

    def __init__(self, question_id: str):
        self.question_id = question_id
        super().__init__(question_id)

    def __str__(self) -> str:
        return f"Unknown question id: {self.question_id!r}"


class DuplicateAnswerError(TypeCoachError, ValueError):
    """Raised when a session receives a second answer for the same question."""

    def __init__(self, question_id: str):
        self.question_id = question_id
        super().__init__(f"Question already answered: {question_id!r}")


class SessionCompleteError(TypeCoachError):
    """Raised when answering a session that has already reached ``done``."""


class NothingToUndoError(TypeCoachError):
    """Raised when undo is requested on an empty answer history."""
