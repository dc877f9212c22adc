"""Core domain models for lesson content and flashcards."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Flashcard:
    """One question/answer study card."""

    id: str
    front: str
    back: str
    category: str | None = None


@dataclass(frozen=True)
class LessonSection:
    """Lesson section carrying the key points cards are derived from."""

    id: str
    title: str
    key_points: tuple[str, ...] = ()


@dataclass(frozen=True)
class Chapter:
    """Ordered group of lesson sections."""

    id: str
    title: str
    subtitle: str
    sections: tuple[LessonSection, ...]
