"""Build flashcard decks from lesson content, and load that content from JSON."""

from __future__ import annotations

import json
from collections.abc import Iterable
from importlib import resources
from pathlib import Path

import structlog

from .config import QUESTION_PREVIEW_LENGTH
from .models import Chapter, Flashcard, LessonSection

CONTENT_PACKAGE = "flashdeck.content.chapters"

logger = structlog.get_logger(__name__)


def question_for_key_point(point: str) -> str:
    """Turn a key point into a prompt.

    ``"Concept: explanation"`` becomes ``"Concept?"``. Anything else falls back
    to a generic prompt quoting the first characters of the point.
    """
    if ":" in point:
        return point.split(":", 1)[0] + "?"
    return f"What about: {point[:QUESTION_PREVIEW_LENGTH]}...?"


def generate_flashcards(sections: Iterable[LessonSection]) -> list[Flashcard]:
    """Return one card per key point, in section order then key-point order."""
    cards: list[Flashcard] = []
    section_count = 0
    for section in sections:
        section_count += 1
        for index, point in enumerate(section.key_points):
            cards.append(
                Flashcard(
                    id=f"{section.id}-kp-{index}",
                    front=question_for_key_point(point),
                    back=point,
                    category=section.title,
                )
            )
    logger.debug("flashcards_generated", section_count=section_count, card_count=len(cards))
    return cards


def deck_for_chapter(chapter: Chapter) -> list[Flashcard]:
    """Generate the deck covering every section of a chapter."""
    return generate_flashcards(chapter.sections)


def _section_from_dict(raw: object) -> LessonSection:
    """Build a section from raw JSON content."""
    if not isinstance(raw, dict):
        raise ValueError(f"Section must be a JSON object: {raw!r}")
    if "id" not in raw or "title" not in raw:
        raise ValueError(f"Section is missing id or title: {raw!r}")
    raw_points = raw.get("key_points")
    if raw_points is None:
        raw_points = []
    if not isinstance(raw_points, list):
        raise ValueError(f"Section '{raw['id']}' key_points must be a list.")
    # Blank points stay so card ids keep matching source positions.
    return LessonSection(
        id=str(raw["id"]),
        title=str(raw["title"]),
        key_points=tuple(str(value) for value in raw_points),
    )


def _chapter_from_dict(raw: object) -> Chapter:
    """Build a chapter from raw JSON content."""
    if not isinstance(raw, dict):
        raise ValueError("Chapter file root must be a JSON object.")
    if "id" not in raw or "title" not in raw:
        raise ValueError("Chapter is missing id or title.")
    chapter_id = str(raw["id"])
    raw_sections = raw.get("sections", [])
    if not isinstance(raw_sections, list):
        raise ValueError(f"Chapter '{chapter_id}' sections must be a list.")
    sections = tuple(_section_from_dict(item) for item in raw_sections)

    seen: set[str] = set()
    for section in sections:
        if section.id in seen:
            raise ValueError(f"Duplicate section id: {section.id} (in chapter {chapter_id})")
        seen.add(section.id)

    return Chapter(
        id=chapter_id,
        title=str(raw["title"]),
        subtitle=str(raw.get("subtitle", "")),
        sections=sections,
    )


def load_chapter(path: Path | str) -> Chapter:
    """Load one chapter JSON file."""
    file_path = Path(path)
    chapter = _chapter_from_dict(json.loads(file_path.read_text(encoding="utf-8-sig")))
    logger.debug("chapter_loaded", chapter_id=chapter.id, path=str(file_path), sections=len(chapter.sections))
    return chapter


def load_chapters_from_dir(path: Path | str) -> dict[str, Chapter]:
    """Load every chapter file in a directory."""
    chapters: dict[str, Chapter] = {}
    for file_path in sorted(Path(path).glob("*.json")):
        _add_chapter(chapters, load_chapter(file_path))
    return chapters


def load_chapters() -> dict[str, Chapter]:
    """Load bundled chapters."""
    chapters: dict[str, Chapter] = {}
    entries = sorted(resources.files(CONTENT_PACKAGE).iterdir(), key=lambda item: item.name)
    for entry in entries:
        if entry.name.endswith(".json"):
            raw = json.loads(entry.read_text(encoding="utf-8-sig"))
            _add_chapter(chapters, _chapter_from_dict(raw))
    return chapters


def _add_chapter(chapters: dict[str, Chapter], chapter: Chapter) -> None:
    if chapter.id in chapters:
        raise ValueError(f"Duplicate chapter id: {chapter.id}")
    chapters[chapter.id] = chapter
