"""flashdeck package."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from .deck import deck_for_chapter, generate_flashcards, load_chapter, load_chapters, load_chapters_from_dir
from .models import Chapter, Flashcard, LessonSection
from .session import EmptyDeckError, SessionSnapshot, StudySession

__all__ = [
    "Chapter",
    "EmptyDeckError",
    "Flashcard",
    "LessonSection",
    "SessionSnapshot",
    "StudySession",
    "__version__",
    "deck_for_chapter",
    "generate_flashcards",
    "load_chapter",
    "load_chapters",
    "load_chapters_from_dir",
]


def _source_version() -> str | None:
    """Version declared by the pyproject.toml of a source checkout, if any."""
    for base in Path(__file__).resolve().parents:
        pyproject = base / "pyproject.toml"
        if not pyproject.is_file():
            continue
        with pyproject.open("rb") as handle:
            project = tomllib.load(handle).get("project", {})
        if project.get("name") == "flashdeck":
            return project.get("version")
    return None


_project_version = _source_version()
if _project_version is not None:
    __version__ = _project_version
else:
    try:
        __version__ = version("flashdeck")
    except PackageNotFoundError:
        __version__ = "0+unknown"
