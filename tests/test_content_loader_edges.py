import json
from pathlib import Path

import pytest

from flashdeck.deck import load_chapter, load_chapters_from_dir


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_rejects_non_object_root(tmp_path: Path) -> None:
    path = _write(tmp_path / "list.json", [{"id": "c"}])
    with pytest.raises(ValueError, match="JSON object"):
        load_chapter(path)


def test_rejects_chapter_without_title(tmp_path: Path) -> None:
    path = _write(tmp_path / "c.json", {"id": "c", "sections": []})
    with pytest.raises(ValueError, match="missing id or title"):
        load_chapter(path)


def test_rejects_section_without_id(tmp_path: Path) -> None:
    path = _write(tmp_path / "c.json", {"id": "c", "title": "C", "sections": [{"title": "S"}]})
    with pytest.raises(ValueError, match="Section is missing"):
        load_chapter(path)


def test_rejects_duplicate_section_ids(tmp_path: Path) -> None:
    section = {"id": "s", "title": "S", "key_points": ["x"]}
    path = _write(tmp_path / "c.json", {"id": "c", "title": "C", "sections": [section, section]})
    with pytest.raises(ValueError, match="Duplicate section id: s"):
        load_chapter(path)


def test_rejects_duplicate_chapter_ids_in_directory(tmp_path: Path) -> None:
    _write(tmp_path / "one.json", {"id": "same", "title": "One", "sections": []})
    _write(tmp_path / "two.json", {"id": "same", "title": "Two", "sections": []})
    with pytest.raises(ValueError, match="Duplicate chapter id: same"):
        load_chapters_from_dir(tmp_path)


def test_invalid_json_raises_value_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_chapter(path)


def test_null_key_points_means_no_cards(tmp_path: Path) -> None:
    section = {"id": "s", "title": "S", "key_points": None}
    path = _write(tmp_path / "c.json", {"id": "c", "title": "C", "sections": [section]})
    assert load_chapter(path).sections[0].key_points == ()


@pytest.mark.parametrize("sections", [None, "abc", {"id": "s"}])
def test_rejects_sections_that_are_not_a_list(tmp_path: Path, sections: object) -> None:
    path = _write(tmp_path / "c.json", {"id": "c", "title": "C", "sections": sections})
    with pytest.raises(ValueError, match="sections must be a list"):
        load_chapter(path)


def test_rejects_section_that_is_not_an_object(tmp_path: Path) -> None:
    path = _write(tmp_path / "c.json", {"id": "c", "title": "C", "sections": ["intro"]})
    with pytest.raises(ValueError, match="Section must be a JSON object"):
        load_chapter(path)


@pytest.mark.parametrize("key_points", [5, "abc", {"a": "b"}])
def test_rejects_key_points_that_are_not_a_list(tmp_path: Path, key_points: object) -> None:
    section = {"id": "s", "title": "S", "key_points": key_points}
    path = _write(tmp_path / "c.json", {"id": "c", "title": "C", "sections": [section]})
    with pytest.raises(ValueError, match="key_points must be a list"):
        load_chapter(path)
