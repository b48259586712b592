"""Tests for loading the keyword lexicon file."""

import json
from pathlib import Path

from src.intake.infrastructure import load_lexicon

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def test_loads_yaml(tmp_path):
    path = tmp_path / "keywords.yaml"
    path.write_text(
        "english:\n"
        "  Water & Sanitation:\n"
        "    - Water\n"
        "    - pipe\n"
        "kinyarwanda:\n"
        "  Water & Sanitation:\n"
        "    - amazi\n",
        encoding="utf-8",
    )

    lexicon = load_lexicon(path)

    assert lexicon.languages == ("english", "kinyarwanda")
    assert lexicon.groups_for("english") == (("Water & Sanitation", ("water", "pipe")),)


def test_loads_json(tmp_path):
    path = tmp_path / "keywords.json"
    path.write_text(json.dumps({"english": {"Electricity": ["power", "blackout"]}}), encoding="utf-8")

    lexicon = load_lexicon(path)

    assert lexicon.category_count("english") == 1


def test_missing_file_gives_empty_lexicon(tmp_path):
    lexicon = load_lexicon(tmp_path / "missing.yaml")
    assert lexicon.is_empty


def test_malformed_yaml_gives_empty_lexicon(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("english: [unclosed\n", encoding="utf-8")

    assert load_lexicon(path).is_empty


def test_wrong_shape_gives_empty_lexicon(tmp_path):
    path = tmp_path / "wrong.yaml"
    path.write_text("english:\n  - water\n  - pipe\n", encoding="utf-8")

    assert load_lexicon(path).is_empty


def test_empty_file_gives_empty_lexicon(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_lexicon(path).is_empty


def test_bundled_lexicon_covers_both_languages():
    lexicon = load_lexicon(PROJECT_ROOT / "categorization_keywords.yaml")

    assert "english" in lexicon
    assert "kinyarwanda" in lexicon
    assert lexicon.category_count("english") == lexicon.category_count("kinyarwanda")
