# tests/modgate/ui/test_localization.py
from __future__ import annotations

from pathlib import Path

import json5
import pytest

from modgate.ui.localization import ENGLISH, TEXT_KEYS, Localizer, loadLocaleTable


def test_english_covers_every_key():
    assert set(TEXT_KEYS) <= set(ENGLISH)


def test_unknown_language_falls_back_to_english():
    assert Localizer("xx").text("MISSING_TITLE") == "Missing Dependency"


def test_unknown_key_returns_key():
    assert Localizer().text("NOPE") == "NOPE"


def test_tables_from_directory(tmp_path: Path):
    (tmp_path / "de.json5").write_text(json5.dumps({"MISSING_TITLE": "Fehlende Abhängigkeit", "CLOSE_BTN": 3}), encoding="utf-8")
    (tmp_path / "broken.json5").write_text("{ not json", encoding="utf-8")
    (tmp_path / "readme.txt").write_text("ignored", encoding="utf-8")

    loc = Localizer.fromDirectory("de", tmp_path)

    assert loc.text("MISSING_TITLE") == "Fehlende Abhängigkeit"
    # Non-string value dropped, English used instead
    assert loc.text("CLOSE_BTN") == ENGLISH["CLOSE_BTN"]


def test_missing_directory_gives_english(tmp_path: Path):
    loc = Localizer.fromDirectory("de", tmp_path / "nowhere")
    assert loc.text("WAITING_TITLE") == ENGLISH["WAITING_TITLE"]


def test_table_must_be_object(tmp_path: Path):
    path = tmp_path / "fr.json5"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(TypeError):
        loadLocaleTable(path)
