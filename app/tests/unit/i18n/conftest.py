"""Feature-level fixtures for i18n system tests.

Provides dictionary directories and selectors for loading and activation
scenarios.
"""

import json

import pytest
import yaml

from langsync.i18n import FileDictionarySource, InMemoryPreferenceStore, LanguageSelector


@pytest.fixture
def temp_dictionary_dir(tmp_path, payloads):
    """Create temporary directory with sample dictionary files.

    Returns a directory structure like:
    - en.json
    - fr.yml
    - broken.json (invalid JSON)
    - listy.json (valid JSON, not a dictionary tree)
    """
    with open(tmp_path / "en.json", "w", encoding="utf-8") as f:
        json.dump(payloads["en"], f)

    with open(tmp_path / "fr.yml", "w", encoding="utf-8") as f:
        yaml.dump(payloads["fr"], f, allow_unicode=True)

    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "listy.json").write_text('["a", "b"]', encoding="utf-8")

    return tmp_path


@pytest.fixture
def file_source(temp_dictionary_dir):
    """FileDictionarySource for the temporary dictionary directory."""
    return FileDictionarySource(temp_dictionary_dir)


@pytest.fixture
def preferences():
    """Empty in-memory preference store."""
    return InMemoryPreferenceStore()


@pytest.fixture
def selector(session, recording_source, preferences):
    """LanguageSelector over an empty session and the recording source."""
    return LanguageSelector(session, recording_source, preferences=preferences)
