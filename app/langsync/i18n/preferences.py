"""Persistence of the chosen language.

Preference stores are best effort: a store that cannot read or write logs a
warning and carries on, so persistence never blocks translation.
"""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from langsync.core.logging import get_module_logger

logger = get_module_logger()

ENVIRONMENT_LOCALE_VARIABLES = ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG")


class PreferenceStore(ABC):
    """Abstract base for language preference stores."""

    @abstractmethod
    def load(self) -> Optional[str]:
        """Return the stored language tag, or None when absent or unreadable."""
        pass

    @abstractmethod
    def save(self, language: str) -> None:
        """Store the language tag; failures are swallowed."""
        pass


class InMemoryPreferenceStore(PreferenceStore):
    """Preference store that lives as long as the process."""

    def __init__(self, language: Optional[str] = None):
        self.language = language

    def load(self) -> Optional[str]:
        return self.language

    def save(self, language: str) -> None:
        self.language = language


class JSONFilePreferenceStore(PreferenceStore):
    """Preference store keeping ``{key: language}`` in a JSON file.

    Other keys present in the file are preserved on save.

    Attributes:
        path: JSON file location.
        key: Entry under which the language is stored.
    """

    def __init__(self, path: Path, key: str = "langsync_language"):
        self.path = Path(path)
        self.key = key

    def _read(self) -> Dict[str, str]:
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}

    def load(self) -> Optional[str]:
        try:
            value = self._read().get(self.key)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning(
                "preference_load_failed", path=str(self.path), error=str(e)
            )
            return None
        return value if isinstance(value, str) else None

    def save(self, language: str) -> None:
        try:
            try:
                data = self._read()
            except (FileNotFoundError, ValueError):
                data = {}
            data[self.key] = language
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(".tmp")
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            tmp.replace(self.path)
        except OSError as e:
            logger.warning(
                "could_not_save_language_preference",
                path=str(self.path),
                language=language,
                error=str(e),
            )


def detect_environment_locale() -> Optional[str]:
    """Return the host's preferred locale from the usual environment variables.

    ``LANGUAGE`` may hold a colon-separated priority list; its first entry is
    used. The ``C`` and ``POSIX`` locales carry no language and are skipped.

    Example:
        LANG=fr_FR.UTF-8 -> "fr_FR.UTF-8"
    """
    for name in ENVIRONMENT_LOCALE_VARIABLES:
        value = os.environ.get(name, "").split(":")[0].strip()
        if value and value not in ("C", "POSIX"):
            return value
    return None
