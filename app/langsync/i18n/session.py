"""Explicit translation session.

A session owns everything that changes when the language changes: the
dictionary store, the translation cache, the active language and the
activation sequence counter. Components receive the session by reference
instead of reaching for module-level state.
"""

from typing import Any, Callable, List, Mapping, Optional, Sequence

from langsync.core.logging import get_module_logger
from langsync.i18n.cache import TranslationCache
from langsync.i18n.models import Group
from langsync.i18n.store import DictionaryStore

logger = get_module_logger()

LanguageListener = Callable[[str], Any]


class TranslationSession:
    """State holder and single resolution entry point.

    Attributes:
        available_languages: Closed set of selectable language tags.
        default_language: Tag chosen when no preference or environment match.
        fallback_language: Tag retried when loading another language fails.
        store: DictionaryStore of the active language.
        cache: TranslationCache bound to ``store``.
    """

    def __init__(
        self,
        available_languages: Sequence[str],
        default_language: str = "en",
        fallback_language: str = "en",
    ):
        self.available_languages: List[str] = list(available_languages)
        self.default_language = default_language
        self.fallback_language = fallback_language
        self.store = DictionaryStore()
        self.cache = TranslationCache(self.store)
        self._sequence = 0
        self._listeners: List[LanguageListener] = []

    @property
    def current_language(self) -> Optional[str]:
        return self.store.language

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    def is_available(self, language: Optional[str]) -> bool:
        return language in self.available_languages

    def resolve(self, key: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Return the displayed string for a key in the active language.

        Never raises: any unexpected failure degrades to the key itself.
        """
        try:
            return self.cache.get(key, params)
        except Exception as e:
            logger.error("translation_resolution_failed", key=key, error=str(e))
            return key

    def issue_sequence(self) -> int:
        """Issue the next activation sequence number."""
        self._sequence += 1
        return self._sequence

    def is_current(self, sequence: int) -> bool:
        return sequence == self._sequence

    def apply(self, language: str, dictionary: Group, sequence: int) -> bool:
        """Make ``dictionary`` active if ``sequence`` is the latest issued.

        Replaces the store contents, empties the cache and notifies listeners.

        Returns:
            True if applied, False if a newer activation was issued meanwhile.
        """
        if not self.is_current(sequence):
            logger.info(
                "stale_activation_discarded",
                language=language,
                sequence=sequence,
                latest_sequence=self._sequence,
            )
            return False

        self.store.replace(language, dictionary)
        self.cache.clear()
        self._notify(language)
        return True

    def add_listener(self, listener: LanguageListener) -> None:
        """Register a callable invoked with the tag after each activation."""
        self._listeners.append(listener)

    def remove_listener(self, listener: LanguageListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, language: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(language)
            except Exception as e:
                listener_name = getattr(listener, "__name__", repr(listener))
                logger.error(
                    "language_listener_failed",
                    listener=listener_name,
                    language=language,
                    error=str(e),
                )
