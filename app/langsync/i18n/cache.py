"""Memoization of resolved translations for the active dictionary."""

from typing import Any, Dict, Mapping, Optional, Tuple

from langsync.core.logging import get_module_logger
from langsync.i18n.interpolation import interpolate, serialize_params
from langsync.i18n.models import resolve_key
from langsync.i18n.store import DictionaryStore

logger = get_module_logger()


class TranslationCache:
    """Caches ``(key, params)`` lookups against a DictionaryStore.

    A miss resolves the key against the store's dictionary, interpolates the
    parameters (only when there are any) and memoizes the displayed string.
    Keys that do not resolve to a leaf are displayed as the key itself.

    Entries are tied to the store generation they were computed from. The
    cache is emptied by ``clear()`` on every activation and also empties
    itself when it sees that the store generation moved on.

    Attributes:
        store: DictionaryStore the lookups resolve against.
        resolution_count: Number of lookups that were not served from cache.
    """

    def __init__(self, store: DictionaryStore):
        self.store = store
        self.resolution_count = 0
        self._entries: Dict[Tuple[str, str], str] = {}
        self._generation = store.generation

    @property
    def size(self) -> int:
        return len(self._entries)

    def get(self, key: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Return the displayed string for ``key`` with ``params`` applied."""
        if self._generation != self.store.generation:
            self.clear()

        cache_key = (key, serialize_params(params))
        cached = self._entries.get(cache_key)
        if cached is not None:
            return cached

        self.resolution_count += 1
        value = resolve_key(self.store.dictionary, key)
        if value is None:
            logger.warning(
                "translation_key_not_found",
                key=key,
                language=self.store.language,
            )
            value = key
        else:
            value = interpolate(value, params)

        self._entries[cache_key] = value
        return value

    def clear(self) -> None:
        """Drop every entry and bind the cache to the current store generation."""
        self._entries.clear()
        self._generation = self.store.generation
        logger.debug("cleared_translation_cache", generation=self._generation)
