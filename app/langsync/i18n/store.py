"""Holder of the active language's dictionary."""

from typing import Optional

from langsync.core.logging import get_module_logger
from langsync.i18n.models import Group

logger = get_module_logger()


class DictionaryStore:
    """Owns the dictionary tree of the active language.

    Contents are replaced as a whole; there is no merging of trees. Every
    replacement bumps ``generation`` so dependents can detect that entries
    derived from the previous tree are stale.

    Attributes:
        language: Tag of the stored dictionary, or None before the first load.
        dictionary: Root group of the stored dictionary.
        generation: Number of replacements performed so far.
    """

    def __init__(self):
        self.language: Optional[str] = None
        self.dictionary: Group = Group()
        self.generation = 0

    @property
    def is_loaded(self) -> bool:
        return self.language is not None

    def replace(self, language: str, dictionary: Group) -> None:
        """Swap in a new dictionary for ``language``."""
        self.language, self.dictionary = language, dictionary
        self.generation += 1
        logger.debug(
            "dictionary_replaced",
            language=language,
            top_level_keys=len(dictionary),
            generation=self.generation,
        )
