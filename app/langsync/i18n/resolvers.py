"""Language selection and activation.

Decides which language to activate from a stored preference, the host's
environment locale and the configured default, and activates languages with a
single bounded fallback retry.
"""

from typing import Optional, Sequence, Tuple

from langsync.core.logging import get_module_logger
from langsync.i18n.errors import DictionaryRetrievalError
from langsync.i18n.loader import DictionarySource
from langsync.i18n.models import ActivationResult, ActivationStatus, Group
from langsync.i18n.preferences import PreferenceStore
from langsync.i18n.session import TranslationSession

logger = get_module_logger()


def select_initial_language(
    stored_preference: Optional[str],
    environment_signal: Optional[str],
    available: Sequence[str],
    default: str,
) -> str:
    """Pick the first language to activate.

    Resolution order:
    1. Stored preference (if available)
    2. First available tag that prefixes the environment locale, ignoring case
    3. Default

    Args:
        stored_preference: Previously saved tag, if any.
        environment_signal: Host locale string (e.g., "fr-CA", "de_DE.UTF-8").
        available: Selectable tags in priority order.
        default: Tag returned when nothing else matches.

    Returns:
        Selected language tag.
    """
    if stored_preference and stored_preference in available:
        return stored_preference

    if environment_signal:
        signal = environment_signal.lower()
        for language in available:
            if signal.startswith(language.lower()):
                return language

    return default


class LanguageSelector:
    """Selects and activates languages for a TranslationSession.

    Attributes:
        session: Session receiving activated dictionaries.
        source: DictionarySource the dictionaries are fetched from.
        preferences: Optional PreferenceStore for the chosen language.
        detect_environment: Whether the environment locale is consulted.
    """

    def __init__(
        self,
        session: TranslationSession,
        source: DictionarySource,
        preferences: Optional[PreferenceStore] = None,
        detect_environment: bool = True,
    ):
        self.session = session
        self.source = source
        self.preferences = preferences
        self.detect_environment = detect_environment
        self.log = logger.bind(fallback_language=session.fallback_language)

    def select_initial(
        self,
        stored_preference: Optional[str] = None,
        environment_signal: Optional[str] = None,
    ) -> str:
        """Select the initial language with the session's configuration."""
        language = select_initial_language(
            stored_preference,
            environment_signal if self.detect_environment else None,
            self.session.available_languages,
            self.session.default_language,
        )
        self.log.debug(
            "selected_initial_language",
            language=language,
            stored_preference=stored_preference,
            environment_signal=environment_signal,
        )
        return language

    def detect_language(self, environment_signal: Optional[str] = None) -> str:
        """Select the initial language, reading the stored preference."""
        return self.select_initial(self._load_preference(), environment_signal)

    async def activate(self, language: str) -> ActivationResult:
        """Load and activate a language.

        Unavailable tags are replaced by the fallback language. A failed load
        is retried once with the fallback language; a failing fallback leaves
        the previously active language in effect. Only the most recently
        issued activation is applied; older ones report SUPERSEDED.

        Args:
            language: Requested language tag.

        Returns:
            ActivationResult describing the outcome.
        """
        fallback = self.session.fallback_language
        sequence = self.session.issue_sequence()
        requested = language

        if not self.session.is_available(language):
            self.log.warning("language_not_available", language=language)
            language = fallback

        dictionary, error = await self._fetch(language)
        if dictionary is None:
            if language == fallback:
                return self._failed(requested, sequence, error)
            if not self.session.is_current(sequence):
                return self._superseded(requested, sequence)

            self.log.warning("retrying_with_fallback_language", language=language)
            language = fallback
            dictionary, error = await self._fetch(language)
            if dictionary is None:
                return self._failed(requested, sequence, error)

        if not self.session.apply(language, dictionary, sequence):
            return self._superseded(requested, sequence)

        self._save_preference(language)
        status = (
            ActivationStatus.SUCCESS
            if language == requested
            else ActivationStatus.FALLBACK
        )
        self.log.info(
            "language_activated",
            language=language,
            requested=requested,
            sequence=sequence,
        )
        return ActivationResult(
            status=status, requested=requested, language=language, sequence=sequence
        )

    async def _fetch(self, language: str) -> Tuple[Optional[Group], str]:
        try:
            return await self.source.fetch(language), ""
        except DictionaryRetrievalError as e:
            self.log.error("language_load_failed", language=language, error=str(e))
            return None, str(e)
        except Exception as e:
            self.log.exception(
                "dictionary_source_error", language=language, error=str(e)
            )
            return None, str(e)

    def _failed(self, requested: str, sequence: int, error: str) -> ActivationResult:
        self.log.error(
            "language_activation_failed",
            requested=requested,
            active_language=self.session.current_language,
            error=error,
        )
        return ActivationResult(
            status=ActivationStatus.FAILED,
            requested=requested,
            language=None,
            sequence=sequence,
            message=error,
        )

    def _superseded(self, requested: str, sequence: int) -> ActivationResult:
        self.log.info("language_activation_superseded", requested=requested)
        return ActivationResult(
            status=ActivationStatus.SUPERSEDED,
            requested=requested,
            language=None,
            sequence=sequence,
            message="superseded by a newer activation",
        )

    def _load_preference(self) -> Optional[str]:
        if self.preferences is None:
            return None
        try:
            return self.preferences.load()
        except Exception as e:
            self.log.warning("preference_load_failed", error=str(e))
            return None

    def _save_preference(self, language: str) -> None:
        if self.preferences is None:
            return
        try:
            self.preferences.save(language)
        except Exception as e:
            self.log.warning(
                "could_not_save_language_preference", language=language, error=str(e)
            )
