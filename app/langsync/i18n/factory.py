"""Factory functions for creating i18n components.

Provides convenience functions for building a TranslationService from
settings with sensible default collaborators.
"""

from pathlib import Path
from typing import Any, Callable, Optional

from langsync.core.config import LangSyncSettings
from langsync.core.logging import configure_logging, get_module_logger
from langsync.dom.document import Document
from langsync.dom.synchronizer import MarkerConfig
from langsync.i18n.formatting import Formatter
from langsync.i18n.loader import DictionarySource, create_dictionary_source
from langsync.i18n.preferences import (
    InMemoryPreferenceStore,
    JSONFilePreferenceStore,
    PreferenceStore,
    detect_environment_locale,
)
from langsync.i18n.resolvers import LanguageSelector
from langsync.i18n.service import TranslationService
from langsync.i18n.session import TranslationSession

logger = get_module_logger()


def create_preference_store(settings: LangSyncSettings) -> PreferenceStore:
    """JSON file store when ``PREFERENCES_FILE`` is set, in-memory otherwise."""
    if settings.PREFERENCES_FILE:
        return JSONFilePreferenceStore(
            Path(settings.PREFERENCES_FILE), key=settings.PERSIST_KEY
        )
    return InMemoryPreferenceStore()


async def create_translation_service(
    settings: Optional[LangSyncSettings] = None,
    document: Optional[Document] = None,
    source: Optional[DictionarySource] = None,
    preferences: Optional[PreferenceStore] = None,
    formatter: Optional[Formatter] = None,
    environment_locale: Optional[str] = None,
    on_language_change: Optional[Callable[[str], Any]] = None,
    auto_init: Optional[bool] = None,
) -> TranslationService:
    """Create and configure a TranslationService instance.

    Args:
        settings: Configuration (default: read from the environment). When
            given, logging is reconfigured from its DEBUG and LOG_LEVEL.
        document: Optional document to keep translated.
        source: Dictionary source (default: derived from ``LANGUAGE_PATH``).
        preferences: Preference store (default: per ``PREFERENCES_FILE``).
        formatter: Formatting service (default: BasicFormatter).
        environment_locale: Host locale (default: detected from the process
            environment when ``DETECT_ENVIRONMENT`` is on).
        on_language_change: Callback invoked after each activation.
        auto_init: Run ``init()`` before returning (default: ``AUTO_INIT``).

    Returns:
        TranslationService: Configured service.

    Raises:
        ValueError: If the settings are inconsistent.

    Usage:
        # Defaults: ./lang/<tag>.json, initialized immediately
        service = await create_translation_service(document=document)

        # Lazy initialization
        service = await create_translation_service(auto_init=False)
        await service.set_language("fr")
    """
    if settings is None:
        settings = LangSyncSettings()
    else:
        configure_logging(
            log_level=settings.effective_log_level,
            is_production=settings.is_production,
        )
    settings.validate_configuration()

    if source is None:
        source = create_dictionary_source(
            settings.LANGUAGE_PATH, timeout=settings.HTTP_TIMEOUT
        )
    if preferences is None:
        preferences = create_preference_store(settings)
    if environment_locale is None and settings.DETECT_ENVIRONMENT:
        environment_locale = detect_environment_locale()

    session = TranslationSession(
        available_languages=settings.AVAILABLE_LANGUAGES,
        default_language=settings.DEFAULT_LANGUAGE,
        fallback_language=settings.FALLBACK_LANGUAGE,
    )
    selector = LanguageSelector(
        session,
        source,
        preferences=preferences,
        detect_environment=settings.DETECT_ENVIRONMENT,
    )
    service = TranslationService(
        session,
        selector,
        document=document,
        markers=MarkerConfig.from_settings(settings),
        formatter=formatter,
        environment_locale=environment_locale,
        on_language_change=on_language_change,
        queue_limit=settings.SYNC_QUEUE_LIMIT,
    )

    should_init = settings.AUTO_INIT if auto_init is None else auto_init
    if should_init:
        await service.init()
        logger.info(
            "translation_service_created_with_init",
            language_path=settings.LANGUAGE_PATH,
            language=service.current_language,
        )
    else:
        logger.info(
            "translation_service_created_lazy",
            language_path=settings.LANGUAGE_PATH,
        )

    return service
