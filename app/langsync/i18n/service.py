"""Translation service facade.

Wires a TranslationSession, LanguageSelector, DomSynchronizer and formatter
into one object with the library's public API.
"""

from datetime import date, datetime
from typing import Any, Callable, List, Mapping, Optional, Union

from langsync.core.logging import get_module_logger
from langsync.dom.document import Document, Element
from langsync.dom.synchronizer import DomSynchronizer, MarkerConfig, SyncState
from langsync.i18n.formatting import BasicFormatter, Formatter, Number
from langsync.i18n.models import ActivationResult, language_direction
from langsync.i18n.resolvers import LanguageSelector
from langsync.i18n.session import TranslationSession

logger = get_module_logger()


class TranslationService:
    """Class-based translation service.

    Thin facade: resolution is delegated to the session, activation to the
    selector and document updates to the synchronizer (when a document is
    attached).

    Usage:
        service = await create_translation_service(document=document)

        service.get("home.title")
        service.get("greeting", {"name": "Ada"})
        await service.set_language("fr")
        service.destroy()
    """

    def __init__(
        self,
        session: TranslationSession,
        selector: LanguageSelector,
        document: Optional[Document] = None,
        markers: Optional[MarkerConfig] = None,
        formatter: Optional[Formatter] = None,
        environment_locale: Optional[str] = None,
        on_language_change: Optional[Callable[[str], Any]] = None,
        queue_limit: int = 1000,
    ):
        """Initialize translation service.

        Args:
            session: Session holding the active dictionary and cache.
            selector: LanguageSelector bound to ``session``.
            document: Optional document kept in sync with the active language.
            markers: Marker attribute names used in ``document``.
            formatter: Formatting service; BasicFormatter when omitted.
            environment_locale: Host locale consulted by ``init()``.
            on_language_change: Callback invoked with the tag after each
                successful activation, after the document is updated.
            queue_limit: Incremental queue bound for the synchronizer.
        """
        self.session = session
        self.selector = selector
        self.formatter = formatter or BasicFormatter()
        self.environment_locale = environment_locale
        self.synchronizer: Optional[DomSynchronizer] = None
        if document is not None:
            self.synchronizer = DomSynchronizer(
                document, session, markers=markers, queue_limit=queue_limit
            )
        self._on_language_change = on_language_change
        if on_language_change is not None:
            session.add_listener(on_language_change)

    async def init(self) -> ActivationResult:
        """Select the initial language, activate it and start observing."""
        language = self.selector.detect_language(self.environment_locale)
        result = await self.set_language(language)
        if (
            self.synchronizer is not None
            and self.synchronizer.state is SyncState.UNINITIALIZED
        ):
            self.synchronizer.translate_document()
        logger.info(
            "translation_service_initialized",
            language=self.current_language,
            status=result.status.value,
        )
        return result

    async def set_language(self, language: str) -> ActivationResult:
        """Load and activate a language (see ``LanguageSelector.activate``)."""
        return await self.selector.activate(language)

    def get(self, key: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Return the translation of ``key``, or ``key`` itself on a miss."""
        return self.session.resolve(key, params)

    @property
    def current_language(self) -> Optional[str]:
        return self.session.current_language

    @property
    def available_languages(self) -> List[str]:
        return list(self.session.available_languages)

    def is_language_available(self, language: str) -> bool:
        return self.session.is_available(language)

    def translate_page(self) -> int:
        """Re-translate the whole attached document."""
        if self.synchronizer is None:
            return 0
        return self.synchronizer.translate_document()

    def translate_element(self, element: Element) -> int:
        """Translate ``element`` and its descendants."""
        if self.synchronizer is None:
            return 0
        return self.synchronizer.translate_subtree(element)

    def _formatting_language(self) -> str:
        return self.current_language or self.session.default_language

    def format_number(self, number: Number, **options: Any) -> str:
        return self.formatter.format_number(
            self._formatting_language(), number, **options
        )

    def format_date(self, value: Union[date, datetime], **options: Any) -> str:
        return self.formatter.format_date(self._formatting_language(), value, **options)

    def format_currency(
        self, amount: Number, currency: str = "USD", **options: Any
    ) -> str:
        return self.formatter.format_currency(
            self._formatting_language(), amount, currency, **options
        )

    def language_direction(self) -> str:
        """Text direction of the active language (``rtl`` or ``ltr``)."""
        return language_direction(self.current_language)

    def apply_direction(self) -> None:
        """Set ``dir`` on the attached document's root element."""
        if self.synchronizer is not None:
            self.synchronizer.apply_direction(self.language_direction())

    def destroy(self) -> None:
        """Stop observing, detach callbacks, empty the cache and close the source."""
        if self.synchronizer is not None:
            self.synchronizer.dispose()
        else:
            self.session.cache.clear()
        if self._on_language_change is not None:
            self.session.remove_listener(self._on_language_change)
            self._on_language_change = None
        self.selector.source.close()
        logger.info("translation_service_destroyed")
