"""Keeps a document's marked elements translated.

The synchronizer writes resolved strings into elements that carry marker
attributes. A full pass covers the whole document and runs after every
successful language activation; incremental passes cover only subtrees added
to the document afterwards.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Iterator, List, Optional, Sequence, Tuple

from langsync.core.config import LangSyncSettings
from langsync.core.logging import get_module_logger
from langsync.dom.document import Document, Element, MutationRecord
from langsync.i18n.session import TranslationSession

logger = get_module_logger()

ARIA_ATTRIBUTE = "translate-aria"
FORM_FIELD_TAGS = frozenset({"input", "textarea"})


class SyncState(str, Enum):
    """Lifecycle of a synchronizer: uninitialized -> observing -> disposed."""

    UNINITIALIZED = "uninitialized"
    OBSERVING = "observing"
    DISPOSED = "disposed"


class MarkerKind(str, Enum):
    """Where a resolved string is written."""

    CONTENT = "content"
    PLACEHOLDER = "placeholder"
    TITLE = "title"
    ARIA_LABEL = "aria-label"


@dataclass(frozen=True)
class MarkerConfig:
    """Attribute names marking elements as translation targets.

    Attributes:
        content_attributes: Markers whose key fills the element's text (or
            value for form fields).
        placeholder_attribute: Marker whose key fills ``placeholder``.
        title_attribute: Marker whose key fills ``title``.
        aria_attribute: Marker whose key fills ``aria-label``.
    """

    content_attributes: Tuple[str, ...] = ("translate", "data-translate")
    placeholder_attribute: str = "translate-placeholder"
    title_attribute: str = "translate-title"
    aria_attribute: str = ARIA_ATTRIBUTE

    @classmethod
    def from_settings(cls, settings: LangSyncSettings) -> "MarkerConfig":
        return cls(
            content_attributes=tuple(settings.ATTRIBUTES),
            placeholder_attribute=settings.PLACEHOLDER_ATTRIBUTE,
            title_attribute=settings.TITLE_ATTRIBUTE,
        )

    def markers(self) -> List[Tuple[str, MarkerKind]]:
        pairs = [(name, MarkerKind.CONTENT) for name in self.content_attributes]
        pairs.append((self.placeholder_attribute, MarkerKind.PLACEHOLDER))
        pairs.append((self.title_attribute, MarkerKind.TITLE))
        pairs.append((self.aria_attribute, MarkerKind.ARIA_LABEL))
        return pairs


@dataclass(frozen=True)
class BindingDescriptor:
    """An element, one of its marker attributes and the key it names."""

    element: Element
    attribute: str
    kind: MarkerKind
    key: str


class DomSynchronizer:
    """Applies a session's translations to a document.

    The mutation listener is registered on construction and removed on
    ``dispose()``. Mutations arriving before the first full pass are ignored;
    the full pass covers them. Added subtrees are queued and drained
    synchronously within the batch that reported them. When a batch reports
    more subtrees than ``queue_limit``, the queue is dropped and a single full
    pass runs instead.

    Attributes:
        document: Document being kept in sync.
        session: TranslationSession providing ``resolve(key, params)``.
        markers: MarkerConfig naming the marker attributes.
        queue_limit: Maximum queued subtrees per mutation batch.
        state: Current SyncState.
    """

    def __init__(
        self,
        document: Document,
        session: TranslationSession,
        markers: Optional[MarkerConfig] = None,
        queue_limit: int = 1000,
    ):
        self.document = document
        self.session = session
        self.markers = markers or MarkerConfig()
        self.queue_limit = queue_limit
        self.state = SyncState.UNINITIALIZED
        self._marker_pairs = self.markers.markers()
        self._queue: Deque[Element] = deque()
        self._subscription = document.observe(self._on_mutations)
        session.add_listener(self.on_language_activated)

    def bindings(self, root: Element) -> Iterator[BindingDescriptor]:
        """Yield the binding descriptors found in ``root``'s subtree."""
        for element in root.iter():
            for attribute, kind in self._marker_pairs:
                key = element.get_attribute(attribute)
                if key:
                    yield BindingDescriptor(element, attribute, kind, key)

    def translate_document(self) -> int:
        """Full pass over the document.

        Returns:
            Number of bindings written.
        """
        if self.state is SyncState.DISPOSED:
            logger.warning("translate_after_dispose", scope="document")
            return 0

        count = self._apply(self.document.document_element)
        if self.state is SyncState.UNINITIALIZED:
            self.state = SyncState.OBSERVING
            logger.debug("synchronizer_observing")
        logger.debug(
            "translated_document",
            bindings=count,
            language=self.session.current_language,
        )
        return count

    def translate_subtree(self, element: Element) -> int:
        """Incremental pass restricted to ``element`` and its descendants.

        Returns:
            Number of bindings written.
        """
        if self.state is SyncState.DISPOSED:
            logger.warning("translate_after_dispose", scope="subtree")
            return 0
        return self._apply(element)

    def on_language_activated(self, language: str) -> None:
        """Session listener: mark the root with the language and re-translate."""
        if self.state is SyncState.DISPOSED:
            return
        self.document.document_element.set_attribute("lang", language)
        self.translate_document()

    def apply_direction(self, direction: str) -> None:
        self.document.document_element.set_attribute("dir", direction)

    def dispose(self) -> None:
        """Detach from the document and session and empty the cache. Terminal."""
        if self.state is SyncState.DISPOSED:
            return
        self._subscription.disconnect()
        self.session.remove_listener(self.on_language_activated)
        self._queue.clear()
        self.session.cache.clear()
        self.state = SyncState.DISPOSED
        logger.info("synchronizer_disposed")

    def _apply(self, root: Element) -> int:
        count = 0
        for binding in list(self.bindings(root)):
            try:
                self._write(binding, self.session.resolve(binding.key))
                count += 1
            except Exception as e:
                logger.error(
                    "binding_write_failed",
                    key=binding.key,
                    attribute=binding.attribute,
                    error=str(e),
                )
        return count

    @staticmethod
    def _write(binding: BindingDescriptor, value: str) -> None:
        element = binding.element
        match binding.kind:
            case MarkerKind.CONTENT:
                if element.tag_name in FORM_FIELD_TAGS:
                    element.value = value
                else:
                    element.text_content = value
            case MarkerKind.PLACEHOLDER:
                element.set_attribute("placeholder", value)
            case MarkerKind.TITLE:
                element.set_attribute("title", value)
            case MarkerKind.ARIA_LABEL:
                element.set_attribute("aria-label", value)

    def _on_mutations(self, records: Sequence[MutationRecord]) -> None:
        if self.state is not SyncState.OBSERVING:
            return

        for record in records:
            for node in record.added_nodes:
                if len(self._queue) >= self.queue_limit:
                    logger.info(
                        "incremental_queue_overflow", queue_limit=self.queue_limit
                    )
                    self._queue.clear()
                    self.translate_document()
                    return
                self._queue.append(node)

        while self._queue:
            element = self._queue.popleft()
            if element.is_connected:
                self.translate_subtree(element)
