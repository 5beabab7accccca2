"""Minimal mutable document tree with structural-change subscriptions.

Provides just enough of a DOM for translation: elements with attributes, own
text and children, a document root, child-list mutation records delivered to
subscribers, and an HTML parser to build documents from markup.

Usage:
    from langsync.dom.document import Document

    document = Document.from_html('<p translate="home.title">Title</p>')
    subscription = document.observe(lambda records: print(records))

    with document.batch():
        item = document.create_element("li", {"translate": "nav.home"})
        document.body.append_child(item)

    subscription.disconnect()
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Callable, Dict, Iterator, List, Mapping, Optional

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)


@dataclass
class MutationRecord:
    """A child-list change on ``target``."""

    target: "Element"
    added_nodes: List["Element"] = field(default_factory=list)
    removed_nodes: List["Element"] = field(default_factory=list)


MutationCallback = Callable[[List[MutationRecord]], None]


class Element:
    """Document element.

    Attributes:
        tag_name: Lower-case tag name.
        attributes: Attribute name to value.
        children: Child elements in document order.
        parent: Parent element, or None for detached subtrees and the root.
        text: The element's own text, rendered before its children.
        value: Form value, meaningful for ``input`` and ``textarea``.
    """

    def __init__(
        self,
        tag_name: str,
        attributes: Optional[Mapping[str, str]] = None,
        text: str = "",
    ):
        self.tag_name = tag_name.lower()
        self.attributes: Dict[str, str] = dict(attributes or {})
        self.children: List["Element"] = []
        self.parent: Optional["Element"] = None
        self.text = text
        self.value = ""
        self._document: Optional["Document"] = None

    def __repr__(self) -> str:
        return f"<Element {self.tag_name} {self.attributes}>"

    @property
    def owner_document(self) -> Optional["Document"]:
        node: Optional[Element] = self
        while node is not None:
            if node._document is not None:
                return node._document
            node = node.parent
        return None

    @property
    def is_connected(self) -> bool:
        return self.owner_document is not None

    @property
    def text_content(self) -> str:
        return self.text + "".join(child.text_content for child in self.children)

    @text_content.setter
    def text_content(self, value: str) -> None:
        removed = self.children
        for child in removed:
            child.parent = None
        self.children = []
        self.text = value
        if removed:
            self._record(removed_nodes=removed)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    def append_child(self, child: "Element") -> "Element":
        return self.insert_before(child, None)

    def insert_before(
        self, child: "Element", reference: Optional["Element"]
    ) -> "Element":
        """Insert ``child`` before ``reference`` (or at the end when None).

        A child that already has a parent is moved.

        Raises:
            ValueError: If ``reference`` is not a child of this element, or if
                the insertion would make an element its own ancestor.
        """
        if reference is not None and reference.parent is not self:
            raise ValueError("reference element is not a child of this element")
        node: Optional[Element] = self
        while node is not None:
            if node is child:
                raise ValueError("cannot insert an element into its own subtree")
            node = node.parent

        if child.parent is not None:
            child.parent.remove_child(child)

        index = len(self.children) if reference is None else self.children.index(reference)
        self.children.insert(index, child)
        child.parent = self
        self._record(added_nodes=[child])
        return child

    def remove_child(self, child: "Element") -> "Element":
        if child.parent is not self:
            raise ValueError("element is not a child of this element")
        self.children.remove(child)
        child.parent = None
        self._record(removed_nodes=[child])
        return child

    def iter(self) -> Iterator["Element"]:
        """Iterate over this element and its descendants in document order."""
        yield self
        for child in self.children:
            yield from child.iter()

    def query_all(self, attribute: str) -> List["Element"]:
        """Return elements in this subtree (self included) carrying ``attribute``."""
        return [element for element in self.iter() if element.has_attribute(attribute)]

    def _record(
        self,
        added_nodes: Optional[List["Element"]] = None,
        removed_nodes: Optional[List["Element"]] = None,
    ) -> None:
        document = self.owner_document
        if document is None:
            return
        document._queue_record(
            MutationRecord(
                target=self,
                added_nodes=list(added_nodes or []),
                removed_nodes=list(removed_nodes or []),
            )
        )


class MutationSubscription:
    """Handle returned by ``Document.observe``; call ``disconnect()`` to stop."""

    def __init__(self, document: "Document", callback: MutationCallback):
        self.document = document
        self.callback = callback
        self.active = True

    def disconnect(self) -> None:
        if self.active:
            self.document._unsubscribe(self)
            self.active = False


class Document:
    """Document root with ``html``, ``head`` and ``body`` elements.

    Child-list changes anywhere under the root produce MutationRecords.
    Outside of ``batch()`` each change is delivered as a batch of one;
    inside it, records are collected and delivered together when the
    outermost block exits. Batches are delivered to subscribers in
    subscription order and each subscriber receives records in the order the
    changes happened.
    """

    def __init__(self):
        self.document_element = Element("html")
        self.document_element._document = self
        self.head = Element("head")
        self.body = Element("body")
        self.document_element.children = [self.head, self.body]
        self.head.parent = self.document_element
        self.body.parent = self.document_element
        self._subscriptions: List[MutationSubscription] = []
        self._pending: List[MutationRecord] = []
        self._batch_depth = 0
        self._delivering = False

    def create_element(
        self,
        tag_name: str,
        attributes: Optional[Mapping[str, str]] = None,
        text: str = "",
    ) -> Element:
        return Element(tag_name, attributes, text)

    def iter(self) -> Iterator[Element]:
        return self.document_element.iter()

    def query_all(self, attribute: str) -> List[Element]:
        return self.document_element.query_all(attribute)

    def observe(self, callback: MutationCallback) -> MutationSubscription:
        """Subscribe ``callback`` to mutation batches."""
        subscription = MutationSubscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    @property
    def observer_count(self) -> int:
        return len(self._subscriptions)

    @contextmanager
    def batch(self) -> Iterator[None]:
        """Group the mutations made inside the block into one delivered batch."""
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0:
                self._flush()

    def _unsubscribe(self, subscription: MutationSubscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def _queue_record(self, record: MutationRecord) -> None:
        self._pending.append(record)
        if self._batch_depth == 0:
            self._flush()

    def _flush(self) -> None:
        # Changes made by a subscriber during delivery are queued and delivered
        # by the outer loop once every subscriber has seen the current batch.
        if self._delivering:
            return
        self._delivering = True
        try:
            while self._pending:
                records, self._pending = self._pending, []
                for subscription in list(self._subscriptions):
                    if subscription.active:
                        subscription.callback(records)
        finally:
            self._delivering = False

    @classmethod
    def from_html(cls, markup: str) -> "Document":
        """Build a document from HTML markup.

        ``html``, ``head`` and ``body`` tags in the markup map onto the
        document's own elements; any other top-level content goes into the
        body. No mutation records are produced while parsing.
        """
        document = cls()
        builder = _DocumentBuilder(document)
        builder.feed(markup)
        builder.close()
        return document


class _DocumentBuilder(HTMLParser):
    def __init__(self, document: Document):
        super().__init__(convert_charrefs=True)
        self.document = document
        self.stack: List[Element] = [document.body]

    def _attach(self, element: Element) -> None:
        parent = self.stack[-1]
        parent.children.append(element)
        element.parent = parent

    def handle_starttag(self, tag, attrs):
        if tag == "html":
            self.document.document_element.attributes.update(
                {name: value or "" for name, value in attrs}
            )
            return
        if tag in ("head", "body"):
            element = getattr(self.document, tag)
            element.attributes.update({name: value or "" for name, value in attrs})
            self.stack = [element]
            return

        element = Element(tag, {name: value or "" for name, value in attrs})
        if tag in ("input", "textarea"):
            element.value = element.attributes.get("value", "")
        self._attach(element)
        if tag not in VOID_ELEMENTS:
            self.stack.append(element)

    def handle_startendtag(self, tag, attrs):
        self.handle_starttag(tag, attrs)
        if tag not in VOID_ELEMENTS and tag not in ("html", "head", "body"):
            self.stack.pop()

    def handle_endtag(self, tag):
        if tag in ("html", "head", "body"):
            self.stack = [self.document.body]
            return
        for index in range(len(self.stack) - 1, 0, -1):
            if self.stack[index].tag_name == tag:
                del self.stack[index:]
                return

    def handle_data(self, data):
        if not data.strip():
            return
        current = self.stack[-1]
        if current.tag_name == "textarea":
            current.value += data
        # No separate text nodes: text following a child element is appended
        # to the parent's own text.
        current.text += data
