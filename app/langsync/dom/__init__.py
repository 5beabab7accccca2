"""Document model and translation synchronization.

- document: Element/Document tree with mutation subscriptions
- synchronizer: DomSynchronizer applying translations to marked elements
"""

from langsync.dom.document import Document, Element, MutationRecord, MutationSubscription
from langsync.dom.synchronizer import (
    BindingDescriptor,
    DomSynchronizer,
    MarkerConfig,
    MarkerKind,
    SyncState,
)

__all__ = [
    "BindingDescriptor",
    "Document",
    "DomSynchronizer",
    "Element",
    "MarkerConfig",
    "MarkerKind",
    "MutationRecord",
    "MutationSubscription",
    "SyncState",
]
