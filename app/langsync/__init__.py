"""langsync - keep a document's text translated as languages and content change.

Example:
    from langsync import Document, create_translation_service

    document = Document.from_html('<h1 translate="home.title"></h1>')
    service = await create_translation_service(document=document)
    await service.set_language("fr")
"""

from langsync.dom.document import Document, Element
from langsync.i18n.factory import create_translation_service
from langsync.i18n.service import TranslationService

__all__ = [
    "Document",
    "Element",
    "TranslationService",
    "create_translation_service",
]
