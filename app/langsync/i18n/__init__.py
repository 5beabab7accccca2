"""i18n system - dictionary-backed translation for live documents.

Provides dictionary loading, dot-path key resolution, placeholder
interpolation, cached lookups and language selection with fallback.

Main components:
- models: Leaf/Group dictionary tree, TranslationKey, resolve_key, ActivationResult
- loader: DictionarySource with file, HTTP and in-memory implementations
- interpolation: interpolate() for ``{name}`` placeholders
- cache: TranslationCache memoizing lookups for the active dictionary
- session: TranslationSession owning store, cache and activation sequence
- resolvers: LanguageSelector for initial selection and activation
- service: TranslationService facade
- factory: create_translation_service() building a service from settings
"""

from langsync.i18n.cache import TranslationCache
from langsync.i18n.errors import (
    DictionaryFormatError,
    DictionaryRetrievalError,
    I18nError,
)
from langsync.i18n.formatting import BasicFormatter, Formatter
from langsync.i18n.interpolation import interpolate
from langsync.i18n.loader import (
    DictionarySource,
    FileDictionarySource,
    HTTPDictionarySource,
    StaticDictionarySource,
    create_dictionary_source,
)
from langsync.i18n.models import (
    ActivationResult,
    ActivationStatus,
    Group,
    Leaf,
    TranslationKey,
    build_dictionary,
    language_direction,
    resolve_key,
)
from langsync.i18n.preferences import (
    InMemoryPreferenceStore,
    JSONFilePreferenceStore,
    PreferenceStore,
    detect_environment_locale,
)
from langsync.i18n.resolvers import LanguageSelector, select_initial_language
from langsync.i18n.session import TranslationSession
from langsync.i18n.store import DictionaryStore

__all__ = [
    "ActivationResult",
    "ActivationStatus",
    "BasicFormatter",
    "DictionaryFormatError",
    "DictionaryRetrievalError",
    "DictionarySource",
    "DictionaryStore",
    "FileDictionarySource",
    "Formatter",
    "Group",
    "HTTPDictionarySource",
    "I18nError",
    "InMemoryPreferenceStore",
    "JSONFilePreferenceStore",
    "LanguageSelector",
    "Leaf",
    "PreferenceStore",
    "StaticDictionarySource",
    "TranslationCache",
    "TranslationKey",
    "TranslationSession",
    "build_dictionary",
    "create_dictionary_source",
    "detect_environment_locale",
    "interpolate",
    "language_direction",
    "resolve_key",
    "select_initial_language",
]
