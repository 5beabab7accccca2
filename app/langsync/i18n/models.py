"""Translation models for the i18n system.

Defines the dictionary tree (a tagged union of ``Leaf`` and ``Group`` nodes),
translation keys, key resolution and activation results.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from langsync.i18n.errors import DictionaryFormatError

RTL_LANGUAGES = frozenset({"ar", "he", "fa", "ur"})


@dataclass(frozen=True)
class Leaf:
    """Terminal dictionary node holding a translated string."""

    text: str


@dataclass(frozen=True)
class Group:
    """Internal dictionary node mapping segment names to child nodes.

    Attributes:
        children: Read-only mapping of segment name to ``Leaf`` or ``Group``.
    """

    children: Mapping[str, "Node"] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))

    def __len__(self) -> int:
        return len(self.children)

    def get(self, segment: str) -> Optional["Node"]:
        return self.children.get(segment)


Node = Union[Leaf, Group]


def build_dictionary(raw: Any, language: str = "unknown") -> Group:
    """Convert a parsed payload (JSON/YAML) into a dictionary tree.

    Mappings become groups, strings become leaves, numbers and booleans become
    leaves holding their string form.

    Args:
        raw: Parsed payload; the root must be a mapping.
        language: Language tag, used for error reporting.

    Returns:
        Root ``Group`` of the dictionary.

    Raises:
        DictionaryFormatError: If the root is not a mapping or a value is
            neither a mapping nor a scalar.
    """
    if not isinstance(raw, Mapping):
        raise DictionaryFormatError(language, "root must be a mapping")
    return _build_group(raw, language, path="")


def _build_group(raw: Mapping, language: str, path: str) -> Group:
    children: dict[str, Node] = {}
    for name, value in raw.items():
        name = str(name)
        child_path = f"{path}.{name}" if path else name
        if isinstance(value, Mapping):
            children[name] = _build_group(value, language, child_path)
        elif isinstance(value, str):
            children[name] = Leaf(value)
        elif isinstance(value, bool):
            children[name] = Leaf("true" if value else "false")
        elif isinstance(value, (int, float)):
            children[name] = Leaf(str(value))
        else:
            raise DictionaryFormatError(
                language,
                f"unsupported value of type {type(value).__name__} at {child_path!r}",
            )
    return Group(children)


@dataclass(frozen=True)
class TranslationKey:
    """Dot-separated path identifying a leaf in a dictionary.

    Keys are hierarchical (e.g., "home.title", "nav.menu.about").
    Frozen to ensure immutability and hashability for caching.

    Attributes:
        path: Full dot-separated key.
    """

    path: str

    def __str__(self) -> str:
        return self.path

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(self.path.split("."))

    @classmethod
    def from_string(cls, key_string: str) -> "TranslationKey":
        """Create TranslationKey from a dot-separated string.

        Args:
            key_string: Dot-separated key (e.g., "home.title").

        Returns:
            TranslationKey instance.

        Raises:
            ValueError: If the key is empty or contains an empty segment.
        """
        if not key_string or any(not part for part in key_string.split(".")):
            raise ValueError(f"Translation key has an empty segment: {key_string!r}")
        return cls(path=key_string)


def resolve_key(tree: Group, key: Union[str, TranslationKey]) -> Optional[str]:
    """Resolve a dot-separated key against a dictionary tree.

    Returns ``None`` for a miss: a missing segment, a step into a leaf,
    a path that ends on a group, or a key with an empty segment.

    Args:
        tree: Root group of the dictionary.
        key: Key string or TranslationKey.

    Returns:
        The leaf string, or None on a miss.
    """
    if not isinstance(key, TranslationKey):
        try:
            key = TranslationKey.from_string(key)
        except ValueError:
            return None

    node: Node = tree
    for segment in key.segments:
        match node:
            case Group():
                child = node.get(segment)
                if child is None:
                    return None
                node = child
            case Leaf():
                return None

    match node:
        case Leaf(text=text):
            return text
        case Group():
            return None


def language_direction(language: Optional[str]) -> str:
    """Return the text direction (``rtl`` or ``ltr``) for a language tag."""
    if not language:
        return "ltr"
    return "rtl" if language.split("-")[0].lower() in RTL_LANGUAGES else "ltr"


class ActivationStatus(str, Enum):
    """Outcome of a language activation."""

    SUCCESS = "success"
    FALLBACK = "fallback"
    FAILED = "failed"
    SUPERSEDED = "superseded"


@dataclass
class ActivationResult:
    """Result returned from ``LanguageSelector.activate``.

    Attributes:
        status: ActivationStatus -- high-level outcome
        requested: Language tag the caller asked for
        language: Tag that became active, or None when nothing was applied
        sequence: Activation sequence number issued for this call
        message: Human-friendly message for logs/troubleshooting
    """

    status: ActivationStatus
    requested: str
    language: Optional[str] = None
    sequence: int = 0
    message: str = "ok"

    @property
    def is_success(self) -> bool:
        """True when a dictionary was applied (directly or via fallback)."""
        return self.status in (ActivationStatus.SUCCESS, ActivationStatus.FALLBACK)

    def __bool__(self) -> bool:
        return self.is_success
