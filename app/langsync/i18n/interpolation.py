"""Placeholder interpolation for translated strings.

Replaces ``{name}`` tokens with values from a parameter map. Tokens whose
name is absent from the map are kept verbatim so missing parameters stay
visible in the rendered text.
"""

import json
import re
from typing import Any, Mapping, Optional

from langsync.core.logging import get_module_logger

logger = get_module_logger()

PLACEHOLDER_PATTERN = re.compile(r"\{(\w+)\}")


def interpolate(text: str, params: Optional[Mapping[str, Any]]) -> str:
    """Perform placeholder interpolation in a message string.

    Single pass: substituted values are never scanned for placeholders.

    Args:
        text: Message with ``{name}`` placeholders.
        params: Mapping of placeholder name to value.

    Returns:
        Message with known placeholders replaced.

    Example:
        >>> interpolate("Hello {name}", {"name": "John"})
        'Hello John'
        >>> interpolate("Hi {missing}", {})
        'Hi {missing}'
    """
    if not params:
        return text

    def _substitute(match: re.Match) -> str:
        name = match.group(1)
        if name in params:
            return str(params[name])
        logger.debug(
            "missing_interpolation_variable",
            variable=name,
            available_variables=list(params.keys()),
        )
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_substitute, text)


def serialize_params(params: Optional[Mapping[str, Any]]) -> str:
    """Stable serialization of a parameter map for use in cache keys.

    Key order does not matter; values that JSON cannot represent are
    serialized through ``str()``.
    """
    if not params:
        return ""
    return json.dumps(dict(params), sort_keys=True, default=str, ensure_ascii=False)
