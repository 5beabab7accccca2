"""Formatting service interface.

Locale-aware formatting of numbers, dates and amounts is delegated to a
formatter given the active language tag. ``BasicFormatter`` is a
locale-agnostic default; plug in a real locale library by implementing the
``Formatter`` protocol.
"""

from datetime import date, datetime
from typing import Any, Protocol, Union, runtime_checkable

Number = Union[int, float]


@runtime_checkable
class Formatter(Protocol):
    """Protocol for formatting services used by TranslationService."""

    def format_number(self, language: str, number: Number, **options: Any) -> str:
        ...

    def format_date(
        self, language: str, value: Union[date, datetime], **options: Any
    ) -> str:
        ...

    def format_currency(
        self, language: str, amount: Number, currency: str = "USD", **options: Any
    ) -> str:
        ...


class BasicFormatter:
    """Locale-agnostic formatter.

    Options:
        format_number: ``decimals`` (fixed number of decimals)
        format_date: ``pattern`` (strftime pattern, default ISO 8601)
        format_currency: ``decimals`` (default 2)
    """

    def format_number(self, language: str, number: Number, **options: Any) -> str:
        decimals = options.get("decimals")
        if decimals is None:
            return f"{number:,}"
        return f"{number:,.{int(decimals)}f}"

    def format_date(
        self, language: str, value: Union[date, datetime], **options: Any
    ) -> str:
        pattern = options.get("pattern")
        return value.strftime(pattern) if pattern else value.isoformat()

    def format_currency(
        self, language: str, amount: Number, currency: str = "USD", **options: Any
    ) -> str:
        decimals = int(options.get("decimals", 2))
        return f"{amount:,.{decimals}f} {currency}"
