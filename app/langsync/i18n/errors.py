"""Exceptions for the i18n system.

Only dictionary retrieval raises. Resolution misses, missing interpolation
parameters and preference-store failures degrade silently (with a log entry)
and never surface as exceptions.
"""


class I18nError(Exception):
    """Base exception for all langsync i18n errors.

    Example:
        try:
            await source.fetch("fr")
        except I18nError as e:
            logger.error("i18n_error", error=str(e))
    """

    pass


class DictionaryRetrievalError(I18nError):
    """Raised when a dictionary source cannot deliver a language's dictionary.

    Covers missing files, transport errors and unreadable payloads.

    Attributes:
        language: Language tag whose dictionary was requested.
    """

    def __init__(self, language: str, message: str):
        self.language = language
        super().__init__(f"Failed to load dictionary {language!r}: {message}")


class DictionaryFormatError(DictionaryRetrievalError):
    """Raised when a payload was retrieved but is not a valid dictionary tree.

    Example:
        >>> build_dictionary(["not", "a", "mapping"], language="en")
        Traceback (most recent call last):
        ...
        DictionaryFormatError: Failed to load dictionary 'en': root must be a mapping
    """

    pass
