"""langsync configuration settings."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LangSyncSettings(BaseSettings):
    """Static configuration for a translation service instance.

    Every value has a default, so an empty environment yields a working
    English/French setup reading dictionaries from ``./lang/``.

    Environment Variables:
        LANGSYNC_LANGUAGE_PATH: Directory or base URL holding ``<tag>.json`` files
        LANGSYNC_DEFAULT_LANGUAGE: Language used when nothing else matches
        LANGSYNC_FALLBACK_LANGUAGE: Language retried once when a load fails
        LANGSYNC_AVAILABLE_LANGUAGES: JSON list of selectable tags
        LANGSYNC_PERSIST_KEY: Key under which the chosen language is stored
        LANGSYNC_PREFERENCES_FILE: JSON file for the preference store (optional)
        LANGSYNC_DETECT_ENVIRONMENT: Consult the host locale on first selection
        LANGSYNC_ATTRIBUTES: JSON list of content marker attributes
        LANGSYNC_PLACEHOLDER_ATTRIBUTE: Marker for ``placeholder`` targets
        LANGSYNC_TITLE_ATTRIBUTE: Marker for ``title`` targets
        LANGSYNC_AUTO_INIT: Run ``init()`` from the factory
        LANGSYNC_DEBUG: Emit diagnostic (debug level) logs

    Example:
        ```python
        from langsync.core.config import LangSyncSettings

        settings = LangSyncSettings(AVAILABLE_LANGUAGES=["en", "fr", "ar"])
        settings.validate_configuration()
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="LANGSYNC_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    LANGUAGE_PATH: str = Field(
        default="./lang/",
        description="Directory or base URL of the dictionary files",
    )
    DEFAULT_LANGUAGE: str = "en"
    FALLBACK_LANGUAGE: str = "en"
    AVAILABLE_LANGUAGES: list[str] = Field(default_factory=lambda: ["en", "fr"])

    PERSIST_KEY: str = "langsync_language"
    PREFERENCES_FILE: Optional[str] = Field(
        default=None,
        description="JSON file backing the preference store; in-memory when unset",
    )
    DETECT_ENVIRONMENT: bool = True

    ATTRIBUTES: list[str] = Field(
        default_factory=lambda: ["translate", "data-translate"]
    )
    PLACEHOLDER_ATTRIBUTE: str = "translate-placeholder"
    TITLE_ATTRIBUTE: str = "translate-title"

    AUTO_INIT: bool = True
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    HTTP_TIMEOUT: int = Field(
        default=10,
        description="Transport timeout (seconds) for HTTP dictionary sources",
    )
    SYNC_QUEUE_LIMIT: int = Field(
        default=1000,
        description="Pending subtrees per mutation batch before a full pass is used",
    )

    @property
    def is_production(self) -> bool:
        """Check if the library runs in a production environment."""
        return self.ENVIRONMENT.lower() == "production"

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the DEBUG toggle."""
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL

    def validate_configuration(self) -> None:
        """Validate cross-field constraints.

        Raises:
            ValueError: If the default or fallback language is not available,
                or if no content marker attribute is configured.
        """
        if not self.AVAILABLE_LANGUAGES:
            raise ValueError("AVAILABLE_LANGUAGES must contain at least one tag")

        if self.DEFAULT_LANGUAGE not in self.AVAILABLE_LANGUAGES:
            raise ValueError(
                f"DEFAULT_LANGUAGE {self.DEFAULT_LANGUAGE!r} is not in "
                f"AVAILABLE_LANGUAGES {self.AVAILABLE_LANGUAGES}"
            )

        if self.FALLBACK_LANGUAGE not in self.AVAILABLE_LANGUAGES:
            raise ValueError(
                f"FALLBACK_LANGUAGE {self.FALLBACK_LANGUAGE!r} is not in "
                f"AVAILABLE_LANGUAGES {self.AVAILABLE_LANGUAGES}"
            )

        if not self.ATTRIBUTES:
            raise ValueError("ATTRIBUTES must contain at least one marker attribute")


settings = LangSyncSettings()
