"""Dictionary source interface and implementations.

Defines the contract for retrieving a language's dictionary and provides
file (JSON/YAML), HTTP and in-memory sources.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import requests
import yaml

from langsync.core.logging import get_module_logger
from langsync.i18n.errors import DictionaryFormatError, DictionaryRetrievalError
from langsync.i18n.models import Group, build_dictionary

logger = get_module_logger()


class DictionarySource(ABC):
    """Abstract base for dictionary sources.

    Implementations must define how to retrieve and parse the dictionary of a
    language. Retrieval may suspend; callers await it.
    """

    @abstractmethod
    async def fetch(self, language: str) -> Group:
        """Retrieve the dictionary for a language.

        Args:
            language: Language tag to load.

        Returns:
            Root Group of the language's dictionary.

        Raises:
            DictionaryRetrievalError: If the dictionary is unreachable or its
                payload is malformed.
        """
        pass

    def close(self) -> None:
        """Release held resources. Nothing to release by default."""


class FileDictionarySource(DictionarySource):
    """Source reading ``<language>.json``, ``.yml`` or ``.yaml`` files.

    The first existing file wins, in that suffix order. File reads run in a
    worker thread so the event loop is never blocked.

    Attributes:
        directory: Path to the directory containing the dictionary files.
    """

    SUFFIXES = (".json", ".yml", ".yaml")

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        logger.info("initialized_file_source", directory=str(self.directory))

    async def fetch(self, language: str) -> Group:
        return await asyncio.to_thread(self._load, language)

    def _find_file(self, language: str) -> Optional[Path]:
        for suffix in self.SUFFIXES:
            candidate = self.directory / f"{language}{suffix}"
            if candidate.is_file():
                return candidate
        return None

    def _load(self, language: str) -> Group:
        path = self._find_file(language)
        if path is None:
            raise DictionaryRetrievalError(
                language, f"no dictionary file found in {self.directory}"
            )

        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
            logger.error("dictionary_parse_error", file=str(path), error=str(e))
            raise DictionaryFormatError(language, f"failed to parse {path}: {e}") from e
        except OSError as e:
            raise DictionaryRetrievalError(language, str(e)) from e

        dictionary = build_dictionary(data, language=language)
        logger.info(
            "loaded_dictionary",
            language=language,
            file=str(path),
            top_level_keys=len(dictionary),
        )
        return dictionary


class HTTPDictionarySource(DictionarySource):
    """Source fetching ``<base_url><language>.json`` over HTTP.

    Uses a pooled ``requests`` session; each request runs in a worker thread.

    Attributes:
        base_url: URL prefix the language file name is appended to.
        timeout: Transport timeout in seconds.
        session: Requests session with connection pooling.
    """

    def __init__(self, base_url: str, timeout: int = 10) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        logger.info(
            "initialized_http_source", base_url=self.base_url, timeout=timeout
        )

    def url_for(self, language: str) -> str:
        return f"{self.base_url}{language}.json"

    async def fetch(self, language: str) -> Group:
        return await asyncio.to_thread(self._load, language)

    def _load(self, language: str) -> Group:
        url = self.url_for(language)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("dictionary_request_failed", url=url, error=str(e))
            raise DictionaryRetrievalError(language, str(e)) from e

        if not response.ok:
            raise DictionaryRetrievalError(
                language, f"HTTP {response.status_code}: {response.reason}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise DictionaryFormatError(language, f"invalid JSON from {url}") from e

        dictionary = build_dictionary(data, language=language)
        logger.info("loaded_dictionary", language=language, url=url)
        return dictionary

    def close(self) -> None:
        self.session.close()


class StaticDictionarySource(DictionarySource):
    """In-memory source backed by a mapping of language tag to raw payload.

    Useful for embedding dictionaries in code and for tests.
    """

    def __init__(self, dictionaries: Mapping[str, Any]):
        self._dictionaries: Dict[str, Any] = dict(dictionaries)

    @property
    def languages(self) -> list[str]:
        return list(self._dictionaries.keys())

    async def fetch(self, language: str) -> Group:
        if language not in self._dictionaries:
            raise DictionaryRetrievalError(language, "language not registered")
        return build_dictionary(self._dictionaries[language], language=language)


def create_dictionary_source(location: str, timeout: int = 10) -> DictionarySource:
    """Create the source matching a dictionary location.

    Args:
        location: ``http(s)://`` base URL or a filesystem directory.
        timeout: Transport timeout for HTTP sources.

    Returns:
        HTTPDictionarySource for URLs, FileDictionarySource otherwise.
    """
    if location.startswith(("http://", "https://")):
        return HTTPDictionarySource(location, timeout=timeout)
    return FileDictionarySource(Path(location))
