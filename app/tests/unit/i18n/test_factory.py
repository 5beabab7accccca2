"""Tests for langsync.i18n.factory module."""

from unittest.mock import patch

import pytest

from langsync import Document, TranslationService, create_translation_service
from langsync.core.config import LangSyncSettings
from langsync.i18n import (
    FileDictionarySource,
    InMemoryPreferenceStore,
    JSONFilePreferenceStore,
    StaticDictionarySource,
)
from langsync.i18n.factory import create_preference_store


def make_settings(**overrides):
    """Settings isolated from the process environment and .env files."""
    values = {"DETECT_ENVIRONMENT": False}
    values.update(overrides)
    return LangSyncSettings(_env_file=None, **values)


class TestCreatePreferenceStore:
    def test_in_memory_by_default(self):
        assert isinstance(create_preference_store(make_settings()), InMemoryPreferenceStore)

    def test_json_file_when_configured(self, tmp_path):
        settings = make_settings(
            PREFERENCES_FILE=str(tmp_path / "prefs.json"), PERSIST_KEY="lang"
        )
        store = create_preference_store(settings)
        assert isinstance(store, JSONFilePreferenceStore)
        assert store.key == "lang"


class TestCreateTranslationService:
    """Tests for create_translation_service()."""

    @pytest.mark.asyncio
    async def test_auto_init_translates_document(self, page, payloads):
        service = await create_translation_service(
            settings=make_settings(),
            document=page,
            source=StaticDictionarySource(payloads),
        )
        assert isinstance(service, TranslationService)
        assert service.current_language == "en"
        assert page.query_all("data-translate")[0].text_content == "Home"

    @pytest.mark.asyncio
    async def test_lazy_creation(self, payloads):
        service = await create_translation_service(
            settings=make_settings(AUTO_INIT=False),
            source=StaticDictionarySource(payloads),
        )
        assert service.current_language is None

        await service.set_language("fr")
        assert service.get("nav.home") == "Accueil"

    @pytest.mark.asyncio
    async def test_auto_init_argument_overrides_settings(self, payloads):
        service = await create_translation_service(
            settings=make_settings(AUTO_INIT=True),
            source=StaticDictionarySource(payloads),
            auto_init=False,
        )
        assert service.current_language is None

    @pytest.mark.asyncio
    async def test_explicit_environment_locale(self, payloads):
        service = await create_translation_service(
            settings=make_settings(DETECT_ENVIRONMENT=True),
            source=StaticDictionarySource(payloads),
            environment_locale="fr_CA.UTF-8",
        )
        assert service.current_language == "fr"

    @pytest.mark.asyncio
    async def test_environment_locale_detected(self, payloads):
        with patch(
            "langsync.i18n.factory.detect_environment_locale", return_value="fr_FR"
        ) as mock_detect:
            service = await create_translation_service(
                settings=make_settings(DETECT_ENVIRONMENT=True),
                source=StaticDictionarySource(payloads),
            )
        mock_detect.assert_called_once()
        assert service.current_language == "fr"

    @pytest.mark.asyncio
    async def test_environment_detection_disabled(self, payloads):
        with patch("langsync.i18n.factory.detect_environment_locale") as mock_detect:
            service = await create_translation_service(
                settings=make_settings(),
                source=StaticDictionarySource(payloads),
            )
        mock_detect.assert_not_called()
        assert service.current_language == "en"

    @pytest.mark.asyncio
    async def test_source_derived_from_language_path(self, temp_dictionary_dir):
        service = await create_translation_service(
            settings=make_settings(LANGUAGE_PATH=str(temp_dictionary_dir)),
        )
        assert isinstance(service.selector.source, FileDictionarySource)
        assert service.get("home.title") == "Welcome"

    @pytest.mark.asyncio
    async def test_custom_markers_from_settings(self, payloads):
        document = Document.from_html('<p i18n="nav.about"></p><p translate="nav.home"></p>')
        await create_translation_service(
            settings=make_settings(ATTRIBUTES=["i18n"]),
            document=document,
            source=StaticDictionarySource(payloads),
        )
        first, second = document.body.children
        assert first.text_content == "About"
        assert second.text_content == ""

    @pytest.mark.asyncio
    async def test_stored_preference_applied(self, tmp_path, payloads):
        prefs = tmp_path / "prefs.json"
        settings = make_settings(PREFERENCES_FILE=str(prefs))

        first = await create_translation_service(
            settings=settings, source=StaticDictionarySource(payloads)
        )
        await first.set_language("fr")

        second = await create_translation_service(
            settings=settings, source=StaticDictionarySource(payloads)
        )
        assert second.current_language == "fr"

    @pytest.mark.asyncio
    async def test_invalid_settings_rejected(self, payloads):
        with pytest.raises(ValueError):
            await create_translation_service(
                settings=make_settings(DEFAULT_LANGUAGE="de"),
                source=StaticDictionarySource(payloads),
            )


class TestCreateTranslationServiceLogging:
    """Tests for logging configuration through create_translation_service()."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides, expected_level",
        [
            ({"DEBUG": True}, "DEBUG"),
            ({"DEBUG": False, "LOG_LEVEL": "WARNING"}, "WARNING"),
        ],
    )
    async def test_given_settings_configure_log_level(
        self, payloads, overrides, expected_level
    ):
        with patch("langsync.i18n.factory.configure_logging") as mock_configure:
            await create_translation_service(
                settings=make_settings(AUTO_INIT=False, **overrides),
                source=StaticDictionarySource(payloads),
            )
        mock_configure.assert_called_once_with(
            log_level=expected_level, is_production=False
        )

    @pytest.mark.asyncio
    async def test_default_settings_keep_import_time_logging(self, payloads):
        with patch("langsync.i18n.factory.configure_logging") as mock_configure:
            await create_translation_service(
                source=StaticDictionarySource(payloads), auto_init=False
            )
        mock_configure.assert_not_called()
