"""Tests for langsync.i18n.service module."""

from datetime import date, datetime
from unittest.mock import MagicMock, patch

import pytest

from langsync.dom.synchronizer import SyncState
from langsync.i18n import (
    ActivationStatus,
    InMemoryPreferenceStore,
    LanguageSelector,
)
from langsync.i18n.service import TranslationService
from tests.factories.i18n import RecordingSource, make_session


def _h1(document):
    [h1] = [e for e in document.iter() if e.tag_name == "h1"]
    return h1


@pytest.fixture
def service_factory(page):
    """Build TranslationService instances over the sample page."""

    def _factory(
        available=None,
        failing=(),
        environment_locale=None,
        preferences=None,
        document=page,
        **kwargs,
    ):
        session = make_session(available_languages=available or ["en", "fr", "ar"])
        payloads = {
            "en": {"home": {"title": "Welcome", "greeting": "Hello {name}"}},
            "fr": {"home": {"title": "Bienvenue", "greeting": "Bonjour {name}"}},
            "ar": {"home": {"title": "أهلا"}},
        }
        source = RecordingSource(payloads, failing=failing)
        selector = LanguageSelector(
            session, source, preferences=preferences or InMemoryPreferenceStore()
        )
        return TranslationService(
            session,
            selector,
            document=document,
            environment_locale=environment_locale,
            **kwargs,
        )

    return _factory


class TestTranslationServiceInit:
    """Tests for TranslationService.init()."""

    @pytest.mark.asyncio
    async def test_init_uses_environment_locale(self, service_factory, page):
        service = service_factory(environment_locale="fr-CA")
        result = await service.init()

        assert result.status is ActivationStatus.SUCCESS
        assert service.current_language == "fr"
        assert _h1(page).text_content == "Bienvenue"
        assert page.document_element.get_attribute("lang") == "fr"
        assert service.synchronizer.state is SyncState.OBSERVING

    @pytest.mark.asyncio
    async def test_init_prefers_stored_language(self, service_factory):
        service = service_factory(
            environment_locale="fr-CA", preferences=InMemoryPreferenceStore("ar")
        )
        await service.init()
        assert service.current_language == "ar"

    @pytest.mark.asyncio
    async def test_init_defaults_without_signals(self, service_factory):
        service = service_factory()
        await service.init()
        assert service.current_language == "en"

    @pytest.mark.asyncio
    async def test_init_failure_still_starts_observing(self, service_factory, page):
        """With no dictionary loaded, keys are displayed and observation starts."""
        service = service_factory(failing={"en", "fr", "ar"})
        result = await service.init()

        assert result.status is ActivationStatus.FAILED
        assert service.current_language is None
        assert _h1(page).text_content == "home.title"
        assert service.synchronizer.state is SyncState.OBSERVING

    @pytest.mark.asyncio
    async def test_init_without_document(self, service_factory):
        service = service_factory(document=None)
        await service.init()
        assert service.synchronizer is None
        assert service.translate_page() == 0
        assert service.get("home.title") == "Welcome"


class TestTranslationServiceLanguage:
    """Tests for language switching through the service."""

    @pytest.mark.asyncio
    async def test_set_language_updates_document(self, service_factory, page):
        service = service_factory()
        await service.init()
        await service.set_language("fr")
        assert _h1(page).text_content == "Bienvenue"

    @pytest.mark.asyncio
    async def test_on_language_change_runs_after_document_update(
        self, service_factory, page
    ):
        seen = []

        def callback(language):
            seen.append((language, _h1(page).text_content))

        service = service_factory(on_language_change=callback)
        await service.init()
        await service.set_language("fr")

        assert seen == [("en", "Welcome"), ("fr", "Bienvenue")]

    @pytest.mark.asyncio
    async def test_on_language_change_not_called_on_failure(self, service_factory):
        callback = MagicMock()
        service = service_factory(failing={"fr"}, on_language_change=callback)
        await service.init()
        callback.reset_mock()

        result = await service.set_language("fr")

        assert result.status is ActivationStatus.FALLBACK
        callback.assert_called_once_with("en")

    @pytest.mark.asyncio
    async def test_callback_failure_does_not_break_activation(
        self, service_factory, page
    ):
        callback = MagicMock(side_effect=RuntimeError("listener bug"))
        service = service_factory(on_language_change=callback)
        result = await service.init()
        assert result.is_success
        assert _h1(page).text_content == "Welcome"

    def test_language_queries(self, service_factory):
        service = service_factory()
        assert service.available_languages == ["en", "fr", "ar"]
        assert service.is_language_available("fr")
        assert not service.is_language_available("de")

    @pytest.mark.asyncio
    async def test_get_with_params(self, service_factory):
        service = service_factory()
        await service.init()
        assert service.get("home.greeting", {"name": "Ada"}) == "Hello Ada"
        assert service.get("missing.key") == "missing.key"

    @pytest.mark.asyncio
    async def test_translate_element(self, service_factory, page):
        service = service_factory()
        await service.init()
        element = page.create_element("p", {"translate": "home.title"})
        assert service.translate_element(element) == 1
        assert element.text_content == "Welcome"


class TestTranslationServiceDirection:
    """Tests for text direction helpers."""

    @pytest.mark.asyncio
    async def test_rtl_language(self, service_factory, page):
        service = service_factory()
        await service.init()
        assert service.language_direction() == "ltr"

        await service.set_language("ar")
        service.apply_direction()
        assert service.language_direction() == "rtl"
        assert page.document_element.get_attribute("dir") == "rtl"

    def test_direction_before_init(self, service_factory):
        assert service_factory().language_direction() == "ltr"


class TestTranslationServiceFormatting:
    """Tests for formatting delegation."""

    def test_default_formatter(self, service_factory):
        service = service_factory()
        assert service.format_number(1234567) == "1,234,567"
        assert service.format_number(1234.5, decimals=2) == "1,234.50"
        assert service.format_currency(42, "EUR") == "42.00 EUR"
        assert service.format_date(date(2024, 3, 1)) == "2024-03-01"
        assert (
            service.format_date(datetime(2024, 3, 1, 9, 30), pattern="%d/%m/%Y")
            == "01/03/2024"
        )

    @pytest.mark.asyncio
    async def test_custom_formatter_receives_active_language(self, service_factory):
        formatter = MagicMock()
        formatter.format_number.return_value = "1 234"
        service = service_factory(formatter=formatter)
        await service.init()
        await service.set_language("fr")

        assert service.format_number(1234) == "1 234"
        formatter.format_number.assert_called_once_with("fr", 1234)

    def test_formatting_uses_default_before_activation(self, service_factory):
        formatter = MagicMock()
        service = service_factory(formatter=formatter)
        service.format_currency(5, "CAD", decimals=0)
        formatter.format_currency.assert_called_once_with("en", 5, "CAD", decimals=0)


class TestTranslationServiceDestroy:
    """Tests for TranslationService.destroy()."""

    @pytest.mark.asyncio
    async def test_destroy_stops_observation(self, service_factory, page):
        callback = MagicMock()
        service = service_factory(on_language_change=callback)
        await service.init()
        callback.reset_mock()

        service.destroy()

        assert service.synchronizer.state is SyncState.DISPOSED
        assert page.observer_count == 0
        assert service.session.cache.size == 0

        added = page.body.append_child(page.create_element("p", {"translate": "home.title"}))
        assert added.text_content == ""

        await service.set_language("fr")
        callback.assert_not_called()
        assert _h1(page).text_content == "Welcome"

    @pytest.mark.asyncio
    async def test_destroy_without_document_clears_cache(self, service_factory):
        service = service_factory(document=None)
        await service.init()
        service.get("home.title")
        service.destroy()
        assert service.session.cache.size == 0

    @pytest.mark.asyncio
    async def test_destroy_closes_source(self, service_factory):
        service = service_factory()
        await service.init()
        with patch.object(service.selector.source, "close") as mock_close:
            service.destroy()
        mock_close.assert_called_once()
