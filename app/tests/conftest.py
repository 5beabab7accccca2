"""Shared fixtures for langsync tests."""

import pytest

from langsync.dom.document import Document
from tests.factories.i18n import RecordingSource, make_payloads, make_session


@pytest.fixture
def payloads():
    """Fresh en/fr dictionary payloads."""
    return make_payloads()


@pytest.fixture
def recording_source(payloads):
    """RecordingSource serving the sample en/fr payloads."""
    return RecordingSource(payloads)


@pytest.fixture
def session():
    """TranslationSession with nothing loaded yet."""
    return make_session()


@pytest.fixture
def loaded_session():
    """TranslationSession with the English sample dictionary active."""
    return make_session(loaded="en")


@pytest.fixture
def page():
    """Small document with every marker kind."""
    return Document.from_html(
        """
        <html>
          <head><title translate="home.title">Title</title></head>
          <body>
            <h1 translate="home.title">Title</h1>
            <nav>
              <a data-translate="nav.home">nav.home</a>
              <a data-translate="nav.about">nav.about</a>
            </nav>
            <input type="email" translate="form.email" translate-placeholder="form.search">
            <textarea translate="form.help"></textarea>
            <button translate-title="form.help" translate-aria="form.close">x</button>
          </body>
        </html>
        """
    )
