"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    RecordingSource,
    make_dictionary,
    make_payloads,
    make_session,
)

__all__ = [
    "RecordingSource",
    "make_dictionary",
    "make_payloads",
    "make_session",
]
