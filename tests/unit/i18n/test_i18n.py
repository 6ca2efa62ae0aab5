"""Tests for translation helpers."""

from __future__ import annotations

import pytest

import ccdeluge.i18n as i18n

pytestmark = [pytest.mark.unit]


@pytest.fixture(autouse=True)
def _reset_translation(monkeypatch):
    monkeypatch.setattr(i18n, "_translation", None)


def test_default_locale_untranslated(monkeypatch):
    monkeypatch.setenv("CCDELUGE_LOCALE", "en")
    assert i18n.get_locale() == "en"
    assert i18n._("Calling %s with %d argument(s)") == "Calling %s with %d argument(s)"


def test_unavailable_locale_falls_back(monkeypatch):
    monkeypatch.setenv("CCDELUGE_LOCALE", "xx")
    i18n.set_locale("xx_YY")
    assert i18n.get_locale() == "en"


def test_set_locale_rejects_empty():
    with pytest.raises(ValueError):
        i18n.set_locale("")
