import dataclasses

import pytest

from aic.exceptions import ConfigError
from aic.locales import ENGLISH, KOREAN, LOCALES, get_locale


def test_get_locale_by_code():
    assert get_locale("en") is ENGLISH
    assert get_locale("ko") is KOREAN


def test_unknown_locale_is_config_error():
    with pytest.raises(ConfigError):
        get_locale("fr")


@pytest.mark.parametrize("locale", list(LOCALES.values()))
def test_every_string_is_filled(locale):
    for field in dataclasses.fields(locale):
        assert getattr(locale, field.name), field.name


@pytest.mark.parametrize("locale", list(LOCALES.values()))
def test_placeholders_format(locale):
    assert "ahead" in locale.blocked.format(reason="ahead")
    assert "gemini" in locale.err_not_installed.format(command="gemini")
    assert "gemini" in locale.err_not_authenticated.format(command="gemini")
