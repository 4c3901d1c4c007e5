"""Unit tests for the SettingsStore."""

import pytest

from app.application.services import SettingsStore
from app.application.services.settings_store import (
    DARK_MODE_KEY,
    FONT_FAMILY_KEY,
    FONT_SIZE_KEY,
)
from app.domain.entities import AVAILABLE_FONTS
from app.domain.exceptions import InvalidSettingError
from tests.fakes import InMemoryStorage


def test_defaults_when_nothing_is_stored():
    store = SettingsStore(InMemoryStorage())

    assert store.font_family == '"Fleur De Leah"'
    assert store.font_size == 48
    assert store.dark_mode is True


def test_reads_stored_values():
    storage = InMemoryStorage({
        FONT_FAMILY_KEY: '"Kapakana"',
        FONT_SIZE_KEY: "32",
        DARK_MODE_KEY: "false",
    })

    store = SettingsStore(storage)

    assert store.font_family == '"Kapakana"'
    assert store.font_size == 32
    assert store.dark_mode is False


@pytest.mark.parametrize("raw", ["abc", "0", "-4", ""])
def test_invalid_stored_font_size_falls_back_to_default(raw):
    store = SettingsStore(InMemoryStorage({FONT_SIZE_KEY: raw}))
    assert store.font_size == 48


@pytest.mark.parametrize("raw", ["Comic Sans", '"Comic Sans"'])
def test_unknown_stored_font_family_falls_back_to_default(raw):
    store = SettingsStore(InMemoryStorage({FONT_FAMILY_KEY: raw}))
    assert store.font_family == AVAILABLE_FONTS[0].family


def test_stored_font_name_resolves_to_its_family():
    store = SettingsStore(InMemoryStorage({FONT_FAMILY_KEY: "Ballet"}))
    assert store.font_family == '"Ballet"'


def test_every_mutation_persists():
    storage = InMemoryStorage()
    store = SettingsStore(storage)

    store.set_font_family("Pinyon Script")
    assert storage.get(FONT_FAMILY_KEY) == '"Pinyon Script"'

    store.set_font_size(36)
    assert storage.get(FONT_SIZE_KEY) == "36"

    store.set_dark_mode(False)
    assert storage.get(DARK_MODE_KEY) == "false"


def test_settings_survive_a_new_store():
    storage = InMemoryStorage()
    SettingsStore(storage).update(font_family='"Updock"', font_size=60, dark_mode=False)

    reopened = SettingsStore(storage)

    assert (reopened.font_family, reopened.font_size, reopened.dark_mode) == ('"Updock"', 60, False)


@pytest.mark.parametrize("size", [0, -1, True])
def test_set_font_size_rejects_invalid_values(size):
    storage = InMemoryStorage()
    store = SettingsStore(storage)

    with pytest.raises(InvalidSettingError):
        store.set_font_size(size)

    assert store.font_size == 48
    assert FONT_SIZE_KEY not in storage.data


def test_set_font_family_rejects_unknown_font():
    store = SettingsStore(InMemoryStorage())

    with pytest.raises(InvalidSettingError):
        store.set_font_family("Comic Sans")


def test_update_is_all_or_nothing():
    store = SettingsStore(InMemoryStorage())

    with pytest.raises(InvalidSettingError):
        store.update(font_family="Ballet", font_size=0)

    assert store.font_family == '"Fleur De Leah"'
    assert store.font_size == 48


def test_reset_settings_restores_defaults_and_persists():
    storage = InMemoryStorage()
    store = SettingsStore(storage)
    store.update(font_family="Ballet", font_size=20, dark_mode=False)

    result = store.reset_settings()

    assert result.font_family == '"Fleur De Leah"'
    assert result.font_size == 48
    assert result.dark_mode is True
    assert storage.data == {
        FONT_FAMILY_KEY: '"Fleur De Leah"',
        FONT_SIZE_KEY: "48",
        DARK_MODE_KEY: "true",
    }


def test_css_variables_and_theme_class():
    store = SettingsStore(InMemoryStorage())
    store.update(font_family="Mea Culpa", font_size=52, dark_mode=True)

    assert store.css_variables() == {"--font-family": '"Mea Culpa"', "--font-size": "52px"}
    assert store.theme_class() == "dark-mode"

    store.set_dark_mode(False)
    assert store.theme_class() == ""


def test_catalog_has_ten_fonts():
    store = SettingsStore(InMemoryStorage())
    assert store.available_fonts == AVAILABLE_FONTS
    assert len(store.available_fonts) == 10


def test_write_failures_propagate():
    store = SettingsStore(InMemoryStorage(fail_writes=True))

    with pytest.raises(OSError):
        store.set_dark_mode(False)


def test_subscribers_hear_about_changes():
    store = SettingsStore(InMemoryStorage())
    changes: list[str] = []
    store.subscribe(changes.append)

    store.set_font_size(30)
    store.reset_settings()

    assert changes == ["font_size", "settings"]
