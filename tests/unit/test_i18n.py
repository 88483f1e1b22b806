"""Tests for the Babel-backed translator."""

import logging

import pytest
from babel.messages.catalog import Catalog
from babel.messages.mofile import write_mo
from babel.support import Translations

from flywheel.i18n import Translator


@pytest.fixture
def catalog_dir(tmp_path):
    catalog = Catalog(locale="de_DE", domain="messages")
    catalog.add("Hello {name}", "Hallo {name}")
    catalog.add(("{n} file", "{n} files"), ("{n} Datei", "{n} Dateien"))
    target = tmp_path / "de_DE" / "LC_MESSAGES"
    target.mkdir(parents=True)
    with open(target / "messages.mo", "wb") as f:
        write_mo(f, catalog)
    return tmp_path


def test_without_directory_messages_pass_through():
    translator = Translator("en-Us")

    assert translator.gettext("Hello") == "Hello"
    assert translator.ngettext("file", "files", 2) == "files"


def test_translate_substitutes_parameters():
    assert Translator("en-Us").translate("Hello {name}", name="Ann") == "Hello Ann"


def test_translate_without_parameters_keeps_braces():
    assert Translator("en-Us").translate("{literal}") == "{literal}"


def test_catalog_is_loaded_for_hyphenated_locale(catalog_dir):
    translator = Translator("de-DE", directory=str(catalog_dir))

    assert translator.locale == "de-DE"
    assert isinstance(translator.translations, Translations)
    assert translator.translate("Hello {name}", name="Ann") == "Hallo Ann"
    assert translator.ngettext("{n} file", "{n} files", 3).format(n=3) == "3 Dateien"


def test_missing_catalog_falls_back_to_source_messages(catalog_dir, caplog):
    with caplog.at_level(logging.DEBUG, logger="flywheel.i18n"):
        translator = Translator("fr-FR", directory=str(catalog_dir))

    assert translator.gettext("Hello {name}") == "Hello {name}"
    assert "No messages catalog for locale fr-FR" in caplog.text


def test_other_domains_are_looked_up(catalog_dir):
    translator = Translator("de-DE", directory=str(catalog_dir), domain="errors")

    assert translator.gettext("Hello {name}") == "Hello {name}"
