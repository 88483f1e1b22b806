"""Message translation backed by Babel catalogs."""

import logging
from typing import Any

from babel.support import NullTranslations, Translations

LOGGER = logging.getLogger(__name__)


class Translator:
    """Translate messages for a single locale.

    Catalogs are compiled gettext ``.mo`` files laid out as
    ``<directory>/<locale>/LC_MESSAGES/<domain>.mo``. The locale string is
    kept verbatim; hyphens are only turned into underscores when looking up
    the catalog. Without a directory, or without a catalog for the locale,
    messages are returned untranslated.

    Attributes:
        locale: The locale this translator was created for.
        directory: Directory searched for catalogs.
        domain: Catalog domain.
    """

    def __init__(self, locale: str, directory: str | None = None, domain: str = "messages"):
        self.locale = locale
        self.directory = directory
        self.domain = domain
        self.translations = self._load()

    def _load(self) -> NullTranslations:
        if self.directory is None:
            return NullTranslations()

        translations = Translations.load(
            self.directory,
            locales=[self.locale.replace("-", "_")],
            domain=self.domain,
        )
        if not isinstance(translations, Translations):
            LOGGER.debug("No %s catalog for locale %s in %s", self.domain, self.locale, self.directory)
        return translations

    def gettext(self, message: str) -> str:
        return self.translations.gettext(message)

    def ngettext(self, singular: str, plural: str, n: int) -> str:
        return self.translations.ngettext(singular, plural, n)

    def translate(self, message: str, **params: Any) -> str:
        """Translate ``message`` and substitute ``{name}`` placeholders.

        Example:
            >>> translator.translate("Hello {name}", name="Ann")
            'Hello Ann'
        """
        translated = self.gettext(message)
        if params:
            return translated.format(**params)
        return translated
