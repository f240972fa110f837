"""
Country supplement views built from the static reference table.
"""

from typing import Optional

from .base import InfoView


class Continent(InfoView):

    @property
    def code(self) -> Optional[str]:
        return self._get_str('code')

    @property
    def name(self) -> Optional[str]:
        return self._get_str('name')


class CountryCurrency(InfoView):

    @property
    def code(self) -> Optional[str]:
        """ISO 4217 currency code."""
        return self._get_str('code')

    @property
    def symbol(self) -> Optional[str]:
        return self._get_str('symbol')


class CountryFlag(InfoView):

    @property
    def emoji(self) -> Optional[str]:
        return self._get_str('emoji')

    @property
    def unicode(self) -> Optional[str]:
        """Code points of the flag emoji, e.g. ``U+1F1FA U+1F1F8``."""
        return self._get_str('unicode')
