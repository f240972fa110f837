"""Typed views over nested parts of an ipinfo.io response."""

from .base import InfoView
from .location import Continent, CountryCurrency, CountryFlag
from .network import ASN, Company, Domains
from .privacy import Abuse, Privacy

__all__ = [
    'InfoView',
    'ASN',
    'Company',
    'Domains',
    'Privacy',
    'Abuse',
    'Continent',
    'CountryCurrency',
    'CountryFlag',
]
