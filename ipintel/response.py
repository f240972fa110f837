"""
Response model for ipinfo.io lookups.

A Response wraps one decoded payload and exposes its fields through typed
accessors. Which optional sections are present depends on the plan of the
token that fetched it; the plan tier is inferred from those sections rather
than from the account itself.
"""

import copy
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from . import locations
from .info import (
    ASN, Abuse, Company, Continent, CountryCurrency, CountryFlag, Domains,
    InfoView, Privacy,
)


class Plan(IntEnum):
    """Ordinal plan tiers, lowest first."""
    FREE = 0
    BASIC = 1
    BUSINESS = 2
    PREMIUM = 3

    @property
    def label(self) -> str:
        return self.name.title()

    def __str__(self):
        return self.label


# Checked in order; the first rule with a present key decides the tier
PLAN_RULES: Tuple[Tuple[Plan, Tuple[str, ...]], ...] = (
    (Plan.PREMIUM, ('domains',)),
    (Plan.BUSINESS, ('privacy', 'abuse', 'company')),
    (Plan.BASIC, ('asn',)),
)

FEATURE_PLANS: Dict[str, Plan] = {
    'asn': Plan.BASIC,
    'privacy': Plan.BUSINESS,
    'abuse': Plan.BUSINESS,
    'company': Plan.BUSINESS,
    'domains': Plan.PREMIUM,
}


def classify_plan(data: Mapping[str, Any]) -> Plan:
    """
    Infer the plan tier from the sections present in a payload.

    Args:
        data: Raw API payload

    Returns:
        Highest tier whose sections appear in the payload
    """
    for plan, keys in PLAN_RULES:
        if any(data.get(key) is not None for key in keys):
            return plan
    return Plan.FREE


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class Response:
    """Typed, read-only view over an ipinfo.io payload."""

    def __init__(self, data: Mapping[str, Any]):
        """
        Initialize the response.

        Args:
            data: Decoded payload from the API or the cache
        """
        self._data: Dict[str, Any] = dict(data)

    def get_all(self) -> Dict[str, Any]:
        """Return a copy of the raw payload."""
        return copy.deepcopy(self._data)

    # Plan & feature detection

    def get_plan(self) -> Plan:
        """Return the plan tier this payload was produced under."""
        return classify_plan(self._data)

    def has_feature(self, feature: str) -> bool:
        """
        Check if the payload's plan tier includes a feature.

        Args:
            feature: One of 'asn', 'privacy', 'abuse', 'company', 'domains'

        Returns:
            True if the feature is available; False for unknown names
        """
        required = FEATURE_PLANS.get(feature)
        if required is None:
            return False
        return self.get_plan() >= required

    # Basic information

    @property
    def ip(self) -> Optional[str]:
        return self._get_str('ip')

    @property
    def hostname(self) -> Optional[str]:
        return self._get_str('hostname')

    @property
    def is_anycast(self) -> bool:
        return bool(self._data.get('anycast', False))

    @property
    def is_bogon(self) -> bool:
        """True if the API flagged the address as a bogon."""
        return bool(self._data.get('bogon', False))

    # Location

    @property
    def city(self) -> Optional[str]:
        return self._get_str('city')

    @property
    def region(self) -> Optional[str]:
        return self._get_str('region')

    @property
    def country(self) -> Optional[str]:
        """ISO 3166-1 alpha-2 country code."""
        return self._get_str('country')

    @property
    def postal(self) -> Optional[str]:
        return self._get_str('postal')

    @property
    def timezone(self) -> Optional[str]:
        return self._get_str('timezone')

    @property
    def coordinates(self) -> Optional[Dict[str, float]]:
        """
        Latitude and longitude of the address.

        Explicit ``latitude``/``longitude`` fields win; otherwise the combined
        ``loc`` string is split. Unparseable components become 0.0.
        """
        latitude = self._data.get('latitude')
        longitude = self._data.get('longitude')
        if latitude is not None and longitude is not None:
            return {'latitude': _to_float(latitude), 'longitude': _to_float(longitude)}

        loc = self._data.get('loc')
        if loc is None:
            return None

        parts = str(loc).split(',')
        parts += [None] * (2 - len(parts))
        return {'latitude': _to_float(parts[0]), 'longitude': _to_float(parts[1])}

    @property
    def latitude(self) -> Optional[float]:
        coordinates = self.coordinates
        return coordinates['latitude'] if coordinates else None

    @property
    def longitude(self) -> Optional[float]:
        coordinates = self.coordinates
        return coordinates['longitude'] if coordinates else None

    # Country supplements from the static reference table

    @property
    def country_name(self) -> Optional[str]:
        return locations.get_country_name(self.country)

    @property
    def country_flag(self) -> Optional[CountryFlag]:
        flag = locations.get_flag(self.country)
        return CountryFlag(flag) if flag else None

    @property
    def country_currency(self) -> Optional[CountryCurrency]:
        currency = locations.get_currency(self.country)
        return CountryCurrency(currency) if currency else None

    @property
    def continent(self) -> Optional[Continent]:
        continent = locations.get_continent(self.country)
        return Continent(continent) if continent else None

    @property
    def is_eu(self) -> bool:
        return locations.is_eu(self.country)

    # Organization

    @property
    def org(self) -> Optional[str]:
        """Organization string, e.g. ``AS15169 Google LLC``."""
        return self._get_str('org')

    # Basic plan and above

    @property
    def asn(self) -> Optional[ASN]:
        return self._view('asn', ASN)

    # Business plan and above

    @property
    def company(self) -> Optional[Company]:
        return self._view('company', Company)

    @property
    def privacy(self) -> Optional[Privacy]:
        return self._view('privacy', Privacy)

    @property
    def abuse(self) -> Optional[Abuse]:
        return self._view('abuse', Abuse)

    # Premium plan

    @property
    def domains(self) -> Optional[Domains]:
        return self._view('domains', Domains)

    def to_dict(self) -> Dict[str, Any]:
        """
        Flatten the response into a summary dictionary.

        Returns:
            Mapping of the basic fields, country supplements and the sections
            available under the detected plan
        """
        flag = self.country_flag
        currency = self.country_currency
        continent = self.continent
        summary = {
            'ip': self.ip,
            'hostname': self.hostname,
            'plan': self.get_plan().label,
            'anycast': self.is_anycast,
            'city': self.city,
            'region': self.region,
            'country': self.country,
            'country_name': self.country_name,
            'country_flag': flag.emoji if flag else None,
            'currency': currency.code if currency else None,
            'continent': continent.name if continent else None,
            'is_eu': self.is_eu,
            'postal': self.postal,
            'timezone': self.timezone,
            'coordinates': self.coordinates,
            'org': self.org,
        }
        for section in ('asn', 'company', 'privacy', 'abuse', 'domains'):
            view = getattr(self, section)
            if view is not None:
                summary[section] = view.to_dict()

        return summary

    def _get_str(self, key: str) -> Optional[str]:
        value = self._data.get(key)
        return None if value is None else str(value)

    def _view(self, key: str, view_class: Type[InfoView]) -> Optional[InfoView]:
        value = self._data.get(key)
        if not isinstance(value, Mapping):
            return None
        return view_class(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Response):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"Response(ip={self.ip!r}, plan={self.get_plan().label!r})"
