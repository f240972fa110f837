"""
ipintel - client for the ipinfo.io IP intelligence API.

This package provides a cached, validated client for ipinfo.io lookups and a
typed response model exposing location, network, privacy and abuse data
according to the fields the API plan returned.
"""

from .client import IPInfoClient
from .errors import ApiError, DecodeError, InvalidIPError, InvalidIPsError, IPInfoError
from .response import Plan, Response

__version__ = "0.1.0"
__author__ = "ipintel"
__license__ = "Apache License 2.0"

__all__ = [
    'IPInfoClient',
    'Response',
    'Plan',
    'IPInfoError',
    'InvalidIPError',
    'InvalidIPsError',
    'ApiError',
    'DecodeError',
]
