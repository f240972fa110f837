"""
Secure configuration management for ipintel.

Settings come from environment variables. The token is format-checked before
it is handed out, numeric settings are clamped to safe bounds, and the
endpoint must be HTTPS. The client never reads this module on its own;
callers pass a configuration explicitly.
"""

import os
import logging
from typing import Dict, List, Optional

# Set up logging for security events
logger = logging.getLogger(__name__)

ENV_PREFIX = 'IPINTEL_'
TRUE_VALUES = ('1', 'true', 'yes', 'on')
DEBUG_LEVELS = ('basic', 'detailed', 'verbose')

# Extra variables accepted for a service token, after IPINTEL_<SERVICE>_API_KEY
TOKEN_ENV_FALLBACKS: Dict[str, List[str]] = {
    'ipinfo': ['IPINFO_TOKEN', 'IPINFO_API_KEY'],
}

DEFAULT_ENDPOINTS: Dict[str, Dict[str, str]] = {
    'ipinfo': {'primary': 'https://ipinfo.io/'},
}

# (min, max) token length per service
TOKEN_LENGTHS = {
    'ipinfo': (10, 64),
}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES


def _env_number(name: str, default, low, high, cast=float):
    """Read a numeric variable clamped to [low, high]; unparsable values give ``default``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric value for {name}")
        return default
    return max(low, min(high, value))


class SecureConfig:
    """Environment-backed settings for the ipinfo.io client."""

    def get_api_key(self, service: str = 'ipinfo') -> Optional[str]:
        """
        Securely retrieve the API token for a service.

        IPINTEL_<SERVICE>_API_KEY wins when set; a malformed value there is
        rejected outright rather than falling through to the alternatives.

        Args:
            service: Service name (e.g., 'ipinfo')

        Returns:
            Token if available and well-formed, None otherwise
        """
        primary = f"{ENV_PREFIX}{service.upper()}_API_KEY"
        token = os.getenv(primary)

        if token:
            if not self._validate_api_key_format(token, service):
                logger.warning(f"Invalid API key format for service: {service}")
                return None
            logger.info(f"API key loaded for service: {service}")
            return token.strip()

        for name in self._get_alternative_env_names(service):
            token = os.getenv(name)
            if token and self._validate_api_key_format(token, service):
                logger.info(f"API key loaded for service: {service} (via {name})")
                return token.strip()

        logger.debug(f"No API key found for service: {service}")
        return None

    def _validate_api_key_format(self, api_key: str, service: str) -> bool:
        """
        Check that a token looks plausible before it is sent anywhere.

        Args:
            api_key: Candidate token
            service: Service name for service-specific length bounds

        Returns:
            True if the token is well-formed
        """
        if not api_key or not api_key.strip():
            return False

        api_key = api_key.strip()
        if not 8 <= len(api_key) <= 128:
            return False
        if any(char.isspace() for char in api_key):
            return False

        low, high = TOKEN_LENGTHS.get(service.lower(), (8, 128))
        return low <= len(api_key) <= high

    def _get_alternative_env_names(self, service: str) -> List[str]:
        return TOKEN_ENV_FALLBACKS.get(service.lower(), [])

    def get_endpoint_url(self, service: str = 'ipinfo', endpoint_type: str = 'primary') -> Optional[str]:
        """
        Get the base URL for a service, honouring IPINTEL_<SERVICE>_URL.

        Args:
            service: Service name
            endpoint_type: Endpoint kind; only 'primary' is defined

        Returns:
            HTTPS URL if available, None otherwise
        """
        url = DEFAULT_ENDPOINTS.get(service.lower(), {}).get(endpoint_type)
        if url and endpoint_type == 'primary':
            url = os.getenv(f"{ENV_PREFIX}{service.upper()}_URL", url)

        if url and not url.startswith('https://'):
            logger.warning(f"Non-HTTPS endpoint configured for {service}: {url}")
            return None

        return url

    def is_cache_enabled(self) -> bool:
        return _env_flag(f"{ENV_PREFIX}CACHE_ENABLED", True)

    def get_cache_ttl(self, default: int = 3600) -> int:
        """Cache time to live in seconds, between 0 and one week."""
        return _env_number(f"{ENV_PREFIX}CACHE_TTL", default, 0, 604800, cast=int)

    def get_batch_timeout(self, default: float = 5.0) -> float:
        """Batch request timeout in seconds, between 1 and 60."""
        return _env_number(f"{ENV_PREFIX}BATCH_TIMEOUT", default, 1.0, 60.0)

    def is_debug_mode(self) -> bool:
        return _env_flag(f"{ENV_PREFIX}DEBUG", False)

    def get_debug_level(self) -> str:
        """
        Get debug verbosity.

        Returns:
            'off' when debug mode is disabled, otherwise 'basic', 'detailed'
            or 'verbose' (unknown values fall back to 'basic')
        """
        if not self.is_debug_mode():
            return 'off'

        level = os.getenv(f"{ENV_PREFIX}DEBUG_LEVEL", 'basic').lower()
        return level if level in DEBUG_LEVELS else 'basic'


# Global configuration instance
config = SecureConfig()
