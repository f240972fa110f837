"""
ipinfo.io API client.

The client validates addresses before any request, serves repeat lookups from
a TTL cache, and turns every remote or decoding failure into a typed
exception. Batch lookups are split into chunks sent one after another; the
first failing chunk aborts the whole call.
"""

import logging
import time
import requests
from typing import Any, Dict, Iterable, List, Optional

from .cache import BaseCache, MemoryCache, make_cache_key, token_scope_prefix
from .config import SecureConfig
from .debug import debug_api_method, debug_logger
from .errors import ApiError, DecodeError, InvalidIPError, InvalidIPsError
from .response import Response
from .security import security
from .validator import validator

logger = logging.getLogger(__name__)

FIELD_TRIM_CHARS = "\" \t\n\r\0\x0b"


class IPInfoClient:
    """Client for the ipinfo.io lookup and batch endpoints."""

    API_BASE = 'https://ipinfo.io/'
    BATCH_MAX_SIZE = 1000
    BATCH_TIMEOUT = 5
    REQUEST_TIMEOUT = 15
    USER_AGENT = 'ipintel/0.1'

    def __init__(self, token: str, enable_cache: bool = True, cache_expiration: int = 3600,
                 cache: Optional[BaseCache] = None, base_url: Optional[str] = None):
        """
        Initialize the client.

        Args:
            token: ipinfo.io API token
            enable_cache: Whether to read and write the response cache
            cache_expiration: Cache time to live in seconds
            cache: Cache store; an in-memory store is created when omitted
            base_url: API base URL, defaults to API_BASE
        """
        self.name = "IPinfo"
        self.token = token
        self.enable_cache = enable_cache
        self.cache_expiration = cache_expiration
        self.cache = cache if cache is not None else MemoryCache()
        self.base_url = (base_url or self.API_BASE).rstrip('/') + '/'

    @classmethod
    def from_config(cls, config: SecureConfig, cache: Optional[BaseCache] = None) -> 'IPInfoClient':
        """
        Build a client from explicit configuration.

        Args:
            config: Configuration to read the token and cache settings from
            cache: Optional cache store

        Returns:
            Configured client

        Raises:
            ValueError: If no valid token or secure endpoint is configured
        """
        token = config.get_api_key('ipinfo')
        if not token:
            raise ValueError("No ipinfo.io token configured. Set IPINFO_TOKEN or IPINTEL_IPINFO_API_KEY.")

        base_url = config.get_endpoint_url('ipinfo', 'primary')
        if not base_url:
            raise ValueError("No secure endpoint available for ipinfo.io")

        return cls(
            token,
            enable_cache=config.is_cache_enabled(),
            cache_expiration=config.get_cache_ttl(),
            cache=cache,
            base_url=base_url,
        )

    @debug_api_method
    def get_ip_info(self, ip_address: str) -> Response:
        """
        Get complete information for an IP address.

        Args:
            ip_address: IP address to look up

        Returns:
            Response wrapping the API payload

        Raises:
            InvalidIPError: If the address is malformed or a bogon
            ApiError: On transport failure, non-200 status or API error body
            DecodeError: If the body is not a JSON object
        """
        if not validator.is_valid_for_lookup(ip_address):
            raise InvalidIPError(ip_address)
        ip_address = validator.normalize_ip(ip_address)

        cached = self._cache_get(ip_address)
        if cached is not None:
            return Response(cached)

        response = self._get(ip_address, timeout=self.REQUEST_TIMEOUT)
        data = self._decode(response)

        self._cache_set(ip_address, data)
        return Response(data)

    @debug_api_method
    def get_batch_info(self, ip_addresses: Iterable[str], batch_size: int = BATCH_MAX_SIZE,
                       filter: bool = False, timeout: float = BATCH_TIMEOUT) -> Dict[str, Response]:
        """
        Get information for multiple IP addresses.

        Invalid and bogon addresses are dropped before any request and the
        rest are reduced to canonical form, so two spellings of one address
        share a lookup. Cached addresses are served from the cache, the rest
        are posted to the batch endpoint in chunks of at most ``batch_size``.

        Args:
            ip_addresses: IP addresses to look up
            batch_size: Addresses per request, clamped to 1..1000
            filter: Ask the API to filter out addresses it has no data for
            timeout: Per-request timeout in seconds

        Returns:
            Responses keyed by canonical IP address

        Raises:
            InvalidIPsError: If no address survives validation
            ApiError: If any chunk request fails
            DecodeError: If any chunk body is not an IP-to-object mapping
        """
        ip_addresses = list(ip_addresses)
        valid_ips = list(dict.fromkeys(
            validator.normalize_ip(ip) for ip in ip_addresses if validator.is_valid_for_lookup(ip)
        ))
        if not valid_ips:
            raise InvalidIPsError(ip_addresses)

        results: Dict[str, Response] = {}
        pending: List[str] = []
        for ip_address in valid_ips:
            cached = self._cache_get(ip_address)
            if cached is not None:
                results[ip_address] = Response(cached)
            else:
                pending.append(ip_address)

        if not pending:
            return results

        batch_size = min(max(1, int(batch_size)), self.BATCH_MAX_SIZE)
        endpoint = 'batch?filter=1' if filter else 'batch'

        for start in range(0, len(pending), batch_size):
            chunk = pending[start:start + batch_size]
            logger.debug(f"Posting batch of {len(chunk)} addresses")

            response = self._post(endpoint, chunk, timeout=timeout)
            batch_data = self._decode(response)

            for ip_address, data in batch_data.items():
                if not isinstance(data, dict):
                    raise DecodeError(f"Unexpected batch entry for {ip_address}")
                self._cache_set(ip_address, data)
                results[ip_address] = Response(data)

        return results

    @debug_api_method
    def get_field(self, ip_address: str, field: str) -> str:
        """
        Get a single field for an IP address.

        The field endpoint answers with a bare value, so the body is read as
        text and stripped of quotes and whitespace instead of JSON-decoded.

        Args:
            ip_address: IP address to look up
            field: Field name, e.g. 'country' or 'city'

        Returns:
            Field value as a string

        Raises:
            InvalidIPError: If the address is malformed or a bogon
            ApiError: On transport failure or non-200 status
        """
        if not validator.is_valid_for_lookup(ip_address):
            raise InvalidIPError(ip_address)
        ip_address = validator.normalize_ip(ip_address)

        lookup_path = f"{ip_address}/{field}"
        cached = self._cache_get(lookup_path)
        if cached is not None:
            return cached

        response = self._get(lookup_path, timeout=self.REQUEST_TIMEOUT)
        value = response.text.strip(FIELD_TRIM_CHARS)

        self._cache_set(lookup_path, value)
        return value

    def get_fields(self, ip_address: str, fields: Iterable[str]) -> Dict[str, str]:
        """
        Get several fields for an IP address, one request per field.

        Args:
            ip_address: IP address to look up
            fields: Field names

        Returns:
            Field values keyed by field name

        Raises:
            InvalidIPError: If the address is malformed or a bogon
            ApiError: On the first failing field request
        """
        if not validator.is_valid_for_lookup(ip_address):
            raise InvalidIPError(ip_address)
        ip_address = validator.normalize_ip(ip_address)

        results = {}
        for field in fields:
            results[field] = self.get_field(ip_address, field)
        return results

    def clear_cache(self, ip_address: Optional[str] = None, field: Optional[str] = None) -> bool:
        """
        Clear cached data.

        Args:
            ip_address: Address whose entry to delete; all of this token's
                entries are deleted when omitted
            field: Delete the single-field entry for ``ip_address`` instead

        Returns:
            True if something was deleted (single entry) or the bulk removal
            succeeded
        """
        try:
            if ip_address is None:
                return self.cache.delete_by_prefix(token_scope_prefix(self.token))

            if validator.is_valid(ip_address):
                ip_address = validator.normalize_ip(ip_address)
            lookup_path = f"{ip_address}/{field}" if field else ip_address
            return self.cache.delete(self._cache_key(lookup_path))
        except Exception as e:
            logger.warning(f"Cache clear failed: {e}")
            return False

    def _headers(self) -> Dict[str, str]:
        return {
            'Authorization': f"Bearer {self.token}",
            'Accept': 'application/json',
            'User-Agent': self.USER_AGENT,
        }

    def _get(self, endpoint: str, timeout: float) -> requests.Response:
        """Issue a GET request and check its status."""
        return self._send('GET', endpoint, timeout, headers=self._headers())

    def _post(self, endpoint: str, body: List[str], timeout: float) -> requests.Response:
        """Issue a JSON POST request and check its status."""
        headers = self._headers()
        headers['Content-Type'] = 'application/json'
        return self._send('POST', endpoint, timeout, headers=headers, json=body)

    def _send(self, method: str, endpoint: str, timeout: float, **kwargs) -> requests.Response:
        url = self.base_url + endpoint
        send = requests.post if method == 'POST' else requests.get

        start_time = time.time()
        try:
            response = send(url, timeout=timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            debug_logger.log_request(method, url, None, time.time() - start_time)
            raise self._transport_error(e) from e

        debug_logger.log_request(method, url, response.status_code, time.time() - start_time)
        self._check_status(response)
        return response

    def _transport_error(self, error: Exception) -> ApiError:
        message = security.sanitize_error_message(str(error), self.token)
        logger.warning(f"IPInfo request failed: {message}")
        return ApiError(f"IPInfo API request failed: {message}")

    def _check_status(self, response: requests.Response) -> None:
        if response.status_code != 200:
            raise ApiError(
                f"IPInfo API returned error code: {response.status_code}",
                status_code=response.status_code,
            )

    def _decode(self, response: requests.Response) -> Dict[str, Any]:
        """
        Decode a JSON object body.

        Raises:
            DecodeError: If the body is not a JSON object
            ApiError: If the object carries an ``error`` field
        """
        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError() from e

        if not isinstance(data, dict):
            raise DecodeError()

        if data.get('error') is not None:
            raise ApiError(self._error_message(data['error']), status_code=response.status_code)

        return data

    def _error_message(self, error: Any) -> str:
        if isinstance(error, dict):
            return str(error.get('message') or error.get('title') or 'Unknown API error')
        if isinstance(error, str) and error:
            return error
        return 'Unknown API error'

    def _cache_key(self, lookup_path: str) -> str:
        return make_cache_key(self.token, lookup_path)

    def _cache_get(self, lookup_path: str) -> Optional[Any]:
        """Read from the cache; store failures read as a miss."""
        if not self.enable_cache:
            return None
        try:
            cached = self.cache.get(self._cache_key(lookup_path))
        except Exception as e:
            logger.warning(f"Cache read failed, treating as miss: {e}")
            return None

        debug_logger.log_cache('miss' if cached is None else 'hit', lookup_path)
        return cached

    def _cache_set(self, lookup_path: str, payload: Any) -> None:
        if not self.enable_cache:
            return
        try:
            self.cache.set(self._cache_key(lookup_path), payload, self.cache_expiration)
        except Exception as e:
            logger.warning(f"Cache write failed: {e}")
            return

        debug_logger.log_cache('write', lookup_path)
