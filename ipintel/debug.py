"""
Debug tracing for ipintel.

When IPINTEL_DEBUG is set, client calls, HTTP exchanges and cache activity
are traced to stderr. IPINTEL_DEBUG_LEVEL picks how much payload data is
shown alongside each line.
"""

import sys
import time
import json
from typing import Any, Callable, Dict, Optional
from functools import wraps
from .config import config

LEVELS = {'basic': 0, 'detailed': 1, 'verbose': 2}
MAX_SHOWN_ARGS = 2


class DebugLogger:
    """Writes timestamped trace lines for client activity."""

    def __init__(self):
        self.start_time = time.time()
        self.api_call_count = 0

    def enabled(self, level: str = 'basic') -> bool:
        """Check whether lines at ``level`` are currently shown."""
        if not config.is_debug_mode():
            return False
        return LEVELS.get(level, 0) <= LEVELS.get(config.get_debug_level(), 0)

    def log(self, level: str, message: str, data: Optional[Dict[str, Any]] = None):
        """
        Write one trace line, followed by ``data`` at detailed or verbose level.

        Args:
            level: Minimum level at which the line is shown
            message: Trace message
            data: Optional payload to dump below the line
        """
        if not self.enabled(level):
            return

        elapsed = time.time() - self.start_time
        print(f"[DEBUG +{elapsed:.3f}s] {message}", file=sys.stderr)

        if data and self.enabled('detailed'):
            self._dump(data, verbose=self.enabled('verbose'))

    def _dump(self, data: Dict[str, Any], verbose: bool):
        if verbose:
            for line in json.dumps(data, indent=2, default=str, ensure_ascii=False).splitlines():
                print(f"[DEBUG]   {line}", file=sys.stderr)
            return

        for key, value in data.items():
            print(f"[DEBUG]   {key}: {self._brief(value)}", file=sys.stderr)

    @staticmethod
    def _brief(value: Any) -> str:
        if isinstance(value, dict):
            return f"{len(value)} items"
        if isinstance(value, (list, tuple)):
            return f"[{len(value)} items]"
        if isinstance(value, str) and len(value) > 100:
            return f"'{value[:97]}...'"
        return str(value)

    @staticmethod
    def _format_args(args: tuple, kwargs: Dict[str, Any]) -> str:
        shown = [str(arg) for arg in args[:MAX_SHOWN_ARGS]]
        if len(args) > MAX_SHOWN_ARGS:
            shown.append(f"... (+{len(args) - MAX_SHOWN_ARGS} more)")

        items = list(kwargs.items())
        shown.extend(f"{k}={v}" for k, v in items[:MAX_SHOWN_ARGS])
        if len(items) > MAX_SHOWN_ARGS:
            shown.append(f"... (+{len(items) - MAX_SHOWN_ARGS} more)")

        return ", ".join(shown)

    def log_api_call(self, client_name: str, method: str, args: tuple = (), kwargs: Optional[Dict[str, Any]] = None):
        self.api_call_count += 1
        call_args = self._format_args(tuple(self._shorten(a) for a in args), kwargs or {})
        self.log('basic', f"API call #{self.api_call_count}: {client_name}.{method}({call_args})")

    def log_api_result(self, client_name: str, method: str, result: Any, execution_time: float):
        self.log('basic', f"API result: {client_name}.{method} -> {self._summarize_result(result)} "
                          f"({execution_time:.3f}s)")
        self.log('detailed', f"Full result data for {client_name}.{method}:", {'result': self._result_data(result)})

    def log_api_error(self, client_name: str, method: str, error: Exception, execution_time: float):
        self.log('basic', f"API error: {client_name}.{method} -> {type(error).__name__}: {str(error)[:100]} "
                          f"({execution_time:.3f}s)")

    def log_request(self, method: str, url: str, status: Optional[int], execution_time: float):
        """Trace one HTTP exchange; ``status`` is None when no response arrived."""
        outcome = status if status is not None else 'no response'
        self.log('detailed', f"HTTP {method} {url} -> {outcome} ({execution_time:.3f}s)")

    def log_cache(self, event: str, lookup_path: str):
        """Trace a cache hit, miss or write for a lookup path."""
        self.log('detailed', f"Cache {event}: {lookup_path}")

    def log_config_info(self):
        """Dump the effective configuration, without the token."""
        self.log('detailed', "Current configuration:", {
            'debug_level': config.get_debug_level(),
            'endpoint': config.get_endpoint_url('ipinfo'),
            'cache_enabled': config.is_cache_enabled(),
            'cache_ttl': config.get_cache_ttl(),
            'batch_timeout': config.get_batch_timeout(),
            'token_configured': config.get_api_key('ipinfo') is not None,
        })

    @staticmethod
    def _shorten(arg: Any) -> Any:
        # Batch inputs can hold up to a thousand addresses
        if isinstance(arg, (list, tuple, set)) and len(arg) > 3:
            return f"[{len(arg)} items]"
        return arg

    def _result_data(self, result: Any) -> Any:
        if hasattr(result, 'get_all'):
            return result.get_all()
        if isinstance(result, dict):
            return {k: self._result_data(v) for k, v in result.items()}
        return result

    @staticmethod
    def _summarize_result(result: Any) -> str:
        if result is None:
            return "None"
        if hasattr(result, 'get_plan'):
            return f"Response(plan={result.get_plan().label})"
        if isinstance(result, dict):
            return f"dict({len(result)} keys)"
        if isinstance(result, str):
            return f"str({len(result)} chars)"
        if isinstance(result, (list, tuple)):
            return f"{type(result).__name__}({len(result)} items)"
        return f"{type(result).__name__}({result})"


def debug_api_method(func: Callable) -> Callable:
    """
    Trace calls, results and errors of a client method.

    The wrapped method runs untouched when debug mode is off.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        if not config.is_debug_mode():
            return func(self, *args, **kwargs)

        client_name = getattr(self, 'name', self.__class__.__name__)
        debug_logger.log_api_call(client_name, func.__name__, args, kwargs)

        start_time = time.time()
        try:
            result = func(self, *args, **kwargs)
        except Exception as e:
            debug_logger.log_api_error(client_name, func.__name__, e, time.time() - start_time)
            raise

        debug_logger.log_api_result(client_name, func.__name__, result, time.time() - start_time)
        return result

    return wrapper


debug_logger = DebugLogger()
