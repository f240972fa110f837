"""
Command-line front end for the ipinfo.io client.
"""

import sys
import json
import argparse
import os
from typing import Any, Dict, List, Optional

from .client import IPInfoClient
from .config import config
from .debug import debug_logger
from .errors import IPInfoError
from .response import Response
from .security import security
from .validator import validator


def _format_value(value: Any) -> str:
    if isinstance(value, dict):
        return ", ".join(f"{k}={v}" for k, v in value.items())
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


def print_response(response: Response, as_json: bool = False) -> None:
    """Print one response as a summary, or as raw JSON."""
    if as_json:
        print(json.dumps(response.get_all(), indent=2, ensure_ascii=False))
        return

    print(f"Lookup results for {response.ip} ({response.get_plan().label} plan data):")
    for key, value in response.to_dict().items():
        if value is None or key == 'ip':
            continue
        print(f"  {key}: {security.sanitize_output_text(_format_value(value), 200)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ipintel',
        description='Look up IP addresses with the ipinfo.io API',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  IPINFO_TOKEN / IPINTEL_IPINFO_API_KEY  - ipinfo.io API token
  IPINTEL_CACHE_ENABLED=true             - Enable response caching
  IPINTEL_CACHE_TTL=3600                 - Cache time to live in seconds
  IPINTEL_BATCH_TIMEOUT=5                - Batch request timeout in seconds
  IPINTEL_DEBUG=true                     - Enable debug mode with diagnostic output
  IPINTEL_DEBUG_LEVEL=basic              - Debug verbosity: basic, detailed, verbose

Examples:
  ipintel 8.8.8.8                        # Full lookup
  ipintel 8.8.8.8 1.1.1.1                # Batch lookup
  ipintel 8.8.8.8 --field country        # Single field
  ipintel 8.8.8.8 --json                 # Raw API payload
"""
    )

    parser.add_argument('targets', nargs='*', help='IP addresses to look up')
    parser.add_argument('--token', help='ipinfo.io API token (overrides environment)')
    parser.add_argument('--field', action='append', dest='fields', metavar='NAME',
                        help='Fetch only this field (repeatable)')
    parser.add_argument('--json', action='store_true', help='Print raw JSON payloads')
    parser.add_argument('--batch-size', type=int, default=IPInfoClient.BATCH_MAX_SIZE,
                        help='Addresses per batch request (1-1000)')
    parser.add_argument('--filter', action='store_true',
                        help='Ask the batch endpoint to drop addresses without data')
    parser.add_argument('--timeout', type=float, default=None,
                        help='Batch request timeout in seconds')
    parser.add_argument('--no-cache', action='store_true', help='Disable response caching')
    parser.add_argument('--clear-cache', action='store_true',
                        help='Clear cached entries for the token and exit')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug mode with low-level diagnostic output')
    parser.add_argument('--debug-level', choices=['basic', 'detailed', 'verbose'], default='basic',
                        help='Debug verbosity level (default: basic)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        os.environ['IPINTEL_DEBUG'] = 'true'
        os.environ['IPINTEL_DEBUG_LEVEL'] = args.debug_level

    if args.token:
        os.environ['IPINTEL_IPINFO_API_KEY'] = args.token
    if args.no_cache:
        os.environ['IPINTEL_CACHE_ENABLED'] = 'false'

    if args.debug:
        debug_logger.log_config_info()

    try:
        client = IPInfoClient.from_config(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.clear_cache:
        client.clear_cache()
        print("Cache cleared")
        return 0

    if not args.targets:
        parser.print_help()
        return 1

    try:
        if args.fields:
            for target in args.targets:
                values: Dict[str, str] = client.get_fields(target, args.fields)
                if args.json:
                    print(json.dumps({target: values}, indent=2, ensure_ascii=False))
                    continue
                print(f"Fields for {target}:")
                for name, value in values.items():
                    print(f"  {name}: {security.sanitize_output_text(value, 200)}")
        elif len(args.targets) == 1:
            print_response(client.get_ip_info(args.targets[0]), as_json=args.json)
        else:
            timeout = args.timeout if args.timeout is not None else config.get_batch_timeout()
            results = client.get_batch_info(
                args.targets,
                batch_size=args.batch_size,
                filter=args.filter,
                timeout=timeout,
            )
            skipped = [
                t for t in args.targets
                if not validator.is_valid(t) or validator.normalize_ip(t) not in results
            ]
            for response in results.values():
                print_response(response, as_json=args.json)
            if skipped:
                print(f"Skipped (invalid, bogon or filtered): {', '.join(skipped)}", file=sys.stderr)
    except IPInfoError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
