"""
Tests for debug mode functionality.
"""

import unittest
import os
import sys
from io import StringIO
from unittest.mock import patch, MagicMock
from ipintel.cache import MemoryCache
from ipintel.client import IPInfoClient
from ipintel.config import config
from ipintel.debug import debug_logger, debug_api_method
from ipintel.errors import InvalidIPError
from ipintel.response import Response


class TestDebugConfiguration(unittest.TestCase):
    """Test debug configuration functionality."""

    def test_debug_mode_disabled_by_default(self):
        """Test that debug mode is disabled by default."""
        with patch.dict(os.environ, {}, clear=True):
            self.assertFalse(config.is_debug_mode())
            self.assertEqual(config.get_debug_level(), 'off')

    def test_debug_mode_enabled_by_environment(self):
        """Test debug mode enabled by environment variable."""
        test_cases = [
            ('true', True),
            ('1', True),
            ('yes', True),
            ('on', True),
            ('false', False),
            ('0', False),
            ('no', False),
            ('off', False),
        ]

        for value, expected in test_cases:
            with patch.dict(os.environ, {'IPINTEL_DEBUG': value}):
                self.assertEqual(config.is_debug_mode(), expected)

    def test_debug_levels(self):
        """Test different debug levels."""
        with patch.dict(os.environ, {'IPINTEL_DEBUG': 'true'}, clear=True):
            self.assertEqual(config.get_debug_level(), 'basic')

            for level in ['basic', 'detailed', 'verbose']:
                with patch.dict(os.environ, {'IPINTEL_DEBUG_LEVEL': level}):
                    self.assertEqual(config.get_debug_level(), level)

            # Invalid level falls back to basic
            with patch.dict(os.environ, {'IPINTEL_DEBUG_LEVEL': 'invalid'}):
                self.assertEqual(config.get_debug_level(), 'basic')


class TestDebugLogger(unittest.TestCase):
    """Test debug logger functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.original_stderr = sys.stderr
        self.captured_stderr = StringIO()
        sys.stderr = self.captured_stderr

    def tearDown(self):
        """Clean up test fixtures."""
        sys.stderr = self.original_stderr

    @patch.dict(os.environ, {'IPINTEL_DEBUG': 'true', 'IPINTEL_DEBUG_LEVEL': 'basic'})
    def test_basic_logging(self):
        debug_logger.log('basic', 'Test message')

        output = self.captured_stderr.getvalue()
        self.assertIn('[DEBUG', output)
        self.assertIn('Test message', output)

    @patch.dict(os.environ, {'IPINTEL_DEBUG': 'false'})
    def test_logging_disabled_when_debug_off(self):
        debug_logger.log('basic', 'Test message')

        self.assertEqual(self.captured_stderr.getvalue(), '')

    @patch.dict(os.environ, {'IPINTEL_DEBUG': 'true', 'IPINTEL_DEBUG_LEVEL': 'basic'})
    def test_log_level_filtering(self):
        """Test that higher level messages are filtered out."""
        debug_logger.log('detailed', 'Detailed message')
        debug_logger.log('verbose', 'Verbose message')

        output = self.captured_stderr.getvalue()
        self.assertNotIn('Detailed message', output)
        self.assertNotIn('Verbose message', output)

    @patch.dict(os.environ, {'IPINTEL_DEBUG': 'true', 'IPINTEL_DEBUG_LEVEL': 'detailed'})
    def test_detailed_logging_with_data(self):
        test_data = {'key1': 'value1', 'key2': {'nested': 'data'}}
        debug_logger.log('detailed', 'Test with data', test_data)

        output = self.captured_stderr.getvalue()
        self.assertIn('Test with data', output)
        self.assertIn('key1: value1', output)
        self.assertIn('key2: 1 items', output)

    @patch.dict(os.environ, {'IPINTEL_DEBUG': 'true', 'IPINTEL_DEBUG_LEVEL': 'basic'})
    def test_api_call_logging(self):
        debug_logger.log_api_call('IPinfo', 'get_ip_info', ('8.8.8.8',), {'timeout': 5})

        output = self.captured_stderr.getvalue()
        self.assertIn('API call #', output)
        self.assertIn('IPinfo.get_ip_info', output)
        self.assertIn('8.8.8.8', output)
        self.assertIn('timeout=5', output)

    @patch.dict(os.environ, {'IPINTEL_DEBUG': 'true', 'IPINTEL_DEBUG_LEVEL': 'basic'})
    def test_api_result_logging(self):
        """Test that responses are summarized by plan."""
        result = Response({'ip': '8.8.8.8', 'asn': {'asn': 'AS15169'}})
        debug_logger.log_api_result('IPinfo', 'get_ip_info', result, 0.5)

        output = self.captured_stderr.getvalue()
        self.assertIn('API result: IPinfo.get_ip_info', output)
        self.assertIn('Response(plan=Basic)', output)
        self.assertIn('0.500s', output)

    @patch.dict(os.environ, {'IPINTEL_DEBUG': 'true', 'IPINTEL_DEBUG_LEVEL': 'verbose'})
    def test_verbose_result_includes_payload(self):
        result = {'8.8.8.8': Response({'ip': '8.8.8.8', 'city': 'Mountain View'})}
        debug_logger.log_api_result('IPinfo', 'get_batch_info', result, 0.1)

        output = self.captured_stderr.getvalue()
        self.assertIn('dict(1 keys)', output)
        self.assertIn('Mountain View', output)

    @patch.dict(os.environ, {'IPINTEL_DEBUG': 'true', 'IPINTEL_DEBUG_LEVEL': 'basic'})
    def test_api_error_logging(self):
        error = ValueError("Test error message")
        debug_logger.log_api_error('IPinfo', 'get_field', error, 0.2)

        output = self.captured_stderr.getvalue()
        self.assertIn('API error: IPinfo.get_field', output)
        self.assertIn('ValueError: Test error message', output)
        self.assertIn('0.200s', output)


class MockClient:
    """Mock client for testing the debug decorator."""

    name = "MockClient"

    @debug_api_method
    def lookup(self, arg1, arg2=None):
        return {'arg1': arg1, 'arg2': arg2}

    @debug_api_method
    def error_method(self):
        raise ValueError("Test error")


class TestDebugDecorator(unittest.TestCase):
    """Test debug decorator functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.original_stderr = sys.stderr
        self.captured_stderr = StringIO()
        sys.stderr = self.captured_stderr
        self.client = MockClient()

    def tearDown(self):
        """Clean up test fixtures."""
        sys.stderr = self.original_stderr

    @patch.dict(os.environ, {'IPINTEL_DEBUG': 'false'})
    def test_decorator_disabled_when_debug_off(self):
        result = self.client.lookup('value1', arg2='value2')

        self.assertEqual(result, {'arg1': 'value1', 'arg2': 'value2'})
        self.assertEqual(self.captured_stderr.getvalue(), '')

    @patch.dict(os.environ, {'IPINTEL_DEBUG': 'true', 'IPINTEL_DEBUG_LEVEL': 'basic'})
    def test_decorator_logs_successful_call(self):
        result = self.client.lookup('value1', arg2='value2')

        self.assertEqual(result, {'arg1': 'value1', 'arg2': 'value2'})
        output = self.captured_stderr.getvalue()
        self.assertIn('API call #', output)
        self.assertIn('MockClient.lookup', output)
        self.assertIn('API result: MockClient.lookup', output)

    @patch.dict(os.environ, {'IPINTEL_DEBUG': 'true', 'IPINTEL_DEBUG_LEVEL': 'basic'})
    def test_decorator_logs_errors(self):
        with self.assertRaises(ValueError):
            self.client.error_method()

        output = self.captured_stderr.getvalue()
        self.assertIn('MockClient.error_method', output)
        self.assertIn('API error: MockClient.error_method', output)
        self.assertIn('ValueError: Test error', output)

    @patch.dict(os.environ, {'IPINTEL_DEBUG': 'true', 'IPINTEL_DEBUG_LEVEL': 'basic'})
    @patch('requests.get')
    def test_client_methods_are_instrumented(self, mock_get):
        """Test that real client lookups are traced."""
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.text = 'US\n'
        mock_get.return_value = mock_response
        client = IPInfoClient('abc123def456', cache=MemoryCache())

        self.assertEqual(client.get_field('8.8.8.8', 'country'), 'US')
        with self.assertRaises(InvalidIPError):
            client.get_ip_info('10.0.0.1')

        output = self.captured_stderr.getvalue()
        self.assertIn('API result: IPinfo.get_field', output)
        self.assertIn('API error: IPinfo.get_ip_info', output)
        self.assertIn('InvalidIPError', output)


if __name__ == '__main__':
    unittest.main()
