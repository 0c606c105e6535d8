"""Tests for :mod:`tokenauth.app_logging`."""

from unittest import TestCase, mock
import logging

from pythonjsonlogger.json import JsonFormatter

from tokenauth import app_logging


class TestSetupLogger(TestCase):
    """Tests for :func:`app_logging.setup_logger`."""

    def test_json(self):
        """Records are formatted as JSON by default."""
        root = logging.Logger('root-under-test')
        with mock.patch(f'{app_logging.__name__}.logging.getLogger',
                        return_value=root):
            app_logging.setup_logger('debug')
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)
        self.assertIsInstance(root.handlers[0].formatter, JsonFormatter)

    def test_plain(self):
        """JSON output can be turned off."""
        root = logging.Logger('root-under-test')
        with mock.patch(f'{app_logging.__name__}.logging.getLogger',
                        return_value=root):
            app_logging.setup_logger('INFO', json=False)
        self.assertNotIsInstance(root.handlers[0].formatter, JsonFormatter)

    def test_already_configured(self):
        """Existing handlers are left in place."""
        root = logging.Logger('root-under-test')
        handler = logging.NullHandler()
        root.addHandler(handler)
        with mock.patch(f'{app_logging.__name__}.logging.getLogger',
                        return_value=root):
            app_logging.setup_logger('WARNING')
        self.assertEqual(root.handlers, [handler])
        self.assertEqual(root.level, logging.WARNING)
