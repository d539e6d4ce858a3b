"""Tests for JSONFormatter."""

import json
import logging
import sys
import unittest

from utils.logging import JSONFormatter


def _record(msg='hello', exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord('auth', logging.INFO, __file__, 1, msg, (), exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter(unittest.TestCase):

    def setUp(self):
        self.formatter = JSONFormatter()

    def test_core_fields(self):
        data = json.loads(self.formatter.format(_record()))

        self.assertEqual(data['level'], 'INFO')
        self.assertEqual(data['logger'], 'auth')
        self.assertEqual(data['message'], 'hello')
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_extra_fields_are_included(self):
        data = json.loads(self.formatter.format(_record(userId='user-1', email='a@x.com')))

        self.assertEqual(data['userId'], 'user-1')
        self.assertEqual(data['email'], 'a@x.com')

    def test_non_json_values_are_stringified(self):
        data = json.loads(self.formatter.format(_record(fields={'age'})))

        self.assertEqual(data['fields'], "{'age'}")

    def test_exception_is_rendered(self):
        try:
            raise RuntimeError('boom')
        except RuntimeError:
            record = _record(exc_info=sys.exc_info())

        data = json.loads(self.formatter.format(record))

        self.assertIn('RuntimeError: boom', data['exception'])


if __name__ == '__main__':
    unittest.main()
