import json
import logging
import unittest

from asset_inventory.logging_config import JsonFormatter


class JsonFormatterTests(unittest.TestCase):
    def test_includes_extra_fields(self):
        record = logging.makeLogRecord({
            'name': 'asset_inventory.app', 'levelname': 'INFO', 'msg': 'asset updated',
            'asset_id': 5, 'matched': False,
        })
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload['message'], 'asset updated')
        self.assertEqual(payload['level'], 'INFO')
        self.assertEqual(payload['asset_id'], 5)
        self.assertIs(payload['matched'], False)
        self.assertNotIn('msg', payload)

    def test_unserializable_extra_stored_as_string(self):
        record = logging.makeLogRecord({'msg': 'x', 'store': object()})
        payload = json.loads(JsonFormatter().format(record))
        self.assertIsInstance(payload['store'], str)


if __name__ == "__main__":
    unittest.main()
