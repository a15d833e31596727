import os
import tempfile
import time
import unittest
from datetime import datetime
from unittest import mock

import requests

from asset_inventory import backup


class BackupJobTests(unittest.TestCase):
    def setUp(self):
        self.dest = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.dest.cleanup()

    def make_backup(self, name, age_days):
        path = os.path.join(self.dest.name, name)
        with open(path, 'w') as f:
            f.write('[]')
        stamp = time.time() - age_days * 86400
        os.utime(path, (stamp, stamp))
        return path

    def test_write_backup_timestamped_name(self):
        path = backup.write_backup(b'[]', self.dest.name, now=datetime(2026, 10, 19, 8, 30, 5))
        self.assertEqual(os.path.basename(path), 'inventory_20261019_083005.json')
        with open(path, 'rb') as f:
            self.assertEqual(f.read(), b'[]')

    def test_write_backup_creates_directory(self):
        dest = os.path.join(self.dest.name, 'nested')
        path = backup.write_backup(b'[]', dest)
        self.assertTrue(os.path.exists(path))

    def test_write_backup_same_second_keeps_both(self):
        now = datetime(2026, 10, 19, 8, 30, 5)
        first = backup.write_backup(b'[1]', self.dest.name, now=now)
        second = backup.write_backup(b'[2]', self.dest.name, now=now)
        self.assertNotEqual(first, second)
        self.assertEqual(os.path.basename(second), 'inventory_20261019_083005_1.json')
        with open(first, 'rb') as f:
            self.assertEqual(f.read(), b'[1]')

    def test_prune_removes_only_old_backups(self):
        old = self.make_backup('inventory_20200101_000000.json', age_days=10)
        fresh = self.make_backup('inventory_20261019_000000.json', age_days=1)
        unrelated = self.make_backup('notes.json', age_days=30)
        removed = backup.prune_backups(self.dest.name, retention_days=7)
        self.assertEqual(removed, [old])
        self.assertFalse(os.path.exists(old))
        self.assertTrue(os.path.exists(fresh))
        self.assertTrue(os.path.exists(unrelated))

    def test_run_backup_fetches_and_writes(self):
        response = mock.Mock(content=b'[{"id": 1}]')
        session = mock.Mock()
        session.get.return_value = response
        path = backup.run_backup('http://localhost:3000/api/inventory', self.dest.name, 7, session=session)
        session.get.assert_called_once_with('http://localhost:3000/api/inventory', timeout=backup.REQUEST_TIMEOUT_SEC)
        response.raise_for_status.assert_called_once_with()
        with open(path, 'rb') as f:
            self.assertEqual(f.read(), b'[{"id": 1}]')

    @mock.patch('asset_inventory.backup.requests.get')
    def test_main_returns_error_on_request_failure(self, get):
        get.side_effect = requests.ConnectionError('refused')
        with mock.patch('asset_inventory.backup.configure_logging'):
            status = backup.main(['--url', 'http://localhost:1/api/inventory', '--dest', self.dest.name])
        self.assertEqual(status, 1)
        self.assertEqual(os.listdir(self.dest.name), [])

    @mock.patch('asset_inventory.backup.requests.get')
    def test_main_success(self, get):
        get.return_value = mock.Mock(content=b'[]')
        with mock.patch('asset_inventory.backup.configure_logging'):
            status = backup.main(['--dest', self.dest.name, '--retention-days', '3'])
        self.assertEqual(status, 0)
        self.assertEqual(len(os.listdir(self.dest.name)), 1)


if __name__ == "__main__":
    unittest.main()
