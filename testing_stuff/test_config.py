import os
import unittest

from asset_inventory.config import Settings


class SettingsTests(unittest.TestCase):
    def test_defaults(self):
        settings = Settings({})
        self.assertEqual(settings.port, 3000)
        self.assertEqual(settings.host, '0.0.0.0')
        self.assertFalse(settings.debug)
        self.assertEqual(settings.backup_url, 'http://localhost:3000/api/inventory')
        self.assertEqual(settings.backup_retention_days, 7)
        self.assertEqual(os.path.basename(settings.public_dir), 'public')

    def test_overrides(self):
        settings = Settings({
            'INVENTORY_PORT': '7000',
            'INVENTORY_DEBUG': 'yes',
            'INVENTORY_LOG_LEVEL': 'debug',
            'INVENTORY_BACKUP_RETENTION_DAYS': '14',
        })
        self.assertEqual(settings.port, 7000)
        self.assertTrue(settings.debug)
        self.assertEqual(settings.log_level, 'DEBUG')
        self.assertEqual(settings.backup_url, 'http://localhost:7000/api/inventory')
        self.assertEqual(settings.backup_retention_days, 14)


if __name__ == "__main__":
    unittest.main()
