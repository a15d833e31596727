"""
Runtime settings read from environment variables

A `.env` file in the working directory is loaded first, so deployments can
keep their settings next to the process manager config.
"""

import os

from dotenv import load_dotenv

PACKAGE_ROOT = os.path.dirname(os.path.abspath(__file__))
DEFAULT_PUBLIC_DIR = os.path.join(PACKAGE_ROOT, '..', 'public')


def _as_bool(val, default=False):
    if val is None:
        return default
    return val.lower() in ('1', 'true', 'yes', 'on')


class Settings:
    """
    Settings for the API server and the backup job

    Attributes:
        host (str): Address the server binds to
        port (int): Port the server listens on
        public_dir (str): Directory served as static files
        debug (bool): Run Flask in debug mode
        log_level (str): Root logging level
        log_json (bool): Emit log lines as JSON objects
        backup_url (str): Snapshot URL fetched by the backup job
        backup_dir (str): Directory the backup job writes into
        backup_retention_days (int): Age in days after which backups are pruned
    """
    def __init__(self, environ=None):
        env = os.environ if environ is None else environ
        self.host = env.get('INVENTORY_HOST', '0.0.0.0')
        self.port = int(env.get('INVENTORY_PORT', '3000'))
        self.public_dir = os.path.abspath(env.get('INVENTORY_PUBLIC_DIR', DEFAULT_PUBLIC_DIR))
        self.debug = _as_bool(env.get('INVENTORY_DEBUG'))
        self.log_level = env.get('INVENTORY_LOG_LEVEL', 'INFO').upper()
        self.log_json = _as_bool(env.get('INVENTORY_LOG_JSON'))
        self.backup_url = env.get('INVENTORY_BACKUP_URL', f'http://localhost:{self.port}/api/inventory')
        self.backup_dir = env.get('INVENTORY_BACKUP_DIR', 'backups')
        self.backup_retention_days = int(env.get('INVENTORY_BACKUP_RETENTION_DAYS', '7'))


def load_settings():
    """
    Load `.env` (if present) and build settings from the environment

    Returns:
        Settings: Settings for this process
    """
    load_dotenv()
    return Settings()
