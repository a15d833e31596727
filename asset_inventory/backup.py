"""
Snapshot backup job

Fetches the full inventory snapshot from a running server, writes it to a
timestamped JSON file and prunes backups older than the retention window.
Meant to be run from cron, e.g.:

    0 * * * * asset-inventory-backup --dest /var/backups/inventory
"""

import argparse
import glob
import logging
import os
import sys
import time
from datetime import datetime

import requests

from .config import load_settings
from .logging_config import configure_logging

logger = logging.getLogger(__name__)

BACKUP_PREFIX = 'inventory_'
REQUEST_TIMEOUT_SEC = 10


def fetch_snapshot(url, session=None):
    """
    Download the snapshot body

    Args:
        url (str): URL of GET /api/inventory
        session (requests.Session | None): Session to reuse

    Returns:
        bytes: The raw JSON body

    Raises:
        requests.RequestException: If the request fails or returns an error status
    """
    http = session or requests
    response = http.get(url, timeout=REQUEST_TIMEOUT_SEC)
    response.raise_for_status()
    return response.content


def write_backup(content, dest, now=None):
    """
    Write a snapshot to a timestamped file

    Args:
        content (bytes): Snapshot body
        dest (str): Backup directory, created if missing
        now (datetime | None): Timestamp for the file name

    Returns:
        str: Path of the written file. A second backup within the same
        second gets a numeric suffix instead of replacing the first.
    """
    now = now or datetime.now()
    os.makedirs(dest, exist_ok=True)
    stem = os.path.join(dest, f"{BACKUP_PREFIX}{now.strftime('%Y%m%d_%H%M%S')}")
    attempt = 0
    while True:
        path = f"{stem}.json" if attempt == 0 else f"{stem}_{attempt}.json"
        try:
            with open(path, 'xb') as f:
                f.write(content)
            return path
        except FileExistsError:
            attempt += 1


def prune_backups(dest, retention_days, now=None):
    """
    Delete backups whose modification time is older than the retention window

    Args:
        dest (str): Backup directory
        retention_days (int): Number of days to keep
        now (float | None): Current time as a UNIX timestamp

    Returns:
        list[str]: Paths of the deleted files
    """
    now = time.time() if now is None else now
    cutoff = now - retention_days * 86400
    removed = []
    for path in sorted(glob.glob(os.path.join(dest, f'{BACKUP_PREFIX}*.json'))):
        if os.path.getmtime(path) < cutoff:
            os.remove(path)
            removed.append(path)
    return removed


def run_backup(url, dest, retention_days, session=None):
    """
    Fetch, write and prune in one pass

    Returns:
        str: Path of the new backup file
    """
    path = write_backup(fetch_snapshot(url, session=session), dest)
    logger.info('Backup written to %s', path)
    for removed in prune_backups(dest, retention_days):
        logger.info('Pruned old backup %s', removed)
    return path


def main(argv=None):
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Back up the inventory snapshot to a timestamped JSON file.")
    parser.add_argument("--url", default=settings.backup_url, help="Snapshot URL (GET /api/inventory).")
    parser.add_argument("--dest", default=settings.backup_dir, help="Directory to write backups into.")
    parser.add_argument("--retention-days", type=int, default=settings.backup_retention_days,
                        help="Delete backups older than this many days.")
    args = parser.parse_args(argv)

    configure_logging(settings.log_level, settings.log_json)
    try:
        run_backup(args.url, args.dest, args.retention_days)
    except requests.RequestException as exc:
        logger.error('Backup failed: %s', exc)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
