"""
In-memory asset store

Holds the inventory records for the lifetime of the process. Records are kept
in insertion order, updated in place and removed by id. Nothing is persisted,
so every new store starts from the same seed records.
"""

import threading
import time

SEED_ASSETS = (
    {'id': 1, 'name': 'Cisco Catalyst 9300', 'qty': 2, 'category': 'Networking'},
    {'id': 2, 'name': 'PowerEdge R750', 'qty': 5, 'category': 'Servers'},
)

REQUIRED_FIELDS = ('name', 'qty', 'category')


def _now_ms():
    return int(time.time() * 1000)


class AssetStore:
    """
    Ordered in-memory collection of assets

    Attributes:
        clock (callable): Returns the current time in milliseconds, used to derive new ids
    """
    def __init__(self, seed=SEED_ASSETS, clock=_now_ms):
        self.clock = clock
        self._seed = [dict(asset) for asset in seed]
        self._lock = threading.Lock()
        self._assets = []
        self._last_id = 0
        self.reset()

    def reset(self):
        """
        Drop every record and reload the seed records
        """
        with self._lock:
            self._assets = [dict(asset) for asset in self._seed]
            self._last_id = max((asset['id'] for asset in self._assets), default=0)

    def list(self):
        """
        Return a snapshot of every asset in store order

        Returns:
            list[dict]: Copies of the stored records
        """
        with self._lock:
            return [dict(asset) for asset in self._assets]

    def get(self, asset_id):
        """
        Look up a single asset

        Args:
            asset_id (int): Id of the asset

        Returns:
            dict | None: A copy of the record, or None if no record has this id
        """
        with self._lock:
            for asset in self._assets:
                if asset['id'] == asset_id:
                    return dict(asset)
        return None

    def _next_id(self):
        # Millisecond timestamps, bumped past the last id so two creations
        # in the same millisecond never share one.
        self._last_id = max(self.clock(), self._last_id + 1)
        return self._last_id

    def create(self, fields):
        """
        Append a new asset to the end of the store

        Args:
            fields (dict): Asset fields. An 'id' in here is ignored.

        Returns:
            dict: The created record including its assigned id
        """
        with self._lock:
            asset = {'id': self._next_id()}
            asset.update({key: value for key, value in fields.items() if key != 'id'})
            self._assets.append(asset)
            return dict(asset)

    def update(self, asset_id, fields):
        """
        Merge fields onto the asset with a matching id, keeping its position

        Args:
            asset_id (int): Id of the asset to update
            fields (dict): Fields to overwrite. Fields not given keep their value.

        Returns:
            bool: True if a record matched. A missing id changes nothing.
        """
        changes = {key: value for key, value in fields.items() if key != 'id'}
        with self._lock:
            for index, asset in enumerate(self._assets):
                if asset['id'] == asset_id:
                    self._assets[index] = {**asset, **changes}
                    return True
        return False

    def delete(self, asset_id):
        """
        Remove every asset with a matching id

        Args:
            asset_id (int): Id of the asset to remove

        Returns:
            bool: True if anything was removed
        """
        with self._lock:
            remaining = [asset for asset in self._assets if asset['id'] != asset_id]
            removed = len(remaining) != len(self._assets)
            self._assets = remaining
        return removed

    def __len__(self):
        with self._lock:
            return len(self._assets)


def missing_fields(fields):
    """
    List the required asset fields absent from a payload

    Args:
        fields (dict): Payload for a new asset

    Returns:
        list[str]: Names of missing required fields, in declaration order
    """
    return [name for name in REQUIRED_FIELDS if fields.get(name) is None]
