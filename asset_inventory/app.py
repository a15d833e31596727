"""
Flask Asset Inventory API

A small REST API over an in-memory asset store, plus the static browser client

Features include:
    Listing, fetching, creating, updating and deleting assets under /api/inventory
    Exporting the current snapshot as JSON, XML or XLSX files
    Serving the browser client from the public directory
"""

import logging
import math
import re

from flask import Flask, current_app, jsonify, request, send_file
from werkzeug.exceptions import BadRequest, HTTPException, NotFound

from .config import load_settings
from .exports import snapshot_to_json, snapshot_to_xml, snapshot_to_xlsx
from .store import AssetStore, missing_fields

logger = logging.getLogger(__name__)

STORE_KEY = 'asset_store'
ASSET_ID_RE = re.compile(r'-?[0-9]+')


def create_app(store=None, settings=None):
    """
    Build the Flask application

    Args:
        store (AssetStore | None): Store backing the API. A freshly seeded one is created if omitted.
        settings (Settings | None): Runtime settings. Read from the environment if omitted.

    Returns:
        Flask: The configured application
    """
    if settings is None:
        settings = load_settings()

    app = Flask(__name__, static_folder=settings.public_dir, static_url_path='')
    app.config['SETTINGS'] = settings
    app.extensions[STORE_KEY] = store if store is not None else AssetStore()

    app.register_error_handler(HTTPException, handle_http_error)

    app.add_url_rule('/', 'index', index)
    app.add_url_rule('/api/inventory', 'list_assets', list_assets, methods=['GET'])
    app.add_url_rule('/api/inventory', 'create_asset', create_asset, methods=['POST'])
    app.add_url_rule('/api/inventory/<asset_id>', 'get_asset', get_asset, methods=['GET'])
    app.add_url_rule('/api/inventory/<asset_id>', 'update_asset', update_asset, methods=['PUT'])
    app.add_url_rule('/api/inventory/<asset_id>', 'delete_asset', delete_asset, methods=['DELETE'])
    app.add_url_rule('/api/inventory/export.json', 'export_json', inventory_to_json)
    app.add_url_rule('/api/inventory/export.xml', 'export_xml', inventory_to_xml)
    app.add_url_rule('/api/inventory/export.xlsx', 'export_xlsx', inventory_to_xlsx)
    return app


def get_store():
    """
    Return the store attached to the current application

    Returns:
        AssetStore: Store for this app
    """
    return current_app.extensions[STORE_KEY]


def handle_http_error(error):
    """
    Render any HTTP error as a JSON body

    Args:
        error (HTTPException): The raised error

    Returns:
        tuple: JSON body and status code
    """
    return jsonify({'error': error.description}), error.code


def parse_asset_id(raw_id):
    """
    Convert the id path parameter to an integer

    Args:
        raw_id (str): Id as it appears in the URL

    Returns:
        int: The asset id

    Raises:
        BadRequest: If the id is not a plain ASCII integer
    """
    if not ASSET_ID_RE.fullmatch(raw_id):
        raise BadRequest('Invalid asset id')
    return int(raw_id)


def has_non_finite(value):
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(has_non_finite(item) for item in value.values())
    if isinstance(value, list):
        return any(has_non_finite(item) for item in value)
    return False


def read_fields():
    """
    Read the request body as a JSON object

    Returns:
        dict: The decoded body

    Raises:
        BadRequest: If the body is not valid JSON, not an object, or holds NaN or Infinity
    """
    body = request.get_json(force=True)
    if not isinstance(body, dict):
        raise BadRequest('Request body must be a JSON object')
    if has_non_finite(body):
        raise BadRequest('NaN and Infinity are not valid numbers')
    return body


def index():
    """
    Serve the browser client

    Returns:
        Response: index.html from the public directory
    """
    return current_app.send_static_file('index.html')


def list_assets():
    """
    List every asset in store order

    Returns:
        Response: JSON array of assets
    """
    return jsonify(get_store().list())


def get_asset(asset_id):
    """
    Fetch a single asset

    Args:
        asset_id (str): Id of the asset

    Returns:
        Response: JSON of the asset

    Raises:
        NotFound: If no asset has this id
    """
    asset = get_store().get(parse_asset_id(asset_id))
    if asset is None:
        raise NotFound('Asset not found')
    return jsonify(asset)


def create_asset():
    """
    Create an asset from the request body

    Returns:
        tuple: JSON of the created asset and 201
    """
    fields = read_fields()
    missing = missing_fields(fields)
    if missing:
        raise BadRequest(f"Missing required fields: {', '.join(missing)}")

    asset = get_store().create(fields)
    logger.info('asset %s created', asset['id'], extra={'asset_id': asset['id']})
    return jsonify(asset), 201


def update_asset(asset_id):
    """
    Merge the request body onto an existing asset

    An id with no matching asset is still answered with success.

    Args:
        asset_id (str): Id of the asset to update

    Returns:
        Response: Confirmation message
    """
    asset_id = parse_asset_id(asset_id)
    fields = read_fields()
    matched = get_store().update(asset_id, fields)
    logger.info('asset %s updated (matched=%s)', asset_id, matched, extra={'asset_id': asset_id, 'matched': matched})
    return jsonify({'message': 'Update Successful'})


def delete_asset(asset_id):
    """
    Delete an asset

    Args:
        asset_id (str): Id of the asset to delete

    Returns:
        tuple: Empty body and 204, whether or not the asset existed
    """
    asset_id = parse_asset_id(asset_id)
    matched = get_store().delete(asset_id)
    logger.info('asset %s deleted (matched=%s)', asset_id, matched, extra={'asset_id': asset_id, 'matched': matched})
    return '', 204


def inventory_to_json():
    """
    Download the current snapshot as a JSON file

    Returns:
        Response: JSON file download
    """
    return send_file(snapshot_to_json(get_store().list()), mimetype='application/json',
                     as_attachment=True, download_name='inventory.json')


def inventory_to_xml():
    """
    Download the current snapshot as an XML file

    Returns:
        Response: XML file download
    """
    return send_file(snapshot_to_xml(get_store().list()), mimetype='application/xml',
                     as_attachment=True, download_name='inventory.xml')


def inventory_to_xlsx():
    """
    Download the current snapshot as an XLSX file

    Returns:
        Response: XLSX file download
    """
    return send_file(
        snapshot_to_xlsx(get_store().list()),
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        as_attachment=True,
        download_name='inventory.xlsx'
    )


app = create_app()
