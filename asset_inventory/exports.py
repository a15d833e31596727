"""
Snapshot exports

Each function takes a snapshot (the list returned by AssetStore.list) and
returns an in-memory file ready for `send_file`.
"""

import io
import json
import xml.etree.ElementTree as ET

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, PatternFill, Font

EXPORT_FIELDS = ('id', 'name', 'qty', 'category')


def clean_text(value):
    """
    Strip control characters that neither XML nor XLSX can hold

    Args:
        value (str): Text from an asset field

    Returns:
        str: The text without illegal characters
    """
    return ILLEGAL_CHARACTERS_RE.sub('', value)


def snapshot_to_json(assets):
    """
    Serialize a snapshot to a JSON array

    Args:
        assets (list[dict]): Snapshot of the store

    Returns:
        io.BytesIO: UTF-8 encoded JSON
    """
    return io.BytesIO(json.dumps(assets, indent=2, ensure_ascii=False).encode('utf-8'))


def snapshot_to_xml(assets):
    """
    Serialize a snapshot to XML

    Returns:
        io.BytesIO: XML document with one <item> per asset
    """
    root = ET.Element('inventory')
    for asset in assets:
        item_elmt = ET.SubElement(root, 'item')
        for field in EXPORT_FIELDS:
            field_elmt = ET.SubElement(item_elmt, field)
            value = asset.get(field)
            field_elmt.text = '' if value is None else clean_text(str(value))

    output_xml = io.BytesIO()
    tree = ET.ElementTree(root)
    tree.write(output_xml, encoding='utf-8', xml_declaration=True)
    output_xml.seek(0)
    return output_xml


def snapshot_to_xlsx(assets):
    """
    Serialize a snapshot to an Excel workbook

    Returns:
        io.BytesIO: XLSX workbook with a single 'Inventory' sheet
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Inventory"

    headers = ["Id", "Name", "Quantity", "Category"]
    ws.append(headers)

    # Style headers: bold, white text, blue fill, centered
    header_fill = PatternFill(start_color="4F81BD", end_color="4F81BD", fill_type="solid")
    header_font = Font(color="FFFFFF", bold=True)
    for col_num in range(1, len(headers) + 1):
        cell = ws.cell(row=1, column=col_num)
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center", vertical="center")
    ws.row_dimensions[1].height = 25

    ws.column_dimensions["A"].width = 16
    ws.column_dimensions["B"].width = 30
    ws.column_dimensions["C"].width = 10
    ws.column_dimensions["D"].width = 20

    for row_index, asset in enumerate(assets, start=2):
        for col_num, field in enumerate(EXPORT_FIELDS, start=1):
            value = asset.get(field)
            # Cells only hold scalars
            if value is not None and not isinstance(value, (str, int, float)):
                value = json.dumps(value)
            if isinstance(value, str):
                value = clean_text(value)
            cell = ws.cell(row=row_index, column=col_num, value=value)
            # Text starting with "=" stays text, never a formula
            if isinstance(value, str):
                cell.data_type = 's'
            cell.alignment = Alignment(horizontal="center", vertical="center")

    output_xlsx = io.BytesIO()
    wb.save(output_xlsx)
    output_xlsx.seek(0)
    return output_xlsx
