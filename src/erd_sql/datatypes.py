"""
Canonicalize free-form SQL type strings into the fixed DATA_TYPES set.

The mapping is lossy: anything that is not recognized becomes
``VARCHAR(255)`` and lengths/precision collapse into fixed buckets.
"""
import re

from .models import DATA_TYPES, DEFAULT_DATA_TYPE

VARCHAR_LENGTH = re.compile(r'varchar\s*\(\s*(\d+)')


def _varchar_bucket(lower_type):
    match = VARCHAR_LENGTH.search(lower_type)
    if not match:
        return DEFAULT_DATA_TYPE
    length = int(match.group(1))
    if length <= 50:
        return 'VARCHAR(50)'
    if length <= 100:
        return 'VARCHAR(100)'
    return 'VARCHAR(255)'


def normalize_data_type(data_type):
    """
    Map ``data_type`` to one canonical type.

    Substring checks run in a fixed priority order, so e.g. ``BIGINT``
    is claimed by the integer family before anything else sees it.
    """
    if not data_type:
        return DEFAULT_DATA_TYPE
    lower_type = str(data_type).lower()

    if 'int' in lower_type or 'serial' in lower_type or 'identity' in lower_type:
        return 'BIGINT' if 'big' in lower_type else 'INTEGER'
    if 'varchar' in lower_type:
        return _varchar_bucket(lower_type)
    if 'char' in lower_type:
        return 'CHAR(10)'
    if 'text' in lower_type:
        return 'TEXT'
    if 'date' in lower_type:
        return 'DATETIME' if 'time' in lower_type else 'DATE'
    if 'time' in lower_type:
        return 'TIMESTAMP' if 'stamp' in lower_type else 'TIME'
    if 'decimal' in lower_type or 'numeric' in lower_type:
        return 'DECIMAL(10,2)'
    if 'float' in lower_type:
        return 'FLOAT'
    if 'double' in lower_type:
        return 'DOUBLE'
    if 'bool' in lower_type:
        return 'BOOLEAN'
    if 'json' in lower_type:
        return 'JSON'
    if 'blob' in lower_type or 'binary' in lower_type or 'bytea' in lower_type:
        return 'BLOB'

    return DEFAULT_DATA_TYPE


def is_canonical(data_type):
    return data_type in DATA_TYPES
