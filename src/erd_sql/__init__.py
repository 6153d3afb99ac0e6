"""
erd-sql - SQL schema import/export engine for ER diagram editors
"""

__version__ = "1.0.0"

from .datatypes import normalize_data_type
from .generator import generate_sql, generate_sql_from_nodes
from .importer import SchemaImporter, import_sql, parse, parse_sql_schema

__all__ = [
    "SchemaImporter",
    "generate_sql",
    "generate_sql_from_nodes",
    "import_sql",
    "normalize_data_type",
    "parse",
    "parse_sql_schema",
]
