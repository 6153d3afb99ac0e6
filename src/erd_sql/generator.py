"""
SQL generation
==============

Serializes tables back into ``CREATE TABLE`` statements with inline
foreign-key constraints. No validation happens here: tables without
attributes are skipped and whatever references the model holds are
written as-is.
"""
import re
from typing import Any, Dict, Iterable, List

from .models import DEFAULT_DATA_TYPE, FK, PK, Attribute, Table

NO_TABLES_MESSAGE = 'No tables to export!'

WHITESPACE = re.compile(r'\s+')
# Defaults written bare when the model does not say whether they were quoted
SQL_DEFAULT_EXPRESSION = re.compile(
    r"^(?:NULL|TRUE|FALSE|CURRENT_\w+|[-+]?\d+(?:\.\d+)?|\w+\(.*\))$", re.IGNORECASE)


def _default_sql(attr: Attribute) -> str:
    value = str(attr.default_value)
    quoted = attr.default_is_string
    if quoted is None:
        quoted = not SQL_DEFAULT_EXPRESSION.match(value)
    if quoted:
        return "'" + value.replace("'", "''") + "'"
    return value


def _column_line(attr: Attribute, include_modifiers: bool) -> str:
    line = f"  {attr.name} {attr.data_type or DEFAULT_DATA_TYPE}"
    if attr.type == PK:
        line += ' PRIMARY KEY'
    elif attr.type == FK:
        line += ' NOT NULL'
    elif include_modifiers and attr.is_not_null:
        line += ' NOT NULL'

    if include_modifiers:
        if attr.is_unique and attr.type != PK:
            line += ' UNIQUE'
        if attr.default_value is not None:
            line += f" DEFAULT {_default_sql(attr)}"
        if attr.is_auto_increment:
            line += ' AUTO_INCREMENT'
    return line


def generate_table_sql(table: Table, include_modifiers: bool = False) -> str:
    """One ``CREATE TABLE`` statement, or '' for a table with no attributes."""
    if not table.attributes:
        return ''

    lines = [_column_line(attr, include_modifiers) for attr in table.attributes]
    for attr in table.attributes:
        if attr.type == FK and attr.ref_table and attr.ref_attr:
            lines.append(f"  FOREIGN KEY ({attr.name}) REFERENCES {attr.ref_table}({attr.ref_attr})")

    return f"CREATE TABLE {table.name} (\n" + ',\n'.join(lines) + '\n);\n\n'


def generate_sql(tables: Iterable[Table], include_modifiers: bool = False) -> str:
    """
    Generate SQL for ``tables`` in order.

    Args:
        tables: tables as held by the diagram model
        include_modifiers: also emit UNIQUE / DEFAULT / AUTO_INCREMENT

    Returns:
        The statements, each followed by a blank line, or
        ``NO_TABLES_MESSAGE`` when nothing was generated.
    """
    sql = ''.join(generate_table_sql(table, include_modifiers) for table in tables)
    return sql or NO_TABLES_MESSAGE


def table_name_for_node(node: Dict[str, Any]) -> str:
    data = node.get('data') or {}
    label = node.get('label', data.get('label'))
    if not isinstance(label, str):
        label = f"Table_{node.get('id')}"
    return WHITESPACE.sub('_', label)


def table_from_node(node: Dict[str, Any]) -> Table:
    """
    Read a diagram node payload. Attributes may sit on the node or under
    ``data``; editor-only fields are ignored.
    """
    data = node.get('data') or {}
    raw_attributes = node.get('attributes', data.get('attributes'))
    if not isinstance(raw_attributes, list):
        raw_attributes = []
    attributes = [Attribute.from_dict(item) for item in raw_attributes
                  if isinstance(item, dict) and item.get('name')]
    return Table(name=table_name_for_node(node), attributes=attributes)


def generate_sql_from_nodes(nodes: List[Dict[str, Any]], include_modifiers: bool = False) -> str:
    return generate_sql((table_from_node(node) for node in nodes if isinstance(node, dict)), include_modifiers)
