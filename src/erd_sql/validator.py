"""
Structural validation of an assembled schema.

Every violation is collected before raising, so one error lists them all.
"""
import logging
from typing import List

from .errors import SchemaValidationError
from .models import FK, Schema

logger = logging.getLogger(__name__)


def find_violations(schema: Schema) -> List[str]:
    errors = []
    table_names = set()

    for table in schema.tables:
        if table.name in table_names:
            errors.append(f"Duplicate table name: {table.name}")
        table_names.add(table.name)

        if not table.attributes:
            errors.append(f"Table {table.name} has no columns defined (empty table)")

        column_names = set()
        for attr in table.attributes:
            if attr.name in column_names:
                errors.append(f"Duplicate column name '{attr.name}' in table {table.name}")
            column_names.add(attr.name)

            if attr.type != FK:
                continue

            if not attr.ref_table or not attr.ref_attr:
                errors.append(f"Foreign key {table.name}.{attr.name} is missing reference information")
                continue

            referenced = schema.find_table(attr.ref_table)
            if referenced is None:
                errors.append(
                    f"Foreign key {table.name}.{attr.name} references non-existent table "
                    f"{attr.ref_table} (reference not found)"
                )
            elif referenced.find_attribute(attr.ref_attr) is None:
                errors.append(
                    f"Foreign key {table.name}.{attr.name} references non-existent column "
                    f"{attr.ref_table}.{attr.ref_attr} (reference not found)"
                )

        if table.attributes and not table.has_primary_key:
            logger.warning("Table %s has no primary key defined", table.name)

    return errors


def validate_schema(schema: Schema) -> Schema:
    """
    Raises:
        SchemaValidationError: listing every violation, one per line
    """
    violations = find_violations(schema)
    if violations:
        raise SchemaValidationError(violations)
    return schema
