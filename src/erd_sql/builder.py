"""
Build tables from typed definitions.

``build_table`` handles a lowered CREATE TABLE: columns first take their
inline role, then table-level constraints retroactively mark the named
columns. ``build_alter`` turns ALTER TABLE foreign keys into records only;
they are applied later by the assembler.
"""
import logging
from typing import List

from .datatypes import normalize_data_type
from .definitions import (
    AlterTableDefinition,
    ColumnDefinition,
    DefinitionKind,
    ForeignKeyConstraint,
    StatementContribution,
    TableDefinition,
)
from .errors import ConstraintError
from .models import Attribute, ForeignKeyRecord, Table

logger = logging.getLogger(__name__)


def build_attribute(column: ColumnDefinition) -> Attribute:
    attr = Attribute(
        name=column.name,
        data_type=normalize_data_type(column.raw_type),
        is_not_null=column.not_null,
        is_unique=column.unique,
        is_auto_increment=column.auto_increment,
        default_value=column.default_value,
        default_is_string=column.default_is_string if column.default_value is not None else None,
    )
    if column.primary_key:
        attr.mark_primary_key()
    if column.reference is not None:
        attr.mark_foreign_key(column.reference.table, column.reference.column)
    return attr


def foreign_key_records(table_name: str, constraint: ForeignKeyConstraint) -> List[ForeignKeyRecord]:
    """
    Pair the i-th FK column with the i-th referenced column. A bare
    ``REFERENCES t`` leaves the referenced column for the assembler.

    Raises:
        ConstraintError: the two column lists differ in length
    """
    if not constraint.columns:
        raise ConstraintError(f"Foreign key constraint on {table_name} names no columns")
    if not constraint.referenced_table:
        raise ConstraintError(f"Foreign key constraint on {table_name} has no referenced table")
    if not constraint.referenced_columns:
        return [ForeignKeyRecord(table_name, column, constraint.referenced_table)
                for column in constraint.columns]
    if len(constraint.columns) != len(constraint.referenced_columns):
        raise ConstraintError(
            f"Foreign key constraint on {table_name} ({', '.join(constraint.columns)}) "
            f"references {constraint.referenced_table} ({', '.join(constraint.referenced_columns)}): "
            f"{len(constraint.columns)} column(s) cannot map to {len(constraint.referenced_columns)}"
        )
    return [
        ForeignKeyRecord(table_name, column, constraint.referenced_table, referenced)
        for column, referenced in zip(constraint.columns, constraint.referenced_columns)
    ]


def build_table(definition: TableDefinition) -> StatementContribution:
    table = Table(name=definition.name)
    records = []

    for item in definition.definitions:
        if item.kind is DefinitionKind.COLUMN:
            table.attributes.append(build_attribute(item))
            if item.reference is not None:
                records.append(ForeignKeyRecord(
                    table.name, item.name, item.reference.table, item.reference.column))
        elif item.kind is DefinitionKind.PRIMARY_KEY:
            for column in item.columns:
                attr = table.find_attribute(column)
                if attr:
                    attr.mark_primary_key()
                else:
                    logger.warning("Primary key constraint on %s names unknown column %s", table.name, column)
        elif item.kind is DefinitionKind.FOREIGN_KEY:
            for record in foreign_key_records(table.name, item):
                attr = table.find_attribute(record.column)
                if attr:
                    attr.mark_foreign_key(record.referenced_table, record.referenced_column)
                records.append(record)
        elif item.kind is DefinitionKind.UNIQUE:
            for column in item.columns:
                attr = table.find_attribute(column)
                if attr:
                    attr.is_unique = True

    logger.debug("Built table %s with %d attributes", table.name, len(table.attributes))
    return StatementContribution(tables=[table], foreign_keys=records)


def build_alter(definition: AlterTableDefinition) -> StatementContribution:
    records = []
    for constraint in definition.foreign_keys:
        records.extend(foreign_key_records(definition.table, constraint))
    return StatementContribution(foreign_keys=records)


def build_contribution(definition) -> StatementContribution:
    if isinstance(definition, TableDefinition):
        return build_table(definition)
    if isinstance(definition, AlterTableDefinition):
        return build_alter(definition)
    return StatementContribution()
