"""
Primary parser: sqlglot adapter
===============================

Parses one statement with sqlglot and lowers the syntax tree into typed
definitions. Grammar errors come back as failed ``ParseResult`` values so
the chain can hand the statement to the fallback parser.
"""
import logging
import re
from typing import List, Optional

import sqlglot
from sqlglot import exp
from sqlglot.errors import SqlglotError

from .definitions import (
    AlterTableDefinition,
    ColumnDefinition,
    ForeignKeyConstraint,
    PrimaryKeyConstraint,
    Reference,
    TableDefinition,
    UniqueConstraint,
)
from .strategies import ParseResult, StatementParser

logger = logging.getLogger(__name__)

SCHEMA_STATEMENT = re.compile(r'^\s*(CREATE|ALTER)\s+TABLE\b', re.IGNORECASE)


def _identifier(node) -> str:
    """Name of a column reference, whether bare, ordered or wrapped in a Column."""
    if isinstance(node, exp.Identifier):
        return node.name
    ident = node.find(exp.Identifier)
    return ident.name if ident is not None else node.name


def _identifiers(nodes) -> tuple:
    return tuple(_identifier(node) for node in nodes or [])


def _reference_target(reference: exp.Reference):
    """(table, [columns]) of a REFERENCES clause."""
    target = reference.this
    if isinstance(target, exp.Schema):
        return target.this.name, list(_identifiers(target.expressions))
    return target.name, []


class GrammarParser(StatementParser):
    """sqlglot-backed strategy handling CREATE TABLE and ALTER TABLE ... FOREIGN KEY."""

    name = 'grammar'

    def __init__(self, dialect: Optional[str] = None):
        self.dialect = dialect

    def parse(self, statement: str) -> ParseResult:
        try:
            tree = sqlglot.parse_one(statement, read=self.dialect)
        except SqlglotError as e:
            return ParseResult.failure(f"syntax error: {e}", statement, self.name)

        if tree is None:
            return ParseResult.ignored(self.name)

        if isinstance(tree, exp.Command):
            # sqlglot keeps statements it cannot model as raw commands
            if SCHEMA_STATEMENT.match(statement):
                return ParseResult.failure(
                    'unsupported table definition syntax', statement, self.name)
            logger.info("Ignoring unsupported statement: %s", tree.name)
            return ParseResult.ignored(self.name)

        if isinstance(tree, exp.Create):
            if (tree.kind or '').upper() != 'TABLE':
                logger.info("Ignoring CREATE %s statement", tree.kind)
                return ParseResult.ignored(self.name)
            return self._parse_create_table(tree, statement)

        if isinstance(tree, exp.Alter):
            return self._parse_alter_table(tree, statement)

        logger.info("Ignoring unsupported statement type: %s", tree.key)
        return ParseResult.ignored(self.name)

    def _parse_create_table(self, tree: exp.Create, statement: str) -> ParseResult:
        schema = tree.this
        if not isinstance(schema, exp.Schema) or not isinstance(schema.this, exp.Table):
            return ParseResult.failure('CREATE TABLE has no column definitions', statement, self.name)

        table_name = schema.this.name
        if not table_name:
            return ParseResult.failure('could not extract table name', statement, self.name)

        definitions = []
        for expression in schema.expressions:
            if isinstance(expression, exp.ColumnDef):
                definitions.append(self._column_definition(expression))
            else:
                definitions.extend(self._constraint_definitions(expression))

        logger.debug("Parsed table %s with %d definitions", table_name, len(definitions))
        return ParseResult.success(TableDefinition(table_name, tuple(definitions)), self.name)

    def _column_definition(self, column: exp.ColumnDef) -> ColumnDefinition:
        kind = column.args.get('kind')
        fields = {
            'name': column.name,
            'raw_type': kind.sql(dialect=self.dialect) if kind is not None else '',
        }

        for constraint in column.args.get('constraints') or []:
            option = constraint.args.get('kind') if isinstance(constraint, exp.ColumnConstraint) else constraint

            if isinstance(option, exp.PrimaryKeyColumnConstraint):
                fields['primary_key'] = True
                fields['not_null'] = True
            elif isinstance(option, exp.NotNullColumnConstraint):
                if not option.args.get('allow_null'):
                    fields['not_null'] = True
            elif isinstance(option, exp.UniqueColumnConstraint):
                fields['unique'] = True
            elif isinstance(option, exp.AutoIncrementColumnConstraint):
                fields['auto_increment'] = True
            elif isinstance(option, exp.GeneratedAsIdentityColumnConstraint):
                if option.args.get('expression') is None:
                    fields['auto_increment'] = True
            elif isinstance(option, exp.DefaultColumnConstraint):
                value = option.this
                if isinstance(value, exp.Literal):
                    fields['default_value'] = value.name
                    fields['default_is_string'] = value.is_string
                elif value is not None:
                    fields['default_value'] = value.sql(dialect=self.dialect)
            elif isinstance(option, exp.Reference):
                ref_table, ref_columns = _reference_target(option)
                fields['reference'] = Reference(ref_table, ref_columns[0] if ref_columns else None)

        return ColumnDefinition(**fields)

    def _constraint_definitions(self, expression) -> List:
        if isinstance(expression, exp.Constraint):
            # CONSTRAINT <name> <kind> ...
            result = []
            for inner in expression.expressions:
                result.extend(self._constraint_definitions(inner))
            return result

        if isinstance(expression, exp.PrimaryKey):
            return [PrimaryKeyConstraint(_identifiers(expression.expressions))]

        if isinstance(expression, exp.ForeignKey):
            return [self._foreign_key(expression)]

        if isinstance(expression, exp.UniqueColumnConstraint):
            target = expression.this
            columns = _identifiers(target.expressions) if isinstance(target, exp.Schema) else ()
            return [UniqueConstraint(columns)] if columns else []

        logger.debug("Skipping table-level definition %s", expression.key)
        return []

    def _foreign_key(self, foreign_key: exp.ForeignKey) -> ForeignKeyConstraint:
        reference = foreign_key.args.get('reference')
        ref_table, ref_columns = _reference_target(reference) if reference is not None else ('', [])
        return ForeignKeyConstraint(
            columns=_identifiers(foreign_key.expressions),
            referenced_table=ref_table,
            referenced_columns=tuple(ref_columns),
        )

    def _parse_alter_table(self, tree: exp.Alter, statement: str) -> ParseResult:
        if (tree.args.get('kind') or 'TABLE').upper() != 'TABLE':
            return ParseResult.ignored(self.name)

        foreign_keys = tuple(self._foreign_key(fk) for fk in tree.find_all(exp.ForeignKey))
        if not foreign_keys:
            logger.info("Ignoring ALTER TABLE %s without foreign key constraints", tree.this.name)
            return ParseResult.ignored(self.name)

        return ParseResult.success(AlterTableDefinition(tree.this.name, foreign_keys), self.name)
