"""
Fallback manual parser
======================

Regex recovery for CREATE TABLE statements the grammar rejects. It reads
the table name, the balanced column body and each top-level clause, and
trades completeness for tolerance of vendor dialects.
"""
import logging
import re

from .definitions import (
    ColumnDefinition,
    ForeignKeyConstraint,
    PrimaryKeyConstraint,
    Reference,
    TableDefinition,
    UniqueConstraint,
)
from .splitter import extract_parenthesized, split_by_commas
from .strategies import ParseResult, StatementParser

logger = logging.getLogger(__name__)

IDENT = r'[`"\[]?(\w+)[`"\]]?'
COLUMN_LIST = r'\(([^)]*)\)'

CREATE_TABLE_PREFIX = re.compile(r'^\s*CREATE\s+TABLE\b', re.IGNORECASE)
TABLE_NAME = re.compile(
    r'CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?(?:' + IDENT + r'\.)?' + IDENT + r'\s*\(',
    re.IGNORECASE,
)
CONSTRAINT_NAME = re.compile(r'^CONSTRAINT\s+' + IDENT + r'\s+', re.IGNORECASE)
FOREIGN_KEY = re.compile(
    r'FOREIGN\s+KEY\s*' + COLUMN_LIST + r'\s*REFERENCES\s+(?:' + IDENT + r'\.)?' + IDENT + r'\s*(?:' + COLUMN_LIST + r')?',
    re.IGNORECASE,
)
PRIMARY_KEY = re.compile(r'^PRIMARY\s+KEY\s*' + COLUMN_LIST, re.IGNORECASE)
UNIQUE = re.compile(r'^UNIQUE(?:\s+(?:KEY|INDEX))?(?:\s+' + IDENT + r')?\s*' + COLUMN_LIST, re.IGNORECASE)
# Index column lists start with a name; "key VARCHAR(50)" is a column called key.
SKIPPED_CLAUSE = re.compile(
    r'^(?:(?:FULLTEXT|SPATIAL)\s+)?(?:KEY|INDEX)(?:\s+' + IDENT + r')?(?:\s+USING\s+\w+)?'
    r'\s*\(\s*[`"\[]?[A-Za-z_]'
    r'|^(?:FULLTEXT|SPATIAL)(?:\s+' + IDENT + r')?\s*\('
    r'|^CHECK\s*\('
    r'|^EXCLUDE\s+(?:USING\b|\()',
    re.IGNORECASE,
)
COLUMN = re.compile(r'^' + IDENT + r'\s+([^\s(]+(?:\s*\([^)]*\))?)(.*)$', re.IGNORECASE | re.DOTALL)
INLINE_REFERENCE = re.compile(
    r'REFERENCES\s+(?:' + IDENT + r'\.)?' + IDENT + r'\s*(?:\(\s*' + IDENT + r'\s*\))?',
    re.IGNORECASE,
)
DEFAULT = re.compile(r"DEFAULT\s+('(?:[^']|'')*'|[^,\s]+(?:\([^)]*\))?)", re.IGNORECASE)
AUTO_INCREMENT = re.compile(r'\b(IDENTITY|AUTO_INCREMENT|AUTOINCREMENT)\b', re.IGNORECASE)


def _column_names(column_list):
    names = []
    for part in column_list.split(','):
        name = part.strip().strip('`"[]').split('(')[0].split()
        if name:
            names.append(name[0].strip('`"[]'))
    return tuple(names)


def parse_column(clause):
    """Parse ``name type [constraints...]``; None if the clause is not a column."""
    match = COLUMN.match(clause)
    if not match:
        return None

    name, raw_type, rest = match.group(1), match.group(2).strip(), match.group(3)
    upper_rest = rest.upper()

    reference = None
    ref_match = INLINE_REFERENCE.search(rest)
    if ref_match:
        reference = Reference(ref_match.group(2), ref_match.group(3))

    default_value = None
    default_is_string = False
    default_match = DEFAULT.search(rest)
    if default_match:
        default_value = default_match.group(1)
        if len(default_value) > 1 and default_value.startswith("'") and default_value.endswith("'"):
            default_value = default_value[1:-1].replace("''", "'")
            default_is_string = True

    primary_key = 'PRIMARY KEY' in upper_rest
    return ColumnDefinition(
        name=name,
        raw_type=raw_type,
        primary_key=primary_key,
        not_null=primary_key or 'NOT NULL' in upper_rest,
        unique='UNIQUE' in upper_rest,
        auto_increment=bool(AUTO_INCREMENT.search(rest)),
        default_value=default_value,
        default_is_string=default_is_string,
        reference=reference,
    )


def parse_clause(clause):
    """Classify one top-level clause of a table body into definitions."""
    clause = clause.strip()
    constraint_match = CONSTRAINT_NAME.match(clause)
    if constraint_match:
        clause = clause[constraint_match.end():]

    fk_match = FOREIGN_KEY.search(clause)
    if fk_match and clause.upper().startswith('FOREIGN'):
        return [ForeignKeyConstraint(
            columns=_column_names(fk_match.group(1)),
            referenced_table=fk_match.group(3),
            referenced_columns=_column_names(fk_match.group(4) or ''),
        )]

    pk_match = PRIMARY_KEY.match(clause)
    if pk_match:
        return [PrimaryKeyConstraint(_column_names(pk_match.group(1)))]

    unique_match = UNIQUE.match(clause)
    if unique_match:
        return [UniqueConstraint(_column_names(unique_match.group(2)))]

    if SKIPPED_CLAUSE.match(clause) or constraint_match:
        logger.debug("Fallback: skipping clause %r", clause)
        return []

    column = parse_column(clause)
    if column is None:
        logger.debug("Fallback: unrecognized clause %r", clause)
        return []
    return [column]


class ManualParser(StatementParser):
    """Heuristic CREATE TABLE parser used when the grammar fails."""

    name = 'manual'

    def accepts(self, statement):
        return bool(CREATE_TABLE_PREFIX.match(statement))

    def parse(self, statement):
        name_match = TABLE_NAME.search(statement)
        if not name_match:
            return ParseResult.failure('could not extract table name from CREATE TABLE', statement, self.name)
        table_name = name_match.group(2)

        body = extract_parenthesized(statement, name_match.end() - 1)
        if body is None:
            return ParseResult.failure(
                f"unbalanced parentheses in CREATE TABLE {table_name}", statement, self.name)

        definitions = []
        for clause in split_by_commas(body[0]):
            definitions.extend(parse_clause(clause))

        logger.debug("Fallback parsed table %s: %d definitions", table_name, len(definitions))
        return ParseResult.success(TableDefinition(table_name, tuple(definitions)), self.name)
