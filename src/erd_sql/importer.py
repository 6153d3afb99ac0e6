"""
Schema import pipeline
======================

split -> parse (grammar, then fallback) -> assemble -> validate -> graph.

Each statement is parsed independently into a contribution; contributions
are folded once every statement has been seen.

Usage:
    from erd_sql import import_sql

    nodes, edges = import_sql(open('schema.sql').read())
"""
import logging
from typing import List, Optional, Tuple

from .assembler import assemble
from .builder import build_contribution
from .definitions import StatementContribution
from .errors import SchemaParseError
from .fallback import ManualParser
from .grammar import GrammarParser
from .graph import GraphEdge, GraphNode, schema_to_graph
from .models import ForeignKeyRecord, Schema, Table
from .splitter import split_statements
from .strategies import FallbackChain
from .validator import validate_schema

logger = logging.getLogger(__name__)


class SchemaImporter:
    """Runs the import pipeline with a configurable SQL dialect."""

    def __init__(self, dialect: Optional[str] = None, chain: Optional[FallbackChain] = None):
        self.dialect = dialect
        self.chain = chain or FallbackChain(GrammarParser(dialect), ManualParser())

    def parse_statements(self, sql_text: str) -> Tuple[List[StatementContribution], List]:
        """
        Parse every statement into its contribution.

        Returns:
            (contributions, parse errors); a statement that neither
            strategy handled contributes nothing and adds its errors.
        """
        contributions = []
        errors = []
        for index, statement in enumerate(split_statements(sql_text), 1):
            outcome = self.chain.parse(statement, index)
            errors.extend(outcome.errors)
            if not outcome.result.ok or outcome.result.definition is None:
                continue
            contributions.append(build_contribution(outcome.result.definition))
        return contributions, errors

    def parse(self, sql_text: str) -> Tuple[List[Table], List[ForeignKeyRecord]]:
        """Tables with FK records applied, plus the records themselves (unvalidated)."""
        contributions, errors = self.parse_statements(sql_text)
        schema, foreign_keys = assemble(contributions)
        if not schema.tables:
            raise SchemaParseError(errors)
        return schema.tables, foreign_keys

    def parse_schema(self, sql_text: str) -> Schema:
        tables, foreign_keys = self.parse(sql_text)
        schema = validate_schema(Schema(tables=tables))
        logger.info("Imported %d tables with %d foreign keys", len(schema.tables), len(foreign_keys))
        return schema

    def import_sql(self, sql_text: str) -> Tuple[List[GraphNode], List[GraphEdge]]:
        return schema_to_graph(self.parse_schema(sql_text))


def parse(sql_text: str, dialect: Optional[str] = None) -> Tuple[List[Table], List[ForeignKeyRecord]]:
    return SchemaImporter(dialect).parse(sql_text)


def parse_sql_schema(sql_text: str, dialect: Optional[str] = None) -> Schema:
    """Parse and validate ``sql_text`` into a Schema."""
    return SchemaImporter(dialect).parse_schema(sql_text)


def import_sql(sql_text: str, dialect: Optional[str] = None) -> Tuple[List[GraphNode], List[GraphEdge]]:
    """Parse, validate and project ``sql_text`` into diagram nodes and edges."""
    return SchemaImporter(dialect).import_sql(sql_text)
