"""
Assembler: fold statement contributions into one schema and apply the
accumulated foreign-key records.
"""
import logging
from typing import Iterable, List, Optional, Tuple

from .definitions import StatementContribution
from .models import PK, ForeignKeyRecord, Schema

logger = logging.getLogger(__name__)


def merge_contributions(contributions: Iterable[StatementContribution]) -> StatementContribution:
    """Concatenate tables and FK records in statement order."""
    merged = StatementContribution()
    for contribution in contributions:
        merged.tables.extend(contribution.tables)
        merged.foreign_keys.extend(contribution.foreign_keys)
    return merged


def _resolve_referenced_column(schema: Schema, record: ForeignKeyRecord) -> Optional[str]:
    """A bare ``REFERENCES t`` points at the single-column primary key of ``t``."""
    if record.referenced_column:
        return record.referenced_column
    target = schema.find_table(record.referenced_table)
    if target is None:
        return None
    primary_keys = [attr.name for attr in target.attributes if attr.type == PK]
    return primary_keys[0] if len(primary_keys) == 1 else None


def apply_foreign_keys(schema: Schema, foreign_keys: List[ForeignKeyRecord]) -> Schema:
    """
    Overwrite each referenced attribute with its FK role.

    Records for unknown tables or columns are skipped here; dangling
    references on attributes are reported by the validator.
    """
    for record in foreign_keys:
        table = schema.find_table(record.table)
        if table is None:
            logger.debug("FK %s.%s: table not parsed, skipping", record.table, record.column)
            continue
        attr = table.find_attribute(record.column)
        if attr is None:
            logger.debug("FK %s.%s: column not found, skipping", record.table, record.column)
            continue
        attr.mark_foreign_key(record.referenced_table, _resolve_referenced_column(schema, record))
    return schema


def assemble(contributions: Iterable[StatementContribution]) -> Tuple[Schema, List[ForeignKeyRecord]]:
    merged = merge_contributions(contributions)
    schema = Schema(tables=merged.tables)
    apply_foreign_keys(schema, merged.foreign_keys)
    return schema, merged.foreign_keys
