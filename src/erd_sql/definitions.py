"""
Typed statement definitions
===========================

Both parser strategies lower what they read into these nodes, so the
table builder never has to inspect a parser-specific tree. Each
definition carries a ``kind`` tag and only the fields relevant to it.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from .models import ForeignKeyRecord, Table


class DefinitionKind(Enum):
    COLUMN = 'column'
    PRIMARY_KEY = 'primary_key'
    FOREIGN_KEY = 'foreign_key'
    UNIQUE = 'unique'


@dataclass(frozen=True)
class Reference:
    """Target of an inline REFERENCES; ``column`` is None when only the table is named."""
    table: str
    column: Optional[str] = None


@dataclass(frozen=True)
class ColumnDefinition:
    name: str
    raw_type: str
    primary_key: bool = False
    not_null: bool = False
    unique: bool = False
    auto_increment: bool = False
    default_value: Optional[str] = None
    default_is_string: bool = False
    reference: Optional[Reference] = None
    kind: DefinitionKind = field(default=DefinitionKind.COLUMN, init=False)


@dataclass(frozen=True)
class PrimaryKeyConstraint:
    columns: Tuple[str, ...]
    kind: DefinitionKind = field(default=DefinitionKind.PRIMARY_KEY, init=False)


@dataclass(frozen=True)
class ForeignKeyConstraint:
    columns: Tuple[str, ...]
    referenced_table: str
    referenced_columns: Tuple[str, ...]
    kind: DefinitionKind = field(default=DefinitionKind.FOREIGN_KEY, init=False)


@dataclass(frozen=True)
class UniqueConstraint:
    columns: Tuple[str, ...]
    kind: DefinitionKind = field(default=DefinitionKind.UNIQUE, init=False)


ConstraintDefinition = Union[PrimaryKeyConstraint, ForeignKeyConstraint, UniqueConstraint]
Definition = Union[ColumnDefinition, ConstraintDefinition]


@dataclass(frozen=True)
class TableDefinition:
    """A lowered ``CREATE TABLE``: definitions in declaration order."""
    name: str
    definitions: Tuple[Definition, ...] = ()


@dataclass(frozen=True)
class AlterTableDefinition:
    """``ALTER TABLE <table> ADD CONSTRAINT ... FOREIGN KEY ...``"""
    table: str
    foreign_keys: Tuple[ForeignKeyConstraint, ...] = ()


@dataclass
class StatementContribution:
    """What one statement adds to the import: partial tables and FK records."""
    tables: List[Table] = field(default_factory=list)
    foreign_keys: List[ForeignKeyRecord] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.tables and not self.foreign_keys
