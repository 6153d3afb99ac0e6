"""
Schema model
============

Tables, attributes and the transient foreign-key records produced while
parsing. Attributes serialize to the camelCase shape the diagram editor
exchanges (``dataType``, ``refTable``, ``refAttr`` ...).
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


PK = 'PK'
FK = 'FK'
NORMAL = 'normal'

ATTRIBUTE_TYPES = (PK, FK, NORMAL)

DATA_TYPES = [
    'VARCHAR(255)',
    'VARCHAR(100)',
    'VARCHAR(50)',
    'TEXT',
    'INTEGER',
    'BIGINT',
    'DECIMAL(10,2)',
    'FLOAT',
    'DOUBLE',
    'BOOLEAN',
    'DATE',
    'DATETIME',
    'TIMESTAMP',
    'TIME',
    'CHAR(10)',
    'JSON',
    'BLOB',
]

DEFAULT_DATA_TYPE = 'VARCHAR(255)'

# camelCase wire key -> dataclass field
_WIRE_FIELDS = {
    'name': 'name',
    'type': 'type',
    'dataType': 'data_type',
    'refTable': 'ref_table',
    'refAttr': 'ref_attr',
    'isNotNull': 'is_not_null',
    'isUnique': 'is_unique',
    'isAutoIncrement': 'is_auto_increment',
    'defaultValue': 'default_value',
    'defaultIsString': 'default_is_string',
}


@dataclass
class Attribute:
    """A table column plus its key role and SQL-level modifiers."""
    name: str
    type: str = NORMAL
    data_type: str = DEFAULT_DATA_TYPE
    ref_table: Optional[str] = None
    ref_attr: Optional[str] = None
    is_not_null: bool = False
    is_unique: bool = False
    is_auto_increment: bool = False
    default_value: Optional[str] = None
    # None: unknown, the generator decides from the value
    default_is_string: Optional[bool] = None

    def mark_primary_key(self):
        self.type = PK
        self.is_not_null = True
        self.ref_table = None
        self.ref_attr = None

    def mark_foreign_key(self, ref_table: str, ref_attr: str):
        self.type = FK
        self.ref_table = ref_table
        self.ref_attr = ref_attr

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for wire_key, attr_name in _WIRE_FIELDS.items():
            value = getattr(self, attr_name)
            if value is None:
                continue
            data[wire_key] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Attribute':
        """Build from an editor payload; unknown keys (``isEditing``, ``editName`` ...) are ignored."""
        kwargs = {attr_name: data[wire_key] for wire_key, attr_name in _WIRE_FIELDS.items()
                  if data.get(wire_key) is not None}
        if 'name' not in kwargs:
            raise ValueError("attribute payload must contain 'name'")
        return cls(**kwargs)


@dataclass
class Table:
    name: str
    attributes: List[Attribute] = field(default_factory=list)

    def find_attribute(self, name: str) -> Optional[Attribute]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    @property
    def has_primary_key(self) -> bool:
        return any(attr.type == PK for attr in self.attributes)

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'attributes': [a.to_dict() for a in self.attributes]}


@dataclass(frozen=True)
class ForeignKeyRecord:
    """
    Parse-time link from ``table.column`` to ``referenced_table.referenced_column``.

    ``referenced_column`` is None for a bare ``REFERENCES t``; the assembler
    resolves it to the primary key of ``t``.
    """
    table: str
    column: str
    referenced_table: str
    referenced_column: Optional[str] = None


@dataclass
class Schema:
    """Ordered tables produced by one import."""
    tables: List[Table] = field(default_factory=list)

    def find_table(self, name: str) -> Optional[Table]:
        for table in self.tables:
            if table.name == name:
                return table
        return None

    @property
    def table_names(self) -> List[str]:
        return [t.name for t in self.tables]

    def foreign_keys(self) -> List[ForeignKeyRecord]:
        return [
            ForeignKeyRecord(table.name, attr.name, attr.ref_table, attr.ref_attr)
            for table in self.tables
            for attr in table.attributes
            if attr.type == FK and attr.ref_table and attr.ref_attr
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {'tables': [t.to_dict() for t in self.tables]}
