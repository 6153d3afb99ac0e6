import pytest

from erd_sql.builder import build_alter, build_contribution, build_table, foreign_key_records
from erd_sql.definitions import (
    AlterTableDefinition,
    ColumnDefinition,
    ForeignKeyConstraint,
    PrimaryKeyConstraint,
    Reference,
    TableDefinition,
    UniqueConstraint,
)
from erd_sql.errors import ConstraintError
from erd_sql.models import FK, NORMAL, PK, ForeignKeyRecord


def test_inline_roles():
    contribution = build_table(TableDefinition("payments", (
        ColumnDefinition("id", "INT", primary_key=True),
        ColumnDefinition("order_id", "BIGINT", reference=Reference("orders", "id")),
        ColumnDefinition("note", "TEXT", default_value="n/a"),
    )))

    table, = contribution.tables
    id_attr, order_attr, note_attr = table.attributes
    assert (id_attr.type, id_attr.data_type, id_attr.is_not_null) == (PK, "INTEGER", True)
    assert (order_attr.type, order_attr.ref_table, order_attr.ref_attr) == (FK, "orders", "id")
    assert order_attr.data_type == "BIGINT"
    assert (note_attr.type, note_attr.default_value) == (NORMAL, "n/a")
    assert contribution.foreign_keys == [ForeignKeyRecord("payments", "order_id", "orders", "id")]


def test_table_constraints_mark_columns_retroactively():
    contribution = build_table(TableDefinition("order_items", (
        ColumnDefinition("order_id", "INT"),
        ColumnDefinition("line_no", "INT"),
        ColumnDefinition("sku", "VARCHAR(40)"),
        PrimaryKeyConstraint(("order_id", "line_no")),
        UniqueConstraint(("sku",)),
        ForeignKeyConstraint(("order_id",), "orders", ("id",)),
    )))

    table, = contribution.tables
    order_id, line_no, sku = table.attributes
    assert line_no.type == PK and line_no.is_not_null
    assert order_id.type == FK and order_id.ref_table == "orders"
    assert sku.is_unique and sku.data_type == "VARCHAR(50)"
    assert contribution.foreign_keys == [ForeignKeyRecord("order_items", "order_id", "orders", "id")]


def test_composite_foreign_key_is_positional():
    records = foreign_key_records("shipments", ForeignKeyConstraint(
        ("order_id", "line_no"), "order_items", ("order_id", "line_no")))

    assert records == [
        ForeignKeyRecord("shipments", "order_id", "order_items", "order_id"),
        ForeignKeyRecord("shipments", "line_no", "order_items", "line_no"),
    ]


def test_mismatched_foreign_key_lengths_raise():
    with pytest.raises(ConstraintError) as excinfo:
        foreign_key_records("shipments", ForeignKeyConstraint(("a", "b"), "order_items", ("id",)))
    assert "Foreign key constraint" in str(excinfo.value)


def test_bare_reference_defers_column():
    records = foreign_key_records("orders", ForeignKeyConstraint(("customer_id",), "customers", ()))
    assert records == [ForeignKeyRecord("orders", "customer_id", "customers", None)]


def test_alter_contributes_records_only():
    contribution = build_alter(AlterTableDefinition("orders", (
        ForeignKeyConstraint(("customer_id",), "customers", ("id",)),
    )))

    assert contribution.tables == []
    assert contribution.foreign_keys == [ForeignKeyRecord("orders", "customer_id", "customers", "id")]


def test_build_contribution_dispatch():
    assert build_contribution(None).is_empty
    assert len(build_contribution(TableDefinition("t", (ColumnDefinition("id", "INT"),))).tables) == 1
