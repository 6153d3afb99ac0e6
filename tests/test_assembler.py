from erd_sql.assembler import apply_foreign_keys, assemble, merge_contributions
from erd_sql.definitions import StatementContribution
from erd_sql.models import FK, PK, Attribute, ForeignKeyRecord, Schema, Table


def _contribution(*tables, foreign_keys=()):
    return StatementContribution(tables=list(tables), foreign_keys=list(foreign_keys))


def test_merge_preserves_statement_order():
    merged = merge_contributions([
        _contribution(Table("a")),
        _contribution(foreign_keys=[ForeignKeyRecord("b", "a_id", "a", "id")]),
        _contribution(Table("b")),
    ])

    assert [t.name for t in merged.tables] == ["a", "b"]
    assert len(merged.foreign_keys) == 1


def test_deferred_foreign_key_marks_attribute():
    customers = Table("customers", [Attribute("id", PK, "INTEGER")])
    orders = Table("orders", [Attribute("id", PK, "INTEGER"), Attribute("customer_id", data_type="INTEGER")])

    schema, records = assemble([
        _contribution(orders),
        _contribution(customers),
        _contribution(foreign_keys=[ForeignKeyRecord("orders", "customer_id", "customers", "id")]),
    ])

    customer_id = schema.find_table("orders").find_attribute("customer_id")
    assert (customer_id.type, customer_id.ref_table, customer_id.ref_attr) == (FK, "customers", "id")
    assert len(records) == 1


def test_records_override_inline_marking():
    attr = Attribute("owner_id", FK, ref_table="users", ref_attr="uuid")
    schema = Schema([Table("docs", [attr])])

    apply_foreign_keys(schema, [ForeignKeyRecord("docs", "owner_id", "accounts", "id")])

    assert (attr.ref_table, attr.ref_attr) == ("accounts", "id")


def test_applying_twice_is_idempotent():
    schema = Schema([Table("t", [Attribute("x")])])
    record = ForeignKeyRecord("t", "x", "u", "id")

    apply_foreign_keys(schema, [record])
    apply_foreign_keys(schema, [record])

    assert schema.tables[0].attributes[0].to_dict() == {
        "name": "x", "type": FK, "dataType": "VARCHAR(255)", "refTable": "u", "refAttr": "id",
        "isNotNull": False, "isUnique": False, "isAutoIncrement": False,
    }


def test_unknown_tables_and_columns_are_skipped():
    schema = Schema([Table("t", [Attribute("x")])])

    apply_foreign_keys(schema, [
        ForeignKeyRecord("missing", "x", "u", "id"),
        ForeignKeyRecord("t", "missing", "u", "id"),
    ])

    assert schema.tables[0].attributes[0].type == "normal"


def test_bare_reference_resolves_to_primary_key():
    customers = Table("customers", [Attribute("code", PK), Attribute("name")])
    orders = Table("orders", [Attribute("customer_code")])
    schema = Schema([customers, orders])

    apply_foreign_keys(schema, [ForeignKeyRecord("orders", "customer_code", "customers")])

    assert orders.attributes[0].ref_attr == "code"
