import logging

import pytest

from erd_sql.errors import SchemaValidationError
from erd_sql.models import FK, PK, Attribute, Schema, Table
from erd_sql.validator import find_violations, validate_schema


def test_valid_schema_passes(shop_schema):
    assert validate_schema(shop_schema) is shop_schema


def test_all_violations_are_reported_together():
    schema = Schema([
        Table("users", [Attribute("id", PK)]),
        Table("users", [Attribute("id", PK)]),
        Table("orders", [
            Attribute("id", PK),
            Attribute("customer_id", FK, ref_table="customers", ref_attr="id"),
        ]),
    ])

    with pytest.raises(SchemaValidationError) as excinfo:
        validate_schema(schema)

    error = excinfo.value
    assert len(error.violations) == 2
    message = str(error)
    assert message.startswith("Schema validation failed:")
    assert "Duplicate table name: users" in message
    assert "references non-existent table customers" in message


def test_each_rule():
    schema = Schema([
        Table("empty"),
        Table("t", [
            Attribute("id", PK),
            Attribute("id"),
            Attribute("Id"),
            Attribute("half", FK, ref_table="t"),
            Attribute("bad_col", FK, ref_table="t", ref_attr="nope"),
        ]),
    ])

    violations = find_violations(schema)

    assert violations == [
        "Table empty has no columns defined (empty table)",
        "Duplicate column name 'id' in table t",
        "Foreign key t.half is missing reference information",
        "Foreign key t.bad_col references non-existent column t.nope (reference not found)",
    ]


def test_missing_primary_key_is_only_a_warning(caplog):
    schema = Schema([Table("log", [Attribute("message", data_type="TEXT")])])

    with caplog.at_level(logging.WARNING, logger="erd_sql.validator"):
        validate_schema(schema)

    assert "log has no primary key" in caplog.text
