from erd_sql.definitions import (
    ColumnDefinition,
    DefinitionKind,
    ForeignKeyConstraint,
    PrimaryKeyConstraint,
    Reference,
    UniqueConstraint,
)
from erd_sql.fallback import ManualParser, parse_clause, parse_column


def test_parse_column_with_modifiers():
    column = parse_column("code VARCHAR(20) NOT NULL UNIQUE DEFAULT 'abc'")
    assert column == ColumnDefinition(
        name="code",
        raw_type="VARCHAR(20)",
        not_null=True,
        unique=True,
        default_value="abc",
        default_is_string=True,
    )


def test_parse_column_identity_and_primary_key():
    column = parse_column("id INT IDENTITY(1,1) PRIMARY KEY")
    assert column.primary_key
    assert column.not_null
    assert column.auto_increment
    assert column.raw_type == "INT"


def test_parse_column_inline_reference():
    column = parse_column("user_id INT REFERENCES users(id)")
    assert column.reference == Reference("users", "id")


def test_parse_column_keeps_type_parameters():
    column = parse_column("price DECIMAL(10,2) DEFAULT 0")
    assert column.raw_type == "DECIMAL(10,2)"
    assert column.default_value == "0"
    assert not column.default_is_string


def test_parse_clause_table_constraints():
    pk, = parse_clause("PRIMARY KEY (order_id, line_no)")
    assert pk == PrimaryKeyConstraint(("order_id", "line_no"))

    fk, = parse_clause("CONSTRAINT fk_user FOREIGN KEY (`user_id`) REFERENCES `users` (`id`)")
    assert fk == ForeignKeyConstraint(("user_id",), "users", ("id",))

    unique, = parse_clause("UNIQUE KEY uk_email (email)")
    assert unique == UniqueConstraint(("email",))


def test_parse_clause_skips_indexes_and_checks():
    assert parse_clause("KEY idx_name (name)") == []
    assert parse_clause("INDEX idx_name (name)") == []
    assert parse_clause("CHECK (price > 0)") == []
    assert parse_clause("CONSTRAINT chk_price CHECK (price > 0)") == []


def test_manual_parser_accepts_only_create_table():
    parser = ManualParser()
    assert parser.accepts("create table t (id int)")
    assert not parser.accepts("ALTER TABLE t ADD COLUMN x INT")


def test_manual_parser_table():
    statement = """CREATE TABLE IF NOT EXISTS shop.orders (
        id BIGINT PRIMARY KEY AUTO_INCREMENT,
        user_id INT NOT NULL,
        amount DECIMAL(10,2),
        FOREIGN KEY (user_id) REFERENCES users(id)
    ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4"""

    result = ManualParser().parse(statement)

    assert result.ok
    table = result.definition
    assert table.name == "orders"
    kinds = [d.kind for d in table.definitions]
    assert kinds == [
        DefinitionKind.COLUMN,
        DefinitionKind.COLUMN,
        DefinitionKind.COLUMN,
        DefinitionKind.FOREIGN_KEY,
    ]
    assert [d.name for d in table.definitions[:3]] == ["id", "user_id", "amount"]
    assert table.definitions[0].auto_increment


def test_manual_parser_failures_are_results():
    parser = ManualParser()

    no_name = parser.parse("CREATE TABLE")
    assert not no_name.ok
    assert "table name" in no_name.error.reason

    unbalanced = parser.parse("CREATE TABLE t (id INT, name VARCHAR(10)")
    assert not unbalanced.ok
    assert "unbalanced" in unbalanced.error.reason
    assert unbalanced.error.strategy == "manual"


def test_parse_column_escaped_string_default():
    column = parse_column("note VARCHAR(50) DEFAULT 'it''s on hold'")
    assert column.default_value == "it's on hold"
    assert column.default_is_string


def test_columns_named_like_index_keywords_are_kept():
    key, = parse_clause("key VARCHAR(50) NOT NULL")
    assert (key.name, key.raw_type, key.not_null) == ("key", "VARCHAR(50)", True)

    index, = parse_clause("index INT")
    assert index.name == "index"

    check, = parse_clause("check BOOLEAN DEFAULT FALSE")
    assert check.name == "check"

    amount, = parse_clause("key DECIMAL(10,2)")
    assert amount.raw_type == "DECIMAL(10,2)"


def test_index_clauses_with_options_are_skipped():
    assert parse_clause("KEY (name)") == []
    assert parse_clause("UNIQUE INDEX ux_email (email)") == [UniqueConstraint(("email",))]
    assert parse_clause("FULLTEXT KEY ft_body (body)") == []
    assert parse_clause("KEY idx_name USING BTREE (name)") == []


def test_schema_qualified_references():
    fk, = parse_clause("FOREIGN KEY (user_id) REFERENCES public.users(id)")
    assert fk == ForeignKeyConstraint(("user_id",), "users", ("id",))

    quoted, = parse_clause('FOREIGN KEY ("user_id") REFERENCES "public"."users" ("id")')
    assert quoted == ForeignKeyConstraint(("user_id",), "users", ("id",))

    column = parse_column("user_id INT REFERENCES public.users(id)")
    assert column.reference == Reference("users", "id")
