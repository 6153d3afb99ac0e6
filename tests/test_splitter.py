import pytest

from erd_sql.errors import EmptyInputError, NoTableDefinitionError
from erd_sql.splitter import extract_parenthesized, split_by_commas, split_statements, strip_comments


def test_split_by_commas_keeps_type_parameters():
    assert split_by_commas("a DECIMAL(10,2), b INT") == ["a DECIMAL(10,2)", "b INT"]


def test_split_by_commas_nested_parentheses():
    parts = split_by_commas("id INT, CHECK (price > ROUND(cost, 2)), name TEXT")
    assert parts == ["id INT", "CHECK (price > ROUND(cost, 2))", "name TEXT"]


def test_strip_comments():
    sql = """
    -- leading comment
    CREATE TABLE a (id INT); /* block
    comment */ CREATE TABLE b (id INT); -- trailing
    """
    cleaned = strip_comments(sql)
    assert "--" not in cleaned
    assert "/*" not in cleaned
    assert "CREATE TABLE a" in cleaned
    assert "CREATE TABLE b" in cleaned


def test_split_statements_drops_empty_fragments():
    statements = split_statements("CREATE TABLE a (id INT);;\n\n CREATE TABLE b (id INT);\n")
    assert statements == ["CREATE TABLE a (id INT)", "CREATE TABLE b (id INT)"]


def test_split_statements_ignores_semicolons_inside_parentheses():
    statements = split_statements("CREATE TABLE a (id INT, note VARCHAR(10) DEFAULT (';'));")
    assert len(statements) == 1


@pytest.mark.parametrize("sql", ["", "   \n\t"])
def test_split_statements_empty_input(sql):
    with pytest.raises(EmptyInputError):
        split_statements(sql)


def test_split_statements_comments_only():
    with pytest.raises(EmptyInputError):
        split_statements("-- nothing here\n/* or here */")


def test_split_statements_requires_create_table():
    with pytest.raises(NoTableDefinitionError) as excinfo:
        split_statements("SELECT 1;")
    assert "No CREATE TABLE statements found" in str(excinfo.value)


def test_create_table_inside_comment_does_not_count():
    with pytest.raises(NoTableDefinitionError):
        split_statements("-- CREATE TABLE users (id INT)\nSELECT 1;")


def test_create_table_check_is_case_insensitive():
    assert split_statements("create table t (id int);") == ["create table t (id int)"]


def test_extract_parenthesized():
    body, end = extract_parenthesized("CREATE TABLE t (a DECIMAL(10,2), b INT) ENGINE=InnoDB")
    assert body == "a DECIMAL(10,2), b INT"
    assert end == len("CREATE TABLE t (a DECIMAL(10,2), b INT)") - 1


def test_extract_parenthesized_unbalanced():
    assert extract_parenthesized("CREATE TABLE t (a INT") is None
    assert extract_parenthesized("no parens") is None
