import sys
from pathlib import Path

import pytest

# Make 'src' importable without an editable install
ROOT_DIR = Path(__file__).parent.parent.absolute()
src_dir = ROOT_DIR / "src"

if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from erd_sql.models import FK, PK, Attribute, Schema, Table  # noqa: E402


@pytest.fixture
def shop_schema():
    """customers <- orders, validated shape used by graph and generator tests."""
    customers = Table("customers", [
        Attribute("id", PK, "INTEGER", is_not_null=True),
        Attribute("name", data_type="VARCHAR(100)"),
    ])
    orders = Table("orders", [
        Attribute("id", PK, "BIGINT", is_not_null=True),
        Attribute("customer_id", FK, "INTEGER", ref_table="customers", ref_attr="id"),
        Attribute("total", data_type="DECIMAL(10,2)"),
    ])
    return Schema([customers, orders])
