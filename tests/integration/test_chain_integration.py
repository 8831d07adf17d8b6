"""Integration tests running rendered chains against a live database.

Requires a [test] section with a 'profile' in test_config.toml inside the
configuration directory. Run with ``pytest -m integration``.
"""

import uuid
from typing import Iterator

import pytest

from sqlchain import DB, ConnectionContext, ExpressionChain

pytestmark = pytest.mark.integration


@pytest.fixture(scope="module")
def db(test_profile) -> Iterator[DB]:
    context = ConnectionContext(profile=test_profile)
    yield DB(context)
    context.close()


@pytest.fixture
def table(db, test_write_table) -> Iterator[str]:
    name = f"{test_write_table}_{uuid.uuid4().hex[:8]}".upper()
    db.exec(f"CREATE TEMPORARY TABLE {name} (id INT, name VARCHAR, team VARCHAR)")
    db.bulk_insert(name, ["ID", "NAME", "TEAM"], [(1, "ana", "core"), (2, "bo", "core"), (3, "cy", "web")])
    yield name
    db.exec(f"DROP TABLE IF EXISTS {name}")


class TestChainAgainstDatabase:
    """Rendered chains executed by the driver."""

    def test_select_with_conditions(self, db, table):
        chain = (
            ExpressionChain()
            .select("id", "name")
            .table(table)
            .where("team = ?", "core")
            .where("id > ?", 1)
            .order_by("id")
        )

        rows = db.fetch(chain).fetch_all()

        assert rows == [(2, "bo")]

    def test_limit_and_offset(self, db, table):
        chain = ExpressionChain().select("id").table(table).order_by("id").limit(1).offset(1)

        assert db.fetch(chain).fetch_all() == [(2,)]

    def test_transaction_rollback(self, db, table):
        tx = db.begin_transaction()
        tx.exec(f"DELETE FROM {table} WHERE id = $1", [3])
        tx.rollback_transaction()

        count = db.raw(f"SELECT COUNT(*) FROM {table}")
        assert count == (3,)
