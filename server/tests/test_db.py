from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from igreja.core.db import build_engine, get_db


def test_in_memory_sqlite_shares_one_connection():
    engine = build_engine("sqlite+pysqlite:///:memory:")

    assert isinstance(engine.pool, StaticPool)
    with engine.begin() as connection:
        connection.exec_driver_sql("CREATE TABLE notes (id INTEGER PRIMARY KEY)")
    with engine.connect() as connection:
        assert connection.exec_driver_sql("SELECT count(*) FROM notes").scalar() == 0


def test_file_sqlite_uses_regular_pool(tmp_path):
    engine = build_engine(f"sqlite+pysqlite:///{tmp_path / 'igreja.db'}")

    assert not isinstance(engine.pool, StaticPool)


def test_get_db_yields_and_closes_a_session():
    dependency = get_db()
    session = next(dependency)

    assert isinstance(session, Session)
    dependency.close()
