"""
Shared pytest fixtures for dbmaint test suite

This module provides reusable fixtures for:
- Fake cursors, sessions and session providers (no database needed)
- Recording listeners
- Database connection arguments for integration tests
"""

import os
from contextlib import contextmanager

import pytest
from dotenv import load_dotenv

from dbmaint import DBObject, ToolHandler, ToolSettings
from dbmaint.runner import ArgType, NullProgressMonitor, Session

load_dotenv()


# ==================== Fakes ====================

T1 = DBObject("public", "T1")
T2 = DBObject("public", "T2")
T3 = DBObject("public", "T3")


def settings_for(*objects):
    return ToolSettings(object_list=tuple(objects))


class ScriptedTool(ToolHandler[DBObject, ToolSettings[DBObject]]):
    """Returns canned actions per object and records generator calls"""

    def __init__(self, actions, broken=()):
        self.actions = actions
        self.broken = set(broken)
        self.calls = []

    def create_tool_settings(self):
        return ToolSettings()

    def generate_object_queries(self, session, settings, obj):
        self.calls.append(obj)
        if obj in self.broken:
            raise ValueError(f"cannot handle {obj}")
        return list(self.actions.get(obj, []))


class FakeCursor:
    """
    Records executed statements. Statements listed in `failing` raise.

    `on_execute` is called with each statement before it runs. A
    `transactional` cursor behaves like an open PostgreSQL transaction: after
    a failure it rejects everything until ROLLBACK TO SAVEPOINT.
    """

    def __init__(self, failing=(), on_execute=None, transactional=False):
        self.executed = []
        self.failing = set(failing)
        self.on_execute = on_execute
        self.transactional = transactional
        self.aborted = False
        self.rowcount = -1
        self.closed = False

    def execute(self, query, vars=None):
        if self.on_execute:
            self.on_execute(query)
        if self.aborted:
            if not query.startswith("ROLLBACK TO SAVEPOINT"):
                raise RuntimeError("current transaction is aborted")
            self.aborted = False
        if query in self.failing:
            self.aborted = self.transactional
            raise RuntimeError(f"boom: {query}")
        self.executed.append(query)
        self.rowcount = 1

    def fetchone(self):
        return None

    def fetchall(self):
        return []

    def close(self):
        self.closed = True


class FakeSessions:
    """Session provider handing out sessions on one shared FakeCursor"""

    def __init__(self, cursor=None, unreachable=(), savepoints=False):
        self.cursor = cursor or FakeCursor()
        self.savepoints = savepoints
        self.unreachable = set(unreachable)
        self.opened = []
        self.closed = []

    @contextmanager
    def __call__(self, monitor, obj, purpose):
        from dbmaint.exceptions import SessionError

        if obj in self.unreachable:
            raise SessionError("connection refused", obj)
        self.opened.append(obj)
        try:
            yield Session(self.cursor, obj, purpose, savepoints=self.savepoints)
        finally:
            self.closed.append(obj)


class RecordingListener:
    def __init__(self):
        self.events = []
        self.statistics = []

    def task_started(self, settings):
        self.events.append(("started", settings))

    def task_finished(self, settings, error):
        self.events.append(("finished", settings, error))

    @property
    def finished(self):
        return [e for e in self.events if e[0] == "finished"]


class RecordingStatisticsListener(RecordingListener):
    def handle_action_statistics(self, obj, action, session, statistics):
        self.statistics.append((obj, action, list(statistics)))


@pytest.fixture
def cursor():
    return FakeCursor()


@pytest.fixture
def sessions(cursor):
    return FakeSessions(cursor)


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def monitor():
    return NullProgressMonitor()


# ==================== Database Connection ====================


@pytest.fixture(scope="session")
def db_args():
    """
    Database connection arguments.

    Scope: session - created once and reused for all tests.
    Uses DB_URL environment variable or defaults to local PostgreSQL.
    """
    return ArgType(
        verbosity=0,
        dburl=os.environ.get("DB_URL", os.environ.get("DBURL", "postgresql://postgres@localhost:5435/postgres")),
    )


@pytest.fixture
def db_cursor(db_args):
    """
    Provide an autocommit database cursor, skipping when no database is reachable.
    """
    psycopg = pytest.importorskip("psycopg")
    try:
        conn = psycopg.connect(db_args.dburl, autocommit=True)
    except psycopg.OperationalError:
        pytest.skip("PostgreSQL not reachable")
    with conn, conn.cursor() as cursor:
        yield cursor


@pytest.fixture
def fruit_table(db_cursor):
    """
    Create a Fruit table with sample data.

    Usage:
        def test_vacuum_fruit(db_args, fruit_table):
            run_tool("vacuum", [fruit_table], dburl=db_args.dburl)
    """
    db_cursor.execute(
        """
        DROP TABLE IF EXISTS "Fruit" CASCADE;
        CREATE TABLE "Fruit" (
            id integer PRIMARY KEY,
            name varchar(100)
        );

        INSERT INTO "Fruit" VALUES
            (1, 'banana'),
            (2, 'pear'),
            (3, 'apple'),
            (4, 'rambutan');
    """
    )
    yield "public.Fruit"
    db_cursor.execute('DROP TABLE IF EXISTS "Fruit" CASCADE')


# ==================== Pytest Configuration ====================


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Unit tests (no database required)")
    config.addinivalue_line("markers", "integration: Integration tests (require database)")
    config.addinivalue_line("markers", "django: Django integration tests")
