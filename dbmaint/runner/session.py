"""
Database sessions for tool execution.

A session is one cursor bound to one target object. Sessions are opened
through a session provider, a callable returning a context manager:

    with open_session(monitor, obj, "Execute vacuum") as session:
        session.execute("VACUUM ...")

The context manager always releases the underlying connection/cursor, on
normal exit, on cancellation and on exceptions alike.
"""

from collections.abc import Callable
from contextlib import AbstractContextManager, contextmanager
from logging import getLogger

from ..exceptions import SessionError, StatementError
from ..tooltypes import Cursor, ProgressMonitor, object_label

logger = getLogger(__name__)

SessionProvider = Callable[[ProgressMonitor, object, str], AbstractContextManager["Session"]]

SAVEPOINT_NAME = "dbmaint_action"


class Session:
    """
    One cursor bound to one object.

    With `savepoints` set (sessions inside a transaction) every statement
    runs under its own savepoint, so a failed statement is rolled back alone
    and later statements in the same transaction still run.
    """

    def __init__(self, cursor: Cursor, obj, purpose: str = "", savepoints: bool = False):
        self.cursor = cursor
        self.obj = obj
        self.purpose = purpose
        self.savepoints = savepoints

    def execute(self, script: str) -> Cursor:
        """
        Execute `script` and return the cursor as the statement handle.

        Raises:
            StatementError: If the database rejects the statement
        """
        if self.savepoints:
            self.cursor.execute(f"SAVEPOINT {SAVEPOINT_NAME};")
        try:
            self.cursor.execute(script)
        except Exception as dberr:
            if self.savepoints:
                # get back to a non-error state
                self.cursor.execute(f"ROLLBACK TO SAVEPOINT {SAVEPOINT_NAME};")
            raise StatementError("statement failed", dberr, self.obj, script) from dberr
        # not released: that would reset the rowcount of the statement handle
        return self.cursor

    def __repr__(self):
        return f"<Session {object_label(self.obj)!r} {self.purpose!r}>"


def psycopg_sessions(dburl: str, autocommit: bool = True) -> SessionProvider:
    """
    Session provider opening one psycopg connection per object.

    With `autocommit` off the connection commits when the session closes
    cleanly and rolls back otherwise.
    """
    import psycopg

    @contextmanager
    def open_session(monitor: ProgressMonitor, obj, purpose: str):
        try:
            conn = psycopg.connect(dburl, autocommit=autocommit)
        except psycopg.Error as e:
            raise SessionError(f"Cannot open session ({purpose})", obj, e) from e
        logger.debug("Opened session on %s for %s", object_label(obj), purpose)
        with conn, conn.cursor() as cursor:
            yield Session(cursor, obj, purpose, savepoints=not autocommit)

    return open_session


def django_sessions(dbconn: str = "default") -> SessionProvider:
    """Session provider using a cursor on a configured Django connection."""

    @contextmanager
    def open_session(monitor: ProgressMonitor, obj, purpose: str):
        from django.db import connections

        try:
            cursor = connections[dbconn].cursor()
        except Exception as e:
            raise SessionError(f"Cannot open session ({purpose})", obj, e) from e
        with cursor:
            yield Session(cursor, obj, purpose)

    return open_session
