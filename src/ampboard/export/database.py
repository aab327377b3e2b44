"""Streaming MySQL dump."""

import io
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime
from typing import Any, TextIO

import pymysql
import structlog
from pymysql import converters
from pymysql.cursors import SSCursor

from ampboard.core.exceptions import DatabaseConnectionError, StreamingConflictError
from ampboard.utils.sorting import natural_sorted

logger = structlog.get_logger(__name__)

SYSTEM_SCHEMAS = frozenset({"information_schema", "performance_schema", "mysql", "sys"})
DEFAULT_BATCH_SIZE = 200


def quote_identifier(name: str) -> str:
    """Wrap an identifier in backticks, doubling embedded backticks."""
    return "`" + name.replace("`", "``") + "`"


class RowStream:
    """An open unbuffered result set.

    While a stream is open it owns the session's connection: the session
    refuses every other statement until the stream has been drained and
    closed by leaving :meth:`DumpSession.stream`.
    """

    def __init__(self, cursor) -> None:
        self._cursor = cursor

    @property
    def column_names(self) -> list[str]:
        return [column[0] for column in self._cursor.description or ()]

    def __iter__(self) -> Iterator[tuple]:
        return iter(self._cursor.fetchone, None)


class DumpSession:
    """One database connection used for a whole dump.

    Buffered statements go through :meth:`query`; row data is read through
    :meth:`stream`, which hands out a :class:`RowStream` that must be left
    before anything else can run.
    """

    def __init__(self, connection) -> None:
        self._connection = connection
        self._stream: RowStream | None = None

    def query(self, sql: str, args: Sequence[Any] | None = None) -> list[tuple]:
        """Run a buffered statement and return all rows."""
        self._ensure_idle(sql)
        with self._connection.cursor() as cursor:
            cursor.execute(sql, args)
            return list(cursor.fetchall())

    @contextmanager
    def stream(self, sql: str) -> Iterator[RowStream]:
        """Open an unbuffered result set for ``sql``.

        Leaving the block drains any unread rows and releases the
        connection.
        """
        self._ensure_idle(sql)
        cursor = self._connection.cursor(SSCursor)
        stream = RowStream(cursor)
        self._stream = stream
        try:
            cursor.execute(sql)
            yield stream
        finally:
            try:
                cursor.close()
            except pymysql.MySQLError as e:
                logger.warning("Failed to release row stream", error=str(e))
            finally:
                self._stream = None

    def escape_string(self, value: str) -> str:
        return self._connection.escape_string(value)

    def close(self) -> None:
        try:
            self._connection.close()
        except pymysql.MySQLError as e:
            logger.debug("Error while closing connection", error=str(e))

    def _ensure_idle(self, sql: str) -> None:
        if self._stream is not None:
            raise StreamingConflictError(
                "Cannot run a statement while a row stream is open",
                details={"sql": sql},
            )


class DatabaseDumper:
    """Dumps MySQL databases to SQL text.

    Values are read as the server's own text representation (binary
    columns as bytes) so the dump replays to identical row content. Rows
    are streamed with an unbuffered cursor and written out in batches, so
    memory use does not grow with table size.
    """

    def __init__(
        self,
        host: str,
        user: str,
        password: str,
        batch_size: int = DEFAULT_BATCH_SIZE,
        charset: str = "utf8mb4",
        connect: Callable[..., Any] = pymysql.connect,
    ) -> None:
        self._host = host
        self._user = user
        self._password = password
        self._batch_size = max(1, batch_size)
        self._charset = charset
        self._connect = connect

    def open_session(self, database: str | None = None) -> DumpSession:
        """Connect and return a session; raises DatabaseConnectionError."""
        try:
            connection = self._connect(
                host=self._host,
                user=self._user,
                password=self._password,
                database=database,
                charset=self._charset,
                conv=dict(converters.encoders),
            )
        except pymysql.MySQLError as e:
            raise DatabaseConnectionError(
                f"MySQL connect error: {e}",
                details={"host": self._host, "database": database},
            ) from e
        return DumpSession(connection)

    def list_databases(self) -> list[str]:
        """List user databases, system schemas excluded; empty on failure."""
        try:
            session = self.open_session()
        except DatabaseConnectionError as e:
            logger.warning("Cannot list databases", error=e.message)
            return []

        try:
            rows = session.query("SHOW DATABASES")
        except pymysql.MySQLError as e:
            logger.warning("SHOW DATABASES failed", error=str(e))
            return []
        finally:
            session.close()

        names = [_as_text(row[0]) for row in rows]
        return natural_sorted(name for name in names if name not in SYSTEM_SCHEMAS)

    def dump(self, db_name: str) -> str:
        """Return the complete SQL dump of ``db_name``."""
        buffer = io.StringIO()
        self.dump_to(db_name, buffer)
        return buffer.getvalue()

    def dump_to(self, db_name: str, out: TextIO) -> int:
        """Write the dump of ``db_name`` to ``out``; returns tables dumped."""
        session = self.open_session(db_name)
        dumped = 0
        try:
            session.query("SET time_zone = '+00:00'")

            out.write(f"-- Dump of database {quote_identifier(db_name)}\n")
            out.write(f"-- Generated: {datetime.now():%Y-%m-%d %H:%M:%S}\n\n")
            out.write("SET NAMES utf8mb4;\n")
            out.write("SET SQL_MODE='NO_AUTO_VALUE_ON_ZERO';\n")
            out.write("SET time_zone = '+00:00';\n")
            out.write("SET FOREIGN_KEY_CHECKS=0;\n\n")

            try:
                rows = session.query("SHOW FULL TABLES WHERE Table_type = 'BASE TABLE'")
            except pymysql.MySQLError as e:
                out.write(f"-- ERROR: SHOW FULL TABLES failed: {e}\n\n")
                rows = []

            for row in rows:
                if self._dump_table(session, _as_text(row[0]), out):
                    dumped += 1

            out.write("SET FOREIGN_KEY_CHECKS=1;\n")
        finally:
            session.close()

        logger.info("Database dumped", database=db_name, tables=dumped)
        return dumped

    def _dump_table(self, session: DumpSession, table: str, out: TextIO) -> bool:
        name = quote_identifier(table)

        try:
            create = session.query(f"SHOW CREATE TABLE {name}")
        except pymysql.MySQLError as e:
            out.write(f"-- ERROR: SHOW CREATE TABLE failed for {name}: {e}\n\n")
            return False
        ddl = _as_text(create[0][1]) if create else ""

        out.write(f"DROP TABLE IF EXISTS {name};\n")
        out.write(f"{ddl};\n\n")

        try:
            columns = [_as_text(column[0]) for column in session.query(f"SHOW COLUMNS FROM {name}")]
        except pymysql.MySQLError as e:
            logger.warning("SHOW COLUMNS failed", table=table, error=str(e))
            columns = []

        row_count = 0
        batch: list[str] = []
        try:
            with session.stream(f"SELECT * FROM {name}") as rows:
                if not columns:
                    columns = rows.column_names
                for row in rows:
                    batch.append("(" + ",".join(self._literal(session, value) for value in row) + ")")
                    row_count += 1
                    if len(batch) >= self._batch_size:
                        self._write_insert(out, name, columns, batch)
                        batch = []
        except pymysql.MySQLError as e:
            out.write(f"-- ERROR: SELECT * failed for {name}: {e}\n\n")
            return False

        if batch:
            self._write_insert(out, name, columns, batch)
        if row_count:
            out.write("\n")

        logger.debug("Table dumped", table=table, rows=row_count)
        return True

    @staticmethod
    def _write_insert(out: TextIO, name: str, columns: list[str], batch: list[str]) -> None:
        column_sql = f" ({','.join(quote_identifier(c) for c in columns)})" if columns else ""
        out.write(f"INSERT INTO {name}{column_sql} VALUES\n")
        out.write(",\n".join(batch))
        out.write(";\n")

    @staticmethod
    def _literal(session: DumpSession, value: Any) -> str:
        if value is None:
            return "NULL"
        if isinstance(value, (bytes, bytearray)):
            return "0x" + value.hex() if value else "''"
        return "'" + session.escape_string(str(value)) + "'"


def _as_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    return str(value)
