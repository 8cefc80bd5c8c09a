import asyncio
import logging
import ssl
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Callable, Dict, List

from fastapi import Request
from sqlalchemy import insert
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool
from sqlalchemy.schema import CreateTable

from app.core.credentials import ConnectionProfile, CredentialSelector, Operation
from app.core.errors import DatabaseError
from app.core.models import SEED_ROWS, Patient

logger = logging.getLogger(__name__)


def build_engine(profile: ConnectionProfile) -> AsyncEngine:
    """
    Create the engine for one profile.
    NullPool: every `connect()` opens a new connection and closing it really closes it.
    """
    connect_args = {}
    if profile.transport_security:
        # Managed MySQL proxies present certificates we cannot verify
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        connect_args["ssl"] = context

    return create_async_engine(
        profile.url(), poolclass=NullPool, connect_args=connect_args
    )


def to_json_value(value: Any) -> Any:
    """Keep JSON native values, turn everything else into text."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return str(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return raw.hex()
    return str(value)


class DataAccess:
    """
    Runs exactly one unit of work per call on a fresh connection.

    Args:
        selector: Decides which login an operation uses.
        timeout: Seconds allowed for a whole call (connect, execute, close).
        engine_factory: Builds an engine for a profile, replaced in tests.

    Example:
        data_access = DataAccess(CredentialSelector.from_settings(settings))
        affected = await data_access.seed_fixed_rows()
    """

    def __init__(
        self,
        selector: CredentialSelector,
        timeout: float = 10.0,
        engine_factory: Callable[[ConnectionProfile], AsyncEngine] = build_engine,
    ):
        self.selector = selector
        self.timeout = timeout
        self._engines: Dict[Operation, AsyncEngine] = {
            operation: engine_factory(selector.select(operation))
            for operation in Operation
        }

    def engine_for(self, operation: Operation) -> AsyncEngine:
        return self._engines[operation]

    async def seed_fixed_rows(self) -> int:
        """
        Create the patient table if needed and insert the seed rows in one statement.
        Not idempotent: every call appends the rows again.

        Returns:
            Number of rows the database reports as inserted.
        """
        return await self._run(Operation.SEED, self._seed)

    async def run_query(self, sql: str) -> List[Dict[str, Any]]:
        """
        Execute an already guarded SELECT on the reader connection.

        Returns:
            Rows as dicts, in the column order the database returned.
        """
        return await self._run(Operation.QUERY, self._select, sql)

    async def dispose(self) -> None:
        for engine in self._engines.values():
            await engine.dispose()

    async def _run(self, operation: Operation, work, *args):
        profile = self.selector.select(operation)
        try:
            return await asyncio.wait_for(work(*args), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"{operation.value} timed out on {profile.describe()}")
            raise DatabaseError("database operation timed out")
        except DBAPIError as error:
            logger.error(f"{operation.value} failed on {profile.describe()}: {error.orig}")
            raise DatabaseError(str(error.orig)) from error
        except (SQLAlchemyError, OSError) as error:
            logger.error(f"{operation.value} failed on {profile.describe()}: {error}")
            raise DatabaseError(str(error)) from error

    async def _seed(self) -> int:
        # begin() commits on success, rolls back on error and always closes
        async with self.engine_for(Operation.SEED).begin() as conn:
            await conn.execute(CreateTable(Patient.__table__, if_not_exists=True))
            result = await conn.execute(
                insert(Patient.__table__).values(
                    [
                        {
                            "name": row.name,
                            "dateOfBirth": datetime.combine(row.date_of_birth, time()),
                        }
                        for row in SEED_ROWS
                    ]
                )
            )
            return result.rowcount

    async def _select(self, sql: str) -> List[Dict[str, Any]]:
        # connect() never commits, the connection is closed on exit
        async with self.engine_for(Operation.QUERY).connect() as conn:
            return await _fetch_rows(conn, sql)


async def _fetch_rows(conn: AsyncConnection, sql: str) -> List[Dict[str, Any]]:
    # Sent verbatim, no bind parameter parsing of ":name" or "%s"
    result = await conn.exec_driver_sql(
        sql, execution_options={"no_parameters": True}
    )
    columns = list(result.keys())
    return [
        {column: to_json_value(value) for column, value in zip(columns, row)}
        for row in result.all()
    ]


# This is the "Bridge" that gives routes access to the database layer
def get_data_access(request: Request) -> DataAccess:
    return request.app.state.data_access
