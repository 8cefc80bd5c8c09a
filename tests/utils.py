from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from app.core.credentials import ConnectionProfile, Operation
from app.core.database import DataAccess


def make_profile(name: str) -> ConnectionProfile:
    return ConnectionProfile(
        name=name,
        driver="sqlite+aiosqlite",
        host="localhost",
        port=3306,
        database="gateway",
        username=f"{name}_user",
        transport_security=False,
    )


class SqliteEngines:
    """Writer opens the file read-write, reader opens the same file read-only."""

    def __init__(self, path):
        self.path = path
        self.built = {}

    def __call__(self, profile: ConnectionProfile):
        if profile.name == "reader":
            url = f"sqlite+aiosqlite:///file:{self.path}?mode=ro&uri=true"
        else:
            url = f"sqlite+aiosqlite:///{self.path}"
        engine = create_async_engine(url, poolclass=NullPool)
        self.built[profile.name] = engine
        return engine


async def count_patients(data_access: DataAccess) -> int:
    async with data_access.engine_for(Operation.QUERY).connect() as conn:
        result = await conn.execute(text("SELECT COUNT(*) FROM patient"))
        return result.scalar_one()
