import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.schema import CreateTable

from app.main import app
from app.core.credentials import CredentialSelector
from app.core.database import DataAccess, get_data_access
from app.core.models import Patient
from tests.utils import SqliteEngines, make_profile


@pytest.fixture
def selector():
    return CredentialSelector(writer=make_profile("writer"), reader=make_profile("reader"))


# Every test gets its own database file
@pytest.fixture
def engines(tmp_path):
    return SqliteEngines(tmp_path / "gateway.db")


# Create the table through the writer so the read-only reader can open the file
@pytest_asyncio.fixture(scope="function")
async def data_access(selector, engines):
    access = DataAccess(selector, timeout=5, engine_factory=engines)
    async with engines.built["writer"].begin() as conn:
        await conn.execute(CreateTable(Patient.__table__, if_not_exists=True))
    yield access
    await access.dispose()


# Client
@pytest_asyncio.fixture(scope="function")
async def client(data_access: DataAccess):
    app.dependency_overrides[get_data_access] = lambda: data_access

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
