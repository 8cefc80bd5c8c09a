from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError
from sqlalchemy.engine import URL

from app.core.config import Settings
from app.core.errors import ConfigurationError


class Operation(str, Enum):
    """What a request wants to do with the database."""

    SEED = "seed"
    QUERY = "query"


class ConnectionProfile(BaseModel):
    """One database login. Frozen so it can be shared between requests."""

    model_config = ConfigDict(frozen=True)

    name: str
    driver: str = Field(min_length=1)
    host: str = Field(min_length=1)
    port: int = Field(gt=0)
    database: str = Field(min_length=1)
    username: str = Field(min_length=1)
    password: SecretStr = SecretStr("")
    transport_security: bool = True

    def url(self) -> URL:
        return URL.create(
            drivername=self.driver,
            username=self.username,
            password=self.password.get_secret_value() or None,
            host=self.host,
            port=self.port,
            database=self.database,
        )

    def describe(self) -> str:
        # Safe for logs: no username, no password
        return f"{self.name}@{self.host}:{self.port}/{self.database}"


class CredentialSelector:
    """
    Maps an Operation to its connection profile.
    Seeding always gets the writer login and queries always get the reader login.
    """

    def __init__(self, writer: ConnectionProfile, reader: ConnectionProfile):
        self._profiles = {Operation.SEED: writer, Operation.QUERY: reader}

    @property
    def writer(self) -> ConnectionProfile:
        return self._profiles[Operation.SEED]

    @property
    def reader(self) -> ConnectionProfile:
        return self._profiles[Operation.QUERY]

    def select(self, operation: Operation) -> ConnectionProfile:
        try:
            return self._profiles[Operation(operation)]
        except ValueError:
            raise ValueError(f"Unknown database operation: {operation!r}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialSelector":
        """
        Build both profiles from configuration.
        Raises ConfigurationError if any required field is missing.

        Example:
            selector = CredentialSelector.from_settings(settings)
        """
        shared = {
            "driver": settings.DB_DRIVER,
            "host": settings.DB_HOST,
            "port": settings.DB_PORT,
            "database": settings.DB_NAME,
            "transport_security": settings.DB_SSL,
        }
        writer = _build_profile(
            "writer",
            username=settings.DB_WRITE_USER,
            password=settings.DB_WRITE_PASS,
            **shared,
        )
        reader = _build_profile(
            "reader",
            username=settings.DB_READ_USER,
            password=settings.DB_READ_PASS,
            **shared,
        )
        return cls(writer=writer, reader=reader)


def _build_profile(name: str, **fields) -> ConnectionProfile:
    try:
        return ConnectionProfile(name=name, **fields)
    except ValidationError as error:
        missing = ", ".join(str(e["loc"][0]) for e in error.errors())
        raise ConfigurationError(
            f"Invalid {name} database profile, check: {missing}"
        ) from None
