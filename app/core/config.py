from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # Comma separated, "*" allows any origin
    ALLOWED_ORIGIN: str = "*"

    DB_DRIVER: str = "mysql+aiomysql"
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_NAME: str = "railway"

    # Writer creates the table and inserts, reader must only be granted SELECT
    DB_WRITE_USER: str = "root"
    DB_WRITE_PASS: str = ""
    DB_READ_USER: str = "readonly_user"
    DB_READ_PASS: str = ""

    # Hosted MySQL proxies usually require TLS
    DB_SSL: bool = True
    DB_TIMEOUT_SECONDS: float = 10.0

    EXPOSE_ERROR_DETAILS: bool = True
    LOG_LEVEL: str = "INFO"

    # This tells Pydantic to read from the .env file
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Create a single instance of the settings to use everywhere
settings = Settings()
