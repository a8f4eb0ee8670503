"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///indexer.db"
    log_level: str = "INFO"

    # Data sources
    factory_addresses: list[str] = []  # empty = accept factory events from any address
    start_block: int = 0
    instrument_template: str = "Instrument"

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    api_token: str = ""  # bearer token for POST /api/events; empty = no auth, rely on the loopback bind

    model_config = {"env_prefix": "IDX_", "env_file": ".env"}


settings = Settings()
