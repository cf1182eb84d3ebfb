# meetdesk/config.py
from typing import Literal, Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    env: Literal["dev", "stage", "prod"] = "dev"
    debug: bool = False
    log_level: str = "INFO"
    access_log: bool = True

    # Where inserts go: the Supabase REST API or a direct Postgres connection
    storage_backend: Literal["supabase", "postgres"] = "supabase"

    # Supabase settings
    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[SecretStr] = None
    supabase_schema: str = "public"
    supabase_timeout_seconds: float = 10.0

    # Direct Postgres settings
    database_url: Optional[str] = None
    sql_echo: bool = False
    auto_init_db: bool = False

    # Every endpoint nests the inserted row under "season" unless disabled
    legacy_row_key: bool = True

    @property
    def is_dev(self) -> bool:
        return self.env == "dev" or self.debug is True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
