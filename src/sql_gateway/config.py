"""
Gateway Configuration Module.

Database credentials, listen address and feature toggles, all read from the
environment. Managed-hosting variables (MYSQLHOST, MYSQLPORT, ...) take
priority over the generic DB_* names, which in turn fall back to local
defaults.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from sqlalchemy.engine import URL, make_url

VARIANTS = ("all", "sql", "patients")


def _first(env: Mapping[str, str], *names: str, default: str) -> str:
    """Return the first non-empty value among ``names``, else ``default``."""
    for name in names:
        value = env.get(name)
        if value:
            return value
    return default


def _flag(env: Mapping[str, str], name: str, default: str) -> bool:
    return env.get(name, default).lower() == "true"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings for one gateway process."""

    db_host: str = "127.0.0.1"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "lab5"
    database_url: str | None = None
    listen_host: str = "0.0.0.0"
    listen_port: int = 3001
    variant: str = "all"
    cors_enabled: bool = True
    log_level: str = "INFO"
    sql_echo: bool = False

    def __post_init__(self) -> None:
        if self.variant not in VARIANTS:
            raise ValueError(f"API_VARIANT must be one of {', '.join(VARIANTS)}, got {self.variant!r}")

    @property
    def url(self) -> URL:
        """SQLAlchemy URL for the target database."""
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            "mysql+pymysql",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    @property
    def mounts_sql(self) -> bool:
        return self.variant in ("all", "sql")

    @property
    def mounts_patients(self) -> bool:
        return self.variant in ("all", "patients")


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from environment variables.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        Settings: Frozen settings instance

    Raises:
        ValueError: If a numeric setting is not an integer or the variant is unknown
    """
    env = os.environ if environ is None else environ

    return Settings(
        db_host=_first(env, "MYSQLHOST", "DB_HOST", default="127.0.0.1"),
        db_port=int(_first(env, "MYSQLPORT", "DB_PORT", default="3306")),
        db_user=_first(env, "MYSQLUSER", "DB_USER", default="root"),
        db_password=_first(env, "MYSQLPASSWORD", "DB_PASS", default=""),
        db_name=_first(env, "MYSQLDATABASE", "DB_NAME", default="lab5"),
        database_url=env.get("DATABASE_URL") or None,
        listen_host=env.get("HOST", "0.0.0.0"),
        listen_port=int(env.get("PORT") or "3001"),
        variant=env.get("API_VARIANT", "all").lower(),
        cors_enabled=_flag(env, "CORS_ENABLED", "true"),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
        sql_echo=_flag(env, "SQL_ECHO", "false"),
    )
