"""Process settings: CLI flags, env vars and code defaults in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``ORDERBOT_*`` prefix
  3. Code defaults
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from orderbot.domain.model.customer import DEFAULT_CUSTOMER_NAME
from orderbot.infrastructure.persistence.engine import SUPPORTED_BACKENDS


class Settings(BaseSettings):
    """Settings for the order core and its CLI.

    Attributes:
        database_url: SQLAlchemy URL of the order store. Only backends
            whose drivers can bound waits by db_timeout are accepted.
        db_timeout: Seconds any store call may wait (connect, statement,
            lock or pooled connection) before failing with
            StoreTimeoutError.
        default_customer_name: Placeholder name for customers who have
            not told us theirs.
        order_list_limit: Default cap on listed orders.
    """

    model_config = SettingsConfigDict(frozen=True, env_prefix="ORDERBOT_")

    database_url: str = "sqlite:///orderbot.db"
    db_timeout: float = Field(default=5.0, gt=0)
    default_customer_name: str = Field(default=DEFAULT_CUSTOMER_NAME, min_length=1)
    order_list_limit: int = Field(default=50, ge=1)

    verbose: bool = False
    log_json: bool = False

    @field_validator("database_url")
    @classmethod
    def check_backend(cls, value: str) -> str:
        try:
            backend = make_url(value).get_backend_name()
        except ArgumentError as exc:
            raise ValueError(f"Invalid database URL: {value!r}") from exc
        if backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unsupported database backend '{backend}' "
                f"(expected one of: {', '.join(SUPPORTED_BACKENDS)})"
            )
        return value

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> Settings:
        """Build settings, letting explicitly passed CLI flags win.

        Flags left at ``None`` fall through to env vars and defaults.
        """
        return cls(**{k: v for k, v in cli_flags.items() if v is not None})
