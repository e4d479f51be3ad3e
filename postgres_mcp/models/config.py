"""Server configuration loaded from environment variables."""

import os
from typing import Any, Dict, Mapping, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from postgres_mcp.models.error_types import ConfigurationError

TRUE_VALUES = frozenset({'true', '1', 'yes', 'on', 'y', 't'})
FALSE_VALUES = frozenset({'false', '0', 'no', 'off', '', 'n', 'f'})


class ServerConfig(BaseModel):
    """Validated, immutable server configuration."""

    database_url: str = Field(..., min_length=1, description="PostgreSQL connection string")
    allow_write_ops: bool = Field(False, description="Permit write statements through the query tool")
    max_connections: int = Field(10, ge=1, le=100, description="Connection pool size")
    connection_timeout: int = Field(30, ge=1, le=300, description="Connect timeout in seconds")
    statement_timeout: int = Field(30000, ge=0, description="Statement timeout in milliseconds")
    debug: bool = Field(False, description="Enable debug logging")
    ssl_root_cert: Optional[str] = Field(None, description="Path to a CA bundle for TLS verification")
    require_ssl: bool = Field(False, description="Require TLS without certificate verification")

    model_config = ConfigDict(frozen=True)

    def connection_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for psycopg2 connections."""
        kwargs: Dict[str, Any] = {
            'dsn': self.database_url,
            'connect_timeout': self.connection_timeout,
        }
        if self.ssl_root_cert:
            kwargs['sslmode'] = 'verify-full'
            kwargs['sslrootcert'] = self.ssl_root_cert
        elif self.require_ssl:
            kwargs['sslmode'] = 'require'
        return kwargs


def parse_bool(value: Optional[str], default: bool) -> bool:
    """Parse a boolean flag, falling back to the default on unknown input."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    return default


def parse_int(value: Optional[str], default: int) -> int:
    """Parse an integer, truncating floats and falling back on garbage."""
    if value is None or not value.strip():
        return default
    try:
        return int(float(value.strip()))
    except (ValueError, OverflowError):
        return default


def _format_validation_error(error: ValidationError) -> str:
    details = ", ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )
    return f"Configuration validation failed: {details}"


def load_config() -> ServerConfig:
    """Parse and validate server configuration from the environment.

    Returns:
        Validated server configuration

    Raises:
        ConfigurationError: If a variable is missing or out of range
    """
    load_dotenv()

    database_url = os.getenv('DATABASE_URL', '')
    if not database_url.strip():
        raise ConfigurationError(
            "Configuration validation failed: DATABASE_URL: DATABASE_URL is required"
        )

    try:
        return ServerConfig(
            database_url=database_url,
            allow_write_ops=parse_bool(os.getenv('DANGEROUSLY_ALLOW_WRITE_OPS'), False),
            max_connections=parse_int(os.getenv('PG_MAX_CONNECTIONS'), 10),
            connection_timeout=parse_int(os.getenv('PG_CONNECTION_TIMEOUT'), 30),
            statement_timeout=parse_int(os.getenv('PG_STATEMENT_TIMEOUT'), 30000),
            debug=parse_bool(os.getenv('DEBUG'), False),
            ssl_root_cert=os.getenv('PG_SSL_ROOT_CERT') or None,
            require_ssl=parse_bool(os.getenv('PG_REQUIRE_SSL'), False),
        )
    except ValidationError as e:
        raise ConfigurationError(_format_validation_error(e)) from e


def validate_config(config: Union[ServerConfig, Mapping[str, Any]]) -> ServerConfig:
    """Validate configuration values.

    Args:
        config: A ServerConfig or a mapping of its fields

    Returns:
        The validated configuration

    Raises:
        ConfigurationError: If any value violates its constraints
    """
    data = config.model_dump() if isinstance(config, ServerConfig) else dict(config)
    try:
        return ServerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(_format_validation_error(e)) from e
