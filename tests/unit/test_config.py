"""Unit tests for server configuration."""

import os
from unittest.mock import patch

import pytest

from postgres_mcp.models.config import (
    ServerConfig,
    load_config,
    parse_bool,
    parse_int,
    validate_config,
)
from postgres_mcp.models.error_types import ConfigurationError

DATABASE_URL = "postgresql://localhost:5432/test"


def _valid_config(**overrides):
    values = {
        'database_url': DATABASE_URL,
        'allow_write_ops': False,
        'max_connections': 10,
        'connection_timeout': 30,
        'statement_timeout': 30000,
        'debug': False,
    }
    values.update(overrides)
    return values


@pytest.fixture(autouse=True)
def no_dotenv():
    """Keep a developer .env file out of the tests."""
    with patch('postgres_mcp.models.config.load_dotenv'):
        yield


class TestLoadConfig:
    """Loading configuration from the environment."""

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_database_url(self):
        """A missing DATABASE_URL is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config()
        assert "DATABASE_URL" in str(exc_info.value)
        assert exc_info.value.recoverable is False

    @patch.dict(os.environ, {'DATABASE_URL': ''}, clear=True)
    def test_empty_database_url(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config()
        assert "DATABASE_URL" in str(exc_info.value)

    @patch.dict(os.environ, {'DATABASE_URL': DATABASE_URL}, clear=True)
    def test_defaults(self):
        """Every optional value has a default."""
        config = load_config()

        assert config.database_url == DATABASE_URL
        assert config.allow_write_ops is False
        assert config.max_connections == 10
        assert config.connection_timeout == 30
        assert config.statement_timeout == 30000
        assert config.debug is False
        assert config.ssl_root_cert is None
        assert config.require_ssl is False

    @pytest.mark.parametrize("value", ["true", "1", "yes", "on", "TRUE", " y ", "t"])
    def test_true_values(self, value):
        with patch.dict(os.environ, {'DATABASE_URL': DATABASE_URL, 'DANGEROUSLY_ALLOW_WRITE_OPS': value}, clear=True):
            assert load_config().allow_write_ops is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "off", "", "n", "F"])
    def test_false_values(self, value):
        with patch.dict(os.environ, {'DATABASE_URL': DATABASE_URL, 'DANGEROUSLY_ALLOW_WRITE_OPS': value}, clear=True):
            assert load_config().allow_write_ops is False

    @patch.dict(os.environ, {
        'DATABASE_URL': DATABASE_URL,
        'PG_MAX_CONNECTIONS': '20',
        'PG_CONNECTION_TIMEOUT': '60',
        'PG_STATEMENT_TIMEOUT': '60000',
        'DEBUG': 'true',
    }, clear=True)
    def test_integer_values(self):
        config = load_config()

        assert config.max_connections == 20
        assert config.connection_timeout == 60
        assert config.statement_timeout == 60000
        assert config.debug is True

    @patch.dict(os.environ, {
        'DATABASE_URL': DATABASE_URL,
        'PG_MAX_CONNECTIONS': 'invalid',
        'PG_CONNECTION_TIMEOUT': 'not-a-number',
    }, clear=True)
    def test_invalid_integers_use_defaults(self):
        config = load_config()

        assert config.max_connections == 10
        assert config.connection_timeout == 30

    @pytest.mark.parametrize("name,value", [
        ('PG_MAX_CONNECTIONS', '1'),
        ('PG_MAX_CONNECTIONS', '100'),
        ('PG_CONNECTION_TIMEOUT', '1'),
        ('PG_CONNECTION_TIMEOUT', '300'),
        ('PG_STATEMENT_TIMEOUT', '0'),
    ])
    def test_boundary_values_accepted(self, name, value):
        with patch.dict(os.environ, {'DATABASE_URL': DATABASE_URL, name: value}, clear=True):
            config = load_config()
        validate_config(config)

    @pytest.mark.parametrize("name,value", [
        ('PG_MAX_CONNECTIONS', '0'),
        ('PG_MAX_CONNECTIONS', '101'),
        ('PG_CONNECTION_TIMEOUT', '301'),
        ('PG_STATEMENT_TIMEOUT', '-1'),
    ])
    def test_out_of_range_rejected(self, name, value):
        with patch.dict(os.environ, {'DATABASE_URL': DATABASE_URL, name: value}, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                load_config()
        assert str(exc_info.value).startswith("Configuration validation failed:")

    @patch.dict(os.environ, {
        'DATABASE_URL': DATABASE_URL,
        'PG_SSL_ROOT_CERT': '/etc/ssl/ca.pem',
    }, clear=True)
    def test_ssl_root_cert(self):
        assert load_config().ssl_root_cert == '/etc/ssl/ca.pem'


class TestValidateConfig:
    """Re-validating configuration values."""

    def test_accepts_valid_mapping(self):
        config = validate_config(_valid_config())
        assert isinstance(config, ServerConfig)

    @pytest.mark.parametrize("overrides", [
        {'max_connections': 0},
        {'max_connections': 101},
        {'connection_timeout': 0},
        {'connection_timeout': 301},
        {'statement_timeout': -1},
        {'database_url': ''},
    ])
    def test_rejects_invalid_values(self, overrides):
        with pytest.raises(ConfigurationError):
            validate_config(_valid_config(**overrides))

    def test_error_names_field(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_config(_valid_config(max_connections=0))
        assert "max_connections" in str(exc_info.value)

    def test_config_is_immutable(self):
        config = ServerConfig(**_valid_config())
        with pytest.raises(Exception):
            config.allow_write_ops = True


class TestConnectionKwargs:
    """psycopg2 keyword arguments built from the configuration."""

    def test_plain_connection(self):
        kwargs = ServerConfig(**_valid_config()).connection_kwargs()
        assert kwargs == {'dsn': DATABASE_URL, 'connect_timeout': 30}

    def test_verified_tls(self):
        kwargs = ServerConfig(**_valid_config(ssl_root_cert='/ca.pem')).connection_kwargs()
        assert kwargs['sslmode'] == 'verify-full'
        assert kwargs['sslrootcert'] == '/ca.pem'

    def test_required_tls(self):
        kwargs = ServerConfig(**_valid_config(require_ssl=True)).connection_kwargs()
        assert kwargs['sslmode'] == 'require'
        assert 'sslrootcert' not in kwargs


class TestParsers:
    """Environment value parsers."""

    def test_parse_bool_unknown_uses_default(self):
        assert parse_bool("maybe", True) is True
        assert parse_bool("maybe", False) is False
        assert parse_bool(None, True) is True

    def test_parse_int(self):
        assert parse_int("42", 1) == 42
        assert parse_int("42.9", 1) == 42
        assert parse_int(" 7 ", 1) == 7
        assert parse_int("", 5) == 5
        assert parse_int(None, 5) == 5
        assert parse_int("inf", 5) == 5
        assert parse_int("abc", 5) == 5
