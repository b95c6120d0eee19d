# src/sinkadmin/core/config.py
"""
Configuration schema and loading for the sink admin client.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

import re
import urllib.parse
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, SecretStr, field_validator

_ALLOWED_SERVICE_SCHEMES = frozenset({"http", "https"})

# Regex pattern for ${VAR} or ${VAR:-default} syntax
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


class TlsSettings(BaseModel):
    """TLS options for https service URLs."""

    model_config = {"frozen": True}

    verify: bool = Field(default=True, description="Verify the service certificate")
    trust_certs_file_path: str | None = Field(
        default=None,
        description="CA bundle used instead of the system trust store",
    )


class LoggingSettings(BaseModel):
    """Logging options applied by SinkAdmin.from_settings."""

    model_config = {"frozen": True}

    configure: bool = Field(default=False, description="Call configure_logging() on client construction")
    json_output: bool = Field(default=False, description="Render JSON instead of console output")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


class AdminSettings(BaseModel):
    """Top-level client configuration.

    Example YAML:
        service_url: https://admin.example.com:8443
        auth_token: ${SINKADMIN_TOKEN}
        read_timeout_seconds: 30
        tls:
          trust_certs_file_path: /etc/ssl/cluster-ca.pem
    """

    model_config = {"frozen": True}

    service_url: str = Field(description="Base URL of the admin service, e.g. http://localhost:8080")
    auth_token: SecretStr | None = Field(
        default=None,
        description="Bearer token, or 'file:<path>' to read it from a file on every request",
    )
    connect_timeout_seconds: float = Field(default=60.0, gt=0, description="TCP/TLS connect timeout")
    read_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Socket read timeout, also the upper bound for blocking calls",
    )
    request_timeout_seconds: float = Field(default=300.0, gt=0, description="Pool acquisition and write timeout")
    tls: TlsSettings = Field(default_factory=TlsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("service_url")
    @classmethod
    def validate_service_url(cls, v: str) -> str:
        """Service URL must be absolute http(s)."""
        parsed = urllib.parse.urlparse(v)
        if parsed.scheme.lower() not in _ALLOWED_SERVICE_SCHEMES:
            raise ValueError(f"service_url must use http or https, got {parsed.scheme!r}")
        if not parsed.netloc:
            raise ValueError(f"service_url must include a host: {v!r}")
        return v.rstrip("/")

    @field_validator("auth_token", mode="before")
    @classmethod
    def validate_auth_token(cls, v: Any) -> Any:
        """Token must be a string with every ${VAR} reference resolved.

        Environment values are parsed as TOML, so a digits-only token
        arrives as an int.
        """
        if v is None:
            return None
        raw = v.get_secret_value() if isinstance(v, SecretStr) else str(v)
        match = _ENV_VAR_PATTERN.search(raw)
        if match:
            raise ValueError(f"auth_token references unset environment variable {match.group(1)}")
        if "${" in raw:
            raise ValueError("auth_token contains an unresolved ${...} reference")
        return raw


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} patterns in config values.

    Args:
        config: Configuration dict (may contain nested structures)

    Returns:
        New dict with environment variables expanded
    """
    import os

    def _expand_string(value: str) -> str:
        def replacer(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default = match.group(2)
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            if default is not None:
                return default
            # Unset with no default: keep the literal, AdminSettings rejects it
            return match.group(0)

        return _ENV_VAR_PATTERN.sub(replacer, value)

    def _expand_value(value: Any) -> Any:
        if isinstance(value, str):
            return _expand_string(value)
        elif isinstance(value, dict):
            return {k: _expand_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [_expand_value(item) for item in value]
        else:
            return value

    return {k: _expand_value(v) for k, v in config.items()}


def _lowercase_keys(value: Any) -> Any:
    """Dynaconf upper-cases keys at every level; Pydantic fields are lowercase."""
    if isinstance(value, dict):
        return {str(k).lower(): _lowercase_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_lowercase_keys(item) for item in value]
    return value


def load_settings(config_path: Path) -> AdminSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (SINKADMIN_*) - highest priority
    2. Config file
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: SINKADMIN_TLS__VERIFY=false for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated AdminSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="SINKADMIN",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k: v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    raw_config = _lowercase_keys(raw_config)
    raw_config = _expand_env_vars(raw_config)

    return AdminSettings(**raw_config)


def resolve_config(settings: AdminSettings) -> dict[str, Any]:
    """Settings as a JSON-safe dict with the auth token masked.

    Suitable for logging or diagnostics output. SecretStr renders masked
    in JSON mode.
    """
    return settings.model_dump(mode="json")
