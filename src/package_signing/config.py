"""
Configuration for package signature validation.

Settings are loaded from a YAML file named by ``PACKAGE_SIGNING_CONFIG`` (or
passed explicitly); when no file is configured the defaults apply.

Example ``config/default.yaml``::

    environment: production
    log_level: INFO
    log_format: json
    specifications:
      allowed_hash_algorithm_oids:
        - 2.16.840.1.101.3.4.2.1
        - 2.16.840.1.101.3.4.2.2
        - 2.16.840.1.101.3.4.2.3
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from package_signing import oids
from package_signing.crypto.hashing import ALGORITHM_OID_MAP
from package_signing.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = "PACKAGE_SIGNING_CONFIG"

DEFAULT_ALLOWED_HASH_ALGORITHM_OIDS = (oids.SHA256, oids.SHA384, oids.SHA512)


class SigningSpecifications(BaseModel):
    """Algorithm requirements applied when binding signing certificates."""

    model_config = ConfigDict(frozen=True)

    allowed_hash_algorithm_oids: tuple[str, ...] = Field(
        default=DEFAULT_ALLOWED_HASH_ALGORITHM_OIDS,
        description="Digest algorithm OIDs accepted in ESSCertIDv2 records",
    )

    @field_validator("allowed_hash_algorithm_oids")
    @classmethod
    def validate_hash_algorithms(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Validate that every allowed algorithm is one the hashing layer supports."""
        if not v:
            msg = "At least one hash algorithm must be allowed"
            raise ValueError(msg)
        unknown = [oid for oid in v if oid not in ALGORITHM_OID_MAP]
        if unknown:
            msg = f"Unsupported hash algorithm OIDs: {unknown}"
            raise ValueError(msg)
        return v

    @classmethod
    def v1(cls) -> SigningSpecifications:
        """The version 1 package signing specifications (SHA-256, SHA-384, SHA-512)."""
        return cls()


class SigningConfig(BaseModel):
    """Top-level configuration."""

    environment: str = Field(
        default="development", description="Environment (development, testing, staging, production)"
    )
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="text", description="Log format (json, text)")
    specifications: SigningSpecifications = Field(default_factory=SigningSpecifications.v1)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment setting."""
        valid_environments = {"development", "testing", "staging", "production"}
        if v not in valid_environments:
            msg = f"Environment must be one of {valid_environments}"
            raise ValueError(msg)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level setting."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "OFF"}
        if v.upper() not in valid_levels:
            msg = f"Log level must be one of {valid_levels}"
            raise ValueError(msg)
        return v.upper()


def get_config_path() -> Path | None:
    """Return the configuration file named by the environment, if any."""
    value = os.environ.get(CONFIG_PATH_ENV_VAR)
    return Path(value) if value else None


def load_config(config_path: str | Path | None = None) -> SigningConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: The file to load. If None, uses ``PACKAGE_SIGNING_CONFIG``;
            when that is unset the defaults are returned

    Returns:
        The validated configuration

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    path = Path(config_path) if config_path is not None else get_config_path()

    if path is None:
        return SigningConfig()

    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise ConfigurationError(msg)

    try:
        with path.open(encoding="utf-8") as config_file:
            raw: Any = yaml.safe_load(config_file) or {}
    except (OSError, yaml.YAMLError) as e:
        msg = f"Error loading configuration from {path}: {e}"
        raise ConfigurationError(msg) from e

    if not isinstance(raw, dict):
        msg = f"Configuration in {path} must be a mapping"
        raise ConfigurationError(msg)

    try:
        config = SigningConfig.model_validate(raw)
    except ValidationError as e:
        msg = f"Invalid configuration in {path}: {e}"
        raise ConfigurationError(msg) from e

    logger.debug("Loaded configuration from %s", path)
    return config
