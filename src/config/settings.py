"""
Configuration loader for booking fields reconciliation

Loads the JSON schema used to validate booking field shapes and the YAML
field-type UI configuration, validating the latter against the former.
File locations can be overridden through environment variables.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
import yaml

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Exception raised for configuration-related errors."""

    pass


CONFIG_DIR = Path(__file__).resolve().parent

DEFAULT_SCHEMA_PATH = str(CONFIG_DIR / "booking_fields.schema.json")
DEFAULT_FIELD_TYPE_CONFIG_PATH = str(CONFIG_DIR / "field_type_config.yaml")

# Name of the $defs entry the field-type YAML must conform to
FIELD_TYPE_CONFIG_DEFINITION = "fieldTypeConfigMap"


def _env_path(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value else default


class Settings:
    """
    Configuration holder for schema and field-type config locations.

    Paths are read from the environment when the instance is created, so
    tests can point a fresh Settings at temporary files.
    """

    def __init__(
        self,
        schema_path: Optional[str] = None,
        field_type_config_path: Optional[str] = None,
    ):
        """
        Initialize Settings.

        Args:
            schema_path: JSON schema file; defaults to BOOKING_FIELDS_SCHEMA_PATH
                or the packaged booking_fields.schema.json
            field_type_config_path: YAML file; defaults to FIELD_TYPE_CONFIG_PATH
                or the packaged field_type_config.yaml
        """
        self.schema_path = schema_path or _env_path(
            "BOOKING_FIELDS_SCHEMA_PATH", DEFAULT_SCHEMA_PATH
        )
        self.field_type_config_path = field_type_config_path or _env_path(
            "FIELD_TYPE_CONFIG_PATH", DEFAULT_FIELD_TYPE_CONFIG_PATH
        )
        self.schema: Dict[str, Any] = {}
        self.field_type_config: Dict[str, Any] = {}

    def load_schema(self) -> Dict[str, Any]:
        """
        Load and check the booking fields JSON schema.

        Returns:
            Parsed schema document

        Raises:
            FileNotFoundError: If the schema file does not exist
            ConfigurationError: If the file is not JSON or not a valid schema
        """
        try:
            with open(self.schema_path, "r", encoding="utf-8") as f:
                schema = json.load(f)
        except FileNotFoundError:
            logger.error(f"Booking fields schema not found: {self.schema_path}")
            raise
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in booking fields schema: {e}")
            raise ConfigurationError(f"Invalid JSON in {self.schema_path}: {e}") from e

        try:
            jsonschema.Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            logger.error(f"Booking fields schema is invalid: {e.message}")
            raise ConfigurationError(f"Booking fields schema is invalid: {e.message}") from e

        if "$defs" not in schema:
            raise ConfigurationError(f"Schema {self.schema_path} has no $defs section")

        self.schema = schema
        logger.debug(f"Loaded booking fields schema from {self.schema_path}")
        return schema

    def load_field_type_config(self) -> Dict[str, Any]:
        """
        Load the field-type UI configuration and validate it against the schema.

        Returns:
            Mapping of field type -> UI configuration (empty if the file is empty)

        Raises:
            FileNotFoundError: If the YAML file does not exist
            ConfigurationError: If YAML parsing or schema validation fails
        """
        if not self.schema:
            self.load_schema()

        try:
            with open(self.field_type_config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except FileNotFoundError:
            logger.error(f"Field type config not found: {self.field_type_config_path}")
            raise
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in field type config: {e}")
            raise ConfigurationError(
                f"Invalid YAML in {self.field_type_config_path}: {e}"
            ) from e

        if not config:
            logger.warning(f"Empty field type config: {self.field_type_config_path}")
            self.field_type_config = {}
            return self.field_type_config

        definition_schema = {
            "$defs": self.schema["$defs"],
            "$ref": f"#/$defs/{FIELD_TYPE_CONFIG_DEFINITION}",
        }
        try:
            jsonschema.validate(
                instance=config,
                schema=definition_schema,
                cls=jsonschema.Draft202012Validator,
            )
        except jsonschema.ValidationError as e:
            logger.error(f"Field type config failed schema validation: {e.message}")
            raise ConfigurationError(f"Field type config validation failed: {e.message}") from e

        self.field_type_config = config
        logger.info(
            f"Loaded field type config for {len(config)} type(s) from "
            f"{self.field_type_config_path}"
        )
        return config


_SETTINGS: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide Settings, loading the schema on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        settings = Settings()
        settings.load_schema()
        _SETTINGS = settings
    return _SETTINGS
