"""
Configuration management using Pydantic Settings.

Two configuration sources:
- formats.yaml (shipped inside the package): ordered list of format
  modules used for detection, and diagnostic message templates
- Environment variables / .env (prefix XML_INVOICE_): runtime settings
  such as log level and XML parser limits
"""

from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


FORMATS_YAML = Path(__file__).parent / 'formats.yaml'


class FormatsConfig(BaseSettings):
    """
    Format registration and message templates loaded from formats.yaml.

    The order of format_modules is the detection precedence: the first
    module whose signature matches a document wins.

    Attributes:
        format_modules: Ordered format identifiers (see formats.FORMAT_MODULES)
        messages: Message templates with #1, #2, ... placeholders

    Example:
        >>> config = FormatsConfig()
        >>> config.format_modules
        ['cross_industry_document', 'cross_industry_invoice', 'ubl']
        >>> config.get_message_template('xml_parse_failed')
        'Parsing the XML data failed: #1'
    """

    format_modules: List[str] = Field(
        default_factory=list,
        description="Format identifiers in detection order"
    )
    messages: Dict[str, str] = Field(
        default_factory=dict,
        description="Diagnostic message templates keyed by message id"
    )

    model_config = SettingsConfigDict(
        env_prefix='XML_INVOICE_FORMATS_',
        extra='ignore'
    )

    @model_validator(mode='before')
    @classmethod
    def load_yaml_config(cls, data: dict) -> dict:
        """
        Load formats.yaml if no values were provided explicitly.

        Tests pass values directly; in that case the file is not read.
        """
        if data:
            return data

        if not FORMATS_YAML.exists():
            raise FileNotFoundError(
                f"Config file not found at {FORMATS_YAML}. "
                f"The package installation looks incomplete."
            )

        with open(FORMATS_YAML, 'r', encoding='utf-8') as f:
            yaml_data = yaml.safe_load(f) or {}

        return {
            'format_modules': yaml_data.get('format_modules', []),
            'messages': yaml_data.get('messages', {})
        }

    def get_message_template(self, key: str) -> str:
        """
        Get a message template by id.

        Raises:
            KeyError: If no template is configured under key
        """
        if key not in self.messages:
            raise KeyError(f"Unknown message template: {key}")
        return self.messages[key]


# Singleton pattern - loaded once, cached forever
_formats_config: Optional[FormatsConfig] = None


def get_formats_config() -> FormatsConfig:
    """
    Get global formats config instance (lazy-loaded singleton).

    Example:
        >>> config = get_formats_config()
        >>> config is get_formats_config()
        True
    """
    global _formats_config
    if _formats_config is None:
        _formats_config = FormatsConfig()
    return _formats_config


class AppConfig(BaseSettings):
    """
    Runtime configuration loaded from environment variables.

    Environment Variables (from .env):
        XML_INVOICE_LOG_LEVEL: Logging level for the CLI tools (e.g., "INFO")
        XML_INVOICE_HUGE_TREE: Allow very large/deep documents in lxml
        XML_INVOICE_CSV_SEPARATOR: Field separator for CSV export

    Example:
        >>> config = get_app_config()
        >>> config.log_level
        'WARNING'
    """

    log_level: str = Field(
        default="WARNING",
        description="Logging level name"
    )

    huge_tree: bool = Field(
        default=False,
        description="Disable lxml's security limits on tree depth and text size"
    )

    csv_separator: str = Field(
        default=",",
        min_length=1,
        max_length=1,
        description="Field separator used by the CSV exporter"
    )

    model_config = SettingsConfigDict(
        env_prefix='XML_INVOICE_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the logging level name."""
        level = v.upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Invalid log level: '{v}'")
        return level


# Singleton pattern - loaded once, cached forever
_app_config: Optional[AppConfig] = None


def get_app_config() -> AppConfig:
    """Get global application config instance (lazy-loaded singleton)."""
    global _app_config
    if _app_config is None:
        _app_config = AppConfig()
    return _app_config
