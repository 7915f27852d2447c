"""
Runtime settings resolved once at startup.

Two immutable values are built here and passed explicitly to every component
that needs them:

    SummarizerConfiguration - model, prompt, marker and context length
    EnvironmentConfiguration - API token, base URL, local output options

Summarizer values are resolved with the precedence
environment variable > SUMMARIZER_CONFIG_FILE (YAML) > built-in default.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Mapping
from urllib.parse import urlparse

import yaml

from paperless_summarizer.config import (
    DEFAULT_CONTEXT_LENGTH,
    DEFAULT_MODEL_NAME,
    DEFAULT_SUMMARY_MARKER,
    DEFAULT_SUMMARY_PROMPT,
    OLLAMA_API_BASE,
)
from paperless_summarizer.exceptions import ConfigurationError
from paperless_summarizer.logging_config import debug_log

ERR_MISSING_ENV_VARIABLES = (
    "The environment variables PAPERLESS_TOKEN and PAPERLESS_URL "
    "must be set in order to run the program."
)

# YAML keys accepted in SUMMARIZER_CONFIG_FILE
_YAML_KEYS = ('model_name', 'summary_prompt', 'summary_marker', 'context_length')


@dataclass(frozen=True)
class SummarizerConfiguration:
    """
    Parameters of the summary generation step.

    Attributes:
        model_name: Ollama model identifier.
        summary_prompt: Prefix placed before the document text.
        summary_marker: Substring identifying AI summary notes.
        context_length: Target context length; recorded in the note but not
            sent to the model.
    """
    model_name: str = DEFAULT_MODEL_NAME
    summary_prompt: str = DEFAULT_SUMMARY_PROMPT
    summary_marker: str = DEFAULT_SUMMARY_MARKER
    context_length: int = DEFAULT_CONTEXT_LENGTH

    def to_dict(self) -> dict:
        """Serializable snapshot embedded in every summary note."""
        return {
            'CONTEXT_LENGTH': self.context_length,
            'MODEL_NAME': self.model_name,
            'SUMMARY_MARKER': self.summary_marker,
            'SUMMARY_PROMPT': self.summary_prompt,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(',', ':'), ensure_ascii=False)


@dataclass(frozen=True)
class EnvironmentConfiguration:
    """
    Connection and output settings.

    Attributes:
        api_key: Document service API token.
        paperless_url: API base URL without trailing slash.
        save_txt_summary: Write each summary to a local text file.
        save_txt_path: Directory for local summary files ('' = working dir).
        ollama_host: Base URL of the Ollama server.
    """
    api_key: str
    paperless_url: str
    save_txt_summary: bool = False
    save_txt_path: str = ''
    ollama_host: str = OLLAMA_API_BASE

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks
        return (
            f"EnvironmentConfiguration(api_key='***', paperless_url={self.paperless_url!r}, "
            f"save_txt_summary={self.save_txt_summary!r}, save_txt_path={self.save_txt_path!r}, "
            f"ollama_host={self.ollama_host!r})"
        )


def _read_yaml_config(path: str) -> dict:
    """Load summarizer defaults from a YAML file."""
    try:
        with open(path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read SUMMARIZER_CONFIG_FILE {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in SUMMARIZER_CONFIG_FILE {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"SUMMARIZER_CONFIG_FILE {path} must contain a mapping")

    unknown = set(data) - set(_YAML_KEYS)
    if unknown:
        debug_log(f"[Config] Ignoring unknown keys in {path}: {sorted(unknown)}")
    return {key: data[key] for key in _YAML_KEYS if key in data}


def _parse_int(name: str, value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e


def load_summarizer_configuration(environ: Mapping[str, str] | None = None) -> SummarizerConfiguration:
    """
    Resolve the summarizer configuration from environment, YAML file and defaults.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        SummarizerConfiguration: Immutable configuration value

    Raises:
        ConfigurationError: If a value cannot be parsed or the marker is empty
    """
    if environ is None:
        environ = os.environ

    values: dict = {}
    config_file = environ.get('SUMMARIZER_CONFIG_FILE')
    if config_file:
        values.update(_read_yaml_config(config_file))
        debug_log(f"[Config] Loaded summarizer defaults from {config_file}")

    for env_name, key in (
        ('MODEL_NAME', 'model_name'),
        ('SUMMARY_PROMPT', 'summary_prompt'),
        ('SUMMARY_MARKER', 'summary_marker'),
        ('CONTEXT_LENGTH', 'context_length'),
    ):
        if env_name in environ:
            values[key] = environ[env_name]

    if 'context_length' in values:
        values['context_length'] = _parse_int('CONTEXT_LENGTH', values['context_length'])
    for key in ('model_name', 'summary_prompt', 'summary_marker'):
        if key in values:
            values[key] = str(values[key])

    configuration = SummarizerConfiguration(**values)
    if not configuration.summary_marker:
        raise ConfigurationError("SUMMARY_MARKER must not be empty")
    return configuration


def validate_base_url(url: str) -> str:
    """
    Check that the document service URL is a well-formed http(s) URL.

    Returns:
        str: The URL without trailing slash

    Raises:
        ConfigurationError: If the URL is malformed
    """
    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ConfigurationError(f"Invalid Paperless API URL: {url}")
    return url.rstrip('/')


def _parse_flag(value: str) -> bool:
    # Numeric flag: any non-zero number enables, anything unparsable disables
    try:
        return float(value) != 0
    except ValueError:
        return False


def load_environment_configuration(environ: Mapping[str, str] | None = None) -> EnvironmentConfiguration:
    """
    Read and validate the connection settings.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        EnvironmentConfiguration: Immutable configuration value

    Raises:
        ConfigurationError: If PAPERLESS_TOKEN or PAPERLESS_URL is missing,
            or PAPERLESS_URL is malformed
    """
    if environ is None:
        environ = os.environ

    api_key = environ.get('PAPERLESS_TOKEN', '')
    paperless_url = environ.get('PAPERLESS_URL', '')
    if not api_key or not paperless_url:
        raise ConfigurationError(ERR_MISSING_ENV_VARIABLES)

    return EnvironmentConfiguration(
        api_key=api_key,
        paperless_url=validate_base_url(paperless_url),
        save_txt_summary=_parse_flag(environ.get('OUTPUT_TXT', '0')),
        save_txt_path=environ.get('OUTPUT_PATH', ''),
        ollama_host=environ.get('OLLAMA_HOST', OLLAMA_API_BASE).rstrip('/'),
    )
