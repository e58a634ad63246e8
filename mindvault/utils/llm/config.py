"""Configuration for the summarization service.

Reads configuration from ~/.mindvault/config.toml and environment variables.
Environment variables take precedence over config file values. A missing
API key is a supported mode: summaries are then produced locally.

A broken config file or a malformed value never stops the application: it
is logged and the defaults are used instead.
"""

import logging
import math
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .constants import DEFAULT_API_TIMEOUT, DEFAULT_BASE_URL, DEFAULT_MODEL

logger = logging.getLogger(__name__)

# Default config file location
DEFAULT_CONFIG_PATH = Path.home() / ".mindvault" / "config.toml"


@dataclass
class DeepSeekConfig:
    """Configuration for the DeepSeek chat-completion endpoint."""

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    default_model: str = DEFAULT_MODEL
    timeout: float = DEFAULT_API_TIMEOUT  # Request timeout in seconds

    @property
    def configured(self) -> bool:
        """True when an API key is available."""
        return bool(self.api_key.strip())


@dataclass
class LLMConfig:
    """Main LLM configuration."""

    deepseek: DeepSeekConfig = field(default_factory=DeepSeekConfig)


def _load_toml(path: Path) -> dict:
    """Load and parse a TOML configuration file.

    Returns:
        Parsed TOML content as dict, or empty dict if the file is missing,
        unreadable, or not valid TOML.
    """
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.error("Ignoring unreadable config file %s: %s", path, e)
        return {}


def _text_setting(env_names: tuple[str, ...], section: dict, key: str, default: str) -> str:
    for name in env_names:
        value = os.environ.get(name)
        if value:
            return value
    value = section.get(key, default)
    if not isinstance(value, str):
        logger.error("Config value %s must be a string; using default", key)
        return default
    return value


def _timeout_setting(section: dict) -> float:
    raw: Any = os.environ.get("MINDVAULT_DEEPSEEK_TIMEOUT") or section.get(
        "timeout", DEFAULT_API_TIMEOUT
    )
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        timeout = math.nan
    if not math.isfinite(timeout) or timeout <= 0:
        logger.error("Invalid timeout %r; using %s seconds", raw, DEFAULT_API_TIMEOUT)
        return DEFAULT_API_TIMEOUT
    return timeout


def load_config(config_path: Optional[Path] = None) -> LLMConfig:
    """Load LLM configuration from file and environment.

    Configuration sources (in order of precedence):
    1. Environment variables (MINDVAULT_DEEPSEEK_*, DEEPSEEK_API_KEY)
    2. Config file (~/.mindvault/config.toml)
    3. Default values

    Args:
        config_path: Optional path to config file. Defaults to ~/.mindvault/config.toml.

    Returns:
        LLMConfig with merged configuration. Never raises on bad input.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    file_config = _load_toml(path)

    llm_section = file_config.get("llm", {})
    section = llm_section.get("deepseek", {}) if isinstance(llm_section, dict) else {}
    if not isinstance(section, dict):
        logger.error("Config section [llm.deepseek] must be a table; ignoring it")
        section = {}

    deepseek = DeepSeekConfig(
        api_key=_text_setting(
            ("MINDVAULT_DEEPSEEK_API_KEY", "DEEPSEEK_API_KEY"), section, "api_key", ""
        ),
        base_url=_text_setting(
            ("MINDVAULT_DEEPSEEK_BASE_URL",), section, "base_url", DEFAULT_BASE_URL
        ),
        default_model=_text_setting(
            ("MINDVAULT_DEEPSEEK_MODEL",), section, "default_model", DEFAULT_MODEL
        ),
        timeout=_timeout_setting(section),
    )
    return LLMConfig(deepseek=deepseek)


def toml_string(value: str) -> str:
    """Quote ``value`` as a TOML basic string."""
    escaped = []
    for ch in value:
        if ch in ('"', "\\"):
            escaped.append("\\" + ch)
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            escaped.append(f"\\u{ord(ch):04x}")
        else:
            escaped.append(ch)
    return '"' + "".join(escaped) + '"'


def get_example_config() -> str:
    """Return example config.toml content with documented options."""
    return f"""# MindVault - LLM Configuration
# Place this file at ~/.mindvault/config.toml

[llm.deepseek]
# API key (or set MINDVAULT_DEEPSEEK_API_KEY / DEEPSEEK_API_KEY env var).
# Leave empty to use local placeholder summaries.
api_key = ""
base_url = "{DEFAULT_BASE_URL}"
default_model = "{DEFAULT_MODEL}"
timeout = {DEFAULT_API_TIMEOUT}  # Request timeout in seconds
"""


def save_config(
    api_key: str,
    base_url: str = DEFAULT_BASE_URL,
    default_model: str = DEFAULT_MODEL,
    timeout: float = DEFAULT_API_TIMEOUT,
    config_path: Optional[Path] = None,
) -> Path:
    """Write configuration to TOML file with secure permissions.

    Returns:
        Path of the written file.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = [
        "# MindVault - LLM Configuration",
        "# Generated by `mindvault config`",
        "",
        "[llm.deepseek]",
        f"api_key = {toml_string(api_key)}",
        f"base_url = {toml_string(base_url)}",
        f"default_model = {toml_string(default_model)}",
        f"timeout = {float(timeout)}",
    ]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    # Owner read/write only
    os.chmod(path, 0o600)
    return path
