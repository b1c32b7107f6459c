"""
Configuration loading.

Settings come from, in increasing priority: built-in defaults, a JSON config
file (`config.json` beside the package unless another path is given), the
environment (after loading `.env` if present), and finally CLI flags applied
by the caller.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from loguru import logger

from diffclip.errors import ValidationError
from diffclip.tools.llm.base import LLMConfig
from diffclip.tools.llm.tool import SUPPORTED_PROVIDERS

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config.json"

DEFAULT_MODELS = {
    "openai": "gpt-3.5-turbo",
    "anthropic": "claude-3-haiku-20240307",
    "mock": "mock-model",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """Resolved DiffClip settings."""

    openai_key: str = ""
    anthropic_key: str = ""
    provider: str = "openai"
    model: str | None = None
    refine: bool = True
    timeout: int = 60

    @property
    def api_key(self) -> str:
        """Credential for the selected provider; empty when not configured."""
        if self.provider == "anthropic":
            return self.anthropic_key
        if self.provider == "openai":
            return self.openai_key
        if self.provider == "mock":
            return "mock-key"
        return ""

    def llm_config(self) -> LLMConfig:
        """Provider configuration with deterministic sampling."""
        return LLMConfig(
            api_key=self.api_key,
            model=self.model or DEFAULT_MODELS.get(self.provider, DEFAULT_MODELS["openai"]),
            timeout=self.timeout,
            temperature=0.0,
        )

    def with_overrides(self, **overrides: Any) -> Settings:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _load_env() -> None:
    """Load environment variables from .env if present."""
    env_path = Path(".env")
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)


def _parse_bool(value: Any, source: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValidationError(f"Invalid boolean for {source}: {value!r}")


def _parse_int(value: Any, source: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid integer for {source}: {value!r}") from e


def read_config_file(config_path: Path) -> dict[str, Any]:
    """
    Read the JSON config file.

    Args:
        config_path: Path to the JSON file

    Returns:
        Parsed object, or an empty dict when the file does not exist

    Raises:
        ValidationError: The file is not a JSON object
    """
    if not config_path.exists():
        logger.debug(f"No config file at {config_path}")
        return {}

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ValidationError(f"Could not read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError(f"Config file {config_path} must contain a JSON object")
    return data


def load_settings(
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """
    Load settings from the config file and environment.

    Args:
        config_path: JSON config path; defaults to `config.json` beside the package
        environ: Environment mapping; defaults to `os.environ` after loading `.env`

    Returns:
        Resolved settings

    Raises:
        ValidationError: Malformed config file, bad value or unknown provider
    """
    if environ is None:
        _load_env()
        environ = os.environ

    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    data = read_config_file(path)

    values: dict[str, Any] = {
        "openai_key": str(data.get("OpenAIKey") or ""),
        "anthropic_key": str(data.get("AnthropicKey") or ""),
    }
    if "Provider" in data:
        values["provider"] = str(data["Provider"])
    if "Model" in data:
        values["model"] = str(data["Model"])
    if "Refine" in data:
        values["refine"] = _parse_bool(data["Refine"], f"{path}: Refine")
    if "Timeout" in data:
        values["timeout"] = _parse_int(data["Timeout"], f"{path}: Timeout")

    if environ.get("OPENAI_API_KEY"):
        values["openai_key"] = environ["OPENAI_API_KEY"]
    if environ.get("ANTHROPIC_API_KEY"):
        values["anthropic_key"] = environ["ANTHROPIC_API_KEY"]
    if environ.get("DIFFCLIP_PROVIDER"):
        values["provider"] = environ["DIFFCLIP_PROVIDER"]
    if environ.get("DIFFCLIP_MODEL"):
        values["model"] = environ["DIFFCLIP_MODEL"]
    if environ.get("DIFFCLIP_REFINE"):
        values["refine"] = _parse_bool(environ["DIFFCLIP_REFINE"], "DIFFCLIP_REFINE")

    provider = values.get("provider")
    if provider is not None and provider not in SUPPORTED_PROVIDERS:
        raise ValidationError(
            f"Unsupported provider: {provider!r} (choose from {', '.join(SUPPORTED_PROVIDERS)})"
        )

    settings = Settings(**values)
    logger.debug(
        f"Settings loaded (provider={settings.provider}, model={settings.model}, "
        f"refine={settings.refine}, credential={'set' if settings.api_key else 'missing'})"
    )
    return settings
