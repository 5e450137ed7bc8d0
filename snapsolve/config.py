"""
Configuration loader.

Reads config.json (or a .yaml/.yml file) and resolves which vision provider
to use for the whole run:

    {
      "openai": {"apiKey": "sk-...", "model": "gpt-4o-mini"},
      "gemini": {"apiKey": "...",    "model": "gemini-pro-vision"},
      "capture": {"settleDelayMs": 200, "directory": "~/Pictures"}
    }

OpenAI wins when both keys are present. With neither, ConfigError is
raised and the app must not start.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.json")

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_GEMINI_MODEL = "gemini-pro-vision"
DEFAULT_OPENAI_MAX_TOKENS = 5000
DEFAULT_PROMPT = "Can you solve the question for me and give the final answer/code?"


class ConfigError(Exception):
    """Missing or invalid configuration. Fatal at startup."""


class Provider(Enum):
    """Which vendor answers the screenshots."""
    OPENAI = "openai"
    GEMINI = "gemini"


@dataclass(frozen=True)
class ProviderConfig:
    provider: Provider
    api_key: str
    model: str
    max_tokens: int = DEFAULT_OPENAI_MAX_TOKENS


@dataclass(frozen=True)
class CaptureConfig:
    settle_delay_ms: int = 200
    directory: Optional[Path] = None  # None = platform pictures dir
    monitor: int = 0

    @property
    def settle_delay(self) -> float:
        return self.settle_delay_ms / 1000.0


@dataclass(frozen=True)
class WindowConfig:
    width: int = 800
    height: int = 600
    on_top: bool = True
    frameless: bool = True
    transparent: bool = True


@dataclass(frozen=True)
class AppConfig:
    """Everything the app needs, resolved once at startup."""
    provider: ProviderConfig
    capture: CaptureConfig = field(default_factory=CaptureConfig)
    window: WindowConfig = field(default_factory=WindowConfig)
    prompt: str = DEFAULT_PROMPT
    source: Optional[Path] = None


def read_config_file(path: Path) -> dict:
    """Parse a JSON or YAML config file into a dict."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain an object at the top level")
    return data


def _section(data: dict, name: str) -> dict:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be an object")
    return section


def resolve_provider(data: dict) -> ProviderConfig:
    """
    Pick exactly one provider.

    openai.apiKey present -> OpenAI, else gemini.apiKey -> Gemini,
    else ConfigError.
    """
    openai_cfg = _section(data, "openai")
    gemini_cfg = _section(data, "gemini")

    if openai_cfg.get("apiKey"):
        model = openai_cfg.get("model")
        if not model:
            model = DEFAULT_OPENAI_MODEL
            logger.info(f"OpenAI model not specified in config, using default: {model}")
        try:
            max_tokens = int(openai_cfg.get("maxTokens", DEFAULT_OPENAI_MAX_TOKENS))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value in config: {e}") from e
        logger.info("Using OpenAI as the primary provider")
        return ProviderConfig(
            provider=Provider.OPENAI,
            api_key=openai_cfg["apiKey"],
            model=model,
            max_tokens=max_tokens,
        )

    if gemini_cfg.get("apiKey"):
        model = gemini_cfg.get("model")
        if not model:
            model = DEFAULT_GEMINI_MODEL
            logger.info(f"Gemini model not specified in config, using default: {model}")
        logger.info("Using Gemini as the primary provider")
        return ProviderConfig(
            provider=Provider.GEMINI,
            api_key=gemini_cfg["apiKey"],
            model=model,
        )

    raise ConfigError(
        "No valid API configuration found. Please provide either OpenAI "
        "or Gemini API keys in the config file"
    )


def parse_config(data: dict, source: Optional[Path] = None) -> AppConfig:
    """Build an AppConfig from an already-parsed dict."""
    provider = resolve_provider(data)

    capture_cfg = _section(data, "capture")
    window_cfg = _section(data, "window")

    directory = capture_cfg.get("directory")
    try:
        capture = CaptureConfig(
            settle_delay_ms=int(capture_cfg.get("settleDelayMs", 200)),
            directory=Path(directory).expanduser() if directory else None,
            monitor=int(capture_cfg.get("monitor", 0)),
        )
        window = WindowConfig(
            width=int(window_cfg.get("width", 800)),
            height=int(window_cfg.get("height", 600)),
            on_top=bool(window_cfg.get("onTop", True)),
            frameless=bool(window_cfg.get("frameless", True)),
            transparent=bool(window_cfg.get("transparent", True)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value in config: {e}") from e

    if capture.settle_delay_ms < 0:
        raise ConfigError("capture.settleDelayMs must not be negative")

    return AppConfig(
        provider=provider,
        capture=capture,
        window=window,
        prompt=data.get("prompt") or DEFAULT_PROMPT,
        source=source,
    )


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load configuration from a JSON or YAML file."""
    path = Path(path) if path else DEFAULT_CONFIG_PATH
    return parse_config(read_config_file(path), source=path)
