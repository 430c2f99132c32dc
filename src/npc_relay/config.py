"""
Relay configuration management.

This module handles loading and accessing relay configuration from multiple
sources with a clear priority order:

    1. Environment variables (highest priority) - for containerized deployments.
       A ``.env`` file, searched from the working directory upward, is loaded
       first without overriding variables that are already set.
    2. Config file (config/relay.ini) - for static deployments
    3. Built-in defaults (lowest priority) - sensible fallbacks

Configuration is loaded once at module import time and cached. The RelayConfig
dataclass provides typed access to all settings.

Usage:
    from npc_relay.config import config

    print(config.server.port)
    print(config.provider.chat_model)
    print(config.public_base_url)

Environment Variable Mapping:
    NPC_HOST                     -> server.host
    PORT / NPC_PORT              -> server.port
    BASE_URL                     -> server.public_base_url
    NPC_CORS_ORIGINS             -> security.cors_origins
    GROQ_API_KEY                 -> provider.api_key
    GROQ_BASE_URL                -> provider.base_url
    NPC_CHAT_MODEL               -> provider.chat_model
    NPC_TRANSCRIPTION_MODEL      -> provider.transcription_model
    NPC_TRANSCRIPTION_LANGUAGE   -> provider.transcription_language
    NPC_CHAT_FALLBACK_STATUS     -> dialogue.fallback_status
    NPC_AUDIO_DIR                -> storage.audio_dir
    NPC_LOG_LEVEL                -> logging.level
"""

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from dotenv import find_dotenv, load_dotenv

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Project root directory (contains src/, config/, public/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Config file paths
CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_FILE = CONFIG_DIR / "relay.ini"
CONFIG_EXAMPLE = CONFIG_DIR / "relay.example.ini"


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================


@dataclass
class ServerSettings:
    """Network server configuration."""

    host: str = "0.0.0.0"  # nosec B104 - intentional for server binding
    port: int = 3000
    public_base_url: str = ""


@dataclass
class SecuritySettings:
    """CORS configuration. The relay has no authentication layer."""

    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class ProviderSettings:
    """Remote speech-to-text and chat-completion provider (Groq)."""

    api_key: str = ""
    base_url: str = "https://api.groq.com/openai/v1"
    chat_model: str = "llama-3.3-70b-versatile"
    transcription_model: str = "whisper-large-v3"
    transcription_language: str = "es"

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())


@dataclass
class DialogueSettings:
    """Chat-completion sampling and fallback behaviour."""

    temperature: float = 0.88
    max_tokens: int = 120
    history_limit: int = 12
    fallback_status: int = 500


@dataclass
class SpeechSettings:
    """Text-to-speech engine configuration."""

    timeout_seconds: float = 20.0
    male_voice: str = "es-AR-TomasNeural"
    female_voice: str = "es-AR-ElenaNeural"


@dataclass
class StorageSettings:
    """Transient audio store configuration."""

    audio_dir: str = "public/audio"
    retention_seconds: int = 5 * 60
    sweep_interval_seconds: int = 10 * 60
    max_upload_bytes: int = 25 * 1024 * 1024

    @property
    def absolute_audio_dir(self) -> Path:
        """Get absolute path to the audio directory."""
        p = Path(self.audio_dir)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["simple", "detailed"] = "detailed"


@dataclass
class RelayConfig:
    """
    Complete relay configuration.

    Aggregates all settings sections. Access via the module-level `config`
    singleton.
    """

    server: ServerSettings = field(default_factory=ServerSettings)
    security: SecuritySettings = field(default_factory=SecuritySettings)
    provider: ProviderSettings = field(default_factory=ProviderSettings)
    dialogue: DialogueSettings = field(default_factory=DialogueSettings)
    speech: SpeechSettings = field(default_factory=SpeechSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @property
    def public_base_url(self) -> str:
        """Base URL used to build absolute audio links."""
        if self.server.public_base_url:
            return self.server.public_base_url.rstrip("/")
        return f"http://localhost:{self.server.port}"


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated string to list, stripping whitespace."""
    if not value or value.strip() == "":
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _load_from_ini(parser: configparser.ConfigParser, cfg: RelayConfig) -> None:
    """Load configuration from parsed INI file into RelayConfig."""
    # Server section
    if parser.has_section("server"):
        if parser.has_option("server", "host"):
            cfg.server.host = parser.get("server", "host")
        if parser.has_option("server", "port"):
            cfg.server.port = parser.getint("server", "port")
        if parser.has_option("server", "public_base_url"):
            cfg.server.public_base_url = parser.get("server", "public_base_url").strip()

    # Security section
    if parser.has_section("security"):
        if parser.has_option("security", "cors_origins"):
            cfg.security.cors_origins = _parse_list(parser.get("security", "cors_origins"))

    # Provider section (the API key is env-only)
    if parser.has_section("provider"):
        if parser.has_option("provider", "base_url"):
            cfg.provider.base_url = parser.get("provider", "base_url")
        if parser.has_option("provider", "chat_model"):
            cfg.provider.chat_model = parser.get("provider", "chat_model")
        if parser.has_option("provider", "transcription_model"):
            cfg.provider.transcription_model = parser.get("provider", "transcription_model")
        if parser.has_option("provider", "transcription_language"):
            cfg.provider.transcription_language = parser.get(
                "provider", "transcription_language"
            )

    # Dialogue section
    if parser.has_section("dialogue"):
        if parser.has_option("dialogue", "temperature"):
            cfg.dialogue.temperature = parser.getfloat("dialogue", "temperature")
        if parser.has_option("dialogue", "max_tokens"):
            cfg.dialogue.max_tokens = parser.getint("dialogue", "max_tokens")
        if parser.has_option("dialogue", "history_limit"):
            cfg.dialogue.history_limit = parser.getint("dialogue", "history_limit")
        if parser.has_option("dialogue", "fallback_status"):
            cfg.dialogue.fallback_status = parser.getint("dialogue", "fallback_status")

    # Speech section
    if parser.has_section("speech"):
        if parser.has_option("speech", "timeout_seconds"):
            cfg.speech.timeout_seconds = parser.getfloat("speech", "timeout_seconds")
        if parser.has_option("speech", "male_voice"):
            cfg.speech.male_voice = parser.get("speech", "male_voice")
        if parser.has_option("speech", "female_voice"):
            cfg.speech.female_voice = parser.get("speech", "female_voice")

    # Storage section
    if parser.has_section("storage"):
        if parser.has_option("storage", "audio_dir"):
            cfg.storage.audio_dir = parser.get("storage", "audio_dir")
        if parser.has_option("storage", "retention_seconds"):
            cfg.storage.retention_seconds = parser.getint("storage", "retention_seconds")
        if parser.has_option("storage", "sweep_interval_seconds"):
            cfg.storage.sweep_interval_seconds = parser.getint(
                "storage", "sweep_interval_seconds"
            )
        if parser.has_option("storage", "max_upload_bytes"):
            cfg.storage.max_upload_bytes = parser.getint("storage", "max_upload_bytes")

    # Logging section
    if parser.has_section("logging"):
        if parser.has_option("logging", "level"):
            cfg.logging.level = parser.get("logging", "level").upper()
        if parser.has_option("logging", "format"):
            val = parser.get("logging", "format").lower()
            if val in ("simple", "detailed"):
                cfg.logging.format = val  # type: ignore[assignment]


def _apply_env_overrides(cfg: RelayConfig) -> None:
    """Apply environment variable overrides to configuration."""
    # Server settings. PORT and BASE_URL keep the names hosting platforms inject.
    if env_host := os.getenv("NPC_HOST"):
        cfg.server.host = env_host
    if env_port := (os.getenv("NPC_PORT") or os.getenv("PORT")):
        cfg.server.port = int(env_port)
    if env_base := os.getenv("BASE_URL"):
        cfg.server.public_base_url = env_base.strip()

    # Security settings
    if env_cors := os.getenv("NPC_CORS_ORIGINS"):
        cfg.security.cors_origins = _parse_list(env_cors)

    # Provider settings
    if env_key := os.getenv("GROQ_API_KEY"):
        cfg.provider.api_key = env_key.strip()
    if env_provider_url := os.getenv("GROQ_BASE_URL"):
        cfg.provider.base_url = env_provider_url
    if env_chat_model := os.getenv("NPC_CHAT_MODEL"):
        cfg.provider.chat_model = env_chat_model
    if env_stt_model := os.getenv("NPC_TRANSCRIPTION_MODEL"):
        cfg.provider.transcription_model = env_stt_model
    if env_language := os.getenv("NPC_TRANSCRIPTION_LANGUAGE"):
        cfg.provider.transcription_language = env_language

    # Dialogue settings
    if env_status := os.getenv("NPC_CHAT_FALLBACK_STATUS"):
        cfg.dialogue.fallback_status = int(env_status)

    # Storage settings
    if env_audio_dir := os.getenv("NPC_AUDIO_DIR"):
        cfg.storage.audio_dir = env_audio_dir

    # Logging settings
    if env_log := os.getenv("NPC_LOG_LEVEL"):
        cfg.logging.level = env_log.upper()


def load_config() -> RelayConfig:
    """
    Load configuration from all sources with proper priority.

    Priority (highest wins):
        1. Environment variables (including a local .env file)
        2. config/relay.ini
        3. config/relay.example.ini (fallback for development)
        4. Built-in defaults

    Returns:
        RelayConfig: Fully populated configuration object.
    """
    cfg = RelayConfig()

    config_file = None
    if CONFIG_FILE.exists():
        config_file = CONFIG_FILE
    elif CONFIG_EXAMPLE.exists():
        config_file = CONFIG_EXAMPLE

    if config_file:
        parser = configparser.ConfigParser()
        parser.read(config_file)
        _load_from_ini(parser, cfg)

    load_dotenv(find_dotenv(usecwd=True), override=False)
    _apply_env_overrides(cfg)

    return cfg


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

config = load_config()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_config_status() -> dict:
    """
    Get configuration status for diagnostics.

    Never includes the API key itself, only whether one is set.
    """
    return {
        "config_file_exists": CONFIG_FILE.exists(),
        "config_file_path": str(CONFIG_FILE),
        "using_example": not CONFIG_FILE.exists() and CONFIG_EXAMPLE.exists(),
        "api_key_configured": config.provider.has_api_key,
        "public_base_url": config.public_base_url,
        "audio_dir": str(config.storage.absolute_audio_dir),
    }


def print_config_summary() -> None:
    """Print a summary of current configuration to stdout."""
    status = get_config_status()
    print("\n" + "=" * 60)
    print("NPC RELAY CONFIGURATION")
    print("=" * 60)
    print(f"Config file: {status['config_file_path']}")
    print(f"File exists: {status['config_file_exists']}")
    if status["using_example"]:
        print("WARNING: Using example config (copy to relay.ini for production)")
    print("-" * 60)
    print(f"Server:       {config.server.host}:{config.server.port}")
    print(f"Base URL:     {status['public_base_url']}")
    print(f"GROQ key:     {'set' if status['api_key_configured'] else 'MISSING'}")
    print(f"Chat model:   {config.provider.chat_model}")
    print(f"STT model:    {config.provider.transcription_model}")
    print(f"TTS voices:   {config.speech.male_voice} / {config.speech.female_voice}")
    print(f"Audio dir:    {status['audio_dir']}")
    print(f"Log level:    {config.logging.level}")
    print("=" * 60 + "\n")


# =============================================================================
# TEST HELPERS
# =============================================================================


class use_test_audio_dir:
    """
    Context manager for pointing the audio store at a temporary directory.

    Usage:
        from npc_relay.config import use_test_audio_dir

        def test_something(tmp_path):
            with use_test_audio_dir(tmp_path / "audio"):
                services = build_services()
    """

    def __init__(self, audio_dir: Path | str):
        self.audio_dir = Path(audio_dir)
        self.original_dir: str | None = None

    def __enter__(self) -> Path:
        self.original_dir = config.storage.audio_dir
        config.storage.audio_dir = str(self.audio_dir)
        return self.audio_dir

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.original_dir is not None:
            config.storage.audio_dir = self.original_dir
        return None
