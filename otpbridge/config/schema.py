"""Configuration schema using Pydantic.

Persisted to ~/.otpbridge/config.json; every field can be overridden with
OTPBRIDGE_* environment variables (nested with ``__``).
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Log sinks. stdout is reserved for frames and never logged to."""
    level: str = "INFO"  # File sink level
    stderr_level: str = "WARNING"
    file_enabled: bool = True
    directory: str = "~/.otpbridge/logs"
    rotation: str = "10 MB"
    retention: str = "14 days"

    @property
    def log_dir(self) -> Path:
        return Path(self.directory).expanduser()


class ProtocolConfig(BaseModel):
    """Wire framing options."""
    # Browsers use the host's native order; pin it only when both sides agree.
    frame_byte_order: Literal["native", "little", "big"] = "native"


class DeviceConfig(BaseModel):
    """YubiKey selection and unlock."""
    serial: int | None = None  # Required when several keys are plugged in
    oath_password: str = ""


class MatchingConfig(BaseModel):
    """Fuzzy credential matching."""
    case_sensitive: bool = False


class BridgeConfig(BaseSettings):
    """Root configuration for otpbridge."""
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    protocol: ProtocolConfig = Field(default_factory=ProtocolConfig)
    device: DeviceConfig = Field(default_factory=DeviceConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)

    model_config = SettingsConfigDict(
        env_prefix="OTPBRIDGE_",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment wins over values read from config.json.
        return env_settings, init_settings, file_secret_settings
