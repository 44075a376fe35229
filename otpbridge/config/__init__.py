"""Configuration module for otpbridge."""

from otpbridge.config.loader import load_config, get_config_path
from otpbridge.config.schema import BridgeConfig

__all__ = ["BridgeConfig", "load_config", "get_config_path"]
